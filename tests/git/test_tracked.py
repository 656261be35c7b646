"""Tests for tracked-file enumeration."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from summary_audit.classifier import StalenessClassifier
from summary_audit.errors import EnumerationError
from summary_audit.git.tracked import TrackedFileResolver
from summary_audit.models import Classification


def test_lists_tracked_files_and_skips_summary_and_dependencies(tmp_path: Path) -> None:
    calls: list[tuple[list[str], Path]] = []

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        calls.append((list(args), Path(cwd)))
        return (
            "src/app.py\0"
            "summary/src/app.py.summary.txt\0"
            "node_modules/pkg/index.js\0"
            "web/node_modules/x.js\0"
            "docs/summary/notes.md\0"
            "\0"
            "README.md\0"
        )

    resolver = TrackedFileResolver(runner=runner)
    files = list(resolver.list_tracked_files(tmp_path))

    assert files == ["src/app.py", "docs/summary/notes.md", "README.md"]
    assert calls == [(["git", "ls-files", "-z"], tmp_path)]


def test_listing_is_restartable_per_call(tmp_path: Path) -> None:
    count = {"calls": 0}

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        count["calls"] += 1
        return "a.txt\0b.txt\0"

    resolver = TrackedFileResolver(runner=runner)
    first = resolver.list_tracked_files(tmp_path)
    assert next(first) == "a.txt"

    assert list(resolver.list_tracked_files(tmp_path)) == ["a.txt", "b.txt"]
    assert count["calls"] == 2


def test_duplicate_lines_are_reported_once(tmp_path: Path) -> None:
    resolver = TrackedFileResolver(runner=lambda args, cwd, capture_output=False: "a.txt\0a.txt\0")

    assert list(resolver.list_tracked_files(tmp_path)) == ["a.txt"]


def test_custom_excluded_dirs(tmp_path: Path) -> None:
    resolver = TrackedFileResolver(
        runner=lambda args, cwd, capture_output=False: "vendor/lib.go\0main.go\0node_modules/a.js\0",
        excluded_dirs=["vendor"],
    )

    assert list(resolver.list_tracked_files(tmp_path)) == ["main.go", "node_modules/a.js"]


def test_git_failure_raises_enumeration_error(tmp_path: Path) -> None:
    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(128, list(args), stderr="fatal: not a git repository")

    resolver = TrackedFileResolver(runner=runner)

    with pytest.raises(EnumerationError, match="not a git repository"):
        resolver.list_tracked_files(tmp_path)


def test_missing_git_executable_raises_enumeration_error(tmp_path: Path) -> None:
    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        raise FileNotFoundError("git")

    with pytest.raises(EnumerationError):
        TrackedFileResolver(runner=runner).list_tracked_files(tmp_path)


def test_missing_scope_root_raises_enumeration_error(tmp_path: Path) -> None:
    resolver = TrackedFileResolver(runner=lambda args, cwd, capture_output=False: "")

    with pytest.raises(EnumerationError, match="not found"):
        resolver.list_tracked_files(tmp_path / "absent")


def test_entries_keep_spaces_and_unicode(tmp_path: Path) -> None:
    resolver = TrackedFileResolver(
        runner=lambda args, cwd, capture_output=False: " lead.txt\0trail .txt\0café.py\0"
    )

    assert list(resolver.list_tracked_files(tmp_path)) == [" lead.txt", "trail .txt", "café.py"]


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@requires_git
def test_default_runner_lists_real_repository(tmp_path: Path) -> None:
    repo = tmp_path / "backend"
    repo.mkdir()
    _git(repo, "init", "-q")
    for relative in ("café.py", "src/with space.py", "summary/café.py.summary.txt"):
        path = repo / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x\n", encoding="utf-8")
    (repo / "untracked.py").write_text("x\n", encoding="utf-8")
    _git(repo, "add", "café.py", "src/with space.py", "summary")

    files = sorted(TrackedFileResolver().list_tracked_files(repo))

    assert files == ["café.py", "src/with space.py"]
    assert StalenessClassifier().classify(repo, "café.py", frozenset()) is Classification.CURRENT


@requires_git
def test_default_runner_outside_repository_raises(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    plain = tmp_path / "plain"
    plain.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

    with pytest.raises(EnumerationError, match="Cannot list tracked files"):
        TrackedFileResolver().list_tracked_files(plain)
