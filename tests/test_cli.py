"""End-to-end behaviour of the summary-audit entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import summary_audit.cli as cli_module
from summary_audit.cli import _build_parser, main
from summary_audit.git.tracked import TrackedFileResolver
from summary_audit.models import Decision
from tests._fixtures.prompts import ScriptedPrompt


def _fake_git(monkeypatch: pytest.MonkeyPatch, listings: dict[str, str]) -> None:
    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        return listings[Path(cwd).name]

    def factory(excluded_dirs):  # type: ignore[no-untyped-def]
        return TrackedFileResolver(runner=runner, excluded_dirs=excluded_dirs)

    monkeypatch.setattr(cli_module, "TrackedFileResolver", factory)


def _project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    for name in ("backend", "frontend"):
        (root / name).mkdir(parents=True)
    (root / "backend" / "app.py").write_text("print('hi')\n", encoding="utf-8")
    (root / "frontend" / "index.js").write_text("export {}\n", encoding="utf-8")
    return root


def test_cli_accepts_path_and_verbose() -> None:
    args = _build_parser().parse_args(["--verbose", "some/dir"])

    assert args.verbose is True
    assert args.path == "some/dir"


def test_cli_defaults_to_current_directory() -> None:
    args = _build_parser().parse_args([])

    assert args.path == "."
    assert args.verbose is False


def test_main_dismisses_selected_scope(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _project(tmp_path)
    _fake_git(monkeypatch, {"backend": "app.py\0", "frontend": "index.js\0"})
    prompt = ScriptedPrompt([Decision.DISMISS], selections=["Backend"])

    main([str(root)], prompt=prompt)

    out = capsys.readouterr().out
    assert "Missing Summaries (1) in Backend:" in out
    assert "Alerts dismissed for Backend." in out
    assert "Backend: 1 missing, 0 stale, 0 dismissed, 0 current [Dismiss these alerts]" in out
    stored = json.loads((root / "summary" / "dismissed.json").read_text(encoding="utf-8"))
    assert stored == {"Backend": ["app.py"]}


def test_main_continues_after_scope_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _project(tmp_path)
    (root / "frontend").rename(root / "elsewhere")
    _fake_git(monkeypatch, {"backend": "app.py\0"})
    prompt = ScriptedPrompt([Decision.IGNORE])

    main([str(root)], prompt=prompt)

    out = capsys.readouterr().out
    assert "Frontend: aborted" in out
    assert "Backend: 1 missing" in out


def test_main_exits_on_corrupt_store(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _project(tmp_path)
    (root / "summary").mkdir()
    (root / "summary" / "dismissed.json").write_text("[1, 2", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(root)], prompt=ScriptedPrompt())

    assert excinfo.value.code == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_main_exits_when_interrupted(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _project(tmp_path)
    _fake_git(monkeypatch, {"backend": "app.py\0", "frontend": "index.js\0"})
    prompt = ScriptedPrompt([KeyboardInterrupt()])

    with pytest.raises(SystemExit) as excinfo:
        main([str(root)], prompt=prompt)

    assert excinfo.value.code == 1
    assert "interrupted" in capsys.readouterr().err
    stored = json.loads((root / "summary" / "dismissed.json").read_text(encoding="utf-8"))
    assert stored == {}


def test_main_with_no_selection(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = _project(tmp_path)

    main([str(root)], prompt=ScriptedPrompt(selections=[]))

    assert "No directories selected." in capsys.readouterr().out
