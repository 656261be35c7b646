"""Enumeration of version-controlled files under a scope root."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Collection, Iterable, Iterator, Set

from ..errors import EnumerationError
from ..logging import get_logger
from ..models import SUMMARY_SUBDIR

DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset({"node_modules"})


class TrackedFileResolver:
    """Lists the files ``git`` tracks below a scope, minus summary artifacts."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        excluded_dirs: Collection[str] = DEFAULT_EXCLUDED_DIRS,
        summary_subdir: str = SUMMARY_SUBDIR,
    ) -> None:
        self._runner = runner or self._default_runner
        self._excluded_dirs = frozenset(excluded_dirs)
        self._summary_prefix = f"{summary_subdir.strip('/')}/"
        self.logger = get_logger("git.tracked")

    def list_tracked_files(self, scope_root: Path | str) -> Iterator[str]:
        """Run ``git ls-files -z`` now and return an iterator over the audited paths.

        Raises :class:`EnumerationError` when the listing cannot be produced.
        Each call re-runs git, so the result is restartable by calling again.
        """
        root = Path(scope_root)
        if not root.is_dir():
            raise EnumerationError(f"Scope root not found: {root}")

        try:
            output = self._runner(["git", "ls-files", "-z"], cwd=root, capture_output=True)
        except FileNotFoundError as exc:
            raise EnumerationError(f"git executable not available: {exc}") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise EnumerationError(
                f"Cannot list tracked files in {root}: {detail}"
            ) from exc
        except OSError as exc:
            raise EnumerationError(f"Cannot list tracked files in {root}: {exc}") from exc

        self.logger.debug("git ls-files returned %d bytes for %s", len(output), root)
        return self._filter(output.split("\0"))

    # ------------------------------------------------------------------
    # Internals

    def _filter(self, entries: Iterable[str]) -> Iterator[str]:
        # -z entries are raw paths: no quoting, and spaces are significant.
        seen: Set[str] = set()
        for path in entries:
            if not path or path in seen:
                continue
            if self._is_excluded(path):
                continue
            seen.add(path)
            yield path

    def _is_excluded(self, path: str) -> bool:
        if path.startswith(self._summary_prefix):
            return True
        return any(part in self._excluded_dirs for part in path.split("/"))

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            encoding="utf-8",
            errors="surrogateescape",
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


__all__ = ["DEFAULT_EXCLUDED_DIRS", "TrackedFileResolver"]
