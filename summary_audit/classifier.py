"""Classify tracked files against their summary artifacts."""

from __future__ import annotations

import os
from pathlib import Path
from typing import AbstractSet, Callable

from .errors import MetadataError
from .models import SUMMARY_SUBDIR, SUMMARY_SUFFIX, Classification

StatFn = Callable[[Path], os.stat_result]


class StalenessClassifier:
    """Compares source and artifact modification times for one file at a time.

    Only existence and ``st_mtime_ns`` are consulted; summary contents are
    never read. Equal timestamps count as current.
    """

    def __init__(
        self,
        stat: StatFn | None = None,
        *,
        suppress_dismissed_missing: bool = False,
    ) -> None:
        self._stat = stat or os.stat
        self.suppress_dismissed_missing = suppress_dismissed_missing

    @staticmethod
    def artifact_path(scope_root: Path, relative_path: str) -> Path:
        return Path(scope_root) / SUMMARY_SUBDIR / f"{relative_path}{SUMMARY_SUFFIX}"

    def classify(
        self,
        scope_root: Path,
        relative_path: str,
        dismissed: AbstractSet[str],
    ) -> Classification:
        artifact = self.artifact_path(scope_root, relative_path)
        try:
            artifact_stat = self._stat(artifact)
        except (FileNotFoundError, NotADirectoryError):
            if self.suppress_dismissed_missing and relative_path in dismissed:
                return Classification.DISMISSED
            return Classification.MISSING
        except OSError as exc:
            raise MetadataError(f"Cannot read metadata for {artifact}: {exc}") from exc

        source = Path(scope_root) / relative_path
        try:
            source_stat = self._stat(source)
        except OSError as exc:
            raise MetadataError(f"Cannot read metadata for {source}: {exc}") from exc

        if source_stat.st_mtime_ns <= artifact_stat.st_mtime_ns:
            return Classification.CURRENT
        if relative_path in dismissed:
            return Classification.DISMISSED
        return Classification.STALE


__all__ = ["StalenessClassifier"]
