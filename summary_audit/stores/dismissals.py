"""Persistent store for dismissed summary findings."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Set

from ..errors import PersistenceError
from ..logging import get_logger


class DismissalStore:
    """Owns the scope label -> dismissed relative paths mapping on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._entries: Dict[str, List[str]] = {}
        self.logger = get_logger("stores.dismissals")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, Set[str]]:
        """Read persisted dismissals, creating an empty store when none exists."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.logger.debug("No dismissal store at %s; creating one", self._path)
            self._entries = {}
            self.save({})
            return {}
        except OSError as exc:
            raise PersistenceError(
                f"Cannot read dismissal store {self._path}: {exc}"
            ) from exc

        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as exc:
            raise PersistenceError(
                f"Dismissal store {self._path} is not valid JSON: {exc}"
            ) from exc
        self._entries = _entries_from_payload(data, self._path)
        self.logger.debug(
            "Loaded dismissals for %d scope(s) from %s", len(self._entries), self._path
        )
        return self.as_mapping()

    def save(self, mapping: Mapping[str, Iterable[str]]) -> None:
        """Atomically replace the persisted mapping."""
        entries: Dict[str, List[str]] = {}
        for label, paths in mapping.items():
            entries[str(label)] = _dedupe(str(path) for path in paths)
        payload = json.dumps(entries, indent=2) + "\n"

        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
            os.chmod(tmp_name, self._target_mode())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(
                f"Cannot write dismissal store {self._path}: {exc}"
            ) from exc
        self._entries = entries

    def _target_mode(self) -> int:
        # Keep an existing file's mode; new files follow the process umask.
        try:
            return stat.S_IMODE(self._path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def record_dismissals(self, scope: str, paths: Iterable[str]) -> List[str]:
        """Union ``paths`` into the scope's dismissals and persist; return new paths."""
        existing = list(self._entries.get(scope, []))
        known = set(existing)
        added: List[str] = []
        for path in paths:
            if path not in known:
                known.add(path)
                added.append(path)

        updated = {label: list(values) for label, values in self._entries.items()}
        updated[scope] = existing + added
        self.save(updated)
        if added:
            self.logger.info("Dismissed %d finding(s) for %s", len(added), scope)
        return added

    def snapshot(self, scope: str) -> FrozenSet[str]:
        """Immutable view of one scope's dismissals for a classification pass."""
        return frozenset(self._entries.get(scope, ()))

    def as_mapping(self) -> Dict[str, Set[str]]:
        return {label: set(paths) for label, paths in self._entries.items()}


def _entries_from_payload(data: object, path: Path) -> Dict[str, List[str]]:
    if not isinstance(data, dict):
        raise PersistenceError(f"Dismissal store {path} must contain a JSON object")
    entries: Dict[str, List[str]] = {}
    for label, values in data.items():
        if not isinstance(values, list) or not all(
            isinstance(value, str) for value in values
        ):
            raise PersistenceError(
                f"Dismissal store {path}: entry {label!r} must be a list of paths"
            )
        entries[label] = _dedupe(values)
    return entries


def _dedupe(values: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


__all__ = ["DismissalStore"]
