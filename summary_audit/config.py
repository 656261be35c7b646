"""Configuration loading for summary-audit (.summary-audit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .git.tracked import DEFAULT_EXCLUDED_DIRS
from .models import DISMISSED_FILENAME, SUMMARY_SUBDIR, Scope

CONFIG_FILENAME = ".summary-audit.yml"

_DEFAULT_SCOPES: Dict[str, str] = {"Backend": "backend", "Frontend": "frontend"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AuditConfig:
    """Represents the settings defined in .summary-audit.yml."""

    root: Path
    scopes: List[Scope] = field(default_factory=list)
    exclude_dirs: List[str] = field(default_factory=lambda: sorted(DEFAULT_EXCLUDED_DIRS))
    suppress_dismissed_missing: bool = False
    log_file: Optional[Path] = None

    @property
    def dismissed_path(self) -> Path:
        """Location of the dismissal store, outside every audited scope."""
        return self.root / SUMMARY_SUBDIR / DISMISSED_FILENAME


def default_scopes(root: Path) -> List[Scope]:
    return [Scope(label=label, root=root / rel) for label, rel in _DEFAULT_SCOPES.items()]


def load_config(config_path: Path) -> AuditConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent

    if not config_file.exists():
        return AuditConfig(root=root, scopes=default_scopes(root))

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scopes = default_scopes(root)
    if "scopes" in data:
        scopes = _parse_scopes(data.get("scopes"), root)

    exclude_dirs = sorted(DEFAULT_EXCLUDED_DIRS)
    if "exclude_dirs" in data:
        exclude_dirs = _as_str_list(data.get("exclude_dirs"))

    log_file_str = _as_str(data.get("log_file"))
    log_file = root / log_file_str if log_file_str else None

    return AuditConfig(
        root=root,
        scopes=scopes,
        exclude_dirs=exclude_dirs,
        suppress_dismissed_missing=_as_bool(data.get("suppress_dismissed_missing")) or False,
        log_file=log_file,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_scopes(value: Any, root: Path) -> List[Scope]:
    if not isinstance(value, dict) or not value:
        raise ConfigError("'scopes' must be a non-empty mapping of label to directory")
    scopes: List[Scope] = []
    for label, directory in value.items():
        rel = _as_str(directory)
        if not isinstance(label, str) or not label.strip() or not rel:
            raise ConfigError(f"Invalid scope entry: {label!r}: {directory!r}")
        scope_root = Path(rel).expanduser()
        if not scope_root.is_absolute():
            scope_root = root / scope_root
        scopes.append(Scope(label=label.strip(), root=scope_root))
    return scopes


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["AuditConfig", "CONFIG_FILENAME", "ConfigError", "default_scopes", "load_config"]
