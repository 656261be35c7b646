"""Git integration helpers."""

from .tracked import TrackedFileResolver

__all__ = ["TrackedFileResolver"]
