"""Persistent stores used by summary_audit."""

from .dismissals import DismissalStore

__all__ = ["DismissalStore"]
