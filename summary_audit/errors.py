"""Error taxonomy for audit passes."""

from __future__ import annotations


class AuditError(RuntimeError):
    """Base class for failures raised while auditing summaries."""


class EnumerationError(AuditError):
    """Raised when the tracked files of a scope cannot be listed."""


class MetadataError(AuditError):
    """Raised when a source or artifact file cannot be stat'ed."""


class PersistenceError(AuditError):
    """Raised when the dismissal store cannot be read or written."""


__all__ = ["AuditError", "EnumerationError", "MetadataError", "PersistenceError"]
