"""Audit per-file documentation summaries for missing and stale entries."""

__version__ = "0.1.0"
