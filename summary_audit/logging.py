"""Diagnostic logging for audit runs.

Report text shown to the user is printed by the CLI, not logged. Loggers here
carry run diagnostics: which scope is being audited, per-scope counts and
decisions at DEBUG, new dismissals at INFO, and aborted or failed scopes at
ERROR.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "summary_audit"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger such as ``summary_audit.reconciler`` for one component."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler and, when ``log_file`` is set, a DEBUG file log.

    The file log always records DEBUG detail so a config-driven ``log_file``
    captures per-scope counts even without ``--verbose``.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(
        logging.Formatter("[summary-audit] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger"]
