"""CLI entrypoint for the interactive summary audit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

import click

from .classifier import StalenessClassifier
from .config import ConfigError, load_config
from .errors import PersistenceError
from .git.tracked import TrackedFileResolver
from .logging import configure_logging, get_logger
from .prompts import ConsolePrompt, PromptProvider
from .reconciler import ReconciliationController
from .reporting import render_summary
from .stores import DismissalStore


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="summary-audit",
        description="Report missing or outdated summary files for tracked sources.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root holding the scopes and summary store (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: List[str] | None = None, *, prompt: PromptProvider | None = None) -> None:
    """Select scopes interactively and reconcile each one in turn."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    try:
        config = load_config(Path(args.path))
    except ConfigError as exc:
        parser.exit(1, f"summary-audit: {exc}\n")
    if config.log_file is not None:
        configure_logging(verbose=bool(args.verbose), log_file=config.log_file)

    store = DismissalStore(config.dismissed_path)
    try:
        store.load()
    except PersistenceError as exc:
        parser.exit(1, f"summary-audit: {exc}\n")

    prompt = prompt or ConsolePrompt()
    controller = ReconciliationController(
        store,
        prompt,
        resolver=TrackedFileResolver(excluded_dirs=config.exclude_dirs),
        classifier=StalenessClassifier(
            suppress_dismissed_missing=config.suppress_dismissed_missing
        ),
        color=True,
    )

    try:
        selected = prompt.select_many(
            "Select directories to validate summaries for:", config.scopes
        )
        if not selected:
            click.echo("No directories selected.")
            return
        outcomes = controller.run(selected)
    except (KeyboardInterrupt, EOFError):
        parser.exit(1, "\nsummary-audit: interrupted; no further changes were saved.\n")
    except Exception as exc:  # pragma: no cover
        logger.debug("Unhandled error", exc_info=True)
        parser.exit(1, f"An error occurred: {exc}\nRun with --verbose for more details.\n")

    click.echo("")
    click.echo(click.style("Summary:", bold=True))
    for line in render_summary(outcomes, color=True):
        click.echo(f"  {line}")


if __name__ == "__main__":
    main(sys.argv[1:])
