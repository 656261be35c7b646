"""Rendering of audit reports and per-scope summaries.

Renderers return plain strings unless ``color`` is set, in which case lines
carry ANSI styles by severity: red headers, yellow paths, green success and
blue notices. ``click.echo`` drops the styles when output is not a terminal.
"""

from __future__ import annotations

from typing import List, Sequence

import click

from .models import AuditReport, Decision, PassState, ScopeOutcome


def _style(text: str, color: bool, **styles: object) -> str:
    return click.style(text, **styles) if color else text


def render_report(report: AuditReport, *, color: bool = False) -> List[str]:
    """Return the lines shown before asking the user for a decision."""
    if not report.has_findings:
        return [_style(f"All summary files are up to date for {report.label}!", color, fg="green")]

    lines: List[str] = []
    if report.missing:
        lines.append("")
        lines.append(
            _style(f"Missing Summaries ({len(report.missing)}) in {report.label}:", color, fg="red", bold=True)
        )
        lines.extend(_style(f" - {path}", color, fg="yellow") for path in report.missing)
    if report.stale:
        lines.append("")
        lines.append(
            _style(f"Outdated Summaries ({len(report.stale)}) in {report.label}:", color, fg="red", bold=True)
        )
        lines.extend(_style(f" - {path}", color, fg="yellow") for path in report.stale)
    if report.dismissed_count:
        lines.append(_style(f"({report.dismissed_count} dismissed finding(s) hidden)", color, dim=True))
    return lines


def decision_prompt(label: str) -> str:
    return f"Choose an action for {label}:"


def decision_message(decision: Decision, label: str, *, color: bool = False) -> str:
    if decision is Decision.UPDATE_MANUALLY:
        return _style("Please update the summary files manually.", color, fg="blue")
    if decision is Decision.DISMISS:
        return _style(f"Alerts dismissed for {label}.", color, fg="green")
    return _style("Alerts ignored for now.", color, fg="blue")


def failure_message(text: str, *, color: bool = False) -> str:
    return _style(text, color, fg="red")


def render_summary(outcomes: Sequence[ScopeOutcome], *, color: bool = False) -> List[str]:
    """One line per scope describing how its pass ended."""
    lines: List[str] = []
    for outcome in outcomes:
        label = outcome.scope.label
        if outcome.state is PassState.ABORTED:
            lines.append(failure_message(f"{label}: aborted ({outcome.error})", color=color))
            continue
        if outcome.state is PassState.FAILED:
            lines.append(failure_message(f"{label}: failed ({outcome.error})", color=color))
            continue
        report = outcome.report
        if report is None:
            lines.append(f"{label}: {outcome.state.value}")
            continue
        parts = [
            f"{len(report.missing)} missing",
            f"{len(report.stale)} stale",
            f"{report.dismissed_count} dismissed",
            f"{report.current_count} current",
        ]
        line = f"{label}: " + ", ".join(parts)
        if outcome.decision is not None:
            line += f" [{outcome.decision.value}]"
        lines.append(_style(line, color, fg="yellow" if report.has_findings else "green"))
    return lines


__all__ = [
    "decision_message",
    "decision_prompt",
    "failure_message",
    "render_report",
    "render_summary",
]
