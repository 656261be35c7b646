"""Per-scope reconciliation of summary findings with user decisions."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional

import click

from .classifier import StalenessClassifier
from .errors import EnumerationError, MetadataError, PersistenceError
from .git.tracked import TrackedFileResolver
from .logging import get_logger
from .models import (
    AuditReport,
    Classification,
    Decision,
    PassState,
    Scope,
    ScopeOutcome,
)
from .prompts import PromptProvider
from .reporting import decision_message, decision_prompt, failure_message, render_report
from .stores import DismissalStore

DECISIONS: tuple[Decision, ...] = (
    Decision.UPDATE_MANUALLY,
    Decision.DISMISS,
    Decision.IGNORE,
)

_TRANSITIONS = {
    PassState.IDLE: {PassState.LISTING},
    PassState.LISTING: {PassState.CLASSIFYING, PassState.ABORTED},
    PassState.CLASSIFYING: {PassState.REPORT_READY, PassState.DONE, PassState.ABORTED},
    PassState.REPORT_READY: {PassState.AWAITING_DECISION},
    PassState.AWAITING_DECISION: {PassState.APPLYING},
    PassState.APPLYING: {PassState.DONE, PassState.FAILED},
}


class _Pass:
    """Tracks the state of one scope's pass and rejects illegal transitions."""

    def __init__(self, scope: Scope) -> None:
        self.outcome = ScopeOutcome(scope=scope, state=PassState.IDLE, trail=[PassState.IDLE])

    @property
    def state(self) -> PassState:
        return self.outcome.state

    def advance(self, target: PassState) -> None:
        allowed = _TRANSITIONS.get(self.outcome.state, set())
        if target not in allowed:
            raise RuntimeError(
                f"Illegal transition {self.outcome.state.value} -> {target.value}"
            )
        self.outcome.state = target
        self.outcome.trail.append(target)


class ReconciliationController:
    """Drives listing, classification, reporting and decisions for each scope."""

    def __init__(
        self,
        store: DismissalStore,
        prompt: PromptProvider,
        resolver: TrackedFileResolver | None = None,
        classifier: StalenessClassifier | None = None,
        echo: Callable[[str], None] = click.echo,
        color: bool = False,
    ) -> None:
        self.store = store
        self.prompt = prompt
        self.resolver = resolver or TrackedFileResolver()
        self.classifier = classifier or StalenessClassifier()
        self._echo = echo
        self.color = color
        self.logger = get_logger("reconciler")

    def run(self, scopes: Iterable[Scope]) -> List[ScopeOutcome]:
        """Reconcile scopes one after another; a failed scope does not stop the rest."""
        return [self.run_scope(scope) for scope in scopes]

    def run_scope(self, scope: Scope) -> ScopeOutcome:
        run = _Pass(scope)
        self.logger.info("Auditing summaries for %s (%s)", scope.label, scope.root)

        try:
            report = self._collect(run, scope)
        except (EnumerationError, MetadataError) as exc:
            self.logger.error("Audit of %s aborted: %s", scope.label, exc)
            run.outcome.error = str(exc)
            run.outcome.message = f"Audit aborted for {scope.label}: {exc}"
            run.advance(PassState.ABORTED)
            self._echo(failure_message(run.outcome.message, color=self.color))
            return run.outcome

        run.outcome.report = report
        if not report.has_findings:
            run.advance(PassState.DONE)
            run.outcome.message = render_report(report)[0]
            self._echo(render_report(report, color=self.color)[0])
            return run.outcome

        run.advance(PassState.REPORT_READY)
        for line in render_report(report, color=self.color):
            self._echo(line)

        run.advance(PassState.AWAITING_DECISION)
        decision = self.prompt.select_one(decision_prompt(scope.label), DECISIONS)
        run.outcome.decision = decision
        self.logger.debug("Decision for %s: %s", scope.label, decision.name)

        run.advance(PassState.APPLYING)
        try:
            self._apply(scope, report, decision)
        except PersistenceError as exc:
            self.logger.error("Could not record dismissals for %s: %s", scope.label, exc)
            run.outcome.error = str(exc)
            run.outcome.message = f"Failed to dismiss alerts for {scope.label}: {exc}"
            run.advance(PassState.FAILED)
            self._echo(failure_message(run.outcome.message, color=self.color))
            return run.outcome

        run.advance(PassState.DONE)
        run.outcome.message = decision_message(decision, scope.label)
        self._echo(decision_message(decision, scope.label, color=self.color))
        return run.outcome

    # ------------------------------------------------------------------
    # Internals

    def _collect(self, run: _Pass, scope: Scope) -> AuditReport:
        run.advance(PassState.LISTING)
        tracked = self.resolver.list_tracked_files(scope.root)

        run.advance(PassState.CLASSIFYING)
        dismissed = self.store.snapshot(scope.label)
        report = AuditReport(label=scope.label)
        for relative_path in tracked:
            result = self.classifier.classify(scope.root, relative_path, dismissed)
            if result is Classification.MISSING:
                report.missing.append(relative_path)
            elif result is Classification.STALE:
                report.stale.append(relative_path)
            elif result is Classification.DISMISSED:
                report.dismissed_count += 1
            else:
                report.current_count += 1
        self.logger.debug(
            "%s: %d missing, %d stale, %d dismissed, %d current",
            scope.label,
            len(report.missing),
            len(report.stale),
            report.dismissed_count,
            report.current_count,
        )
        return report

    def _apply(self, scope: Scope, report: AuditReport, decision: Optional[Decision]) -> None:
        if decision is not Decision.DISMISS:
            return
        self.store.record_dismissals(scope.label, report.findings())


__all__ = ["DECISIONS", "ReconciliationController"]
