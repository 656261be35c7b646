"""Core data models shared across summary_audit components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

SUMMARY_SUBDIR = "summary"
SUMMARY_SUFFIX = ".summary.txt"
DISMISSED_FILENAME = "dismissed.json"


@dataclass(frozen=True)
class Scope:
    """A labelled root directory audited independently of its siblings."""

    label: str
    root: Path

    @property
    def summary_dir(self) -> Path:
        return self.root / SUMMARY_SUBDIR


class Classification(str, Enum):
    """Outcome of comparing a tracked file with its summary artifact."""

    MISSING = "missing"
    STALE = "stale"
    CURRENT = "current"
    DISMISSED = "dismissed"


class Decision(str, Enum):
    """Actions offered once a scope has missing or stale summaries."""

    UPDATE_MANUALLY = "Update summaries"
    DISMISS = "Dismiss these alerts"
    IGNORE = "Ignore for now"


class PassState(str, Enum):
    """States of a single scope's reconciliation pass."""

    IDLE = "idle"
    LISTING = "listing"
    CLASSIFYING = "classifying"
    REPORT_READY = "report_ready"
    AWAITING_DECISION = "awaiting_decision"
    APPLYING = "applying"
    DONE = "done"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass
class AuditReport:
    """Aggregated classifier output for one scope, in resolver order."""

    label: str
    missing: List[str] = field(default_factory=list)
    stale: List[str] = field(default_factory=list)
    dismissed_count: int = 0
    current_count: int = 0

    @property
    def has_findings(self) -> bool:
        return bool(self.missing or self.stale)

    @property
    def total(self) -> int:
        return (
            len(self.missing)
            + len(self.stale)
            + self.dismissed_count
            + self.current_count
        )

    def findings(self) -> List[str]:
        """Return missing then stale paths without duplicates."""
        seen: set[str] = set()
        ordered: List[str] = []
        for path in [*self.missing, *self.stale]:
            if path not in seen:
                seen.add(path)
                ordered.append(path)
        return ordered


@dataclass
class ScopeOutcome:
    """Result of running one scope through the reconciliation state machine."""

    scope: Scope
    state: PassState
    trail: List[PassState] = field(default_factory=list)
    report: Optional[AuditReport] = None
    decision: Optional[Decision] = None
    message: str = ""
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state is PassState.DONE
