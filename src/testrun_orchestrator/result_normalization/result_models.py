"""Normalized result entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class CaseStatus(str, Enum):
    """Final status of one test in a run."""

    PASSED = "Passed"
    FAILED = "Failed"
    SKIPPED = "Skipped"
    NOT_RUN = "NotRun"


@dataclass(frozen=True)
class FailureDetail:
    """Why a test failed."""

    phase: str | None
    message: str | None
    traceback: str | None


@dataclass(frozen=True)
class CaseOutcome:  # pylint: disable=too-many-instance-attributes
    """Normalized outcome of one test."""

    identifier: str
    name: str
    tags: tuple[str, ...]
    status: CaseStatus
    duration: float
    failure: FailureDetail | None = None
    skip_reason: str | None = None


@dataclass(frozen=True)
class ResultModel:  # pylint: disable=too-many-instance-attributes
    """Engine-agnostic outcome of one run, shared read-only by every sink."""

    total: int
    passed: int
    failed: int
    skipped: int
    not_run: int
    outcomes: tuple[CaseOutcome, ...]
    created_at: datetime
    root_path: str = ""
    include_tags: tuple[str, ...] = field(default=())
    exclude_tags: tuple[str, ...] = field(default=())

    @property
    def duration(self) -> float:
        return sum(outcome.duration for outcome in self.outcomes)

    def summary_line(self) -> str:
        return f"Passed: {self.passed}, Failed: {self.failed}, Skipped: {self.skipped}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation including nested failure detail."""
        return {
            "createdAt": self.created_at.isoformat(),
            "rootPath": self.root_path,
            "includeTags": list(self.include_tags),
            "excludeTags": list(self.exclude_tags),
            "totalCount": self.total,
            "passedCount": self.passed,
            "failedCount": self.failed,
            "skippedCount": self.skipped,
            "notRunCount": self.not_run,
            "duration": round(self.duration, 6),
            "tests": [_outcome_to_dict(outcome) for outcome in self.outcomes],
        }


def _outcome_to_dict(outcome: CaseOutcome) -> dict[str, Any]:
    failure = outcome.failure
    return {
        "id": outcome.identifier,
        "name": outcome.name,
        "tags": list(outcome.tags),
        "result": outcome.status.value,
        "duration": round(outcome.duration, 6),
        "skipReason": outcome.skip_reason,
        "failure": (
            None
            if failure is None
            else {
                "phase": failure.phase,
                "message": failure.message,
                "traceback": failure.traceback,
            }
        ),
    }
