"""Raw engine result entities and the engine seam."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from testrun_orchestrator.engine_configuration import EngineConfiguration


@dataclass(frozen=True)
class RawTestRecord:  # pylint: disable=too-many-instance-attributes
    """One test as reported by the engine, before normalization."""

    node_id: str
    name: str
    markers: tuple[str, ...]
    outcome: str
    duration: float
    phase: str | None = None
    message: str | None = None
    longrepr: str | None = None


@dataclass(frozen=True)
class RawEngineResult:
    """Counts and ordered per-test records produced by one engine run."""

    total: int
    passed: int
    failed: int
    skipped: int
    not_run: int
    records: tuple[RawTestRecord, ...]

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    @staticmethod
    def from_records(records: Sequence[RawTestRecord]) -> RawEngineResult:
        outcomes = [record.outcome for record in records]
        return RawEngineResult(
            total=len(records),
            passed=outcomes.count("passed"),
            failed=outcomes.count("failed"),
            skipped=outcomes.count("skipped"),
            not_run=outcomes.count("not_run"),
            records=tuple(records),
        )


class EngineProtocol(Protocol):  # pylint: disable=too-few-public-methods
    """Seam between the run controller and the test engine."""

    def run(self, configuration: EngineConfiguration) -> RawEngineResult: ...
