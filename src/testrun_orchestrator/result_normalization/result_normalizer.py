"""Raw engine result normalization service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from testrun_orchestrator.engine_configuration import EngineConfiguration
from testrun_orchestrator.test_engine.raw_results import RawEngineResult, RawTestRecord

from .result_models import CaseOutcome, CaseStatus, FailureDetail, ResultModel

logger = logging.getLogger(__name__)

_STATUS_BY_OUTCOME = {
    "passed": CaseStatus.PASSED,
    "failed": CaseStatus.FAILED,
    "skipped": CaseStatus.SKIPPED,
    "not_run": CaseStatus.NOT_RUN,
}


def normalize_results(
    raw: RawEngineResult,
    configuration: EngineConfiguration | None = None,
    *,
    now: Callable[[], datetime] | None = None,
) -> ResultModel:
    """Convert a raw engine result into the result model.

    Outcomes keep the engine's order. Counts are derived from the outcomes so
    they always reconcile with the outcome sequence.
    """
    outcomes = tuple(_to_outcome(record) for record in raw.records)
    counts = {status: 0 for status in CaseStatus}
    for outcome in outcomes:
        counts[outcome.status] += 1

    reported = (raw.passed, raw.failed, raw.skipped, raw.not_run)
    if raw.records and reported != tuple(counts[status] for status in CaseStatus):
        logger.warning("Engine counts differ from its per-test records; using the records.")

    return ResultModel(
        total=len(outcomes),
        passed=counts[CaseStatus.PASSED],
        failed=counts[CaseStatus.FAILED],
        skipped=counts[CaseStatus.SKIPPED],
        not_run=counts[CaseStatus.NOT_RUN],
        outcomes=outcomes,
        created_at=(now or _utc_now)(),
        root_path=str(configuration.root_path or "") if configuration else "",
        include_tags=tuple(sorted(configuration.include_tags or ())) if configuration else (),
        exclude_tags=tuple(sorted(configuration.exclude_tags or ())) if configuration else (),
    )


def _to_outcome(record: RawTestRecord) -> CaseOutcome:
    status = _STATUS_BY_OUTCOME.get(record.outcome, CaseStatus.NOT_RUN)
    failure = None
    if status == CaseStatus.FAILED:
        failure = FailureDetail(
            phase=record.phase,
            message=record.message,
            traceback=record.longrepr,
        )
    return CaseOutcome(
        identifier=record.node_id,
        name=record.name,
        tags=record.markers,
        status=status,
        duration=record.duration,
        failure=failure,
        skip_reason=record.message if status == CaseStatus.SKIPPED else None,
    )


def _utc_now() -> datetime:
    return datetime.now(UTC)
