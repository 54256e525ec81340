"""Result normalization tests."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest
from testrun_orchestrator.engine_configuration import EngineConfiguration
from testrun_orchestrator.result_normalization import CaseStatus, normalize_results
from testrun_orchestrator.test_engine import RawEngineResult, RawTestRecord


def _record(node_id: str, outcome: str, **overrides) -> RawTestRecord:
    defaults = {
        "node_id": node_id,
        "name": node_id.rsplit("::", 1)[-1],
        "markers": (),
        "outcome": outcome,
        "duration": 0.25,
    }
    defaults.update(overrides)
    return RawTestRecord(**defaults)


def _clock() -> datetime:
    return datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


@pytest.mark.parametrize(
    "outcomes",
    [
        [],
        ["passed"],
        ["failed", "failed", "skipped"],
        ["passed", "not_run", "skipped", "failed", "passed"],
        ["passed", "mystery"],
    ],
)
def test_counts_reconcile_with_outcome_sequence(outcomes: list[str]) -> None:
    raw = RawEngineResult.from_records(
        [_record(f"t.py::test_{index}", outcome) for index, outcome in enumerate(outcomes)]
    )

    model = normalize_results(raw, now=_clock)

    assert model.passed + model.failed + model.skipped + model.not_run == model.total
    assert model.total == len(model.outcomes) == len(outcomes)
    for status, count in (
        (CaseStatus.PASSED, model.passed),
        (CaseStatus.FAILED, model.failed),
        (CaseStatus.SKIPPED, model.skipped),
        (CaseStatus.NOT_RUN, model.not_run),
    ):
        assert count == sum(1 for outcome in model.outcomes if outcome.status == status)


def test_outcomes_keep_engine_order() -> None:
    raw = RawEngineResult.from_records(
        [_record("z.py::test_z", "passed"), _record("a.py::test_a", "failed")]
    )

    model = normalize_results(raw, now=_clock)

    assert [outcome.identifier for outcome in model.outcomes] == ["z.py::test_z", "a.py::test_a"]


def test_failure_detail_is_attached_only_to_failures() -> None:
    raw = RawEngineResult.from_records(
        [
            _record(
                "t.py::test_bad",
                "failed",
                phase="call",
                message="assert 1 == 2",
                longrepr="E   assert 1 == 2",
            ),
            _record("t.py::test_skip", "skipped", phase="setup", message="Skipped: later"),
        ]
    )

    model = normalize_results(raw, now=_clock)
    failed, skipped = model.outcomes

    assert failed.failure is not None
    assert failed.failure.phase == "call"
    assert failed.failure.message == "assert 1 == 2"
    assert failed.failure.traceback == "E   assert 1 == 2"
    assert skipped.failure is None
    assert skipped.skip_reason == "Skipped: later"


def test_engine_count_mismatch_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    raw = RawEngineResult(
        total=1,
        passed=0,
        failed=1,
        skipped=0,
        not_run=0,
        records=(_record("t.py::test_ok", "passed"),),
    )

    with caplog.at_level(logging.WARNING):
        model = normalize_results(raw, now=_clock)

    assert model.passed == 1
    assert model.failed == 0
    assert "counts differ" in caplog.text


def test_model_carries_run_context_and_serializes_to_json() -> None:
    raw = RawEngineResult.from_records(
        [_record("t.py::test_bad", "failed", markers=("Smoke",), message="boom", phase="call")]
    )
    configuration = EngineConfiguration(
        root_path=Path("suite"),
        include_tags=frozenset({"Smoke"}),
        exclude_tags=frozenset({"CAWhatIf"}),
    )

    model = normalize_results(raw, configuration, now=_clock)
    payload = json.loads(json.dumps(model.to_dict()))

    assert payload["rootPath"] == "suite"
    assert payload["includeTags"] == ["Smoke"]
    assert payload["createdAt"] == "2024-01-02T03:04:05+00:00"
    assert payload["failedCount"] == 1
    assert payload["tests"][0]["tags"] == ["Smoke"]
    assert payload["tests"][0]["result"] == "Failed"
    assert payload["tests"][0]["failure"]["message"] == "boom"


def test_summary_line_uses_console_format() -> None:
    raw = RawEngineResult.from_records(
        [_record("a::p", "passed"), _record("a::f", "failed"), _record("a::s", "skipped")]
    )

    assert normalize_results(raw, now=_clock).summary_line() == "Passed: 1, Failed: 1, Skipped: 1"
