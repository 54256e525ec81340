"""Pytest-backed test engine adapter."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any

import pytest

from testrun_orchestrator.engine_configuration import EngineConfiguration, Verbosity
from testrun_orchestrator.errors import EngineError
from testrun_orchestrator.tag_filtering import marker_expression

from .raw_results import RawEngineResult, RawTestRecord

logger = logging.getLogger(__name__)

_VERBOSITY_ARGS = {
    Verbosity.NONE: ("-p", "no:terminal"),
    Verbosity.NORMAL: (),
    Verbosity.DETAILED: ("-v",),
    Verbosity.DIAGNOSTIC: ("-vv", "-rA"),
}

_BUILTIN_MARKERS = frozenset(
    {"parametrize", "skip", "skipif", "xfail", "usefixtures", "filterwarnings"}
)

_FATAL_EXIT_CODES = (
    pytest.ExitCode.INTERRUPTED,
    pytest.ExitCode.INTERNAL_ERROR,
    pytest.ExitCode.USAGE_ERROR,
)

PytestRunner = Callable[[list[str], list[object]], int]


class PytestEngine:  # pylint: disable=too-few-public-methods
    """Run pytest in-process and collect per-test records."""

    def __init__(self, runner: PytestRunner | None = None) -> None:
        self._runner = runner or _run_pytest

    def run(self, configuration: EngineConfiguration) -> RawEngineResult:
        args = build_pytest_args(configuration)
        logger.info("Running pytest %s", " ".join(args))
        collector = _ResultCollector()
        exit_code = pytest.ExitCode(self._runner(args, [collector]))
        if exit_code in _FATAL_EXIT_CODES and not _stopped_by_collection_errors(
            exit_code, collector
        ):
            raise EngineError(
                f"pytest stopped with exit code {exit_code.value} ({exit_code.name})."
            )
        if exit_code == pytest.ExitCode.NO_TESTS_COLLECTED:
            logger.info("pytest collected no tests under %s", configuration.root_path)
        result = collector.build_result()
        if not configuration.pass_through:
            return replace(result, records=())
        return result


def build_pytest_args(configuration: EngineConfiguration) -> list[str]:
    """Translate an engine configuration into pytest command-line arguments."""
    args: list[str] = []
    if configuration.root_path is not None:
        args.append(str(configuration.root_path))
    expression = marker_expression(
        configuration.include_tags or (), configuration.exclude_tags or ()
    )
    if expression:
        args.extend(["-m", expression])
    args.extend(_VERBOSITY_ARGS[configuration.verbosity or Verbosity.NORMAL])
    args.extend(configuration.extra_args)
    return args


def _run_pytest(args: list[str], plugins: list[object]) -> int:
    return pytest.main(args, plugins=plugins)


def _stopped_by_collection_errors(
    exit_code: pytest.ExitCode, collector: _ResultCollector
) -> bool:
    return exit_code == pytest.ExitCode.INTERRUPTED and collector.has_collection_errors


class _ResultCollector:
    """Pytest plugin recording run order, deselection and per-phase reports."""

    def __init__(self) -> None:
        self._selected: list[pytest.Item] = []
        self._deselected: dict[str, pytest.Item] = {}
        self._reports: dict[str, list[pytest.TestReport]] = {}
        self._collect_errors: list[RawTestRecord] = []

    def pytest_collection_finish(self, session: pytest.Session) -> None:
        # Final order, after every plugin has reordered or deselected items.
        self._selected = list(session.items)

    def pytest_deselected(self, items: Sequence[pytest.Item]) -> None:
        for item in items:
            self._deselected.setdefault(item.nodeid, item)

    def pytest_collectreport(self, report: pytest.CollectReport) -> None:
        if report.failed:
            self._collect_errors.append(
                RawTestRecord(
                    node_id=report.nodeid,
                    name=report.nodeid,
                    markers=(),
                    outcome="failed",
                    duration=0.0,
                    phase="collect",
                    message=_crash_message(report),
                    longrepr=report.longreprtext,
                )
            )

    @property
    def has_collection_errors(self) -> bool:
        return bool(self._collect_errors)

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        self._reports.setdefault(report.nodeid, []).append(report)

    def build_result(self) -> RawEngineResult:
        records = list(self._collect_errors)
        selected_ids = {item.nodeid for item in self._selected}
        deselected = [
            item for node_id, item in self._deselected.items() if node_id not in selected_ids
        ]
        for item in [*self._selected, *deselected]:
            markers = tuple(
                sorted(
                    {
                        marker.name
                        for marker in item.iter_markers()
                        if marker.name not in _BUILTIN_MARKERS
                    }
                )
            )
            records.append(self._fold_item(item, markers))
        return RawEngineResult.from_records(records)

    def _fold_item(self, item: pytest.Item, markers: tuple[str, ...]) -> RawTestRecord:
        reports = self._reports.get(item.nodeid, [])
        if not reports:
            return RawTestRecord(
                node_id=item.nodeid,
                name=item.name,
                markers=markers,
                outcome="not_run",
                duration=0.0,
            )

        duration = sum(report.duration for report in reports)
        failed = next((report for report in reports if report.failed), None)
        skipped = next((report for report in reports if report.skipped), None)
        if failed is not None:
            outcome, phase, message = "failed", failed.when, _crash_message(failed)
            longrepr: str | None = failed.longreprtext
        elif skipped is not None:
            outcome, phase, message = "skipped", skipped.when, _skip_reason(skipped)
            longrepr = None
        else:
            outcome, phase, message, longrepr = "passed", None, None, None
        return RawTestRecord(
            node_id=item.nodeid,
            name=item.name,
            markers=markers,
            outcome=outcome,
            duration=duration,
            phase=phase,
            message=message,
            longrepr=longrepr,
        )


def _crash_message(report: Any) -> str | None:
    crash = getattr(report.longrepr, "reprcrash", None)
    if crash is not None:
        return crash.message
    text = (report.longreprtext or "").strip()
    return text.splitlines()[-1] if text else None


def _skip_reason(report: pytest.TestReport) -> str | None:
    if isinstance(report.longrepr, tuple) and len(report.longrepr) == 3:
        return str(report.longrepr[2])
    return getattr(report, "wasxfail", None) or None
