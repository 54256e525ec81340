"""Pytest engine adapter tests against throwaway suites."""

from __future__ import annotations

import pytest
from testrun_orchestrator.engine_configuration import EngineConfiguration, Verbosity
from testrun_orchestrator.test_engine.pytest_engine import PytestEngine

_MIXED_SUITE = """
import pytest


def test_pass():
    assert True


def test_fail():
    assert 1 == 2


@pytest.mark.skip(reason="not today")
def test_skip():
    pass


@pytest.mark.Full
def test_extended():
    pass


@pytest.mark.Smoke
@pytest.mark.parametrize("value", [1])
def test_tagged(value):
    assert value
"""


def _configuration(pytester: pytest.Pytester, **overrides) -> EngineConfiguration:
    settings = {
        "root_path": pytester.path,
        "verbosity": Verbosity.NONE,
        "pass_through": True,
        "extra_args": (
            "-p",
            "no:cacheprovider",
            "-W",
            "ignore::pytest.PytestUnknownMarkWarning",
        ),
    }
    settings.update(overrides)
    return EngineConfiguration(**settings)


def test_records_follow_run_order_and_map_outcomes(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(test_mixed=_MIXED_SUITE)

    result = PytestEngine().run(
        _configuration(pytester, exclude_tags=frozenset({"Full"}))
    )

    assert [record.name for record in result.records] == [
        "test_pass",
        "test_fail",
        "test_skip",
        "test_tagged[1]",
        "test_extended",
    ]
    assert [record.outcome for record in result.records] == [
        "passed",
        "failed",
        "skipped",
        "passed",
        "not_run",
    ]
    assert (result.total, result.passed, result.failed, result.skipped, result.not_run) == (
        5,
        2,
        1,
        1,
        1,
    )


def test_records_follow_order_set_by_other_plugins(pytester: pytest.Pytester) -> None:
    pytester.makeconftest(
        "def pytest_collection_modifyitems(items):\n    items.reverse()\n"
    )
    pytester.makepyfile(test_reordered=_MIXED_SUITE)

    result = PytestEngine().run(_configuration(pytester, exclude_tags=frozenset({"Full"})))

    assert [record.name for record in result.records] == [
        "test_tagged[1]",
        "test_skip",
        "test_fail",
        "test_pass",
        "test_extended",
    ]


def test_failure_and_skip_details_are_captured(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(test_details=_MIXED_SUITE)

    result = PytestEngine().run(_configuration(pytester))
    by_name = {record.name: record for record in result.records}

    failed = by_name["test_fail"]
    assert failed.phase == "call"
    assert "assert 1 == 2" in (failed.longrepr or "")
    assert failed.message
    assert "not today" in (by_name["test_skip"].message or "")


def test_markers_become_tags_without_builtin_marks(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(test_markers=_MIXED_SUITE)

    result = PytestEngine().run(_configuration(pytester))
    by_name = {record.name: record for record in result.records}

    assert by_name["test_extended"].markers == ("Full",)
    assert by_name["test_tagged[1]"].markers == ("Smoke",)
    assert by_name["test_skip"].markers == ()


def test_include_tags_select_only_matching_tests(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(test_include=_MIXED_SUITE)

    result = PytestEngine().run(_configuration(pytester, include_tags=frozenset({"Smoke"})))

    run = [record.name for record in result.records if record.outcome != "not_run"]
    assert run == ["test_tagged[1]"]


def test_collection_errors_are_recorded_as_failures(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(
        test_broken="import module_that_does_not_exist_anywhere\n",
        test_fine="def test_ok():\n    assert True\n",
    )

    result = PytestEngine().run(_configuration(pytester))

    broken = [record for record in result.records if record.phase == "collect"]
    assert len(broken) == 1
    assert broken[0].outcome == "failed"
    assert "module_that_does_not_exist_anywhere" in (broken[0].longrepr or "")
    assert result.failed == 1


def test_suite_without_tests_is_empty(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(test_empty="VALUE = 1\n")

    result = PytestEngine().run(_configuration(pytester))

    assert result.is_empty
