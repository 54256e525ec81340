"""Output plan resolution tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from testrun_orchestrator.errors import ValidationError
from testrun_orchestrator.output_planning import (
    DEFAULT_OUTPUT_FOLDER,
    OutputPlan,
    OutputRequest,
    ReportFormat,
    default_file_name,
    resolve_output_plan,
)


def _fixed_clock() -> datetime:
    return datetime(2024, 5, 17, 9, 3, 7)


@pytest.mark.parametrize(
    ("field_name", "path"),
    [
        ("html_file", "report.html"),
        ("markdown_file", "report.md"),
        ("json_file", "report.json"),
        ("csv_file", "report.csv"),
        ("excel_file", "report.xlsx"),
        ("html_file", "REPORT.HTML"),
    ],
)
def test_explicit_paths_with_matching_extension_are_accepted(
    tmp_path: Path, field_name: str, path: str
) -> None:
    target = str(tmp_path / path)

    plan = resolve_output_plan(OutputRequest(**{field_name: target}))

    assert str(Path(target)) in {str(destination) for _, destination in plan.destinations()}


@pytest.mark.parametrize(
    ("field_name", "path", "parameter"),
    [
        ("html_file", "out.txt", "output_html_file"),
        ("markdown_file", "out.markdown", "output_markdown_file"),
        ("json_file", "out.jsn", "output_json_file"),
        ("csv_file", "out.tsv", "output_csv_file"),
        ("excel_file", "out.xls", "output_excel_file"),
    ],
)
def test_mismatched_extension_names_the_offending_parameter(
    tmp_path: Path, field_name: str, path: str, parameter: str
) -> None:
    with pytest.raises(ValidationError) as excinfo:
        resolve_output_plan(OutputRequest(**{field_name: str(tmp_path / path)}))

    assert excinfo.value.parameter == parameter
    assert parameter in str(excinfo.value)


def test_extension_check_runs_before_folder_creation(tmp_path: Path) -> None:
    folder = tmp_path / "never-created"

    with pytest.raises(ValidationError):
        resolve_output_plan(OutputRequest(html_file="out.txt", folder=str(folder)))

    assert not folder.exists()


def test_no_folder_and_no_paths_defaults_to_test_results_folder(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    plan = resolve_output_plan(OutputRequest(), now=_fixed_clock)

    folder = Path(DEFAULT_OUTPUT_FOLDER)
    assert (tmp_path / "test-results").is_dir()
    assert plan.html == folder / "TestResults-2024-05-17-090307.html"
    assert plan.markdown == folder / "TestResults-2024-05-17-090307.md"
    assert plan.json == folder / "TestResults-2024-05-17-090307.json"
    assert plan.csv is None
    assert plan.excel is None


def test_folder_supersedes_explicit_paths(tmp_path: Path) -> None:
    folder = tmp_path / "results"

    plan = resolve_output_plan(
        OutputRequest(
            html_file=str(tmp_path / "elsewhere.html"),
            json_file=str(tmp_path / "elsewhere.json"),
            folder=str(folder),
            folder_file_name="nightly",
        )
    )

    assert plan == OutputPlan(
        json=folder / "nightly.json",
        markdown=folder / "nightly.md",
        html=folder / "nightly.html",
    )


def test_folder_creation_is_idempotent(tmp_path: Path) -> None:
    folder = tmp_path / "results"
    folder.mkdir()
    request = OutputRequest(folder=str(folder), folder_file_name="run")

    first = resolve_output_plan(request)
    second = resolve_output_plan(request)

    assert first == second


def test_csv_and_excel_are_only_planned_when_exported(tmp_path: Path) -> None:
    folder = tmp_path / "results"

    without_exports = resolve_output_plan(OutputRequest(folder=str(folder), folder_file_name="r"))
    with_exports = resolve_output_plan(
        OutputRequest(folder=str(folder), folder_file_name="r", export_csv=True, export_excel=True)
    )

    assert without_exports.csv is None
    assert without_exports.excel is None
    assert with_exports.csv == folder / "r.csv"
    assert with_exports.excel == folder / "r.xlsx"


def test_explicit_paths_without_folder_are_used_as_given(tmp_path: Path) -> None:
    html_path = tmp_path / "only.html"

    plan = resolve_output_plan(OutputRequest(html_file=str(html_path)))

    assert plan.destinations() == ((ReportFormat.HTML, html_path),)
    assert not (tmp_path / "test-results").exists()


def test_destinations_follow_dispatch_order(tmp_path: Path) -> None:
    plan = resolve_output_plan(
        OutputRequest(
            folder=str(tmp_path), folder_file_name="r", export_csv=True, export_excel=True
        )
    )

    assert [report_format for report_format, _ in plan.destinations()] == [
        ReportFormat.JSON,
        ReportFormat.MARKDOWN,
        ReportFormat.CSV,
        ReportFormat.EXCEL,
        ReportFormat.HTML,
    ]


def test_default_file_name_has_second_resolution() -> None:
    assert default_file_name(_fixed_clock()) == "TestResults-2024-05-17-090307"
