"""Results workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from testrun_orchestrator.result_normalization import CaseOutcome, ResultModel

RESULTS_SHEET_NAME = "Results"
SUMMARY_SHEET_NAME = "Summary"

RESULT_COLUMNS = ("ID", "Name", "Tags", "Result", "Duration (s)", "Failure")

_COLUMN_WIDTHS = (60, 40, 25, 12, 14, 80)


def write_excel_report(result: ResultModel, output_path: Path | str) -> None:
    """Write the result model to an xlsx workbook with Results and Summary sheets."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = RESULTS_SHEET_NAME
    _write_header_row(sheet, RESULT_COLUMNS)
    _write_outcome_rows(sheet, result.outcomes)
    sheet.freeze_panes = "A2"

    _write_summary_sheet(workbook, result)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)


def _write_header_row(sheet, columns: Sequence[str]) -> None:
    for index, (label, width) in enumerate(zip(columns, _COLUMN_WIDTHS, strict=True), start=1):
        cell = sheet.cell(row=1, column=index, value=label)
        cell.style = "Headline 4"
        sheet.column_dimensions[get_column_letter(index)].width = width


def _write_outcome_rows(sheet, outcomes: Sequence[CaseOutcome]) -> None:
    for row, outcome in enumerate(outcomes, start=2):
        values = (
            outcome.identifier,
            outcome.name,
            ", ".join(outcome.tags),
            outcome.status.value,
            round(outcome.duration, 3),
            _failure_text(outcome),
        )
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column, value=value)


def _failure_text(outcome: CaseOutcome) -> str | None:
    if outcome.failure is None:
        return None
    return outcome.failure.message or outcome.failure.traceback


def _write_summary_sheet(workbook, result: ResultModel) -> None:
    sheet = workbook.create_sheet(SUMMARY_SHEET_NAME)
    entries = (
        ("created_at", result.created_at.isoformat()),
        ("root_path", result.root_path),
        ("include_tags", ", ".join(result.include_tags)),
        ("exclude_tags", ", ".join(result.exclude_tags)),
        ("total", result.total),
        ("passed", result.passed),
        ("failed", result.failed),
        ("skipped", result.skipped),
        ("not_run", result.not_run),
        ("duration_seconds", round(result.duration, 3)),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
    sheet.column_dimensions["A"].width = 20
    sheet.column_dimensions["B"].width = 40
