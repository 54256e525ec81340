"""Results writing domain exports."""

from testrun_orchestrator.output_planning import ReportFormat

from .excel_report_writer import write_excel_report
from .report_writers import (
    render_html,
    render_markdown,
    write_csv_report,
    write_html_report,
    write_json_report,
    write_markdown_report,
)

REPORT_WRITERS = {
    ReportFormat.JSON: write_json_report,
    ReportFormat.MARKDOWN: write_markdown_report,
    ReportFormat.CSV: write_csv_report,
    ReportFormat.EXCEL: write_excel_report,
    ReportFormat.HTML: write_html_report,
}

__all__ = [
    "REPORT_WRITERS",
    "render_html",
    "render_markdown",
    "write_csv_report",
    "write_excel_report",
    "write_html_report",
    "write_json_report",
    "write_markdown_report",
]
