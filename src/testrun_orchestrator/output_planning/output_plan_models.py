"""Output planning entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ReportFormat(str, Enum):
    """File formats a run can be written to, in dispatch order."""

    JSON = "json"
    MARKDOWN = "markdown"
    CSV = "csv"
    EXCEL = "excel"
    HTML = "html"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]


_EXTENSIONS = {
    ReportFormat.JSON: ".json",
    ReportFormat.MARKDOWN: ".md",
    ReportFormat.CSV: ".csv",
    ReportFormat.EXCEL: ".xlsx",
    ReportFormat.HTML: ".html",
}


@dataclass(frozen=True)
class OutputRequest:
    """User-supplied output parameters before resolution."""

    html_file: str | None = None
    markdown_file: str | None = None
    json_file: str | None = None
    csv_file: str | None = None
    excel_file: str | None = None
    folder: str | None = None
    folder_file_name: str | None = None
    export_csv: bool = False
    export_excel: bool = False

    def explicit_path(self, report_format: ReportFormat) -> str | None:
        return {
            ReportFormat.JSON: self.json_file,
            ReportFormat.MARKDOWN: self.markdown_file,
            ReportFormat.CSV: self.csv_file,
            ReportFormat.EXCEL: self.excel_file,
            ReportFormat.HTML: self.html_file,
        }[report_format]


@dataclass(frozen=True)
class OutputPlan:
    """Resolved destination file per report format."""

    json: Path | None = None
    markdown: Path | None = None
    csv: Path | None = None
    excel: Path | None = None
    html: Path | None = None

    def path_for(self, report_format: ReportFormat) -> Path | None:
        return getattr(self, report_format.name.lower())

    def destinations(self) -> tuple[tuple[ReportFormat, Path], ...]:
        """Planned (format, path) pairs in dispatch order."""
        planned = []
        for report_format in ReportFormat:
            path = self.path_for(report_format)
            if path is not None:
                planned.append((report_format, path))
        return tuple(planned)
