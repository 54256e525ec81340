"""Output plan resolution service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from testrun_orchestrator.errors import ValidationError

from .output_plan_models import OutputPlan, OutputRequest, ReportFormat

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FOLDER = "./test-results"
DEFAULT_FILE_NAME_PREFIX = "TestResults"

PARAMETER_NAMES = {
    ReportFormat.JSON: "output_json_file",
    ReportFormat.MARKDOWN: "output_markdown_file",
    ReportFormat.CSV: "output_csv_file",
    ReportFormat.EXCEL: "output_excel_file",
    ReportFormat.HTML: "output_html_file",
}

_ALWAYS_WRITTEN = (ReportFormat.JSON, ReportFormat.MARKDOWN, ReportFormat.HTML)


def resolve_output_plan(
    request: OutputRequest,
    *,
    now: Callable[[], datetime] | None = None,
) -> OutputPlan:
    """Resolve output parameters into concrete destination paths.

    Args:
      request: Explicit per-format paths, optional folder and export flags.
      now: Clock used for the default file name, local time by default.

    Returns:
      The resolved output plan.

    Raises:
      ValidationError: If an explicit path has the wrong file extension.
    """
    validate_output_request(request)

    folder = request.folder
    if not folder and not any(request.explicit_path(fmt) for fmt in ReportFormat):
        folder = DEFAULT_OUTPUT_FOLDER

    if not folder:
        return OutputPlan(
            **{
                fmt.name.lower(): Path(path)
                for fmt in ReportFormat
                if (path := request.explicit_path(fmt))
            }
        )

    folder_path = Path(folder)
    folder_path.mkdir(parents=True, exist_ok=True)
    file_name = request.folder_file_name or default_file_name((now or datetime.now)())
    logger.debug("Writing results under %s as %s.*", folder_path, file_name)

    formats = list(_ALWAYS_WRITTEN)
    if request.export_csv or request.csv_file:
        formats.append(ReportFormat.CSV)
    if request.export_excel or request.excel_file:
        formats.append(ReportFormat.EXCEL)
    return OutputPlan(
        **{fmt.name.lower(): folder_path / f"{file_name}{fmt.extension}" for fmt in formats}
    )


def default_file_name(moment: datetime) -> str:
    """File name used when an output folder is set without a base name."""
    return f"{DEFAULT_FILE_NAME_PREFIX}-{moment.strftime('%Y-%m-%d-%H%M%S')}"


def validate_output_request(request: OutputRequest) -> None:
    """Reject explicit report paths whose extension does not match their format."""
    for report_format in ReportFormat:
        path = request.explicit_path(report_format)
        if not path:
            continue
        if Path(path).suffix.lower() != report_format.extension:
            parameter = PARAMETER_NAMES[report_format]
            raise ValidationError(
                parameter,
                f"'{path}' must have the {report_format.extension} file extension.",
            )
