"""Output planning domain exports."""

from .output_plan_models import OutputPlan, OutputRequest, ReportFormat
from .output_plan_resolver import (
    DEFAULT_OUTPUT_FOLDER,
    default_file_name,
    resolve_output_plan,
    validate_output_request,
)

__all__ = [
    "OutputPlan",
    "OutputRequest",
    "ReportFormat",
    "DEFAULT_OUTPUT_FOLDER",
    "default_file_name",
    "resolve_output_plan",
    "validate_output_request",
]
