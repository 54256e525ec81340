"""Run execution domain exports."""

from .run_contracts import ResolvedRun, RunRequest, RunState
from .run_controller import RunController, execute_test_run
from .version_check import check_for_newer_version

__all__ = [
    "ResolvedRun",
    "RunController",
    "RunRequest",
    "RunState",
    "check_for_newer_version",
    "execute_test_run",
]
