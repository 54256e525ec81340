"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from testrun_orchestrator.engine_configuration import EngineConfiguration, Verbosity
from testrun_orchestrator.notifications import NotificationTargets
from testrun_orchestrator.output_planning import OutputPlan, OutputRequest
from testrun_orchestrator.tag_filtering import EffectiveTagFilter


class RunState(str, Enum):
    """Stages a run controller moves through."""

    IDLE = "idle"
    PREFLIGHT_CHECKED = "preflight_checked"
    CONFIG_RESOLVED = "config_resolved"
    EXECUTED = "executed"
    RESULTS_DISPATCHED = "results_dispatched"
    DONE = "done"


@dataclass(frozen=True)
class RunRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for executing one run."""

    path: str | None = None
    include_tags: frozenset[str] = frozenset()
    exclude_tags: frozenset[str] = frozenset()
    output: OutputRequest = field(default_factory=OutputRequest)
    engine_configuration: EngineConfiguration | None = None
    verbosity: Verbosity = Verbosity.NONE
    non_interactive: bool = False
    pass_through: bool = False
    notifications: NotificationTargets = field(default_factory=NotificationTargets)
    skip_connection_check: bool = False
    skip_version_check: bool = False


@dataclass(frozen=True)
class ResolvedRun:
    """Everything derived from a request before the engine starts."""

    output_plan: OutputPlan
    tag_filter: EffectiveTagFilter
    engine_configuration: EngineConfiguration
