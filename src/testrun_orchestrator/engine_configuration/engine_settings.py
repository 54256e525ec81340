"""Engine configuration entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Verbosity(str, Enum):
    """How much the engine prints while running."""

    NONE = "none"
    NORMAL = "normal"
    DETAILED = "detailed"
    DIAGNOSTIC = "diagnostic"


@dataclass(frozen=True)
class EngineConfiguration:
    """Engine settings; unset fields are filled in by the run config builder."""

    root_path: Path | None = None
    include_tags: frozenset[str] | None = None
    exclude_tags: frozenset[str] | None = None
    verbosity: Verbosity | None = None
    pass_through: bool | None = None
    extra_args: tuple[str, ...] = ()
