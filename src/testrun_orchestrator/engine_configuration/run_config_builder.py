"""Run configuration merge service."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from testrun_orchestrator.tag_filtering import EffectiveTagFilter

from .engine_settings import EngineConfiguration, Verbosity

DEFAULT_TEST_ROOT = Path("tests")


def build_engine_configuration(
    base: EngineConfiguration | None,
    *,
    path: Path | str | None,
    tag_filter: EffectiveTagFilter,
    verbosity: Verbosity,
) -> EngineConfiguration:
    """Merge a pre-built configuration with the run's explicit settings.

    An explicit path wins over the base configuration's path, which wins over
    the default test root. Tag sets replace the base ones only when non-empty.
    Results are always passed through and verbosity always follows the run.
    """
    configuration = base or EngineConfiguration()
    root_path = Path(path) if path else configuration.root_path or DEFAULT_TEST_ROOT
    return replace(
        configuration,
        root_path=root_path,
        include_tags=tag_filter.include or configuration.include_tags,
        exclude_tags=tag_filter.exclude or configuration.exclude_tags,
        verbosity=verbosity,
        pass_through=True,
    )
