"""Engine configuration domain exports."""

from .engine_settings import EngineConfiguration, Verbosity
from .run_config_builder import DEFAULT_TEST_ROOT, build_engine_configuration

__all__ = [
    "EngineConfiguration",
    "Verbosity",
    "DEFAULT_TEST_ROOT",
    "build_engine_configuration",
]
