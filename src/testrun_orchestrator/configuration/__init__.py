"""Configuration domain exports."""

from testrun_orchestrator.errors import ConfigurationError

from .loader import load_configuration
from .runtime_settings import DEFAULT_TOKEN_ENV, Configuration, SessionSettings, SMTPSettings

__all__ = [
    "Configuration",
    "ConfigurationError",
    "DEFAULT_TOKEN_ENV",
    "SessionSettings",
    "SMTPSettings",
    "load_configuration",
]
