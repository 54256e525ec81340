"""Exception hierarchy shared across the run pipeline."""

from __future__ import annotations


class OrchestratorError(Exception):
    """Base class for all errors raised by the orchestrator."""


class ValidationError(OrchestratorError):
    """Raised when a user-supplied parameter is malformed."""

    def __init__(self, parameter: str, message: str) -> None:
        super().__init__(f"{parameter}: {message}")
        self.parameter = parameter


class PreflightError(OrchestratorError):
    """Raised when the run cannot start (missing session, invalid test root)."""


class EngineError(OrchestratorError):
    """Raised when the test engine itself fails."""


class SinkError(OrchestratorError):
    """Raised by a single sink; recorded by the dispatcher, never fatal."""


class ConfigurationError(OrchestratorError):
    """Raised when the configuration file is invalid."""
