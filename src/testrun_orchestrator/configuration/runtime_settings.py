"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from testrun_orchestrator.engine_configuration import EngineConfiguration

DEFAULT_TOKEN_ENV = "TESTRUN_ACCESS_TOKEN"


@dataclass(frozen=True)
class SMTPSettings:
    """SMTP server connectivity configuration."""

    host: str
    port: int
    username: str | None
    password: str | None
    use_starttls: bool
    use_ssl: bool
    timeout_seconds: int


@dataclass(frozen=True)
class SessionSettings:
    """Where the remote session token comes from."""

    token_env: str = DEFAULT_TOKEN_ENV


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    engine: EngineConfiguration | None = None
    smtp: SMTPSettings | None = None
    session: SessionSettings = field(default_factory=SessionSettings)
