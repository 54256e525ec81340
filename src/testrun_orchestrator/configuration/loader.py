"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from testrun_orchestrator.engine_configuration import EngineConfiguration, Verbosity
from testrun_orchestrator.errors import ConfigurationError

from .runtime_settings import DEFAULT_TOKEN_ENV, Configuration, SessionSettings, SMTPSettings


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        engine=_parse_engine_section(parsed.get("engine"), path.parent),
        smtp=_parse_smtp_section(parsed.get("smtp")),
        session=_parse_session_section(parsed.get("session")),
    )


def _parse_engine_section(value: Any, base_path: Path) -> EngineConfiguration | None:
    if value is None:
        return None
    section = _require_mapping(value, "engine")
    root_path_raw = _optional_string(section.get("root_path"), "engine.root_path")
    verbosity_raw = _optional_string(section.get("verbosity"), "engine.verbosity")
    include_tags = _optional_string_set(section.get("include_tags"), "engine.include_tags")
    exclude_tags = _optional_string_set(section.get("exclude_tags"), "engine.exclude_tags")
    extra_args = _normalize_string_sequence(section.get("extra_args"), "engine.extra_args")
    return EngineConfiguration(
        root_path=_resolve_path(base_path, root_path_raw) if root_path_raw else None,
        include_tags=include_tags,
        exclude_tags=exclude_tags,
        verbosity=_parse_verbosity(verbosity_raw) if verbosity_raw else None,
        extra_args=extra_args,
    )


def _parse_verbosity(value: str) -> Verbosity:
    try:
        return Verbosity(value.lower())
    except ValueError as exc:
        allowed = ", ".join(level.value for level in Verbosity)
        raise ConfigurationError(f"engine.verbosity must be one of: {allowed}.") from exc


def _parse_smtp_section(value: Any) -> SMTPSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, "smtp")
    host = _require_non_empty_string(section.get("host"), "smtp.host")
    port = _require_positive_int(section.get("port"), "smtp.port")
    username = _optional_string(section.get("username"), "smtp.username")
    password = _optional_string(section.get("password"), "smtp.password")
    use_ssl = bool(section.get("use_ssl", False))
    use_starttls = section.get("use_starttls")
    use_starttls_bool = not use_ssl if use_starttls is None else bool(use_starttls)
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "smtp.timeout_seconds"
    )
    return SMTPSettings(
        host=host,
        port=port,
        username=username,
        password=password,
        use_starttls=use_starttls_bool,
        use_ssl=use_ssl,
        timeout_seconds=timeout_seconds,
    )


def _parse_session_section(value: Any) -> SessionSettings:
    if value is None:
        return SessionSettings()
    section = _require_mapping(value, "session")
    token_env = _optional_string(section.get("token_env"), "session.token_env")
    return SessionSettings(token_env=token_env or DEFAULT_TOKEN_ENV)


def _optional_string_set(value: Any, field_name: str) -> frozenset[str] | None:
    if value is None:
        return None
    return frozenset(_normalize_string_sequence(value, field_name))


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
