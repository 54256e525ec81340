"""Check PyPI for a newer release of the orchestrator."""

from __future__ import annotations

import logging
from importlib import metadata

import requests
from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "testrun-orchestrator"
PYPI_URL = "https://pypi.org/pypi/{name}/json"
REQUEST_TIMEOUT_SECONDS = 5


def check_for_newer_version(
    distribution: str = DISTRIBUTION_NAME,
    *,
    http: requests.Session | None = None,
) -> str | None:
    """Log a warning when PyPI has a newer release than the installed one.

    Returns:
      The newer version string, or None when up to date or the check could
      not be completed.
    """
    try:
        installed = Version(metadata.version(distribution))
    except (metadata.PackageNotFoundError, InvalidVersion) as exc:
        logger.debug("Skipping version check: %s", exc)
        return None

    get = http.get if http is not None else requests.get
    try:
        response = get(PYPI_URL.format(name=distribution), timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        latest = Version(response.json()["info"]["version"])
    except (requests.RequestException, KeyError, ValueError, InvalidVersion) as exc:
        logger.debug("Version check failed: %s", exc)
        return None

    if latest > installed:
        logger.warning(
            "%s %s is available (installed: %s).", distribution, latest, installed
        )
        return str(latest)
    return None
