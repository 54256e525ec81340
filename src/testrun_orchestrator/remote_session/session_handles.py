"""Remote session handles passed explicitly through a run."""

from __future__ import annotations

import logging
import os
from typing import Protocol

import requests

logger = logging.getLogger(__name__)

USER_AGENT = "testrun-orchestrator"


class SessionHandle(Protocol):
    """Connection to the remote system a run reports to."""

    def is_connected(self) -> bool: ...

    def reset(self) -> None: ...


class BearerTokenSession:
    """Session authorized with an already-issued bearer token.

    The HTTP session is built lazily and dropped on reset, so every run
    starts from a clean connection.
    """

    def __init__(self, token: str | None) -> None:
        self._token = token
        self._http: requests.Session | None = None

    @classmethod
    def from_environment(cls, variable: str) -> BearerTokenSession:
        return cls(os.environ.get(variable) or None)

    def is_connected(self) -> bool:
        return bool(self._token)

    def reset(self) -> None:
        if self._http is not None:
            logger.debug("Closing cached HTTP session")
            self._http.close()
        self._http = None

    @property
    def http(self) -> requests.Session:
        if not self._token:
            raise RuntimeError("No access token available for the remote session.")
        if self._http is None:
            self._http = requests.Session()
            self._http.headers.update(
                {
                    "Authorization": f"Bearer {self._token}",
                    "User-Agent": USER_AGENT,
                    "Accept": "application/json",
                }
            )
        return self._http
