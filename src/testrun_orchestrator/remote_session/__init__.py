"""Remote session exports."""

from .session_handles import BearerTokenSession, SessionHandle

__all__ = ["BearerTokenSession", "SessionHandle"]
