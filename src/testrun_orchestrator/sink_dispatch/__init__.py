"""Sink dispatch exports."""

from .sink_dispatcher import (
    CONSOLE_SINK,
    HTML_VIEWER_SINK,
    MAIL_SINK,
    TEAMS_CHANNEL_SINK,
    TEAMS_WEBHOOK_SINK,
    Notifier,
    SinkDispatcher,
    is_interactive_console,
    open_in_browser,
)
from .sink_outcomes import SinkOutcome

__all__ = [
    "CONSOLE_SINK",
    "HTML_VIEWER_SINK",
    "MAIL_SINK",
    "TEAMS_CHANNEL_SINK",
    "TEAMS_WEBHOOK_SINK",
    "Notifier",
    "SinkDispatcher",
    "SinkOutcome",
    "is_interactive_console",
    "open_in_browser",
]
