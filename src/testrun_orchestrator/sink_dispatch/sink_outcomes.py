"""Sink dispatch entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SinkOutcome:
    """Outcome of delivering a run to one sink."""

    sink_id: str
    succeeded: bool
    error_message: str | None = None

    @staticmethod
    def success(sink_id: str) -> SinkOutcome:
        return SinkOutcome(sink_id=sink_id, succeeded=True)

    @staticmethod
    def failure(sink_id: str, error: Exception) -> SinkOutcome:
        return SinkOutcome(sink_id=sink_id, succeeded=False, error_message=str(error))
