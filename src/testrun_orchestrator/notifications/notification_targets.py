"""Notification target entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationTargets:
    """Where run summaries are delivered besides the report files."""

    mail_recipients: tuple[str, ...] = ()
    mail_sender: str | None = None
    results_link: str | None = None
    teams_team_id: str | None = None
    teams_channel_id: str | None = None
    teams_webhook_uri: str | None = None

    @property
    def wants_mail(self) -> bool:
        return bool(self.mail_recipients)

    @property
    def wants_teams_channel(self) -> bool:
        return bool(self.teams_team_id and self.teams_channel_id)

    @property
    def wants_teams_webhook(self) -> bool:
        return bool(self.teams_webhook_uri)
