"""Notification exports."""

from .mail_notification import (
    MailNotifier,
    SMTPClient,
    SynchronousSMTPClient,
    compose_results_email,
)
from .notification_targets import NotificationTargets
from .teams_notification import (
    TeamsChannelNotifier,
    TeamsWebhookNotifier,
    build_channel_message,
    build_webhook_card,
    validate_webhook_uri,
)

__all__ = [
    "MailNotifier",
    "NotificationTargets",
    "SMTPClient",
    "SynchronousSMTPClient",
    "TeamsChannelNotifier",
    "TeamsWebhookNotifier",
    "build_channel_message",
    "build_webhook_card",
    "compose_results_email",
    "validate_webhook_uri",
]
