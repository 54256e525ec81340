"""Result summary email composition and SMTP delivery."""

from __future__ import annotations

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Protocol

from testrun_orchestrator.configuration import SMTPSettings
from testrun_orchestrator.errors import SinkError
from testrun_orchestrator.result_normalization import ResultModel

from .notification_targets import NotificationTargets
from .summary_rendering import render_summary_html, render_summary_text, summary_title


class SMTPClient(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for SMTP clients used by the mail notifier."""

    def send_message(self, settings: SMTPSettings, message: EmailMessage) -> None: ...


class SynchronousSMTPClient:  # pylint: disable=too-few-public-methods
    """Real SMTP client implementation using smtplib."""

    def send_message(self, settings: SMTPSettings, message: EmailMessage) -> None:
        recipients = _collect_recipients(message)
        smtp: smtplib.SMTP
        if settings.use_ssl:
            smtp = smtplib.SMTP_SSL(settings.host, settings.port, timeout=settings.timeout_seconds)
        else:
            smtp = smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout_seconds)
        try:
            smtp.ehlo()
            if settings.use_starttls and not settings.use_ssl:
                smtp.starttls()
                smtp.ehlo()
            if settings.username and settings.password:
                smtp.login(settings.username, settings.password)
            smtp.send_message(message, to_addrs=recipients)
        finally:
            smtp.quit()


def compose_results_email(
    result: ResultModel,
    targets: NotificationTargets,
    *,
    default_sender: str | None = None,
) -> EmailMessage:
    """Build the summary email for a run."""
    sender = targets.mail_sender or default_sender
    if not sender:
        raise SinkError("Mail sender is not set; pass --mail-user-id or configure smtp.username.")
    message = EmailMessage()
    message["Message-ID"] = make_msgid()
    message["From"] = sender
    message["To"] = ", ".join(targets.mail_recipients)
    message["Subject"] = summary_title(result)
    message.set_content(render_summary_text(result, targets.results_link))
    message.add_alternative(
        f"<html><body>{render_summary_html(result, targets.results_link)}</body></html>",
        subtype="html",
    )
    return message


class MailNotifier:  # pylint: disable=too-few-public-methods
    """Send the run summary to the configured recipients."""

    def __init__(self, smtp_client: SMTPClient, smtp_settings: SMTPSettings) -> None:
        self._smtp_client = smtp_client
        self._smtp_settings = smtp_settings

    def notify(self, result: ResultModel, targets: NotificationTargets) -> None:
        message = compose_results_email(
            result, targets, default_sender=self._smtp_settings.username
        )
        self._smtp_client.send_message(self._smtp_settings, message)


def _collect_recipients(message: EmailMessage) -> list[str]:
    recipients = []
    for header in ("To", "Cc", "Bcc"):
        if header in message:
            recipients.extend(
                [address.strip() for address in message[header].split(",") if address.strip()]
            )
    return recipients
