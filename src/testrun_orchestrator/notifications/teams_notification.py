"""Microsoft Teams notifications through Graph or an incoming webhook."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlparse

import requests

from testrun_orchestrator.errors import SinkError, ValidationError
from testrun_orchestrator.remote_session import BearerTokenSession
from testrun_orchestrator.result_normalization import ResultModel

from .notification_targets import NotificationTargets
from .summary_rendering import render_summary_html, summary_title

logger = logging.getLogger(__name__)

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
REQUEST_TIMEOUT_SECONDS = 30


def validate_webhook_uri(uri: str, parameter: str = "teams_channel_webhook_uri") -> None:
    """Reject anything that is not an absolute http(s) URI."""
    parsed = urlparse(uri)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(parameter, f"'{uri}' is not a valid absolute http(s) URI.")


def build_channel_message(result: ResultModel, results_link: str | None) -> dict[str, Any]:
    return {"body": {"contentType": "html", "content": render_summary_html(result, results_link)}}


def build_webhook_card(result: ResultModel, results_link: str | None) -> dict[str, Any]:
    """MessageCard payload accepted by Teams incoming webhooks."""
    card: dict[str, Any] = {
        "@type": "MessageCard",
        "@context": "https://schema.org/extensions",
        "summary": summary_title(result),
        "themeColor": "C4314B" if result.failed else "2EB886",
        "title": summary_title(result),
        "sections": [
            {
                "facts": [
                    {"name": "Total", "value": str(result.total)},
                    {"name": "Passed", "value": str(result.passed)},
                    {"name": "Failed", "value": str(result.failed)},
                    {"name": "Skipped", "value": str(result.skipped)},
                    {"name": "Not run", "value": str(result.not_run)},
                ]
            }
        ],
    }
    if results_link:
        card["potentialAction"] = [
            {
                "@type": "OpenUri",
                "name": "View full results",
                "targets": [{"os": "default", "uri": results_link}],
            }
        ]
    return card


class TeamsChannelNotifier:  # pylint: disable=too-few-public-methods
    """Post the run summary to a channel through Microsoft Graph."""

    def __init__(self, session: BearerTokenSession) -> None:
        self._session = session

    def notify(self, result: ResultModel, targets: NotificationTargets) -> None:
        if not self._session.is_connected():
            raise SinkError("Posting to a Teams channel needs a connected session.")
        url = (
            f"{GRAPH_BASE_URL}/teams/{quote(targets.teams_team_id or '', safe='')}"
            f"/channels/{quote(targets.teams_channel_id or '', safe='')}/messages"
        )
        payload = build_channel_message(result, targets.results_link)
        try:
            response = self._session.http.post(url, json=payload, timeout=REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SinkError(f"Failed to post to Teams channel: {exc}") from exc
        logger.info("Posted results to Teams channel %s", targets.teams_channel_id)


class TeamsWebhookNotifier:  # pylint: disable=too-few-public-methods
    """Post the run summary to a Teams incoming webhook."""

    def __init__(self, http: requests.Session | None = None) -> None:
        self._http = http

    def notify(self, result: ResultModel, targets: NotificationTargets) -> None:
        payload = build_webhook_card(result, targets.results_link)
        post = self._http.post if self._http is not None else requests.post
        try:
            response = post(
                targets.teams_webhook_uri or "", json=payload, timeout=REQUEST_TIMEOUT_SECONDS
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SinkError(f"Failed to post to Teams webhook: {exc}") from exc
        logger.info("Posted results to Teams webhook")
