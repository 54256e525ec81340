"""Fan a result model out to report files and notification channels."""

from __future__ import annotations

import logging
import sys
import webbrowser
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

import click

from testrun_orchestrator.engine_configuration import Verbosity
from testrun_orchestrator.errors import SinkError
from testrun_orchestrator.notifications import NotificationTargets
from testrun_orchestrator.output_planning import OutputPlan, ReportFormat
from testrun_orchestrator.result_normalization import ResultModel
from testrun_orchestrator.results_writing import REPORT_WRITERS

from .sink_outcomes import SinkOutcome

logger = logging.getLogger(__name__)

ReportWriter = Callable[[ResultModel, Path], None]

HTML_VIEWER_SINK = "html-viewer"
MAIL_SINK = "mail"
TEAMS_CHANNEL_SINK = "teams-channel"
TEAMS_WEBHOOK_SINK = "teams-webhook"
CONSOLE_SINK = "console"


class Notifier(Protocol):  # pylint: disable=too-few-public-methods
    """Delivers a run summary to one notification channel."""

    def notify(self, result: ResultModel, targets: NotificationTargets) -> None: ...


def is_interactive_console() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def open_in_browser(path: Path) -> None:
    webbrowser.open(path.resolve().as_uri())


class SinkDispatcher:  # pylint: disable=too-many-instance-attributes
    """Invoke one handler per destination, isolating failures per sink.

    Sinks run in a fixed order: JSON, Markdown, CSV, Excel and HTML files,
    the HTML viewer, mail, Teams channel, Teams webhook and the console
    summary. A failing sink is logged and recorded; the next sink still runs.
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        *,
        report_writers: Mapping[ReportFormat, ReportWriter] | None = None,
        mail_notifier: Notifier | None = None,
        teams_channel_notifier: Notifier | None = None,
        teams_webhook_notifier: Notifier | None = None,
        open_in_viewer: Callable[[Path], None] | None = None,
        interactive_console: Callable[[], bool] | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self._report_writers = dict(report_writers or REPORT_WRITERS)
        self._mail_notifier = mail_notifier
        self._teams_channel_notifier = teams_channel_notifier
        self._teams_webhook_notifier = teams_webhook_notifier
        self._open_in_viewer = open_in_viewer or open_in_browser
        self._interactive_console = interactive_console or is_interactive_console
        self._echo = echo or click.echo

    # pylint: enable=too-many-arguments

    def dispatch(
        self,
        result: ResultModel,
        plan: OutputPlan,
        targets: NotificationTargets,
        *,
        verbosity: Verbosity,
        non_interactive: bool = False,
    ) -> tuple[SinkOutcome, ...]:
        outcomes: list[SinkOutcome] = []

        def deliver(sink_id: str, action: Callable[[], None]) -> bool:
            try:
                action()
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.warning("Sink %s failed: %s", sink_id, exc)
                outcomes.append(SinkOutcome.failure(sink_id, exc))
                return False
            logger.debug("Sink %s succeeded", sink_id)
            outcomes.append(SinkOutcome.success(sink_id))
            return True

        html_written = False
        for report_format, path in plan.destinations():
            written = deliver(report_format.value, self._file_writer(report_format, result, path))
            if report_format == ReportFormat.HTML:
                html_written = written

        if html_written and plan.html is not None and not non_interactive:
            if self._interactive_console():
                html_path = plan.html
                deliver(HTML_VIEWER_SINK, lambda: self._open_in_viewer(html_path))

        if targets.wants_mail:
            deliver(
                MAIL_SINK,
                lambda: self._notify(self._mail_notifier, MAIL_SINK, result, targets),
            )
        if targets.wants_teams_channel:
            deliver(
                TEAMS_CHANNEL_SINK,
                lambda: self._notify(
                    self._teams_channel_notifier, TEAMS_CHANNEL_SINK, result, targets
                ),
            )
        if targets.wants_teams_webhook:
            deliver(
                TEAMS_WEBHOOK_SINK,
                lambda: self._notify(
                    self._teams_webhook_notifier, TEAMS_WEBHOOK_SINK, result, targets
                ),
            )

        if verbosity == Verbosity.NONE:
            deliver(CONSOLE_SINK, lambda: self._echo(result.summary_line()))

        return tuple(outcomes)

    def _file_writer(
        self, report_format: ReportFormat, result: ResultModel, path: Path
    ) -> Callable[[], None]:
        writer = self._report_writers.get(report_format)

        def write() -> None:
            if writer is None:
                raise SinkError(f"No writer registered for {report_format.value} reports.")
            writer(result, path)
            logger.info("Wrote %s report to %s", report_format.value, path)

        return write

    @staticmethod
    def _notify(
        notifier: Notifier | None,
        sink_id: str,
        result: ResultModel,
        targets: NotificationTargets,
    ) -> None:
        if notifier is None:
            raise SinkError(f"The {sink_id} sink was requested but is not configured.")
        notifier.notify(result, targets)
