"""Command line interface entry point."""

from __future__ import annotations

import contextlib
import functools
import json
import sys

import click

from testrun_orchestrator.configuration import Configuration, load_configuration
from testrun_orchestrator.engine_configuration import Verbosity
from testrun_orchestrator.errors import OrchestratorError
from testrun_orchestrator.logging_config import setup_logging
from testrun_orchestrator.notifications import (
    MailNotifier,
    NotificationTargets,
    SynchronousSMTPClient,
    TeamsChannelNotifier,
    TeamsWebhookNotifier,
)
from testrun_orchestrator.output_planning import OutputRequest
from testrun_orchestrator.remote_session import BearerTokenSession
from testrun_orchestrator.run_execution import RunRequest, execute_test_run
from testrun_orchestrator.sink_dispatch import SinkDispatcher


class CliError(Exception):
    """Custom CLI error."""


_OUTPUT_FILE_TYPE = click.Path(dir_okay=False, path_type=str)


@click.command(name="testrun", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="testrun-orchestrator")
@click.argument("path", required=False, type=click.Path(path_type=str))
@click.option("--tag", "tags", multiple=True, help="Only run tests with this marker (repeatable).")
@click.option(
    "--exclude-tag", "exclude_tags", multiple=True, help="Skip tests with this marker (repeatable)."
)
@click.option("--output-html-file", type=_OUTPUT_FILE_TYPE, help="HTML report path (.html).")
@click.option(
    "--output-markdown-file", type=_OUTPUT_FILE_TYPE, help="Markdown report path (.md)."
)
@click.option("--output-json-file", type=_OUTPUT_FILE_TYPE, help="JSON report path (.json).")
@click.option("--output-csv-file", type=_OUTPUT_FILE_TYPE, help="CSV report path (.csv).")
@click.option("--output-excel-file", type=_OUTPUT_FILE_TYPE, help="Excel report path (.xlsx).")
@click.option(
    "--output-folder",
    type=click.Path(file_okay=False, path_type=str),
    help="Folder for all reports; overrides the individual report paths.",
)
@click.option(
    "--output-folder-file-name",
    help="Base file name inside --output-folder [default: TestResults-<timestamp>].",
)
@click.option("--export-csv", is_flag=True, default=False, help="Also write a CSV report.")
@click.option("--export-excel", is_flag=True, default=False, help="Also write an Excel report.")
@click.option(
    "--verbosity",
    type=click.Choice([level.value for level in Verbosity], case_sensitive=False),
    default=None,
    help="pytest output level; 'none' prints a one-line summary at the end "
    "[default: engine.verbosity from --config, else none].",
)
@click.option(
    "--non-interactive",
    is_flag=True,
    default=False,
    help="Never open the HTML report in a browser.",
)
@click.option(
    "--pass-thru",
    "pass_through",
    is_flag=True,
    default=False,
    help="Print the results as JSON on stdout; all other output goes to stderr.",
)
@click.option("--mail-recipient", "mail_recipients", multiple=True, help="Email the summary.")
@click.option("--mail-user-id", help="Sender address for the summary email.")
@click.option("--mail-test-results-uri", help="Link to the full results in notifications.")
@click.option("--teams-team-id", help="Team that owns --teams-channel-id.")
@click.option("--teams-channel-id", help="Teams channel to post the summary to.")
@click.option("--teams-channel-webhook-uri", help="Teams incoming webhook URI.")
@click.option(
    "--skip-connection-check",
    is_flag=True,
    default=False,
    help="Run without a connected remote session.",
)
@click.option(
    "--skip-version-check", is_flag=True, default=False, help="Do not look for a newer release."
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=str),
    help="YAML/JSON configuration file (engine defaults, SMTP, session).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level [default: $TESTRUN_LOG_LEVEL or WARNING].",
)
# pylint: disable-next=too-many-arguments,too-many-locals
def cli(
    path: str | None,
    tags: tuple[str, ...],
    exclude_tags: tuple[str, ...],
    output_html_file: str | None,
    output_markdown_file: str | None,
    output_json_file: str | None,
    output_csv_file: str | None,
    output_excel_file: str | None,
    output_folder: str | None,
    output_folder_file_name: str | None,
    export_csv: bool,
    export_excel: bool,
    verbosity: str | None,
    non_interactive: bool,
    pass_through: bool,
    mail_recipients: tuple[str, ...],
    mail_user_id: str | None,
    mail_test_results_uri: str | None,
    teams_team_id: str | None,
    teams_channel_id: str | None,
    teams_channel_webhook_uri: str | None,
    skip_connection_check: bool,
    skip_version_check: bool,
    config_path: str | None,
    log_level: str | None,
) -> None:
    """Run the pytest suite under PATH and deliver the results."""
    setup_logging(log_level)
    try:
        configuration = load_configuration(config_path) if config_path else Configuration()
    except OrchestratorError as exc:
        raise CliError(str(exc)) from exc

    session = BearerTokenSession.from_environment(configuration.session.token_env)
    dispatcher = SinkDispatcher(
        mail_notifier=(
            MailNotifier(SynchronousSMTPClient(), configuration.smtp)
            if configuration.smtp
            else None
        ),
        teams_channel_notifier=TeamsChannelNotifier(session),
        teams_webhook_notifier=TeamsWebhookNotifier(),
        echo=functools.partial(click.echo, err=True) if pass_through else None,
    )
    request = RunRequest(
        path=path,
        include_tags=frozenset(tags),
        exclude_tags=frozenset(exclude_tags),
        output=OutputRequest(
            html_file=output_html_file,
            markdown_file=output_markdown_file,
            json_file=output_json_file,
            csv_file=output_csv_file,
            excel_file=output_excel_file,
            folder=output_folder,
            folder_file_name=output_folder_file_name,
            export_csv=export_csv,
            export_excel=export_excel,
        ),
        engine_configuration=configuration.engine,
        verbosity=_resolve_verbosity(verbosity, configuration),
        non_interactive=non_interactive,
        pass_through=pass_through,
        notifications=NotificationTargets(
            mail_recipients=mail_recipients,
            mail_sender=mail_user_id,
            results_link=mail_test_results_uri,
            teams_team_id=teams_team_id,
            teams_channel_id=teams_channel_id,
            teams_webhook_uri=teams_channel_webhook_uri,
        ),
        skip_connection_check=skip_connection_check,
        skip_version_check=skip_version_check,
    )
    # With --pass-thru stdout carries only the JSON result; pytest output goes to stderr.
    redirect: contextlib.AbstractContextManager[object] = (
        contextlib.redirect_stdout(sys.stderr) if pass_through else contextlib.nullcontext()
    )
    try:
        with redirect:
            result = execute_test_run(request, session=session, dispatcher=dispatcher)
    except OrchestratorError as exc:
        raise CliError(str(exc)) from exc
    if result is not None:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


def _resolve_verbosity(verbosity: str | None, configuration: Configuration) -> Verbosity:
    if verbosity:
        return Verbosity(verbosity.lower())
    if configuration.engine and configuration.engine.verbosity:
        return configuration.engine.verbosity
    return Verbosity.NONE


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
