"""Run controller: preflight, resolution, execution and dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from testrun_orchestrator.engine_configuration import build_engine_configuration
from testrun_orchestrator.errors import PreflightError
from testrun_orchestrator.notifications import validate_webhook_uri
from testrun_orchestrator.output_planning import resolve_output_plan, validate_output_request
from testrun_orchestrator.remote_session import SessionHandle
from testrun_orchestrator.result_normalization import ResultModel, normalize_results
from testrun_orchestrator.sink_dispatch import SinkDispatcher, SinkOutcome
from testrun_orchestrator.tag_filtering import resolve_tag_filter
from testrun_orchestrator.test_engine import EngineProtocol
from testrun_orchestrator.test_engine.pytest_engine import PytestEngine

from .run_contracts import ResolvedRun, RunRequest, RunState
from .version_check import check_for_newer_version

logger = logging.getLogger(__name__)

TEST_FILE_PATTERNS = ("test_*.py", "*_test.py")


class RunController:
    """Sequence one run through the pipeline.

    ``state`` tracks how far the last run got and ``sink_outcomes`` holds the
    per-sink results of the last dispatch. Fatal conditions raise
    ``ValidationError``, ``PreflightError`` or ``EngineError`` and leave the
    controller in ``RunState.DONE`` without invoking the engine (except for
    ``EngineError``, which comes from the engine itself).
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        *,
        session: SessionHandle,
        engine: EngineProtocol | None = None,
        dispatcher: SinkDispatcher | None = None,
        version_checker: Callable[[], object] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session = session
        self._engine = engine or PytestEngine()
        self._dispatcher = dispatcher or SinkDispatcher()
        self._version_checker = version_checker or check_for_newer_version
        self._clock = clock or datetime.now
        self.state = RunState.IDLE
        self.sink_outcomes: tuple[SinkOutcome, ...] = ()

    # pylint: enable=too-many-arguments

    def run(self, request: RunRequest) -> ResultModel | None:
        """Execute one run and return the result model when pass-through is set."""
        self.state = RunState.IDLE
        self.sink_outcomes = ()
        try:
            self._session.reset()
            self._preflight(request)
            self._advance(RunState.PREFLIGHT_CHECKED)

            resolved = self._resolve(request)
            self._advance(RunState.CONFIG_RESOLVED)

            raw = self._engine.run(resolved.engine_configuration)
            self._advance(RunState.EXECUTED)
            if raw.is_empty:
                logger.info("The engine reported no tests; nothing to report.")
                return None

            result = normalize_results(raw, resolved.engine_configuration)
            self.sink_outcomes = self._dispatcher.dispatch(
                result,
                resolved.output_plan,
                request.notifications,
                verbosity=request.verbosity,
                non_interactive=request.non_interactive,
            )
            self._advance(RunState.RESULTS_DISPATCHED)
            failed_sinks = [
                outcome.sink_id for outcome in self.sink_outcomes if not outcome.succeeded
            ]
            if failed_sinks:
                logger.warning("Results not delivered to: %s", ", ".join(failed_sinks))
            return result if request.pass_through else None
        finally:
            self._advance(RunState.DONE)

    def _advance(self, state: RunState) -> None:
        logger.debug("Run state %s -> %s", self.state.value, state.value)
        self.state = state

    def _preflight(self, request: RunRequest) -> None:
        if not request.skip_version_check:
            self._version_checker()
        if not request.skip_connection_check and not self._session.is_connected():
            raise PreflightError(
                "No connected session is available. Provide an access token "
                "or run with --skip-connection-check."
            )
        webhook_uri = request.notifications.teams_webhook_uri
        if webhook_uri:
            validate_webhook_uri(webhook_uri)

    def _resolve(self, request: RunRequest) -> ResolvedRun:
        validate_output_request(request.output)
        base = request.engine_configuration
        # Configured tags stand in for tags the run does not give.
        tag_filter = resolve_tag_filter(
            request.include_tags or (base.include_tags if base else None) or (),
            request.exclude_tags or (base.exclude_tags if base else None) or (),
        )
        engine_configuration = build_engine_configuration(
            request.engine_configuration,
            path=request.path,
            tag_filter=tag_filter,
            verbosity=request.verbosity,
        )
        _check_test_root(engine_configuration.root_path)
        output_plan = resolve_output_plan(request.output, now=self._clock)
        logger.info(
            "Resolved run: root=%s include=%s exclude=%s",
            engine_configuration.root_path,
            sorted(engine_configuration.include_tags or ()),
            sorted(engine_configuration.exclude_tags or ()),
        )
        return ResolvedRun(
            output_plan=output_plan,
            tag_filter=tag_filter,
            engine_configuration=engine_configuration,
        )


def execute_test_run(
    request: RunRequest,
    *,
    session: SessionHandle,
    engine: EngineProtocol | None = None,
    dispatcher: SinkDispatcher | None = None,
    version_checker: Callable[[], object] | None = None,
) -> ResultModel | None:
    """Execute one full run with a fresh controller."""
    controller = RunController(
        session=session,
        engine=engine,
        dispatcher=dispatcher,
        version_checker=version_checker,
    )
    return controller.run(request)


def _check_test_root(root_path: Path | None) -> None:
    if root_path is None:
        raise PreflightError("No test path was resolved.")
    if root_path.is_file():
        raise PreflightError(
            f"The path '{root_path}' is a file. Point it at a folder that contains test files."
        )
    if not root_path.exists():
        raise PreflightError(f"The path '{root_path}' does not exist.")
    if not any(
        next(root_path.rglob(pattern), None) is not None for pattern in TEST_FILE_PATTERNS
    ):
        raise PreflightError(
            f"No test files ({' or '.join(TEST_FILE_PATTERNS)}) were found in '{root_path}'."
        )
