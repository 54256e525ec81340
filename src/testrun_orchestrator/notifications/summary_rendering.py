"""Short HTML summaries shared by the mail and Teams notifiers."""

from __future__ import annotations

import html

from testrun_orchestrator.result_normalization import CaseStatus, ResultModel

MAX_LISTED_FAILURES = 20


def summary_title(result: ResultModel) -> str:
    verdict = "failed" if result.failed else "passed"
    return f"Test run {verdict}: {result.summary_line()}"


def render_summary_html(result: ResultModel, results_link: str | None) -> str:
    """Summary counts, failing tests and an optional link to the full report."""
    parts = [
        f"<h2>{html.escape(summary_title(result))}</h2>",
        "<table>",
        f"<tr><td>Total</td><td>{result.total}</td></tr>",
        f"<tr><td>Passed</td><td>{result.passed}</td></tr>",
        f"<tr><td>Failed</td><td>{result.failed}</td></tr>",
        f"<tr><td>Skipped</td><td>{result.skipped}</td></tr>",
        f"<tr><td>Not run</td><td>{result.not_run}</td></tr>",
        "</table>",
    ]
    failed = [outcome for outcome in result.outcomes if outcome.status == CaseStatus.FAILED]
    if failed:
        parts.append("<p>Failed tests:</p><ul>")
        parts.extend(
            f"<li>{html.escape(outcome.identifier)}</li>"
            for outcome in failed[:MAX_LISTED_FAILURES]
        )
        if len(failed) > MAX_LISTED_FAILURES:
            parts.append(f"<li>and {len(failed) - MAX_LISTED_FAILURES} more</li>")
        parts.append("</ul>")
    if results_link:
        link = html.escape(results_link, quote=True)
        parts.append(f'<p><a href="{link}">View full results</a></p>')
    return "".join(parts)


def render_summary_text(result: ResultModel, results_link: str | None) -> str:
    lines = [
        summary_title(result),
        "",
        f"Total: {result.total}",
        f"Passed: {result.passed}",
        f"Failed: {result.failed}",
        f"Skipped: {result.skipped}",
        f"Not run: {result.not_run}",
    ]
    failed = [outcome for outcome in result.outcomes if outcome.status == CaseStatus.FAILED]
    if failed:
        lines.extend(["", "Failed tests:"])
        lines.extend(f"- {outcome.identifier}" for outcome in failed[:MAX_LISTED_FAILURES])
    if results_link:
        lines.extend(["", f"Full results: {results_link}"])
    return "\n".join(lines)
