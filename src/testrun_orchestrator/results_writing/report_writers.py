"""Text report writers: JSON, Markdown, CSV and HTML."""

from __future__ import annotations

import csv
import html
import json
from pathlib import Path

from testrun_orchestrator.result_normalization import CaseOutcome, CaseStatus, ResultModel

_STATUS_ICONS = {
    CaseStatus.PASSED: "✅",
    CaseStatus.FAILED: "❌",
    CaseStatus.SKIPPED: "⏭️",
    CaseStatus.NOT_RUN: "➖",
}


def write_json_report(result: ResultModel, output_path: Path | str) -> None:
    """Write the full result model, failure detail included, as JSON."""
    text = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    _write_text(output_path, text + "\n")


def write_markdown_report(result: ResultModel, output_path: Path | str) -> None:
    _write_text(output_path, render_markdown(result))


def write_csv_report(result: ResultModel, output_path: Path | str) -> None:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(("ID", "Name", "Tags", "Result", "Duration", "Failure"))
        for outcome in result.outcomes:
            writer.writerow(
                (
                    outcome.identifier,
                    outcome.name,
                    ";".join(outcome.tags),
                    outcome.status.value,
                    f"{outcome.duration:.3f}",
                    outcome.failure.message if outcome.failure else "",
                )
            )


def write_html_report(result: ResultModel, output_path: Path | str) -> None:
    _write_text(output_path, render_html(result))


def render_markdown(result: ResultModel) -> str:
    """Render the summary and outcome table as Markdown."""
    lines = [
        "# Test results",
        "",
        f"Run at {result.created_at.isoformat()} against `{result.root_path}`.",
        "",
        "| Total | Passed | Failed | Skipped | Not run |",
        "| ---: | ---: | ---: | ---: | ---: |",
        f"| {result.total} | {result.passed} | {result.failed} | {result.skipped} "
        f"| {result.not_run} |",
        "",
        "| Test | Tags | Result |",
        "| --- | --- | --- |",
    ]
    for outcome in result.outcomes:
        lines.append(
            f"| {_escape_cell(outcome.identifier)} | {_escape_cell(', '.join(outcome.tags))} "
            f"| {_STATUS_ICONS[outcome.status]} {outcome.status.value} |"
        )

    failures = [outcome for outcome in result.outcomes if outcome.failure is not None]
    if failures:
        lines.extend(["", "## Failures"])
        for outcome in failures:
            lines.extend(
                ["", f"### {outcome.identifier}", "", "```", _failure_body(outcome), "```"]
            )
    return "\n".join(lines) + "\n"


def render_html(result: ResultModel) -> str:
    """Render a self-contained HTML page for the result model."""
    rows = "\n".join(
        "<tr class=\"{css}\"><td>{identifier}</td><td>{tags}</td><td>{status}</td>"
        "<td>{duration:.3f}</td><td><pre>{failure}</pre></td></tr>".format(
            css=outcome.status.value.lower(),
            identifier=html.escape(outcome.identifier),
            tags=html.escape(", ".join(outcome.tags)),
            status=outcome.status.value,
            duration=outcome.duration,
            failure=html.escape(_failure_body(outcome)) if outcome.failure else "",
        )
        for outcome in result.outcomes
    )
    return _HTML_TEMPLATE.format(
        created_at=html.escape(result.created_at.isoformat()),
        root_path=html.escape(result.root_path),
        summary=html.escape(result.summary_line()),
        total=result.total,
        not_run=result.not_run,
        rows=rows,
    )


_HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Test results</title>
<style>
body {{ font-family: sans-serif; margin: 2em; }}
table {{ border-collapse: collapse; width: 100%; }}
td, th {{ border: 1px solid #ccc; padding: 4px 8px; text-align: left; vertical-align: top; }}
tr.failed {{ background: #fde2e2; }}
tr.passed {{ background: #e3f6e5; }}
tr.skipped, tr.notrun {{ background: #f3f3f3; }}
pre {{ margin: 0; white-space: pre-wrap; }}
</style>
</head>
<body>
<h1>Test results</h1>
<p>Run at {created_at} against <code>{root_path}</code>.</p>
<p><strong>{summary}</strong>, Not run: {not_run}, Total: {total}</p>
<table>
<thead>
<tr><th>Test</th><th>Tags</th><th>Result</th><th>Duration (s)</th><th>Failure</th></tr>
</thead>
<tbody>
{rows}
</tbody>
</table>
</body>
</html>
"""


def _failure_body(outcome: CaseOutcome) -> str:
    failure = outcome.failure
    if failure is None:
        return ""
    return failure.traceback or failure.message or ""


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def _write_text(output_path: Path | str, text: str) -> None:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
