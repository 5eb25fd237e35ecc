"""CLI entry point for openapi-complexity."""

import json
import logging
from pathlib import Path

import click

from openapi_complexity.analyzer.extractor import filter_endpoints
from openapi_complexity.analyzer.report import analyze_file, summarize
from openapi_complexity.errors import AnalysisError
from openapi_complexity.parser.base import OpenAPIAnalysisReport, ReportSummary

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

TABLE_HEADERS = ("Method", "Path", "Req Fields", "Req Depth", "Resp Fields", "Resp Depth")


def _load_report(doc_path: Path, patterns: tuple[str, ...] = ()) -> OpenAPIAnalysisReport:
    """Analyze a document, turning rejected input into a CLI error."""
    try:
        report = analyze_file(doc_path)
    except AnalysisError as e:
        raise click.ClickException(f"{doc_path}: {e.message}") from e

    if patterns:
        endpoints = filter_endpoints(report.endpoints, patterns)
        report = report.model_copy(update={"endpoints": endpoints, "total_endpoints": len(endpoints)})
    return report


def _render_table(report: OpenAPIAnalysisReport) -> str:
    rows = [
        (
            ep.method,
            f"{ep.path}  ({ep.summary})" if ep.summary else ep.path,
            str(ep.request.field_count),
            str(ep.request.max_depth),
            str(ep.response.field_count),
            str(ep.response.max_depth),
        )
        for ep in report.endpoints
    ]
    widths = [max(len(r[i]) for r in [TABLE_HEADERS, *rows]) for i in range(len(TABLE_HEADERS))]

    def fmt(row: tuple[str, ...]) -> str:
        cells = [row[0].ljust(widths[0]), row[1].ljust(widths[1])]
        cells += [cell.rjust(width) for cell, width in zip(row[2:], widths[2:])]
        return "  ".join(cells).rstrip()

    lines = [fmt(TABLE_HEADERS), "  ".join("-" * w for w in widths)]
    lines += [fmt(row) for row in rows]
    return "\n".join(lines)


def _render_summary(report: OpenAPIAnalysisReport, summary: ReportSummary) -> str:
    return "\n".join([
        f"{report.title} (version {report.version})",
        f"  Endpoints:             {summary.total_endpoints}",
        f"  Total request fields:  {summary.total_request_fields}",
        f"  Total response fields: {summary.total_response_fields}",
        f"  Max request depth:     {summary.max_request_depth}",
        f"  Max response depth:    {summary.max_response_depth}",
    ])


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Report saved to {output}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--log-level",
    default="WARNING",
    envvar="OPENAPI_COMPLEXITY_LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (ignored with --verbose).",
)
def main(verbose: bool, log_level: str):
    """OpenAPI Complexity — field counts and nesting depth per endpoint."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="table", type=click.Choice(["table", "json"]), help="Output format.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the report to this file.")
@click.option("--endpoint", "endpoints", multiple=True, help='Only include matching endpoints, e.g. "GET /pets/*" or "/users".')
def analyze(doc_path: Path, fmt: str, output: Path | None, endpoints: tuple[str, ...]):
    """Analyze request/response complexity of every endpoint."""
    report = _load_report(doc_path, endpoints)
    summary = summarize(report)

    if fmt == "json":
        data = report.model_dump(mode="json", by_alias=True)
        data["summary"] = summary.model_dump(mode="json", by_alias=True)
        text = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        text = _render_table(report) + "\n\n" + _render_summary(report, summary)

    _emit(text, output)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def summary(doc_path: Path):
    """Print document-wide totals only."""
    report = _load_report(doc_path)
    click.echo(_render_summary(report, summarize(report)))
