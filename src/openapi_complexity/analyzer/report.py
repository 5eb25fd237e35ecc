"""Assemble per-operation results into a document report."""

import logging
from pathlib import Path

from openapi_complexity.analyzer.extractor import extract_endpoints
from openapi_complexity.parser.base import EndpointAnalysis, OpenAPIAnalysisReport, ReportSummary
from openapi_complexity.parser.loader import load, load_file

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled API"
DEFAULT_VERSION = "N/A"


def aggregate(doc: dict, endpoints: list[EndpointAnalysis]) -> OpenAPIAnalysisReport:
    """Package document metadata with the analyzed endpoints."""
    info = doc.get("info")
    if not isinstance(info, dict):
        info = {}

    return OpenAPIAnalysisReport(
        title=str(info.get("title") or DEFAULT_TITLE),
        version=str(info.get("version") or DEFAULT_VERSION),
        endpoints=endpoints,
        total_endpoints=len(endpoints),
    )


def analyze_document(doc: dict) -> OpenAPIAnalysisReport:
    report = aggregate(doc, extract_endpoints(doc))
    logger.info("Analyzed %d endpoints in %s %s", report.total_endpoints, report.title, report.version)
    return report


def analyze_text(text: str) -> OpenAPIAnalysisReport:
    """Full pipeline on raw JSON/YAML text.

    Raises ParseError or InvalidSpecError when the text is rejected.
    """
    return analyze_document(load(text))


def analyze_file(file_path: Path) -> OpenAPIAnalysisReport:
    """Full pipeline on a .json/.yaml/.yml file."""
    return analyze_document(load_file(file_path))


def summarize(report: OpenAPIAnalysisReport) -> ReportSummary:
    """Totals and maxima across all endpoints of a report."""
    endpoints = report.endpoints
    return ReportSummary(
        total_endpoints=len(endpoints),
        total_request_fields=sum(e.request.field_count for e in endpoints),
        total_response_fields=sum(e.response.field_count for e in endpoints),
        max_request_depth=max((e.request.max_depth for e in endpoints), default=0),
        max_response_depth=max((e.response.max_depth for e in endpoints), default=0),
    )
