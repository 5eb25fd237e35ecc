"""Locate each operation's request and success-response schemas.

Handles OpenAPI 3.x (``requestBody`` / response ``content``) and
Swagger 2.0 (``in: body`` parameters / response ``schema``).
"""

import fnmatch
import logging
import re
from typing import Any

from openapi_complexity.analyzer.resolver import resolve_ref
from openapi_complexity.analyzer.schema import analyze_schema
from openapi_complexity.parser.base import EndpointAnalysis

logger = logging.getLogger(__name__)

METHODS = ("get", "post", "put", "patch", "delete", "options", "head")

PREFERRED_MEDIA_TYPES = ("application/json", "*/*")

SUCCESS_CODE = re.compile(r"2\d{2}")


def extract_endpoints(doc: dict) -> list[EndpointAnalysis]:
    """Analyze every operation under ``paths``, in declaration order."""
    paths = doc.get("paths") or {}
    if not isinstance(paths, dict):
        logger.debug("Ignoring non-mapping 'paths' section")
        return []

    endpoints = []
    for path, path_item in paths.items():
        if not path_item or not isinstance(path_item, dict):
            logger.debug("Skipping path item %s", path)
            continue

        for method in METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                if not operation:
                    continue
                operation = {}

            request = analyze_schema(doc, get_request_schema(doc, operation))
            response = analyze_schema(doc, get_response_schema(doc, operation))

            endpoints.append(
                EndpointAnalysis(
                    path=str(path),
                    method=method.upper(),
                    operation_id=_text(operation.get("operationId")),
                    summary=_text(operation.get("summary")),
                    request=request,
                    response=response,
                )
            )

    return endpoints


def get_request_schema(doc: dict, operation: dict) -> Any | None:
    """Request body schema, falling back to a Swagger 2.0 ``in: body`` parameter."""
    body = _deref(doc, operation.get("requestBody"))
    if body and isinstance(body.get("content"), dict) and body["content"]:
        return _media_schema(body["content"])

    params = operation.get("parameters")
    if isinstance(params, list):
        for param in params:
            param = _deref(doc, param)
            if param and param.get("in") == "body":
                return param.get("schema")
    return None


def get_response_schema(doc: dict, operation: dict) -> Any | None:
    """Schema of the lowest 2xx response that declares one."""
    responses = operation.get("responses")
    if not responses or not isinstance(responses, dict):
        return None

    # YAML decodes bare numeric keys (200:) as integers.
    by_code = {str(code): resp for code, resp in responses.items()}
    for code in sorted(c for c in by_code if SUCCESS_CODE.fullmatch(c)):
        response = _deref(doc, by_code[code])
        if not response:
            continue
        schema = None
        if isinstance(response.get("content"), dict) and response["content"]:
            schema = _media_schema(response["content"])
        if schema is None:
            schema = response.get("schema")
        if schema is not None:
            return schema
    return None


def filter_endpoints(endpoints: list[EndpointAnalysis], patterns: tuple[str, ...]) -> list[EndpointAnalysis]:
    """Keep endpoints matching any ``"METHOD /glob"`` or ``"/glob"`` pattern."""
    if not patterns:
        return list(endpoints)

    result = []
    for ep in endpoints:
        for pattern in patterns:
            method, _, path_glob = pattern.strip().rpartition(" ")
            if method and method.upper() != ep.method:
                continue
            if fnmatch.fnmatchcase(ep.path, path_glob):
                result.append(ep)
                break
    return result


def _media_schema(content: dict) -> Any | None:
    for media_type in PREFERRED_MEDIA_TYPES:
        if media_type in content:
            media = content[media_type]
            break
    else:
        media = next(iter(content.values()))
    if isinstance(media, dict):
        return media.get("schema")
    return None


def _deref(doc: dict, obj: Any) -> dict | None:
    """Follow a ``$ref`` on a request body, parameter or response object."""
    if isinstance(obj, dict) and isinstance(obj.get("$ref"), str):
        obj = resolve_ref(doc, obj["$ref"])
    return obj if isinstance(obj, dict) else None


def _text(value: Any) -> str | None:
    return None if value is None else str(value)
