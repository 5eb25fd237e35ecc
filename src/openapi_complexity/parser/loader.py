"""Load OpenAPI / Swagger documents from JSON or YAML text."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from openapi_complexity.errors import InvalidSpecError, ParseError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def load(text: str) -> dict[str, Any]:
    """Decode document text and check it is an OpenAPI/Swagger document.

    JSON is tried first; anything that is not strict JSON is handed to the
    YAML loader.
    """
    try:
        doc = json.loads(text, parse_constant=_reject_constant)
    except (json.JSONDecodeError, ValueError):
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParseError("unreadable document") from e
        logger.debug("Decoded document as YAML")
    else:
        logger.debug("Decoded document as JSON")

    if not isinstance(doc, dict) or not (doc.get("openapi") or doc.get("swagger")):
        raise InvalidSpecError("not an OpenAPI/Swagger document")

    return doc


def _reject_constant(name: str) -> float:
    # NaN, Infinity and -Infinity are not strict JSON
    raise ValueError(f"non-standard JSON constant: {name}")


def load_file(file_path: Path) -> dict[str, Any]:
    """Read a .json/.yaml/.yml file and decode it with :func:`load`."""
    file_path = Path(file_path)
    if file_path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ParseError(f"unsupported file type: {file_path.suffix or '(none)'}")

    logger.info("Loading %s", file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError("unreadable document") from e
    return load(text)
