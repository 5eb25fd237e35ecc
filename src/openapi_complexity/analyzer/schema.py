"""Recursive field-count / nesting-depth analysis of a single schema.

Depth grows by one when descending into array items, object properties or
``additionalProperties``; resolving a ``$ref`` or entering a composition
branch keeps the current depth.

The ``visited`` set holds the ``$ref`` pointers seen along the current path
only, together with the ``id()`` of every inline mapping on that path (a YAML
anchor can make a mapping contain itself). It is a frozenset, so every branch
gets its own copy and a node reached from two sibling branches is not mistaken
for a cycle.
"""

import logging
from typing import Any

from openapi_complexity.analyzer.resolver import resolve_ref
from openapi_complexity.parser.base import SchemaAnalysis

logger = logging.getLogger(__name__)

EMPTY = SchemaAnalysis(field_count=0, max_depth=0)

STRUCTURAL_TYPES = ("object", "array")


def analyze_schema(
    doc: dict,
    schema: Any,
    visited: frozenset = frozenset(),
    depth: int = 1,
) -> SchemaAnalysis:
    """Count the fields of ``schema`` and the deepest nesting level it reaches.

    Malformed or unrecognized fragments contribute nothing; this never raises.
    """
    if not schema or not isinstance(schema, dict):
        return EMPTY

    if id(schema) in visited:
        logger.debug("Self-containing schema node at depth %d", depth)
        return SchemaAnalysis(field_count=0, max_depth=depth)
    visited = visited | {id(schema)}

    if schema.get("$ref"):
        return _analyze_ref(doc, schema["$ref"], visited, depth)

    if isinstance(schema.get("allOf"), list):
        results = _analyze_branches(doc, schema["allOf"], visited, depth)
        return SchemaAnalysis(
            field_count=sum(r.field_count for r in results),
            max_depth=max([depth] + [r.max_depth for r in results]),
        )

    variants = _variants(schema)
    if variants is not None:
        results = _analyze_branches(doc, variants, visited, depth)
        return SchemaAnalysis(
            field_count=max([0] + [r.field_count for r in results]),
            max_depth=max([depth] + [r.max_depth for r in results]),
        )

    if schema.get("type") == "array" and schema.get("items") is not None:
        # Arrays are transparent: the items' result is the array's result.
        return analyze_schema(doc, schema["items"], visited, depth + 1)

    properties = schema.get("properties")
    if schema.get("type") == "object" or isinstance(properties, dict):
        return _analyze_object(doc, schema, visited, depth)

    return EMPTY


def _analyze_ref(doc: dict, ref: Any, visited: frozenset, depth: int) -> SchemaAnalysis:
    if not isinstance(ref, str):
        return EMPTY
    if ref in visited:
        logger.debug("Cycle on %s at depth %d", ref, depth)
        return SchemaAnalysis(field_count=0, max_depth=depth)
    return analyze_schema(doc, resolve_ref(doc, ref), visited | {ref}, depth)


def _variants(schema: dict) -> list | None:
    for key in ("oneOf", "anyOf"):
        if isinstance(schema.get(key), list):
            return schema[key]
    return None


def _analyze_branches(
    doc: dict, branches: list, visited: frozenset, depth: int
) -> list[SchemaAnalysis]:
    return [analyze_schema(doc, branch, visited, depth) for branch in branches]


def _analyze_object(doc: dict, schema: dict, visited: frozenset, depth: int) -> SchemaAnalysis:
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    total_fields = len(properties)
    max_depth = depth if properties else 0

    for prop_schema in properties.values():
        result = analyze_schema(doc, prop_schema, visited, depth + 1)
        if _is_structural(prop_schema):
            total_fields += result.field_count
        max_depth = max(max_depth, result.max_depth)

    additional = schema.get("additionalProperties")
    if isinstance(additional, dict):
        result = analyze_schema(doc, additional, visited, depth + 1)
        total_fields += result.field_count
        max_depth = max(max_depth, result.max_depth)

    return SchemaAnalysis(field_count=total_fields, max_depth=max_depth)


def _is_structural(schema: Any) -> bool:
    """Whether a property's nested fields count toward its parent.

    Composition-only property schemas (bare ``allOf``/``oneOf``/``anyOf``)
    do not count.
    """
    if not isinstance(schema, dict):
        return False
    return (
        schema.get("type") in STRUCTURAL_TYPES
        or bool(schema.get("$ref"))
        or schema.get("properties") is not None
    )
