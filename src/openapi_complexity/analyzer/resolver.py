"""Same-document ``$ref`` resolution.

Pointers are walked as raw key paths: ``~0``/``~1`` escapes are not decoded,
so keys containing ``/`` or ``~`` cannot be addressed.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_ref(doc: Any, ref: str) -> Any | None:
    """Return the node ``ref`` (``"#/a/b/c"``) points to, or None if it doesn't exist."""
    if not isinstance(ref, str) or not ref.startswith("#/"):
        logger.debug("Unsupported reference %r", ref)
        return None

    node = doc
    for part in ref[2:].split("/"):
        node = _child(node, part)
        if node is _MISSING:
            logger.debug("Unresolved reference %s (missing segment %r)", ref, part)
            return None
    return node


def _child(node: Any, part: str) -> Any:
    if isinstance(node, dict):
        return node.get(part, _MISSING)
    if isinstance(node, list) and part.isdigit():
        index = int(part)
        if index < len(node):
            return node[index]
    return _MISSING
