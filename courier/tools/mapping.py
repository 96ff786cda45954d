"""Response mapping.

A tool's response mapping is a JSON document. The only rule understood is
{"extract": "<json pointer>"}, which picks one value out of a JSON response.
Anything that cannot be applied leaves the raw response untouched.
"""

import json
from typing import Any

from courier.observability.logging import get_logger

logger = get_logger(__name__)

_MISSING = object()


def resolve_pointer(document: Any, pointer: str) -> Any:
    """Resolve a JSON pointer against a parsed document.

    Supports "" for the whole document, "/"-separated object keys, numeric
    array indices and the ~1 / ~0 escapes.

    Returns:
        The resolved value, or a sentinel when the path does not exist
    """
    if pointer == "":
        return document
    if not pointer.startswith("/"):
        return _MISSING

    current = document
    for token in pointer[1:].split("/"):
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if token not in current:
                return _MISSING
            current = current[token]
        elif isinstance(current, list):
            if not token.isdigit() or int(token) >= len(current):
                return _MISSING
            current = current[int(token)]
        else:
            return _MISSING
    return current


def map_response(raw_response: str, mapping: str | None) -> str:
    """Apply a tool's response mapping to its raw response.

    Args:
        raw_response: Response body text
        mapping: JSON mapping document, or None/blank for pass-through

    Returns:
        The extracted value as text (strings verbatim, other values as
        compact JSON), or raw_response when the mapping cannot be applied
    """
    if mapping is None or not mapping.strip():
        return raw_response

    try:
        rule = json.loads(mapping)
    except ValueError as e:
        logger.warning("response_mapping_unparsable", error=str(e))
        return raw_response

    if not isinstance(rule, dict) or not isinstance(rule.get("extract"), str):
        return raw_response

    try:
        document = json.loads(raw_response)
    except ValueError:
        logger.warning("response_not_json", extract=rule["extract"])
        return raw_response

    value = resolve_pointer(document, rule["extract"])
    if value is _MISSING:
        logger.warning("response_path_unresolved", extract=rule["extract"])
        return raw_response

    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
