"""Request body rendering.

A tool's request template is plain text with {{param}} placeholders. When a
tool has no template the parameters themselves are sent as a JSON object.
"""

import json
from collections.abc import Mapping
from typing import Any

from courier.observability.logging import get_logger

logger = get_logger(__name__)


def stringify_value(value: Any) -> str:
    """Render a parameter value for templates and query strings.

    None becomes an empty string and booleans use JSON spelling.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_request_body(template: str | None, params: Mapping[str, Any]) -> str:
    """Render the outbound request body for a tool call.

    Args:
        template: Body template, or None/blank to send params as JSON
        params: Flat parameter mapping

    Returns:
        The rendered body. Placeholders without a matching parameter are
        left in place; unserializable parameters fall back to "{}".
    """
    if template is None or not template.strip():
        try:
            return json.dumps(dict(params))
        except (TypeError, ValueError) as e:
            logger.warning("request_params_not_serializable", error=str(e))
            return "{}"

    rendered = template
    for key, value in params.items():
        rendered = rendered.replace("{{" + key + "}}", stringify_value(value))
    return rendered
