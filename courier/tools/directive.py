"""Tool directive detection in chat messages.

A directive looks like ``@{{Weather}} what's it like in Paris``: an @ sigil,
the tool name in double braces, then free text that becomes the tool input.
"""

import re
from typing import NamedTuple

DIRECTIVE_PATTERN = re.compile(r"@\{\{([^}]+)\}\}\s*(.*)")


class Directive(NamedTuple):
    """A tool call embedded in a chat message."""

    tool_name: str
    input_text: str


def detect_directive(message: str | None) -> Directive | None:
    """Find the first directive in a message.

    The name keeps its case; lookup is case-insensitive later on.
    The input runs to the end of the line holding the directive.
    """
    if message is None or not message.strip():
        return None

    match = DIRECTIVE_PATTERN.search(message)
    if match is None:
        return None

    tool_name = match.group(1).strip()
    if not tool_name:
        return None
    return Directive(tool_name=tool_name, input_text=match.group(2).strip())
