"""Envelope for results of directive-originated tool calls.

Chat clients that render tool output can ask for results wrapped with the
tool's identity and the original input instead of the bare response text.
"""

import json

from courier.tools.models import ToolDefinition

ENVELOPE_VERSION = "1.0"


def format_directive_result(tool: ToolDefinition, result: str, input_text: str) -> str:
    """Wrap a tool result for the chat pipeline.

    JSON results are embedded in a JSON envelope; anything else gets a
    one-line text header naming the tool.
    """
    try:
        parsed = json.loads(result)
    except ValueError:
        return f"MCP Tool Result [{tool.name}]:\n{result}"

    return json.dumps(
        {
            "tool_name": tool.name,
            "tool_type": tool.tool_type,
            "input": input_text,
            "result": parsed,
            "mcp_version": ENVELOPE_VERSION,
        }
    )
