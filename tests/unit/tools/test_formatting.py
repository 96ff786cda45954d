"""Tests for directive result envelopes."""

import json

from courier.tools.formatting import format_directive_result
from courier.tools.models import ToolDefinition, ToolType


def _tool() -> ToolDefinition:
    return ToolDefinition.create(
        name="Search",
        endpoint_url="https://search.example.com",
        tool_type=ToolType.MCP_REST_WRAPPER,
    )


class TestFormatDirectiveResult:
    def test_json_result_is_embedded(self) -> None:
        result = format_directive_result(_tool(), '[1, 2, 3]', "numbers")

        assert json.loads(result) == {
            "tool_name": "Search",
            "tool_type": "MCP_REST_WRAPPER",
            "input": "numbers",
            "result": [1, 2, 3],
            "mcp_version": "1.0",
        }

    def test_text_result_gets_header(self) -> None:
        result = format_directive_result(_tool(), "no json here", "q")

        assert result == "MCP Tool Result [Search]:\nno json here"
