"""Tool execution orchestrator.

Runs a configured external tool end to end: lookup, activation check,
request rendering, authentication, dispatch, response mapping and usage
accounting. Two entry points share the pipeline: execution by id (REST
API) and execution by name from a chat-message directive.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from courier.observability.logging import get_logger
from courier.observability.metrics import (
    DIRECTIVES_DETECTED,
    ERRORS,
    TOOL_EXECUTIONS,
    TOOL_USAGE_RECORD_ERRORS,
)
from courier.tools.auth import apply_auth
from courier.tools.directive import detect_directive
from courier.tools.dispatch import HttpDispatcher, build_url, resolve_method
from courier.tools.errors import ToolError, ToolInactiveError, ToolNotFoundError
from courier.tools.formatting import format_directive_result
from courier.tools.mapping import map_response
from courier.tools.models import HttpMethod, ToolDefinition
from courier.tools.store import ToolStore
from courier.tools.template import render_request_body

logger = get_logger(__name__)

# Added to every directive call so the remote side can tell it came from chat
DIRECTIVE_FLAGS: dict[str, Any] = {
    "mcp_enabled": True,
    "mcp_context_expansion": True,
}


class PreparedRequest(BaseModel):
    """Fully resolved outbound request for one tool call."""

    method: HttpMethod
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None


class ToolExecutor:
    """Executes tool definitions against their remote endpoints."""

    def __init__(
        self,
        store: ToolStore,
        dispatcher: HttpDispatcher,
        *,
        directive_envelope: bool = False,
    ) -> None:
        """Initialize the executor.

        Args:
            store: Tool definition store
            dispatcher: Outbound HTTP dispatcher
            directive_envelope: Wrap directive results with tool metadata
        """
        self._store = store
        self._dispatcher = dispatcher
        self._directive_envelope = directive_envelope

    async def execute(self, tool_id: UUID, params: Mapping[str, Any]) -> str:
        """Execute a tool by id.

        Raises:
            ToolNotFoundError: No tool with this id
            ToolInactiveError: Tool is disabled
            ToolConfigurationError: Tool cannot be dispatched as configured
            ToolTransportError: Network failure or timeout
            ToolStatusError: Remote answered with status >= 400
        """
        tool = await self._store.get(tool_id)
        if tool is None:
            TOOL_EXECUTIONS.labels(tool_name="unknown", entry_point="api", outcome="not_found").inc()
            raise ToolNotFoundError(tool_id)

        return await self._run(tool, params, entry_point="api")

    async def execute_from_directive(self, tool_name: str, input_text: str) -> str:
        """Execute a tool named in a chat directive.

        The tool is resolved by name ignoring case and receives the residual
        message text as its single "input" parameter.
        """
        tool = await self._store.get_by_name(tool_name)
        if tool is None:
            TOOL_EXECUTIONS.labels(
                tool_name="unknown", entry_point="directive", outcome="not_found"
            ).inc()
            raise ToolNotFoundError(tool_name)

        params = {"input": input_text, **DIRECTIVE_FLAGS}
        result = await self._run(tool, params, entry_point="directive")

        if self._directive_envelope:
            return format_directive_result(tool, result, input_text)
        return result

    async def process_incoming_message(self, message: str | None) -> str:
        """Replace a chat message by its tool result when it holds a directive.

        Blank messages become "". Messages without a directive come back
        unchanged. Tool failures propagate to the caller.
        """
        if message is None or not message.strip():
            return ""

        directive = detect_directive(message)
        if directive is None:
            return message

        DIRECTIVES_DETECTED.inc()
        logger.info(
            "tool_directive_detected",
            tool_name=directive.tool_name,
            input_length=len(directive.input_text),
        )
        return await self.execute_from_directive(directive.tool_name, directive.input_text)

    def prepare_request(self, tool: ToolDefinition, params: Mapping[str, Any]) -> PreparedRequest:
        """Render body, resolve auth headers and build the URL for a call.

        Raises:
            ToolConfigurationError: Unsupported method or unusable URL
        """
        method = resolve_method(tool.http_method)

        body = render_request_body(tool.request_template, params) if method.sends_body else None

        headers: dict[str, str] = {}
        apply_auth(headers, tool.auth_type, tool.auth_config, tool_name=tool.name)

        url = build_url(tool.endpoint_url, method, params)
        return PreparedRequest(method=method, url=url, headers=headers, body=body)

    async def _run(
        self,
        tool: ToolDefinition,
        params: Mapping[str, Any],
        *,
        entry_point: str,
    ) -> str:
        if not tool.is_active:
            TOOL_EXECUTIONS.labels(
                tool_name=tool.name, entry_point=entry_point, outcome="inactive"
            ).inc()
            raise ToolInactiveError(tool.name)

        logger.info(
            "tool_execution_requested",
            tool_id=str(tool.id),
            tool_name=tool.name,
            entry_point=entry_point,
            param_names=sorted(params),
        )

        try:
            request = self.prepare_request(tool, params)
            raw_response = await self._dispatcher.dispatch(
                request.url,
                request.method,
                request.headers,
                request.body,
                tool_name=tool.name,
            )
        except ToolError as e:
            TOOL_EXECUTIONS.labels(
                tool_name=tool.name, entry_point=entry_point, outcome="error"
            ).inc()
            ERRORS.labels(error_type=type(e).__name__).inc()
            logger.error(
                "tool_execution_failed",
                tool_id=str(tool.id),
                tool_name=tool.name,
                error=e.message,
                error_type=type(e).__name__,
            )
            if e.tool_name is None:
                e.tool_name = tool.name
            raise

        result = map_response(raw_response, tool.response_mapping)
        await self._record_usage(tool)

        TOOL_EXECUTIONS.labels(
            tool_name=tool.name, entry_point=entry_point, outcome="success"
        ).inc()
        logger.info(
            "tool_execution_succeeded",
            tool_id=str(tool.id),
            tool_name=tool.name,
            result_length=len(result),
        )
        return result

    async def _record_usage(self, tool: ToolDefinition) -> None:
        """Count a successful call; failures here never affect the result."""
        try:
            await self._store.record_usage(tool.id)
        except Exception as e:
            TOOL_USAGE_RECORD_ERRORS.labels(tool_name=tool.name).inc()
            logger.error(
                "tool_usage_record_failed",
                tool_id=str(tool.id),
                tool_name=tool.name,
                error=str(e),
                error_type=type(e).__name__,
            )
