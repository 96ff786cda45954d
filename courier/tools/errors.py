"""Tool execution error hierarchy.

Only lookup, configuration and network failures surface as errors.
Template, auth-config and response-mapping problems degrade locally.
"""


class ToolError(Exception):
    """Base exception for tool execution failures."""

    def __init__(self, message: str, tool_name: str | None = None) -> None:
        self.message = message
        self.tool_name = tool_name
        super().__init__(message)


class ToolNotFoundError(ToolError):
    """Raised when no tool matches the requested id or name."""

    def __init__(self, identifier: object) -> None:
        super().__init__(f"External tool not found: {identifier}")
        self.identifier = identifier


class ToolInactiveError(ToolError):
    """Raised when the requested tool is disabled."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"External tool is not active: {tool_name}", tool_name)


class ToolConfigurationError(ToolError):
    """Raised when a tool definition cannot be dispatched as configured."""


class ToolTransportError(ToolError):
    """Raised on network failure or timeout of the outbound call."""

    def __init__(self, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class ToolStatusError(ToolError):
    """Raised when the remote endpoint answers with status >= 400."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            f"External tool request failed with status {status_code}: {body}"
        )
        self.status_code = status_code
        self.body = body
