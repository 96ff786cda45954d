"""API exception hierarchy for consistent error handling.

All API exceptions inherit from CourierAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses.
"""

from courier.api.models.errors import ErrorCode
from courier.tools.errors import (
    ToolConfigurationError,
    ToolError,
    ToolInactiveError,
    ToolNotFoundError,
    ToolStatusError,
    ToolTransportError,
)


class CourierAPIError(Exception):
    """Base exception for all API errors.

    Subclasses set status_code and error_code to define the HTTP response.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, tool_name: str | None = None) -> None:
        self.message = message
        self.tool_name = tool_name
        super().__init__(message)


class InvalidRequestError(CourierAPIError):
    """Raised when request validation fails."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class ToolNotFoundAPIError(CourierAPIError):
    """Raised when no tool matches the given id or name."""

    status_code = 404
    error_code = ErrorCode.TOOL_NOT_FOUND


class ToolInactiveAPIError(CourierAPIError):
    """Raised when a disabled tool is executed."""

    status_code = 409
    error_code = ErrorCode.TOOL_INACTIVE


class ToolConfigurationAPIError(CourierAPIError):
    """Raised when a stored tool definition cannot be dispatched."""

    status_code = 500
    error_code = ErrorCode.TOOL_CONFIGURATION_ERROR


class ToolTransportAPIError(CourierAPIError):
    """Raised when the remote endpoint is unreachable (502) or times out (504)."""

    status_code = 502
    error_code = ErrorCode.TOOL_TRANSPORT_ERROR

    def __init__(
        self, message: str, tool_name: str | None = None, timed_out: bool = False
    ) -> None:
        super().__init__(message, tool_name)
        if timed_out:
            self.status_code = 504


class ToolRequestFailedError(CourierAPIError):
    """Raised when the remote endpoint answers with an error status.

    The remote status code is passed through.
    """

    error_code = ErrorCode.TOOL_REQUEST_FAILED

    def __init__(self, message: str, status_code: int, tool_name: str | None = None) -> None:
        super().__init__(message, tool_name)
        self.status_code = status_code


class ToolNameConflictError(CourierAPIError):
    """Raised when a tool name is already taken."""

    status_code = 409
    error_code = ErrorCode.TOOL_NAME_CONFLICT


def from_tool_error(exc: ToolError) -> CourierAPIError:
    """Translate a domain tool error into its API error."""
    tool_name = exc.tool_name
    if isinstance(exc, ToolInactiveError):
        return ToolInactiveAPIError(exc.message, tool_name)
    if isinstance(exc, ToolNotFoundError):
        return ToolNotFoundAPIError(exc.message, tool_name)
    if isinstance(exc, ToolConfigurationError):
        return ToolConfigurationAPIError(exc.message, tool_name)
    if isinstance(exc, ToolTransportError):
        return ToolTransportAPIError(exc.message, tool_name, timed_out=exc.timed_out)
    if isinstance(exc, ToolStatusError):
        return ToolRequestFailedError(exc.message, exc.status_code, tool_name)
    return CourierAPIError(exc.message, tool_name)
