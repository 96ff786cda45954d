"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing fields, etc.)."""

    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    """No tool with the given id or name exists."""

    TOOL_INACTIVE = "TOOL_INACTIVE"
    """The tool exists but is disabled."""

    TOOL_CONFIGURATION_ERROR = "TOOL_CONFIGURATION_ERROR"
    """The stored tool definition cannot be dispatched."""

    TOOL_TRANSPORT_ERROR = "TOOL_TRANSPORT_ERROR"
    """The remote endpoint could not be reached or timed out."""

    TOOL_REQUEST_FAILED = "TOOL_REQUEST_FAILED"
    """The remote endpoint answered with an error status."""

    TOOL_NAME_CONFLICT = "TOOL_NAME_CONFLICT"
    """Another tool already uses this name (case-insensitive)."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    """The field that caused the error, if applicable."""

    message: str
    """Human-readable error description."""


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None

    tool_name: str | None = None
    """Tool involved in the failure, when known."""


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "TOOL_INACTIVE",
                "message": "External tool is not active: Weather",
                "tool_name": "Weather"
            }
        }
    """

    error: ErrorBody
