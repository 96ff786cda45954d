"""Request and response models for tool endpoints."""

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from courier.tools.models import AuthType, HttpMethod, ToolDefinition, ToolType


def _json_object_text(value: Any, field_name: str) -> str | None:
    """Accept a JSON object given inline or as text, return it as text."""
    if value is None:
        return None
    if isinstance(value, dict):
        return json.dumps(value)
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a JSON object")
    try:
        parsed = json.loads(value)
    except ValueError as e:
        raise ValueError(f"{field_name} is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ValueError(f"{field_name} must be a JSON object")
    return value


class ToolCreate(BaseModel):
    """Request model for creating a tool."""

    name: str = Field(..., min_length=1, max_length=255, description="Unique tool name")
    description: str | None = Field(default=None)
    endpoint_url: str = Field(..., min_length=1, description="Target URL")
    http_method: HttpMethod = Field(default=HttpMethod.GET)
    auth_type: AuthType = Field(default=AuthType.NONE)
    auth_config: str | None = Field(
        default=None,
        description="Credentials as a JSON object (inline object or JSON text)",
    )
    request_template: str | None = Field(
        default=None, description="Body template with {{param}} placeholders"
    )
    response_mapping: str | None = Field(
        default=None, description='Mapping as a JSON object, e.g. {"extract": "/result"}'
    )
    is_active: bool = Field(default=True)
    tool_type: str = Field(default=ToolType.API, min_length=1)

    @field_validator("auth_config", mode="before")
    @classmethod
    def _check_auth_config(cls, value: Any) -> str | None:
        return _json_object_text(value, "auth_config")

    @field_validator("response_mapping", mode="before")
    @classmethod
    def _check_response_mapping(cls, value: Any) -> str | None:
        return _json_object_text(value, "response_mapping")

    def to_tool(self) -> ToolDefinition:
        """Build a new tool definition from this request."""
        return ToolDefinition.create(
            name=self.name,
            endpoint_url=self.endpoint_url,
            description=self.description,
            http_method=self.http_method,
            auth_type=self.auth_type,
            auth_config=self.auth_config,
            request_template=self.request_template,
            response_mapping=self.response_mapping,
            is_active=self.is_active,
            tool_type=self.tool_type,
        )


class ToolUpdate(ToolCreate):
    """Request model for replacing a tool. Every editable field is overwritten."""


class McpWrapperCreate(BaseModel):
    """Request model for registering a REST server as a chat tool."""

    rest_server_url: str = Field(..., min_length=1)
    rest_server_name: str = Field(..., min_length=1, max_length=255)


class ToolResponse(BaseModel):
    """Response model for tool operations.

    Credentials are never echoed back; auth_configured tells whether any
    are stored.
    """

    id: UUID
    name: str
    description: str | None
    endpoint_url: str
    http_method: HttpMethod | None
    auth_type: AuthType
    auth_configured: bool
    request_template: str | None
    response_mapping: str | None
    is_active: bool
    tool_type: str
    usage_count: int
    last_used_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_tool(cls, tool: ToolDefinition) -> "ToolResponse":
        return cls(
            id=tool.id,
            name=tool.name,
            description=tool.description,
            endpoint_url=tool.endpoint_url,
            http_method=tool.http_method,
            auth_type=tool.auth_type,
            auth_configured=bool(tool.auth_config and tool.auth_config.strip()),
            request_template=tool.request_template,
            response_mapping=tool.response_mapping,
            is_active=tool.is_active,
            tool_type=tool.tool_type,
            usage_count=tool.usage_count,
            last_used_at=tool.last_used_at,
            created_at=tool.created_at,
            updated_at=tool.updated_at,
        )


class MessageProcessRequest(BaseModel):
    """Chat message to scan for a tool directive."""

    message: str | None = Field(default=None, description="Raw chat message")


class MessageProcessResponse(BaseModel):
    """Result of processing a chat message."""

    message: str
    """Tool result when a directive was found, otherwise the input message."""

    tool_invoked: bool
