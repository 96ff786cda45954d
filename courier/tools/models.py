"""Tool definition models.

A ToolDefinition is the persisted configuration for one external
HTTP-callable capability: where to call, how to authenticate, how to build
the request body and how to extract the answer.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class HttpMethod(str, Enum):
    """HTTP methods a tool may be configured with."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @property
    def sends_body(self) -> bool:
        """Whether requests with this method carry the rendered body."""
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class AuthType(str, Enum):
    """Outbound authentication schemes."""

    NONE = "NONE"
    API_KEY = "API_KEY"
    BEARER_TOKEN = "BEARER_TOKEN"
    BASIC_AUTH = "BASIC_AUTH"
    OAUTH2 = "OAUTH2"


class ToolType:
    """Well-known tool category tags.

    The tag is free-form; these are the values the system itself creates.
    """

    API = "API"
    WEBHOOK = "WEBHOOK"
    MCP = "MCP"
    MCP_REST_WRAPPER = "MCP_REST_WRAPPER"


class ToolDefinition(BaseModel):
    """Persisted configuration for one external tool."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, description="Unique identifier")
    name: str = Field(..., min_length=1, description="Unique name, case-insensitive")
    description: str | None = Field(default=None, description="Human-readable description")
    endpoint_url: str = Field(..., description="Target URL of the tool")
    http_method: HttpMethod | None = Field(
        default=HttpMethod.GET, description="HTTP method used for calls"
    )
    auth_type: AuthType = Field(default=AuthType.NONE, description="Authentication scheme")
    auth_config: str | None = Field(
        default=None, description="JSON document shaped by auth_type"
    )
    request_template: str | None = Field(
        default=None, description="Body template with {{param}} placeholders"
    )
    response_mapping: str | None = Field(
        default=None, description='JSON mapping, e.g. {"extract": "/result"}'
    )
    is_active: bool = Field(default=True, description="Whether the tool can be executed")
    tool_type: str = Field(default=ToolType.API, description="Category tag")
    usage_count: int = Field(default=0, ge=0, description="Successful executions")
    last_used_at: datetime | None = Field(default=None, description="Last successful execution")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    updated_at: datetime = Field(default_factory=utc_now, description="Last modification time")

    @classmethod
    def create(
        cls,
        name: str,
        endpoint_url: str,
        *,
        description: str | None = None,
        http_method: HttpMethod = HttpMethod.GET,
        auth_type: AuthType = AuthType.NONE,
        auth_config: str | None = None,
        request_template: str | None = None,
        response_mapping: str | None = None,
        is_active: bool = True,
        tool_type: str = ToolType.API,
    ) -> "ToolDefinition":
        """Create a new tool with a fresh id, zero usage and current timestamps."""
        return cls(
            name=name,
            description=description,
            endpoint_url=endpoint_url,
            http_method=http_method,
            auth_type=auth_type,
            auth_config=auth_config,
            request_template=request_template,
            response_mapping=response_mapping,
            is_active=is_active,
            tool_type=tool_type,
        )

    def replace_fields(self, other: "ToolDefinition") -> "ToolDefinition":
        """Return a copy with every editable field taken from other.

        Identity, usage accounting and created_at are preserved.
        """
        return self.model_copy(
            update={
                "name": other.name,
                "description": other.description,
                "endpoint_url": other.endpoint_url,
                "http_method": other.http_method,
                "auth_type": other.auth_type,
                "auth_config": other.auth_config,
                "request_template": other.request_template,
                "response_mapping": other.response_mapping,
                "is_active": other.is_active,
                "tool_type": other.tool_type,
                "updated_at": utc_now(),
            }
        )
