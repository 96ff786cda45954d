"""Tool management and execution endpoints."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Query, Response
from fastapi.responses import PlainTextResponse

from courier.api.dependencies import ToolExecutorDep, ToolStoreDep
from courier.api.exceptions import (
    InvalidRequestError,
    ToolNameConflictError,
    ToolNotFoundAPIError,
    from_tool_error,
)
from courier.api.models.tools import (
    McpWrapperCreate,
    ToolCreate,
    ToolResponse,
    ToolUpdate,
)
from courier.db.errors import ConflictError, InvalidRecordError
from courier.observability.logging import get_logger
from courier.tools.bootstrap import create_rest_wrapper
from courier.tools.errors import ToolError
from courier.tools.models import ToolDefinition, ToolType
from courier.tools.store import ToolStore

logger = get_logger(__name__)

router = APIRouter(prefix="/tools")


def _to_responses(tools: list[ToolDefinition]) -> list[ToolResponse]:
    return [ToolResponse.from_tool(tool) for tool in tools]


async def _get_or_404(store: ToolStore, tool_id: UUID) -> ToolDefinition:
    tool = await store.get(tool_id)
    if tool is None:
        raise ToolNotFoundAPIError(f"External tool not found: {tool_id}")
    return tool


async def _save(store: ToolStore, tool: ToolDefinition) -> ToolDefinition:
    try:
        return await store.save(tool)
    except ConflictError as e:
        raise ToolNameConflictError(
            f"A tool named '{tool.name}' already exists", tool_name=tool.name
        ) from e
    except InvalidRecordError as e:
        raise InvalidRequestError(str(e), tool_name=tool.name) from e


@router.get("", response_model=list[ToolResponse])
async def list_active_tools(tool_store: ToolStoreDep) -> list[ToolResponse]:
    """List active tools ordered by name."""
    return _to_responses(await tool_store.list_active())


@router.get("/all", response_model=list[ToolResponse])
async def list_all_tools(tool_store: ToolStoreDep) -> list[ToolResponse]:
    """List every tool, active or not, ordered by name."""
    return _to_responses(await tool_store.list_all())


@router.get("/types", response_model=list[str])
async def list_tool_types(tool_store: ToolStoreDep) -> list[str]:
    """List the distinct category tags in use."""
    return await tool_store.list_tool_types()


@router.get("/search", response_model=list[ToolResponse])
async def search_tools(
    tool_store: ToolStoreDep,
    name: str = Query(..., min_length=1, description="Case-insensitive name fragment"),
) -> list[ToolResponse]:
    """Find tools whose name contains the fragment, most used first."""
    return _to_responses(await tool_store.search_by_name(name))


@router.get("/by-type/{tool_type}", response_model=list[ToolResponse])
async def list_tools_by_type(tool_type: str, tool_store: ToolStoreDep) -> list[ToolResponse]:
    """List tools with the given category tag, most used first."""
    return _to_responses(await tool_store.list_by_type(tool_type))


@router.get("/mcp", response_model=list[ToolResponse])
async def list_mcp_tools(tool_store: ToolStoreDep) -> list[ToolResponse]:
    return _to_responses(await tool_store.list_by_type(ToolType.MCP))


@router.get("/mcp-wrappers", response_model=list[ToolResponse])
async def list_rest_wrappers(tool_store: ToolStoreDep) -> list[ToolResponse]:
    return _to_responses(await tool_store.list_by_type(ToolType.MCP_REST_WRAPPER))


@router.post("/mcp-wrapper", response_model=ToolResponse, status_code=201)
async def register_rest_wrapper(
    request: McpWrapperCreate,
    tool_store: ToolStoreDep,
) -> ToolResponse:
    """Register a REST server as a chat-callable tool."""
    logger.info(
        "create_rest_wrapper_request",
        name=request.rest_server_name,
        url=request.rest_server_url,
    )
    try:
        tool = await create_rest_wrapper(
            tool_store, request.rest_server_url, request.rest_server_name
        )
    except ConflictError as e:
        raise ToolNameConflictError(
            f"A tool named '{request.rest_server_name}' already exists",
            tool_name=request.rest_server_name,
        ) from e
    return ToolResponse.from_tool(tool)


@router.post("", response_model=ToolResponse, status_code=201)
async def create_tool(request: ToolCreate, tool_store: ToolStoreDep) -> ToolResponse:
    """Create a new tool definition."""
    logger.info("create_tool_request", name=request.name, tool_type=request.tool_type)

    saved = await _save(tool_store, request.to_tool())

    logger.info("tool_created", tool_id=str(saved.id), name=saved.name)
    return ToolResponse.from_tool(saved)


@router.get("/{tool_id}", response_model=ToolResponse)
async def get_tool(tool_id: UUID, tool_store: ToolStoreDep) -> ToolResponse:
    """Get a tool by id."""
    return ToolResponse.from_tool(await _get_or_404(tool_store, tool_id))


@router.put("/{tool_id}", response_model=ToolResponse)
async def replace_tool(
    tool_id: UUID,
    request: ToolUpdate,
    tool_store: ToolStoreDep,
) -> ToolResponse:
    """Replace every editable field of a tool.

    Identity, usage accounting and creation time are kept.
    """
    existing = await _get_or_404(tool_store, tool_id)

    saved = await _save(tool_store, existing.replace_fields(request.to_tool()))

    logger.info("tool_updated", tool_id=str(tool_id), name=saved.name)
    return ToolResponse.from_tool(saved)


@router.delete("/{tool_id}", status_code=204)
async def delete_tool(tool_id: UUID, tool_store: ToolStoreDep) -> Response:
    """Delete a tool."""
    if not await tool_store.delete(tool_id):
        raise ToolNotFoundAPIError(f"External tool not found: {tool_id}")

    logger.info("tool_deleted", tool_id=str(tool_id))
    return Response(status_code=204)


@router.post("/{tool_id}/execute", response_class=PlainTextResponse)
async def execute_tool(
    tool_id: UUID,
    executor: ToolExecutorDep,
    params: dict[str, Any] | None = Body(default=None),
) -> PlainTextResponse:
    """Execute a tool with the given parameters and return its mapped result."""
    try:
        result = await executor.execute(tool_id, params or {})
    except ToolError as e:
        raise from_tool_error(e) from e
    return PlainTextResponse(result)
