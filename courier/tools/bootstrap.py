"""Factories for built-in tool definitions."""

import json

from courier.db.errors import ConflictError
from courier.observability.logging import get_logger
from courier.tools.models import AuthType, HttpMethod, ToolDefinition, ToolType
from courier.tools.store import ToolStore

logger = get_logger(__name__)

WEATHER_TOOL_NAME = "Weather"
WEATHER_ENDPOINT = "https://api.openweathermap.org/data/2.5/weather"

REST_WRAPPER_TEMPLATE = '{"query": "{{input}}", "mcp_enabled": true}'
REST_WRAPPER_MAPPING = '{"extract": "/result"}'


async def seed_weather_tool(store: ToolStore, api_key: str | None) -> ToolDefinition:
    """Create the Weather tool unless a tool with that name already exists.

    Returns:
        The existing or newly created tool
    """
    existing = await store.get_by_name(WEATHER_TOOL_NAME)
    if existing is not None:
        logger.debug("weather_tool_present", tool_id=str(existing.id))
        return existing

    if not api_key:
        logger.warning("weather_api_key_missing")

    tool = ToolDefinition.create(
        name=WEATHER_TOOL_NAME,
        endpoint_url=WEATHER_ENDPOINT,
        description="Get current weather information for any city",
        http_method=HttpMethod.GET,
        auth_type=AuthType.API_KEY,
        auth_config=json.dumps({"apiKey": api_key or "", "headerName": "X-API-Key"}),
        tool_type=ToolType.API,
    )
    try:
        saved = await store.save(tool)
    except ConflictError:
        # Another worker seeded it between our lookup and save
        winner = await store.get_by_name(WEATHER_TOOL_NAME)
        if winner is None:
            raise
        logger.debug("weather_tool_seeded_concurrently", tool_id=str(winner.id))
        return winner

    logger.info("weather_tool_created", tool_id=str(saved.id))
    return saved


async def create_rest_wrapper(
    store: ToolStore,
    rest_server_url: str,
    rest_server_name: str,
) -> ToolDefinition:
    """Register a REST server as a chat-callable tool.

    The wrapper posts the directive input as {"query": ...} and extracts the
    "result" field of the answer.
    """
    tool = ToolDefinition.create(
        name=rest_server_name,
        endpoint_url=rest_server_url,
        description=f"MCP wrapper for REST server: {rest_server_url}",
        http_method=HttpMethod.POST,
        auth_type=AuthType.NONE,
        request_template=REST_WRAPPER_TEMPLATE,
        response_mapping=REST_WRAPPER_MAPPING,
        tool_type=ToolType.MCP_REST_WRAPPER,
    )
    saved = await store.save(tool)
    logger.info("rest_wrapper_created", tool_id=str(saved.id), name=saved.name)
    return saved
