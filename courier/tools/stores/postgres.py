"""PostgreSQL implementation of ToolStore.

Provides persistent storage for tool definitions in the external_tools table.
"""

from typing import Any
from uuid import UUID

import asyncpg

from courier.db.errors import (
    ConflictError,
    InvalidRecordError,
    NotFoundError,
    StoreUnavailableError,
)
from courier.db.pool import PostgresPool
from courier.observability.logging import get_logger
from courier.tools.models import AuthType, HttpMethod, ToolDefinition
from courier.tools.store import ToolStore

logger = get_logger(__name__)

_COLUMNS = """
    id, name, description, endpoint_url, http_method, auth_type, auth_config,
    request_template, response_mapping, is_active, tool_type, usage_count,
    last_used_at, created_at, updated_at
"""


class PostgresToolStore(ToolStore):
    """PostgreSQL implementation of ToolStore.

    Case-insensitive name uniqueness is enforced by a unique index on
    LOWER(name); usage accounting is a single UPDATE statement.
    """

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize PostgreSQL tool store.

        Args:
            pool: Shared connection pool
        """
        self._pool = pool

    def _row_to_tool(self, row: asyncpg.Record) -> ToolDefinition:
        """Convert database row to ToolDefinition."""
        data: dict[str, Any] = dict(row)
        data["http_method"] = HttpMethod(data["http_method"]) if data["http_method"] else None
        data["auth_type"] = AuthType(data["auth_type"])
        return ToolDefinition.model_validate(data)

    async def _fetch_one(self, query: str, *args: Any) -> ToolDefinition | None:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(query, *args)
        except asyncpg.PostgresError as e:
            logger.error("postgres_tool_query_error", error=str(e))
            raise StoreUnavailableError(f"Failed to query tools: {e}", cause=e) from e
        return self._row_to_tool(row) if row else None

    async def _fetch_many(self, query: str, *args: Any) -> list[ToolDefinition]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query, *args)
        except asyncpg.PostgresError as e:
            logger.error("postgres_tool_query_error", error=str(e))
            raise StoreUnavailableError(f"Failed to query tools: {e}", cause=e) from e
        return [self._row_to_tool(row) for row in rows]

    async def get(self, tool_id: UUID) -> ToolDefinition | None:
        """Get a tool by ID."""
        return await self._fetch_one(
            f"SELECT {_COLUMNS} FROM external_tools WHERE id = $1",
            tool_id,
        )

    async def get_by_name(self, name: str) -> ToolDefinition | None:
        """Get a tool by name, ignoring case."""
        return await self._fetch_one(
            f"SELECT {_COLUMNS} FROM external_tools WHERE LOWER(name) = LOWER($1) LIMIT 1",
            name,
        )

    async def save(self, tool: ToolDefinition) -> ToolDefinition:
        """Upsert a tool.

        Usage columns are left untouched on update so a concurrent
        record_usage is never overwritten by a stale copy.
        """
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO external_tools (
                        id, name, description, endpoint_url, http_method, auth_type,
                        auth_config, request_template, response_mapping, is_active,
                        tool_type, usage_count, last_used_at, created_at, updated_at
                    ) VALUES (
                        $1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15
                    )
                    ON CONFLICT (id) DO UPDATE SET
                        name = EXCLUDED.name,
                        description = EXCLUDED.description,
                        endpoint_url = EXCLUDED.endpoint_url,
                        http_method = EXCLUDED.http_method,
                        auth_type = EXCLUDED.auth_type,
                        auth_config = EXCLUDED.auth_config,
                        request_template = EXCLUDED.request_template,
                        response_mapping = EXCLUDED.response_mapping,
                        is_active = EXCLUDED.is_active,
                        tool_type = EXCLUDED.tool_type,
                        updated_at = EXCLUDED.updated_at
                    RETURNING {_COLUMNS}
                    """,
                    tool.id,
                    tool.name,
                    tool.description,
                    tool.endpoint_url,
                    tool.http_method.value if tool.http_method else None,
                    tool.auth_type.value,
                    tool.auth_config,
                    tool.request_template,
                    tool.response_mapping,
                    tool.is_active,
                    tool.tool_type,
                    tool.usage_count,
                    tool.last_used_at,
                    tool.created_at,
                    tool.updated_at,
                )
        except asyncpg.UniqueViolationError as e:
            raise ConflictError(tool.name, cause=e) from e
        except asyncpg.DataError as e:
            raise InvalidRecordError(f"Tool rejected by database: {e}", cause=e) from e
        except asyncpg.PostgresError as e:
            logger.error("postgres_tool_save_error", tool_id=str(tool.id), error=str(e))
            raise StoreUnavailableError(f"Failed to save tool: {e}", cause=e) from e

        logger.debug("tool_saved", tool_id=str(tool.id), name=tool.name)
        return self._row_to_tool(row)

    async def delete(self, tool_id: UUID) -> bool:
        """Delete a tool."""
        try:
            async with self._pool.acquire() as conn:
                result = await conn.execute(
                    "DELETE FROM external_tools WHERE id = $1",
                    tool_id,
                )
        except asyncpg.PostgresError as e:
            logger.error("postgres_tool_delete_error", tool_id=str(tool_id), error=str(e))
            raise StoreUnavailableError(f"Failed to delete tool: {e}", cause=e) from e
        return bool(result.endswith(" 1"))

    async def record_usage(self, tool_id: UUID) -> None:
        """Increment usage in a single statement."""
        try:
            async with self._pool.acquire() as conn:
                result = await conn.execute(
                    """
                    UPDATE external_tools
                    SET usage_count = usage_count + 1,
                        last_used_at = NOW(),
                        updated_at = NOW()
                    WHERE id = $1
                    """,
                    tool_id,
                )
        except asyncpg.PostgresError as e:
            logger.error("postgres_tool_usage_error", tool_id=str(tool_id), error=str(e))
            raise StoreUnavailableError(f"Failed to record tool usage: {e}", cause=e) from e

        if result.endswith(" 0"):
            raise NotFoundError(tool_id)

    async def list_active(self) -> list[ToolDefinition]:
        """List active tools ordered by name."""
        return await self._fetch_many(
            f"SELECT {_COLUMNS} FROM external_tools WHERE is_active = true ORDER BY name"
        )

    async def list_by_type(self, tool_type: str) -> list[ToolDefinition]:
        """List tools with the given category tag, most used first."""
        return await self._fetch_many(
            f"""
            SELECT {_COLUMNS} FROM external_tools
            WHERE tool_type = $1
            ORDER BY usage_count DESC
            """,
            tool_type,
        )

    async def list_all(self) -> list[ToolDefinition]:
        """List every tool ordered by name."""
        return await self._fetch_many(f"SELECT {_COLUMNS} FROM external_tools ORDER BY name")

    async def list_tool_types(self) -> list[str]:
        """List the distinct category tags in use, sorted."""
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    "SELECT DISTINCT tool_type FROM external_tools ORDER BY tool_type"
                )
        except asyncpg.PostgresError as e:
            logger.error("postgres_tool_query_error", error=str(e))
            raise StoreUnavailableError(f"Failed to query tool types: {e}", cause=e) from e
        return [row["tool_type"] for row in rows]

    async def search_by_name(self, fragment: str) -> list[ToolDefinition]:
        """Find tools whose name contains fragment, most used first."""
        return await self._fetch_many(
            f"""
            SELECT {_COLUMNS} FROM external_tools
            WHERE POSITION(LOWER($1) IN LOWER(name)) > 0
            ORDER BY usage_count DESC
            """,
            fragment,
        )
