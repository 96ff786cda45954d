"""In-memory implementation of ToolStore."""

from uuid import UUID

from courier.db.errors import ConflictError, NotFoundError
from courier.tools.models import ToolDefinition, utc_now
from courier.tools.store import ToolStore


class InMemoryToolStore(ToolStore):
    """In-memory implementation of ToolStore for testing and development.

    Uses simple dict storage with linear scan for queries. Records are
    copied on the way in and out so callers never share the stored instance.
    Not suitable for production use.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._tools: dict[UUID, ToolDefinition] = {}

    async def get(self, tool_id: UUID) -> ToolDefinition | None:
        """Get a tool by ID."""
        tool = self._tools.get(tool_id)
        return tool.model_copy() if tool else None

    async def get_by_name(self, name: str) -> ToolDefinition | None:
        """Get a tool by name, ignoring case."""
        wanted = name.lower()
        for tool in self._tools.values():
            if tool.name.lower() == wanted:
                return tool.model_copy()
        return None

    async def save(self, tool: ToolDefinition) -> ToolDefinition:
        """Insert or fully replace a tool."""
        wanted = tool.name.lower()
        for existing in self._tools.values():
            if existing.id != tool.id and existing.name.lower() == wanted:
                raise ConflictError(tool.name)

        self._tools[tool.id] = tool.model_copy()
        return tool.model_copy()

    async def delete(self, tool_id: UUID) -> bool:
        """Delete a tool."""
        if tool_id in self._tools:
            del self._tools[tool_id]
            return True
        return False

    async def record_usage(self, tool_id: UUID) -> None:
        """Increment usage on the stored record.

        No await happens between read and write, so concurrent executions
        on the same event loop cannot lose an increment.
        """
        tool = self._tools.get(tool_id)
        if tool is None:
            raise NotFoundError(tool_id)

        now = utc_now()
        self._tools[tool_id] = tool.model_copy(
            update={
                "usage_count": tool.usage_count + 1,
                "last_used_at": now,
                "updated_at": now,
            }
        )

    async def list_active(self) -> list[ToolDefinition]:
        """List active tools ordered by name."""
        results = [t.model_copy() for t in self._tools.values() if t.is_active]
        results.sort(key=lambda t: t.name.lower())
        return results

    async def list_by_type(self, tool_type: str) -> list[ToolDefinition]:
        """List tools with the given category tag, most used first."""
        results = [t.model_copy() for t in self._tools.values() if t.tool_type == tool_type]
        results.sort(key=lambda t: t.usage_count, reverse=True)
        return results

    async def list_all(self) -> list[ToolDefinition]:
        """List every tool ordered by name."""
        results = [t.model_copy() for t in self._tools.values()]
        results.sort(key=lambda t: t.name.lower())
        return results

    async def list_tool_types(self) -> list[str]:
        """List the distinct category tags in use, sorted."""
        return sorted({t.tool_type for t in self._tools.values()})

    async def search_by_name(self, fragment: str) -> list[ToolDefinition]:
        """Find tools whose name contains fragment, most used first."""
        wanted = fragment.lower()
        results = [
            t.model_copy() for t in self._tools.values() if wanted in t.name.lower()
        ]
        results.sort(key=lambda t: t.usage_count, reverse=True)
        return results
