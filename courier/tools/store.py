"""ToolStore abstract interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from courier.tools.models import ToolDefinition


class ToolStore(ABC):
    """Abstract interface for tool definition storage.

    Names are unique under case-insensitive comparison. Usage accounting
    goes through record_usage, which must be atomic in the backend rather
    than a read-modify-write of a fetched record.
    """

    @abstractmethod
    async def get(self, tool_id: UUID) -> ToolDefinition | None:
        """Get a tool by ID."""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> ToolDefinition | None:
        """Get a tool by name, ignoring case."""
        pass

    @abstractmethod
    async def save(self, tool: ToolDefinition) -> ToolDefinition:
        """Insert or fully replace a tool.

        Raises:
            ConflictError: If another tool already uses the name
        """
        pass

    @abstractmethod
    async def delete(self, tool_id: UUID) -> bool:
        """Delete a tool, returning whether it existed."""
        pass

    @abstractmethod
    async def record_usage(self, tool_id: UUID) -> None:
        """Atomically increment usage_count and stamp last_used_at/updated_at.

        Raises:
            NotFoundError: If the tool does not exist
        """
        pass

    @abstractmethod
    async def list_active(self) -> list[ToolDefinition]:
        """List active tools ordered by name."""
        pass

    @abstractmethod
    async def list_by_type(self, tool_type: str) -> list[ToolDefinition]:
        """List tools with the given category tag, most used first."""
        pass

    @abstractmethod
    async def list_all(self) -> list[ToolDefinition]:
        """List every tool ordered by name."""
        pass

    @abstractmethod
    async def list_tool_types(self) -> list[str]:
        """List the distinct category tags in use, sorted."""
        pass

    @abstractmethod
    async def search_by_name(self, fragment: str) -> list[ToolDefinition]:
        """Find tools whose name contains fragment (ignoring case), most used first."""
        pass
