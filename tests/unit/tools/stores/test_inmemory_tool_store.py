"""Tests for InMemoryToolStore."""

import asyncio
from collections.abc import Callable
from uuid import uuid4

import pytest

from courier.db.errors import ConflictError, NotFoundError
from courier.tools.models import ToolDefinition, ToolType
from courier.tools.stores.inmemory import InMemoryToolStore


@pytest.fixture
def store() -> InMemoryToolStore:
    """Create a fresh store for each test."""
    return InMemoryToolStore()


class TestCrud:
    """Tests for basic persistence."""

    async def test_save_and_get(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        tool = make_tool()

        await store.save(tool)
        loaded = await store.get(tool.id)

        assert loaded == tool

    async def test_get_missing(self, store: InMemoryToolStore) -> None:
        assert await store.get(uuid4()) is None

    async def test_returned_copies_are_detached(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        tool = await store.save(make_tool())

        loaded = await store.get(tool.id)
        assert loaded is not None
        loaded.description = "changed"

        reloaded = await store.get(tool.id)
        assert reloaded is not None
        assert reloaded.description is None

    async def test_get_by_name_ignores_case(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        tool = await store.save(make_tool(name="Weather"))

        loaded = await store.get_by_name("wEATHER")

        assert loaded is not None
        assert loaded.id == tool.id
        assert await store.get_by_name("Weath") is None

    async def test_name_conflict_ignores_case(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        await store.save(make_tool(name="Weather"))

        with pytest.raises(ConflictError) as exc_info:
            await store.save(make_tool(name="WEATHER"))

        assert exc_info.value.name == "WEATHER"

    async def test_names_compared_like_sql_lower(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        """Straße and STRASSE differ under LOWER(), so they do not clash."""
        await store.save(make_tool(name="Straße"))

        await store.save(make_tool(name="STRASSE"))

        assert await store.get_by_name("STRASSE") is not None
        assert (await store.get_by_name("straße")).name == "Straße"  # type: ignore[union-attr]

    async def test_resave_same_tool_is_not_conflict(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        tool = await store.save(make_tool(name="Weather"))

        updated = await store.save(tool.model_copy(update={"description": "v2"}))

        assert updated.description == "v2"

    async def test_delete(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        tool = await store.save(make_tool())

        assert await store.delete(tool.id) is True
        assert await store.delete(tool.id) is False
        assert await store.get(tool.id) is None


class TestRecordUsage:
    """Tests for usage accounting."""

    async def test_increments_and_timestamps(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        tool = await store.save(make_tool())

        await store.record_usage(tool.id)

        loaded = await store.get(tool.id)
        assert loaded is not None
        assert loaded.usage_count == 1
        assert loaded.last_used_at is not None
        assert loaded.updated_at >= tool.updated_at

    async def test_concurrent_increments_are_not_lost(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> None:
        tool = await store.save(make_tool())

        await asyncio.gather(*(store.record_usage(tool.id) for _ in range(50)))

        loaded = await store.get(tool.id)
        assert loaded is not None
        assert loaded.usage_count == 50

    async def test_missing_tool(self, store: InMemoryToolStore) -> None:
        with pytest.raises(NotFoundError):
            await store.record_usage(uuid4())


class TestQueries:
    """Tests for listing and search."""

    @pytest.fixture
    async def populated(
        self, store: InMemoryToolStore, make_tool: Callable[..., ToolDefinition]
    ) -> InMemoryToolStore:
        await store.save(make_tool(name="beta", usage_count=5))
        await store.save(make_tool(name="Alpha", usage_count=1, is_active=False))
        await store.save(make_tool(name="gamma", usage_count=9, tool_type=ToolType.MCP))
        await store.save(
            make_tool(name="Alphabet", usage_count=3, tool_type=ToolType.MCP_REST_WRAPPER)
        )
        return store

    async def test_list_active_by_name(self, populated: InMemoryToolStore) -> None:
        names = [t.name for t in await populated.list_active()]

        assert names == ["Alphabet", "beta", "gamma"]

    async def test_list_all_by_name(self, populated: InMemoryToolStore) -> None:
        names = [t.name for t in await populated.list_all()]

        assert names == ["Alpha", "Alphabet", "beta", "gamma"]

    async def test_list_by_type_most_used_first(self, populated: InMemoryToolStore) -> None:
        names = [t.name for t in await populated.list_by_type(ToolType.API)]

        assert names == ["beta", "Alpha"]

    async def test_list_tool_types(self, populated: InMemoryToolStore) -> None:
        assert await populated.list_tool_types() == ["API", "MCP", "MCP_REST_WRAPPER"]

    async def test_search_by_name(self, populated: InMemoryToolStore) -> None:
        names = [t.name for t in await populated.search_by_name("ALPHA")]

        assert names == ["Alphabet", "Alpha"]

    async def test_search_no_match(self, populated: InMemoryToolStore) -> None:
        assert await populated.search_by_name("zzz") == []
