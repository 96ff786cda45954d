"""Dependency injection for API routes.

Provides FastAPI dependencies for the tool store, the HTTP dispatcher and
the executor. Instances are created once and reused; tests override them
through app.dependency_overrides.
"""

import asyncio
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from courier import config
from courier.config.settings import Settings
from courier.db.pool import PostgresPool
from courier.observability.logging import get_logger
from courier.tools.dispatch import HttpDispatcher
from courier.tools.executor import ToolExecutor
from courier.tools.store import ToolStore
from courier.tools.stores.inmemory import InMemoryToolStore
from courier.tools.stores.postgres import PostgresToolStore

logger = get_logger(__name__)

# Shared instances - created once and reused
_postgres_pool: PostgresPool | None = None
_tool_store: ToolStore | None = None
_http_dispatcher: HttpDispatcher | None = None
_tool_executor: ToolExecutor | None = None

# Serializes first-time creation of the pool; created inside the running loop
_pool_lock: asyncio.Lock | None = None


@lru_cache
def get_settings() -> Settings:
    """Get application settings.

    Without a config/default.toml the app still starts on model defaults
    and COURIER_* variables.
    """
    try:
        return config.get_settings()
    except FileNotFoundError as e:
        logger.warning("config_file_not_found", error=str(e))
        return Settings()


async def get_postgres_pool(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PostgresPool:
    """Get the shared PostgreSQL connection pool, connecting on first access."""
    global _postgres_pool, _pool_lock
    if _postgres_pool is not None:
        return _postgres_pool

    if _pool_lock is None:
        _pool_lock = asyncio.Lock()
    async with _pool_lock:
        if _postgres_pool is None:
            pool = PostgresPool.from_config(settings.storage.tools)
            await pool.connect()
            _postgres_pool = pool
    return _postgres_pool


async def get_tool_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ToolStore:
    """Get the ToolStore selected by storage.tools.backend.

    A configured postgres backend that cannot connect is an error; there is
    no silent fallback to memory.
    """
    global _tool_store
    if _tool_store is None:
        backend = settings.storage.tools.backend
        if backend == "postgres":
            pool = await get_postgres_pool(settings)
            store: ToolStore = PostgresToolStore(pool)
        else:
            store = InMemoryToolStore()
        if _tool_store is None:
            _tool_store = store
            logger.info("tool_store_initialized", store_type=backend)
    return _tool_store


def get_http_dispatcher(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HttpDispatcher:
    """Get the shared outbound HTTP dispatcher."""
    global _http_dispatcher
    if _http_dispatcher is None:
        _http_dispatcher = HttpDispatcher(timeout=settings.tools.timeout_seconds)
        logger.info(
            "http_dispatcher_initialized",
            timeout_seconds=settings.tools.timeout_seconds,
        )
    return _http_dispatcher


def get_tool_executor(
    store: Annotated[ToolStore, Depends(get_tool_store)],
    dispatcher: Annotated[HttpDispatcher, Depends(get_http_dispatcher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ToolExecutor:
    """Get the ToolExecutor wired to the shared store and dispatcher."""
    global _tool_executor
    if _tool_executor is None:
        _tool_executor = ToolExecutor(
            store,
            dispatcher,
            directive_envelope=settings.tools.directive_envelope,
        )
        logger.info("tool_executor_initialized")
    return _tool_executor


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
ToolStoreDep = Annotated[ToolStore, Depends(get_tool_store)]
ToolExecutorDep = Annotated[ToolExecutor, Depends(get_tool_executor)]


async def reset_dependencies() -> None:
    """Reset all cached dependencies.

    Closes the HTTP client and the connection pool before resetting. Used on
    shutdown and in tests.
    """
    global _postgres_pool, _pool_lock, _tool_store, _http_dispatcher, _tool_executor

    if _http_dispatcher is not None:
        await _http_dispatcher.close()
        _http_dispatcher = None

    if _postgres_pool is not None:
        await _postgres_pool.close()
        _postgres_pool = None

    _pool_lock = None
    _tool_store = None
    _tool_executor = None
    get_settings.cache_clear()
    config.get_settings.cache_clear()
