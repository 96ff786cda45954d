"""asyncpg pool shared by the PostgreSQL tool store."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from courier.config.models.storage import ToolStoreConfig
from courier.db.errors import StoreUnavailableError
from courier.observability.logging import get_logger

logger = get_logger(__name__)


class PostgresPool:
    """Lazily connected asyncpg pool.

    The first acquire() opens the pool; concurrent first callers wait on the
    same connect instead of each opening their own.
    """

    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 2,
        max_size: int = 10,
        command_timeout: float = 60.0,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None
        self._connect_lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: ToolStoreConfig) -> "PostgresPool":
        """Build a pool from storage.tools settings.

        Raises:
            StoreUnavailableError: If no connection_url is configured
        """
        if not config.connection_url:
            raise StoreUnavailableError(
                "storage.tools.connection_url is required for the postgres backend"
            )
        return cls(
            config.connection_url,
            min_size=config.pool_min_size,
            max_size=config.pool_max_size,
            command_timeout=config.command_timeout,
        )

    async def connect(self) -> None:
        async with self._connect_lock:
            if self._pool is not None:
                return
            try:
                self._pool = await asyncpg.create_pool(
                    dsn=self._dsn,
                    min_size=self._min_size,
                    max_size=self._max_size,
                    command_timeout=self._command_timeout,
                )
            except (OSError, asyncpg.PostgresError) as e:
                logger.error("postgres_pool_connection_failed", error=str(e))
                raise StoreUnavailableError(
                    f"Failed to connect to PostgreSQL: {e}", cause=e
                ) from e
            logger.info(
                "postgres_pool_connected",
                min_size=self._min_size,
                max_size=self._max_size,
            )

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("postgres_pool_closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        if self._pool is None:
            await self.connect()
        assert self._pool is not None

        async with self._pool.acquire() as connection:
            yield connection
