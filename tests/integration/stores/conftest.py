"""Fixtures for PostgreSQL store integration tests.

Tests run only when COURIER_TEST_DATABASE_URL points at a reachable
database; otherwise they are skipped.
"""

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from courier.db.errors import StoreUnavailableError
from courier.db.pool import PostgresPool

# Mirrors migration 001 so tests can run against an empty database
SCHEMA = """
CREATE TABLE IF NOT EXISTS external_tools (
    id UUID PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    description TEXT,
    endpoint_url TEXT NOT NULL,
    http_method VARCHAR(10),
    auth_type VARCHAR(20) NOT NULL DEFAULT 'NONE',
    auth_config TEXT,
    request_template TEXT,
    response_mapping TEXT,
    is_active BOOLEAN NOT NULL DEFAULT true,
    tool_type VARCHAR(50) NOT NULL DEFAULT 'API',
    usage_count BIGINT NOT NULL DEFAULT 0,
    last_used_at TIMESTAMPTZ,
    created_at TIMESTAMPTZ DEFAULT NOW(),
    updated_at TIMESTAMPTZ DEFAULT NOW()
);
CREATE UNIQUE INDEX IF NOT EXISTS uq_external_tools_lower_name
    ON external_tools (LOWER(name));
"""


@pytest.fixture(scope="session")
def postgres_dsn() -> str:
    dsn = os.environ.get("COURIER_TEST_DATABASE_URL")
    if not dsn:
        pytest.skip("COURIER_TEST_DATABASE_URL not set")
    return dsn


@pytest_asyncio.fixture
async def postgres_pool(postgres_dsn: str) -> AsyncIterator[PostgresPool]:
    """Connected pool over a clean external_tools table."""
    pool = PostgresPool(postgres_dsn, min_size=1, max_size=5)
    try:
        await pool.connect()
    except StoreUnavailableError as e:
        pytest.skip(f"PostgreSQL unreachable: {e}")

    async with pool.acquire() as conn:
        await conn.execute(SCHEMA)
        await conn.execute("DELETE FROM external_tools")

    yield pool

    await pool.close()
