"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "postgres"]


class ToolStoreConfig(BaseModel):
    """Configuration for the tool definition store."""

    backend: BackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    connection_url: str | None = Field(
        default=None,
        description="Connection URL (required for the postgres backend)",
    )
    pool_min_size: int = Field(
        default=2,
        gt=0,
        description="Minimum connections to keep open",
    )
    pool_max_size: int = Field(
        default=10,
        gt=0,
        description="Maximum connections in pool",
    )
    command_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )


class StorageConfig(BaseModel):
    """Storage configuration for all stores."""

    tools: ToolStoreConfig = Field(
        default_factory=ToolStoreConfig,
        description="Tool definition store",
    )
