"""Tool definition stores."""

from courier.tools.store import ToolStore
from courier.tools.stores.inmemory import InMemoryToolStore
from courier.tools.stores.postgres import PostgresToolStore

__all__ = [
    "ToolStore",
    "InMemoryToolStore",
    "PostgresToolStore",
]
