"""PostgreSQL plumbing: connection pool, store errors and migrations."""

from courier.db.errors import (
    ConflictError,
    InvalidRecordError,
    NotFoundError,
    StoreError,
    StoreUnavailableError,
)

__all__ = [
    "ConflictError",
    "InvalidRecordError",
    "NotFoundError",
    "StoreError",
    "StoreUnavailableError",
]
