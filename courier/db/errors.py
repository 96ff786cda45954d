"""Errors raised by tool store backends.

Backend exceptions (asyncpg and friends) never leave a store; they are
wrapped in one of these, with the original kept as ``cause``.
"""

from uuid import UUID


class StoreError(Exception):
    """Base class for tool store failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StoreUnavailableError(StoreError):
    """The backend could not be reached or a statement failed."""


class NotFoundError(StoreError):
    """An operation addressed a tool id that does not exist."""

    def __init__(self, tool_id: UUID) -> None:
        super().__init__(f"Tool not found: {tool_id}")
        self.tool_id = tool_id


class ConflictError(StoreError):
    """Another tool already uses the name, compared case-insensitively."""

    def __init__(self, name: str, cause: Exception | None = None) -> None:
        super().__init__(f"Tool name already in use: {name}", cause)
        self.name = name


class InvalidRecordError(StoreError):
    """The backend rejected a field value (length, encoding, type)."""
