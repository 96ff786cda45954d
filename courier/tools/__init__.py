"""External tool invocation engine.

Lets a chat message invoke a declaratively configured HTTP tool through an
``@{{ToolName}} input`` directive, or lets API callers execute a tool by id.
"""

from courier.tools.directive import Directive, detect_directive
from courier.tools.dispatch import HttpDispatcher
from courier.tools.errors import (
    ToolConfigurationError,
    ToolError,
    ToolInactiveError,
    ToolNotFoundError,
    ToolStatusError,
    ToolTransportError,
)
from courier.tools.executor import ToolExecutor
from courier.tools.models import AuthType, HttpMethod, ToolDefinition, ToolType
from courier.tools.store import ToolStore

__all__ = [
    "AuthType",
    "Directive",
    "HttpDispatcher",
    "HttpMethod",
    "ToolConfigurationError",
    "ToolDefinition",
    "ToolError",
    "ToolExecutor",
    "ToolInactiveError",
    "ToolNotFoundError",
    "ToolStatusError",
    "ToolStore",
    "ToolTransportError",
    "ToolType",
    "detect_directive",
]
