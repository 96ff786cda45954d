"""Configuration model exports.

    from courier.config.models import StorageConfig, ToolsConfig
"""

from courier.config.models.api import APIConfig
from courier.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from courier.config.models.storage import StorageConfig, ToolStoreConfig
from courier.config.models.tools import ToolsConfig

__all__ = [
    "APIConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "StorageConfig",
    "ToolStoreConfig",
    "ToolsConfig",
    "TracingConfig",
]
