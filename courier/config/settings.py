"""Root settings model for Courier configuration.

Values come from, highest priority first: constructor arguments, COURIER_*
environment variables (nested keys joined with "__"),
config/{COURIER_ENV}.toml, config/default.toml, then the model defaults.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from courier.config.models.api import APIConfig
from courier.config.models.observability import ObservabilityConfig
from courier.config.models.storage import StorageConfig
from courier.config.models.tools import ToolsConfig

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_DIR_VAR = "COURIER_CONFIG_DIR"
ENVIRONMENT_VAR = "COURIER_ENV"
DEFAULT_ENVIRONMENT = "development"


def config_dir() -> Path:
    """Directory holding the TOML files.

    COURIER_CONFIG_DIR wins; otherwise the first config/ found walking up
    from the working directory.
    """
    override = os.environ.get(CONFIG_DIR_VAR)
    if override:
        return Path(override)

    current = Path.cwd()
    for directory in (current, *current.parents[:4]):
        candidate = directory / "config"
        if candidate.is_dir():
            return candidate
    return Path("config")


def environment() -> str:
    return os.environ.get(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)


def config_files() -> list[Path]:
    """Existing TOML files in merge order: default first, environment last."""
    directory = config_dir()
    candidates = [directory / "default.toml", directory / f"{environment()}.toml"]
    return [path for path in candidates if path.is_file()]


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="COURIER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="courier", description="Application name for logging/tracing")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Logging level")

    api: APIConfig = Field(default_factory=APIConfig, description="API server configuration")
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Storage backend configuration",
    )
    tools: ToolsConfig = Field(
        default_factory=ToolsConfig,
        description="External tool execution configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Put one TOML source per file below the environment.

        Sources are deep-merged, so an environment file only needs the keys
        it changes.
        """
        toml_sources = [
            TomlConfigSettingsSource(settings_cls, toml_file=path)
            for path in reversed(config_files())
        ]
        return (init_settings, env_settings, *toml_sources)
