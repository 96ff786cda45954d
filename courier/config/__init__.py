"""Configuration for Courier.

    from courier.config import get_settings

    timeout = get_settings().tools.timeout_seconds
"""

from functools import lru_cache

from courier.config.settings import Settings, config_dir


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        FileNotFoundError: If the config directory has no default.toml
    """
    default_file = config_dir() / "default.toml"
    if not default_file.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_file}. "
            "Create config/default.toml or set COURIER_CONFIG_DIR."
        )
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and load them again."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["Settings", "get_settings", "reload_settings"]
