"""Shared test fixtures for the Courier test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from courier.tools.models import AuthType, HttpMethod, ToolDefinition


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"COURIER_DEBUG": "true"}):
                ...
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    return _env_override


@pytest.fixture(autouse=True)
def isolated_config(test_config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point settings at an empty per-test config directory.

    Tests see model defaults plus whatever TOML they write with
    mock_toml_files, never the repository's own config/.
    """
    monkeypatch.setenv("COURIER_CONFIG_DIR", str(test_config_dir))
    monkeypatch.setenv("COURIER_ENV", "test")
    return test_config_dir


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings caches before and after each test."""
    from courier.api.dependencies import get_settings as get_api_settings
    from courier.config import get_settings

    get_settings.cache_clear()
    get_api_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_api_settings.cache_clear()


@pytest.fixture
def make_tool() -> Callable[..., ToolDefinition]:
    """Factory for tool definitions with sensible defaults.

    Usage:
        tool = make_tool(name="Echo", http_method=HttpMethod.POST)
    """

    def _make_tool(**overrides: Any) -> ToolDefinition:
        fields: dict[str, Any] = {
            "name": "Echo",
            "endpoint_url": "https://tools.example.com/echo",
            "http_method": HttpMethod.GET,
            "auth_type": AuthType.NONE,
        }
        fields.update(overrides)
        return ToolDefinition(**fields)

    return _make_tool
