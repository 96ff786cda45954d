"""External tool execution configuration."""

from pydantic import BaseModel, Field


class ToolsConfig(BaseModel):
    """Settings for outbound tool calls and directive handling."""

    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Deadline for a single outbound tool call",
    )
    directive_envelope: bool = Field(
        default=False,
        description="Wrap directive results in the tool-result envelope",
    )
    seed_weather_tool: bool = Field(
        default=True,
        description="Create the built-in Weather tool at startup if missing",
    )
    weather_api_key: str | None = Field(
        default=None,
        description="OpenWeather API key used by the seeded Weather tool",
    )
