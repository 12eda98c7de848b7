"""Configuration management for mcpline."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MCPLINE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Engine Configuration
    engine: str = Field(default="echo", description="Name of the engine plugin to drive")
    model: str | None = Field(default=None, description="Model to use, e.g. ollama:qwen2.5:3b")
    config_file: Path = Field(default=Path("mcphost.json"), description="Engine configuration file")
    system_prompt: str | None = Field(default=None, description="System prompt; engine default when unset")

    # Protocol Configuration
    strict_approval: bool = Field(default=False, description="Re-read until an explicit allow or deny arrives")
    emit_errors: bool = Field(default=False, description="Send an error message before a fatal engine failure")
    read_chunk_size: int = Field(default=4096, gt=0, description="Bytes requested per stdin read")

    # Logging Configuration
    debug: bool = Field(default=False, description="Enable debug logging")
    log_level: str = Field(default="INFO", description="Log level when debug is off")
    log_file: Path | None = Field(default=None, description="Truncate and write logs here instead of stderr")
    log_profile: Literal["default", "rich"] = Field(default="default", description="Log output style")

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


def load_settings(**overrides: object) -> Settings:
    """Load settings from env/.env, then apply non-None overrides."""

    settings = Settings()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    return settings
