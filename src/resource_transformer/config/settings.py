"""Transformer settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration settings.

    All settings can be overridden via environment variables prefixed
    with RESOURCE_TRANSFORMER_ (e.g. RESOURCE_TRANSFORMER_MAX_INCLUDE_DEPTH=5).
    """

    model_config = SettingsConfigDict(
        env_prefix="RESOURCE_TRANSFORMER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Include resolution
    max_include_depth: int = 10  # Nesting guard for self-referencing includes
    parallel_collections: bool = False  # Transform collection elements concurrently
    warn_on_key_collision: bool = True  # Warn (else debug) when an include key shadows a base field

    # Output
    serializer: Literal["plain", "data", "sl_data"] = "plain"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Observability
    enable_metrics: bool = True
    metrics_prefix: str = "resource_transformer"

    @field_validator("max_include_depth")
    @classmethod
    def depth_range(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("max_include_depth must be between 1 and 100")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
