"""
Configuration models.

Provides Pydantic models for hashbuf configuration with validation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

# Type aliases
BackendPreference = Literal["auto", "portable"]
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_CHUNK_SIZE = 8 * 1024 * 1024  # 8MB


class ConfigBaseModel(BaseModel):
    """Base model for config sections with relaxed strict mode for TOML/env loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML and env strings
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class BackendConfig(ConfigBaseModel):
    """Backend selection configuration section."""

    prefer: BackendPreference = "auto"

    @field_validator("prefer", mode="before")
    @classmethod
    def normalize_prefer(cls, v: str) -> str:
        """Accept any casing from env vars."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class LoggingConfig(ConfigBaseModel):
    """Internal logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False


class StreamConfig(ConfigBaseModel):
    """Chunked file hashing configuration section."""

    chunk_size: int = DEFAULT_CHUNK_SIZE

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("chunk_size must be positive")
        return v
