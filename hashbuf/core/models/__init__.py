"""
Pydantic models for hashbuf configuration.
"""

from .config import (
    DEFAULT_CHUNK_SIZE,
    BackendConfig,
    BackendPreference,
    ConfigBaseModel,
    LoggingConfig,
    LogLevel,
    StreamConfig,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "BackendConfig",
    "BackendPreference",
    "ConfigBaseModel",
    "LogLevel",
    "LoggingConfig",
    "StreamConfig",
]
