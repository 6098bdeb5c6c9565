"""
Core infrastructure for hashbuf.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Settings loading (pydantic-settings)
- Interface definitions for primitives and logging
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, try_resolve
from .exceptions import (
    BackendLoadError,
    ConfigValidationError,
    FreedError,
    HashbufBackendError,
    HashbufConfigError,
    HashbufException,
    InvalidKeyLength,
    UnknownAlgorithmError,
    UnsupportedEncoding,
)
from .settings import HashbufSettings, load_settings

__all__ = [
    "BackendLoadError",
    "ConfigValidationError",
    "FreedError",
    "HashbufBackendError",
    "HashbufConfigError",
    "HashbufException",
    "HashbufSettings",
    "InvalidKeyLength",
    "ServiceContainer",
    "UnknownAlgorithmError",
    "UnsupportedEncoding",
    "bootstrap",
    "get_container",
    "is_initialized",
    "load_settings",
    "reset",
    "try_resolve",
]
