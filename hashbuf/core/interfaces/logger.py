"""
Logger interface for internal diagnostic output.

hashbuf is a library, so diagnostics go through ILogger and stay silent
unless the host application enables them. Messages use %-style arguments
so formatting is skipped for disabled levels.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Diagnostic sink used by backend selection and settings loading."""

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Change the threshold ('debug', 'info', 'warning' or 'error')."""
