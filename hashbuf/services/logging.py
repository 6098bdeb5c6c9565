"""
Logger implementation for hashbuf internal diagnostics.

Records go to the stdlib ``hashbuf`` logger. Enabling console or file
output attaches handlers owned by hashbuf; with neither enabled the records
propagate to whatever logging the host application configured.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ..core.interfaces.logger import ILogger
from ..core.models.config import LoggingConfig

# Marks handlers this module installed so a re-bootstrap replaces them
_OWNED_ATTR = "_hashbuf_owned"


class HashbufLogger(ILogger):
    """
    ILogger backed by stdlib logging.

    Example:
        logger = HashbufLogger.from_config(LoggingConfig(console=True, level="debug"))
        logger.debug("%s: using native backend", "blake3")
    """

    LOG_FILE_PATH = Path.home() / ".hashbuf" / "hashbuf.log"
    MAX_FILE_SIZE = 5 * 1024 * 1024
    BACKUP_COUNT = 2
    FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

    LEVELS: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "hashbuf",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: stdlib logger name
            level: Threshold (debug, info, warning, error)
            console_enabled: Attach a stderr handler
            file_enabled: Attach a rotating file handler
            log_file: File for the file handler (default ~/.hashbuf/hashbuf.log)
        """
        self._logger = logging.getLogger(name)
        self._handlers: list[logging.Handler] = []

        for handler in list(self._logger.handlers):
            if getattr(handler, _OWNED_ATTR, False):
                self._logger.removeHandler(handler)
                handler.close()

        if console_enabled:
            self._attach(logging.StreamHandler(sys.stderr))
        if file_enabled:
            path = log_file or self.LOG_FILE_PATH
            path.parent.mkdir(parents=True, exist_ok=True)
            self._attach(
                RotatingFileHandler(path, maxBytes=self.MAX_FILE_SIZE, backupCount=self.BACKUP_COUNT)
            )

        # Own handlers replace propagation; otherwise defer to the host
        self._logger.propagate = not self._handlers
        self.set_level(level)

    @classmethod
    def from_config(cls, config: LoggingConfig, name: str = "hashbuf") -> HashbufLogger:
        """Build a logger from the [logging] settings section."""
        return cls(
            name=name,
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
        )

    def _attach(self, handler: logging.Handler) -> None:
        handler.setFormatter(logging.Formatter(self.FORMAT))
        setattr(handler, _OWNED_ATTR, True)
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    @property
    def handlers(self) -> list[logging.Handler]:
        """Handlers installed by this logger."""
        return list(self._handlers)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Apply the threshold to the logger and every owned handler."""
        value = self.LEVELS.get(level.lower(), logging.WARNING)
        self._logger.setLevel(value)
        for handler in self._handlers:
            handler.setLevel(value)


class NullLogger(ILogger):
    """Discards everything; used before bootstrap and in tests."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
