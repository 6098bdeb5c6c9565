"""
Pydantic Settings for hashbuf configuration.

Provides settings loading from pyproject.toml, environment variables, and defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .exceptions import ConfigValidationError
from .models.config import BackendConfig, LoggingConfig, StreamConfig

# Explicit config file; takes precedence over pyproject.toml discovery
CONFIG_ENV_VAR = "HASHBUF_CONFIG"


def _get_logger():
    from ..services.logging import NullLogger
    from .di import resolve_or_default
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find the nearest pyproject.toml with a [tool.hashbuf] section.

    Walks up from start_dir (or cwd).

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        pyproject = parent / "pyproject.toml"
        if not pyproject.exists():
            continue
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
            if "hashbuf" in data.get("tool", {}):
                return pyproject
        except tomllib.TOMLDecodeError as e:
            _get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
        except OSError as e:
            _get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            # pyproject.toml keeps settings under [tool.hashbuf]; other files are bare
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("hashbuf", {})

            self._data = data
            self._data["_config_file"] = str(path)

        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to parse config file: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        field_value = data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return TOML data for settings initialization."""
        return {k: v for k, v in self._load_toml().items() if not k.startswith("_")}


class HashbufSettings(BaseSettings):
    """hashbuf configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (HASHBUF_<section>__<field>)
    3. [tool.hashbuf] in the nearest pyproject.toml
    4. Model defaults
    """

    model_config = {
        "env_prefix": "HASHBUF_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    backend: BackendConfig = BackendConfig()
    logging: LoggingConfig = LoggingConfig()
    stream: StreamConfig = StreamConfig()

    # Internal fields (not from config)
    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        Note: config_path/start_dir cannot be passed through here, so
        load_settings() hands them over via module-level variables.
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        """Path of the TOML file the settings were read from, if any."""
        return self._config_file

    @property
    def config_error(self) -> str | None:
        """Error encountered while reading the TOML file, if any."""
        return self._config_error

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dict."""
        result: dict[str, Any] = {
            "backend": self.backend.model_dump(),
            "logging": self.logging.model_dump(),
            "stream": self.stream.model_dump(),
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(config_path: Path | None = None, start_dir: str | None = None) -> HashbufSettings:
    """Load hashbuf settings from config file and environment.

    Args:
        config_path: Explicit path to a TOML config file (default: $HASHBUF_CONFIG)
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        HashbufSettings instance with all sources merged

    Raises:
        ConfigValidationError: If a configured value fails validation
    """
    global _current_config_path, _current_start_dir

    if config_path is None and os.environ.get(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])

    _current_config_path = config_path
    _current_start_dir = start_dir

    try:
        try:
            settings = HashbufSettings()
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            raise ConfigValidationError(
                f"Invalid hashbuf configuration: {first['msg']}", key=key, cause=e
            ) from e

        # Copy internal fields from TOML source
        toml_data = TomlConfigSource(HashbufSettings, config_path, start_dir)._load_toml()
        if "_config_file" in toml_data:
            settings._config_file = toml_data["_config_file"]
        if "_config_error" in toml_data:
            settings._config_error = toml_data["_config_error"]

        return settings
    finally:
        _current_config_path = None
        _current_start_dir = None
