"""
Click context extension for the hashbuf CLI.

Provides HashbufContext, passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.bootstrap import bootstrap
from ..core.settings import HashbufSettings, load_settings
from ..registry import HashAlgorithmRegistry, get_registry


@dataclass
class HashbufContext:
    """Extended context passed through Click command chain.

    Attributes:
        settings: Loaded configuration
        registry: Algorithm registry used to look up --algorithm values
    """

    settings: HashbufSettings
    registry: HashAlgorithmRegistry = field(default_factory=get_registry)

    @classmethod
    def create(cls) -> HashbufContext:
        """Load settings and bootstrap the container with them."""
        settings = load_settings()
        bootstrap(settings)
        return cls(settings=settings)

    @property
    def chunk_size(self) -> int:
        return self.settings.stream.chunk_size
