"""
Hash algorithm registry.

Maps algorithm names to HashAlgorithm descriptors so callers (and the CLI)
can pick an algorithm by name.
"""

from __future__ import annotations

import threading

from .algorithms import BLAKE3, SHA256, HashAlgorithm
from .core.exceptions import UnknownAlgorithmError
from .core.interfaces.primitive import BytesLike
from .hasher import Hasher


class HashAlgorithmRegistry:
    """
    Registry of hash algorithm descriptors.

    Example:
        registry = HashAlgorithmRegistry()

        hasher = registry.create_hasher("blake3")

        registry.register(my_algorithm)
        digest = registry.compute_hash("my_algorithm", b"data")
    """

    def __init__(self, register_defaults: bool = True):
        """
        Initialize the registry.

        Args:
            register_defaults: If True, register BLAKE3 and SHA-256
        """
        self._algorithms: dict[str, HashAlgorithm] = {}
        if register_defaults:
            self.register(BLAKE3)
            self.register(SHA256)

    def register(self, algorithm: HashAlgorithm) -> None:
        """Register (or replace) a descriptor under its lowercased name."""
        self._algorithms[algorithm.name.lower()] = algorithm

    def get(self, name: str) -> HashAlgorithm | None:
        """
        Get descriptor by algorithm name.

        Returns:
            HashAlgorithm or None if not found
        """
        return self._algorithms.get(name.lower())

    def require(self, name: str) -> HashAlgorithm:
        """
        Get descriptor by algorithm name.

        Raises:
            UnknownAlgorithmError: If the algorithm is not registered
        """
        algorithm = self.get(name)
        if algorithm is None:
            raise UnknownAlgorithmError(f"Unknown hash algorithm: {name}", algorithm=name)
        return algorithm

    def create_hasher(self, name: str) -> Hasher:
        """Create a streaming hasher for the named algorithm."""
        return self.require(name).create_hasher()

    def compute_hash(self, name: str, data: BytesLike) -> str:
        """
        Compute the hex digest of data with the named algorithm.

        Returns:
            Lowercase hex digest
        """
        return self.require(name).hash_hex(data)

    @property
    def available_algorithms(self) -> list[str]:
        """List available algorithm names."""
        return list(self._algorithms.keys())

    def __contains__(self, name: str) -> bool:
        """Check if algorithm is registered."""
        return name.lower() in self._algorithms


_default_registry: HashAlgorithmRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> HashAlgorithmRegistry:
    """Return the shared registry of built-in algorithms."""
    global _default_registry
    if _default_registry is None:
        with _registry_lock:
            if _default_registry is None:
                _default_registry = HashAlgorithmRegistry()
    return _default_registry


def get_algorithm(name: str) -> HashAlgorithm:
    """
    Look up a built-in or registered algorithm by name.

    Raises:
        UnknownAlgorithmError: If the algorithm is not registered
    """
    return get_registry().require(name)
