"""
Hash primitive backends and process-wide backend resolution.

Each supported algorithm has a native loader and a portable factory.
The selector for an algorithm lives in the service container, so tests can
replace it (or reset the container) to force either backend.
"""

from __future__ import annotations

from collections.abc import Callable

from ..core.exceptions import UnknownAlgorithmError
from ..core.interfaces.logger import ILogger
from ..core.interfaces.primitive import Backend, HashPrimitive
from ..core.models.config import BackendPreference
from .native import load_blake3, load_sha256
from .portable import PortableBlake3, PortableSha256
from .selector import BackendSelector

NATIVE_LOADERS: dict[str, Callable[[], HashPrimitive]] = {
    "blake3": load_blake3,
    "sha256": load_sha256,
}

PORTABLE_FACTORIES: dict[str, Callable[[], HashPrimitive]] = {
    "blake3": PortableBlake3,
    "sha256": PortableSha256,
}


def default_selector(
    algorithm: str,
    prefer: BackendPreference = "auto",
    logger: ILogger | None = None,
) -> BackendSelector:
    """
    Build the standard selector for a built-in algorithm.

    Raises:
        UnknownAlgorithmError: If the algorithm has no registered backends
    """
    if algorithm not in NATIVE_LOADERS:
        raise UnknownAlgorithmError(f"Unknown hash algorithm: {algorithm}", algorithm=algorithm)
    return BackendSelector(
        algorithm,
        NATIVE_LOADERS[algorithm],
        PORTABLE_FACTORIES[algorithm],
        prefer=prefer,
        logger=logger,
    )


def get_selector(algorithm: str) -> BackendSelector:
    """Return the process-wide selector for an algorithm, bootstrapping on first use."""
    from ..core.bootstrap import bootstrap

    container = bootstrap()
    try:
        return container.get_backend_selector(algorithm)
    except KeyError as e:
        raise UnknownAlgorithmError(
            f"Unknown hash algorithm: {algorithm}", algorithm=algorithm
        ) from e


def get_primitive(algorithm: str) -> HashPrimitive:
    """Return the resolved primitive for an algorithm."""
    return get_selector(algorithm).resolve()


def active_backend(algorithm: str) -> Backend:
    """Return the backend in use for an algorithm, resolving it if needed."""
    return get_primitive(algorithm).backend


__all__ = [
    "NATIVE_LOADERS",
    "PORTABLE_FACTORIES",
    "Backend",
    "BackendSelector",
    "active_backend",
    "default_selector",
    "get_primitive",
    "get_selector",
]
