"""
Application bootstrap for hashbuf.

Initializes the DI container with the logger and the per-algorithm backend
selectors. Called lazily on first hash operation; idempotent.
"""

from __future__ import annotations

import threading

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .settings import HashbufSettings, load_settings

_initialized = False
_bootstrap_lock = threading.Lock()


def bootstrap(settings: HashbufSettings | None = None) -> ServiceContainer:
    """
    Bootstrap hashbuf.

    Registrations already present in the container (for example a selector
    injected by a test) are left untouched.

    Args:
        settings: Settings to use; loaded from environment/pyproject if omitted

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    if _initialized:
        return get_container()

    with _bootstrap_lock:
        container = get_container()
        if _initialized:
            return container

        if settings is None:
            settings = load_settings()

        _register_core_services(container, settings)
        _register_backend_selectors(container, settings)

        _initialized = True
        return container


def _register_core_services(container: ServiceContainer, settings: HashbufSettings) -> None:
    """Register the diagnostic logger."""
    from ..services.logging import HashbufLogger

    if container.is_registered(ILogger):  # type: ignore[type-abstract]
        return

    def create_logger() -> ILogger:
        return HashbufLogger.from_config(settings.logging)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def _register_backend_selectors(container: ServiceContainer, settings: HashbufSettings) -> None:
    """Register one lazily-built selector per built-in algorithm."""
    from ..backends import NATIVE_LOADERS, default_selector

    prefer = settings.backend.prefer

    for algorithm in NATIVE_LOADERS:
        if container.has_backend_selector(algorithm):
            continue

        def factory(algorithm: str = algorithm):
            return default_selector(
                algorithm,
                prefer=prefer,
                logger=container.try_resolve(ILogger),  # type: ignore[type-abstract]
            )

        container.register_backend_selector(algorithm, factory=factory)


def reset() -> None:
    """
    Reset the application state.

    Drops the container and every resolved backend. Useful for testing to
    ensure clean state between tests.
    """
    global _initialized
    with _bootstrap_lock:
        ServiceContainer.reset()
        _initialized = False


def is_initialized() -> bool:
    """Check if hashbuf has been bootstrapped."""
    return _initialized
