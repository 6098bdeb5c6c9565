"""
Dependency injection container for hashbuf.

Uses dependency-injector for DI with support for:
- Singleton lifetimes and provider overrides
- Interface-based resolution
- A keyed registry of per-algorithm backend selectors
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Optional, TypeVar

from dependency_injector import providers

if TYPE_CHECKING:
    from ..backends.selector import BackendSelector

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for hashbuf.

    Holds the logger and the process-wide backend selectors. Selectors are
    singleton providers, so each algorithm is probed by exactly one selector
    instance until the container is reset.
    """

    _instance: Optional["ServiceContainer"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        """Initialize the container with empty registries."""
        self._providers: dict[type, providers.Provider] = {}
        self._backend_selectors: dict[str, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Core service registration (uses dependency-injector providers)
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface/protocol type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def is_registered(self, interface: type) -> bool:
        """Check whether a provider exists for an interface."""
        return interface in self._providers

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    def override(self, interface: type[T], provider: providers.Provider) -> None:
        """
        Override a registered provider (useful for testing).

        Args:
            interface: The interface to override
            provider: The new provider to use
        """
        self._providers[interface] = provider

    # -------------------------------------------------------------------------
    # Backend selector registry
    # -------------------------------------------------------------------------

    def register_backend_selector(
        self,
        algorithm: str,
        selector: BackendSelector | None = None,
        factory: Callable[[], BackendSelector] | None = None,
    ) -> None:
        """
        Register the backend selector for an algorithm.

        Args:
            algorithm: Algorithm name (e.g., 'blake3', 'sha256')
            selector: Pre-built selector instance
            factory: Factory building the selector lazily on first lookup
        """
        if selector is not None:
            self._backend_selectors[algorithm] = providers.Object(selector)
        elif factory is not None:
            # Thread-safe so concurrent first lookups share one selector
            self._backend_selectors[algorithm] = providers.ThreadSafeSingleton(factory)
        else:
            raise ValueError("Must provide either selector or factory")

    def has_backend_selector(self, algorithm: str) -> bool:
        """Check whether a selector is registered for an algorithm."""
        return algorithm in self._backend_selectors

    def get_backend_selector(self, algorithm: str) -> BackendSelector:
        """
        Get the selector for an algorithm.

        Raises:
            KeyError: If no selector registered
        """
        if algorithm not in self._backend_selectors:
            raise KeyError(f"No backend selector registered for: {algorithm}")
        return self._backend_selectors[algorithm]()

    def list_backend_selectors(self) -> list[str]:
        """List algorithms with a registered selector."""
        return list(self._backend_selectors.keys())


# -------------------------------------------------------------------------
# Module-level convenience functions
# -------------------------------------------------------------------------


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()


def try_resolve(interface: type[T]) -> T | None:
    """Try to resolve a service, returning None if not registered."""
    return get_container().try_resolve(interface)
