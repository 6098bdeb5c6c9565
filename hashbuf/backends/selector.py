"""
Backend selection.

A BackendSelector decides once whether the accelerated primitive for an
algorithm can be loaded, and hands out the resolved primitive for the rest
of the process. A failed probe is final: there is no re-probe path, so a
transient load failure only clears on process restart.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from ..core.interfaces.logger import ILogger
from ..core.interfaces.primitive import Backend, HashPrimitive
from ..core.models.config import BackendPreference
from ..services.logging import NullLogger


class BackendSelector:
    """
    Init-once resolver for one algorithm's HashPrimitive.

    Resolution is single-flight: concurrent first calls to resolve() run the
    native loader at most once and all observe the same primitive.

    Example:
        selector = BackendSelector("blake3", load_blake3, PortableBlake3)
        primitive = selector.resolve()
        selector.backend  # Backend.NATIVE or Backend.PORTABLE
    """

    def __init__(
        self,
        algorithm: str,
        native_loader: Callable[[], HashPrimitive],
        portable_factory: Callable[[], HashPrimitive],
        prefer: BackendPreference = "auto",
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize the selector without probing anything.

        Args:
            algorithm: Algorithm name, used for diagnostics
            native_loader: Returns the accelerated primitive or raises
            portable_factory: Returns the always-available portable primitive
            prefer: 'auto' probes native first; 'portable' skips the probe
            logger: Diagnostic logger (defaults to NullLogger)
        """
        self.algorithm = algorithm
        self._native_loader = native_loader
        self._portable_factory = portable_factory
        self._prefer = prefer
        self._logger = logger or NullLogger()
        self._lock = threading.Lock()
        self._primitive: HashPrimitive | None = None

    @property
    def resolved(self) -> bool:
        """Whether resolution has already happened."""
        return self._primitive is not None

    @property
    def backend(self) -> Backend | None:
        """The resolved backend, or None before first use."""
        primitive = self._primitive
        return primitive.backend if primitive is not None else None

    def resolve(self) -> HashPrimitive:
        """
        Return the process-wide primitive, probing on first call.

        Returns:
            The native primitive if it loaded, otherwise the portable one
        """
        primitive = self._primitive
        if primitive is not None:
            return primitive

        with self._lock:
            if self._primitive is None:
                self._primitive = self._probe()
            return self._primitive

    def _probe(self) -> HashPrimitive:
        if self._prefer == "portable":
            self._logger.debug("%s: portable backend requested by configuration", self.algorithm)
            return self._portable_factory()

        try:
            primitive = self._native_loader()
        except Exception as e:
            # Any load failure is permanent for this process
            self._logger.debug(
                "%s: native backend unavailable, using portable backend: %s",
                self.algorithm,
                e,
            )
            return self._portable_factory()

        self._logger.debug("%s: using native backend", self.algorithm)
        return primitive

    def __repr__(self) -> str:
        state = self.backend.value if self.backend is not None else "unresolved"
        return f"<BackendSelector {self.algorithm}: {state}>"
