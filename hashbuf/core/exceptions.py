"""
Custom exception hierarchy for hashbuf.

All caller-facing errors are raised synchronously at the call that caused
them and never carry a partial digest.
"""

from __future__ import annotations


class HashbufException(Exception):
    """
    Base exception for all hashbuf errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (key lengths, algorithm names, etc.)
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Hasher Errors
# =============================================================================


class InvalidKeyLength(HashbufException, ValueError):
    """
    Key length violates the algorithm's requirement.

    Raised by keyed hasher construction and keyed MAC calls. Inherits from
    ValueError so callers validating input generically still catch it.
    """

    def __init__(
        self,
        message: str = "Key must be exactly 32 bytes",
        *,
        expected: int | None = None,
        actual: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if expected is not None:
            ctx["expected"] = expected
        if actual is not None:
            ctx["actual"] = actual
        super().__init__(message, context=ctx, cause=cause)


class FreedError(HashbufException, RuntimeError):
    """Operation invoked on a hasher whose resources were already released."""

    def __init__(
        self,
        message: str = "Hasher has been freed",
        *,
        algorithm: str | None = None,
        context: dict | None = None,
    ) -> None:
        ctx = context or {}
        if algorithm:
            ctx["algorithm"] = algorithm
        super().__init__(message, context=ctx)


class UnsupportedEncoding(HashbufException, ValueError):
    """digest() called with an encoding other than raw bytes or hex."""

    def __init__(
        self,
        message: str,
        *,
        encoding: object = None,
        context: dict | None = None,
    ) -> None:
        ctx = context or {}
        ctx["encoding"] = encoding
        super().__init__(message, context=ctx)


class UnknownAlgorithmError(HashbufException, ValueError):
    """Requested hash algorithm is not registered."""

    def __init__(
        self,
        message: str,
        *,
        algorithm: str | None = None,
        context: dict | None = None,
    ) -> None:
        ctx = context or {}
        if algorithm:
            ctx["algorithm"] = algorithm
        super().__init__(message, context=ctx)


# =============================================================================
# Backend Errors
# =============================================================================


class HashbufBackendError(HashbufException):
    """Base class for backend-related errors."""

    pass


class BackendLoadError(HashbufBackendError):
    """
    Accelerated primitive could not be loaded or failed its self-test.

    Internal only: BackendSelector converts it into a permanent fallback
    to the portable primitive.
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if algorithm:
            ctx["algorithm"] = algorithm
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Configuration Errors
# =============================================================================


class HashbufConfigError(HashbufException):
    """Base class for configuration-related errors."""

    pass


class ConfigValidationError(HashbufConfigError, ValueError):
    """
    Invalid configuration value.

    Inherits from ValueError for code that catches ValueError for
    validation errors.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)
