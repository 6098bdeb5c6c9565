"""
Streaming hashers with explicit lifetimes.

A Hasher owns exactly one backend context from construction until free().
finalize() is non-consumptive: more data may follow and repeated calls
agree. digest() is consumptive: it returns the result and frees the hasher,
mirroring ``hashlib``-style ``digest()`` / ``digest('hex')`` callers.

Usage:
    hasher = Blake3Hasher()
    hasher.update(chunk1).update(chunk2)
    partial = hasher.finalize()   # hasher still usable
    final = hasher.digest("hex")  # hasher is now freed

    with Sha256Hasher() as hasher:
        hasher.update(data)
        result = hasher.finalize()
"""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar, Literal, overload

from .backends import get_primitive
from .core.exceptions import FreedError
from .core.interfaces.primitive import Backend, BytesLike, HashPrimitive, IncrementalContext
from .core.validation import check_blake3_key, check_encoding


class Hasher:
    """
    Base class for streaming hashers.

    Subclasses set ``algorithm`` and, where the algorithm supports it, pass
    a key through to the primitive.

    States: Active until free() or digest(), then Freed (terminal). Every
    operation on a Freed hasher except free() raises FreedError.
    """

    algorithm: ClassVar[str]
    digest_length: ClassVar[int] = 32

    def __init__(
        self,
        *,
        key: BytesLike | None = None,
        primitive: HashPrimitive | None = None,
    ) -> None:
        self._primitive = primitive if primitive is not None else get_primitive(self.algorithm)
        self._ctx: IncrementalContext | None = self._primitive.create(key)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_freed(self) -> bool:
        """Whether the hasher has released its backend context."""
        return self._ctx is None

    @property
    def backend(self) -> Backend:
        """The backend this hasher is bound to."""
        return self._primitive.backend

    def _active(self) -> IncrementalContext:
        ctx = self._ctx
        if ctx is None:
            raise FreedError(algorithm=self.algorithm)
        return ctx

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def update(self, data: BytesLike) -> Hasher:
        """
        Feed data into the hasher.

        Returns:
            self, for chaining

        Raises:
            FreedError: If the hasher was freed
        """
        self._active().update(data)
        return self

    def finalize(self) -> bytes:
        """
        Return the digest of everything fed so far.

        The hasher is NOT consumed: update() may be called afterwards and
        finalize() called again for the digest of the combined data.

        Raises:
            FreedError: If the hasher was freed
        """
        return self._active().finalize()

    def reset(self) -> Hasher:
        """
        Restore the initial state; a construction-time key is preserved.

        Returns:
            self, for chaining

        Raises:
            FreedError: If the hasher was freed
        """
        self._active().reset()
        return self

    def free(self) -> None:
        """Release the backend context. Safe to call any number of times."""
        ctx = self._ctx
        if ctx is not None:
            self._ctx = None
            ctx.release()

    @overload
    def digest(self, encoding: None = None) -> bytes: ...

    @overload
    def digest(self, encoding: Literal["raw"]) -> bytes: ...

    @overload
    def digest(self, encoding: Literal["hex"]) -> str: ...

    def digest(self, encoding: str | None = None) -> bytes | str:
        """
        Consumptive finalize: return the digest and free the hasher.

        Args:
            encoding: None or 'raw' for bytes, 'hex' for a lowercase hex string
                computed by the backend directly

        Raises:
            FreedError: If the hasher was already freed
            UnsupportedEncoding: For any other encoding; the hasher stays active
        """
        ctx = self._active()
        as_hex = check_encoding(encoding)
        try:
            return ctx.finalize_hex() if as_hex else ctx.finalize()
        finally:
            self.free()

    # -------------------------------------------------------------------------
    # Context manager
    # -------------------------------------------------------------------------

    def __enter__(self) -> Hasher:
        self._active()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.free()

    def __repr__(self) -> str:
        state = "freed" if self.is_freed else "active"
        return f"<{type(self).__name__} {self._primitive.backend.value} {state}>"


class Blake3Hasher(Hasher):
    """
    Streaming BLAKE3 hasher.

    For keyed hashing (MAC), pass a 32-byte key:
        hasher = Blake3Hasher(key)
    """

    algorithm: ClassVar[str] = "blake3"

    def __init__(
        self,
        key: BytesLike | None = None,
        *,
        primitive: HashPrimitive | None = None,
    ) -> None:
        """
        Create a BLAKE3 hasher.

        Args:
            key: Optional 32-byte key for keyed hashing
            primitive: Explicit primitive; defaults to the resolved backend

        Raises:
            InvalidKeyLength: If key is given and is not 32 bytes
        """
        if key is not None:
            key = check_blake3_key(key)
        super().__init__(key=key, primitive=primitive)

    def update(self, data: BytesLike) -> Blake3Hasher:
        super().update(data)
        return self

    def reset(self) -> Blake3Hasher:
        super().reset()
        return self

    def __enter__(self) -> Blake3Hasher:
        super().__enter__()
        return self


class Sha256Hasher(Hasher):
    """Streaming SHA-256 hasher."""

    algorithm: ClassVar[str] = "sha256"

    def __init__(self, *, primitive: HashPrimitive | None = None) -> None:
        super().__init__(primitive=primitive)

    def update(self, data: BytesLike) -> Sha256Hasher:
        super().update(data)
        return self

    def reset(self) -> Sha256Hasher:
        super().reset()
        return self

    def __enter__(self) -> Sha256Hasher:
        super().__enter__()
        return self
