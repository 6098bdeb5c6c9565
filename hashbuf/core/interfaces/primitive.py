"""
Hash primitive capability interface.

Native (accelerated) and portable implementations both satisfy this
interface; Hasher and the algorithm facade depend on nothing else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


class Backend(str, Enum):
    """Which implementation of a hash primitive is active."""

    NATIVE = "native"
    PORTABLE = "portable"


class IncrementalContext(ABC):
    """
    Running hash state owned by exactly one Hasher.

    finalize() and finalize_hex() must not disturb the running state:
    more data may be fed afterwards.
    """

    @abstractmethod
    def update(self, data: BytesLike) -> None:
        """Append bytes to the running computation."""
        pass

    @abstractmethod
    def finalize(self) -> bytes:
        """Return the digest of all bytes fed so far (non-destructive)."""
        pass

    @abstractmethod
    def finalize_hex(self) -> str:
        """Return the lowercase hex digest without an intermediate byte buffer."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Restore the initial state, keeping the key for keyed contexts."""
        pass

    def release(self) -> None:
        """Drop backend resources held by this context."""
        pass


class HashPrimitive(ABC):
    """
    One algorithm as provided by one backend.

    Attributes:
        algorithm_name: Algorithm identifier ('blake3', 'sha256')
        backend: Backend variant implementing it
        digest_size: Digest length in bytes
    """

    digest_size: int = 32

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Return algorithm identifier (e.g., 'blake3', 'sha256')."""
        pass

    @property
    @abstractmethod
    def backend(self) -> Backend:
        """Return the backend variant."""
        pass

    @abstractmethod
    def hash(self, data: BytesLike) -> bytes:
        """One-shot digest."""
        pass

    def hash_hex(self, data: BytesLike) -> str:
        """One-shot lowercase hex digest."""
        return self.hash(data).hex()

    @abstractmethod
    def keyed_hash(self, key: BytesLike, data: BytesLike) -> bytes:
        """Keyed digest: BLAKE3 keyed mode or HMAC for SHA-256."""
        pass

    @abstractmethod
    def create(self, key: BytesLike | None = None) -> IncrementalContext:
        """Create a fresh incremental context, keyed if key is given."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.algorithm_name}/{self.backend.value}>"
