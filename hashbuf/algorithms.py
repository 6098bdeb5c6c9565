"""
One-shot helpers and HashAlgorithm descriptors.

Every helper dispatches to the primitive the algorithm's BackendSelector
resolved, so results are identical on the native and portable backends.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Awaitable, Callable
from dataclasses import dataclass

from .backends import get_primitive
from .core.interfaces.primitive import BytesLike
from .core.validation import check_blake3_key
from .hasher import Blake3Hasher, Hasher, Sha256Hasher
from .streaming import hash_stream


@dataclass(frozen=True)
class HashAlgorithm:
    """
    Unified, stateless description of one hash algorithm.

    Lets callers stay generic over which algorithm they use:

        def checksum(algo: HashAlgorithm, data: bytes) -> str:
            return algo.hash_hex(data)
    """

    name: str
    digest_length: int
    hash: Callable[[BytesLike], bytes]
    double_hash: Callable[[BytesLike], bytes]
    create_hasher: Callable[[], Hasher]
    stream: Callable[[AsyncIterable[BytesLike]], Awaitable[bytes]]
    hash_hex: Callable[[BytesLike], str]
    mac: Callable[[BytesLike, BytesLike], bytes]


# =============================================================================
# BLAKE3
# =============================================================================


def blake3(data: BytesLike) -> bytes:
    """Compute the 32-byte BLAKE3 hash of data."""
    return get_primitive("blake3").hash(data)


def blake3_hex(data: BytesLike) -> str:
    """Compute the BLAKE3 hash of data as lowercase hex, encoded by the backend."""
    return get_primitive("blake3").hash_hex(data)


def double_blake3(data: BytesLike) -> bytes:
    """Compute blake3(blake3(data))."""
    primitive = get_primitive("blake3")
    return primitive.hash(primitive.hash(data))


def blake3_mac(key: BytesLike, data: BytesLike) -> bytes:
    """
    Compute a BLAKE3 keyed hash.

    Raises:
        InvalidKeyLength: If key is not exactly 32 bytes
    """
    key = check_blake3_key(key)
    return get_primitive("blake3").keyed_hash(key, data)


async def blake3_stream(source: AsyncIterable[BytesLike]) -> bytes:
    """Hash an async iterable of chunks with BLAKE3."""
    return await hash_stream(Blake3Hasher, source)


BLAKE3 = HashAlgorithm(
    name="blake3",
    digest_length=32,
    hash=blake3,
    double_hash=double_blake3,
    create_hasher=Blake3Hasher,
    stream=blake3_stream,
    hash_hex=blake3_hex,
    mac=blake3_mac,
)


# =============================================================================
# SHA-256
# =============================================================================


def sha256(data: BytesLike) -> bytes:
    """Compute the 32-byte SHA-256 hash of data."""
    return get_primitive("sha256").hash(data)


def sha256_hex(data: BytesLike) -> str:
    """Compute the SHA-256 hash of data as lowercase hex, encoded by the backend."""
    return get_primitive("sha256").hash_hex(data)


def double_sha256(data: BytesLike) -> bytes:
    """Compute sha256(sha256(data))."""
    primitive = get_primitive("sha256")
    return primitive.hash(primitive.hash(data))


def hmac_sha256(key: BytesLike, data: BytesLike) -> bytes:
    """Compute HMAC-SHA256 (RFC 2104); keys of any length are accepted."""
    return get_primitive("sha256").keyed_hash(key, data)


async def sha256_stream(source: AsyncIterable[BytesLike]) -> bytes:
    """Hash an async iterable of chunks with SHA-256."""
    return await hash_stream(Sha256Hasher, source)


SHA256 = HashAlgorithm(
    name="sha256",
    digest_length=32,
    hash=sha256,
    double_hash=double_sha256,
    create_hasher=Sha256Hasher,
    stream=sha256_stream,
    hash_hex=sha256_hex,
    mac=hmac_sha256,
)
