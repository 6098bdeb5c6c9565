"""
hashbuf - BLAKE3 and SHA-256 hashing over native or portable backends.

One-shot, double-hash and streaming APIs behave identically whether the
accelerated primitive (``blake3`` extension, OpenSSL ``hashlib``) or the
pure-Python fallback is in use. The backend is chosen once per algorithm,
on first use.

Usage:
    from hashbuf import BLAKE3, Blake3Hasher, sha256

    sha256(b"abc").hex()
    BLAKE3.double_hash(b"data")

    hasher = Blake3Hasher()
    hasher.update(b"chunk1").update(b"chunk2")
    hex_digest = hasher.digest("hex")  # frees the hasher
"""

from .algorithms import (
    BLAKE3,
    SHA256,
    HashAlgorithm,
    blake3,
    blake3_hex,
    blake3_mac,
    blake3_stream,
    double_blake3,
    double_sha256,
    hmac_sha256,
    sha256,
    sha256_hex,
    sha256_stream,
)
from .backends import active_backend
from .core.exceptions import (
    FreedError,
    HashbufException,
    InvalidKeyLength,
    UnknownAlgorithmError,
    UnsupportedEncoding,
)
from .core.interfaces.primitive import Backend, HashPrimitive
from .hasher import Blake3Hasher, Hasher, Sha256Hasher
from .registry import HashAlgorithmRegistry, get_algorithm
from .streaming import hash_file, hash_iterable, hash_stream

__version__ = "0.2.0"

__all__ = [
    "BLAKE3",
    "SHA256",
    "Backend",
    "Blake3Hasher",
    "FreedError",
    "HashAlgorithm",
    "HashAlgorithmRegistry",
    "HashPrimitive",
    "Hasher",
    "HashbufException",
    "InvalidKeyLength",
    "Sha256Hasher",
    "UnknownAlgorithmError",
    "UnsupportedEncoding",
    "__version__",
    "active_backend",
    "blake3",
    "blake3_hex",
    "blake3_mac",
    "blake3_stream",
    "double_blake3",
    "double_sha256",
    "get_algorithm",
    "hash_file",
    "hash_iterable",
    "hash_stream",
    "hmac_sha256",
    "sha256",
    "sha256_hex",
    "sha256_stream",
]
