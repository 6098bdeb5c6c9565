"""
Native (accelerated) hash primitives.

BLAKE3 is served by the ``blake3`` extension package (Rust, SIMD-dispatched);
SHA-256 and HMAC-SHA256 by the OpenSSL-backed ``hashlib``/``hmac`` modules.
Loaders run a known-answer self-test so a broken build is rejected the same
way as a missing one.
"""

from __future__ import annotations

from typing import Any

from ..core.exceptions import BackendLoadError, InvalidKeyLength
from ..core.interfaces.primitive import Backend, BytesLike, HashPrimitive, IncrementalContext
from ..core.validation import check_blake3_key

# Published digests of the empty input, used as load-time self-tests
BLAKE3_EMPTY_DIGEST = "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262"
SHA256_EMPTY_DIGEST = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

# =============================================================================
# BLAKE3
# =============================================================================


class _NativeBlake3Context(IncrementalContext):
    def __init__(self, module: Any, key: bytes | None) -> None:
        self._module = module
        self._key = key
        self._hasher = self._new()

    def _new(self) -> Any:
        if self._key is None:
            return self._module.blake3()
        return self._module.blake3(key=self._key)

    def update(self, data: BytesLike) -> None:
        self._hasher.update(data)

    def finalize(self) -> bytes:
        # blake3.digest() does not consume the hasher
        return self._hasher.digest()

    def finalize_hex(self) -> str:
        return self._hasher.hexdigest()

    def reset(self) -> None:
        self._hasher = self._new()

    def release(self) -> None:
        self._hasher = None


class NativeBlake3(HashPrimitive):
    """BLAKE3 backed by the ``blake3`` extension module."""

    def __init__(self, module: Any) -> None:
        self._module = module

    @property
    def algorithm_name(self) -> str:
        return "blake3"

    @property
    def backend(self) -> Backend:
        return Backend.NATIVE

    def hash(self, data: BytesLike) -> bytes:
        return self._module.blake3(data).digest()

    def hash_hex(self, data: BytesLike) -> str:
        return self._module.blake3(data).hexdigest()

    def keyed_hash(self, key: BytesLike, data: BytesLike) -> bytes:
        key = check_blake3_key(key)
        return self._module.blake3(data, key=key).digest()

    def create(self, key: BytesLike | None = None) -> IncrementalContext:
        if key is not None:
            key = check_blake3_key(key)
        return _NativeBlake3Context(self._module, key)


def load_blake3() -> HashPrimitive:
    """
    Load the accelerated BLAKE3 primitive.

    Raises:
        BackendLoadError: If the extension is missing or fails its self-test
    """
    try:
        import blake3 as module
    except ImportError as e:
        raise BackendLoadError(
            "blake3 extension module could not be imported", algorithm="blake3", cause=e
        ) from e

    primitive = NativeBlake3(module)
    _self_test(primitive, BLAKE3_EMPTY_DIGEST)
    return primitive


# =============================================================================
# SHA-256
# =============================================================================


class _NativeSha256Context(IncrementalContext):
    def __init__(self, constructor: Any) -> None:
        self._constructor = constructor
        self._hasher = constructor()

    def update(self, data: BytesLike) -> None:
        self._hasher.update(data)

    def finalize(self) -> bytes:
        # hashlib digest() finalizes a copy of the internal state
        return self._hasher.digest()

    def finalize_hex(self) -> str:
        return self._hasher.hexdigest()

    def reset(self) -> None:
        self._hasher = self._constructor()

    def release(self) -> None:
        self._hasher = None


class NativeSha256(HashPrimitive):
    """SHA-256 and HMAC-SHA256 backed by OpenSSL through hashlib/hmac."""

    def __init__(self, constructor: Any, hmac_module: Any) -> None:
        self._constructor = constructor
        self._hmac = hmac_module

    @property
    def algorithm_name(self) -> str:
        return "sha256"

    @property
    def backend(self) -> Backend:
        return Backend.NATIVE

    def hash(self, data: BytesLike) -> bytes:
        return self._constructor(data).digest()

    def hash_hex(self, data: BytesLike) -> str:
        return self._constructor(data).hexdigest()

    def keyed_hash(self, key: BytesLike, data: BytesLike) -> bytes:
        return self._hmac.digest(bytes(key), data, "sha256")

    def create(self, key: BytesLike | None = None) -> IncrementalContext:
        if key is not None:
            raise InvalidKeyLength(
                "SHA-256 hashers do not accept a key; use HMAC instead", actual=len(key)
            )
        return _NativeSha256Context(self._constructor)


def load_sha256() -> HashPrimitive:
    """
    Load the OpenSSL-backed SHA-256 primitive.

    Python builds without the _hashlib extension (static libpython, some
    embedded interpreters) fail here and fall back to the portable primitive.

    Raises:
        BackendLoadError: If hashlib has no working sha256 or fails its self-test
    """
    try:
        import hashlib
        import hmac

        constructor = hashlib.sha256
    except (ImportError, AttributeError) as e:
        raise BackendLoadError(
            "hashlib.sha256 is not available", algorithm="sha256", cause=e
        ) from e

    primitive = NativeSha256(constructor, hmac)
    _self_test(primitive, SHA256_EMPTY_DIGEST)
    return primitive


def _self_test(primitive: HashPrimitive, expected_empty: str) -> None:
    try:
        actual = primitive.hash(b"").hex()
    except Exception as e:
        raise BackendLoadError(
            "Self-test raised", algorithm=primitive.algorithm_name, cause=e
        ) from e
    if actual != expected_empty:
        raise BackendLoadError(
            "Self-test digest mismatch",
            algorithm=primitive.algorithm_name,
            context={"expected": expected_empty, "actual": actual},
        )
