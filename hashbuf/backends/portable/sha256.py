"""Pure Python SHA-256 (FIPS 180-4) and HMAC-SHA256 (RFC 2104)."""

from __future__ import annotations

import struct
from collections.abc import Sequence

from ...core.exceptions import InvalidKeyLength
from ...core.interfaces.primitive import Backend, BytesLike, HashPrimitive, IncrementalContext

BLOCK_SIZE = 64
DIGEST_SIZE = 32

# Initial hash values and round constants defined by FIPS 180-4.
INITIAL_STATE: Sequence[int] = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)
K: Sequence[int] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1,
    0x923F82A4, 0xAB1C5ED5, 0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174, 0xE49B69C1, 0xEFBE4786,
    0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147,
    0x06CA6351, 0x14292967, 0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85, 0xA2BFE8A1, 0xA81A664B,
    0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A,
    0x5B9CCA4F, 0x682E6FF3, 0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)  # fmt: skip

_MASK = 0xFFFFFFFF


def _rotr(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _compress(state: Sequence[int], block: bytes) -> list[int]:
    w = list(struct.unpack(">16I", block))
    for i in range(16, 64):
        s0 = _rotr(w[i - 15], 7) ^ _rotr(w[i - 15], 18) ^ (w[i - 15] >> 3)
        s1 = _rotr(w[i - 2], 17) ^ _rotr(w[i - 2], 19) ^ (w[i - 2] >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK)

    a, b, c, d, e, f, g, h = state
    for i in range(64):
        s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = (e & f) ^ ((~e) & g)
        temp1 = (h + s1 + ch + K[i] + w[i]) & _MASK
        s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        temp2 = (s0 + maj) & _MASK

        h, g, f, e, d, c, b, a = (
            g,
            f,
            e,
            (d + temp1) & _MASK,
            c,
            b,
            a,
            (temp1 + temp2) & _MASK,
        )

    return [(x + y) & _MASK for x, y in zip(state, (a, b, c, d, e, f, g, h))]


class Sha256State:
    """Incremental SHA-256 with a hashlib-like surface."""

    __slots__ = ("_buffer", "_count", "_state")

    def __init__(self, data: BytesLike | None = None) -> None:
        self._buffer = b""
        self._count = 0  # number of processed bytes
        self._state = list(INITIAL_STATE)
        if data:
            self.update(data)

    def update(self, data: BytesLike) -> None:
        data = bytes(data)
        self._count += len(data)
        chunk = self._buffer + data
        full = len(chunk) - len(chunk) % BLOCK_SIZE
        state = self._state
        for offset in range(0, full, BLOCK_SIZE):
            state = _compress(state, chunk[offset : offset + BLOCK_SIZE])
        self._state = state
        self._buffer = chunk[full:]

    def digest(self) -> bytes:
        # Pads a local copy; the running state is untouched
        message = self._buffer + b"\x80"
        message += b"\x00" * ((56 - len(message) % BLOCK_SIZE) % BLOCK_SIZE)
        message += struct.pack(">Q", (self._count * 8) & 0xFFFFFFFFFFFFFFFF)

        state = list(self._state)
        for offset in range(0, len(message), BLOCK_SIZE):
            state = _compress(state, message[offset : offset + BLOCK_SIZE])
        return struct.pack(">8I", *state)

    def hexdigest(self) -> str:
        # No separate hex path in pure Python; only native backends encode directly
        return self.digest().hex()


def hmac_sha256(key: BytesLike, data: BytesLike) -> bytes:
    """HMAC-SHA256 per RFC 2104; any key length is accepted."""
    key = bytes(key)
    if len(key) > BLOCK_SIZE:
        key = Sha256State(key).digest()
    key = key.ljust(BLOCK_SIZE, b"\x00")

    inner = Sha256State(bytes(k ^ 0x36 for k in key))
    inner.update(data)
    outer = Sha256State(bytes(k ^ 0x5C for k in key))
    outer.update(inner.digest())
    return outer.digest()


class _PortableSha256Context(IncrementalContext):
    def __init__(self) -> None:
        self._state = Sha256State()

    def update(self, data: BytesLike) -> None:
        self._state.update(data)

    def finalize(self) -> bytes:
        return self._state.digest()

    def finalize_hex(self) -> str:
        return self._state.hexdigest()

    def reset(self) -> None:
        self._state = Sha256State()

    def release(self) -> None:
        self._state = None


class PortableSha256(HashPrimitive):
    """SHA-256 computed entirely in Python."""

    @property
    def algorithm_name(self) -> str:
        return "sha256"

    @property
    def backend(self) -> Backend:
        return Backend.PORTABLE

    def hash(self, data: BytesLike) -> bytes:
        return Sha256State(data).digest()

    def keyed_hash(self, key: BytesLike, data: BytesLike) -> bytes:
        return hmac_sha256(key, data)

    def create(self, key: BytesLike | None = None) -> IncrementalContext:
        if key is not None:
            raise InvalidKeyLength(
                "SHA-256 hashers do not accept a key; use HMAC instead", actual=len(key)
            )
        return _PortableSha256Context()
