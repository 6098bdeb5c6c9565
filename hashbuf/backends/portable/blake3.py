"""
Pure Python BLAKE3.

Follows the structure of the BLAKE3 reference implementation: 1 KiB chunks
compressed block by block, chunk chaining values merged into a binary tree
through a stack, and the root node compressed with the ROOT flag. Only the
hash and keyed_hash modes are exposed.
"""

from __future__ import annotations

import struct
from collections.abc import Sequence

from ...core.interfaces.primitive import Backend, BytesLike, HashPrimitive, IncrementalContext
from ...core.validation import check_blake3_key

OUT_LEN = 32
BLOCK_LEN = 64
CHUNK_LEN = 1024

CHUNK_START = 1 << 0
CHUNK_END = 1 << 1
PARENT = 1 << 2
ROOT = 1 << 3
KEYED_HASH = 1 << 4

IV: Sequence[int] = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

MSG_PERMUTATION: Sequence[int] = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)

_MASK = 0xFFFFFFFF


def _rotr(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _g(state: list[int], a: int, b: int, c: int, d: int, mx: int, my: int) -> None:
    state[a] = (state[a] + state[b] + mx) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 16)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 12)
    state[a] = (state[a] + state[b] + my) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 8)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 7)


def _round(state: list[int], m: Sequence[int]) -> None:
    # Columns
    _g(state, 0, 4, 8, 12, m[0], m[1])
    _g(state, 1, 5, 9, 13, m[2], m[3])
    _g(state, 2, 6, 10, 14, m[4], m[5])
    _g(state, 3, 7, 11, 15, m[6], m[7])
    # Diagonals
    _g(state, 0, 5, 10, 15, m[8], m[9])
    _g(state, 1, 6, 11, 12, m[10], m[11])
    _g(state, 2, 7, 8, 13, m[12], m[13])
    _g(state, 3, 4, 9, 14, m[14], m[15])


def compress(
    chaining_value: Sequence[int],
    block_words: Sequence[int],
    counter: int,
    block_len: int,
    flags: int,
) -> list[int]:
    """Run the BLAKE3 compression function, returning all 16 output words."""
    state = [
        *chaining_value[:8],
        IV[0],
        IV[1],
        IV[2],
        IV[3],
        counter & _MASK,
        (counter >> 32) & _MASK,
        block_len,
        flags,
    ]
    block = list(block_words)
    for _ in range(7):
        _round(state, block)
        block = [block[i] for i in MSG_PERMUTATION]
    for i in range(8):
        state[i] ^= state[i + 8]
        state[i + 8] ^= chaining_value[i]
    return state


def _words(block: bytes) -> tuple[int, ...]:
    return struct.unpack("<16I", block.ljust(BLOCK_LEN, b"\x00"))


class _Output:
    """A node that can yield either a chaining value or root output bytes."""

    __slots__ = ("block_len", "block_words", "counter", "flags", "input_cv")

    def __init__(
        self,
        input_cv: Sequence[int],
        block_words: Sequence[int],
        counter: int,
        block_len: int,
        flags: int,
    ) -> None:
        self.input_cv = input_cv
        self.block_words = block_words
        self.counter = counter
        self.block_len = block_len
        self.flags = flags

    def chaining_value(self) -> list[int]:
        return compress(
            self.input_cv, self.block_words, self.counter, self.block_len, self.flags
        )[:8]

    def root_output_bytes(self, out_len: int = OUT_LEN) -> bytes:
        out = bytearray()
        output_block_counter = 0
        while len(out) < out_len:
            words = compress(
                self.input_cv,
                self.block_words,
                output_block_counter,
                self.block_len,
                self.flags | ROOT,
            )
            out += struct.pack("<16I", *words)
            output_block_counter += 1
        return bytes(out[:out_len])


class _ChunkState:
    __slots__ = ("block", "blocks_compressed", "chaining_value", "chunk_counter", "flags")

    def __init__(self, key_words: Sequence[int], chunk_counter: int, flags: int) -> None:
        self.chaining_value = list(key_words)
        self.chunk_counter = chunk_counter
        self.block = b""
        self.blocks_compressed = 0
        self.flags = flags

    def __len__(self) -> int:
        return BLOCK_LEN * self.blocks_compressed + len(self.block)

    def _start_flag(self) -> int:
        return CHUNK_START if self.blocks_compressed == 0 else 0

    def update(self, data: bytes) -> None:
        while data:
            # A full block is only compressed once more input arrives, so the
            # last block of the chunk is left for output() with CHUNK_END.
            if len(self.block) == BLOCK_LEN:
                self.chaining_value = compress(
                    self.chaining_value,
                    _words(self.block),
                    self.chunk_counter,
                    BLOCK_LEN,
                    self.flags | self._start_flag(),
                )[:8]
                self.blocks_compressed += 1
                self.block = b""
            take = min(BLOCK_LEN - len(self.block), len(data))
            self.block += data[:take]
            data = data[take:]

    def output(self) -> _Output:
        return _Output(
            list(self.chaining_value),
            _words(self.block),
            self.chunk_counter,
            len(self.block),
            self.flags | self._start_flag() | CHUNK_END,
        )


def _parent_output(
    left_cv: Sequence[int], right_cv: Sequence[int], key_words: Sequence[int], flags: int
) -> _Output:
    return _Output(key_words, [*left_cv, *right_cv], 0, BLOCK_LEN, PARENT | flags)


class Blake3State:
    """Incremental BLAKE3 hasher. digest() never mutates the running state."""

    __slots__ = ("_chunk_state", "_cv_stack", "_flags", "_key_words")

    def __init__(self, key: bytes | None = None) -> None:
        if key is None:
            self._key_words: Sequence[int] = IV
            self._flags = 0
        else:
            self._key_words = struct.unpack("<8I", key)
            self._flags = KEYED_HASH
        self._chunk_state = _ChunkState(self._key_words, 0, self._flags)
        self._cv_stack: list[list[int]] = []

    def _add_chunk_chaining_value(self, new_cv: list[int], total_chunks: int) -> None:
        # Each trailing zero bit of the chunk count marks a completed subtree
        while total_chunks & 1 == 0:
            new_cv = _parent_output(
                self._cv_stack.pop(), new_cv, self._key_words, self._flags
            ).chaining_value()
            total_chunks >>= 1
        self._cv_stack.append(new_cv)

    def update(self, data: BytesLike) -> None:
        data = bytes(data)
        offset = 0
        while offset < len(data):
            if len(self._chunk_state) == CHUNK_LEN:
                chunk_cv = self._chunk_state.output().chaining_value()
                total_chunks = self._chunk_state.chunk_counter + 1
                self._add_chunk_chaining_value(chunk_cv, total_chunks)
                self._chunk_state = _ChunkState(self._key_words, total_chunks, self._flags)
            take = min(CHUNK_LEN - len(self._chunk_state), len(data) - offset)
            self._chunk_state.update(data[offset : offset + take])
            offset += take

    def digest(self, length: int = OUT_LEN) -> bytes:
        output = self._chunk_state.output()
        for left_cv in reversed(self._cv_stack):
            output = _parent_output(
                left_cv, output.chaining_value(), self._key_words, self._flags
            )
        return output.root_output_bytes(length)

    def hexdigest(self, length: int = OUT_LEN) -> str:
        # No separate hex path in pure Python; only native backends encode directly
        return self.digest(length).hex()


class _PortableBlake3Context(IncrementalContext):
    def __init__(self, key: bytes | None) -> None:
        self._key = key
        self._state = Blake3State(key)

    def update(self, data: BytesLike) -> None:
        self._state.update(data)

    def finalize(self) -> bytes:
        return self._state.digest()

    def finalize_hex(self) -> str:
        return self._state.hexdigest()

    def reset(self) -> None:
        self._state = Blake3State(self._key)

    def release(self) -> None:
        self._state = None


class PortableBlake3(HashPrimitive):
    """BLAKE3 computed entirely in Python."""

    @property
    def algorithm_name(self) -> str:
        return "blake3"

    @property
    def backend(self) -> Backend:
        return Backend.PORTABLE

    def hash(self, data: BytesLike) -> bytes:
        state = Blake3State()
        state.update(data)
        return state.digest()

    def keyed_hash(self, key: BytesLike, data: BytesLike) -> bytes:
        state = Blake3State(check_blake3_key(key))
        state.update(data)
        return state.digest()

    def create(self, key: BytesLike | None = None) -> IncrementalContext:
        if key is not None:
            key = check_blake3_key(key)
        return _PortableBlake3Context(key)
