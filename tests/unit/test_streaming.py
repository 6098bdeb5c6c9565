"""
Unit tests for stream hashing.

Tests verify that hash_stream() frees its hasher exactly once whether the
source completes, raises, or the awaiting task is cancelled.
"""

import asyncio

import pytest

from hashbuf import BLAKE3, SHA256, blake3, hash_file, hash_iterable, hash_stream, sha256
from hashbuf.hasher import Blake3Hasher, Sha256Hasher

TEST_INPUT = "aa4909e14f1389afc428e481ea20ffd9673604711f5afb60a747fec57e4c267c"


class RecordingFactory:
    """Hasher factory that remembers what it created."""

    def __init__(self, cls=Blake3Hasher):
        self.cls = cls
        self.created = []

    def __call__(self):
        hasher = self.cls()
        self.created.append(hasher)
        return hasher


async def _chunks(*parts):
    for part in parts:
        yield part


class TestHashStream:
    """Tests for hash_stream()."""

    @pytest.mark.asyncio
    async def test_chunks_in_order(self):
        """Digest equals hashing the concatenation of the chunks."""
        factory = RecordingFactory()
        digest = await hash_stream(factory, _chunks(b"test", b" ", b"input"))

        assert digest.hex() == TEST_INPUT
        assert factory.created[0].is_freed

    @pytest.mark.asyncio
    async def test_empty_source(self):
        """An empty source gives the empty-input digest."""
        assert await hash_stream(Sha256Hasher, _chunks()) == sha256(b"")

    @pytest.mark.asyncio
    async def test_buffer_chunks(self):
        """bytearray and memoryview chunks are accepted."""
        digest = await BLAKE3.stream(_chunks(bytearray(b"test "), memoryview(b"input")))
        assert digest.hex() == TEST_INPUT

    @pytest.mark.asyncio
    async def test_source_error_frees_hasher(self):
        """A failing source propagates its error and frees the hasher."""

        async def broken():
            yield b"partial"
            raise ConnectionResetError("peer went away")

        factory = RecordingFactory()
        with pytest.raises(ConnectionResetError):
            await hash_stream(factory, broken())

        assert len(factory.created) == 1
        assert factory.created[0].is_freed

    @pytest.mark.asyncio
    async def test_cancellation_frees_hasher(self):
        """Cancelling the consuming task frees the hasher and closes the source."""
        started = asyncio.Event()
        never = asyncio.Event()
        source_closed = []

        async def stalled():
            try:
                yield b"first"
                started.set()
                await never.wait()
                yield b"unreachable"
            finally:
                source_closed.append(True)

        factory = RecordingFactory()
        task = asyncio.create_task(hash_stream(factory, stalled()))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert factory.created[0].is_freed
        assert source_closed == [True]

    @pytest.mark.asyncio
    async def test_custom_async_iterable(self):
        """Any object with __aiter__ works as a source."""

        class Source:
            def __init__(self, parts):
                self.parts = list(parts)

            def __aiter__(self):
                return self

            async def __anext__(self):
                if not self.parts:
                    raise StopAsyncIteration
                return self.parts.pop(0)

        assert await SHA256.stream(Source([b"a", b"bc"])) == sha256(b"abc")


class TestHashIterable:
    """Tests for hash_iterable()."""

    def test_generator_source(self):
        """Synchronous chunk iterables are hashed in order."""
        digest = hash_iterable(Blake3Hasher, (part for part in [b"test ", b"input"]))
        assert digest.hex() == TEST_INPUT

    def test_error_frees_hasher(self):
        """An exception from the iterable frees the hasher."""

        def broken():
            yield b"x"
            raise ValueError("bad chunk")

        factory = RecordingFactory(Sha256Hasher)
        with pytest.raises(ValueError):
            hash_iterable(factory, broken())
        assert factory.created[0].is_freed


class TestHashFile:
    """Tests for hash_file()."""

    def test_small_chunks_match_one_shot(self, tmp_path):
        """Chunked file reads match hashing the whole file."""
        data = bytes(i % 251 for i in range(10_000))
        path = tmp_path / "data.bin"
        path.write_bytes(data)

        assert hash_file(Blake3Hasher, path, chunk_size=1000) == blake3(data)
        assert hash_file(Sha256Hasher, str(path), chunk_size=7) == sha256(data)

    def test_empty_file(self, tmp_path):
        """An empty file hashes to the empty digest."""
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert hash_file(Sha256Hasher, path) == sha256(b"")

    def test_missing_file(self, tmp_path):
        """A missing file raises OSError."""
        with pytest.raises(OSError):
            hash_file(Blake3Hasher, tmp_path / "missing")


class TestSourceClosing:
    """Errors raised while closing the source."""

    class _Source:
        """Async iterator whose aclose() fails."""

        def __init__(self, parts, error=None):
            self.parts = list(parts)
            self.error = error
            self.closed = False

        def __aiter__(self):
            return self

        async def __anext__(self):
            if self.parts:
                return self.parts.pop(0)
            if self.error is not None:
                raise self.error
            raise StopAsyncIteration

        async def aclose(self):
            self.closed = True
            raise RuntimeError("close failed")

    @pytest.mark.asyncio
    async def test_source_error_not_masked_by_close(self):
        """The source's error propagates even when aclose() raises."""
        factory = RecordingFactory()
        source = self._Source([b"x"], error=ConnectionResetError("reset"))

        with pytest.raises(ConnectionResetError):
            await hash_stream(factory, source)

        assert source.closed
        assert factory.created[0].is_freed

    @pytest.mark.asyncio
    async def test_close_error_after_completion_propagates(self):
        """With no earlier error, a failing aclose() is reported."""
        factory = RecordingFactory()
        source = self._Source([b"x"])

        with pytest.raises(RuntimeError, match="close failed"):
            await hash_stream(factory, source)

        assert factory.created[0].is_freed
