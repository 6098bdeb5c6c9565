"""
Drive a Hasher from a sequence of byte chunks.

hash_stream() consumes an async iterable (network streams, aiofiles readers,
async generators); hash_iterable() and hash_file() are the synchronous
counterparts. Each creates one Hasher and frees it exactly once, whether the
source completes, raises, or the awaiting task is cancelled.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable

from .core.di import resolve_or_default
from .core.interfaces.logger import ILogger
from .core.interfaces.primitive import BytesLike
from .core.models.config import DEFAULT_CHUNK_SIZE
from .hasher import Hasher

HasherFactory = Callable[[], Hasher]


def _get_logger() -> ILogger:
    from .services.logging import NullLogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


async def hash_stream(create_hasher: HasherFactory, source: AsyncIterable[BytesLike]) -> bytes:
    """
    Hash an async iterable of chunks without loading it into memory.

    Args:
        create_hasher: Factory for the hasher to feed
        source: Finite, non-restartable async iterable of byte chunks

    Returns:
        Raw digest bytes of all chunks in arrival order
    """
    hasher = create_hasher()
    try:
        iterator = source.__aiter__()
        try:
            async for chunk in iterator:
                hasher.update(chunk)
        except BaseException:
            # The source's own error wins over one raised while closing it
            await _close_source(iterator, quiet=True)
            raise
        await _close_source(iterator)
        return hasher.finalize()
    finally:
        hasher.free()


async def _close_source(iterator: AsyncIterator[BytesLike], quiet: bool = False) -> None:
    """Stop an abandoned async generator so its own cleanup runs now."""
    aclose = getattr(iterator, "aclose", None)
    if aclose is None:
        return
    if not quiet:
        await aclose()
        return
    try:
        await aclose()
    except Exception as e:
        _get_logger().debug("Error closing stream source after failure: %s", e)


def hash_iterable(create_hasher: HasherFactory, chunks: Iterable[BytesLike]) -> bytes:
    """
    Hash a synchronous iterable of chunks.

    Returns:
        Raw digest bytes
    """
    hasher = create_hasher()
    try:
        for chunk in chunks:
            hasher.update(chunk)
        return hasher.finalize()
    finally:
        hasher.free()


def hash_file(
    create_hasher: HasherFactory,
    path: str | os.PathLike[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """
    Hash a file by reading it in fixed-size chunks.

    Args:
        create_hasher: Factory for the hasher to feed
        path: File to hash
        chunk_size: Bytes per read (default 8MB)

    Returns:
        Raw digest bytes

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(path, "rb") as f:
        return hash_iterable(create_hasher, iter(lambda: f.read(chunk_size), b""))
