"""Shared input helpers for CLI commands."""

from __future__ import annotations

import click

from ...algorithms import HashAlgorithm
from ...streaming import hash_file, hash_iterable

STDIN = "-"


def digest_path(algorithm: HashAlgorithm, path: str, chunk_size: int) -> bytes:
    """Stream a file (or stdin for '-') through a fresh hasher."""
    if path == STDIN:
        stream = click.get_binary_stream("stdin")
        return hash_iterable(algorithm.create_hasher, iter(lambda: stream.read(chunk_size), b""))
    return hash_file(algorithm.create_hasher, path, chunk_size)


def read_path(path: str) -> bytes:
    """Read a whole file (or stdin for '-')."""
    if path == STDIN:
        return click.get_binary_stream("stdin").read()
    with open(path, "rb") as f:
        return f.read()
