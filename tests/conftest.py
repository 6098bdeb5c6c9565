"""
Shared pytest fixtures for hashbuf tests.

Every test starts from an empty service container so backend selection
is probed fresh, and HASHBUF_* variables from the outer environment
cannot leak into settings.
"""

import os

import pytest

from hashbuf.backends.native import load_blake3, load_sha256
from hashbuf.backends.portable import PortableBlake3, PortableSha256
from hashbuf.core.bootstrap import reset


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Reset the container and drop HASHBUF_* environment variables."""
    for name in list(os.environ):
        if name.startswith("HASHBUF_"):
            monkeypatch.delenv(name)
    reset()
    yield
    reset()


@pytest.fixture(params=["native", "portable"])
def blake3_primitive(request):
    """BLAKE3 primitive from each backend."""
    if request.param == "native":
        return load_blake3()
    return PortableBlake3()


@pytest.fixture(params=["native", "portable"])
def sha256_primitive(request):
    """SHA-256 primitive from each backend."""
    if request.param == "native":
        return load_sha256()
    return PortableSha256()
