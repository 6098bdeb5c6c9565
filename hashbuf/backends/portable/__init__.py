"""
Portable hash primitives implemented in pure Python.

Always available; selected when the accelerated primitive cannot be loaded
or when the portable backend is requested explicitly.
"""

from .blake3 import Blake3State, PortableBlake3
from .sha256 import PortableSha256, Sha256State, hmac_sha256

__all__ = [
    "Blake3State",
    "PortableBlake3",
    "PortableSha256",
    "Sha256State",
    "hmac_sha256",
]
