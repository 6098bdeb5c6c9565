"""
Interface definitions for hashbuf's pluggable components.
"""

from .logger import ILogger
from .primitive import Backend, BytesLike, HashPrimitive, IncrementalContext

__all__ = [
    "Backend",
    "BytesLike",
    "HashPrimitive",
    "ILogger",
    "IncrementalContext",
]
