"""
Supporting services for hashbuf (logging).
"""

from .logging import HashbufLogger, NullLogger

__all__ = ["HashbufLogger", "NullLogger"]
