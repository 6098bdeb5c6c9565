"""
Click command implementations for the hashbuf CLI.

Each module corresponds to a hashbuf command (e.g., hash.py implements
'hashbuf hash'). Commands are registered with the main CLI group via
register_commands() in hashbuf.cli.
"""

from .backend import backend
from .hash import hash_cmd
from .mac import mac

COMMANDS = [
    backend,
    hash_cmd,
    mac,
]

__all__ = [
    "COMMANDS",
    "backend",
    "hash_cmd",
    "mac",
]
