"""
Input validation shared by every backend.

Key checks run before any backend state is touched, so an invalid key is
reported at the call that supplied it.
"""

from __future__ import annotations

from .exceptions import InvalidKeyLength, UnsupportedEncoding
from .interfaces.primitive import BytesLike

BLAKE3_KEY_LEN = 32

# digest() encodings: None and "raw" return bytes, "hex" returns str
RAW_ENCODING = "raw"
HEX_ENCODING = "hex"


def check_blake3_key(key: BytesLike) -> bytes:
    """
    Validate a BLAKE3 key.

    Args:
        key: Candidate key

    Returns:
        The key as immutable bytes

    Raises:
        InvalidKeyLength: If the key is not exactly 32 bytes
    """
    key = bytes(key)
    if len(key) != BLAKE3_KEY_LEN:
        raise InvalidKeyLength(
            f"Key must be exactly {BLAKE3_KEY_LEN} bytes",
            expected=BLAKE3_KEY_LEN,
            actual=len(key),
        )
    return key


def check_encoding(encoding: str | None) -> bool:
    """
    Validate a digest() encoding argument.

    Returns:
        True for the hex form, False for raw bytes

    Raises:
        UnsupportedEncoding: For anything other than None, 'raw' or 'hex'
    """
    if encoding is None:
        return False
    if isinstance(encoding, str):
        if encoding == HEX_ENCODING:
            return True
        if encoding == RAW_ENCODING:
            return False
    raise UnsupportedEncoding(
        f"Unsupported digest encoding: {encoding!r} (expected 'hex' or raw bytes)",
        encoding=encoding,
    )
