"""
Unit tests for the exception hierarchy.
"""

import pytest

from hashbuf.core.exceptions import (
    BackendLoadError,
    ConfigValidationError,
    FreedError,
    HashbufBackendError,
    HashbufConfigError,
    HashbufException,
    InvalidKeyLength,
    UnsupportedEncoding,
)


class TestHierarchy:
    """Catching by base class."""

    @pytest.mark.parametrize(
        ("exc", "bases"),
        [
            (InvalidKeyLength(), (HashbufException, ValueError)),
            (FreedError(), (HashbufException, RuntimeError)),
            (UnsupportedEncoding("bad", encoding="b64"), (HashbufException, ValueError)),
            (BackendLoadError("missing"), (HashbufBackendError, HashbufException)),
            (ConfigValidationError("bad"), (HashbufConfigError, ValueError)),
        ],
    )
    def test_bases(self, exc, bases):
        """Each error is catchable by its documented bases."""
        assert isinstance(exc, bases)

    def test_backend_load_error_is_not_value_error(self):
        """Load failures are not input-validation errors."""
        assert not isinstance(BackendLoadError("x"), ValueError)


class TestRendering:
    """String form and context."""

    def test_context_rendered(self):
        """Context is appended to the message."""
        exc = InvalidKeyLength(expected=32, actual=16)
        assert str(exc) == "Key must be exactly 32 bytes (expected=32, actual=16)"

    def test_plain_message(self):
        """Without context, only the message is shown."""
        assert str(HashbufException("boom")) == "boom"

    def test_freed_default_message(self):
        """FreedError has a fixed default message."""
        assert FreedError(algorithm="sha256").message == "Hasher has been freed"

    def test_cause_chained(self):
        """cause becomes __cause__."""
        original = ImportError("no module named blake3")
        exc = BackendLoadError("missing", algorithm="blake3", cause=original)
        assert exc.__cause__ is original
