"""
Unit tests for BackendSelector and process-wide backend resolution.

Tests verify:
- Native is used when it loads, portable otherwise
- A failed probe is permanent (no re-probe)
- Concurrent first use runs the native loader once
- Selectors injected into the container take precedence over defaults
"""

import threading
import time
from unittest.mock import MagicMock

import pytest

from hashbuf import UnknownAlgorithmError, active_backend, blake3, sha256
from hashbuf.backends import BackendSelector, default_selector, get_selector
from hashbuf.backends.native import load_blake3
from hashbuf.backends.portable import PortableBlake3, PortableSha256
from hashbuf.core.container import get_container
from hashbuf.core.exceptions import BackendLoadError
from hashbuf.core.interfaces.primitive import Backend

ABC_BLAKE3 = "6437b3ac38465133ffb63b75273a8db548c558465d79db03fd359c6cd5bd9d85"


def _failing_loader():
    raise BackendLoadError("not available", algorithm="blake3")


class TestBackendSelector:
    """Tests for a standalone selector."""

    def test_lazy_until_first_resolve(self):
        """Constructing a selector probes nothing."""
        loader = MagicMock(side_effect=load_blake3)
        selector = BackendSelector("blake3", loader, PortableBlake3)

        assert not selector.resolved
        assert selector.backend is None
        loader.assert_not_called()
        assert "unresolved" in repr(selector)

    def test_native_when_available(self):
        """A successful loader yields the native backend."""
        selector = BackendSelector("blake3", load_blake3, PortableBlake3)
        assert selector.resolve().backend == Backend.NATIVE
        assert selector.backend == Backend.NATIVE

    def test_fallback_on_load_error(self):
        """A failing loader falls back to portable."""
        selector = BackendSelector("blake3", _failing_loader, PortableBlake3)
        primitive = selector.resolve()

        assert primitive.backend == Backend.PORTABLE
        assert primitive.hash(b"abc").hex() == ABC_BLAKE3

    def test_fallback_on_unexpected_exception(self):
        """Any loader exception counts as unavailable."""
        loader = MagicMock(side_effect=OSError("bad .so"))
        selector = BackendSelector("blake3", loader, PortableBlake3)
        assert selector.resolve().backend == Backend.PORTABLE

    def test_fallback_is_permanent(self):
        """After a failed probe the loader is never called again."""
        loader = MagicMock(side_effect=BackendLoadError("transient"))
        selector = BackendSelector("blake3", loader, PortableBlake3)

        first = selector.resolve()
        second = selector.resolve()

        assert first is second
        assert loader.call_count == 1

    def test_prefer_portable_skips_probe(self):
        """prefer='portable' never calls the native loader."""
        loader = MagicMock(side_effect=load_blake3)
        selector = BackendSelector("blake3", loader, PortableBlake3, prefer="portable")

        assert selector.resolve().backend == Backend.PORTABLE
        loader.assert_not_called()

    def test_fallback_is_logged(self):
        """The fallback reason goes to the diagnostic logger."""
        logger = MagicMock()
        selector = BackendSelector("blake3", _failing_loader, PortableBlake3, logger=logger)
        selector.resolve()
        assert logger.debug.called

    def test_single_flight(self):
        """Concurrent first calls run the loader once and share one primitive."""
        calls = []
        barrier = threading.Barrier(8)

        def slow_loader():
            calls.append(1)
            time.sleep(0.05)
            return load_blake3()

        selector = BackendSelector("blake3", slow_loader, PortableBlake3)
        results = []

        def worker():
            barrier.wait()
            results.append(selector.resolve())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)


class TestDefaultSelector:
    """Tests for default_selector()."""

    def test_unknown_algorithm(self):
        """Unknown names raise UnknownAlgorithmError."""
        with pytest.raises(UnknownAlgorithmError):
            default_selector("md5")

    def test_builds_for_known_algorithms(self):
        """Built-in algorithms get a selector."""
        assert default_selector("sha256").algorithm == "sha256"


class TestProcessWideSelection:
    """Tests for selectors held by the service container."""

    def test_same_selector_every_lookup(self):
        """get_selector returns one selector per algorithm."""
        assert get_selector("blake3") is get_selector("blake3")
        assert get_selector("blake3") is not get_selector("sha256")

    def test_unknown_algorithm_lookup(self):
        """get_selector on an unregistered name raises UnknownAlgorithmError."""
        with pytest.raises(UnknownAlgorithmError):
            get_selector("md5")

    def test_injected_selector_forces_portable(self):
        """A selector registered before first use replaces the default."""
        get_container().register_backend_selector(
            "blake3", selector=BackendSelector("blake3", _failing_loader, PortableBlake3)
        )

        assert blake3(b"abc").hex() == ABC_BLAKE3
        assert active_backend("blake3") == Backend.PORTABLE
        # Other algorithms keep their default selector
        assert active_backend("sha256") == Backend.NATIVE

    def test_env_preference_portable(self, monkeypatch):
        """HASHBUF_BACKEND__PREFER=portable forces portable primitives."""
        monkeypatch.setenv("HASHBUF_BACKEND__PREFER", "PORTABLE")

        assert active_backend("blake3") == Backend.PORTABLE
        assert active_backend("sha256") == Backend.PORTABLE
        assert sha256(b"").hex() == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_default_prefers_native(self):
        """With no configuration, both algorithms resolve to native."""
        assert active_backend("blake3") == Backend.NATIVE
        assert active_backend("sha256") == Backend.NATIVE

    def test_reset_allows_new_choice(self):
        """bootstrap.reset() drops the resolved selectors."""
        from hashbuf.core.bootstrap import reset

        first = get_selector("sha256")
        reset()
        get_container().register_backend_selector(
            "sha256",
            selector=BackendSelector("sha256", _failing_loader, PortableSha256),
        )
        assert get_selector("sha256") is not first
        assert active_backend("sha256") == Backend.PORTABLE


class TestContainerLogger:
    """Selectors built by bootstrap log through the container's ILogger."""

    def test_fallback_logged_to_container_logger(self, monkeypatch):
        """An overridden ILogger receives the fallback diagnostic."""
        from dependency_injector import providers

        from hashbuf.backends import NATIVE_LOADERS
        from hashbuf.core.interfaces.logger import ILogger

        logger = MagicMock()
        get_container().override(ILogger, providers.Object(logger))
        monkeypatch.setitem(NATIVE_LOADERS, "blake3", _failing_loader)

        assert active_backend("blake3") == Backend.PORTABLE
        message = logger.debug.call_args[0][0]
        assert "native backend unavailable" in message
        assert sorted(get_container().list_backend_selectors()) == ["blake3", "sha256"]
