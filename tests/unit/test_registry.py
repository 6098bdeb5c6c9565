"""
Unit tests for HashAlgorithmRegistry.
"""

import pytest

from hashbuf import BLAKE3, SHA256, HashAlgorithm, UnknownAlgorithmError, get_algorithm
from hashbuf.registry import HashAlgorithmRegistry, get_registry


class TestHashAlgorithmRegistry:
    """Tests for lookup and registration."""

    def test_defaults_registered(self):
        """BLAKE3 and SHA-256 are available by default."""
        registry = HashAlgorithmRegistry()
        assert registry.available_algorithms == ["blake3", "sha256"]
        assert registry.get("blake3") is BLAKE3
        assert "SHA256" in registry

    def test_empty_registry(self):
        """register_defaults=False starts empty."""
        registry = HashAlgorithmRegistry(register_defaults=False)
        assert registry.available_algorithms == []
        assert registry.get("blake3") is None

    def test_require_unknown(self):
        """require() raises UnknownAlgorithmError for unknown names."""
        with pytest.raises(UnknownAlgorithmError) as exc_info:
            HashAlgorithmRegistry().require("md5")
        assert exc_info.value.context["algorithm"] == "md5"

    def test_compute_hash(self):
        """compute_hash returns lowercase hex."""
        registry = HashAlgorithmRegistry()
        assert registry.compute_hash("sha256", b"abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_create_hasher(self):
        """create_hasher returns an active hasher for the algorithm."""
        hasher = HashAlgorithmRegistry().create_hasher("blake3")
        assert hasher.algorithm == "blake3"
        assert not hasher.is_freed
        hasher.free()

    def test_register_custom(self):
        """A custom descriptor can be registered under its own name."""
        registry = HashAlgorithmRegistry()
        custom = HashAlgorithm(
            name="sha256d",
            digest_length=32,
            hash=SHA256.double_hash,
            double_hash=lambda data: SHA256.double_hash(SHA256.double_hash(data)),
            create_hasher=SHA256.create_hasher,
            stream=SHA256.stream,
            hash_hex=lambda data: SHA256.double_hash(data).hex(),
            mac=SHA256.mac,
        )
        registry.register(custom)

        assert registry.compute_hash("sha256d", b"abc") == (
            "4f8b42c22dd3729b519ba6f68d2da7cc5b2d606d05daed5ad5128cc03e6c6358"
        )

    def test_module_lookup(self):
        """get_algorithm uses the shared registry."""
        assert get_algorithm("Blake3") is BLAKE3
        assert get_registry() is get_registry()


class TestRegistryNames:
    """Name normalisation and shared-instance creation."""

    def test_mixed_case_registration(self):
        """A descriptor registered with capitals is found under any casing."""
        registry = HashAlgorithmRegistry(register_defaults=False)
        custom = HashAlgorithm(
            name="SHA256d",
            digest_length=32,
            hash=SHA256.double_hash,
            double_hash=SHA256.double_hash,
            create_hasher=SHA256.create_hasher,
            stream=SHA256.stream,
            hash_hex=SHA256.hash_hex,
            mac=SHA256.mac,
        )
        registry.register(custom)

        assert registry.get("SHA256d") is custom
        assert registry.require("sha256D") is custom
        assert "sha256d" in registry
        assert registry.available_algorithms == ["sha256d"]

    def test_shared_registry_created_once(self, monkeypatch):
        """Concurrent first calls to get_registry share one instance."""
        import threading

        import hashbuf.registry as registry_module

        monkeypatch.setattr(registry_module, "_default_registry", None)
        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(get_registry())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
