"""
Hashing Unit Tests
Tests for mktree/crypto/hashing.py

Covers:
1. Known digests for the default primitive
2. hash_pair is concatenation and order-sensitive
3. Algorithm selection and rejection of unusable primitives
4. Default hasher follows the runtime configuration
5. Hex helpers
"""
import hashlib

import pytest

from mktree.config.runtime import RuntimeConfig, set_default_config
from mktree.crypto.hashing import (
    Hasher,
    from_hex,
    get_default_hasher,
    hash_one,
    hash_pair,
    resolve_hasher,
    to_hex,
)
from mktree.schemas.errors import ErrorCodes, HasherConfigurationException


class TestHasher:
    """Tests for the Hasher primitive wrapper."""

    def test_sha256_known_value(self):
        """hash_one matches the published SHA-256 test vector."""
        h = Hasher("sha256")
        assert h.hash_one(b"hello").hex() == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_digest_size(self):
        assert Hasher("sha256").digest_size == 32
        assert Hasher("sha512").digest_size == 64
        assert Hasher("sha1").digest_size == 20

    def test_empty_block_is_hashed(self):
        """The empty block still hashes (it is not treated as missing)."""
        assert Hasher().hash_one(b"") == hashlib.sha256(b"").digest()

    def test_hash_pair_is_concatenation(self, hasher):
        """hash_pair(l, r) == H(l || r)."""
        left = hasher.hash_one(b"left")
        right = hasher.hash_one(b"right")
        assert hasher.hash_pair(left, right) == hashlib.sha256(left + right).digest()

    def test_hash_pair_order_matters(self, hasher):
        """Swapping the operands changes the digest."""
        a = hasher.hash_one(b"a")
        b = hasher.hash_one(b"b")
        assert hasher.hash_pair(a, b) != hasher.hash_pair(b, a)

    def test_algorithm_name_normalised(self):
        """Names are case-insensitive and surrounding whitespace is ignored."""
        h = Hasher("  SHA256 ")
        assert h.algorithm == "sha256"
        assert h == Hasher("sha256")
        assert hash(h) == hash(Hasher("sha256"))

    def test_other_algorithms(self):
        """Any fixed-length hashlib primitive can be selected."""
        h = Hasher("sha3_256")
        assert h.hash_one(b"x") == hashlib.sha3_256(b"x").digest()

    def test_unknown_algorithm_raises(self):
        with pytest.raises(HasherConfigurationException, match="Unsupported") as exc_info:
            Hasher("not-a-hash")

        assert exc_info.value.code == ErrorCodes.HASHER_CONFIGURATION_ERROR
        assert exc_info.value.details["algorithm"] == "not-a-hash"

    def test_variable_length_algorithm_rejected(self):
        """shake_* has no fixed digest length and is refused."""
        with pytest.raises(HasherConfigurationException, match="fixed digest length"):
            Hasher("shake_128")

    def test_repr(self):
        assert repr(Hasher("sha256")) == "Hasher(algorithm='sha256')"


class TestDefaultHasher:
    """Tests for the configured default hasher and module-level helpers."""

    def test_default_is_sha256(self):
        assert get_default_hasher().algorithm == "sha256"

    def test_module_helpers_use_default(self):
        assert hash_one(b"x") == hashlib.sha256(b"x").digest()
        assert hash_pair(b"x", b"y") == hashlib.sha256(b"xy").digest()

    def test_follows_config_changes(self):
        """Changing the default config switches the default hasher."""
        set_default_config(RuntimeConfig(hash_algorithm="sha512"))
        assert get_default_hasher().algorithm == "sha512"
        assert len(hash_one(b"x")) == 64

        set_default_config(RuntimeConfig(hash_algorithm="sha256"))
        assert get_default_hasher().algorithm == "sha256"

    def test_env_selects_algorithm(self, monkeypatch):
        monkeypatch.setenv("MKTREE_HASH_ALGORITHM", "sha1")
        set_default_config(None)
        assert get_default_hasher().digest_size == 20

    def test_bad_configured_algorithm_raises(self):
        set_default_config(RuntimeConfig(hash_algorithm="bogus"))
        with pytest.raises(HasherConfigurationException):
            get_default_hasher()

    def test_resolve_hasher(self, hasher):
        """An explicit hasher wins over the default."""
        sha1 = Hasher("sha1")
        assert resolve_hasher(sha1) is sha1
        assert resolve_hasher(None) == hasher


class TestHexHelpers:
    """Tests for hex encoding/decoding."""

    def test_to_hex_adds_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex_roundtrip(self):
        data = Hasher().hash_one(b"round trip")
        assert from_hex(to_hex(data)) == data

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
