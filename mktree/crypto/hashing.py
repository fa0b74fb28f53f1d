"""
Hashing Utilities
Hash primitive wrapper and hex helpers for Merkle commitments.

This module provides:
- Hasher: a fixed-output-length hash function selected by hashlib name
- hash_one / hash_pair: leaf and parent hashing with the default hasher
- Hex encoding/decoding with 0x prefix

Hashing Rules (Hard Contracts):
1. Leaf: hash_one(block) = H(block)
2. Parent: hash_pair(left, right) = H(left || right)
   - Concatenation, not addition; order matters
3. No domain-separation prefixes are added to either input

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- All operations are deterministic and side-effect free
"""
from __future__ import annotations

import hashlib
import logging
from typing import Optional

from mktree.config.runtime import get_default_config
from mktree.schemas.errors import HasherConfigurationException


logger = logging.getLogger(__name__)


class Hasher:
    """
    Wraps a collision-resistant hash function with a fixed digest length.

    The primitive is picked by its hashlib name ("sha256", "sha3_256",
    "blake2b", "ripemd160" where the OpenSSL build provides it, ...).
    Variable-length XOFs (shake_128, shake_256) are rejected because
    every digest in a tree must have the same length.

    Example:
        >>> h = Hasher("sha256")
        >>> h.digest_size
        32
        >>> h.hash_pair(b"a", b"b") == h.hash_one(b"ab")
        True
    """

    __slots__ = ("_algorithm", "_digest_size")

    def __init__(self, algorithm: str = "sha256") -> None:
        name = algorithm.strip().lower()
        try:
            probe = hashlib.new(name)
        except (ValueError, TypeError) as e:
            raise HasherConfigurationException(
                f"Unsupported hash algorithm: {algorithm!r}",
                algorithm=algorithm,
            ) from e

        if name.startswith("shake_"):
            raise HasherConfigurationException(
                f"Hash algorithm {algorithm!r} has no fixed digest length",
                algorithm=algorithm,
            )

        self._algorithm = name
        self._digest_size = probe.digest_size
        logger.debug(f"Hasher initialised: {name} ({self._digest_size} bytes)")

    @property
    def algorithm(self) -> str:
        """Normalised hashlib name of the primitive."""
        return self._algorithm

    @property
    def digest_size(self) -> int:
        """Length in bytes of every digest this hasher produces."""
        return self._digest_size

    def hash_one(self, block: bytes) -> bytes:
        """
        Hash a single data block.

        Args:
            block: Raw block bytes

        Returns:
            Digest of the block
        """
        h = hashlib.new(self._algorithm)
        h.update(block)
        return h.digest()

    def hash_pair(self, left: bytes, right: bytes) -> bytes:
        """
        Hash the concatenation of two digests.

        hash_pair(a, b) != hash_pair(b, a) in general.

        Args:
            left: Left digest
            right: Right digest

        Returns:
            Digest of left || right
        """
        h = hashlib.new(self._algorithm)
        h.update(left)
        h.update(right)
        return h.digest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hasher):
            return NotImplemented
        return self._algorithm == other._algorithm

    def __hash__(self) -> int:
        return hash(self._algorithm)

    def __repr__(self) -> str:
        return f"Hasher(algorithm={self._algorithm!r})"


_default_hasher: Optional[Hasher] = None


def get_default_hasher() -> Hasher:
    """
    Get the hasher selected by the runtime configuration.

    The instance is cached and rebuilt when the configured algorithm changes.

    Raises:
        HasherConfigurationException: If the configured algorithm is unusable
    """
    global _default_hasher
    algorithm = get_default_config().hash_algorithm
    if _default_hasher is None or _default_hasher.algorithm != algorithm:
        _default_hasher = Hasher(algorithm)
    return _default_hasher


def resolve_hasher(hasher: Optional[Hasher]) -> Hasher:
    """Return the given hasher, or the configured default when None."""
    return hasher if hasher is not None else get_default_hasher()


def hash_one(block: bytes) -> bytes:
    """Hash a single block with the default hasher."""
    return get_default_hasher().hash_one(block)


def hash_pair(left: bytes, right: bytes) -> bytes:
    """Hash left || right with the default hasher."""
    return get_default_hasher().hash_pair(left, right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "Hasher",
    "get_default_hasher",
    "resolve_hasher",
    "hash_one",
    "hash_pair",
    "to_hex",
    "from_hex",
]
