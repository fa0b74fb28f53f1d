"""
Cryptographic utilities: the hash primitive wrapper and hex helpers.
"""
from .hashing import (
    Hasher,
    get_default_hasher,
    resolve_hasher,
    hash_one,
    hash_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "Hasher",
    "get_default_hasher",
    "resolve_hasher",
    "hash_one",
    "hash_pair",
    "to_hex",
    "from_hex",
]
