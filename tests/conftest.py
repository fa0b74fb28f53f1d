"""
Pytest configuration and shared fixtures for mktree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates every test from MKTREE_* environment variables and the
   process-wide default configuration
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_blocks = importlib.import_module("fixtures.blocks")

make_blocks = _blocks.make_blocks
write_block_files = _blocks.write_block_files

from mktree.config.runtime import ENV_PREFIX, set_default_config
from mktree.crypto.hashing import Hasher


# =============================================================================
# Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear MKTREE_* env vars and reset the default config around each test."""
    for name in ("HASH_ALGORITHM", "MAX_WORKERS", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def hasher():
    """SHA-256 hasher."""
    return Hasher("sha256")


@pytest.fixture
def abc_blocks():
    """The three-block example [a, b, c]."""
    return [b"a", b"b", b"c"]


@pytest.fixture
def sample_blocks():
    """Eleven distinct text blocks (odd count, unbalanced tree)."""
    return make_blocks(11)


@pytest.fixture
def block_files(tmp_path):
    """Three block files on disk: a.txt, b.txt, c.txt containing a, b, c."""
    return write_block_files(tmp_path, [b"a", b"b", b"c"])
