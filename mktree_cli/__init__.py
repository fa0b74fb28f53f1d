"""
mktree CLI

Command-line interface for building Merkle roots and proving/verifying
block membership.

Usage:
    python -m mktree_cli root data/*.json
    python -m mktree_cli prove --block data/b.json data/*.json --out proof.json
    python -m mktree_cli verify proof.json --block data/b.json --root 0x...
    python -m mktree_cli tree data/*.json
"""

__version__ = "0.1.0"
