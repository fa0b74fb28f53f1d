"""
CLI Tree Command

Print the proof tree for a set of blocks (debugging aid).

Usage:
    mktree tree FILE... [--lines]
"""

from __future__ import annotations

from argparse import Namespace

from mktree.crypto.hashing import Hasher
from mktree.merkle.merkle_tree import build_merkle_tree, tree_string
from mktree.schemas.errors import ErrorCodes
from mktree_cli.io import read_blocks, report_error


def tree_cmd(args: Namespace) -> int:
    """Handle tree command."""
    config = args.runtime_config
    hasher = Hasher(config.hash_algorithm)

    blocks = read_blocks(args.files, lines=args.lines)
    _, tree = build_merkle_tree(blocks, hasher, max_workers=config.max_workers)
    if tree is None:
        report_error(ErrorCodes.EMPTY_INPUT, "No data blocks to commit to")
        return 1

    print(tree_string(tree), end="")
    return 0
