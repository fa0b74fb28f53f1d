"""
CLI Root Command

Compute the Merkle root of a set of blocks.

Usage:
    mktree root FILE... [--lines] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from mktree.crypto.hashing import Hasher, to_hex
from mktree.merkle.merkle_tree import build_merkle_tree, compute_tree_depth
from mktree.schemas.errors import ErrorCodes
from mktree_cli.io import read_blocks, report_error, write_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def root_cmd(args: Namespace) -> int:
    """Handle root command."""
    config = args.runtime_config
    hasher = Hasher(config.hash_algorithm)

    blocks = read_blocks(args.files, lines=args.lines)
    root, _ = build_merkle_tree(blocks, hasher, max_workers=config.max_workers)

    if root is None:
        report_error(ErrorCodes.EMPTY_INPUT, "No data blocks to commit to", as_json=args.json)
        return EXIT_RUNTIME_ERROR

    if args.json:
        write_json({
            "algorithm": hasher.algorithm,
            "root": to_hex(root),
            "blocks": len(blocks),
            "depth": compute_tree_depth(len(blocks)),
        })
    else:
        print(to_hex(root))
    return EXIT_SUCCESS
