"""
CLI Prove Command

Build the tree over a set of blocks and extract the inclusion proof
for one of them.

Usage:
    mktree prove (--block PATH | --text TEXT) FILE... [--lines] [--out PATH] [--binary]

Output is an InclusionProof JSON document, or with --binary the raw
wire-encoded proof path (the root must then be shared separately).
"""

from __future__ import annotations

import logging
from argparse import Namespace

from mktree.crypto.hashing import Hasher
from mktree.merkle.merkle_proofs import MerkleProver
from mktree.schemas.errors import ErrorCodes
from mktree_cli.io import (
    print_error,
    read_blocks,
    read_target_block,
    report_error,
    write_bytes,
    write_json,
)


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def prove_cmd(args: Namespace) -> int:
    """Handle prove command."""
    config = args.runtime_config
    hasher = Hasher(config.hash_algorithm)

    if args.binary and not args.out:
        print_error("--binary requires --out")
        return EXIT_RUNTIME_ERROR

    blocks = read_blocks(args.files, lines=args.lines)
    if not blocks:
        report_error(ErrorCodes.EMPTY_INPUT, "No data blocks to commit to")
        return EXIT_RUNTIME_ERROR

    target = read_target_block(args.block, args.text)
    prover = MerkleProver.from_blocks(blocks, hasher, max_workers=config.max_workers)

    if blocks.count(target) > 1:
        logger.warning(
            "Block occurs more than once; proving the first occurrence"
        )

    if args.binary:
        encoded = prover.prove_encoded(target)
        if encoded is None:
            report_error(ErrorCodes.BLOCK_NOT_FOUND, "Block is not part of the input")
            return EXIT_NOT_FOUND
        write_bytes(encoded, args.out)
        return EXIT_SUCCESS

    bundle = prover.prove_bundle(target)
    if bundle is None:
        report_error(ErrorCodes.BLOCK_NOT_FOUND, "Block is not part of the input")
        return EXIT_NOT_FOUND

    write_json(bundle.model_dump(), args.out)
    return EXIT_SUCCESS
