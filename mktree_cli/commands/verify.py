"""
CLI Verify Command

Verify a block against a proof, offline and without the other blocks.

Usage:
    mktree verify PROOF (--block PATH | --text TEXT) --root HEX [--binary] [--json]

The root must come from a trusted source; the root written inside a
proof document is never used for the check.

Exit codes:
    0  block is included under the root
    1  runtime error or malformed proof
    2  verification failed (root or block hash mismatch)
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from mktree.crypto.hashing import Hasher
from mktree.merkle.merkle_proofs import MerkleVerifier
from mktree.schemas.errors import ErrorCodes, MalformedProofPathException
from mktree.schemas.proof import InclusionProof
from mktree.schemas.verification import VerificationResult
from mktree_cli.io import parse_root, print_error, read_target_block, write_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def _exit_code(result: VerificationResult) -> int:
    if result.ok:
        return EXIT_SUCCESS
    if result.code in (ErrorCodes.ROOT_MISMATCH, ErrorCodes.BLOCK_HASH_MISMATCH):
        return EXIT_VERIFICATION_FAILED
    return EXIT_RUNTIME_ERROR


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    config = args.runtime_config
    block = read_target_block(args.block, args.text)
    if not args.root:
        print_error("--root is required (the trusted Merkle root, as hex)")
        return EXIT_RUNTIME_ERROR
    trusted_root = parse_root(args.root)
    proof_file = Path(args.proof)

    if args.binary:
        verifier = MerkleVerifier(Hasher(config.hash_algorithm))
        logger.info(f"Verifying encoded proof: {proof_file}")
        result = verifier.check(trusted_root, proof_file.read_bytes(), block)
    else:
        try:
            proof = InclusionProof.parse(proof_file.read_text())
        except MalformedProofPathException as e:
            result = VerificationResult.from_exception(e)
        else:
            # Hash with the algorithm the proof names
            if proof.algorithm != config.hash_algorithm:
                logger.warning(
                    f"Proof uses {proof.algorithm}, configuration says {config.hash_algorithm}"
                )
            verifier = MerkleVerifier(Hasher(proof.algorithm))
            logger.info(f"Verifying inclusion proof: {proof_file}")
            result = verifier.check_bundle(proof, block, trusted_root)

    if args.json:
        write_json(result.model_dump())
    elif result.ok:
        print(f"OK: {result.message} ({result.expected_root})")
    else:
        print(f"FAILED [{result.code}]: {result.message}")
        if result.computed_root:
            print(f"  expected: {result.expected_root}")
            print(f"  computed: {result.computed_root}")
        for key, value in result.details.items():
            print(f"  {key}: {value}")

    return _exit_code(result)
