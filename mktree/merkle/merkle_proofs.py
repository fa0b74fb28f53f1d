"""
Merkle Proofs
Proof-path extraction from a built tree, and independent verification.

This module provides:
- find_proof_path: sibling digests proving a block's membership
- reconstruct_root: recompute a root from a block and a proof path
- verify_proof_path: compare the recomputed root with a trusted root
- MerkleProver / MerkleVerifier: class-based wrappers

Extraction and verification must agree exactly on ordering:
- Extraction searches depth-first, left child first. A step is appended
  as the recursion unwinds, so the path runs leaf-to-root.
- Found in the left child: step (SIBLING_IS_RIGHT, right.digest)
- Found in the right child: step (SIBLING_IS_LEFT, left.digest)
- Verification folds the path in order:
  SIBLING_IS_LEFT  -> current = hash_pair(sibling, current)
  SIBLING_IS_RIGHT -> current = hash_pair(current, sibling)

Duplicate blocks: when identical blocks appear at several positions, the
first leaf in left-to-right order is proven. Callers that care which
position is proven must track positions themselves.

Verification needs only the root, the path and the block, never the tree.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Union

from mktree.crypto.hashing import Hasher, resolve_hasher, to_hex
from mktree.merkle.merkle_tree import ProofNode, build_merkle_tree
from mktree.merkle.proof_path import (
    Direction,
    ProofPath,
    ProofStep,
    decode_proof_path,
    encode_proof_path,
)
from mktree.schemas.errors import ErrorCodes, MalformedProofPathException
from mktree.schemas.proof import InclusionProof
from mktree.schemas.verification import VerificationResult


logger = logging.getLogger(__name__)


def _collect_path(node: ProofNode, target: bytes, path: list[ProofStep]) -> bool:
    # Steps are appended only on the way back up from a matching leaf
    if node.is_leaf:
        return node.digest == target

    if _collect_path(node.left, target, path):
        path.append(ProofStep(Direction.SIBLING_IS_RIGHT, node.right.digest))
        return True

    if _collect_path(node.right, target, path):
        path.append(ProofStep(Direction.SIBLING_IS_LEFT, node.left.digest))
        return True

    return False


def find_proof_path_for_digest(
    tree: Optional[ProofNode],
    leaf_digest: bytes,
) -> Optional[ProofPath]:
    """
    Find the proof path for a leaf digest.

    Returns:
        The path in leaf-to-root order (empty if the tree is that single
        leaf), or None if no leaf has this digest
    """
    if tree is None:
        return None

    path: list[ProofStep] = []
    if not _collect_path(tree, leaf_digest, path):
        return None
    return tuple(path)


def find_proof_path(
    tree: Optional[ProofNode],
    block: bytes,
    hasher: Optional[Hasher] = None,
) -> Optional[ProofPath]:
    """
    Extract the proof path for a data block.

    Args:
        tree: Proof tree from build_merkle_tree (None for an empty build)
        block: The data block to prove
        hasher: Must be the hasher the tree was built with

    Returns:
        Tuple of ProofStep ordered from the leaf's sibling to the root's
        child, or None if the block is not in the tree. Not-found is a
        normal outcome, not an error.
    """
    hasher = resolve_hasher(hasher)
    path = find_proof_path_for_digest(tree, hasher.hash_one(block))
    if path is None:
        logger.debug("Block not found in proof tree")
    return path


def _check_path(path: Sequence[ProofStep], digest_size: int) -> None:
    for i, step in enumerate(path):
        if step.direction not in (Direction.SIBLING_IS_LEFT, Direction.SIBLING_IS_RIGHT):
            raise MalformedProofPathException(
                f"Step {i} has unknown direction {step.direction!r}",
                details={"step": i},
            )
        if len(step.sibling_digest) != digest_size:
            raise MalformedProofPathException(
                f"Step {i} sibling digest has {len(step.sibling_digest)} bytes, "
                f"expected {digest_size}",
                details={"step": i},
            )


def reconstruct_root(
    path: Iterable[ProofStep],
    block: bytes,
    hasher: Optional[Hasher] = None,
) -> bytes:
    """
    Recompute the root implied by a block and its proof path.

    With an empty path the block hash itself is returned, which is the
    root only for a single-block tree.

    Raises:
        MalformedProofPathException: If any step has an unknown direction
            or a sibling digest of the wrong length. The whole path is
            checked before hashing starts.
    """
    hasher = resolve_hasher(hasher)
    path = tuple(path)
    _check_path(path, hasher.digest_size)

    current = hasher.hash_one(block)
    for step in path:
        if step.direction == Direction.SIBLING_IS_LEFT:
            current = hasher.hash_pair(step.sibling_digest, current)
        else:
            current = hasher.hash_pair(current, step.sibling_digest)
    return current


def verify_proof_path(
    root: Optional[bytes],
    path: Optional[Iterable[ProofStep]],
    block: bytes,
    hasher: Optional[Hasher] = None,
) -> bool:
    """
    Check that a block is included under a trusted root.

    Args:
        root: Trusted root digest (None, as from an empty build, never verifies)
        path: Proof path (None, as from a failed lookup, never verifies)
        block: The data block being authenticated
        hasher: Must match the hasher the root was built with

    Returns:
        True iff the reconstructed root equals root byte for byte

    Raises:
        MalformedProofPathException: If the path is malformed (see
            reconstruct_root). A mismatch returns False and never raises.
    """
    if root is None or path is None:
        return False
    return reconstruct_root(path, block, hasher) == root


def verify_encoded_proof(
    root: Optional[bytes],
    data: bytes,
    block: bytes,
    hasher: Optional[Hasher] = None,
) -> bool:
    """
    Decode a wire-encoded proof path and verify it.

    Raises:
        MalformedProofPathException: If the bytes are not a valid path.
            Decoding happens before any reconstruction.
    """
    hasher = resolve_hasher(hasher)
    path = decode_proof_path(data, hasher.digest_size)
    return verify_proof_path(root, path, block, hasher)


class MerkleProver:
    """
    Holds a built proof tree and produces proofs for its blocks.

    Example:
        >>> prover = MerkleProver.from_blocks([b"a", b"b", b"c"])
        >>> path = prover.prove(b"c")
        >>> len(path)
        1
    """

    def __init__(self, tree: Optional[ProofNode], hasher: Optional[Hasher] = None) -> None:
        self._tree = tree
        self._hasher = resolve_hasher(hasher)

    @classmethod
    def from_blocks(
        cls,
        blocks: Iterable[bytes],
        hasher: Optional[Hasher] = None,
        max_workers: Optional[int] = None,
    ) -> "MerkleProver":
        """Build the tree for blocks and wrap it."""
        hasher = resolve_hasher(hasher)
        _, tree = build_merkle_tree(blocks, hasher, max_workers=max_workers)
        return cls(tree, hasher)

    @property
    def tree(self) -> Optional[ProofNode]:
        return self._tree

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def root(self) -> Optional[bytes]:
        """Root digest, or None if built from no blocks."""
        return self._tree.digest if self._tree is not None else None

    def prove(self, block: bytes) -> Optional[ProofPath]:
        """Proof path for block, or None if it is not in the tree."""
        return find_proof_path(self._tree, block, self._hasher)

    def prove_encoded(self, block: bytes) -> Optional[bytes]:
        """Wire-encoded proof path for block, or None if it is not in the tree."""
        path = self.prove(block)
        return encode_proof_path(path) if path is not None else None

    def prove_bundle(self, block: bytes) -> Optional[InclusionProof]:
        """JSON transport model for block's proof, or None if it is not in the tree."""
        path = self.prove(block)
        if path is None:
            return None
        return InclusionProof.from_path(
            algorithm=self._hasher.algorithm,
            root=self.root,
            block_hash=self._hasher.hash_one(block),
            path=path,
        )


class MerkleVerifier:
    """
    Verifies proofs against a trusted root without the tree.

    Example:
        >>> verifier = MerkleVerifier()
        >>> verifier.verify(prover.root, prover.prove(b"c"), b"c")
        True
    """

    def __init__(self, hasher: Optional[Hasher] = None) -> None:
        self._hasher = resolve_hasher(hasher)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    def verify(
        self,
        root: Optional[bytes],
        path: Optional[Iterable[ProofStep]],
        block: bytes,
    ) -> bool:
        """See verify_proof_path."""
        return verify_proof_path(root, path, block, self._hasher)

    def verify_encoded(self, root: Optional[bytes], data: bytes, block: bytes) -> bool:
        """See verify_encoded_proof."""
        return verify_encoded_proof(root, data, block, self._hasher)

    def check(
        self,
        root: bytes,
        path: Union[Iterable[ProofStep], bytes],
        block: bytes,
    ) -> VerificationResult:
        """
        Verify and report the outcome as a VerificationResult.

        Accepts either a decoded path or its wire encoding. Malformed
        paths produce a failed result with code MALFORMED_PROOF_PATH
        instead of raising.
        """
        expected = to_hex(root)
        try:
            if isinstance(path, (bytes, bytearray, memoryview)):
                path = decode_proof_path(bytes(path), self._hasher.digest_size)
            computed = reconstruct_root(path, block, self._hasher)
        except MalformedProofPathException as e:
            logger.warning(f"Rejected malformed proof path: {e.message}")
            return VerificationResult.from_exception(e, expected_root=expected)

        if computed != root:
            logger.info(f"Root mismatch: expected {expected}, computed {to_hex(computed)}")
            return VerificationResult.mismatch(expected, to_hex(computed))
        return VerificationResult.passed(expected, to_hex(computed))

    def check_bundle(
        self,
        proof: InclusionProof,
        block: bytes,
        trusted_root: bytes,
    ) -> VerificationResult:
        """
        Verify an InclusionProof for block.

        The root claimed inside the proof is never trusted; the block must
        reproduce trusted_root.

        Args:
            proof: Parsed proof document
            block: The data block being authenticated
            trusted_root: Root obtained out of band
        """
        expected = to_hex(trusted_root)
        if proof.algorithm != self._hasher.algorithm:
            return VerificationResult(
                ok=False,
                code=ErrorCodes.HASHER_CONFIGURATION_ERROR,
                message=(
                    f"Proof uses {proof.algorithm}, verifier uses "
                    f"{self._hasher.algorithm}"
                ),
                expected_root=expected,
            )

        block_hash = to_hex(self._hasher.hash_one(block))
        if block_hash != proof.block_hash:
            logger.info(f"Proof is for block {proof.block_hash}, got {block_hash}")
            return VerificationResult.block_mismatch(
                expected, proof_block_hash=proof.block_hash, block_hash=block_hash
            )

        try:
            path = proof.to_path()
        except MalformedProofPathException as e:
            return VerificationResult.from_exception(e, expected_root=expected)
        return self.check(trusted_root, path, block)

    def verify_bundle(
        self,
        proof: InclusionProof,
        block: bytes,
        trusted_root: bytes,
    ) -> bool:
        """Boolean form of check_bundle."""
        return self.check_bundle(proof, block, trusted_root).ok


__all__ = [
    "find_proof_path",
    "find_proof_path_for_digest",
    "reconstruct_root",
    "verify_proof_path",
    "verify_encoded_proof",
    "MerkleProver",
    "MerkleVerifier",
]
