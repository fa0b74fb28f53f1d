"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof extraction/verification.

This module provides:
- build_merkle_tree: root digest and proof tree from ordered blocks
- find_proof_path: sibling path proving one block's membership
- verify_proof_path: check a block and path against a trusted root
- encode_proof_path / decode_proof_path: byte-level path encoding
- MerkleProver / MerkleVerifier: class-based wrappers

Commitment Rules:
1. Leaf hashing: hash_one(block)
2. Parent hashing: hash_pair(left, right) over left || right
3. Split: left subtree takes the first ceil(n/2) blocks; no padding
4. Empty input: no root, no tree
5. Single block: root = hash_one(block)

Usage:
    from mktree.merkle import build_merkle_tree, find_proof_path, verify_proof_path

    root, tree = build_merkle_tree([b"a", b"b", b"c"])
    path = find_proof_path(tree, b"c")
    assert verify_proof_path(root, path, b"c")
"""
from .merkle_tree import (
    BuildResult,
    InternalNode,
    LeafNode,
    ProofNode,
    build_merkle_root,
    build_merkle_tree,
    check_tree_consistency,
    compute_tree_depth,
    iter_leaves,
    leaf_count,
    split_point,
    tree_string,
)

from .proof_path import (
    Direction,
    ProofPath,
    ProofStep,
    decode_proof_path,
    encode_proof_path,
    encode_proof_step,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    find_proof_path,
    find_proof_path_for_digest,
    reconstruct_root,
    verify_encoded_proof,
    verify_proof_path,
)


__all__ = [
    # Tree types
    "BuildResult",
    "InternalNode",
    "LeafNode",
    "ProofNode",
    # Construction
    "build_merkle_root",
    "build_merkle_tree",
    "split_point",
    # Inspection
    "check_tree_consistency",
    "compute_tree_depth",
    "iter_leaves",
    "leaf_count",
    "tree_string",
    # Proof paths
    "Direction",
    "ProofPath",
    "ProofStep",
    "decode_proof_path",
    "encode_proof_path",
    "encode_proof_step",
    # Extraction & verification
    "find_proof_path",
    "find_proof_path_for_digest",
    "reconstruct_root",
    "verify_encoded_proof",
    "verify_proof_path",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
