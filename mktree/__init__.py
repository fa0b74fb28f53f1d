"""
mktree - binary Merkle trees with compact inclusion proofs.

A root digest commits to an ordered list of data blocks. Anyone holding
one block and its proof path can check membership against the root
without the rest of the data.

Usage:
    from mktree import build_merkle_tree, find_proof_path, verify_proof_path

    root, tree = build_merkle_tree(blocks)
    path = find_proof_path(tree, blocks[2])
    assert verify_proof_path(root, path, blocks[2])
"""

from mktree.crypto.hashing import Hasher, get_default_hasher, hash_one, hash_pair
from mktree.merkle.merkle_tree import (
    BuildResult,
    InternalNode,
    LeafNode,
    ProofNode,
    build_merkle_root,
    build_merkle_tree,
)
from mktree.merkle.proof_path import (
    Direction,
    ProofPath,
    ProofStep,
    decode_proof_path,
    encode_proof_path,
)
from mktree.merkle.merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    find_proof_path,
    reconstruct_root,
    verify_encoded_proof,
    verify_proof_path,
)
from mktree.schemas.errors import (
    HasherConfigurationException,
    MalformedProofPathException,
    MktreeException,
)

__version__ = "0.1.0"

__all__ = [
    "Hasher",
    "get_default_hasher",
    "hash_one",
    "hash_pair",
    "BuildResult",
    "InternalNode",
    "LeafNode",
    "ProofNode",
    "build_merkle_root",
    "build_merkle_tree",
    "Direction",
    "ProofPath",
    "ProofStep",
    "decode_proof_path",
    "encode_proof_path",
    "MerkleProver",
    "MerkleVerifier",
    "find_proof_path",
    "reconstruct_root",
    "verify_encoded_proof",
    "verify_proof_path",
    "HasherConfigurationException",
    "MalformedProofPathException",
    "MktreeException",
]
