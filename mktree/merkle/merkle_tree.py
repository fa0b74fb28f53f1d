"""
Merkle Tree Construction
Deterministic recursive construction of a binary Merkle proof tree.

This module provides:
- LeafNode / InternalNode: the two variants of a proof-tree node
- build_merkle_tree: root digest plus the full proof tree
- build_merkle_root: root digest only
- Inspection helpers (rendering, leaf iteration, consistency check)

Construction Rules (Hard Contracts):
1. Empty input: no root and no tree (BuildResult(None, None))
2. Single block: a leaf whose digest is hash_one(block); root == leaf
3. n > 1 blocks: split at mid = ceil(n / 2); the left subtree takes the
   first mid blocks, the right subtree the rest;
   parent = hash_pair(left.digest, right.digest)
4. No padding and no duplicated leaves. Odd inputs give an unbalanced
   tree with the larger half on the left.

Changing the split rule changes every root for non-power-of-two inputs,
so roots would no longer match those built by other implementations.

Determinism Notes:
- Leaf order is the input order; this module never sorts
- Nodes are frozen; a built tree is safe to share between threads
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Union

from mktree.crypto.hashing import Hasher, resolve_hasher


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafNode:
    """
    A proof-tree leaf: the digest of exactly one data block.

    Leaves have no children; `left` and `right` always read as None.
    """
    digest: bytes

    @property
    def left(self) -> None:
        return None

    @property
    def right(self) -> None:
        return None

    @property
    def is_leaf(self) -> bool:
        return True

    def describe(self) -> str:
        return f"hash:{self.digest.hex()}\n"


@dataclass(frozen=True)
class InternalNode:
    """
    A proof-tree internal node with exactly two children.

    Invariant: digest == hash_pair(left.digest, right.digest).
    """
    digest: bytes
    left: "ProofNode"
    right: "ProofNode"

    def __post_init__(self) -> None:
        if self.left is None or self.right is None:
            raise ValueError("Internal nodes must have exactly two children")

    @property
    def is_leaf(self) -> bool:
        return False

    def describe(self) -> str:
        """Digest of this node followed by the digests of its children."""
        return (
            f"hash:{self.digest.hex()}\n"
            f"  left:{self.left.digest.hex()}\n"
            f"  right:{self.right.digest.hex()}\n"
        )


ProofNode = Union[LeafNode, InternalNode]


class BuildResult(NamedTuple):
    """Result of a tree build. Both fields are None for empty input."""
    root: Optional[bytes]
    tree: Optional[ProofNode]

    @property
    def is_empty(self) -> bool:
        return self.tree is None


def split_point(num_blocks: int) -> int:
    """Number of blocks that go to the left subtree: ceil(n / 2)."""
    return (num_blocks + 1) // 2


def _build_subtree(blocks: Sequence[bytes], hasher: Hasher) -> ProofNode:
    # Caller guarantees len(blocks) >= 1
    if len(blocks) == 1:
        return LeafNode(hasher.hash_one(blocks[0]))

    mid = split_point(len(blocks))
    left = _build_subtree(blocks[:mid], hasher)
    right = _build_subtree(blocks[mid:], hasher)
    return InternalNode(hasher.hash_pair(left.digest, right.digest), left, right)


def _submit_subtrees(
    blocks: Sequence[bytes],
    hasher: Hasher,
    pool: ThreadPoolExecutor,
    levels: int,
) -> "Future[ProofNode] | tuple":
    if levels == 0 or len(blocks) < 2:
        return pool.submit(_build_subtree, blocks, hasher)
    mid = split_point(len(blocks))
    return (
        _submit_subtrees(blocks[:mid], hasher, pool, levels - 1),
        _submit_subtrees(blocks[mid:], hasher, pool, levels - 1),
    )


def _join_subtrees(pending: "Future[ProofNode] | tuple", hasher: Hasher) -> ProofNode:
    if isinstance(pending, tuple):
        left = _join_subtrees(pending[0], hasher)
        right = _join_subtrees(pending[1], hasher)
        return InternalNode(hasher.hash_pair(left.digest, right.digest), left, right)
    return pending.result()


def _build_parallel(
    blocks: Sequence[bytes],
    hasher: Hasher,
    max_workers: int,
) -> ProofNode:
    """
    Build independent subtrees on a thread pool, then join in this thread.

    The top floor(log2(max_workers)) levels are split exactly as the
    sequential build splits them, so the result is identical.
    """
    levels = max_workers.bit_length() - 1
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        pending = _submit_subtrees(blocks, hasher, pool, levels)
        return _join_subtrees(pending, hasher)


def build_merkle_tree(
    blocks: Iterable[bytes],
    hasher: Optional[Hasher] = None,
    max_workers: Optional[int] = None,
) -> BuildResult:
    """
    Build the Merkle root and proof tree for an ordered sequence of blocks.

    Algorithm:
    1. If empty: return (None, None); callers must check before use
    2. If single block: the tree is one leaf, root = hash_one(block)
    3. Otherwise split at mid = ceil(n/2), build both halves recursively,
       and combine with hash_pair(left.digest, right.digest)

    Example: [a, b, c] -> mid = 2 -> left [a, b], right [c]
             root = hash_pair(hash_pair(H(a), H(b)), H(c))

    Args:
        blocks: Ordered data blocks (bytes). Order matters and is preserved.
        hasher: Hash primitive; defaults to the configured hasher
        max_workers: Build subtrees on this many threads when > 1.
                     The result does not depend on this value.

    Returns:
        BuildResult(root, tree)
    """
    hasher = resolve_hasher(hasher)
    blocks = list(blocks)

    if not blocks:
        logger.debug("Build requested for empty input; no tree produced")
        return BuildResult(None, None)

    if max_workers is not None and max_workers > 1 and len(blocks) > 1:
        tree = _build_parallel(blocks, hasher, max_workers)
    else:
        tree = _build_subtree(blocks, hasher)

    logger.debug(
        f"Built Merkle tree over {len(blocks)} blocks "
        f"({hasher.algorithm}): root={tree.digest.hex()}"
    )
    return BuildResult(tree.digest, tree)


def build_merkle_root(
    blocks: Iterable[bytes],
    hasher: Optional[Hasher] = None,
) -> Optional[bytes]:
    """Compute only the Merkle root; None for empty input."""
    return build_merkle_tree(blocks, hasher).root


def iter_leaves(node: Optional[ProofNode]) -> Iterator[bytes]:
    """Yield leaf digests in left-to-right order."""
    if node is None:
        return
    stack: list[ProofNode] = [node]
    while stack:
        current = stack.pop()
        if current.is_leaf:
            yield current.digest
        else:
            stack.append(current.right)
            stack.append(current.left)


def leaf_count(node: Optional[ProofNode]) -> int:
    """Number of leaves (input blocks) under a node."""
    return sum(1 for _ in iter_leaves(node))


def tree_string(node: Optional[ProofNode]) -> str:
    """
    Render a tree for debugging.

    Internal nodes are listed in pre-order, each with its child digests.
    A single-leaf tree renders as just its digest.
    """
    if node is None:
        return ""
    if node.is_leaf:
        return node.describe()

    lines: list[str] = []
    stack: list[ProofNode] = [node]
    while stack:
        current = stack.pop()
        if current.is_leaf:
            continue
        lines.append(current.describe())
        stack.append(current.right)
        stack.append(current.left)
    return "".join(lines)


def check_tree_consistency(
    node: Optional[ProofNode],
    hasher: Optional[Hasher] = None,
) -> bool:
    """
    Re-check that every internal node's digest equals
    hash_pair(left.digest, right.digest).

    Returns:
        True if the invariant holds for the whole tree (or the tree is empty)
    """
    hasher = resolve_hasher(hasher)
    stack: list[ProofNode] = [node] if node is not None else []
    while stack:
        current = stack.pop()
        if current.is_leaf:
            continue
        expected = hasher.hash_pair(current.left.digest, current.right.digest)
        if expected != current.digest:
            logger.warning(f"Inconsistent node digest: {current.digest.hex()}")
            return False
        stack.append(current.right)
        stack.append(current.left)
    return True


def compute_tree_depth(num_blocks: int) -> int:
    """
    Number of levels from leaves to root (inclusive).

    Follows ceil(log2(n)) + 1: one block has depth 1, two blocks 2,
    three or four blocks 3. An empty input has depth 0. The longest
    proof path in the tree has depth - 1 steps.
    """
    if num_blocks < 0:
        raise ValueError(f"num_blocks must be non-negative, got {num_blocks}")
    if num_blocks == 0:
        return 0
    return (num_blocks - 1).bit_length() + 1


__all__ = [
    "LeafNode",
    "InternalNode",
    "ProofNode",
    "BuildResult",
    "split_point",
    "build_merkle_tree",
    "build_merkle_root",
    "iter_leaves",
    "leaf_count",
    "tree_string",
    "check_tree_consistency",
    "compute_tree_depth",
]
