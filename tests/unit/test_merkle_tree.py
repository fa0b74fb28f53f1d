"""
Merkle Tree Unit Tests
Tests for mktree/merkle/merkle_tree.py

Covers:
1. Empty input - no root and no tree
2. Single block - root equals hash_one(block)
3. Split rule - mid = ceil(n/2), larger half on the left, no padding
4. Determinism and order sensitivity
5. Parallel construction matches sequential construction
6. Structural invariants (consistency, leaf order, depth)
"""
import pytest

from fixtures.blocks import make_blocks, make_random_blocks
from mktree.crypto.hashing import Hasher
from mktree.merkle.merkle_tree import (
    BuildResult,
    InternalNode,
    LeafNode,
    build_merkle_root,
    build_merkle_tree,
    check_tree_consistency,
    compute_tree_depth,
    iter_leaves,
    leaf_count,
    split_point,
    tree_string,
)


class TestEmptyInput:
    """Tests for empty input behavior."""

    def test_empty_returns_no_root_and_no_tree(self, hasher):
        result = build_merkle_tree([], hasher)

        assert result == BuildResult(None, None)
        assert result.is_empty

    def test_empty_root_only(self, hasher):
        assert build_merkle_root([], hasher) is None

    def test_empty_from_generator(self, hasher):
        root, tree = build_merkle_tree(iter([]), hasher)
        assert root is None
        assert tree is None


class TestSingleBlock:
    """Tests for the one-block tree."""

    def test_root_is_block_hash(self, hasher):
        root, tree = build_merkle_tree([b"only"], hasher)

        assert root == hasher.hash_one(b"only")
        assert isinstance(tree, LeafNode)
        assert tree.digest == root
        assert tree.left is None and tree.right is None

    def test_leaf_is_not_internal(self, hasher):
        _, tree = build_merkle_tree([b"only"], hasher)
        assert tree.is_leaf


class TestSplitRule:
    """Tests for the ceil(n/2) split."""

    @pytest.mark.parametrize("n,expected", [(2, 1), (3, 2), (4, 2), (5, 3), (7, 4), (8, 4)])
    def test_split_point(self, n, expected):
        assert split_point(n) == expected

    def test_two_blocks(self, hasher):
        root = build_merkle_root([b"a", b"b"], hasher)
        assert root == hasher.hash_pair(hasher.hash_one(b"a"), hasher.hash_one(b"b"))

    def test_three_blocks(self, hasher, abc_blocks):
        """[a, b, c] -> H(H(H(a)||H(b)) || H(c))."""
        h = hasher
        expected = h.hash_pair(
            h.hash_pair(h.hash_one(b"a"), h.hash_one(b"b")),
            h.hash_one(b"c"),
        )
        root, tree = build_merkle_tree(abc_blocks, hasher)

        assert root == expected
        assert isinstance(tree.left, InternalNode)
        assert isinstance(tree.right, LeafNode)

    def test_five_blocks(self, hasher):
        """[a..e] splits into [a, b, c] | [d, e]; [a, b, c] into [a, b] | [c]."""
        h = hasher
        a, b, c, d, e = (h.hash_one(x) for x in (b"a", b"b", b"c", b"d", b"e"))
        expected = h.hash_pair(
            h.hash_pair(h.hash_pair(a, b), c),
            h.hash_pair(d, e),
        )
        assert build_merkle_root([b"a", b"b", b"c", b"d", b"e"], h) == expected

    def test_no_padding(self, hasher):
        """Odd inputs are never padded by duplicating the last block."""
        h = hasher
        padded = h.hash_pair(
            h.hash_pair(h.hash_one(b"a"), h.hash_one(b"b")),
            h.hash_pair(h.hash_one(b"c"), h.hash_one(b"c")),
        )
        assert build_merkle_root([b"a", b"b", b"c"], h) != padded


class TestDeterminism:
    """Tests for deterministic root computation."""

    def test_same_blocks_same_root(self, hasher, sample_blocks):
        assert build_merkle_root(sample_blocks, hasher) == build_merkle_root(
            list(sample_blocks), hasher
        )

    def test_order_matters(self, hasher):
        assert build_merkle_root([b"a", b"b"], hasher) != build_merkle_root([b"b", b"a"], hasher)

    def test_content_matters(self, hasher, sample_blocks):
        changed = list(sample_blocks)
        changed[4] = b"changed"
        assert build_merkle_root(sample_blocks, hasher) != build_merkle_root(changed, hasher)

    def test_algorithm_matters(self, abc_blocks):
        assert build_merkle_root(abc_blocks, Hasher("sha256")) != build_merkle_root(
            abc_blocks, Hasher("sha3_256")
        )

    def test_default_hasher_used(self, hasher, abc_blocks):
        assert build_merkle_root(abc_blocks) == build_merkle_root(abc_blocks, hasher)


class TestParallelBuild:
    """Tests for thread-pool construction."""

    @pytest.mark.parametrize("workers", [2, 3, 4, 8])
    @pytest.mark.parametrize("n", [2, 3, 7, 16, 33])
    def test_matches_sequential(self, hasher, workers, n):
        blocks = make_blocks(n)
        sequential = build_merkle_tree(blocks, hasher)
        parallel = build_merkle_tree(blocks, hasher, max_workers=workers)

        assert parallel.root == sequential.root
        assert parallel.tree == sequential.tree

    def test_single_worker_is_sequential(self, hasher, sample_blocks):
        assert build_merkle_tree(sample_blocks, hasher, max_workers=1) == build_merkle_tree(
            sample_blocks, hasher
        )

    def test_parallel_single_block(self, hasher):
        root, _ = build_merkle_tree([b"x"], hasher, max_workers=4)
        assert root == hasher.hash_one(b"x")


class TestTreeStructure:
    """Tests for tree invariants and inspection helpers."""

    @pytest.mark.parametrize("n", range(1, 21))
    def test_consistency_random_blocks(self, hasher, n):
        """Every internal digest equals hash_pair of its children."""
        _, tree = build_merkle_tree(make_random_blocks(n), hasher)
        assert check_tree_consistency(tree, hasher)

    def test_consistency_detects_bad_node(self, hasher):
        left = LeafNode(hasher.hash_one(b"a"))
        right = LeafNode(hasher.hash_one(b"b"))
        bad = InternalNode(hasher.hash_one(b"wrong"), left, right)

        assert not check_tree_consistency(bad, hasher)

    def test_consistency_of_empty_tree(self, hasher):
        assert check_tree_consistency(None, hasher)

    def test_leaves_in_input_order(self, hasher, sample_blocks):
        _, tree = build_merkle_tree(sample_blocks, hasher)
        assert list(iter_leaves(tree)) == [hasher.hash_one(b) for b in sample_blocks]

    @pytest.mark.parametrize("n", [1, 2, 5, 11, 32])
    def test_leaf_count(self, hasher, n):
        _, tree = build_merkle_tree(make_blocks(n), hasher)
        assert leaf_count(tree) == n

    def test_leaf_count_empty(self):
        assert leaf_count(None) == 0

    def test_internal_node_requires_two_children(self, hasher):
        leaf = LeafNode(hasher.hash_one(b"a"))
        with pytest.raises(ValueError, match="two children"):
            InternalNode(b"\x00" * 32, leaf, None)

    def test_nodes_are_immutable(self, hasher):
        leaf = LeafNode(hasher.hash_one(b"a"))
        with pytest.raises(AttributeError):
            leaf.digest = b""


class TestTreeDepth:
    """Tests for tree depth calculation."""

    @pytest.mark.parametrize(
        "n,depth",
        [(0, 0), (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5), (1024, 11)],
    )
    def test_depth(self, n, depth):
        assert compute_tree_depth(n) == depth

    def test_negative_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            compute_tree_depth(-1)


class TestTreeString:
    """Tests for the debug rendering."""

    def test_empty(self):
        assert tree_string(None) == ""

    def test_single_leaf(self, hasher):
        _, tree = build_merkle_tree([b"a"], hasher)
        assert tree_string(tree) == f"hash:{hasher.hash_one(b'a').hex()}\n"

    def test_pre_order_internal_nodes(self, hasher, abc_blocks):
        root, tree = build_merkle_tree(abc_blocks, hasher)
        lines = tree_string(tree).splitlines()

        # root, then its left child; the right child is a leaf
        assert len(lines) == 6
        assert lines[0] == f"hash:{root.hex()}"
        assert lines[1] == f"  left:{tree.left.digest.hex()}"
        assert lines[2] == f"  right:{tree.right.digest.hex()}"
        assert lines[3] == f"hash:{tree.left.digest.hex()}"
        assert lines[4] == f"  left:{hasher.hash_one(b'a').hex()}"
        assert lines[5] == f"  right:{hasher.hash_one(b'b').hex()}"
