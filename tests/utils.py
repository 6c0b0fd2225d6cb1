"""Utility functions for testing BinarySearchTree invariants."""

import logging
from bs_trees.tree import (
    BinarySearchTree,
    Stats,
    TREE_FLAGS,
)


def assert_tree_invariants_tc(tc, t: BinarySearchTree, stats: Stats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        stats.node_count, t.size(),
        f"Invariant failed: node_count={stats.node_count} ≠ size()={t.size()}"
    )

    if not t.is_empty():
        tc.assertGreater(
            stats.height, 0,
            f"Invariant failed: height={stats.height} ≤ 0 for non-empty tree"
        )
        tc.assertIsNotNone(
            stats.least_key,
            "Invariant failed: least_key is None for non-empty tree"
        )
        tc.assertIsNotNone(
            stats.greatest_key,
            "Invariant failed: greatest_key is None for non-empty tree"
        )
        tc.assertEqual(stats.least_key, t.min().key)
        tc.assertEqual(stats.greatest_key, t.max().key)
        tc.assertEqual(stats.height, t.height())


class InvariantError(Exception):
    """Raised when a BinarySearchTree invariant is violated."""
    pass


def assert_tree_invariants_raise(t: BinarySearchTree, stats: Stats) -> None:
    """Check all invariants, raising on the first failure."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error(f"Invariant failed: {flag} is False")
            raise InvariantError(f"{flag} is False")

    if not t.is_empty():
        if stats.height <= 0:
            raise InvariantError(f"height={stats.height} ≤ 0 for non-empty tree")
        if stats.least_key is None:
            raise InvariantError("least_key is None for non-empty tree")
        if stats.greatest_key is None:
            raise InvariantError("greatest_key is None for non-empty tree")
