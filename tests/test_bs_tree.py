"""Tests for the BinarySearchTree container, its stats and factory"""
# pylint: skip-file

import unittest
import logging
from dataclasses import fields

from bs_trees.base import BSTreeError, DuplicateKeyError, KeyNotFoundError
from bs_trees.factory import make_bstree_class, create_bstree
from bs_trees.node import BSTNode
from bs_trees.tree import (
    BinarySearchTree,
    Stats,
    bstree_stats_,
    collect_keys,
    TREE_FLAGS,
)
from tests.bs.base import TreeTestCase, SCENARIO_KEYS
from tests.utils import (
    assert_tree_invariants_raise,
    InvariantError,
)

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TaggedNode(BSTNode):
    """Node subclass used to check that trees build nodes of a custom type"""
    __slots__ = ()


class TestContainerProtocols(TreeTestCase):
    """Python protocols on top of the core operations"""
    def setUp(self):
        super().setUp()
        self._insert_keys(SCENARIO_KEYS)

    def test_len_matches_size(self):
        self.assertEqual(len(self.tree), self.tree.size())

    def test_str(self):
        self.assertIn("size=7", str(self.tree))
        self.assertEqual(str(BinarySearchTree()), "Empty BinarySearchTree")

    def test_node_repr(self):
        self.assertEqual(repr(self.nodes[4]), "BSTNode(key=4, value='value_4')")

    def test_print_structure(self):
        tree = BinarySearchTree()
        tree.insert(2, "b")
        tree.insert(1, "a")
        self.assertEqual(
            tree.print_structure(),
            "Root: BSTNode(key=2, value='b')\n"
            "    Left: BSTNode(key=1, value='a')\n"
            "    Right: Empty"
        )

    def test_print_structure_max_depth(self):
        text = self.tree.print_structure(max_depth=0)
        self.assertIn("Root: BSTNode(key=5", text)
        self.assertIn("max depth reached", text)
        self.assertNotIn("key=1", text)

    def test_print_structure_empty(self):
        self.assertEqual(BinarySearchTree().print_structure(), "Empty BinarySearchTree")

    def test_collect_keys(self):
        self.assertEqual(collect_keys(self.tree), sorted(SCENARIO_KEYS))


class TestErrors(unittest.TestCase):
    """Exception hierarchy"""
    def test_hierarchy(self):
        self.assertTrue(issubclass(DuplicateKeyError, BSTreeError))
        self.assertTrue(issubclass(KeyNotFoundError, BSTreeError))
        self.assertTrue(issubclass(KeyNotFoundError, KeyError))

    def test_key_not_found_message_is_unquoted(self):
        err = KeyNotFoundError(3)
        self.assertEqual(str(err), "Attempted to remove key 3 which is not in this tree.")

    def test_remove_on_empty_tree(self):
        tree = BinarySearchTree()
        with self.assertRaises(KeyNotFoundError):
            tree.remove(1)
        self.assertEqual(tree.size(), 0)


class TestStats(unittest.TestCase):
    """bstree_stats_ reports shape and detects broken invariants"""
    def setUp(self):
        self.tree = create_bstree((k, str(k)) for k in SCENARIO_KEYS)

    def test_empty_tree(self):
        stats = bstree_stats_(BinarySearchTree())
        self.assertEqual(stats.node_count, 0)
        self.assertEqual(stats.height, 0)
        self.assertIsNone(stats.least_key)
        self.assertTrue(stats.is_search_tree)
        self.assertTrue(stats.size_consistent)

    def test_scenario_stats(self):
        stats = bstree_stats_(self.tree)
        self.assertEqual(stats.node_count, 7)
        self.assertEqual(stats.leaf_count, 4)
        self.assertEqual(stats.height, 3)
        self.assertEqual(stats.least_key, 1)
        self.assertEqual(stats.greatest_key, 9)
        for flag in TREE_FLAGS:
            self.assertTrue(getattr(stats, flag), flag)
        assert_tree_invariants_raise(self.tree, stats)

    def test_tree_flags_are_boolean_stats_fields(self):
        stats = bstree_stats_(self.tree)
        names = [f.name for f in fields(Stats)]
        for flag in TREE_FLAGS:
            self.assertIn(flag, names)
            self.assertIsInstance(getattr(stats, flag), bool)

    def test_detects_out_of_order_key(self):
        self.tree.get(4).key = 6
        stats = bstree_stats_(self.tree)
        self.assertFalse(stats.is_search_tree)
        with self.assertRaises(InvariantError):
            assert_tree_invariants_raise(self.tree, stats)

    def test_detects_broken_parent_link(self):
        self.tree.get(7).parent = self.tree.get(3)
        self.assertFalse(bstree_stats_(self.tree).links_consistent)

    def test_detects_attached_root(self):
        self.tree.root.parent = self.tree.get(1)
        self.assertFalse(bstree_stats_(self.tree).root_detached)

    def test_detects_size_mismatch(self):
        self.tree._count += 1
        self.assertFalse(bstree_stats_(self.tree).size_consistent)


class TestFactory(unittest.TestCase):
    """Tree classes bound to custom node types"""
    def test_default_node_class(self):
        self.assertIs(make_bstree_class(), BinarySearchTree)
        self.assertIs(make_bstree_class(BSTNode), BinarySearchTree)

    def test_custom_node_class(self):
        TreeClass = make_bstree_class(TaggedNode)
        self.assertTrue(issubclass(TreeClass, BinarySearchTree))
        self.assertIs(TreeClass.NodeClass, TaggedNode)
        self.assertIn("TaggedNode", TreeClass.__name__)

    def test_class_is_cached(self):
        self.assertIs(make_bstree_class(TaggedNode), make_bstree_class(TaggedNode))

    def test_rejects_non_node_class(self):
        with self.assertRaises(TypeError):
            make_bstree_class(dict)
        with self.assertRaises(TypeError):
            make_bstree_class("BSTNode")

    def test_create_with_custom_nodes(self):
        tree = create_bstree(((k, k * 10) for k in SCENARIO_KEYS), node_class=TaggedNode)
        self.assertEqual(tree.size(), 7)
        for node in tree:
            self.assertIsInstance(node, TaggedNode)
        tree.remove(5)
        self.assertIsInstance(tree.root, TaggedNode)
        self.assertEqual(list(tree.items()), [(k, k * 10) for k in [1, 3, 4, 7, 8, 9]])

    def test_create_empty(self):
        tree = create_bstree()
        self.assertTrue(tree.is_empty())

    def test_create_with_duplicate_raises(self):
        with self.assertRaises(DuplicateKeyError):
            create_bstree([(1, "a"), (2, "b"), (1, "c")])


if __name__ == "__main__":
    unittest.main()
