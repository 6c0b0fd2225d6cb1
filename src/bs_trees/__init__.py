"""
Unbalanced binary search trees.

This package provides an ordered map built on a plain binary search tree
whose removal keeps every surviving node object in place, so references
handed out by insert and get stay valid.
"""

from bs_trees.base import (
    BSTreeError,
    DuplicateKeyError,
    KeyNotFoundError,
    AbstractOrderedMap,
)
from bs_trees.node import BSTNode
from bs_trees.tree import (
    BinarySearchTree,
    Stats,
    bstree_stats_,
    collect_keys,
    TREE_FLAGS,
)
from bs_trees.factory import (
    make_bstree_class,
    create_bstree,
)

__all__ = [
    'BSTreeError',
    'DuplicateKeyError',
    'KeyNotFoundError',
    'AbstractOrderedMap',
    'BSTNode',
    'BinarySearchTree',
    'Stats',
    'bstree_stats_',
    'collect_keys',
    'TREE_FLAGS',
    'make_bstree_class',
    'create_bstree',
]
