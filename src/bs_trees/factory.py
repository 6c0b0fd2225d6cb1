"""Factory for the creation of binary search trees"""

from typing import Dict, Iterable, Tuple, Type, Any
import logging

from bs_trees.node import BSTNode
from bs_trees.tree import BinarySearchTree

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Cache for previously created classes to avoid recreating them
_class_cache: Dict[Type[BSTNode], Type[BinarySearchTree]] = {}


def make_bstree_class(node_class: Type[BSTNode] = BSTNode) -> Type[BinarySearchTree]:
    """
    Factory function to generate a BinarySearchTree subclass that builds its
    nodes from `node_class`.

    Nodes inserted below the root are created with ``type(parent)``, so the
    whole tree consists of `node_class` instances.

    Raises:
        TypeError: If node_class is not a subclass of BSTNode.
    """
    if not (isinstance(node_class, type) and issubclass(node_class, BSTNode)):
        raise TypeError(f"make_bstree_class(): expected a BSTNode subclass, got {node_class!r}")

    if node_class is BSTNode:
        return BinarySearchTree

    if node_class in _class_cache:
        logger.debug(f"Using cached tree class for {node_class.__name__}")
        return _class_cache[node_class]

    TreeClass = type(
        f"BinarySearchTree_{node_class.__name__}",
        (BinarySearchTree,),
        {
            "NodeClass": node_class,
            "__slots__": (),
        }
    )
    logger.debug(f"Created {TreeClass.__name__} with NodeClass={node_class.__name__}")

    _class_cache[node_class] = TreeClass
    return TreeClass


def create_bstree(
    items: Iterable[Tuple[Any, Any]] = (),
    node_class: Type[BSTNode] = BSTNode
) -> BinarySearchTree:
    """
    Create a new tree and insert the given (key, value) pairs in order.

    The insertion order determines the tree's shape.

    Raises:
        DuplicateKeyError: If `items` repeats a key.
    """
    TreeClass = make_bstree_class(node_class)
    tree = TreeClass()
    for key, value in items:
        tree.insert(key, value)
    logger.debug(f"Created tree instance of type {type(tree).__name__} with {tree.size()} items")
    return tree
