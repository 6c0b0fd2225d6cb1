"""Binary search tree container implementation"""

from __future__ import annotations
import logging
from typing import Any, Callable, Iterator, List, Optional, Tuple, Type
from dataclasses import dataclass

from bs_trees.base import (
    AbstractOrderedMap,
    KeyNotFoundError,
    K,
    V,
)
from bs_trees.node import BSTNode
from bs_trees.profiling import (
    track_performance,
    PerformanceTracker
)

# Configure logging
logger = logging.getLogger(__name__)
# Clear all handlers to ensure we don't add duplicates
if logger.hasHandlers():
    logger.handlers.clear()
handler = logging.StreamHandler()
formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(logging.INFO)
# Prevent propagation to the root logger to avoid duplicate logs
logger.propagate = False

# Boolean Stats fields that must hold for every well-formed tree
TREE_FLAGS = (
    "is_search_tree",
    "links_consistent",
    "root_detached",
    "size_consistent",
)


class BinarySearchTree(AbstractOrderedMap[K, V, BSTNode]):
    """
    An unbalanced binary search tree mapping unique keys to values.

    In-order traversal runs in O(N); min, max, get, insert and remove run in
    O(log N) on average and O(N) for degenerate trees; size is O(1).
    Duplicate keys are rejected. The tree is meant for single-threaded use:
    wrap it in one external lock if it must be shared between threads.

    Attributes:
        root (Optional[BSTNode]): The node without parent, or None if empty.
    """
    __slots__ = ("root", "_count")

    # May be overridden by subclasses, see factory.make_bstree_class
    NodeClass: Type[BSTNode] = BSTNode

    def __init__(self) -> None:
        self.root: Optional[BSTNode] = None
        self._count: int = 0

    def is_empty(self) -> bool:
        return self.root is None

    def __str__(self):
        return "Empty BinarySearchTree" if self.is_empty() else f"BinarySearchTree(root={self.root}, size={self._count})"

    __repr__ = __str__

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: Any) -> bool:
        return self.root is not None and self.root.get(key) is not None

    def __iter__(self) -> Iterator[BSTNode]:
        if self.root is None:
            return iter(())
        return self.root.in_order()

    # Public API
    def traverse(self, visit: Callable[[BSTNode], Any]) -> None:
        """
        Traverses the tree in sort order, calling `visit` once for each
        node. Does nothing on an empty tree.
        """
        if self.root is not None:
            self.root.traverse(visit)

    def min(self) -> Optional[BSTNode]:
        """Returns the node with the minimum key, or None if the tree is empty."""
        if self.root is None:
            return None
        return self.root.min()

    def max(self) -> Optional[BSTNode]:
        """Returns the node with the maximum key, or None if the tree is empty."""
        if self.root is None:
            return None
        return self.root.max()

    @track_performance(tag="BinarySearchTree.get")
    def get(self, key: K) -> Optional[BSTNode]:
        """Returns the node with the given key, or None if it is not present."""
        if self.root is None:
            return None
        return self.root.get(key)

    @track_performance(tag="BinarySearchTree.insert")
    def insert(self, key: K, value: V) -> BSTNode:
        """
        Public method (average-case O(log n)): Insert a key, value pair.

        Args:
            key (K): The key. Must be orderable against the keys already
                present and must not be present yet.
            value (V): The value stored with the key.

        Returns:
            BSTNode: The node created for the pair.

        Raises:
            TypeError: If key is None.
            DuplicateKeyError: If key is already present. The tree is left
                unchanged.
        """
        if key is None:
            raise TypeError("insert(): key must not be None")

        if self.root is None:
            node = self.NodeClass(key, value, None)
            self.root = node
        else:
            node = self.root.insert(key, value)

        self._count += 1
        logger.debug(f"Inserted key {key!r}, size is now {self._count}")
        return node

    @track_performance(tag="BinarySearchTree.remove")
    def remove(self, key: K) -> None:
        """
        Public method (average-case O(log n)): Remove the node with the given
        key.

        References to nodes other than the removed one remain valid and keep
        their keys and values.

        Raises:
            KeyNotFoundError: If key is not present. The tree is left
                unchanged.
        """
        node = None if self.root is None else self.root.get(key)
        if node is None:
            raise KeyNotFoundError(key)

        replacement = node.remove()
        if self.root is node:
            self.root = replacement
            logger.debug(f"Root replaced by {replacement!r}")

        self._count -= 1
        logger.debug(f"Removed key {key!r}, size is now {self._count}")

    def size(self) -> int:
        """Returns the number of nodes, i.e. the number of key, value pairs."""
        return self._count

    def keys(self) -> Iterator[K]:
        for node in self:
            yield node.key

    def values(self) -> Iterator[V]:
        for node in self:
            yield node.value

    def items(self) -> Iterator[Tuple[K, V]]:
        for node in self:
            yield node.key, node.value

    def height(self) -> int:
        """
        The number of nodes on the longest root-to-leaf path; 0 when empty.
        Computed iteratively.
        """
        if self.root is None:
            return 0
        best = 0
        stack: List[Tuple[BSTNode, int]] = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            if depth > best:
                best = depth
            if node.left_child is not None:
                stack.append((node.left_child, depth + 1))
            if node.right_child is not None:
                stack.append((node.right_child, depth + 1))
        return best

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """
        Render the tree sideways, one node per line, children indented below
        their parent (left before right).
        """
        prefix = ' ' * indent
        if self.is_empty():
            return f"{prefix}Empty {self.__class__.__name__}"

        result = []
        stack: List[Tuple[Optional[BSTNode], int, str]] = [(self.root, 0, "Root")]
        while stack:
            node, depth, label = stack.pop()
            pad = prefix + ' ' * (4 * depth)
            if node is None:
                result.append(f"{pad}{label}: Empty")
                continue
            if max_depth is not None and depth > max_depth:
                result.append(f"{pad}... (max depth reached)")
                continue
            result.append(f"{pad}{label}: {node.__class__.__name__}(key={node.key!r}, value={node.value!r})")
            if node.is_leaf():
                continue
            stack.append((node.right_child, depth + 1, "Right"))
            stack.append((node.left_child, depth + 1, "Left"))
        return "\n".join(result)

    # Performance tracking
    @classmethod
    def enable_performance_tracking(cls) -> None:
        PerformanceTracker.get_instance().enable()

    @classmethod
    def disable_performance_tracking(cls) -> None:
        PerformanceTracker.get_instance().disable()

    @classmethod
    def get_performance_report(cls, sort_by: str = 'total_time') -> str:
        return PerformanceTracker.get_instance().report(sort_by=sort_by)

    @classmethod
    def reset_performance_metrics(cls) -> None:
        PerformanceTracker.get_instance().reset()


@dataclass
class Stats:
    node_count: int
    leaf_count: int
    height: int
    least_key: Optional[Any]
    greatest_key: Optional[Any]
    is_search_tree: bool
    links_consistent: bool
    root_detached: bool
    size_consistent: bool


def bstree_stats_(t: BinarySearchTree) -> Stats:
    """
    Returns aggregated statistics and invariant flags for a binary search
    tree in **O(n)** time.

    Flags:
        is_search_tree: in-order keys are strictly ascending.
        links_consistent: every child's parent pointer names its parent.
        root_detached: the root has no parent.
        size_consistent: t.size() equals the number of reachable nodes.
    """
    if t is None or t.is_empty():
        return Stats(node_count      = 0,
                     leaf_count      = 0,
                     height          = 0,
                     least_key       = None,
                     greatest_key    = None,
                     is_search_tree  = True,
                     links_consistent = True,
                     root_detached   = True,
                     size_consistent = t is None or t.size() == 0)

    root = t.root
    stats = Stats(
        node_count=0,
        leaf_count=0,
        height=0,
        least_key=None,
        greatest_key=None,
        is_search_tree=True,
        links_consistent=True,
        root_detached=root.parent is None,
        size_consistent=True,
    )

    # ---------- structural walk ---------------------------------
    stack: List[Tuple[BSTNode, int]] = [(root, 1)]
    while stack:
        node, depth = stack.pop()
        stats.node_count += 1
        stats.height = max(stats.height, depth)
        if node.is_leaf():
            stats.leaf_count += 1
        for child in (node.left_child, node.right_child):
            if child is None:
                continue
            if child.parent is not node:
                stats.links_consistent = False
            stack.append((child, depth + 1))

    # ---------- ordering walk -----------------------------------
    prev_key = None
    first = True
    for node in root.in_order():
        if first:
            stats.least_key = node.key
            first = False
        elif not prev_key < node.key:
            stats.is_search_tree = False
        prev_key = node.key
    stats.greatest_key = prev_key

    stats.size_consistent = (t.size() == stats.node_count)
    return stats


def collect_keys(tree: BinarySearchTree) -> List[Any]:
    out = []
    tree.traverse(lambda node: out.append(node.key))
    return out
