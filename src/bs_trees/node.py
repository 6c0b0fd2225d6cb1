# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""Binary search tree node implementation"""

from __future__ import annotations
from typing import Any, Callable, Generic, Iterator, List, Optional

from bs_trees.base import K, V, DuplicateKeyError


class BSTNode(Generic[K, V]):
    """
    A node in a binary search tree holding one key, value pair.

    Every operation treats the node as the root of its own subtree. Nodes
    are sorted according to the key's natural order. A node whose parent is
    None is the root of its tree.

    Attributes:
        key (K): The node's key. Fixed for the node's lifetime.
        value (V): The node's value. Never touched by tree operations.
        parent (Optional[BSTNode]): Back reference to the parent node.
        left_child (Optional[BSTNode]): Subtree of smaller keys.
        right_child (Optional[BSTNode]): Subtree of greater keys.
    """
    __slots__ = ("key", "value", "parent", "left_child", "right_child")

    def __init__(
        self,
        key: K,
        value: V,
        parent: Optional[BSTNode] = None
    ) -> None:
        self.key = key
        self.value = value
        self.parent = parent
        self.left_child: Optional[BSTNode] = None
        self.right_child: Optional[BSTNode] = None

    def is_root(self) -> bool:
        return self.parent is None

    def is_leaf(self) -> bool:
        return self.left_child is None and self.right_child is None

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(key={self.key!r}, value={self.value!r})"

    # Traversal
    def in_order(self) -> Iterator[BSTNode]:
        """
        Yields the nodes of the subtree rooted at this node in ascending key
        order.

        Walks the subtree iteratively with an explicit stack of ancestors
        awaiting their visit, so memory use is bounded by the subtree's
        height instead of the interpreter's recursion limit. The subtree must
        not be modified while the generator is active.
        """
        ancestors: List[BSTNode] = []
        cur: Optional[BSTNode] = self
        while True:
            if cur is not None:
                ancestors.append(cur)
                cur = cur.left_child
            elif ancestors:
                cur = ancestors.pop()
                yield cur
                cur = cur.right_child
            else:
                return

    def traverse(self, visit: Callable[[BSTNode], Any]) -> None:
        """
        Traverses the subtree rooted at this node in sort order, calling
        `visit` once for each node with the node as its only argument.

        Runs in O(N) time. `visit` may read the nodes but must not change the
        tree's structure.
        """
        for node in self.in_order():
            visit(node)

    # Navigation
    def min(self) -> BSTNode:
        """Returns the node with the minimum key in this subtree."""
        cur = self
        while cur.left_child is not None:
            cur = cur.left_child
        return cur

    def max(self) -> BSTNode:
        """Returns the node with the maximum key in this subtree."""
        cur = self
        while cur.right_child is not None:
            cur = cur.right_child
        return cur

    def predecessor(self) -> Optional[BSTNode]:
        """
        Returns the node that immediately precedes this node in sort order,
        or None if this node holds the least key of its tree.

        Each call costs O(log N) on average. Iterating a whole subtree with
        repeated calls costs O(N log N); use `traverse` or `in_order` for
        that, which run in O(N).
        """
        if self.left_child is not None:
            return self.left_child.max()

        prev, cur = self, self.parent
        while cur is not None:
            if cur.right_child is prev:
                return cur
            prev, cur = cur, cur.parent
        return None

    def successor(self) -> Optional[BSTNode]:
        """
        Returns the node that immediately succeeds this node in sort order,
        or None if this node holds the greatest key of its tree.

        Each call costs O(log N) on average. Iterating a whole subtree with
        repeated calls costs O(N log N); use `traverse` or `in_order` for
        that, which run in O(N).
        """
        if self.right_child is not None:
            return self.right_child.min()

        prev, cur = self, self.parent
        while cur is not None:
            if cur.left_child is prev:
                return cur
            prev, cur = cur, cur.parent
        return None

    # Lookup and insertion
    def get(self, key: K) -> Optional[BSTNode]:
        """
        Returns the node with the given key in this subtree, or None if there
        is no such node.
        """
        cur: Optional[BSTNode] = self
        while cur is not None:
            if key < cur.key:
                cur = cur.left_child
            elif key > cur.key:
                cur = cur.right_child
            else:
                return cur
        return None

    def insert(self, key: K, value: V) -> BSTNode:
        """
        Inserts the key, value pair into this subtree as a new leaf node.

        Args:
            key (K): The key to insert.
            value (V): The value stored alongside the key.

        Returns:
            BSTNode: The created node.

        Raises:
            DuplicateKeyError: If the key is already in this subtree. The
                subtree is left unchanged.
        """
        NodeClass = type(self)
        cur = self
        while True:
            if key < cur.key:
                if cur.left_child is None:
                    cur.left_child = NodeClass(key, value, cur)
                    return cur.left_child
                cur = cur.left_child
            elif key > cur.key:
                if cur.right_child is None:
                    cur.right_child = NodeClass(key, value, cur)
                    return cur.right_child
                cur = cur.right_child
            else:
                raise DuplicateKeyError(key)

    # Splicing
    def replace_with(self, node: Optional[BSTNode]) -> None:
        """
        Places `node` at the position currently held by this node.

        The parent's pointer to this node is redirected to `node` and
        `node.parent` is updated. This node's own fields and `node`'s
        children are left as they are.
        """
        parent = self.parent
        if node is not None:
            node.parent = parent

        if parent is None:
            return

        if parent.left_child is self:
            parent.left_child = node
        else:
            parent.right_child = node

    def adopt_left_child(self, node: BSTNode) -> None:
        """
        Makes the left child of `node` the left child of this node.
        Assumes `node` has a left child.
        """
        child = node.left_child
        child.parent = self
        self.left_child = child

    def adopt_right_child(self, node: BSTNode) -> None:
        """
        Makes the right child of `node` the right child of this node.
        Assumes `node` has a right child.
        """
        child = node.right_child
        child.parent = self
        self.right_child = child

    def remove(self) -> Optional[BSTNode]:
        """
        Removes this node from its tree.

        Other nodes are moved as whole objects, never rewritten, so every
        reference to a node other than this one stays valid and keeps its key
        and value. When both children are present the replacement alternates:
        the predecessor is used if this node is the root or a left child, the
        successor if it is a right child.

        Afterwards this node is detached: its key and value are kept, its
        links are cleared.

        Returns:
            Optional[BSTNode]: The node now occupying this node's former
                position, or None if the position is empty.
        """
        left, right = self.left_child, self.right_child

        if right is None:
            replacement = left
        elif left is None:
            replacement = right
        elif self.parent is None or self.parent.left_child is self:
            replacement = left.max()
            # The predecessor has no right child, only possibly a left one.
            if replacement is not left:
                replacement.replace_with(replacement.left_child)
                replacement.adopt_left_child(self)
            replacement.adopt_right_child(self)
        else:
            replacement = right.min()
            # The successor has no left child, only possibly a right one.
            if replacement is not right:
                replacement.replace_with(replacement.right_child)
                replacement.adopt_right_child(self)
            replacement.adopt_left_child(self)

        self.replace_with(replacement)

        self.parent = None
        self.left_child = None
        self.right_child = None
        return replacement
