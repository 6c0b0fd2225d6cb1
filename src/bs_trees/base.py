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

"""Shared types and errors for binary search trees"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar


class Comparable(Protocol):
    """Any key type with a total order usable through ``<`` and ``>``."""

    def __lt__(self, other: Any) -> bool: ...

    def __gt__(self, other: Any) -> bool: ...


K = TypeVar("K", bound=Comparable)
V = TypeVar("V")
N = TypeVar("N")


class BSTreeError(Exception):
    """Base class for errors raised by binary search trees."""
    pass


class DuplicateKeyError(BSTreeError):
    """
    Raised when inserting a key that is already present in the tree.

    The tree is left unmodified. Callers wanting upsert semantics must
    remove the existing key first.
    """

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Tried to insert key {key!r} twice.")


class KeyNotFoundError(BSTreeError, KeyError):
    """Raised when removing a key that is not present in the tree."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Attempted to remove key {key!r} which is not in this tree.")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0])


class AbstractOrderedMap(ABC, Generic[K, V, N]):
    """
    Abstract base class for an ordered map of unique keys to values.

    Lookups hand out node objects (type N) rather than bare values so that
    callers can navigate from a found entry to its neighbours.
    """

    @abstractmethod
    def insert(self, key: K, value: V) -> N:
        """
        Insert a key, value pair.

        Parameters:
            key (K): The key to insert. Must not already be present.
            value (V): The value associated with the key.

        Returns:
            N: The node created for the pair.

        Raises:
            DuplicateKeyError: If the key is already present.
        """
        pass

    @abstractmethod
    def remove(self, key: K) -> None:
        """
        Remove the entry with the given key.

        Parameters:
            key (K): The key to remove.

        Raises:
            KeyNotFoundError: If the key is not present.
        """
        pass

    @abstractmethod
    def get(self, key: K) -> Optional[N]:
        """
        Return the node holding the given key, or None if it is absent.
        """
        pass

    @abstractmethod
    def min(self) -> Optional[N]:
        """Return the node with the least key, or None if the map is empty."""
        pass

    @abstractmethod
    def max(self) -> Optional[N]:
        """Return the node with the greatest key, or None if the map is empty."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Return the number of entries."""
        pass

    @abstractmethod
    def traverse(self, visit: Callable[[N], Any]) -> None:
        """Call `visit` once per node in ascending key order."""
        pass
