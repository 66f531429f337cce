"""Ordered node store — a named doubly-linked list.

Manifesto:
    The composite executor needs positional inserts at both ends and
    identity-based removal without re-copying a list on every change.
    ``LinkedList`` is that store: O(1) append/prepend, O(n) remove, and
    indexed access that walks from whichever end is nearer.

ARCHITECTURE
────────────
::

    first                                         last
      │                                             │
      ▼                                             ▼
    Node ──next──▶ Node ──next──▶ ... ──next──▶ Node
    (prev=None)  ◀──prev──      ◀──prev──      (next=None)

Invariants:
    - ``first.prev is None`` and ``last.next is None``
    - forward traversal from ``first`` visits exactly ``size`` elements,
      in the reverse order of traversal from ``last``
    - an empty store has ``first is last is None``

Tags:
    composekit, link, linked-list, data-structure

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Generic, TypeVar

E = TypeVar("E")


class Node(Generic[E]):
    """One element plus links to its neighbours."""

    __slots__ = ("item", "prev", "next")

    def __init__(self, prev: Node[E] | None, item: E, next: Node[E] | None):
        self.item = item
        self.prev = prev
        self.next = next

    def __repr__(self) -> str:
        return f"Node({self.item!r})"


class LinkedList(Generic[E]):
    """
    Named doubly-linked sequence with positional and equality-based access.

    Examples:
        >>> store = LinkedList("demo")
        >>> store.add("b")
        True
        >>> store.add_first("a")
        True
        >>> store.get(0), store.get(1), len(store)
        ('a', 'b', 2)
        >>> store.remove("a")
        True
    """

    def __init__(self, name: str):
        self._name = name
        self.size = 0
        self.first: Node[E] | None = None
        self.last: Node[E] | None = None

    @property
    def name(self) -> str:
        return self._name

    # =========================================================================
    # Linking
    # =========================================================================

    def _link_first(self, e: E) -> None:
        f = self.first
        new_node = Node(None, e, f)
        self.first = new_node
        if f is None:
            self.last = new_node
        else:
            f.prev = new_node
        self.size += 1

    def _link_last(self, e: E) -> None:
        last = self.last
        new_node = Node(last, e, None)
        self.last = new_node
        if last is None:
            self.first = new_node
        else:
            last.next = new_node
        self.size += 1

    def _unlink(self, x: Node[E]) -> E:
        element = x.item
        nxt = x.next
        prev = x.prev

        if prev is None:
            self.first = nxt
        else:
            prev.next = nxt
            x.prev = None

        if nxt is None:
            self.last = prev
        else:
            nxt.prev = prev
            x.next = None

        x.item = None  # type: ignore[assignment]
        self.size -= 1
        return element

    def _node(self, index: int) -> Node[E]:
        if not 0 <= index < self.size:
            raise IndexError(f"Index {index} out of range for size {self.size}")
        if index < (self.size >> 1):
            x = self.first
            for _ in range(index):
                x = x.next
        else:
            x = self.last
            for _ in range(self.size - 1, index, -1):
                x = x.prev
        return x

    # =========================================================================
    # Public API
    # =========================================================================

    def add(self, e: E) -> bool:
        """Append ``e``. Same as ``add_last``."""
        self._link_last(e)
        return True

    def add_first(self, e: E) -> bool:
        """Prepend ``e``."""
        self._link_first(e)
        return True

    def add_last(self, e: E) -> bool:
        """Append ``e``."""
        self._link_last(e)
        return True

    def remove(self, o: Any) -> bool:
        """Remove the first element equal to ``o``; return whether one was found."""
        x = self.first
        while x is not None:
            if (o is None and x.item is None) or (o is not None and o == x.item):
                self._unlink(x)
                return True
            x = x.next
        return False

    def get(self, index: int) -> E:
        """Return the element at ``index``.

        Raises:
            IndexError: If ``index`` is outside ``[0, size)``
        """
        return self._node(index).item

    # =========================================================================
    # Python protocol
    # =========================================================================

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> E:
        return self.get(index)

    def __iter__(self) -> Iterator[E]:
        x = self.first
        while x is not None:
            yield x.item
            x = x.next

    def __reversed__(self) -> Iterator[E]:
        x = self.last
        while x is not None:
            yield x.item
            x = x.prev

    def __contains__(self, o: object) -> bool:
        return any(o == item for item in self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, size={self.size})"
