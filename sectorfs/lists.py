"""Singly linked lists of arbitrary items, plain and sorted.

Items are compared with ``==``.  An item may appear in a list at most once.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any


class _Node:
    __slots__ = ("item", "next")

    def __init__(self, item: Any) -> None:
        self.item = item
        self.next: _Node | None = None


class LinkedList:
    """A singly linked list that keeps track of its first and last element."""

    def __init__(self) -> None:
        self._first: _Node | None = None
        self._last: _Node | None = None
        self._count = 0

    def _require_absent(self, item: Any) -> None:
        if item in self:
            raise ValueError(f"{item!r} is already in the list")

    def prepend(self, item: Any) -> None:
        """Put ``item`` at the front of the list."""
        self._require_absent(item)
        node = _Node(item)
        if self._first is None:
            self._first = self._last = node
        else:
            node.next = self._first
            self._first = node
        self._count += 1

    def append(self, item: Any) -> None:
        """Put ``item`` at the end of the list."""
        self._require_absent(item)
        node = _Node(item)
        if self._last is None:
            self._first = self._last = node
        else:
            self._last.next = node
            self._last = node
        self._count += 1

    def front(self) -> Any:
        """Return the first item without removing it."""
        if self._first is None:
            raise IndexError("front of an empty list")
        return self._first.item

    def remove_front(self) -> Any:
        """Remove the first item and return it."""
        if self._first is None:
            raise IndexError("remove_front from an empty list")
        node = self._first
        if node is self._last:
            self._first = self._last = None
        else:
            self._first = node.next
        self._count -= 1
        return node.item

    def remove(self, item: Any) -> None:
        """Remove ``item``, which must be in the list."""
        if self._first is None:
            raise ValueError(f"{item!r} is not in the list")
        if self._first.item == item:
            self.remove_front()
            return
        prev = self._first
        node = prev.next
        while node is not None:
            if node.item == item:
                prev.next = node.next
                if prev.next is None:
                    self._last = prev
                self._count -= 1
                return
            prev, node = node, node.next
        raise ValueError(f"{item!r} is not in the list")

    def __contains__(self, item: Any) -> bool:
        return any(existing == item for existing in self)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        node = self._first
        while node is not None:
            yield node.item
            node = node.next

    def apply(self, func: Callable[[Any], object]) -> None:
        """Call ``func`` on every item, front to back."""
        for item in self:
            func(item)

    def sanity_check(self) -> None:
        """Raise RuntimeError if the list structure has been corrupted."""
        if self._first is None:
            if self._count != 0 or self._last is not None:
                raise RuntimeError("empty list has a stray count or last element")
            return
        if self._first is self._last:
            if self._count != 1 or self._last.next is not None:
                raise RuntimeError("single-element list is inconsistent")
            return
        found = 1
        node = self._first
        while node is not self._last:
            if node is None:
                raise RuntimeError("last element is not reachable from the first")
            found += 1
            if found > self._count:
                raise RuntimeError("list holds more elements than its count")
            node = node.next
        if found != self._count:
            raise RuntimeError("list holds fewer elements than its count")
        if self._last is not None and self._last.next is not None:
            raise RuntimeError("last element has a successor")


class SortedList(LinkedList):
    """A linked list kept in increasing order by a three-way ``compare``.

    ``compare(x, y)`` returns a negative number, zero or a positive number
    as ``x`` is less than, equal to or greater than ``y``.  Items equal to
    ones already present go after them.
    """

    def __init__(self, compare: Callable[[Any, Any], int]) -> None:
        super().__init__()
        self._compare = compare

    def insert(self, item: Any) -> None:
        """Insert ``item`` at its place in sorted order."""
        self._require_absent(item)
        node = _Node(item)
        if self._first is None:
            self._first = self._last = node
        elif self._compare(item, self._first.item) < 0:
            node.next = self._first
            self._first = node
        else:
            ptr = self._first
            while ptr.next is not None:
                if self._compare(item, ptr.next.item) < 0:
                    node.next = ptr.next
                    ptr.next = node
                    self._count += 1
                    return
                ptr = ptr.next
            ptr.next = node
            self._last = node
        self._count += 1

    def prepend(self, item: Any) -> None:
        """Insert ``item`` in sorted order; a sorted list has no front to choose."""
        self.insert(item)

    def append(self, item: Any) -> None:
        """Insert ``item`` in sorted order; a sorted list has no end to choose."""
        self.insert(item)

    def sanity_check(self) -> None:
        """Raise RuntimeError if the list is corrupted or out of order."""
        super().sanity_check()
        items = list(self)
        for prev, cur in zip(items, items[1:]):
            if self._compare(prev, cur) > 0:
                raise RuntimeError(f"{prev!r} comes before {cur!r} out of order")