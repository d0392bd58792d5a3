"""A self-expanding hash table with chained buckets.

Items carry their own key, extracted by a ``get_key`` function, and keys
are spread over buckets by a caller-supplied ``hash_func``.  Each bucket
is a :class:`~sectorfs.lists.LinkedList`; the table grows by a fixed
factor once the average bucket holds too many items.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from sectorfs.lists import LinkedList

INITIAL_BUCKETS = 4
RESIZE_RATIO = 3
INCREASE_SIZE_BY = 4


class HashTable:
    """Maps keys to items, where each item knows its own key."""

    def __init__(
        self,
        get_key: Callable[[Any], Any],
        hash_func: Callable[[Any], int],
    ) -> None:
        self._get_key = get_key
        self._hash = hash_func
        self._count = 0
        self._buckets = self._make_buckets(INITIAL_BUCKETS)

    @staticmethod
    def _make_buckets(size: int) -> list[LinkedList]:
        return [LinkedList() for _ in range(size)]

    def _hash_value(self, key: Any) -> int:
        bucket = self._hash(key) % len(self._buckets)
        if not 0 <= bucket < len(self._buckets):
            raise RuntimeError(f"hash of {key!r} gave bucket {bucket}")
        return bucket

    def _find_in_bucket(self, bucket: int, key: Any) -> tuple[bool, Any]:
        for item in self._buckets[bucket]:
            if key == self._get_key(item):
                return True, item
        return False, None

    def _rehash(self) -> None:
        self.sanity_check()
        old_buckets = self._buckets
        self._buckets = self._make_buckets(len(old_buckets) * INCREASE_SIZE_BY)
        for bucket in old_buckets:
            while bucket:
                item = bucket.remove_front()
                self._buckets[self._hash_value(self._get_key(item))].append(item)
        self.sanity_check()

    def insert(self, item: Any) -> None:
        """Put ``item`` into the table; its key must not be present yet."""
        key = self._get_key(item)
        if key in self:
            raise ValueError(f"key {key!r} is already in the table")
        if self._count // len(self._buckets) >= RESIZE_RATIO:
            self._rehash()
        self._buckets[self._hash_value(key)].append(item)
        self._count += 1

    def remove(self, key: Any) -> Any:
        """Remove the item stored under ``key`` and return it."""
        bucket = self._hash_value(key)
        found, item = self._find_in_bucket(bucket, key)
        if not found:
            raise KeyError(key)
        self._buckets[bucket].remove(item)
        self._count -= 1
        return item

    def find(self, key: Any) -> Any:
        """Return the item stored under ``key``, or None if there is none."""
        _, item = self._find_in_bucket(self._hash_value(key), key)
        return item

    def __contains__(self, key: Any) -> bool:
        found, _ = self._find_in_bucket(self._hash_value(key), key)
        return found

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        for bucket in self._buckets:
            yield from bucket

    def apply(self, func: Callable[[Any], object]) -> None:
        """Call ``func`` on every item, bucket by bucket."""
        for bucket in self._buckets:
            bucket.apply(func)

    def sanity_check(self) -> None:
        """Raise RuntimeError if the table is no longer consistent."""
        found = 0
        for index, bucket in enumerate(self._buckets):
            bucket.sanity_check()
            found += len(bucket)
            for item in bucket:
                if self._hash_value(self._get_key(item)) != index:
                    raise RuntimeError(
                        f"{item!r} is stored in bucket {index} but hashes elsewhere"
                    )
        if found != self._count:
            raise RuntimeError(
                f"table counts {self._count} items but holds {found}"
            )