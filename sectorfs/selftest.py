"""Self tests for the library containers: bitmaps, lists and hash tables."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sectorfs.bitmap import BITS_IN_WORD, Bitmap
from sectorfs.hashtable import HashTable
from sectorfs.lists import LinkedList, SortedList

LIST_TEST_VECTOR = (9, 5, 7)

# Enough entries to force the hash table to grow.
HASH_TEST_VECTOR = tuple(str(n) for n in range(15))


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def _int_compare(x: int, y: int) -> int:
    if x < y:
        return -1
    if x == y:
        return 0
    return 1


def _hash_int(key: int) -> int:
    return key & 0xFFFFFFFF


def _hash_key(text: str) -> int:
    return int(text)


def _bitmap_self_test(bitmap: Bitmap) -> None:
    num_bits = len(bitmap)
    _require(num_bits >= BITS_IN_WORD, "bitmap is too small to test")
    _require(bitmap.num_clear() == num_bits, "bitmap is not empty")
    _require(bitmap.find_and_set() == 0, "first free bit is not 0")
    bitmap.mark(31)
    _require(bitmap.test(0) and bitmap.test(31), "marked bits are not set")
    _require(bitmap.find_and_set() == 1, "second free bit is not 1")
    for which in (0, 1, 31):
        bitmap.clear(which)
    for which in range(num_bits):
        bitmap.mark(which)
    _require(bitmap.find_and_set() is None, "full bitmap reported a free bit")
    for which in range(num_bits):
        bitmap.clear(which)


def _list_self_test(items_list: LinkedList, items: Sequence[Any]) -> None:
    items_list.sanity_check()
    _require(len(items_list) == 0, "list is not empty")
    _require(not list(items_list), "empty list yielded items")
    for item in items:
        items_list.append(item)
        _require(item in items_list, f"{item!r} missing after append")
        _require(len(items_list) > 0, "list empty after append")
    items_list.sanity_check()
    for item in items:
        items_list.remove(item)
        _require(item not in items_list, f"{item!r} present after remove")
    _require(len(items_list) == 0, "list not empty after removing everything")
    items_list.sanity_check()


def _sorted_list_self_test(sorted_list: SortedList, items: Sequence[Any]) -> None:
    _list_self_test(sorted_list, items)
    for item in items:
        sorted_list.insert(item)
        _require(item in sorted_list, f"{item!r} missing after insert")
    sorted_list.sanity_check()
    removed = []
    for _ in items:
        item = sorted_list.remove_front()
        _require(item not in sorted_list, f"{item!r} present after removal")
        removed.append(item)
    _require(len(sorted_list) == 0, "sorted list not empty after removals")
    for prev, cur in zip(removed, removed[1:]):
        _require(_int_compare(prev, cur) <= 0, "items came out of order")
    sorted_list.sanity_check()


def _hash_table_self_test(table: HashTable, items: Sequence[Any], get_key) -> None:
    table.sanity_check()
    _require(len(table) == 0, "hash table is not empty")
    _require(not list(table), "empty hash table yielded items")
    for item in items:
        table.insert(item)
        _require(get_key(item) in table, f"{item!r} missing after insert")
        _require(len(table) > 0, "hash table empty after insert")
    for item in items:
        _require(table.remove(get_key(item)) == item, f"{item!r} not returned")
    _require(len(table) == 0, "hash table not empty after removals")
    table.sanity_check()


def lib_self_test() -> list[str]:
    """Run the container self tests; return the names of what was tested.

    Raises AssertionError when a check fails.
    """
    _bitmap_self_test(Bitmap(200))
    _list_self_test(LinkedList(), LIST_TEST_VECTOR)
    _sorted_list_self_test(SortedList(_int_compare), LIST_TEST_VECTOR)
    _hash_table_self_test(HashTable(_hash_key, _hash_int), HASH_TEST_VECTOR, _hash_key)
    return ["bitmap", "list", "sorted list", "hash table"]