import pytest

from sectorfs.bitmap import Bitmap
from sectorfs.hashtable import HashTable
from sectorfs.lists import LinkedList, SortedList
from sectorfs.selftest import (
    HASH_TEST_VECTOR,
    LIST_TEST_VECTOR,
    _bitmap_self_test,
    _hash_key,
    _hash_int,
    _hash_table_self_test,
    _int_compare,
    _list_self_test,
    _sorted_list_self_test,
    lib_self_test,
)


def test_lib_self_test_reports_every_component():
    assert lib_self_test() == ["bitmap", "list", "sorted list", "hash table"]


def test_bitmap_self_test_leaves_bitmap_empty():
    bitmap = Bitmap(64)
    _bitmap_self_test(bitmap)
    assert bitmap.num_clear() == 64
    assert bitmap.set_bits() == []


def test_bitmap_self_test_rejects_small_bitmap():
    bitmap = Bitmap(8)
    with pytest.raises(AssertionError):
        _bitmap_self_test(bitmap)
    assert bitmap.num_clear() == 8
    assert bitmap.set_bits() == []


def test_bitmap_self_test_rejects_used_bitmap():
    bitmap = Bitmap(64)
    bitmap.mark(3)
    with pytest.raises(AssertionError):
        _bitmap_self_test(bitmap)
    assert bitmap.set_bits() == [3]
    assert bitmap.num_clear() == 63


def test_list_self_test_leaves_list_empty():
    items = LinkedList()
    _list_self_test(items, LIST_TEST_VECTOR)
    assert len(items) == 0
    assert list(items) == []


def test_list_self_test_rejects_nonempty_list():
    items = LinkedList()
    items.append(1)
    with pytest.raises(AssertionError):
        _list_self_test(items, LIST_TEST_VECTOR)
    assert list(items) == [1]
    assert len(items) == 1


def test_sorted_list_self_test_leaves_list_empty():
    items = SortedList(_int_compare)
    _sorted_list_self_test(items, LIST_TEST_VECTOR)
    assert len(items) == 0


def test_int_compare_orders_integers():
    assert _int_compare(1, 2) == -1
    assert _int_compare(2, 2) == 0
    assert _int_compare(3, 2) == 1


def test_hash_table_self_test_leaves_table_empty():
    table = HashTable(_hash_key, _hash_int)
    _hash_table_self_test(table, HASH_TEST_VECTOR, _hash_key)
    assert len(table) == 0


def test_hash_table_self_test_rejects_duplicate_keys():
    table = HashTable(_hash_key, _hash_int)
    with pytest.raises(ValueError):
        _hash_table_self_test(table, ["1", "01"], _hash_key)


def test_hash_key_parses_decimal_text():
    assert [_hash_key(text) for text in HASH_TEST_VECTOR] == list(range(15))