import pytest

from sectorfs.hashtable import HashTable


def _int_table():
    return HashTable(int, lambda key: key)


def test_insert_and_find():
    table = _int_table()
    table.insert("7")
    table.insert("3")
    assert table.find(7) == "7"
    assert table.find(3) == "3"
    assert table.find(5) is None
    assert len(table) == 2


def test_contains_uses_keys():
    table = _int_table()
    table.insert("12")
    assert 12 in table
    assert 13 not in table


def test_duplicate_key_rejected():
    table = _int_table()
    table.insert("4")
    with pytest.raises(ValueError):
        table.insert("04")
    assert len(table) == 1


def test_remove_returns_item():
    table = _int_table()
    table.insert("9")
    assert table.remove(9) == "9"
    assert 9 not in table
    assert len(table) == 0


def test_remove_missing_raises_key_error():
    table = _int_table()
    table.insert("1")
    with pytest.raises(KeyError):
        table.remove(2)


def test_order_before_growth_follows_buckets():
    table = _int_table()
    for n in range(12):
        table.insert(str(n))
    assert [int(item) for item in table] == [0, 4, 8, 1, 5, 9, 2, 6, 10, 3, 7, 11]


def test_growth_redistributes_items():
    table = _int_table()
    for n in range(15):
        table.insert(str(n))
    table.sanity_check()
    assert [int(item) for item in table] == list(range(15))


def test_many_items_round_trip():
    table = _int_table()
    items = [str(n) for n in range(200)]
    for item in items:
        table.insert(item)
    table.sanity_check()
    assert sorted(table, key=int) == items
    for item in items:
        assert table.remove(int(item)) == item
    assert len(table) == 0
    table.sanity_check()


def test_colliding_hash_keeps_all_items():
    table = HashTable(lambda pair: pair[0], lambda key: 0)
    pairs = [("a", 1), ("b", 2), ("c", 3), ("d", 4), ("e", 5)]
    for pair in pairs:
        table.insert(pair)
    table.sanity_check()
    assert all(table.find(key) == (key, value) for key, value in pairs)
    assert table.remove("c") == ("c", 3)
    assert table.find("c") is None


def test_negative_hash_values_are_accepted():
    table = HashTable(lambda item: item, lambda key: -key)
    for n in range(20):
        table.insert(n)
    table.sanity_check()
    assert sorted(table) == list(range(20))


def test_apply_visits_every_item():
    table = _int_table()
    for n in range(10):
        table.insert(str(n))
    seen = []
    table.apply(seen.append)
    assert sorted(seen, key=int) == [str(n) for n in range(10)]
    assert seen == list(table)


def test_sanity_check_detects_changed_hash():
    offset = {"value": 0}
    table = HashTable(lambda item: item, lambda key: key + offset["value"])
    for n in range(5):
        table.insert(n)
    table.sanity_check()
    offset["value"] = 1
    with pytest.raises(RuntimeError):
        table.sanity_check()