import pytest

from sectorfs.bitmap import Bitmap
from sectorfs.pbitmap import PersistentBitmap


class _MemFile:
    """A fixed-length in-memory file with positional reads and writes."""

    def __init__(self, length):
        self.data = bytearray(length)

    def read_at(self, num_bytes, position):
        if num_bytes <= 0 or position >= len(self.data):
            return b""
        return bytes(self.data[position : position + num_bytes])

    def write_at(self, data, position):
        if not data or position >= len(self.data):
            return 0
        chunk = data[: len(self.data) - position]
        self.data[position : position + len(chunk)] = chunk
        return len(chunk)


def test_new_bitmap_is_clear():
    bitmap = PersistentBitmap(40)
    assert bitmap.num_clear() == 40
    assert bitmap.set_bits() == []


def test_is_a_bitmap():
    bitmap = PersistentBitmap(10)
    bitmap.mark(3)
    assert isinstance(bitmap, Bitmap)
    assert bitmap.test(3)


def test_write_back_then_load_from_file():
    file = _MemFile(64)
    original = PersistentBitmap(100)
    for which in (0, 1, 33, 99):
        original.mark(which)
    original.write_back(file)

    loaded = PersistentBitmap(100, file)
    assert loaded.set_bits() == [0, 1, 33, 99]
    assert loaded.to_bytes() == original.to_bytes()


def test_write_back_stores_raw_words_at_start():
    file = _MemFile(16)
    bitmap = PersistentBitmap(32)
    bitmap.mark(0)
    bitmap.write_back(file)
    assert bytes(file.data[:4]) == bitmap.to_bytes()


def test_fetch_from_overwrites_contents():
    file = _MemFile(8)
    source = PersistentBitmap(20)
    source.mark(5)
    source.write_back(file)

    target = PersistentBitmap(20)
    target.mark(7)
    target.fetch_from(file)
    assert target.set_bits() == [5]


def test_round_trip_preserves_find_and_set():
    file = _MemFile(8)
    first = PersistentBitmap(16)
    first.find_and_set()
    first.find_and_set()
    first.write_back(file)

    second = PersistentBitmap(16, file)
    assert second.find_and_set() == 2


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        PersistentBitmap(0)