import pytest

from sectorfs.bitmap import Bitmap
from sectorfs.filehdr import FileHeader
from sectorfs.openfile import OpenFile
from sectorfs.synchdisk import SynchDisk

SECTOR_SIZE = 128
NUM_SECTORS = 32
FILE_SIZE = 300


@pytest.fixture
def opened():
    disk = SynchDisk(NUM_SECTORS, SECTOR_SIZE)
    free = Bitmap(NUM_SECTORS)
    free.mark(0)
    hdr = FileHeader(SECTOR_SIZE)
    hdr.allocate(free, FILE_SIZE)
    hdr.write_back(disk, 0)
    return disk, OpenFile(disk, 0)


def test_length_comes_from_header(opened):
    _, f = opened
    assert len(f) == FILE_SIZE


def test_new_file_reads_zeros(opened):
    _, f = opened
    assert f.read_at(FILE_SIZE, 0) == bytes(FILE_SIZE)


def test_write_then_read_across_sectors(opened):
    _, f = opened
    payload = bytes(range(200))
    assert f.write_at(payload, 50) == len(payload)
    assert f.read_at(len(payload), 50) == payload


def test_partial_write_keeps_neighbours(opened):
    _, f = opened
    f.write_at(b"A" * FILE_SIZE, 0)
    f.write_at(b"xyz", 130)
    assert f.read_at(FILE_SIZE, 0) == b"A" * 130 + b"xyz" + b"A" * (FILE_SIZE - 133)


def test_read_is_cut_at_end_of_file(opened):
    _, f = opened
    f.write_at(b"B" * FILE_SIZE, 0)
    assert f.read_at(100, FILE_SIZE - 10) == b"B" * 10


def test_write_is_cut_at_end_of_file(opened):
    _, f = opened
    assert f.write_at(b"C" * 50, FILE_SIZE - 20) == 20
    assert f.read_at(FILE_SIZE, 0)[-20:] == b"C" * 20


def test_read_past_end_and_empty_requests(opened):
    _, f = opened
    assert f.read_at(10, FILE_SIZE) == b""
    assert f.read_at(0, 0) == b""
    assert f.write_at(b"", 0) == 0
    assert f.write_at(b"x", FILE_SIZE) == 0


def test_sequential_read_and_write_move_position(opened):
    _, f = opened
    assert f.write(b"hello") == 5
    assert f.write(b"world") == 5
    assert f.position == 10
    f.seek(0)
    assert f.read(5) == b"hello"
    assert f.read(5) == b"world"
    assert f.position == 10


def test_read_stops_at_end(opened):
    _, f = opened
    f.seek(FILE_SIZE - 3)
    assert len(f.read(10)) == 3
    assert f.read(10) == b""
    assert f.position == FILE_SIZE


def test_writes_are_visible_to_a_second_opening(opened):
    disk, f = opened
    f.write_at(b"persist", 128)
    assert OpenFile(disk, 0).read_at(7, 128) == b"persist"


def test_negative_position_rejected(opened):
    _, f = opened
    with pytest.raises(ValueError):
        f.read_at(4, -1)
    with pytest.raises(ValueError):
        f.write_at(b"abc", -5)