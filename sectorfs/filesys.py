"""A flat file system on a simulated disk.

Each file has a header stored in one sector, a number of data sectors
and an entry in the single root directory.  A bitmap records which
sectors are in use.  Both the bitmap and the directory are ordinary
files whose headers sit in well-known sectors (0 and 1), so that they
can be found when the disk is opened again.

Operations that change the directory or the bitmap work on in-memory
copies and write them back only once everything has succeeded.  A
failed operation simply discards its copies.
"""

from __future__ import annotations

from typing import Protocol

from sectorfs.bitmap import BITS_IN_BYTE
from sectorfs.directory import ENTRY_SIZE, Directory
from sectorfs.filehdr import FileHeader, NoSpaceError
from sectorfs.openfile import OpenFile
from sectorfs.pbitmap import PersistentBitmap

FREE_MAP_SECTOR = 0
DIRECTORY_SECTOR = 1
NUM_DIR_ENTRIES = 10
DIRECTORY_FILE_SIZE = ENTRY_SIZE * NUM_DIR_ENTRIES


class _SectorDisk(Protocol):
    num_sectors: int
    sector_size: int

    def read_sector(self, sector_number: int) -> bytes: ...

    def write_sector(self, sector_number: int, data: bytes) -> None: ...


class FileSystem:
    """The file system stored on ``disk``.

    With ``format`` true the disk is initialised with an empty directory
    and a bitmap in which only the bitmap's and directory's own sectors
    are in use; otherwise the existing bitmap and directory are opened.
    """

    def __init__(self, disk: _SectorDisk, format: bool = False) -> None:
        self._disk = disk
        self._num_sectors = disk.num_sectors
        if format:
            self._format()
        self._free_map_file = OpenFile(disk, FREE_MAP_SECTOR)
        self._directory_file = OpenFile(disk, DIRECTORY_SECTOR)
        if format:
            self._free_map_to_write.write_back(self._free_map_file)
            Directory(NUM_DIR_ENTRIES).write_back(self._directory_file)
            del self._free_map_to_write

    def _format(self) -> None:
        free_map = PersistentBitmap(self._num_sectors)
        map_hdr = FileHeader(self._disk.sector_size)
        dir_hdr = FileHeader(self._disk.sector_size)

        free_map.mark(FREE_MAP_SECTOR)
        free_map.mark(DIRECTORY_SECTOR)

        map_hdr.allocate(free_map, self._num_sectors // BITS_IN_BYTE)
        dir_hdr.allocate(free_map, DIRECTORY_FILE_SIZE)

        # Headers must be on disk before the files can be opened.
        map_hdr.write_back(self._disk, FREE_MAP_SECTOR)
        dir_hdr.write_back(self._disk, DIRECTORY_SECTOR)
        self._free_map_to_write = free_map

    def _load_directory(self) -> Directory:
        directory = Directory(NUM_DIR_ENTRIES)
        directory.fetch_from(self._directory_file)
        return directory

    def _load_free_map(self) -> PersistentBitmap:
        return PersistentBitmap(self._num_sectors, self._free_map_file)

    def create(self, name: str, initial_size: int) -> None:
        """Create file ``name`` with a fixed size of ``initial_size`` bytes.

        Raises FileExistsError if the name is taken, and NoSpaceError if
        there is no sector for the header, no free directory entry, or
        not enough sectors for the data.  Nothing changes on failure.
        """
        directory = self._load_directory()
        if directory.find(name) is not None:
            raise FileExistsError(name)
        free_map = self._load_free_map()
        sector = free_map.find_and_set()
        if sector is None:
            raise NoSpaceError(f"no free sector for the header of {name!r}")
        directory.add(name, sector)
        hdr = FileHeader(self._disk.sector_size)
        hdr.allocate(free_map, initial_size)

        hdr.write_back(self._disk, sector)
        directory.write_back(self._directory_file)
        free_map.write_back(self._free_map_file)

    def open(self, name: str) -> OpenFile:
        """Open file ``name`` for reading and writing.

        Raises FileNotFoundError if there is no such file.
        """
        sector = self._load_directory().find(name)
        if sector is None:
            raise FileNotFoundError(name)
        return OpenFile(self._disk, sector)

    def remove(self, name: str) -> None:
        """Delete file ``name`` and free its sectors.

        Raises FileNotFoundError if there is no such file.
        """
        directory = self._load_directory()
        sector = directory.find(name)
        if sector is None:
            raise FileNotFoundError(name)
        hdr = FileHeader(self._disk.sector_size)
        hdr.fetch_from(self._disk, sector)

        free_map = self._load_free_map()
        hdr.deallocate(free_map)
        free_map.clear(sector)
        directory.remove(name)

        free_map.write_back(self._free_map_file)
        directory.write_back(self._directory_file)

    def list(self) -> list[str]:
        """Return the names of all files in the directory."""
        return self._load_directory().names()

    def dump(self) -> str:
        """Return a description of the bitmap, the directory and every file."""
        bit_hdr = FileHeader(self._disk.sector_size)
        dir_hdr = FileHeader(self._disk.sector_size)
        bit_hdr.fetch_from(self._disk, FREE_MAP_SECTOR)
        dir_hdr.fetch_from(self._disk, DIRECTORY_SECTOR)
        free_map = self._load_free_map()
        directory = self._load_directory()
        return "".join(
            [
                "Bit map file header:\n",
                bit_hdr.dump(self._disk),
                "Directory file header:\n",
                dir_hdr.dump(self._disk),
                free_map.dump(),
                directory.dump(self._disk),
            ]
        )