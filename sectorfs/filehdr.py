"""The on-disk file header: the size of a file and where its data lies.

A header fits in one disk sector.  It holds the file's length in bytes,
the number of data sectors, and a fixed-size table of the sector numbers
of those data sectors; there are no indirect blocks.  On disk it is a
run of little-endian signed 32-bit integers, padded to a whole sector.
"""

from __future__ import annotations

import struct
from typing import Protocol

from sectorfs.bitmap import Bitmap, div_round_up

_INT_SIZE = 4


class _SectorDisk(Protocol):
    def read_sector(self, sector_number: int) -> bytes: ...

    def write_sector(self, sector_number: int, data: bytes) -> None: ...


class NoSpaceError(Exception):
    """Raised when a file cannot be given the disk space it asks for."""


class FileHeader:
    """The header of a file stored on a disk of ``sector_size`` byte sectors."""

    def __init__(self, sector_size: int) -> None:
        num_direct = (sector_size - 2 * _INT_SIZE) // _INT_SIZE
        if num_direct < 1:
            raise ValueError(f"sector size {sector_size} is too small for a header")
        self.sector_size = sector_size
        self.num_direct = num_direct
        self.max_file_size = num_direct * sector_size
        self.num_bytes = 0
        self.num_sectors = 0
        self.data_sectors: list[int] = []

    def allocate(self, free_map: Bitmap, file_size: int) -> None:
        """Take data sectors for a new file of ``file_size`` bytes from ``free_map``.

        Raises NoSpaceError when the file is too large for a header or
        the map has too few clear sectors; the map is then left unchanged.
        """
        if file_size < 0:
            raise ValueError(f"file size must not be negative, got {file_size}")
        num_sectors = div_round_up(file_size, self.sector_size)
        if num_sectors > self.num_direct:
            raise NoSpaceError(
                f"{file_size} bytes exceed the largest file of {self.max_file_size}"
            )
        if free_map.num_clear() < num_sectors:
            raise NoSpaceError(
                f"{num_sectors} sectors needed, {free_map.num_clear()} free"
            )
        sectors = []
        for _ in range(num_sectors):
            sector = free_map.find_and_set()
            if sector is None:
                raise RuntimeError("free map ran out of sectors it reported free")
            sectors.append(sector)
        self.num_bytes = file_size
        self.num_sectors = num_sectors
        self.data_sectors = sectors

    def deallocate(self, free_map: Bitmap) -> None:
        """Return this file's data sectors to ``free_map``."""
        for sector in self.data_sectors:
            if not free_map.test(sector):
                raise RuntimeError(f"data sector {sector} is not marked in use")
            free_map.clear(sector)

    def fetch_from(self, disk: _SectorDisk, sector: int) -> None:
        """Load the header stored in ``sector`` of ``disk``."""
        self.load_bytes(disk.read_sector(sector))

    def write_back(self, disk: _SectorDisk, sector: int) -> None:
        """Store the header in ``sector`` of ``disk``."""
        disk.write_sector(sector, self.to_bytes())

    def byte_to_sector(self, offset: int) -> int:
        """Return the disk sector that holds byte ``offset`` of the file."""
        index = offset // self.sector_size
        if offset < 0 or index >= len(self.data_sectors):
            raise IndexError(f"offset {offset} lies outside the file's sectors")
        return self.data_sectors[index]

    def to_bytes(self) -> bytes:
        """Return the header as one sector's worth of bytes."""
        table = self.data_sectors + [0] * (self.num_direct - len(self.data_sectors))
        packed = struct.pack(
            f"<ii{self.num_direct}i", self.num_bytes, self.num_sectors, *table
        )
        return packed + bytes(self.sector_size - len(packed))

    def load_bytes(self, data: bytes) -> None:
        """Replace the header's contents with those encoded in ``data``."""
        size = (2 + self.num_direct) * _INT_SIZE
        if len(data) < size:
            raise ValueError(f"a header needs {size} bytes, got {len(data)}")
        values = struct.unpack_from(f"<ii{self.num_direct}i", data)
        num_bytes, num_sectors = values[0], values[1]
        if not 0 <= num_sectors <= self.num_direct:
            raise ValueError(f"corrupt header: {num_sectors} data sectors")
        self.num_bytes = num_bytes
        self.num_sectors = num_sectors
        self.data_sectors = list(values[2 : 2 + num_sectors])

    def dump(self, disk: _SectorDisk) -> str:
        """Return a printable description of the header and the file's data."""
        parts = [
            f"FileHeader contents.  File size: {self.num_bytes}.  File blocks:\n",
            "".join(f"{sector} " for sector in self.data_sectors),
            "\nFile contents:\n",
        ]
        remaining = self.num_bytes
        for sector in self.data_sectors:
            data = disk.read_sector(sector)[: max(remaining, 0)]
            remaining -= len(data)
            parts.append(
                "".join(
                    chr(byte) if 0x20 <= byte <= 0x7E else f"\\{byte:x}"
                    for byte in data
                )
            )
            parts.append("\n")
        return "".join(parts)