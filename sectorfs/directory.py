"""A flat directory: a fixed-size table of file names and header sectors.

Every entry has a fixed size, so names are limited to
:data:`FILE_NAME_MAX_LEN` bytes, and the table cannot grow: once every
entry is in use no further file can be added.  On disk each entry takes
:data:`ENTRY_SIZE` bytes: an in-use flag, three padding bytes, the
header sector as a little-endian 32-bit integer, the name in ten
NUL-padded bytes, and two padding bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Protocol

from sectorfs.filehdr import FileHeader, NoSpaceError

FILE_NAME_MAX_LEN = 9

_ENTRY = struct.Struct(f"<?3xi{FILE_NAME_MAX_LEN + 1}s2x")
ENTRY_SIZE = _ENTRY.size


class _RandomAccessFile(Protocol):
    def read_at(self, num_bytes: int, position: int) -> bytes: ...

    def write_at(self, data: bytes, position: int) -> int: ...


class _SectorDisk(Protocol):
    sector_size: int

    def read_sector(self, sector_number: int) -> bytes: ...

    def write_sector(self, sector_number: int, data: bytes) -> None: ...


def _stored_name(name: str) -> str:
    """Return ``name`` as the directory stores it: cut to the maximum length."""
    name = name.split("\0", 1)[0]
    encoded = name.encode("utf-8")[:FILE_NAME_MAX_LEN]
    return encoded.decode("utf-8", errors="ignore")


@dataclass
class DirectoryEntry:
    """One slot of the directory: a file name and its header's sector."""

    in_use: bool = False
    sector: int = 0
    name: str = ""

    def to_bytes(self) -> bytes:
        return _ENTRY.pack(self.in_use, self.sector, self.name.encode("utf-8"))

    @classmethod
    def from_bytes(cls, data: bytes) -> DirectoryEntry:
        in_use, sector, raw_name = _ENTRY.unpack(data)
        name = raw_name.split(b"\0", 1)[0][:FILE_NAME_MAX_LEN]
        return cls(in_use, sector, name.decode("utf-8", errors="ignore"))


class Directory:
    """A table of ``size`` entries, all free at first."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"a directory needs at least one entry, got {size}")
        self.entries = [DirectoryEntry() for _ in range(size)]

    def _find_index(self, name: str) -> int | None:
        key = _stored_name(name)
        for index, entry in enumerate(self.entries):
            if entry.in_use and entry.name == key:
                return index
        return None

    def fetch_from(self, file: _RandomAccessFile) -> None:
        """Load the table from the start of ``file``."""
        self.load_bytes(file.read_at(len(self.entries) * ENTRY_SIZE, 0))

    def write_back(self, file: _RandomAccessFile) -> None:
        """Store the table at the start of ``file``."""
        file.write_at(self.to_bytes(), 0)

    def find(self, name: str) -> int | None:
        """Return the header sector of file ``name``, or None if it is absent."""
        index = self._find_index(name)
        return None if index is None else self.entries[index].sector

    def add(self, name: str, sector: int) -> None:
        """Record file ``name`` with its header in ``sector``.

        Raises FileExistsError if the name is taken and NoSpaceError if
        every entry is in use.
        """
        if self._find_index(name) is not None:
            raise FileExistsError(name)
        for entry in self.entries:
            if not entry.in_use:
                entry.in_use = True
                entry.name = _stored_name(name)
                entry.sector = sector
                return
        raise NoSpaceError(f"directory is full; cannot add {name!r}")

    def remove(self, name: str) -> None:
        """Drop file ``name``; raises FileNotFoundError if it is absent."""
        index = self._find_index(name)
        if index is None:
            raise FileNotFoundError(name)
        self.entries[index].in_use = False

    def names(self) -> list[str]:
        """Return the names of all files, in table order."""
        return [entry.name for entry in self.entries if entry.in_use]

    def to_bytes(self) -> bytes:
        """Return the table in its on-disk form."""
        return b"".join(entry.to_bytes() for entry in self.entries)

    def load_bytes(self, data: bytes) -> None:
        """Replace entries with those encoded in ``data``.

        Entries for which ``data`` is too short are left as they are.
        """
        for index in range(min(len(self.entries), len(data) // ENTRY_SIZE)):
            chunk = data[index * ENTRY_SIZE : (index + 1) * ENTRY_SIZE]
            self.entries[index] = DirectoryEntry.from_bytes(chunk)

    def dump(self, disk: _SectorDisk) -> str:
        """Return a listing of every file, its header and its contents."""
        parts = ["Directory contents:\n"]
        for entry in self.entries:
            if not entry.in_use:
                continue
            parts.append(f"Name: {entry.name}, Sector: {entry.sector}\n")
            hdr = FileHeader(disk.sector_size)
            hdr.fetch_from(disk, entry.sector)
            parts.append(hdr.dump(disk))
        parts.append("\n")
        return "".join(parts)