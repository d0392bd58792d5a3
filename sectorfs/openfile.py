"""An open file: reading and writing a file's bytes through its header.

The header is kept in memory while the file is open.  The disk only
moves whole sectors, so reads fetch every sector the request touches.
Writes first fetch the sectors that are only partly overwritten, so that
their other bytes survive.
"""

from __future__ import annotations

from typing import Protocol

from sectorfs.filehdr import FileHeader


class _SectorDisk(Protocol):
    sector_size: int

    def read_sector(self, sector_number: int) -> bytes: ...

    def write_sector(self, sector_number: int, data: bytes) -> None: ...


class OpenFile:
    """A file whose header is stored in ``sector`` of ``disk``, opened for I/O.

    Files have a fixed length; reads and writes that run past the end are
    cut short at the end of the file.
    """

    def __init__(self, disk: _SectorDisk, sector: int) -> None:
        self._disk = disk
        self._hdr = FileHeader(disk.sector_size)
        self._hdr.fetch_from(disk, sector)
        self.position = 0

    def seek(self, position: int) -> None:
        """Set where the next :meth:`read` or :meth:`write` starts."""
        self.position = position

    def read(self, num_bytes: int) -> bytes:
        """Read up to ``num_bytes`` from the current position and move past them."""
        data = self.read_at(num_bytes, self.position)
        self.position += len(data)
        return data

    def write(self, data: bytes) -> int:
        """Write ``data`` at the current position; return how many bytes went in."""
        written = self.write_at(data, self.position)
        self.position += written
        return written

    def _span(self, num_bytes: int, position: int) -> int:
        if position < 0:
            raise ValueError(f"position must not be negative, got {position}")
        length = self._hdr.num_bytes
        if num_bytes <= 0 or position >= length:
            return 0
        return min(num_bytes, length - position)

    def _sector_range(self, count: int, position: int) -> tuple[int, int]:
        size = self._hdr.sector_size
        return position // size, (position + count - 1) // size

    def _disk_sector(self, index: int) -> int:
        return self._hdr.byte_to_sector(index * self._hdr.sector_size)

    def read_at(self, num_bytes: int, position: int) -> bytes:
        """Return up to ``num_bytes`` starting at ``position``; the position is unchanged."""
        count = self._span(num_bytes, position)
        if count == 0:
            return b""
        size = self._hdr.sector_size
        first, last = self._sector_range(count, position)
        buf = b"".join(
            self._disk.read_sector(self._disk_sector(index))
            for index in range(first, last + 1)
        )
        start = position - first * size
        return buf[start : start + count]

    def write_at(self, data: bytes, position: int) -> int:
        """Write ``data`` starting at ``position``; return how many bytes went in."""
        data = bytes(data)
        count = self._span(len(data), position)
        if count == 0:
            return 0
        size = self._hdr.sector_size
        first, last = self._sector_range(count, position)
        buf = bytearray((last - first + 1) * size)

        first_aligned = position == first * size
        last_aligned = position + count == (last + 1) * size
        if not first_aligned:
            buf[:size] = self._disk.read_sector(self._disk_sector(first))
        if not last_aligned and (first != last or first_aligned):
            buf[(last - first) * size :] = self._disk.read_sector(
                self._disk_sector(last)
            )

        start = position - first * size
        buf[start : start + count] = data[:count]

        for offset, index in enumerate(range(first, last + 1)):
            chunk = bytes(buf[offset * size : (offset + 1) * size])
            self._disk.write_sector(self._disk_sector(index), chunk)
        return count

    def __len__(self) -> int:
        return self._hdr.num_bytes