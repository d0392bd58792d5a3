"""A simulated disk with a synchronous, one-request-at-a-time interface.

Every read or write moves one whole sector and returns only once it is
done.  A lock keeps requests from different threads from overlapping.
"""

from __future__ import annotations

import threading


class SynchDisk:
    """An in-memory disk of ``num_sectors`` sectors of ``sector_size`` bytes."""

    def __init__(self, num_sectors: int, sector_size: int) -> None:
        if num_sectors <= 0:
            raise ValueError(f"a disk needs at least one sector, got {num_sectors}")
        if sector_size <= 0:
            raise ValueError(f"sector size must be positive, got {sector_size}")
        self.num_sectors = num_sectors
        self.sector_size = sector_size
        self._sectors = [bytearray(sector_size) for _ in range(num_sectors)]
        self._lock = threading.Lock()

    def _check(self, sector_number: int) -> None:
        if not 0 <= sector_number < self.num_sectors:
            raise IndexError(
                f"sector {sector_number} out of range for a disk of "
                f"{self.num_sectors} sectors"
            )

    def read_sector(self, sector_number: int) -> bytes:
        """Return the whole contents of sector ``sector_number``."""
        self._check(sector_number)
        with self._lock:
            return bytes(self._sectors[sector_number])

    def write_sector(self, sector_number: int, data: bytes) -> None:
        """Store ``data`` in sector ``sector_number``.

        Data shorter than a sector is padded with zero bytes; longer data
        is refused.
        """
        self._check(sector_number)
        if len(data) > self.sector_size:
            raise ValueError(
                f"{len(data)} bytes do not fit in a sector of {self.sector_size}"
            )
        padded = bytes(data) + bytes(self.sector_size - len(data))
        with self._lock:
            self._sectors[sector_number][:] = padded