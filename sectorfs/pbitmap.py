"""A bitmap that can be stored in, and fetched from, an open file."""

from __future__ import annotations

from typing import Protocol

from sectorfs.bitmap import BYTES_IN_WORD, Bitmap


class _RandomAccessFile(Protocol):
    def read_at(self, num_bytes: int, position: int) -> bytes: ...

    def write_at(self, data: bytes, position: int) -> int: ...


class PersistentBitmap(Bitmap):
    """A :class:`Bitmap` whose storage lives at the start of a file.

    When ``file`` is given, the bitmap is loaded from it at once;
    otherwise every bit starts clear.
    """

    def __init__(self, num_items: int, file: _RandomAccessFile | None = None) -> None:
        super().__init__(num_items)
        if file is not None:
            self.fetch_from(file)

    def fetch_from(self, file: _RandomAccessFile) -> None:
        """Load the bitmap's contents from the start of ``file``."""
        self.load_bytes(file.read_at(self.num_words * BYTES_IN_WORD, 0))

    def write_back(self, file: _RandomAccessFile) -> None:
        """Store the bitmap's contents at the start of ``file``."""
        file.write_at(self.to_bytes(), 0)