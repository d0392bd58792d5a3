"""A fixed-size array of bits, each independently set, cleared and tested.

The bits are stored as little-endian 32-bit words, which is also the
layout produced by :meth:`Bitmap.to_bytes`.
"""

from __future__ import annotations

from collections.abc import Iterator

BITS_IN_BYTE = 8
BITS_IN_WORD = 32
BYTES_IN_WORD = BITS_IN_WORD // BITS_IN_BYTE


def _trunc_div(n: int, s: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(n) // abs(s)
    return quotient if (n >= 0) == (s >= 0) else -quotient


def div_round_down(n: int, s: int) -> int:
    """Divide ``n`` by ``s``, rounding toward zero."""
    return _trunc_div(n, s)


def div_round_up(n: int, s: int) -> int:
    """Divide ``n`` by ``s``, adding one when a positive remainder is left."""
    quotient = _trunc_div(n, s)
    remainder = n - quotient * s
    return quotient + (1 if remainder > 0 else 0)


class Bitmap:
    """An array of ``num_items`` bits, all clear at first."""

    def __init__(self, num_items: int) -> None:
        if num_items <= 0:
            raise ValueError(f"a bitmap needs at least one bit, got {num_items}")
        self.num_bits = num_items
        self.num_words = div_round_up(num_items, BITS_IN_WORD)
        self._map = bytearray(self.num_words * BYTES_IN_WORD)

    def _check(self, which: int) -> None:
        if not 0 <= which < self.num_bits:
            raise IndexError(
                f"bit {which} out of range for a bitmap of {self.num_bits} bits"
            )

    def mark(self, which: int) -> None:
        """Set bit ``which``."""
        self._check(which)
        self._map[which // BITS_IN_BYTE] |= 1 << (which % BITS_IN_BYTE)

    def clear(self, which: int) -> None:
        """Clear bit ``which``."""
        self._check(which)
        self._map[which // BITS_IN_BYTE] &= ~(1 << (which % BITS_IN_BYTE)) & 0xFF

    def test(self, which: int) -> bool:
        """Return whether bit ``which`` is set."""
        self._check(which)
        return bool(self._map[which // BITS_IN_BYTE] & (1 << (which % BITS_IN_BYTE)))

    def find_and_set(self) -> int | None:
        """Set the first clear bit and return its number, or None when full."""
        for which in range(self.num_bits):
            if not self.test(which):
                self.mark(which)
                return which
        return None

    def num_clear(self) -> int:
        """Return how many bits are clear."""
        return sum(1 for which in range(self.num_bits) if not self.test(which))

    def set_bits(self) -> list[int]:
        """Return the numbers of all set bits, in increasing order."""
        return list(self._iter_set())

    def _iter_set(self) -> Iterator[int]:
        return (which for which in range(self.num_bits) if self.test(which))

    def dump(self) -> str:
        """Return a printable listing of the set bits."""
        listed = "".join(f"{which}, " for which in self._iter_set())
        return f"Bitmap set:\n{listed}\n"

    def to_bytes(self) -> bytes:
        """Return the raw storage: ``num_words`` little-endian 32-bit words."""
        return bytes(self._map)

    def load_bytes(self, data: bytes) -> None:
        """Overwrite the storage with ``data``; a short ``data`` leaves the tail as is."""
        chunk = bytes(data[: len(self._map)])
        self._map[: len(chunk)] = chunk

    def __len__(self) -> int:
        return self.num_bits