"""Candidate cell: the set of digits still possible in one board position."""

from __future__ import annotations

from typing import List

from .errors import ContractViolation


class Cell:
    """One board position and the digits it may still hold.

    Candidates are kept as a bitset: bit ``v - 1`` is set while digit ``v``
    is possible. ``count`` mirrors the number of set bits so the algorithms
    can test for determined cells without recounting.
    """

    __slots__ = ("mask", "count", "row", "col", "box", "size")

    def __init__(self, row: int, col: int, box_size: int = 3) -> None:
        self.size = box_size * box_size
        self.mask = (1 << self.size) - 1
        self.count = self.size
        self.row = row
        self.col = col
        self.box = (row // box_size) * box_size + col // box_size

    def __repr__(self) -> str:
        digits = "".join(str(value) for value in self.values())
        return f"Cell(r{self.row}c{self.col}: {digits or '-'})"

    @property
    def is_determined(self) -> bool:
        return self.count == 1

    def set_value(self, value: int) -> None:
        """Force the cell to hold exactly ``value``."""
        self.mask = 1 << (value - 1)
        self.count = 1

    def clear_value(self, value: int) -> bool:
        """Drop ``value`` from the candidates; return True if it was present."""
        bit = 1 << (value - 1)
        if self.mask & bit:
            self.mask &= ~bit
            self.count -= 1
            return True
        return False

    def clear_values(self, mask: int) -> int:
        """Drop every digit in ``mask``; return how many were present."""
        hit = self.mask & mask
        if not hit:
            return 0
        removed = bin(hit).count("1")
        self.mask &= ~hit
        self.count -= removed
        return removed

    def has_value(self, value: int) -> bool:
        return bool(self.mask & (1 << (value - 1)))

    def lowest_value(self) -> int:
        """Return the smallest candidate digit."""
        if not self.mask:
            raise ContractViolation(f"{self!r} has no candidates left")
        return (self.mask & -self.mask).bit_length()

    def values(self) -> List[int]:
        return [value for value in range(1, self.size + 1) if self.mask & (1 << (value - 1))]

    def equals(self, other: "Cell") -> bool:
        return self.mask == other.mask

    def is_subtuple(self, other: "Cell") -> bool:
        """True when every candidate of ``other`` is also a candidate here."""
        return other.mask & ~self.mask == 0

    def copy_from(self, other: "Cell") -> None:
        """Take over the candidates of ``other``; coordinates stay put."""
        self.mask = other.mask
        self.count = other.count

    def copy(self) -> "Cell":
        clone = Cell.__new__(Cell)
        clone.size = self.size
        clone.mask = self.mask
        clone.count = self.count
        clone.row = self.row
        clone.col = self.col
        clone.box = self.box
        return clone
