"""Named trace loggers, one per solving step, and lazy renderers for their messages."""

from __future__ import annotations

import logging
from typing import Sequence

from .cell import Cell

TRACE_ROOT = "sudoku_engine.trace"
TRACE_CATEGORIES = (
    "elimination",
    "singles",
    "pairs",
    "subsets",
    "serpentine",
    "box_line",
    "propagation",
    "breadth_first",
    "depth_first",
)


def get_trace_logger(category: str) -> logging.Logger:
    if category not in TRACE_CATEGORIES:
        raise ValueError(f"unknown trace category {category!r}")
    return logging.getLogger(f"{TRACE_ROOT}.{category}")


def format_digits(mask: int, size: int = 9) -> str:
    """Candidates as fixed-width text, a blank for every missing digit."""
    return "".join(
        str(value) if mask & (1 << (value - 1)) else " " for value in range(1, size + 1)
    )


class CellText:
    """Renders ``(row, col, box) |digits|`` as the cell stood when this was built."""

    __slots__ = ("row", "col", "box", "mask", "size")

    def __init__(self, cell: Cell) -> None:
        self.row = cell.row
        self.col = cell.col
        self.box = cell.box
        self.mask = cell.mask
        self.size = cell.size

    def __str__(self) -> str:
        return f"({self.row}, {self.col}, {self.box}) |{format_digits(self.mask, self.size)}|"


class ViewText:
    """Renders a whole dimension the way the candidate board prints a row."""

    __slots__ = ("masks", "size")

    def __init__(self, cells: Sequence[Cell]) -> None:
        self.masks = [cell.mask for cell in cells]
        self.size = cells[0].size if cells else 9

    def __str__(self) -> str:
        return "|" + "".join(f" {format_digits(mask, self.size)} |" for mask in self.masks)


class DigitsText:
    """Lazy :func:`format_digits` for log arguments."""

    __slots__ = ("mask", "size")

    def __init__(self, mask: int, size: int = 9) -> None:
        self.mask = mask
        self.size = size

    def __str__(self) -> str:
        return format_digits(self.mask, self.size)
