"""Read and write puzzle files.

Two text layouts are understood:

* grid: one line per row, nine comma-separated entries, ``.`` for an
  unknown cell; lines starting with ``#`` and blank lines are skipped.
* linear: 81 characters, digits with ``.``, ``_`` or ``-`` for unknowns.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from sudoku_engine.board import SIZE, Grid
from sudoku_engine.errors import PuzzleFormatError

UNKNOWN_MARKS = {".", "_", "-"}
BOX_SIZE = 3


def parse_entry(raw: str, line_no: int) -> int:
    entry = raw.strip()
    if entry in UNKNOWN_MARKS:
        return 0
    if not entry.isdigit():
        raise PuzzleFormatError(f"line {line_no}: {entry!r} is not a digit")
    value = int(entry)
    if value > SIZE:
        raise PuzzleFormatError(f"line {line_no}: {value} is out of range")
    return value


def parse_grid(lines: Iterable[str]) -> Grid:
    """Parse the grid layout; rows missing at the end stay unknown."""
    grid: Grid = []
    for line_no, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        entries = text.split(",")
        if len(entries) != SIZE:
            raise PuzzleFormatError(
                f"line {line_no}: expected {SIZE} entries, found {len(entries)}"
            )
        if len(grid) == SIZE:
            raise PuzzleFormatError(f"line {line_no}: more than {SIZE} rows")
        grid.append([parse_entry(entry, line_no) for entry in entries])
    while len(grid) < SIZE:
        grid.append([0] * SIZE)
    return grid


def parse_linear(text: Iterable[str]) -> Grid:
    """Convert a flat run of characters into a 9x9 grid."""
    digits: List[int] = []
    for ch in text:
        if ch.isdigit():
            digits.append(int(ch))
        elif ch in UNKNOWN_MARKS:
            digits.append(0)
    if len(digits) != SIZE * SIZE:
        raise PuzzleFormatError(f"linear puzzle must yield {SIZE * SIZE} cells, found {len(digits)}")
    return [digits[i : i + SIZE] for i in range(0, SIZE * SIZE, SIZE)]


def format_grid(grid: Sequence[Sequence[int]]) -> str:
    lines = []
    for r, row in enumerate(grid):
        chunks = []
        for c, value in enumerate(row):
            text = str(value) if value else "."
            if c != SIZE - 1:
                text += ","
                if c % BOX_SIZE == BOX_SIZE - 1:
                    text += " "
            chunks.append(text)
        lines.append("".join(chunks))
        if r % BOX_SIZE == BOX_SIZE - 1 and r != SIZE - 1:
            lines.append("#")
    return "\n".join(lines) + "\n"


def format_header(source: str, date: str, level: str) -> str:
    return f"#\n# Source: {source}\n# Date: {date}\n# Level: {level}\n#\n"


def format_puzzle_file(grid: Sequence[Sequence[int]], source: str, date: str, level: str) -> str:
    return format_header(source, date, level) + format_grid(grid)


def format_linear(grid: Sequence[Sequence[int]]) -> str:
    """Return the grid as 81 characters, ``.`` for unknowns."""
    return "".join(str(value) if value else "." for row in grid for value in row)


def read_puzzle(path: Path, linear: bool = False) -> Grid:
    text = Path(path).read_text(encoding="utf-8")
    if linear:
        return parse_linear(text)
    return parse_grid(text.splitlines())


def write_puzzle(
    path: Path,
    grid: Sequence[Sequence[int]],
    linear: bool = False,
    header: Optional[Sequence[str]] = None,
) -> None:
    """Write ``grid`` to a new file; an existing file raises FileExistsError."""
    if linear:
        text = format_linear(grid) + "\n"
    elif header:
        text = format_puzzle_file(grid, *header)
    else:
        text = format_grid(grid)
    with open(path, "x", encoding="utf-8") as handle:
        handle.write(text)
