"""Board of candidate cells, dimension views, scan cursor and snapshot history."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .cell import Cell
from .errors import ContractViolation, PuzzleFormatError

logger = logging.getLogger(__name__)

BOX_SIZE = 3
SIZE = BOX_SIZE * BOX_SIZE
Grid = List[List[int]]


class Dimension(enum.Enum):
    ROW = "row"
    COL = "col"
    BOX = "box"


class Board:
    """A square grid of :class:`Cell` objects, every candidate open at creation."""

    def __init__(self, box_size: int = BOX_SIZE) -> None:
        self.box_size = box_size
        self.size = box_size * box_size
        self.cells: List[Cell] = [
            Cell(row, col, box_size) for row in range(self.size) for col in range(self.size)
        ]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row * self.size + col]

    def cell_at(self, index: int) -> Cell:
        return self.cells[index]

    def copy(self) -> "Board":
        """Full value copy; the clone shares no cell with this board."""
        clone = Board.__new__(Board)
        clone.box_size = self.box_size
        clone.size = self.size
        clone.cells = [cell.copy() for cell in self.cells]
        return clone

    def restore_from(self, other: "Board") -> None:
        """Overwrite every cell's candidates with those of ``other``."""
        if other.size != self.size:
            raise ContractViolation("cannot restore a board from one of a different size")
        for mine, theirs in zip(self.cells, other.cells):
            mine.copy_from(theirs)

    def snapshot(self) -> Tuple[int, ...]:
        """Candidate bitsets in row-major order, for cheap comparisons."""
        return tuple(cell.mask for cell in self.cells)

    def is_solved(self) -> bool:
        """Every cell determined; says nothing about the digits being legal."""
        return all(cell.count == 1 for cell in self.cells)

    def to_grid(self) -> Grid:
        """Best-effort grid: determined digits, 0 for everything else."""
        return [
            [self._grid_value(self.cell(row, col)) for col in range(self.size)]
            for row in range(self.size)
        ]

    @staticmethod
    def _grid_value(cell: Cell) -> int:
        return cell.lowest_value() if cell.count == 1 else 0

    def view(self, kind: Dimension, index: int) -> List[Cell]:
        """View of row/column ``index`` or of box number ``index``."""
        if kind is Dimension.ROW:
            return relevant_cells(self, index, 0, kind)
        if kind is Dimension.COL:
            return relevant_cells(self, 0, index, kind)
        row = (index // self.box_size) * self.box_size
        col = (index % self.box_size) * self.box_size
        return relevant_cells(self, row, col, kind)

    def coordinates(self) -> Iterator[Tuple[Dimension, int, int]]:
        """Yield the ``(kind, row, col)`` address of every row, column and box, in that order."""
        for row in range(self.size):
            yield Dimension.ROW, row, 0
        for col in range(self.size):
            yield Dimension.COL, 0, col
        for row in range(0, self.size, self.box_size):
            for col in range(0, self.size, self.box_size):
                yield Dimension.BOX, row, col

    def dimensions(self) -> Iterator[Tuple[Dimension, int, int, List[Cell]]]:
        """Like :meth:`coordinates`, with the view of each dimension attached."""
        for kind, row, col in self.coordinates():
            yield kind, row, col, relevant_cells(self, row, col, kind)


def relevant_cells(board: Board, row: int, col: int, kind: Dimension) -> List[Cell]:
    """Return the cells of one row, column or box.

    Rows use ``row``, columns use ``col``; a box is addressed by its top-left
    corner, so both coordinates must be multiples of the box size.
    """
    size = board.size
    if kind is Dimension.ROW:
        start = row * size
        return board.cells[start : start + size]
    if kind is Dimension.COL:
        return board.cells[col::size]
    if kind is Dimension.BOX:
        box_size = board.box_size
        if row % box_size or col % box_size:
            raise ContractViolation(f"box origin ({row}, {col}) is not box aligned")
        return [
            board.cells[r * size + c]
            for r in range(row, row + box_size)
            for c in range(col, col + box_size)
        ]
    raise ContractViolation(f"unknown dimension {kind!r}")


def load(grid: Sequence[Sequence[int]], box_size: int = BOX_SIZE) -> Board:
    """Build a board from a grid of digits, 0 marking an unknown cell."""
    board = Board(box_size)
    size = board.size
    if len(grid) != size:
        raise PuzzleFormatError(f"expected {size} rows, received {len(grid)}")
    for row_index, row in enumerate(grid):
        if len(row) != size:
            raise PuzzleFormatError(
                f"row {row_index} has length {len(row)} instead of {size}"
            )
        for col_index, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int):
                raise PuzzleFormatError(
                    f"grid[{row_index}][{col_index}] must be int, "
                    f"received {type(value).__name__}"
                )
            if value < 0 or value > size:
                raise PuzzleFormatError(
                    f"grid[{row_index}][{col_index}] must be between 0 and {size}, "
                    f"received {value}"
                )
            if value:
                board.cell(row_index, col_index).set_value(value)
    logger.debug("loaded board with %d givens", sum(1 for cell in board if cell.count == 1))
    return board


def export(board: Board) -> Grid:
    """Return the digits of a solved board."""
    if not board.is_solved():
        raise ContractViolation("only a solved board can be exported")
    return board.to_grid()


@dataclass
class ScanCursor:
    """Where :func:`find_next_undetermined` resumes, and how far it has looked."""

    index: int = 0
    examined: int = 0


def find_next_undetermined(board: Board, cursor: ScanCursor) -> Optional[Cell]:
    """Return the next undetermined cell at or after ``cursor.index``.

    The scan wraps around the board once. After every position has been
    examined the cursor is exhausted and every further call returns None.
    """
    total = len(board.cells)
    index = cursor.index % total
    while cursor.examined < total:
        cell = board.cells[index]
        index = (index + 1) % total
        cursor.examined += 1
        if cell.count > 1:
            cursor.index = index
            return cell
    cursor.index = index
    return None


class BoardHistory:
    """Stack of board snapshots owned by one search call.

    Position 0 is the caller's board; position ``d`` is the working copy a
    search frame at depth ``d - 1`` guesses on. Leaving the ``with`` block
    drops every snapshot, whichever way the search ends.
    """

    def __init__(self, root: Board) -> None:
        self._boards: List[Board] = [root]

    def __enter__(self) -> "BoardHistory":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __len__(self) -> int:
        return len(self._boards)

    @property
    def root(self) -> Board:
        return self._boards[0]

    @property
    def current(self) -> Board:
        return self._boards[-1]

    def push(self) -> Board:
        """Snapshot the current board and make the snapshot current."""
        snapshot = self.current.copy()
        self._boards.append(snapshot)
        return snapshot

    def restore(self) -> None:
        """Reset the current board to the snapshot it was taken from."""
        if len(self._boards) < 2:
            raise ContractViolation("the root board has no snapshot to restore from")
        self._boards[-1].restore_from(self._boards[-2])

    def discard(self) -> None:
        if len(self._boards) < 2:
            raise ContractViolation("the root board cannot be discarded")
        self._boards.pop()

    def promote(self) -> None:
        """Copy the current board into the root and drop the snapshots."""
        if len(self._boards) > 1:
            self.root.restore_from(self.current)
        self.release()

    def release(self) -> None:
        del self._boards[1:]
