"""Constraint propagation: run every deduction rule over every dimension to a fixpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from .board import Board, Dimension, relevant_cells
from .deductions import ALGORITHMS
from .tracing import ViewText, get_trace_logger

logger = logging.getLogger(__name__)
trace = get_trace_logger("propagation")


@dataclass
class PropagationStats:
    row_changes: int = 0
    col_changes: int = 0
    box_changes: int = 0
    changes: int = 0
    iterations: int = 0

    def add(self, other: "PropagationStats") -> None:
        self.row_changes += other.row_changes
        self.col_changes += other.col_changes
        self.box_changes += other.box_changes
        self.changes += other.changes
        self.iterations += other.iterations


def process_dimension(board: Board, kind: Dimension, row: int, col: int) -> int:
    """Apply each rule once, in order, to the dimension at ``(row, col)``.

    Each rule works on a freshly taken view so it sees what the previous
    rule left behind.
    """
    changes = 0
    for step in ALGORITHMS:
        if step.box_only and kind is not Dimension.BOX:
            continue
        view = relevant_cells(board, row, col, kind)
        found = step.run(board, view)
        if found:
            trace.debug("%s %s(%d, %d): %d -> %s", step.name, kind.value, row, col, found, ViewText(view))
        changes += found
    return changes


def process_board(board: Board) -> PropagationStats:
    """Sweep rows, columns, then boxes until a whole sweep changes nothing."""
    stats = PropagationStats()
    while True:
        stats.iterations += 1
        sweep = 0
        for kind, row, col in board.coordinates():
            found = process_dimension(board, kind, row, col)
            if kind is Dimension.ROW:
                stats.row_changes += found
            elif kind is Dimension.COL:
                stats.col_changes += found
            else:
                stats.box_changes += found
            sweep += found
        stats.changes += sweep
        trace.debug("iteration %d: %d changes", stats.iterations, sweep)
        if not sweep:
            break
    logger.debug("propagation finished: %d changes in %d iterations", stats.changes, stats.iterations)
    return stats


def solve_by_propagation(board: Board) -> Tuple[int, int]:
    """Run :func:`process_board` and return ``(changes, iterations)``."""
    stats = process_board(board)
    return stats.changes, stats.iterations
