"""One-call entry point: load, check, propagate, then search if asked to."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from . import board as board_mod
from .board import Board, Grid
from .config import SolverConfig
from .consistency import is_sane, is_sane_never_solved
from .errors import InconsistentPuzzleError
from .propagation import PropagationStats, process_board
from .search import SearchStatus, SearchStats, search_breadth_first, search_depth_first

logger = logging.getLogger(__name__)


@dataclass
class SolveReport:
    """Outcome of :func:`solve_puzzle`; ``board`` holds whatever progress was made."""

    board: Board
    solved: bool = False
    sane: bool = False
    propagation: PropagationStats = field(default_factory=PropagationStats)
    breadth_first: Optional[bool] = None
    breadth_first_stats: Optional[SearchStats] = None
    depth_first: Optional[SearchStatus] = None
    depth_first_stats: Optional[SearchStats] = None

    @property
    def grid(self) -> Grid:
        return self.board.to_grid()


def solve_puzzle(grid: Sequence[Sequence[int]], config: Optional[SolverConfig] = None) -> SolveReport:
    """Solve ``grid`` as far as the configured strategies allow.

    Raises :class:`PuzzleFormatError` for a malformed grid and
    :class:`InconsistentPuzzleError` when the givens already clash.
    """
    config = config or SolverConfig()
    config.validate()
    board = board_mod.load(grid)
    if not is_sane_never_solved(board):
        raise InconsistentPuzzleError("initial board repeats a digit in a row, column or box")

    report = SolveReport(board=board)
    report.propagation = process_board(board)
    logger.info(
        "propagation: %d changes in %d iterations", report.propagation.changes, report.propagation.iterations
    )

    rng = config.random_source()
    start_index = config.initial_cell_index(rng)
    if not board.is_solved() and config.breadth_first:
        report.breadth_first_stats = SearchStats()
        report.breadth_first = search_breadth_first(board, start_index, report.breadth_first_stats)
        logger.info("breadth-first search %s", "solved the board" if report.breadth_first else "failed")
    if not board.is_solved() and config.depth_first:
        report.depth_first, report.depth_first_stats = search_depth_first(
            board, config.max_depth, start_index, rng
        )
        logger.info("depth-first search finished with %s", report.depth_first.value)

    report.solved = board.is_solved()
    report.sane = is_sane(board)
    return report
