"""Guessing strategies run once propagation stalls.

Both searches work on snapshots held in a :class:`BoardHistory`; the
caller's board only changes when a search succeeds.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board, BoardHistory, ScanCursor, find_next_undetermined
from .consistency import is_sane_part_solved, is_sane_solved
from .propagation import PropagationStats, process_board
from .tracing import CellText, get_trace_logger

logger = logging.getLogger(__name__)
bfs_trace = get_trace_logger("breadth_first")
dfs_trace = get_trace_logger("depth_first")

DEFAULT_MAX_DEPTH = 4


class SearchStatus(enum.Enum):
    SUCCESS = "success"
    SYSTEM_ERROR = "system_error"
    DEPTH_ERROR = "depth_error"
    NO_MORE_CELLS = "no_more_cells"
    INITIAL_ERROR = "initial_error"


@dataclass
class SearchStats:
    max_depth: int = 0
    recursions: int = 0
    backtracks: int = 0
    not_sane: int = 0
    cells_tested: int = 0
    values_tested: int = 0
    changes: int = 0
    iterations: int = 0

    def record(self, propagation: PropagationStats) -> None:
        self.changes += propagation.changes
        self.iterations += propagation.iterations


def _accepts(board: Board) -> bool:
    return board.is_solved() and is_sane_solved(board)


def search_breadth_first(
    board: Board, start_index: int = 0, stats: Optional[SearchStats] = None
) -> bool:
    """Try every single guess on its own and keep the first that solves the board.

    Each undetermined cell is visited once, starting at ``start_index`` and
    wrapping around; each of its candidates is set on a scratch copy and
    propagated. Nothing is nested, so only puzzles one guess away from a
    propagation solve are finished here.
    """
    if stats is None:
        stats = SearchStats()
    with BoardHistory(board) as history:
        try:
            work = history.push()
        except MemoryError:
            logger.error("out of memory while copying the board for breadth-first search")
            return False
        cursor = ScanCursor(index=start_index)
        while True:
            cell = find_next_undetermined(board, cursor)
            if cell is None:
                bfs_trace.debug("no guess solved the board after %d cells", stats.cells_tested)
                return False
            stats.cells_tested += 1
            index = cell.row * board.size + cell.col
            for value in cell.values():
                stats.values_tested += 1
                target = work.cell_at(index)
                target.set_value(value)
                bfs_trace.debug("guess %d at %s", value, CellText(target))
                stats.record(process_board(work))
                if _accepts(work):
                    bfs_trace.debug("guess %d at r%dc%d solved the board", value, cell.row, cell.col)
                    history.promote()
                    return True
                history.restore()


@dataclass
class _Frame:
    depth: int
    index: int
    values: List[int]
    depth_hit: bool = False


def search_depth_first(
    board: Board,
    max_depth: int = DEFAULT_MAX_DEPTH,
    start_index: int = 0,
    rng: Optional[random.Random] = None,
) -> Tuple[SearchStatus, SearchStats]:
    """Guess, propagate, and guess again on top of a sane unsolved result.

    The walk is an explicit stack of frames; frame ``d`` guesses on its own
    board snapshot and only frames with ``d < max_depth`` may guess. A frame
    takes the first undetermined cell at or after ``start_index`` and tries
    its candidates in ascending order. When they run out it reports
    ``NO_MORE_CELLS``, or ``DEPTH_ERROR`` if one of its children hit the cap.

    With ``rng`` every frame, the first one included, draws its own start
    index from it and ``start_index`` is ignored.
    """
    stats = SearchStats()
    with BoardHistory(board) as history:
        try:
            status = _walk(history, max_depth, start_index, rng, stats)
        except MemoryError:
            logger.error("out of memory while copying the board for depth-first search")
            status = SearchStatus.SYSTEM_ERROR
    logger.debug("depth-first search finished with %s: %s", status.value, stats)
    return status, stats


def _open_frame(
    history: BoardHistory,
    depth: int,
    max_depth: int,
    start_index: int,
    rng: Optional[random.Random],
    stats: SearchStats,
) -> Tuple[Optional[_Frame], SearchStatus]:
    stats.max_depth = max(stats.max_depth, depth)
    if depth >= max_depth:
        dfs_trace.debug("depth %d reached the cap of %d", depth, max_depth)
        return None, SearchStatus.DEPTH_ERROR
    if rng is not None:
        start_index = rng.randrange(history.current.size * history.current.size)
    cell = find_next_undetermined(history.current, ScanCursor(index=start_index))
    if cell is None:
        return None, SearchStatus.NO_MORE_CELLS
    stats.cells_tested += 1
    frame = _Frame(depth=depth, index=cell.row * cell.size + cell.col, values=cell.values())
    history.push()
    dfs_trace.debug("depth %d guessing on %s", depth, CellText(cell))
    return frame, SearchStatus.INITIAL_ERROR


def _walk(
    history: BoardHistory,
    max_depth: int,
    start_index: int,
    rng: Optional[random.Random],
    stats: SearchStats,
) -> SearchStatus:
    frame, status = _open_frame(history, 0, max_depth, start_index, rng, stats)
    if frame is None:
        return status
    stack = [frame]
    while stack:
        frame = stack[-1]
        if not frame.values:
            history.discard()
            stack.pop()
            status = SearchStatus.DEPTH_ERROR if frame.depth_hit else SearchStatus.NO_MORE_CELLS
            dfs_trace.debug("depth %d exhausted: %s", frame.depth, status.value)
            if stack:
                _backtrack(history, stack[-1], status, stats)
            continue

        value = frame.values.pop(0)
        stats.values_tested += 1
        work = history.current
        work.cell_at(frame.index).set_value(value)
        stats.record(process_board(work))

        if _accepts(work):
            dfs_trace.debug("depth %d: guess %d solved the board", frame.depth, value)
            history.promote()
            return SearchStatus.SUCCESS
        if work.is_solved() or not is_sane_part_solved(work):
            stats.not_sane += 1
            dfs_trace.debug("depth %d: guess %d is not sane", frame.depth, value)
            history.restore()
            continue

        stats.recursions += 1
        child, status = _open_frame(history, frame.depth + 1, max_depth, start_index, rng, stats)
        if child is None:
            _backtrack(history, frame, status, stats)
        else:
            stack.append(child)
    return status


def _backtrack(history: BoardHistory, frame: _Frame, status: SearchStatus, stats: SearchStats) -> None:
    """Undo the guess ``frame`` made after its child came back with ``status``."""
    stats.backtracks += 1
    if status is SearchStatus.DEPTH_ERROR:
        frame.depth_hit = True
    history.restore()
