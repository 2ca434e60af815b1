"""Sanity checks: does a board still obey the row, column and box rules?"""

from __future__ import annotations

import enum
import logging

from .board import Board

logger = logging.getLogger(__name__)


class CheckMode(enum.Enum):
    NEVER_SOLVED = "never_solved"
    PART_SOLVED = "part_solved"
    SOLVED = "solved"


def _counts_in_range(board: Board) -> bool:
    for cell in board:
        if cell.count < 1 or cell.count > board.size:
            logger.debug("cell r%dc%d has %d candidates", cell.row, cell.col, cell.count)
            return False
    return True


def _no_repeated_digits(board: Board) -> bool:
    """No digit is determined twice in the same row, column or box."""
    for kind, row, col, view in board.dimensions():
        seen = 0
        for cell in view:
            if cell.count != 1:
                continue
            if seen & cell.mask:
                logger.debug(
                    "digit %d repeated in %s at (%d, %d)", cell.lowest_value(), kind.value, row, col
                )
                return False
            seen |= cell.mask
    return True


def _placed_digits_eliminated(board: Board) -> bool:
    """No determined digit is still a candidate anywhere else in its dimension."""
    for kind, row, col, view in board.dimensions():
        for cell in view:
            if cell.count != 1:
                continue
            for other in view:
                if other is not cell and other.mask & cell.mask:
                    logger.debug(
                        "digit %d still open in %s at (%d, %d)",
                        cell.lowest_value(),
                        kind.value,
                        row,
                        col,
                    )
                    return False
    return True


def is_sane_never_solved(board: Board) -> bool:
    """Counts in range and no digit placed twice; undetermined overlap is not inspected."""
    return _counts_in_range(board) and _no_repeated_digits(board)


def is_sane_part_solved(board: Board) -> bool:
    return _counts_in_range(board) and _placed_digits_eliminated(board)


def is_sane_solved(board: Board) -> bool:
    """Every dimension holds each digit exactly once."""
    full = (1 << board.size) - 1
    for kind, row, col, view in board.dimensions():
        seen = 0
        for cell in view:
            if cell.count != 1 or seen & cell.mask:
                logger.debug("%s at (%d, %d) is not a permutation", kind.value, row, col)
                return False
            seen |= cell.mask
        if seen != full:
            return False
    return True


def check_consistency(board: Board, mode: CheckMode) -> bool:
    if mode is CheckMode.NEVER_SOLVED:
        return is_sane_never_solved(board)
    if mode is CheckMode.PART_SOLVED:
        return is_sane_part_solved(board)
    return is_sane_solved(board)


def is_sane(board: Board) -> bool:
    """Solved check for a solved board, part-solved check otherwise."""
    if board.is_solved():
        return is_sane_solved(board)
    return is_sane_part_solved(board)
