"""Tests for the three consistency checks."""

from . import board as board_mod
from . import consistency
from .consistency import CheckMode
from .propagation import process_board

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def to_grid(text):
    return [[int(ch) for ch in text[i : i + 9]] for i in range(0, 81, 9)]


def test_two_fives_in_a_row_fail_the_initial_check():
    grid = to_grid(PUZZLE)
    grid[0][2] = 5
    board = board_mod.load(grid)
    assert not consistency.check_consistency(board, CheckMode.NEVER_SOLVED)


def test_fresh_puzzle_is_sane_but_not_part_solved():
    board = board_mod.load(to_grid(PUZZLE))
    assert consistency.is_sane_never_solved(board)
    assert not consistency.is_sane_part_solved(board)
    process_board(board)
    assert consistency.is_sane_part_solved(board)


def test_empty_cell_fails_both_partial_checks():
    board = board_mod.load(to_grid(PUZZLE))
    process_board(board)
    board.cell(4, 4).mask = 0
    board.cell(4, 4).count = 0
    assert not consistency.check_consistency(board, CheckMode.NEVER_SOLVED)
    assert not consistency.check_consistency(board, CheckMode.PART_SOLVED)


def test_solved_check():
    board = board_mod.load(to_grid(SOLUTION))
    assert consistency.check_consistency(board, CheckMode.SOLVED)
    assert consistency.is_sane(board)


def test_swapped_digits_fail_the_solved_check():
    grid = to_grid(SOLUTION)
    grid[0][0], grid[0][1] = grid[0][1], grid[0][0]
    board = board_mod.load(grid)
    assert board.is_solved()
    assert not consistency.is_sane_solved(board)
    assert not consistency.is_sane(board)


def test_solved_check_rejects_an_unsolved_board():
    board = board_mod.load(to_grid(PUZZLE))
    assert not consistency.is_sane_solved(board)


def test_is_sane_uses_the_part_solved_check_while_unsolved():
    digits = list(SOLUTION)
    for row, col in [(0, 3), (0, 4), (3, 3), (3, 4)]:
        digits[row * 9 + col] = "0"
    board = board_mod.load(to_grid("".join(digits)))
    assert not consistency.is_sane(board)
    process_board(board)
    assert not board.is_solved()
    assert consistency.is_sane(board)
