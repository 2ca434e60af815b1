"""Tests for the breadth-first and depth-first searches.

The puzzles are the solved grid with unique rectangles blanked out: four
cells on two rows, two columns and two boxes holding two digits. Each
rectangle can be completed either way, so propagation stalls on it and
only a guess decides it.

The single-solution puzzles check that wrong guesses are undone and the
search carries on to the right one.
"""

from . import board as board_mod
from .consistency import is_sane
from .propagation import process_board
from .search import SearchStatus, SearchStats, search_breadth_first, search_depth_first

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"

HARD_PUZZLE = "800000000003600000070090200050007000000045700000100030001000068008500010090000400"
HARD_SOLUTION = "812753649943682175675491283154237896369845721287169534521974368438526917796318452"

RECT_A = [(0, 3), (0, 4), (3, 3), (3, 4)]
RECT_B = [(1, 7), (1, 8), (6, 7), (6, 8)]
RECT_C = [(2, 4), (2, 5), (5, 4), (5, 5)]


def to_grid(text):
    return [[int(ch) for ch in text[i : i + 9]] for i in range(0, 81, 9)]


def stalled_board(*rectangles):
    digits = list(SOLUTION)
    for rectangle in rectangles:
        for row, col in rectangle:
            digits[row * 9 + col] = "0"
    board = board_mod.load(to_grid("".join(digits)))
    process_board(board)
    return board


def test_one_rectangle_stalls_propagation():
    board = stalled_board(RECT_A)
    assert not board.is_solved()
    assert [board.cell(row, col).values() for row, col in RECT_A] == [[6, 7]] * 4


def test_breadth_first_solves_a_one_guess_puzzle():
    board = stalled_board(RECT_A)
    stats = SearchStats()
    assert search_breadth_first(board, stats=stats)
    assert board_mod.export(board) == to_grid(SOLUTION)
    assert stats.cells_tested == 1
    assert stats.values_tested == 1


def test_breadth_first_fails_on_a_two_guess_puzzle_and_keeps_the_board():
    board = stalled_board(RECT_A, RECT_B)
    before = board.snapshot()
    stats = SearchStats()
    assert not search_breadth_first(board, stats=stats)
    assert board.snapshot() == before
    assert stats.cells_tested == 8
    assert stats.values_tested == 16


def test_breadth_first_start_index_picks_the_first_guess():
    board = stalled_board(RECT_A)
    assert search_breadth_first(board, start_index=30)
    assert board.is_solved()
    # (3, 3) is tried first and its lowest candidate flips the rectangle
    assert board.cell(3, 3).values() == [6]
    assert is_sane(board)


def test_depth_first_solves_a_two_guess_puzzle():
    board = stalled_board(RECT_A, RECT_B)
    status, stats = search_depth_first(board, max_depth=2)
    assert status is SearchStatus.SUCCESS
    assert board_mod.export(board) == to_grid(SOLUTION)
    assert stats.recursions == 1
    assert stats.backtracks == 0
    assert stats.max_depth == 1
    assert stats.cells_tested == 2
    assert stats.values_tested == 2


def test_depth_first_reports_the_depth_cap():
    board = stalled_board(RECT_A, RECT_B)
    before = board.snapshot()
    status, stats = search_depth_first(board, max_depth=1)
    assert status is SearchStatus.DEPTH_ERROR
    assert board.snapshot() == before
    assert stats.recursions == 2
    assert stats.backtracks == 2
    assert stats.max_depth == 1


def test_depth_first_backtracks_through_every_branch_before_giving_up():
    board = stalled_board(RECT_A, RECT_B, RECT_C)
    before = board.snapshot()
    status, stats = search_depth_first(board, max_depth=2)
    assert status is SearchStatus.DEPTH_ERROR
    assert board.snapshot() == before
    assert stats == SearchStats(
        max_depth=2,
        recursions=6,
        backtracks=6,
        not_sane=0,
        cells_tested=3,
        values_tested=6,
        changes=stats.changes,
        iterations=stats.iterations,
    )


def test_depth_first_with_room_for_three_guesses():
    board = stalled_board(RECT_A, RECT_B, RECT_C)
    status, stats = search_depth_first(board, max_depth=3)
    assert status is SearchStatus.SUCCESS
    assert stats.max_depth == 2
    assert is_sane(board)
    # the third guess takes the lowest candidate, which flips rectangle C
    assert [board.cell(row, col).lowest_value() for row, col in RECT_C] == [2, 4, 4, 2]
    assert [board.cell(row, col).lowest_value() for row, col in RECT_B] == [4, 8, 8, 4]


def test_depth_first_zero_depth_never_guesses():
    board = stalled_board(RECT_A)
    status, stats = search_depth_first(board, max_depth=0)
    assert status is SearchStatus.DEPTH_ERROR
    assert stats.values_tested == 0


def test_depth_first_on_a_solved_board_finds_no_cell():
    board = board_mod.load(to_grid(SOLUTION))
    status, stats = search_depth_first(board)
    assert status is SearchStatus.NO_MORE_CELLS
    assert stats.cells_tested == 0


def test_depth_first_counts_guesses_that_break_the_board():
    board = stalled_board(RECT_A)
    # 1 is already placed in row 0, so guessing it breaks the row
    board.cell(0, 3).mask |= 1
    board.cell(0, 3).count = 3
    status, stats = search_depth_first(board, max_depth=1)
    assert status is SearchStatus.SUCCESS
    assert stats.not_sane == 1
    assert board_mod.export(board) == to_grid(SOLUTION)


class ScriptedStarts:
    """Stands in for ``random.Random``; hands out fixed start indices."""

    def __init__(self, *starts):
        self.starts = list(starts)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.starts.pop(0)


def test_depth_first_draws_a_start_index_for_every_frame():
    board = stalled_board(RECT_A, RECT_B)
    starts = ScriptedStarts(0, 30)
    status, stats = search_depth_first(board, max_depth=2, start_index=5, rng=starts)
    assert status is SearchStatus.SUCCESS
    assert starts.calls == [81, 81]
    assert stats.cells_tested == 2
    # the root guesses at (0, 3); the child scans on from 30 and reaches
    # (6, 7) before (1, 7), so its lowest candidate flips rectangle B
    assert [board.cell(row, col).lowest_value() for row, col in RECT_A] == [6, 7, 7, 6]
    assert [board.cell(row, col).lowest_value() for row, col in RECT_B] == [8, 4, 4, 8]
    assert is_sane(board)


def test_breadth_first_moves_past_wrong_values():
    # givens only; (0, 2) still holds every digit and only 4 is right
    board = board_mod.load(to_grid(PUZZLE))
    stats = SearchStats()
    assert search_breadth_first(board, stats=stats)
    assert board_mod.export(board) == to_grid(SOLUTION)
    assert stats.cells_tested == 1
    assert stats.values_tested == 4


def test_depth_first_recovers_from_wrong_values():
    board = board_mod.load(to_grid(PUZZLE))
    status, stats = search_depth_first(board, max_depth=1)
    assert status is SearchStatus.SUCCESS
    assert board_mod.export(board) == to_grid(SOLUTION)
    assert stats.cells_tested == 1
    assert stats.values_tested == 4
    # each of 1, 2 and 3 either breaks the board or stalls into the cap
    assert stats.not_sane + stats.backtracks == 3
    assert stats.recursions == stats.backtracks
    # 3 is already placed in row 0
    assert stats.not_sane >= 1


def test_depth_first_solves_a_hard_puzzle():
    board = board_mod.load(to_grid(HARD_PUZZLE))
    process_board(board)
    assert not board.is_solved()
    status, stats = search_depth_first(board, max_depth=20)
    assert status is SearchStatus.SUCCESS
    assert board_mod.export(board) == to_grid(HARD_SOLUTION)
    assert stats.not_sane >= 1
    assert stats.values_tested >= stats.cells_tested + stats.not_sane
    assert 1 <= stats.max_depth < 20
