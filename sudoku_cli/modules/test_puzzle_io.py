"""Tests for puzzle file parsing and writing."""

import pytest

from sudoku_engine.board import load
from sudoku_engine.errors import PuzzleFormatError

from . import puzzle_io
from .reporter import candidate_board, pretty_board

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"

GRID_TEXT = """\
#
# Source: Wikipedia
# Date: 2005-05-01
# Level: easy
#
5,3,., .,7,., .,.,.
6,.,., 1,9,5, .,.,.
.,9,8, .,.,., .,6,.
#
8,.,., .,6,., .,.,3
4,.,., 8,.,3, .,.,1
7,.,., .,2,., .,.,6
#
.,6,., .,.,., 2,8,.
.,.,., 4,1,9, .,.,5
.,.,., .,8,., .,7,9
"""


def test_parse_grid_skips_comments_and_blank_lines():
    grid = puzzle_io.parse_grid(GRID_TEXT.splitlines() + ["", "   "])
    assert grid == puzzle_io.parse_linear(PUZZLE)


def test_missing_rows_stay_unknown():
    grid = puzzle_io.parse_grid(["5,3,0,0,7,0,0,0,0"])
    assert grid[0][:2] == [5, 3]
    assert grid[1:] == [[0] * 9] * 8


@pytest.mark.parametrize(
    "lines",
    [
        ["5,3,.,.,7,.,.,."],
        ["5,3,.,.,7,.,.,.,x"],
        ["5,3,.,.,7,.,.,.,10"],
        ["1,2,3,4,5,6,7,8,9"] * 10,
    ],
)
def test_parse_grid_rejects_bad_lines(lines):
    with pytest.raises(PuzzleFormatError):
        puzzle_io.parse_grid(lines)


def test_parse_linear_accepts_any_unknown_mark():
    text = PUZZLE.replace("0", "-", 3).replace("0", "_", 3).replace("0", ".")
    assert puzzle_io.parse_linear(text) == puzzle_io.parse_linear(PUZZLE)


def test_parse_linear_needs_81_cells():
    with pytest.raises(PuzzleFormatError):
        puzzle_io.parse_linear(PUZZLE[:-1])


def test_format_grid_matches_the_file_layout():
    grid = puzzle_io.parse_linear(PUZZLE)
    text = puzzle_io.format_puzzle_file(grid, "Wikipedia", "2005-05-01", "easy")
    assert text == GRID_TEXT


def test_format_linear():
    grid = puzzle_io.parse_linear(PUZZLE)
    assert puzzle_io.format_linear(grid) == PUZZLE.replace("0", ".")


def test_write_puzzle_refuses_to_overwrite(tmp_path):
    target = tmp_path / "puzzle.txt"
    grid = puzzle_io.parse_linear(PUZZLE)
    puzzle_io.write_puzzle(target, grid, header=("Wikipedia", "2005-05-01", "easy"))
    assert puzzle_io.read_puzzle(target) == grid
    with pytest.raises(FileExistsError):
        puzzle_io.write_puzzle(target, grid, linear=True)
    assert target.read_text(encoding="utf-8") == GRID_TEXT


def test_linear_file_round_trip(tmp_path):
    target = tmp_path / "puzzle.lin"
    grid = puzzle_io.parse_linear(PUZZLE)
    puzzle_io.write_puzzle(target, grid, linear=True)
    assert puzzle_io.read_puzzle(target, linear=True) == grid


def test_pretty_board_formatting_contains_grid_lines():
    pretty = pretty_board(puzzle_io.parse_linear(PUZZLE))
    assert "------+-------+------" in pretty
    assert pretty.count("\n") == 10
    assert pretty.splitlines()[0] == "5 3 . | . 7 . | . . ."


def test_pretty_board_rules_follow_the_box_size():
    grid = [[1, 2, 3, 4], [3, 4, 0, 2], [2, 1, 4, 3], [4, 3, 2, 1]]
    assert pretty_board(grid, box_size=2).splitlines() == [
        "1 2 | 3 4",
        "3 4 | . 2",
        "----+----",
        "2 1 | 4 3",
        "4 3 | 2 1",
    ]


def test_candidate_board_shows_every_candidate():
    text = candidate_board(load(puzzle_io.parse_linear(PUZZLE)))
    lines = text.splitlines()
    assert len(lines) == 13
    assert set(lines[0]) == {"="}
    assert len(lines[1]) == len(lines[0])
    assert lines[1].startswith("|     5     |   3       |")
    assert "123456789" in lines[1]
