"""Render boards and solve results for the command line."""

from typing import Optional, Sequence

import typer

from sudoku_engine.board import BOX_SIZE, Board
from sudoku_engine.engine import SolveReport
from sudoku_engine.search import SearchStats
from sudoku_engine.tracing import format_digits


def pretty_board(grid: Sequence[Sequence[int]], box_size: int = BOX_SIZE) -> str:
    """Digits with ``.`` for unknown cells, boxes ruled off with ``|`` and ``-``.

    This is the plain board printed after solving; see :func:`candidate_board`
    for the view that shows every remaining candidate.
    """
    rule = "-+-".join(["-" * (2 * box_size - 1)] * (len(grid) // box_size))
    lines = []
    for index, row in enumerate(grid):
        if index and index % box_size == 0:
            lines.append(rule)
        bands = (row[start : start + box_size] for start in range(0, len(row), box_size))
        lines.append(" | ".join(" ".join(str(value) if value else "." for value in band) for band in bands))
    return "\n".join(lines)


def candidate_board(board: Board) -> str:
    """Every cell's remaining candidates, bands framed by ``=`` rules."""
    rows = []
    for row in range(board.size):
        rows.append(
            "|"
            + "".join(
                f" {format_digits(board.cell(row, col).mask, board.size)} |"
                for col in range(board.size)
            )
        )
    rule = "=" * len(rows[0])
    lines = [rule]
    for row, text in enumerate(rows):
        lines.append(text)
        if row % board.box_size == board.box_size - 1:
            lines.append(rule)
    return "\n".join(lines)


def format_search_stats(label: str, stats: Optional[SearchStats]) -> Optional[str]:
    if stats is None:
        return None
    return (
        f"{label}: depth={stats.max_depth} recursions={stats.recursions} "
        f"backtracks={stats.backtracks} not_sane={stats.not_sane} "
        f"cells={stats.cells_tested} values={stats.values_tested} "
        f"changes={stats.changes} iterations={stats.iterations}"
    )


def print_summary(name: str, report: SolveReport, silent_level: int = 1) -> None:
    """Echo the outcome; level 0 adds the candidate view, 2 drops the board, 3 prints nothing."""
    if silent_level >= 3:
        return
    if silent_level == 0:
        typer.echo(candidate_board(report.board))
    if silent_level <= 1:
        typer.echo(pretty_board(report.grid))
        typer.echo()

    if report.solved and report.sane:
        typer.echo(f">>>>>> {name} solved, sane!")
    else:
        solved = "solved" if report.solved else "not solved"
        sane = "sane" if report.sane else "not sane"
        typer.echo(f"*** {name} {solved}, {sane}! Solution failed!")

    propagation = report.propagation
    typer.echo(
        f"changes={propagation.changes} iterations={propagation.iterations} "
        f"(rows={propagation.row_changes} cols={propagation.col_changes} "
        f"boxes={propagation.box_changes})"
    )
    bfs_line = format_search_stats("bfs", report.breadth_first_stats)
    if bfs_line:
        outcome = "solved" if report.breadth_first else "failed"
        typer.echo(f"{bfs_line} -> {outcome}")
    dfs_line = format_search_stats("dfs", report.depth_first_stats)
    if dfs_line:
        typer.echo(f"{dfs_line} -> {report.depth_first.value}")
