#!/usr/bin/env python3
"""Command line front end for the Sudoku engine."""

import datetime
from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from sudoku_engine import __version__
from sudoku_engine.config import SolverConfig
from sudoku_engine.engine import SolveReport, solve_puzzle
from sudoku_engine.errors import InconsistentPuzzleError
from sudoku_engine.search import DEFAULT_MAX_DEPTH, SearchStatus

from .modules.logging_setup import configure_logging
from .modules.puzzle_io import read_puzzle, write_puzzle
from .modules.reporter import print_summary

app = typer.Typer(help="Solve 9x9 Sudoku puzzles by propagation, with optional guessing.")

EXIT_SOLVED = 0
EXIT_NOT_SOLVED = 1
EXIT_INPUT_ERROR = 11
EXIT_NOT_SANE = 12


def fail(message: str, code: int = EXIT_INPUT_ERROR) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=code)


def solved_by(report: SolveReport) -> str:
    if report.depth_first is SearchStatus.SUCCESS:
        return "depth-first"
    if report.breadth_first:
        return "breadth-first"
    return "propagation" if report.solved else "unsolved"


@app.command()
def solve(
    puzzle: Path = typer.Argument(..., help="Puzzle file to solve."),
    breadth_first: bool = typer.Option(
        False,
        "--breadth-first",
        "-b",
        envvar="SUDOKU_BREADTH_FIRST",
        help="Try single guesses when propagation stalls.",
    ),
    depth_first: bool = typer.Option(
        False,
        "--depth-first",
        "-r",
        envvar="SUDOKU_DEPTH_FIRST",
        help="Try nested guesses when propagation stalls.",
    ),
    max_depth: int = typer.Option(
        DEFAULT_MAX_DEPTH,
        "--max-depth",
        "-D",
        envvar="SUDOKU_MAX_DEPTH",
        help="Deepest guess nesting for --depth-first.",
    ),
    start_index: int = typer.Option(
        0, "--start-index", "-i", envvar="SUDOKU_START_INDEX", help="Cell index (0-80) where guessing starts."
    ),
    random_start: bool = typer.Option(
        False, "--random-start", "-I", envvar="SUDOKU_RANDOM_START", help="Start guessing at a random cell."
    ),
    seed: Optional[int] = typer.Option(None, "--seed", envvar="SUDOKU_SEED", help="Seed for --random-start."),
    linear: bool = typer.Option(False, "--linear", help="Read the puzzle as 81 characters, not a grid."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result to a new file."),
    linear_out: bool = typer.Option(False, "--linear-out", help="Write --output as 81 characters."),
    silent: int = typer.Option(
        1,
        "--silent",
        "-s",
        envvar="SUDOKU_SILENT",
        help="0 candidates and board, 1 board and summary, 2 summary, 3 nothing.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress of each solving stage."),
    debug: List[str] = typer.Option([], "--debug", "-d", help="Trace one solving step (repeatable)."),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", envvar="SUDOKU_LOG_FILE", help="Also write log records here."
    ),
) -> None:
    """Solve PUZZLE and print the result; the exit code tells how it went."""
    if not 0 <= silent <= 3:
        fail(f"Invalid silent level {silent}")
    try:
        configure_logging(verbose, debug, log_file)
    except ValueError as exc:
        fail(str(exc))

    config = SolverConfig(
        breadth_first=breadth_first,
        depth_first=depth_first,
        max_depth=max_depth,
        start_index=start_index,
        random_start=random_start,
        seed=seed,
    )
    try:
        config.validate()
        grid = read_puzzle(puzzle, linear=linear)
    except (OSError, ValueError) as exc:
        fail(f"*** Input error: {exc}")

    try:
        report = solve_puzzle(grid, config)
    except InconsistentPuzzleError as exc:
        fail(f"*** {puzzle.name} initial board not sane: {exc}", EXIT_NOT_SANE)

    print_summary(puzzle.name, report, silent)

    if output is not None:
        header = (puzzle.name, datetime.date.today().isoformat(), solved_by(report))
        try:
            write_puzzle(output, report.grid, linear=linear_out, header=header)
        except FileExistsError:
            fail(f"*** Output file {output} already exists")
        except OSError as exc:
            fail(f"*** Output error: {exc}")

    raise typer.Exit(code=EXIT_SOLVED if report.solved and report.sane else EXIT_NOT_SOLVED)


@app.command()
def convert(
    source_file: Path = typer.Argument(..., help="Puzzle file to read."),
    target_file: Path = typer.Argument(..., help="New file to write."),
    linear_in: bool = typer.Option(False, "--linear-in", help="Read 81 characters instead of a grid."),
    linear_out: bool = typer.Option(False, "--linear-out", help="Write 81 characters instead of a grid."),
    source: Optional[str] = typer.Option(None, "--source", help="Header source, defaults to the input name."),
    date: Optional[str] = typer.Option(None, "--date", help="Header date line, defaults to today."),
    level: str = typer.Option("unknown", "--level", help="Header difficulty line."),
) -> None:
    """Re-write a puzzle file in the grid or linear layout."""
    try:
        grid = read_puzzle(source_file, linear=linear_in)
    except (OSError, ValueError) as exc:
        fail(f"*** Input error: {exc}")

    header = (
        source or source_file.name,
        date or datetime.date.today().isoformat(),
        level,
    )
    try:
        write_puzzle(target_file, grid, linear=linear_out, header=header)
    except FileExistsError:
        fail(f"*** Output file {target_file} already exists")
    except OSError as exc:
        fail(f"*** Output error: {exc}")
    typer.echo(f"Wrote {target_file}")


@app.command()
def version() -> None:
    typer.echo(__version__)


if __name__ == "__main__":
    app()
