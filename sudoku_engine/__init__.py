"""Layered 9x9 Sudoku engine: candidate propagation with breadth- and depth-first guessing."""

from .board import Board, Dimension, export, load, relevant_cells
from .config import SolverConfig
from .consistency import CheckMode, check_consistency, is_sane
from .engine import SolveReport, solve_puzzle
from .errors import ContractViolation, InconsistentPuzzleError, PuzzleFormatError, SudokuError
from .propagation import PropagationStats, process_board, solve_by_propagation
from .search import SearchStats, SearchStatus, search_breadth_first, search_depth_first

__version__ = "0.1.0"

__all__ = [
    "Board",
    "CheckMode",
    "ContractViolation",
    "Dimension",
    "InconsistentPuzzleError",
    "PropagationStats",
    "PuzzleFormatError",
    "SearchStats",
    "SearchStatus",
    "SolveReport",
    "SolverConfig",
    "SudokuError",
    "check_consistency",
    "export",
    "is_sane",
    "load",
    "process_board",
    "relevant_cells",
    "search_breadth_first",
    "search_depth_first",
    "solve_by_propagation",
    "solve_puzzle",
]
