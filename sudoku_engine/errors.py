"""Exceptions raised by the Sudoku engine."""

from __future__ import annotations


class SudokuError(Exception):
    """Base class for every error the engine raises."""


class PuzzleFormatError(SudokuError, ValueError):
    """Raised when an input grid has the wrong shape or an out-of-range digit."""


class InconsistentPuzzleError(SudokuError):
    """Raised when the initial board already breaks a row, column or box rule."""


class ContractViolation(SudokuError, AssertionError):
    """Raised when the engine is called in a way that can only be a caller bug."""
