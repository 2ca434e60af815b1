"""Command line tools for the Sudoku engine."""
