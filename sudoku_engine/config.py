"""Solver settings shared by the engine façade and the CLI."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .board import SIZE
from .search import DEFAULT_MAX_DEPTH

CELL_COUNT = SIZE * SIZE


@dataclass
class SolverConfig:
    breadth_first: bool = False
    depth_first: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    start_index: int = 0
    random_start: bool = False
    seed: Optional[int] = None

    def validate(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, received {self.max_depth}")
        if not 0 <= self.start_index < CELL_COUNT:
            raise ValueError(
                f"start_index must be between 0 and {CELL_COUNT - 1}, received {self.start_index}"
            )

    def random_source(self) -> Optional[random.Random]:
        """A generator seeded with ``seed`` when ``random_start`` is set, else None."""
        if self.random_start:
            return random.Random(self.seed)
        return None

    def initial_cell_index(self, rng: Optional[random.Random] = None) -> int:
        """Where the searches start scanning for an undetermined cell.

        With ``random_start`` the index is drawn from ``rng``, or from a fresh
        :meth:`random_source` when none is given.
        """
        if not self.random_start:
            return self.start_index
        if rng is None:
            rng = self.random_source()
        return rng.randrange(CELL_COUNT)
