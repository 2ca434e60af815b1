"""Deduction rules applied to one row, column or box.

Every rule takes a view (the cells of one dimension, as returned by
:func:`sudoku_engine.board.relevant_cells`) and returns how many candidates
it removed. Zero means the rule found nothing to do.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Callable, List, NamedTuple, Sequence, Set

from .board import Board, Dimension, relevant_cells
from .cell import Cell
from .errors import ContractViolation
from .tracing import CellText, DigitsText, ViewText, get_trace_logger

View = Sequence[Cell]

_elimination_log = get_trace_logger("elimination")
_singles_log = get_trace_logger("singles")
_pairs_log = get_trace_logger("pairs")
_subsets_log = get_trace_logger("subsets")
_serpentine_log = get_trace_logger("serpentine")
_box_line_log = get_trace_logger("box_line")


def _determined_mask(view: View) -> int:
    mask = 0
    for cell in view:
        if cell.count == 1:
            mask |= cell.mask
    return mask


def _clear_outside(view: View, keep: Set[int], mask: int, log: logging.Logger) -> int:
    """Remove ``mask`` from every cell of ``view`` whose index is not in ``keep``."""
    changes = 0
    for index, cell in enumerate(view):
        if index in keep:
            continue
        before = cell.mask
        removed = cell.clear_values(mask)
        if removed:
            changes += removed
            log.debug(
                "%s: |%s| -> |%s|",
                CellText(cell),
                DigitsText(before, cell.size),
                DigitsText(cell.mask, cell.size),
            )
    return changes


def eliminate(view: View) -> int:
    """A digit already placed in the dimension is removed from every other cell."""
    placed = _determined_mask(view)
    if not placed:
        return 0
    changes = 0
    for cell in view:
        if cell.count == 1:
            continue
        before = cell.mask
        removed = cell.clear_values(placed)
        if removed:
            changes += removed
            _elimination_log.debug(
                "cannot be %s: |%s| -> |%s|",
                CellText(cell),
                DigitsText(before, cell.size),
                DigitsText(cell.mask, cell.size),
            )
    return changes


def singles(view: View) -> int:
    """A digit with exactly one possible home in the dimension goes there.

    Forcing a cell that had ``n`` candidates counts as ``n - 1`` changes.
    """
    if not view:
        return 0
    placed = _determined_mask(view)
    changes = 0
    for value in range(1, view[0].size + 1):
        bit = 1 << (value - 1)
        if placed & bit:
            continue
        holders = [cell for cell in view if cell.count > 1 and cell.mask & bit]
        if len(holders) != 1:
            continue
        cell = holders[0]
        changes += cell.count - 1
        _singles_log.debug("must be %d: %s", value, CellText(cell))
        cell.set_value(value)
    return changes


def naked_pairs(view: View) -> int:
    """Two cells sharing the same two candidates claim those digits."""
    changes = 0
    for first, cell in enumerate(view):
        if cell.count != 2:
            continue
        for second in range(first + 1, len(view)):
            if not cell.equals(view[second]):
                continue
            _pairs_log.debug(
                "pair |%s| at %d and %d in %s",
                DigitsText(cell.mask, cell.size),
                first,
                second,
                ViewText(view),
            )
            changes += _clear_outside(view, {first, second}, cell.mask, _pairs_log)
    return changes


def modified_tuples(view: View) -> int:
    """A three-candidate cell plus two or more cells using only its digits.

    Those cells together own the three digits, so they leave every other
    cell of the dimension.
    """
    changes = 0
    for index, cell in enumerate(view):
        if cell.count != 3:
            continue
        claimed = {index}
        for other_index, other in enumerate(view):
            if other_index != index and cell.is_subtuple(other):
                claimed.add(other_index)
        if len(claimed) < 3:
            continue
        _subsets_log.debug(
            "tuple |%s| claimed by %s", DigitsText(cell.mask, cell.size), sorted(claimed)
        )
        changes += _clear_outside(view, claimed, cell.mask, _subsets_log)
    return changes


def _is_serpentine(view: View, chosen: Sequence[int], k: int) -> int:
    """Return the union mask when ``chosen`` forms a valid k-tuple, else 0."""
    union = 0
    for index in chosen:
        union |= view[index].mask
    if bin(union).count("1") != k:
        return 0
    for value in range(1, view[0].size + 1):
        bit = 1 << (value - 1)
        if not union & bit:
            continue
        occurrences = sum(1 for index in chosen if view[index].mask & bit)
        if occurrences < 2 or occurrences > k:
            return 0
    return union


def _serpentine_pass(view: View, k: int) -> int:
    eligible = [index for index, cell in enumerate(view) if 2 <= cell.count <= k]
    if not k <= len(eligible) <= k + 2:
        return 0
    for chosen in combinations(eligible, k):
        union = _is_serpentine(view, chosen, k)
        if not union:
            continue
        changes = _clear_outside(view, set(chosen), union, _serpentine_log)
        if changes:
            _serpentine_log.debug(
                "%d-tuple |%s| at %s removed %d",
                k,
                DigitsText(union, view[0].size),
                list(chosen),
                changes,
            )
            return changes
    return 0


def serpentine(view: View) -> int:
    """Hidden chains of three and four cells that share exactly k digits.

    Only cells with between 2 and ``k`` candidates take part. The search runs
    when the number of such cells is between ``k`` and ``k + 2``; the first
    combination that removes anything ends the pass for that ``k``.
    """
    return _serpentine_pass(view, 3) + _serpentine_pass(view, 4)


def box_line_reduction(board: Board, view: View) -> int:
    """Digits confined to one row or column of a box leave the rest of that line."""
    if len({cell.box for cell in view}) != 1:
        raise ContractViolation("box/line reduction needs a box view")
    changes = 0
    for cell in view:
        if cell.count == 1:
            continue
        for value in cell.values():
            bit = 1 << (value - 1)
            marked = [other for other in view if other.mask & bit]
            if not 2 <= len(marked) <= board.box_size:
                continue
            if len({other.row for other in marked}) == 1:
                line = relevant_cells(board, marked[0].row, 0, Dimension.ROW)
            elif len({other.col for other in marked}) == 1:
                line = relevant_cells(board, 0, marked[0].col, Dimension.COL)
            else:
                continue
            keep = {id(other) for other in marked}
            for target in line:
                if id(target) in keep:
                    continue
                if target.clear_value(value):
                    changes += 1
                    _box_line_log.debug("box %d owns %d: cleared %s", cell.box, value, CellText(target))
    return changes


class Step(NamedTuple):
    name: str
    run: Callable[[Board, View], int]
    box_only: bool


ALGORITHMS: List[Step] = [
    Step("elimination", lambda board, view: eliminate(view), False),
    Step("singles", lambda board, view: singles(view), False),
    Step("pairs", lambda board, view: naked_pairs(view), False),
    Step("subsets", lambda board, view: modified_tuples(view), False),
    Step("box_line", box_line_reduction, True),
    Step("serpentine", lambda board, view: serpentine(view), False),
]
