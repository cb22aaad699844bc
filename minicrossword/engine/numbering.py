"""Standard crossword clue numbering."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ..core.constants import Direction
from ..core.exceptions import ValidationError
from ..core.models import Clue, WordSlot
from .grid import CrosswordGrid


def starts_run(grid: CrosswordGrid, row: int, col: int, direction: Direction) -> bool:
    """True when (row, col) is the first cell of an open run of length >= 2."""

    if not grid.is_open(row, col):
        return False
    dr, dc = direction.step
    return not grid.is_open(row - dr, col - dc) and grid.is_open(row + dr, col + dc)


def number_clues(grid: CrosswordGrid, slots: Sequence[WordSlot]) -> Dict[str, List[Clue]]:
    """Number the grid in raster order and build the across/down clue lists.

    A cell starting both an across and a down run gets a single number
    shared by both clues. Every slot must already carry its word.
    """

    by_key: Dict[Tuple[Direction, int, int], WordSlot] = {slot.key: slot for slot in slots}
    definitions: Dict[str, List[Clue]] = {Direction.ACROSS.value: [], Direction.DOWN.value: []}
    number = 1
    for row, col in grid.positions():
        directions = [d for d in Direction if starts_run(grid, row, col, d)]
        if not directions:
            continue
        for direction in directions:
            slot = by_key.get((direction, row, col))
            if slot is None or slot.word is None:
                raise ValidationError(
                    f"No filled {direction.value} slot at numbering point ({row},{col})"
                )
            definitions[direction.value].append(
                Clue(
                    number=number,
                    clue=slot.definition or "",
                    answer=slot.word,
                    length=slot.length,
                    row=row,
                    col=col,
                    direction=direction,
                )
            )
        number += 1
    return definitions
