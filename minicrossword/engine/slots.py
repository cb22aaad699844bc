"""Slot extraction: maximal open runs in rows and columns."""

from __future__ import annotations

from typing import List

from ..core.constants import MIN_WORD_LENGTH, Direction
from ..core.models import WordSlot
from .grid import CrosswordGrid


def extract_slots(grid: CrosswordGrid) -> List[WordSlot]:
    """Derive across then down slots of length >= 2 from ``grid``.

    Runs of a single open cell are dropped. The grid is not modified and
    every call returns fresh slot objects.
    """

    slots: List[WordSlot] = []
    for r in range(grid.size):
        slots.extend(_scan_line(grid, Direction.ACROSS, r))
    for c in range(grid.size):
        slots.extend(_scan_line(grid, Direction.DOWN, c))
    return slots


def _scan_line(grid: CrosswordGrid, direction: Direction, line: int) -> List[WordSlot]:
    found: List[WordSlot] = []
    start = -1
    # Step one past the edge so a run touching the border is closed too.
    for offset in range(grid.size + 1):
        row, col = (line, offset) if direction == Direction.ACROSS else (offset, line)
        if offset < grid.size and not grid.is_blocked(row, col):
            if start == -1:
                start = offset
            continue
        if start != -1:
            length = offset - start
            if length >= MIN_WORD_LENGTH:
                start_row, start_col = (line, start) if direction == Direction.ACROSS else (start, line)
                found.append(WordSlot(direction=direction, row=start_row, col=start_col, length=length))
            start = -1
    return found
