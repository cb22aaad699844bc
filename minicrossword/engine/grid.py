"""Grid representation, topology builder and placement helpers."""

from __future__ import annotations

import random
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import BLOCKED_SYMBOL, Bounds, CellType
from ..core.exceptions import SlotPlacementError
from ..core.models import Cell, WordSlot
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class CrosswordGrid:
    """Square grid of blocked, empty and letter cells."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[Cell]] = [[Cell() for _ in range(size)] for _ in range(size)]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "CrosswordGrid":
        """Build a grid from strings: ``#`` blocked, ``.`` empty, else a letter."""

        grid = cls(len(rows))
        for r, row in enumerate(rows):
            if len(row) != grid.size:
                raise ValueError("Grid rows must all have the grid's size")
            for c, char in enumerate(row):
                if char == BLOCKED_SYMBOL:
                    grid.block(r, c)
                elif char != ".":
                    cell = grid.cells[r][c]
                    cell.type = CellType.LETTER
                    cell.letter = char.upper()
        return grid

    # ------------------------------------------------------------------
    # Cell manipulation
    # ------------------------------------------------------------------
    def block(self, row: int, col: int) -> None:
        cell = self.cells[row][col]
        cell.type = CellType.BLOCKED
        cell.letter = None

    def place_word_undoable(self, slot: WordSlot, text: str) -> Callable[[], None]:
        """Write ``text`` into ``slot`` and return a callable undoing exactly that write."""

        text = text.upper()
        if len(text) != slot.length:
            raise SlotPlacementError("Word length mismatch")

        old_states = []
        for index, (row, col) in enumerate(slot.cells):
            if not self.bounds.contains(row, col):
                raise SlotPlacementError("Word extends outside grid")
            cell = self.cells[row][col]
            if cell.type == CellType.BLOCKED:
                raise SlotPlacementError("Word overlaps blocked cell")
            if cell.letter and cell.letter != text[index]:
                raise SlotPlacementError("Letter conflict")
            old_states.append((row, col, cell.type, cell.letter))

        for index, (row, col) in enumerate(slot.cells):
            cell = self.cells[row][col]
            cell.type = CellType.LETTER
            cell.letter = text[index]

        def undo() -> None:
            for row, col, old_type, old_letter in old_states:
                cell = self.cells[row][col]
                cell.type = old_type
                cell.letter = old_letter

        return undo

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def is_blocked(self, row: int, col: int) -> bool:
        return self.cells[row][col].type == CellType.BLOCKED

    def is_open(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col) and not self.is_blocked(row, col)

    def pattern(self, slot: WordSlot) -> List[Optional[str]]:
        return [self.cells[r][c].letter for r, c in slot.cells]

    def positions(self) -> Iterable[Tuple[int, int]]:
        for r in range(self.size):
            for c in range(self.size):
                yield r, c

    def blocked_count(self) -> int:
        return sum(1 for r, c in self.positions() if self.is_blocked(r, c))

    def empty_count(self) -> int:
        return sum(1 for r, c in self.positions() if self.cells[r][c].is_empty())

    def to_rows(self) -> List[List[str]]:
        """Row lists: ``"#"`` blocked, ``""`` empty, the letter otherwise."""

        rows: List[List[str]] = []
        for row in self.cells:
            rendered: List[str] = []
            for cell in row:
                if cell.type == CellType.BLOCKED:
                    rendered.append(BLOCKED_SYMBOL)
                else:
                    rendered.append(cell.letter or "")
            rows.append(rendered)
        return rows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CrosswordGrid):
            return NotImplemented
        return self.to_rows() == other.to_rows()

    __hash__ = None  # type: ignore[assignment]


# ----------------------------------------------------------------------
# Topology builder
# ----------------------------------------------------------------------
def black_cell_count(
    size: int,
    ratio: float,
    jitter: int,
    rng: random.Random,
) -> int:
    """Roughly ``ratio`` of the cells plus ``0..jitter`` extra."""

    return int(size * size * ratio) + rng.randint(0, jitter)


def build_topology(size: int, black_cells: int, rng: random.Random) -> CrosswordGrid:
    """Empty ``size`` x ``size`` grid with ``black_cells`` random blocked cells.

    The layout is not checked for connectivity, symmetry or fillability;
    unusable layouts fail downstream and get retried.
    """

    total = size * size
    if not 0 <= black_cells <= total:
        raise ValueError(f"Cannot block {black_cells} cells in a {size}x{size} grid")
    grid = CrosswordGrid(size)
    for position in rng.sample(range(total), black_cells):
        grid.block(*divmod(position, size))
    LOGGER.debug("Built %sx%s topology with %s black cells", size, size, grid.blocked_count())
    return grid
