"""Deterministic rule validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Set, Tuple

from ..core.constants import CellType, Direction
from ..core.exceptions import ValidationError
from ..core.models import Clue, WordSlot
from ..data.dictionary import DictionaryIndex
from ..utils.logger import get_logger
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over a filled grid and its clues."""

    def __init__(self, index: DictionaryIndex) -> None:
        self.index = index

    def validate(
        self,
        grid: CrosswordGrid,
        slots: Sequence[WordSlot],
        definitions: Dict[str, List[Clue]],
    ) -> ValidationResult:
        try:
            self._check_square(grid)
            self._check_letters_valid(grid, slots)
            self._check_slot_words(grid, slots)
            self._check_no_duplicate_words(slots)
            self._check_numbering(slots, definitions)
        except ValidationError as exc:
            LOGGER.warning("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _check_square(grid: CrosswordGrid) -> None:
        if len(grid.cells) != grid.size or any(len(row) != grid.size for row in grid.cells):
            raise ValidationError("Grid is not square")

    @staticmethod
    def _check_letters_valid(grid: CrosswordGrid, slots: Sequence[WordSlot]) -> None:
        # Open cells outside every slot (isolated by blocks) stay empty.
        covered = {cell for slot in slots for cell in slot.cells}
        for r, c in grid.positions():
            cell = grid.cell(r, c)
            if cell.type == CellType.BLOCKED:
                continue
            if cell.type == CellType.EMPTY:
                if (r, c) not in covered:
                    continue
                raise ValidationError(f"Unfilled open cell at ({r},{c})")
            letter = cell.letter or ""
            if len(letter) != 1 or not ("A" <= letter <= "Z"):
                raise ValidationError(f"Invalid letter '{cell.letter}' at ({r},{c})")

    def _check_slot_words(self, grid: CrosswordGrid, slots: Sequence[WordSlot]) -> None:
        for slot in slots:
            if slot.length < 2:
                raise ValidationError(f"Slot at ({slot.row},{slot.col}) is shorter than 2")
            if slot.word is None:
                raise ValidationError(f"Slot at ({slot.row},{slot.col}) has no word")
            if not self.index.contains(slot.word):
                raise ValidationError(f"Word '{slot.word}' is not in the dictionary")
            on_grid = "".join(letter or "" for letter in grid.pattern(slot))
            if on_grid != slot.word:
                raise ValidationError(
                    f"Slot word '{slot.word}' disagrees with grid letters '{on_grid}' "
                    f"at ({slot.row},{slot.col})"
                )

    @staticmethod
    def _check_no_duplicate_words(slots: Sequence[WordSlot]) -> None:
        seen: Set[str] = set()
        for slot in slots:
            if slot.word in seen:
                raise ValidationError(
                    f"Duplicate word '{slot.word}' at ({slot.row},{slot.col})"
                )
            seen.add(slot.word or "")

    @staticmethod
    def _check_numbering(slots: Sequence[WordSlot], definitions: Dict[str, List[Clue]]) -> None:
        clues = definitions.get(Direction.ACROSS.value, []) + definitions.get(Direction.DOWN.value, [])
        keys: List[Tuple[Direction, int, int]] = [(clue.direction, clue.row, clue.col) for clue in clues]
        if sorted(keys) != sorted(slot.key for slot in slots) or len(set(keys)) != len(keys):
            raise ValidationError("Clues do not cover every slot exactly once")

        positions: Dict[int, Tuple[int, int]] = {}
        for clue in clues:
            previous = positions.setdefault(clue.number, (clue.row, clue.col))
            if previous != (clue.row, clue.col):
                raise ValidationError(f"Clue number {clue.number} used for two cells")
        numbers = sorted(positions)
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValidationError(f"Clue numbers are not dense from 1: {numbers}")
        cells = [positions[number] for number in numbers]
        if cells != sorted(cells):
            raise ValidationError("Clue numbers do not follow raster order")
