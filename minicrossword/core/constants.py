"""Shared constants and enumerations for the mini crossword generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellType(str, Enum):
    """All supported cell types in the grid."""

    EMPTY = "EMPTY"
    LETTER = "LETTER"
    BLOCKED = "BLOCKED"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)


BLOCKED_SYMBOL = "#"

MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 6

# Empirically tuned defaults; every one of them is overridable through
# ``GeneratorConfig``.
DEFAULT_SIZES: Tuple[int, ...] = (5, 6)
DEFAULT_BLACK_CELL_RATIO = 0.15
DEFAULT_BLACK_CELL_JITTER = 1
DEFAULT_MAX_ATTEMPTS = 50
DEFAULT_STEP_BUDGET = 20000


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
