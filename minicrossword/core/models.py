"""Data models supporting the mini crossword generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import CellType, Direction


@dataclass
class Cell:
    """Represents a grid cell."""

    type: CellType = CellType.EMPTY
    letter: Optional[str] = None

    def is_empty(self) -> bool:
        return self.type == CellType.EMPTY


@dataclass
class WordSlot:
    """A maximal run of open cells, the home of one word."""

    direction: Direction
    row: int
    col: int
    length: int
    word: Optional[str] = None
    definition: Optional[str] = None
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def key(self) -> Tuple[Direction, int, int]:
        return (self.direction, self.row, self.col)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            dr, dc = self.direction.step
            self._cells = [(self.row + dr * i, self.col + dc * i) for i in range(self.length)]
        return self._cells


@dataclass(frozen=True)
class Clue:
    """A numbered clue as handed to the presentation layer."""

    number: int
    clue: str
    answer: str
    length: int
    row: int
    col: int
    direction: Direction

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "clue": self.clue,
            "answer": self.answer,
            "length": self.length,
            "row": self.row,
            "col": self.col,
        }


@dataclass(frozen=True)
class Puzzle:
    """Finished puzzle: grid snapshot, numbered clues and an identifier.

    ``grid`` rows use ``"#"`` for blocked cells, ``""`` for open cells no slot
    covers, and the letter otherwise.
    """

    grid: Tuple[Tuple[str, ...], ...]
    definitions: Dict[str, List[Clue]]
    id: int
    attempts: int = 1
    seed: Optional[int] = None

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def across(self) -> List[Clue]:
        return self.definitions["across"]

    @property
    def down(self) -> List[Clue]:
        return self.definitions["down"]

    def answers(self) -> List[str]:
        return [clue.answer for clue in self.across + self.down]

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "grid": [list(row) for row in self.grid],
            "definitions": {
                "across": [clue.to_jsonable() for clue in self.across],
                "down": [clue.to_jsonable() for clue in self.down],
            },
            "id": self.id,
        }
