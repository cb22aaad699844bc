"""Pretty-print helpers for puzzles."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, Tuple

from ..core.constants import BLOCKED_SYMBOL

if TYPE_CHECKING:
    from ..core.models import Puzzle
    from ..data.dictionary import DictionaryIndex


def _numbers(puzzle: Puzzle) -> Dict[Tuple[int, int], int]:
    return {(clue.row, clue.col): clue.number for clue in puzzle.across + puzzle.down}


def format_grid(puzzle: Puzzle, *, show_letters: bool = True) -> str:
    """Boxed grid: ``###`` for blocked cells, clue numbers in the top-left."""

    numbers = _numbers(puzzle)
    border = "+---" * puzzle.size + "+"
    lines = [border]
    for r, row in enumerate(puzzle.grid):
        rendered = []
        for c, cell in enumerate(row):
            if cell == BLOCKED_SYMBOL:
                rendered.append("###")
                continue
            number = str(numbers.get((r, c), ""))
            letter = cell if show_letters else ""
            if number and letter:
                rendered.append(f"{number}{letter}".ljust(3))
            elif number:
                rendered.append(number.ljust(3))
            else:
                rendered.append(f" {letter or ' '} ")
        lines.append("|" + "|".join(rendered) + "|")
        lines.append(border)
    return "\n".join(lines)


def format_clues(puzzle: Puzzle, *, show_answers: bool = False) -> str:
    lines = []
    for heading, clues in (("Across", puzzle.across), ("Down", puzzle.down)):
        lines.append(f"{heading}:")
        for clue in clues:
            answer = f" {clue.answer} :" if show_answers else ""
            lines.append(f" {clue.number}.{answer} {clue.clue} ({clue.length})")
    return "\n".join(lines)


def print_puzzle(puzzle: Puzzle, *, show_answers: bool = True, stream=None) -> None:
    """Print the grid followed by the clue lists."""

    stream = stream or sys.stdout
    print(format_grid(puzzle, show_letters=show_answers), file=stream)
    print(format_clues(puzzle, show_answers=show_answers), file=stream)
    print(f"Attempts: {puzzle.attempts}", file=stream)
    if puzzle.seed is not None:
        print(f"Seed: {puzzle.seed}", file=stream)


def print_dictionary_stats(index: DictionaryIndex, *, stream=None) -> None:
    """Print the word count and the length distribution of ``index``."""

    stream = stream or sys.stdout
    distribution = index.length_distribution()
    print(f"Total words: {len(index)}", file=stream)
    print("Length distribution:", file=stream)
    for length, count in sorted(distribution.items()):
        print(f"  Length {length}: {count} words", file=stream)
