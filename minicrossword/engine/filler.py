"""Backtracking grid filler with a bounded step budget.

Slots are visited longest first. Each slot tries its shuffled candidates in
turn; a candidate is written into the grid and recorded as used, and the
write is undone before the next candidate is tried. The search keeps an
explicit stack of frames instead of recursing, so memory stays bounded by
the number of slots.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Set

from ..core.constants import DEFAULT_STEP_BUDGET
from ..core.exceptions import CrosswordError, NoCandidates, StepBudgetExceeded
from ..core.models import WordSlot
from ..data.dictionary import DictionaryEntry, DictionaryIndex
from ..utils.logger import get_logger
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)

REASON_STEP_BUDGET = "step_budget"
REASON_EXHAUSTED = "exhausted"


@dataclass
class FillResult:
    ok: bool
    steps: int = 0
    backtracks: int = 0
    dead_ends: int = 0
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class _Frame:
    slot: WordSlot
    remaining: List[DictionaryEntry]
    entry: Optional[DictionaryEntry] = None
    undo: Optional[Callable[[], None]] = field(default=None, repr=False)

    def commit(self) -> None:
        """Copy the current candidate onto the slot."""

        if self.entry is None:
            raise CrosswordError(
                f"No word placed in {self.slot.direction.value} slot at ({self.slot.row},{self.slot.col})"
            )
        self.slot.word = self.entry.word
        self.slot.definition = self.entry.definition

    def retract(self, used_words: Set[str]) -> None:
        """Undo the current candidate, if any."""

        if self.undo is not None:
            self.undo()
            self.undo = None
        if self.entry is not None:
            used_words.discard(self.entry.word)
            self.entry = None


def order_slots(slots: Sequence[WordSlot]) -> List[WordSlot]:
    """Longest first; ties keep their extraction order."""

    return sorted(slots, key=lambda slot: slot.length, reverse=True)


class BacktrackingFiller:
    """Assigns a distinct dictionary word to every slot of a grid."""

    def __init__(
        self,
        index: DictionaryIndex,
        step_budget: int = DEFAULT_STEP_BUDGET,
        rng: Optional[random.Random] = None,
    ) -> None:
        if step_budget < 0:
            raise ValueError("step_budget must not be negative")
        self.index = index
        self.step_budget = step_budget
        self.rng = rng or random.Random()

    def fill(self, grid: CrosswordGrid, slots: Sequence[WordSlot]) -> FillResult:
        """Fill ``slots`` in place.

        On success every slot carries its ``word`` and ``definition`` and the
        grid holds the letters. On failure the grid is back to its pre-call
        state and no slot carries a word.
        """

        for slot in slots:
            slot.word = None
            slot.definition = None

        ordered = order_slots(slots)
        used_words: Set[str] = set()
        stack: List[_Frame] = []
        result = FillResult(ok=False)

        try:
            self._search(grid, ordered, stack, used_words, result)
        except StepBudgetExceeded as exc:
            LOGGER.debug("Fill aborted: %s", exc)
            result.reason = REASON_STEP_BUDGET
        finally:
            if not result.ok:
                for frame in reversed(stack):
                    frame.retract(used_words)
                stack.clear()

        if result.ok:
            for frame in stack:
                frame.commit()
        LOGGER.debug(
            "Fill %s after %d steps (%d backtracks, %d dead ends)",
            "succeeded" if result.ok else f"failed ({result.reason})",
            result.steps,
            result.backtracks,
            result.dead_ends,
        )
        return result

    def _search(
        self,
        grid: CrosswordGrid,
        ordered: List[WordSlot],
        stack: List[_Frame],
        used_words: Set[str],
        result: FillResult,
    ) -> None:
        depth = 0
        while True:
            if depth == len(ordered):
                result.ok = True
                return

            if len(stack) == depth:
                try:
                    stack.append(self._open_frame(grid, ordered[depth], used_words))
                except NoCandidates:
                    result.dead_ends += 1
                    if not stack:
                        result.reason = REASON_EXHAUSTED
                        return
                    depth -= 1
                    continue

            frame = stack[-1]
            frame.retract(used_words)
            if not frame.remaining:
                stack.pop()
                result.backtracks += 1
                if not stack:
                    result.reason = REASON_EXHAUSTED
                    return
                depth -= 1
                continue

            result.steps += 1
            if result.steps > self.step_budget:
                raise StepBudgetExceeded(result.steps)

            entry = frame.remaining.pop()
            frame.undo = grid.place_word_undoable(frame.slot, entry.word)
            frame.entry = entry
            used_words.add(entry.word)
            depth += 1

    def _open_frame(
        self,
        grid: CrosswordGrid,
        slot: WordSlot,
        used_words: Set[str],
    ) -> _Frame:
        candidates = self.index.find_candidates(slot.length, grid.pattern(slot), used_words)
        if not candidates:
            raise NoCandidates(f"No candidates for {slot.direction.value} slot at ({slot.row},{slot.col})")
        self.rng.shuffle(candidates)
        return _Frame(slot=slot, remaining=candidates)


def fill_grid(
    grid: CrosswordGrid,
    slots: Sequence[WordSlot],
    index: DictionaryIndex,
    step_budget: int = DEFAULT_STEP_BUDGET,
    rng: Optional[random.Random] = None,
) -> FillResult:
    return BacktrackingFiller(index, step_budget=step_budget, rng=rng).fill(grid, slots)
