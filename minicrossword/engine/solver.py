"""CP-SAT grid filler using OR-Tools.

Drop-in alternative to :class:`~minicrossword.engine.filler.BacktrackingFiller`
with the same contract, bounded by wall-clock time instead of steps.
"""

from __future__ import annotations

import random
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.exceptions import CrosswordError, NoCandidates
from ..core.models import WordSlot
from ..data.dictionary import DictionaryIndex
from ..utils.logger import get_logger
from .filler import REASON_EXHAUSTED, FillResult
from .grid import CrosswordGrid

LOGGER = get_logger(__name__)

REASON_TIMEOUT = "timeout"


def _letter_value(letter: str) -> int:
    return ord(letter) - ord("A")


class CpSatFiller:
    """Fills every slot in one CP-SAT model: table constraints plus uniqueness."""

    def __init__(
        self,
        index: DictionaryIndex,
        timeout: float = 5.0,
        rng: Optional[random.Random] = None,
        num_workers: int = 1,
    ) -> None:
        self.index = index
        self.timeout = timeout
        self.rng = rng or random.Random()
        self.num_workers = num_workers

    def fill(self, grid: CrosswordGrid, slots: Sequence[WordSlot]) -> FillResult:
        for slot in slots:
            slot.word = None
            slot.definition = None
        if not slots:
            return FillResult(ok=True)

        try:
            solution = self._solve(grid, slots)
        except NoCandidates as exc:
            LOGGER.debug("CP-SAT skipped: %s", exc)
            return FillResult(ok=False, dead_ends=1, reason=REASON_EXHAUSTED)
        if solution is None:
            return FillResult(ok=False, reason=REASON_TIMEOUT)
        if not solution:
            return FillResult(ok=False, reason=REASON_EXHAUSTED)

        for slot, word in solution:
            entry = self.index.get(word)
            if entry is None:
                raise CrosswordError(f"CP-SAT produced '{word}', which is not in the dictionary")
            grid.place_word_undoable(slot, word)
            slot.word = entry.word
            slot.definition = entry.definition
        return FillResult(ok=True, steps=len(solution))

    def _solve(
        self,
        grid: CrosswordGrid,
        slots: Sequence[WordSlot],
    ) -> Optional[List[Tuple[WordSlot, str]]]:
        """Return ``(slot, word)`` pairs, ``[]`` if infeasible, ``None`` on timeout."""

        model = cp_model.CpModel()

        # ------------------------------------------------------------------
        # Cell letter variables; letters already on the grid stay constants
        # ------------------------------------------------------------------
        variables: Dict[Tuple[int, int], cp_model.IntVar] = {}
        fixed: Dict[Tuple[int, int], int] = {}
        for slot in slots:
            for r, c in slot.cells:
                if (r, c) in variables or (r, c) in fixed:
                    continue
                letter = grid.cell(r, c).letter
                if letter:
                    fixed[(r, c)] = _letter_value(letter)
                else:
                    variables[(r, c)] = model.new_int_var(0, 25, f"L_{r}_{c}")

        # ------------------------------------------------------------------
        # One table constraint per slot
        # ------------------------------------------------------------------
        for slot in slots:
            candidates = self.index.find_candidates(slot.length, grid.pattern(slot))
            if not candidates:
                raise NoCandidates(
                    f"No candidates for {slot.direction.value} slot at ({slot.row},{slot.col})"
                )
            open_positions = [i for i, cell in enumerate(slot.cells) if cell in variables]
            if not open_positions:
                continue
            tuples = [
                [_letter_value(entry.word[i]) for i in open_positions] for entry in candidates
            ]
            self.rng.shuffle(tuples)
            model.add_allowed_assignments(
                [variables[slot.cells[i]] for i in open_positions], tuples
            )

        # ------------------------------------------------------------------
        # Uniqueness between slots of equal length
        # ------------------------------------------------------------------
        for first, second in combinations(slots, 2):
            if first.length == second.length:
                self._add_differ_constraint(model, variables, fixed, first, second)

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.timeout
        solver.parameters.num_workers = self.num_workers
        solver.parameters.random_seed = self.rng.randint(0, 2**31 - 1)

        LOGGER.debug(
            "CP-SAT: %d slots, %d cell vars, solving (timeout=%0.1fs)",
            len(slots),
            len(variables),
            self.timeout,
        )
        status = solver.solve(model)
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            LOGGER.debug("CP-SAT: no solution (status=%s)", solver.status_name(status))
            return None if status == cp_model.UNKNOWN else []

        def letter_at(cell: Tuple[int, int]) -> str:
            value = fixed[cell] if cell in fixed else solver.value(variables[cell])
            return chr(value + ord("A"))

        return [(slot, "".join(letter_at(cell) for cell in slot.cells)) for slot in slots]

    @staticmethod
    def _add_differ_constraint(model, variables, fixed, first: WordSlot, second: WordSlot) -> None:
        """Ensure two same-length slots cannot spell the same word."""

        diffs = []
        for left, right in zip(first.cells, second.cells):
            if left == right:
                continue
            if left in fixed and right in fixed:
                if fixed[left] != fixed[right]:
                    return
                continue
            a = variables[left] if left in variables else fixed[left]
            b = variables[right] if right in variables else fixed[right]
            differs = model.new_bool_var(f"d_{left}_{right}")
            model.add(a != b).only_enforce_if(differs)
            model.add(a == b).only_enforce_if(~differs)
            diffs.append(differs)
        if not diffs:
            # Every position is already forced equal: the pair cannot differ.
            clash = model.new_bool_var(f"clash_{first.key}_{second.key}")
            model.add_bool_or([clash])
            model.add_bool_or([~clash])
            return
        model.add_bool_or(diffs)
