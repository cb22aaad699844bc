"""Main puzzle generator orchestration.

Each attempt builds a fresh random topology, extracts its slots and runs the
fill engine. A failed attempt is thrown away entirely; the next one starts
from a new grid. Only when every attempt failed does the caller see
:class:`~minicrossword.core.exceptions.GenerationExhausted`.
"""

from __future__ import annotations

import random
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple, Union

from ..core.constants import (
    DEFAULT_BLACK_CELL_JITTER,
    DEFAULT_BLACK_CELL_RATIO,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_SIZES,
    DEFAULT_STEP_BUDGET,
)
from ..core.exceptions import GenerationExhausted, ValidationError
from ..core.models import Puzzle, WordSlot
from ..data.dictionary import DictionaryEntry, DictionaryIndex
from ..utils.logger import get_logger
from .filler import FillResult, fill_grid
from .grid import CrosswordGrid, black_cell_count, build_topology
from .numbering import number_clues
from .slots import extract_slots
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)

ENGINE_BACKTRACKING = "backtracking"
ENGINE_CP_SAT = "cp-sat"
ENGINES = (ENGINE_BACKTRACKING, ENGINE_CP_SAT)


@dataclass
class GeneratorConfig:
    sizes: Tuple[int, ...] = DEFAULT_SIZES
    black_cell_ratio: float = DEFAULT_BLACK_CELL_RATIO
    black_cell_jitter: int = DEFAULT_BLACK_CELL_JITTER
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    step_budget: int = DEFAULT_STEP_BUDGET
    seed: Optional[int] = None
    engine: str = ENGINE_BACKTRACKING
    cp_sat_timeout: float = 5.0
    validate: bool = True

    def __post_init__(self) -> None:
        self.sizes = tuple(self.sizes)
        if not self.sizes or any(size < 2 for size in self.sizes):
            raise ValueError(f"Grid sizes must be at least 2, got {self.sizes}")
        if not 0.0 <= self.black_cell_ratio < 1.0:
            raise ValueError("black_cell_ratio must be in [0, 1)")
        if self.black_cell_jitter < 0:
            raise ValueError("black_cell_jitter must not be negative")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.step_budget < 0:
            raise ValueError("step_budget must not be negative")
        if self.engine not in ENGINES:
            raise ValueError(f"Unknown engine '{self.engine}', expected one of {ENGINES}")
        if self.cp_sat_timeout <= 0:
            raise ValueError("cp_sat_timeout must be positive")


class PuzzleGenerator:
    """Retries topology + fill until a valid puzzle comes out."""

    def __init__(
        self,
        index: DictionaryIndex,
        config: Optional[GeneratorConfig] = None,
    ) -> None:
        self.index = index
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)
        self.validator = PuzzleValidator(index)
        LOGGER.debug("Generator ready: %s words, lengths %s", len(index), index.lengths())

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> Puzzle:
        for attempt in range(1, self.config.max_attempts + 1):
            size = self.rng.choice(self.config.sizes)
            black_cells = min(
                black_cell_count(
                    size,
                    self.config.black_cell_ratio,
                    self.config.black_cell_jitter,
                    self.rng,
                ),
                size * size,
            )
            grid = build_topology(size, black_cells, self.rng)
            slots = extract_slots(grid)
            LOGGER.debug(
                "Attempt %s/%s: %sx%s grid, %s black cells, %s slots",
                attempt,
                self.config.max_attempts,
                size,
                size,
                black_cells,
                len(slots),
            )
            if not slots:
                LOGGER.debug("Attempt %s has no slots; retrying", attempt)
                continue

            result = self._fill(grid, slots)
            if not result.ok:
                LOGGER.debug(
                    "Attempt %s failed (%s) after %s steps", attempt, result.reason, result.steps
                )
                continue

            try:
                puzzle = self._assemble(grid, slots, attempt)
            except ValidationError as exc:
                LOGGER.warning("Attempt %s produced an invalid puzzle: %s", attempt, exc)
                continue
            LOGGER.info(
                "Generated %sx%s puzzle with %s words on attempt %s (%s steps)",
                size,
                size,
                len(slots),
                attempt,
                result.steps,
            )
            return puzzle

        LOGGER.warning("Giving up after %s attempts", self.config.max_attempts)
        raise GenerationExhausted(self.config.max_attempts)

    # ------------------------------------------------------------------
    # Attempt helpers
    # ------------------------------------------------------------------
    def _fill(self, grid: CrosswordGrid, slots: List[WordSlot]) -> FillResult:
        if self.config.engine == ENGINE_CP_SAT:
            from .solver import CpSatFiller

            filler = CpSatFiller(self.index, timeout=self.config.cp_sat_timeout, rng=self.rng)
            return filler.fill(grid, slots)
        return fill_grid(grid, slots, self.index, step_budget=self.config.step_budget, rng=self.rng)

    def _assemble(self, grid: CrosswordGrid, slots: List[WordSlot], attempt: int) -> Puzzle:
        definitions = number_clues(grid, slots)
        isolated = grid.empty_count()
        if isolated:
            LOGGER.debug("%s open cells belong to no slot and stay empty", isolated)
        if self.config.validate:
            validation = self.validator.validate(grid, slots, definitions)
            if not validation.ok:
                raise ValidationError("; ".join(validation.messages))
        return Puzzle(
            grid=tuple(tuple(row) for row in grid.to_rows()),
            definitions=definitions,
            id=int(time.time() * 1000),
            attempts=attempt,
            seed=self.config.seed,
        )


def _as_index(source: Union[DictionaryIndex, Iterable[DictionaryEntry]]) -> DictionaryIndex:
    return source if isinstance(source, DictionaryIndex) else DictionaryIndex(source)


def generate_puzzle(
    source: Union[DictionaryIndex, Iterable[DictionaryEntry]],
    config: Optional[GeneratorConfig] = None,
) -> Puzzle:
    """Generate one puzzle from an index or a plain sequence of entries."""

    return PuzzleGenerator(_as_index(source), config).generate()


def generate_many(
    source: Union[DictionaryIndex, Iterable[DictionaryEntry]],
    count: int,
    config: Optional[GeneratorConfig] = None,
    workers: int = 1,
) -> List[Puzzle]:
    """Generate up to ``count`` independent puzzles, ``workers`` at a time.

    Each job gets its own generator and seed; the index is shared read-only.
    Jobs that exhaust their attempts are logged and left out of the result.
    """

    index = _as_index(source)
    base = config or GeneratorConfig()
    seeder = random.Random(base.seed)
    configs = [replace(base, seed=seeder.randint(0, 1_000_000)) for _ in range(count)]

    finished: List[Tuple[int, Puzzle]] = []
    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futures = {
            executor.submit(PuzzleGenerator(index, job_config).generate): job_no
            for job_no, job_config in enumerate(configs, start=1)
        }
        for future in as_completed(futures):
            job_no = futures[future]
            try:
                finished.append((job_no, future.result()))
            except GenerationExhausted as exc:
                LOGGER.warning("Puzzle %s/%s failed: %s", job_no, count, exc)
    LOGGER.info("Generated %s/%s puzzles", len(finished), count)
    return [puzzle for _, puzzle in sorted(finished, key=lambda item: item[0])]
