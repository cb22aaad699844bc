import unittest
from unittest.mock import patch

from minicrossword.core.exceptions import GenerationExhausted
from minicrossword.core.models import Puzzle
from minicrossword.engine.generator import (
    GeneratorConfig,
    PuzzleGenerator,
    generate_many,
    generate_puzzle,
)
from minicrossword.engine.grid import CrosswordGrid

from sample_grids import (
    DISTRACTORS,
    FILLABLE_2X2_WORDS,
    LAYOUT_5X5,
    SOLVED_5X5_WORDS,
    SQUARE_3X3_WORDS,
    entries,
    index_of,
)


OPEN_3X3 = GeneratorConfig(sizes=(3,), black_cell_ratio=0.0, black_cell_jitter=0, max_attempts=5)


def assert_puzzle_properties(test: unittest.TestCase, puzzle: Puzzle) -> None:
    clues = puzzle.across + puzzle.down
    answers = [clue.answer for clue in clues]
    test.assertEqual(len(answers), len(set(answers)))

    # Each answer matches the grid, so every crossing agrees.
    for clue in puzzle.across:
        test.assertEqual("".join(puzzle.grid[clue.row][clue.col + i] for i in range(clue.length)), clue.answer)
    for clue in puzzle.down:
        test.assertEqual("".join(puzzle.grid[clue.row + i][clue.col] for i in range(clue.length)), clue.answer)

    points = {}
    for clue in clues:
        test.assertEqual(points.setdefault(clue.number, (clue.row, clue.col)), (clue.row, clue.col))
    numbers = sorted(points)
    test.assertEqual(numbers, list(range(1, len(numbers) + 1)))
    test.assertEqual([points[n] for n in numbers], sorted(points.values()))

    test.assertTrue(all(len(row) == puzzle.size for row in puzzle.grid))


class GeneratorConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = GeneratorConfig()
        self.assertEqual(config.sizes, (5, 6))
        self.assertAlmostEqual(config.black_cell_ratio, 0.15)
        self.assertEqual(config.black_cell_jitter, 1)
        self.assertEqual(config.max_attempts, 50)
        self.assertEqual(config.step_budget, 20000)
        self.assertEqual(config.engine, "backtracking")

    def test_invalid_values_rejected(self) -> None:
        for kwargs in (
            {"sizes": ()},
            {"sizes": (1,)},
            {"black_cell_ratio": 1.0},
            {"black_cell_jitter": -1},
            {"max_attempts": 0},
            {"step_budget": -5},
            {"engine": "magic"},
            {"cp_sat_timeout": 0},
        ):
            with self.subTest(**kwargs), self.assertRaises(ValueError):
                GeneratorConfig(**kwargs)


class PuzzleGeneratorTests(unittest.TestCase):
    def test_generates_open_square(self) -> None:
        puzzle = PuzzleGenerator(index_of(SQUARE_3X3_WORDS), OPEN_3X3).generate()

        self.assertEqual(puzzle.size, 3)
        self.assertEqual(puzzle.attempts, 1)
        self.assertEqual(sorted(puzzle.answers()), sorted(SQUARE_3X3_WORDS))
        assert_puzzle_properties(self, puzzle)
        self.assertEqual([c.number for c in puzzle.across], [1, 4, 5])

    def test_generate_puzzle_accepts_plain_entries(self) -> None:
        puzzle = generate_puzzle(entries(SQUARE_3X3_WORDS), OPEN_3X3)
        self.assertEqual(len(puzzle.answers()), 6)

    def test_same_seed_same_puzzle(self) -> None:
        index = index_of(SQUARE_3X3_WORDS + ["TAR", "OAR"])
        config = GeneratorConfig(sizes=(3,), black_cell_ratio=0.0, black_cell_jitter=0, seed=99)
        first = PuzzleGenerator(index, config).generate()
        second = PuzzleGenerator(index, config).generate()
        self.assertEqual(first.grid, second.grid)
        self.assertEqual(first.seed, 99)

    def test_fixed_layout_puzzle_properties(self) -> None:
        index = index_of(SOLVED_5X5_WORDS + DISTRACTORS)
        config = GeneratorConfig(sizes=(5,), step_budget=100000, seed=4)
        with patch(
            "minicrossword.engine.generator.build_topology",
            side_effect=lambda size, black_cells, rng: CrosswordGrid.from_rows(LAYOUT_5X5),
        ):
            puzzle = PuzzleGenerator(index, config).generate()

        assert_puzzle_properties(self, puzzle)
        self.assertEqual(len(puzzle.across), 5)
        self.assertEqual(len(puzzle.down), 6)
        for clue in puzzle.across + puzzle.down:
            self.assertEqual(clue.clue, f"Definition of {clue.answer}")

    def test_retries_with_new_topology(self) -> None:
        index = index_of(SOLVED_5X5_WORDS + DISTRACTORS)
        layouts = iter([CrosswordGrid(5), CrosswordGrid.from_rows(LAYOUT_5X5)])
        config = GeneratorConfig(sizes=(5,), step_budget=100000, max_attempts=3, seed=1)
        with patch(
            "minicrossword.engine.generator.build_topology",
            side_effect=lambda size, black_cells, rng: next(layouts),
        ):
            puzzle = PuzzleGenerator(index, config).generate()
        self.assertEqual(puzzle.attempts, 2)

    def test_isolated_open_cell_stays_empty(self) -> None:
        config = GeneratorConfig(sizes=(3,), max_attempts=3, seed=2)
        with patch(
            "minicrossword.engine.generator.build_topology",
            side_effect=lambda size, black_cells, rng: CrosswordGrid.from_rows(["..#", "..#", "##."]),
        ):
            puzzle = PuzzleGenerator(index_of(FILLABLE_2X2_WORDS), config).generate()

        self.assertEqual(puzzle.attempts, 1)
        self.assertEqual(puzzle.grid[2], ("#", "#", ""))
        self.assertEqual(sorted(puzzle.answers()), sorted(FILLABLE_2X2_WORDS))
        self.assertEqual(puzzle.to_jsonable()["grid"][2][2], "")
        assert_puzzle_properties(self, puzzle)

    def test_exhaustion_when_lengths_never_match(self) -> None:
        index = index_of(["LAC", "MER", "SEL", "SOL", "RUE"])
        config = GeneratorConfig(sizes=(5,), black_cell_ratio=0.0, black_cell_jitter=0, max_attempts=7)
        with self.assertRaises(GenerationExhausted) as ctx:
            PuzzleGenerator(index, config).generate()
        self.assertEqual(ctx.exception.attempts, 7)

    def test_exhaustion_with_empty_dictionary(self) -> None:
        with self.assertRaises(GenerationExhausted):
            generate_puzzle([], GeneratorConfig(max_attempts=3))

    def test_to_jsonable_shape(self) -> None:
        puzzle = PuzzleGenerator(index_of(SQUARE_3X3_WORDS), OPEN_3X3).generate()
        payload = puzzle.to_jsonable()
        self.assertEqual(set(payload), {"grid", "definitions", "id"})
        self.assertEqual(set(payload["definitions"]), {"across", "down"})
        self.assertEqual(len(payload["grid"]), 3)
        self.assertEqual(
            set(payload["definitions"]["across"][0]),
            {"number", "clue", "answer", "length", "row", "col"},
        )


class GenerateManyTests(unittest.TestCase):
    def test_generates_requested_count_in_parallel(self) -> None:
        index = index_of(SQUARE_3X3_WORDS)
        puzzles = generate_many(index, 4, OPEN_3X3, workers=2)
        self.assertEqual(len(puzzles), 4)
        for puzzle in puzzles:
            assert_puzzle_properties(self, puzzle)

    def test_failed_jobs_are_skipped(self) -> None:
        index = index_of(["LAC"])
        puzzles = generate_many(index, 2, OPEN_3X3, workers=2)
        self.assertEqual(puzzles, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
