import random
import unittest

from minicrossword.core.constants import Direction
from minicrossword.engine.grid import CrosswordGrid, build_topology
from minicrossword.engine.slots import extract_slots

from sample_grids import LAYOUT_5X5, SOLVED_5X5, SOLVED_5X5_WORDS


def _slot_set(slots):
    return {(slot.direction, slot.row, slot.col, slot.length) for slot in slots}


class SlotExtractionTests(unittest.TestCase):
    def test_extracts_known_layout(self) -> None:
        slots = extract_slots(CrosswordGrid.from_rows(LAYOUT_5X5))
        self.assertEqual(
            _slot_set(slots),
            {
                (Direction.ACROSS, 0, 0, 4),
                (Direction.ACROSS, 1, 2, 3),
                (Direction.ACROSS, 2, 0, 3),
                (Direction.ACROSS, 3, 3, 2),
                (Direction.ACROSS, 4, 0, 4),
                (Direction.DOWN, 0, 0, 3),
                (Direction.DOWN, 2, 1, 3),
                (Direction.DOWN, 0, 2, 3),
                (Direction.DOWN, 0, 3, 2),
                (Direction.DOWN, 3, 3, 2),
                (Direction.DOWN, 1, 4, 3),
            },
        )

    def test_slot_patterns_spell_words(self) -> None:
        grid = CrosswordGrid.from_rows(SOLVED_5X5)
        words = {"".join(grid.pattern(slot)) for slot in extract_slots(grid)}
        self.assertEqual(words, set(SOLVED_5X5_WORDS))

    def test_open_grid_has_full_length_slots(self) -> None:
        slots = extract_slots(CrosswordGrid(5))
        self.assertEqual(len(slots), 10)
        self.assertTrue(all(slot.length == 5 for slot in slots))
        self.assertEqual(sum(1 for s in slots if s.direction == Direction.ACROSS), 5)

    def test_single_cells_are_dropped(self) -> None:
        grid = CrosswordGrid.from_rows([".#.", "#.#", ".#."])
        self.assertEqual(extract_slots(grid), [])

    def test_random_grids_respect_invariants(self) -> None:
        rng = random.Random(11)
        for _ in range(25):
            size = rng.choice((5, 6))
            grid = build_topology(size, rng.randint(0, 8), rng)
            slots = extract_slots(grid)
            for slot in slots:
                self.assertGreaterEqual(slot.length, 2)
                for row, col in slot.cells:
                    self.assertTrue(grid.is_open(row, col))
                dr, dc = slot.direction.step
                self.assertFalse(grid.is_open(slot.row - dr, slot.col - dc))
                end_row, end_col = slot.cells[-1]
                self.assertFalse(grid.is_open(end_row + dr, end_col + dc))
            self.assertEqual(_slot_set(slots), _slot_set(extract_slots(grid)))

    def test_extraction_does_not_touch_grid(self) -> None:
        grid = CrosswordGrid.from_rows(LAYOUT_5X5)
        before = grid.to_rows()
        extract_slots(grid)
        self.assertEqual(grid.to_rows(), before)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
