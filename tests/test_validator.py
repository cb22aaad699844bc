import unittest

from minicrossword.core.models import Clue
from minicrossword.engine.grid import CrosswordGrid
from minicrossword.engine.numbering import number_clues
from minicrossword.engine.slots import extract_slots
from minicrossword.engine.validator import PuzzleValidator

from sample_grids import SOLVED_5X5, SOLVED_5X5_WORDS, index_of


class PuzzleValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.index = index_of(SOLVED_5X5_WORDS)
        self.validator = PuzzleValidator(self.index)
        self.grid = CrosswordGrid.from_rows(SOLVED_5X5)
        self.slots = extract_slots(self.grid)
        for slot in self.slots:
            slot.word = "".join(self.grid.pattern(slot))
            slot.definition = self.index.get(slot.word).definition

    def test_valid_puzzle_passes(self) -> None:
        result = self.validator.validate(self.grid, self.slots, number_clues(self.grid, self.slots))
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_unknown_word_fails(self) -> None:
        validator = PuzzleValidator(index_of(SOLVED_5X5_WORDS[:-1]))
        result = validator.validate(self.grid, self.slots, number_clues(self.grid, self.slots))
        self.assertFalse(result.ok)
        self.assertIn("SEA", result.messages[0])

    def test_disagreeing_slot_word_fails(self) -> None:
        definitions = number_clues(self.grid, self.slots)
        self.slots[0].word = "RIEN"
        result = self.validator.validate(self.grid, self.slots, definitions)
        self.assertFalse(result.ok)

    def test_duplicate_word_fails(self) -> None:
        grid = CrosswordGrid.from_rows(["OR#", "###", "OR#"])
        slots = extract_slots(grid)
        for slot in slots:
            slot.word = "OR"
        validator = PuzzleValidator(index_of(["OR"]))
        result = validator.validate(grid, slots, number_clues(grid, slots))
        self.assertFalse(result.ok)
        self.assertIn("Duplicate", result.messages[0])

    def test_empty_cell_fails(self) -> None:
        rows = list(SOLVED_5X5)
        rows[0] = "PAI.#"
        grid = CrosswordGrid.from_rows(rows)
        result = self.validator.validate(grid, self.slots, number_clues(self.grid, self.slots))
        self.assertFalse(result.ok)
        self.assertIn("Unfilled", result.messages[0])

    def test_open_cell_outside_every_slot_is_allowed(self) -> None:
        grid = CrosswordGrid.from_rows(["SI#", "ES#", "##."])
        slots = extract_slots(grid)
        for slot in slots:
            slot.word = "".join(grid.pattern(slot))
        validator = PuzzleValidator(index_of(["SI", "ES", "SE", "IS"]))
        result = validator.validate(grid, slots, number_clues(grid, slots))
        self.assertTrue(result.ok)

    def test_bad_numbering_fails(self) -> None:
        definitions = number_clues(self.grid, self.slots)
        first = definitions["across"][0]
        definitions["across"][0] = Clue(
            number=42,
            clue=first.clue,
            answer=first.answer,
            length=first.length,
            row=first.row,
            col=first.col,
            direction=first.direction,
        )
        result = self.validator.validate(self.grid, self.slots, definitions)
        self.assertFalse(result.ok)

    def test_missing_clue_fails(self) -> None:
        definitions = number_clues(self.grid, self.slots)
        definitions["down"].pop()
        result = self.validator.validate(self.grid, self.slots, definitions)
        self.assertFalse(result.ok)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
