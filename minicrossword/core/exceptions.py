"""Custom exception hierarchy for mini crossword generation."""


class CrosswordError(Exception):
    """Base exception for generator failures."""


class DictionaryLoadError(CrosswordError):
    """Raised when the dictionary JSON cannot be read or parsed."""


class SlotPlacementError(CrosswordError):
    """Raised when a word cannot be written into a slot."""


class NoCandidates(CrosswordError):
    """No dictionary word fits a slot's current pattern."""


class StepBudgetExceeded(CrosswordError):
    """The fill search used up its step budget."""

    def __init__(self, steps: int) -> None:
        super().__init__(f"Step budget exceeded after {steps} steps")
        self.steps = steps


class ValidationError(CrosswordError):
    """Raised when the puzzle integrity checks fail."""


class GenerationExhausted(CrosswordError):
    """Raised when every topology attempt failed to produce a puzzle.

    The dictionary is too sparse for the requested sizes/density. Retrying
    with the same dictionary and parameters is unlikely to help.
    """

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Failed to generate a valid puzzle after {attempts} attempts. "
            "Add more words to the dictionary."
        )
        self.attempts = attempts
