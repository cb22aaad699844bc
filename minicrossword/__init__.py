"""Mini crossword generator for small square grids.

This package exposes the public API surface via:

- ``minicrossword.engine.generator.PuzzleGenerator``: retries topology and fill.
- ``minicrossword.data.dictionary.DictionaryIndex``: length-indexed word pool.
- ``minicrossword.data.dictionary.load_dictionary``: JSON dictionary loader.
"""

from .core.exceptions import CrosswordError, DictionaryLoadError, GenerationExhausted
from .core.models import Clue, Puzzle
from .data.dictionary import DictionaryConfig, DictionaryEntry, DictionaryIndex, load_dictionary
from .engine.generator import GeneratorConfig, PuzzleGenerator, generate_many, generate_puzzle

__all__ = [
    "Clue",
    "CrosswordError",
    "DictionaryConfig",
    "DictionaryEntry",
    "DictionaryIndex",
    "DictionaryLoadError",
    "GenerationExhausted",
    "GeneratorConfig",
    "Puzzle",
    "PuzzleGenerator",
    "generate_many",
    "generate_puzzle",
    "load_dictionary",
]

__version__ = "0.1.0"
