"""CLI entrypoint for the mini crossword generator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List

from minicrossword.core.exceptions import DictionaryLoadError, GenerationExhausted
from minicrossword.data.dictionary import DictionaryConfig, load_dictionary
from minicrossword.data.short_words import SHORT_WORDS
from minicrossword.engine.generator import ENGINES, GeneratorConfig, PuzzleGenerator, generate_many
from minicrossword.utils.logger import configure_logging, get_logger
from minicrossword.utils.pretty import print_dictionary_stats, print_puzzle


LOGGER = get_logger("minicrossword.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate mini crosswords (5x5 / 6x6) from a word + definition dictionary",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        required=True,
        help="Path to a dictionary JSON list of {word, original, def}",
    )
    parser.add_argument(
        "--short-words",
        action="store_true",
        help="Merge the bundled French 2-3 letter words into the dictionary",
    )
    parser.add_argument(
        "--size",
        type=int,
        action="append",
        dest="sizes",
        help="Allowed grid size (repeatable, default 5 and 6)",
    )
    parser.add_argument("--max-attempts", type=int, default=50, help="Topology attempts before giving up")
    parser.add_argument("--step-budget", type=int, default=20000, help="Fill steps per attempt")
    parser.add_argument(
        "--black-ratio",
        type=float,
        default=0.15,
        help="Fraction of cells turned black",
    )
    parser.add_argument(
        "--black-jitter",
        type=int,
        default=1,
        help="Up to this many extra black cells at random",
    )
    parser.add_argument("--engine", choices=ENGINES, default=ENGINES[0], help="Fill engine")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--count", type=int, default=1, help="Number of puzzles to generate")
    parser.add_argument("--workers", type=int, default=1, help="Parallel generation threads")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--print", dest="print_text", action="store_true", help="Print grid and clues")
    parser.add_argument("--stats", action="store_true", help="Print dictionary statistics and exit")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    if args.count < 1:
        parser.error("--count must be at least 1")

    try:
        index = load_dictionary(DictionaryConfig(path=args.dictionary))
    except DictionaryLoadError as exc:
        LOGGER.error("%s", exc)
        return 1
    if args.short_words:
        index = index.merged(SHORT_WORDS)

    if args.stats:
        print_dictionary_stats(index)
        return 0

    try:
        config = GeneratorConfig(
            sizes=tuple(args.sizes) if args.sizes else (5, 6),
            black_cell_ratio=args.black_ratio,
            black_cell_jitter=args.black_jitter,
            max_attempts=args.max_attempts,
            step_budget=args.step_budget,
            seed=args.seed,
            engine=args.engine,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.count == 1:
        try:
            puzzles = [PuzzleGenerator(index, config).generate()]
        except GenerationExhausted as exc:
            LOGGER.error("%s", exc)
            return 1
    else:
        puzzles = generate_many(index, args.count, config, workers=args.workers)
        if not puzzles:
            LOGGER.error("No puzzle could be generated")
            return 1

    if args.print_text:
        for puzzle in puzzles:
            print_puzzle(puzzle)

    payload: Any
    if len(puzzles) == 1:
        payload = puzzles[0].to_jsonable()
    else:
        payload = [puzzle.to_jsonable() for puzzle in puzzles]
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    elif not args.print_text:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
