"""CLI entrypoint for the word-search puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from io import StringIO
from pathlib import Path
from typing import List

from wordsearch.core.constants import DIRECTIONS, Direction, Objective, SpreadsheetStyle
from wordsearch.core.exceptions import WordSearchError
from wordsearch.engine.optimizer import OptimizerConfig, PuzzleOptimizer
from wordsearch.utils.logger import configure_logging
from wordsearch.utils.pretty import format_for_spreadsheet, pretty_print_puzzle


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def parse_directions(value: str) -> List[Direction]:
    try:
        return [Direction(part.strip().upper()) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate word-search puzzles",
    )
    parser.add_argument("--words", nargs="+", metavar="WORD", help="Words to hide")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--expansion",
        type=float,
        default=0.2,
        help="0.0 picks the most compact placement for each word, 1.0 the loosest",
    )
    parser.add_argument(
        "--directions",
        type=parse_directions,
        default=list(DIRECTIONS),
        help="Comma separated compass directions, e.g. E,SE,S (default: all eight)",
    )
    parser.add_argument(
        "--objective",
        type=str,
        choices=[o.value for o in Objective],
        default=Objective.COMPACTNESS.value,
        help="Keep the smallest puzzle or the most interlocked one",
    )
    parser.add_argument("--attempts", type=int, default=10, help="Number of independent builds")
    parser.add_argument(
        "--time-budget",
        type=float,
        default=None,
        help="Stop starting new builds after this many seconds",
    )
    parser.add_argument("--workers", type=int, default=1, help="Worker processes for parallel builds")
    parser.add_argument("--max-dimension", type=int, default=30, help="Longest allowed word")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"] + [s.value for s in SpreadsheetStyle],
        default="text",
        help="Output format; spreadsheet styles print tab separated rows",
    )
    parser.add_argument("--fill", action="store_true", help="Fill empty cells with random letters")
    parser.add_argument("--output", type=Path, help="Optional path to write the output to")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    words: List[str] = []
    if args.words:
        words.extend(args.words)
    if args.words_file:
        words.extend(parse_words_file(args.words_file))
    if not words:
        parser.error("provide --words and/or --words-file")

    try:
        config = OptimizerConfig(
            expansion=args.expansion,
            directions=tuple(args.directions),
            objective=Objective(args.objective),
            attempts=args.attempts,
            time_budget_seconds=args.time_budget,
            seed=args.seed,
            workers=args.workers,
            max_dimension=args.max_dimension,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        puzzle = PuzzleOptimizer(config).find_best(words)
    except WordSearchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.fill:
        puzzle.random_fill()

    if args.format == "json":
        output_text = json.dumps(puzzle.to_jsonable(), ensure_ascii=False, indent=2)
    elif args.format == "text":
        buffer = StringIO()
        pretty_print_puzzle(puzzle, stream=buffer)
        output_text = buffer.getvalue()
    else:
        output_text = format_for_spreadsheet(puzzle, SpreadsheetStyle(args.format))

    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
