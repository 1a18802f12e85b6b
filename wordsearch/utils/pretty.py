"""Pretty-print helpers for word-search puzzles."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import SpreadsheetStyle
from ..core.geometry import Position

if TYPE_CHECKING:
    from ..engine.puzzle import Puzzle


EMPTY_SYMBOL = "-"
SPREADSHEET_OFFSET = 100


def describe_puzzle(puzzle: Puzzle) -> str:
    return (
        f"Puzzle: word count = {len(puzzle.words)}; size = {puzzle.size}; {puzzle.bounds}; "
        f"placement count = {len(puzzle.placements)}, "
        f"intersection score = {puzzle.intersection_score}"
    )


def format_puzzle(puzzle: Puzzle) -> str:
    """Upper-case letters inside the bounds, space separated."""

    lines = []
    for row in puzzle.rows():
        lines.append(" ".join((letter or EMPTY_SYMBOL).upper() for letter in row))
    return "\n".join(lines)


def format_placements(puzzle: Puzzle) -> str:
    return "\n".join(f'"{word}" at {placement}.' for word, placement in puzzle.sorted_placements())


def pretty_print_puzzle(puzzle: Puzzle, *, show_placements: bool = True, stream=None) -> None:
    """Print the description line, optionally the placements, then the grid."""

    stream = stream or sys.stdout
    print(describe_puzzle(puzzle), file=stream)
    if show_placements:
        print("Placements:", file=stream)
        for line in format_placements(puzzle).splitlines():
            print(f"  {line}", file=stream)
    print(file=stream)
    print(format_puzzle(puzzle), file=stream)


def _marker(puzzle: Puzzle, position: Position, style: SpreadsheetStyle) -> str:
    cell = puzzle.grid.cell(position)
    if style == SpreadsheetStyle.DENSITY:
        return str(cell.word_count)
    if cell.word_count == 0:
        return "r"
    return "sw" if cell.is_word_start else "w"


def format_for_spreadsheet(
    puzzle: Puzzle, style: SpreadsheetStyle, offset: int = SPREADSHEET_OFFSET
) -> str:
    """Tab separated rows: letters on the left, per-cell markers ``offset`` columns in.

    Empty cells are filled with random letters first so the sheet is playable.
    """

    puzzle.random_fill()
    bounds = puzzle.bounds
    if bounds is None:
        return ""
    padding = "\t" * max(1, offset - bounds.width + 1)
    lines: List[str] = []
    for y in range(bounds.y_min, bounds.y_max + 1):
        left = []
        right = []
        for x in range(bounds.x_min, bounds.x_max + 1):
            position = Position(x, y)
            left.append((puzzle.letter_at(position) or EMPTY_SYMBOL).upper())
            right.append(_marker(puzzle, position, style))
        lines.append("\t".join(left) + padding + "\t".join(right))
    return "\n".join(lines)
