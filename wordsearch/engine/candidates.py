"""Evaluation of a single (word, anchor, direction) placement."""

from __future__ import annotations

from typing import Optional

from ..core.constants import DIRECTIONS, Direction
from ..core.geometry import Bounds, Position
from ..core.models import Placement
from .grid import WordSearchGrid


def count_adjacent(grid: WordSearchGrid, position: Position, direction: Direction) -> int:
    """Count filled cells touching ``position`` from the side of a run in ``direction``.

    The run's own axis (``direction`` and its opposite) is excluded, leaving
    the six orthogonal and diagonal neighbours.
    """

    excluded = (direction, direction.opposite())
    count = 0
    for other in DIRECTIONS:
        if other in excluded:
            continue
        neighbor = position.neighbor(other, grid.field_size)
        if neighbor is not None and grid.is_filled(neighbor):
            count += 1
    return count


def fits_on_field(grid: WordSearchGrid, start: Position, length: int, direction: Direction) -> bool:
    dx, dy = direction.offset
    x_end = start.x + (length - 1) * dx
    y_end = start.y + (length - 1) * dy
    return (
        grid.contains(start)
        and 0 <= x_end < grid.field_size
        and 0 <= y_end < grid.field_size
    )


def try_placement(
    grid: WordSearchGrid,
    bounds: Optional[Bounds],
    word: str,
    char_index: int,
    anchor: Position,
    direction: Direction,
) -> Optional[Placement]:
    """Score placing ``word`` with its ``char_index``-th letter on ``anchor``.

    Returns ``None`` when the word would leave the field or disagree with a
    letter already on the grid. ``bounds`` is the current content rectangle
    (``None`` for an empty puzzle). The grid is not modified.
    """

    if not word:
        return None
    start = anchor.rewind(char_index, direction, grid.field_size)
    if start is None:
        return None
    if not fits_on_field(grid, start, len(word), direction):
        return None

    intersection_count = 0
    adjacent_count = 0
    working = Bounds.around(start) if bounds is None else bounds.grow(start)
    dx, dy = direction.offset
    x, y = start.x, start.y
    for letter in word:
        position = Position.checked(x, y, grid.field_size)
        existing = grid.letter_at(position)
        if existing is not None and existing != letter:
            return None
        if existing == letter:
            intersection_count += 1
        else:
            adjacent_count += count_adjacent(grid, position, direction)
        working = working.grow(position)
        x += dx
        y += dy

    return Placement(
        position=start,
        direction=direction,
        intersection_count=intersection_count,
        adjacent_count=adjacent_count,
        bounds=working,
    )
