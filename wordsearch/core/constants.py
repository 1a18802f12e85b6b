"""Shared constants and enumerations for the word-search generator."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


PUZZLE_SIZE_MAX = 30
FIELD_SIZE_MULT = 2
FILLER_ALPHABET = "abcdefghijklmnopqrstuvwxyz"


class Direction(str, Enum):
    """Compass directions a word can run in. ``y`` grows downwards."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.NE: (1, -1),
    Direction.E: (1, 0),
    Direction.SE: (1, 1),
    Direction.S: (0, 1),
    Direction.SW: (-1, 1),
    Direction.W: (-1, 0),
    Direction.NW: (-1, -1),
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.NE: Direction.SW,
    Direction.E: Direction.W,
    Direction.SE: Direction.NW,
    Direction.S: Direction.N,
    Direction.SW: Direction.NE,
    Direction.W: Direction.E,
    Direction.NW: Direction.SE,
}

DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)


class Objective(str, Enum):
    """What the optimizer (and the per-word selector) tries to improve."""

    COMPACTNESS = "compactness"
    INTERSECTIONS = "intersections"


class SpreadsheetStyle(str, Enum):
    """Right-hand annotation printed next to the letters in spreadsheet export."""

    DENSITY = "density"
    HINT = "hint"
    REVEAL = "reveal"
