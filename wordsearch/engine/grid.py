"""Grid representation and helper utilities."""

from __future__ import annotations

import random
from typing import List, Optional

from ..core.constants import FILLER_ALPHABET
from ..core.exceptions import GridConsistencyError
from ..core.geometry import Bounds, Position
from ..core.models import Cell
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class WordSearchGrid:
    """Fixed square field of cells. Rendering crops it to the content bounds."""

    def __init__(self, field_size: int) -> None:
        if field_size <= 0:
            raise ValueError(f"Field size must be positive, got {field_size}")
        self.field_size = field_size
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(field_size)] for _ in range(field_size)
        ]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains(self, position: Position) -> bool:
        return position.within(self.field_size)

    def cell(self, position: Position) -> Cell:
        if not self.contains(position):
            raise ValueError(f"Position {position} outside field of size {self.field_size}")
        return self.cells[position.y][position.x]

    def letter_at(self, position: Position) -> Optional[str]:
        return self.cell(position).letter

    def is_filled(self, position: Position) -> bool:
        return self.cell(position).letter is not None

    def field_bounds(self) -> Bounds:
        last = self.field_size - 1
        return Bounds(Position(0, 0), Position(last, last))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def write(self, position: Position, letter: str, is_word_start: bool = False) -> None:
        """Write one letter of a word, reusing a matching letter if present."""

        cell = self.cell(position)
        if cell.letter is not None and cell.letter != letter:
            raise GridConsistencyError(
                f"Conflicting character at {position}: '{cell.letter}' != '{letter}'"
            )
        cell.letter = letter
        cell.word_count += 1
        if is_word_start:
            cell.is_word_start = True

    def fill_empty(self, bounds: Bounds, rng: random.Random) -> int:
        """Write random filler letters into empty cells of ``bounds``."""

        filled = 0
        for position in bounds.positions():
            cell = self.cell(position)
            if cell.letter is None:
                cell.letter = rng.choice(FILLER_ALPHABET)
                cell.is_filler = True
                filled += 1
        LOGGER.debug("Filled %s empty cells inside %s", filled, bounds)
        return filled
