"""Data models supporting the word-search generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .constants import Direction
from .geometry import Bounds, Position


@dataclass
class Cell:
    """Represents a grid cell with metadata."""

    letter: Optional[str] = None
    word_count: int = 0
    is_word_start: bool = False
    is_filler: bool = False

    def is_empty(self) -> bool:
        return self.letter is None


@dataclass(frozen=True)
class Placement:
    """A candidate or committed position for one word.

    ``bounds`` is the content rectangle the puzzle would have once this
    placement is applied.
    """

    position: Position
    direction: Direction
    intersection_count: int
    adjacent_count: int
    bounds: Bounds

    @property
    def intersection_score(self) -> int:
        if self.intersection_count == 0:
            return 0
        return 2 ** (self.intersection_count - 1)

    def positions(self, length: int) -> List[Position]:
        return [self.position.translate(self.direction, i) for i in range(length)]

    def __str__(self) -> str:
        return (
            f"[Placement: position = {self.position}; direction = {self.direction.value}; "
            f"intersection_count = {self.intersection_count}; "
            f"adjacent_count = {self.adjacent_count}; "
            f"intersection score = {self.intersection_score}; {self.bounds}]"
        )
