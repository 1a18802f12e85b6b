"""Geometry value types: positions on the field and bounding rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .constants import Direction


@dataclass(frozen=True, order=True)
class Position:
    """A cell coordinate on the square working field."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Position outside the field: ({self.x}, {self.y})")

    @classmethod
    def checked(cls, x: int, y: int, field_size: int) -> "Position":
        """Build a position, rejecting coordinates outside ``[0, field_size)``."""

        if not (0 <= x < field_size and 0 <= y < field_size):
            raise ValueError(f"Position ({x}, {y}) outside field of size {field_size}")
        return cls(x, y)

    def within(self, field_size: int) -> bool:
        return self.x < field_size and self.y < field_size

    def translate(self, direction: Direction, steps: int = 1) -> "Position":
        dx, dy = direction.offset
        return Position(self.x + dx * steps, self.y + dy * steps)

    def neighbor(self, direction: Direction, field_size: int) -> Optional["Position"]:
        """Return the adjacent position, or ``None`` when it falls off the field."""

        dx, dy = direction.offset
        x, y = self.x + dx, self.y + dy
        if 0 <= x < field_size and 0 <= y < field_size:
            return Position.checked(x, y, field_size)
        return None

    def rewind(self, char_index: int, direction: Direction, field_size: int) -> Optional["Position"]:
        """Return where a word starts if its ``char_index``-th letter sits here.

        ``None`` means the start would lie outside ``[0, field_size)``, which
        rules the placement out before the grid is even inspected.
        """

        dx, dy = direction.offset
        x = self.x - char_index * dx
        y = self.y - char_index * dy
        if 0 <= x < field_size and 0 <= y < field_size:
            return Position.checked(x, y, field_size)
        return None

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle over placed content, corners inclusive."""

    top_left: Position
    bottom_right: Position

    def __post_init__(self) -> None:
        if self.top_left.x > self.bottom_right.x:
            raise ValueError(
                f"In {self}, x_min ({self.top_left.x}) > x_max ({self.bottom_right.x})."
            )
        if self.top_left.y > self.bottom_right.y:
            raise ValueError(
                f"In {self}, y_min ({self.top_left.y}) > y_max ({self.bottom_right.y})."
            )

    @classmethod
    def around(cls, position: Position) -> "Bounds":
        return cls(position, position)

    @property
    def x_min(self) -> int:
        return self.top_left.x

    @property
    def x_max(self) -> int:
        return self.bottom_right.x

    @property
    def y_min(self) -> int:
        return self.top_left.y

    @property
    def y_max(self) -> int:
        return self.bottom_right.y

    @property
    def width(self) -> int:
        return self.x_max - self.x_min + 1

    @property
    def height(self) -> int:
        return self.y_max - self.y_min + 1

    def size(self) -> int:
        """Side of the enclosing square; puzzles are kept roughly square."""

        return max(self.width, self.height)

    def contains(self, position: Position) -> bool:
        return (
            self.x_min <= position.x <= self.x_max
            and self.y_min <= position.y <= self.y_max
        )

    def grow(self, position: Position) -> "Bounds":
        if self.contains(position):
            return self
        return Bounds(
            Position(min(self.x_min, position.x), min(self.y_min, position.y)),
            Position(max(self.x_max, position.x), max(self.y_max, position.y)),
        )

    def union(self, other: "Bounds") -> "Bounds":
        return self.grow(other.top_left).grow(other.bottom_right)

    def positions(self) -> Iterator[Position]:
        """Yield every position in row-major order."""

        for y in range(self.y_min, self.y_max + 1):
            for x in range(self.x_min, self.x_max + 1):
                yield Position(x, y)

    def __str__(self) -> str:
        return f"[Bounds: {self.top_left}-{self.bottom_right}; size = {self.size()}]"
