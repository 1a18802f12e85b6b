"""Puzzle aggregate and the sequential, non-backtracking builder."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.constants import DIRECTIONS, FIELD_SIZE_MULT, PUZZLE_SIZE_MAX, Direction, Objective
from ..core.exceptions import InvalidWordError, WordSearchError
from ..core.geometry import Bounds, Position
from ..core.models import Placement
from ..utils.logger import get_logger
from .grid import WordSearchGrid
from .selector import PlacementSelector


LOGGER = get_logger(__name__)


@dataclass
class PuzzleConfig:
    """Configuration values driving a single build."""

    max_dimension: int = PUZZLE_SIZE_MAX
    field_multiplier: int = FIELD_SIZE_MULT
    expansion: float = 0.5
    directions: Tuple[Direction, ...] = DIRECTIONS
    objective: Objective = Objective.COMPACTNESS

    def __post_init__(self) -> None:
        self.directions = tuple(Direction(d) for d in self.directions)
        self.objective = Objective(self.objective)
        if self.max_dimension < 1:
            raise ValueError(f"max_dimension must be positive, got {self.max_dimension}")
        if self.field_multiplier < 1:
            raise ValueError(f"field_multiplier must be positive, got {self.field_multiplier}")
        if not 0.0 <= self.expansion <= 1.0:
            raise ValueError(f"expansion must be within [0, 1], got {self.expansion}")
        if not self.directions:
            raise ValueError("At least one direction is required")

    @property
    def field_size(self) -> int:
        return self.max_dimension * self.field_multiplier


def normalize_words(words: Iterable[str]) -> List[str]:
    """Trim and lowercase words, dropping repeats while keeping first-seen order."""

    cleaned: List[str] = []
    seen = set()
    for word in words:
        normalized = word.strip().lower()
        if normalized in seen:
            LOGGER.warning("Ignoring duplicate word '%s'", normalized)
            continue
        seen.add(normalized)
        cleaned.append(normalized)
    return cleaned


@dataclass
class Puzzle:
    """A word list laid out on a working field.

    ``bounds`` is the tight rectangle around every placed letter (``None``
    before the first placement). ``search_area`` is where candidate start
    positions are enumerated: it begins as a square the size of the longest
    word near the middle of the field and grows with every placement.
    """

    words: List[str]
    config: PuzzleConfig = field(default_factory=PuzzleConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    grid: WordSearchGrid = field(init=False, repr=False, compare=False)
    bounds: Optional[Bounds] = field(init=False, default=None)
    search_area: Bounds = field(init=False, repr=False)
    placements: Dict[str, Placement] = field(init=False, default_factory=dict)
    is_random_filled: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.words = normalize_words(self.words)
        self._check_words()
        self.grid = WordSearchGrid(self.config.field_size)
        longest = max(len(word) for word in self.words)
        x_max = min(self.config.max_dimension + longest // 2, self.config.field_size - 1)
        x_min = max(0, x_max - (longest - 1))
        self.search_area = Bounds(Position(x_min, x_min), Position(x_max, x_max))

    def _check_words(self) -> None:
        if not self.words:
            raise InvalidWordError("Word list is empty")
        for word in self.words:
            if not word:
                raise InvalidWordError("Words must not be empty")
            if len(word) > self.config.max_dimension:
                raise InvalidWordError(
                    f"Word '{word}' has {len(word)} letters; "
                    f"the maximum puzzle dimension is {self.config.max_dimension}"
                )

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def create(self) -> "Puzzle":
        """Place every word, longest first. Raises on the first unplaceable word."""

        if self.placements:
            raise WordSearchError("Puzzle has already been built")
        order = list(self.words)
        self.rng.shuffle(order)
        order.sort(key=len, reverse=True)
        selector = PlacementSelector(
            directions=self.config.directions,
            expansion=self.config.expansion,
            objective=self.config.objective,
            rng=self.rng,
        )
        while order:
            word = order.pop(0)
            self.apply_placement(word, selector.choose(self, word))
        return self

    def apply_placement(self, word: str, placement: Placement) -> None:
        """Commit a validated placement to the grid, bounds and placement map."""

        positions = placement.positions(len(word))
        bounds = Bounds.around(positions[0]) if self.bounds is None else self.bounds
        for index, position in enumerate(positions):
            self.grid.write(position, word[index], is_word_start=index == 0)
            bounds = bounds.grow(position)
        self.bounds = bounds
        self.search_area = self.search_area.union(bounds)
        self.placements[word] = placement
        LOGGER.debug("Placed '%s' at %s", word, placement)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_complete(self) -> bool:
        return len(self.placements) == len(self.words)

    @property
    def size(self) -> int:
        return self.bounds.size() if self.bounds is not None else 0

    @property
    def intersection_score(self) -> int:
        return sum(p.intersection_score for p in self.placements.values())

    def letter_at(self, position: Position) -> Optional[str]:
        return self.grid.letter_at(position)

    def rows(self) -> List[List[Optional[str]]]:
        """Letters inside the content bounds, one list per row."""

        if self.bounds is None:
            return []
        return [
            [self.grid.letter_at(Position(x, y)) for x in range(self.bounds.x_min, self.bounds.x_max + 1)]
            for y in range(self.bounds.y_min, self.bounds.y_max + 1)
        ]

    def sorted_placements(self) -> List[Tuple[str, Placement]]:
        return sorted(self.placements.items())

    def random_fill(self) -> None:
        """Fill the empty cells inside the bounds with random letters, once."""

        if self.is_random_filled or self.bounds is None:
            return
        self.grid.fill_empty(self.bounds, self.rng)
        self.is_random_filled = True

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> dict:
        bounds = self.bounds
        return {
            "words": list(self.words),
            "size": self.size,
            "intersection_score": self.intersection_score,
            "bounds": None
            if bounds is None
            else {
                "top_left": [bounds.x_min, bounds.y_min],
                "bottom_right": [bounds.x_max, bounds.y_max],
            },
            "rows": ["".join(letter or "-" for letter in row) for row in self.rows()],
            "placements": [
                {
                    "word": word,
                    "start": [placement.position.x, placement.position.y],
                    "direction": placement.direction.value,
                    "intersection_count": placement.intersection_count,
                    "adjacent_count": placement.adjacent_count,
                }
                for word, placement in self.sorted_placements()
            ],
            "random_filled": self.is_random_filled,
        }

