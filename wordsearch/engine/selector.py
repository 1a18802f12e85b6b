"""Candidate enumeration and ranking for a single word."""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, TypeVar

from ..core.constants import Direction, Objective
from ..core.exceptions import InfeasiblePlacementError
from ..core.geometry import Bounds
from ..core.models import Placement
from ..utils.logger import get_logger
from .candidates import try_placement

if TYPE_CHECKING:
    from .puzzle import Puzzle


LOGGER = get_logger(__name__)

T = TypeVar("T")


def ordered_with_random_ties(
    items: Sequence[T], key: Callable[[T], int], rng: random.Random
) -> List[int]:
    """Return indices of ``items`` sorted by ``key``, ties in random order.

    Each item gets a slot in a fresh random permutation which serves as the
    secondary sort key, so equal keys end up uniformly shuffled.
    """

    tiebreak = rng.sample(range(len(items)), len(items))
    return sorted(range(len(items)), key=lambda i: (key(items[i]), tiebreak[i]))


def pick_index(count: int, expansion: float) -> int:
    """Index into a ranked list: 0.0 is the most compact, 1.0 the loosest."""

    return int(math.floor((count - 1) * expansion))


class PlacementSelector:
    """Enumerates every legal placement for a word and chooses one."""

    def __init__(
        self,
        directions: Sequence[Direction],
        expansion: float,
        objective: Objective,
        rng: random.Random,
    ) -> None:
        self.directions = tuple(directions)
        self.expansion = expansion
        self.objective = objective
        self.rng = rng

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------
    def candidates(self, puzzle: "Puzzle", word: str, area: Optional[Bounds] = None) -> List[Placement]:
        """Every surviving placement whose first letter lies inside ``area``."""

        area = area or puzzle.search_area
        found: List[Placement] = []
        for position in area.positions():
            for direction in self.directions:
                placement = try_placement(puzzle.grid, puzzle.bounds, word, 0, position, direction)
                if placement is not None:
                    found.append(placement)
        return found

    def choose(self, puzzle: "Puzzle", word: str) -> Placement:
        placements = self.candidates(puzzle, word)
        if not placements:
            LOGGER.debug("No placement for '%s' in %s, scanning whole field", word, puzzle.search_area)
            placements = self.candidates(puzzle, word, puzzle.grid.field_bounds())
        if not placements:
            raise InfeasiblePlacementError(
                f"No placement for '{word}' in a field of size {puzzle.grid.field_size}"
            )
        if len(placements) == 1:
            return placements[0]

        ranked = self.rank(placements)
        if self.objective == Objective.INTERSECTIONS:
            best_score = max(p.intersection_score for p in ranked)
            ranked = [p for p in ranked if p.intersection_score == best_score]
        chosen = ranked[pick_index(len(ranked), self.expansion)]
        LOGGER.debug("Chose %s for '%s' out of %s candidates", chosen, word, len(placements))
        return chosen

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------
    def rank(self, placements: Sequence[Placement]) -> List[Placement]:
        """Order placements from most compact and in-filled to loosest."""

        count = len(placements)
        size_rank = [0] * count
        for rank, index in enumerate(
            ordered_with_random_ties(placements, lambda p: p.bounds.size(), self.rng)
        ):
            size_rank[index] = rank

        # Highest adjacent counts get the smallest rank numbers.
        adjacent_rank = [0] * count
        for rank, index in enumerate(
            ordered_with_random_ties(placements, lambda p: -p.adjacent_count, self.rng)
        ):
            adjacent_rank[index] = rank

        combined = [size_rank[i] + adjacent_rank[i] for i in range(count)]
        order = ordered_with_random_ties(range(count), lambda i: combined[i], self.rng)
        return [placements[i] for i in order]
