"""Deterministic rule validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..core.exceptions import ValidationError
from ..core.geometry import Bounds, Position
from ..utils.logger import get_logger
from .puzzle import Puzzle


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over a finished puzzle."""

    def validate(self, puzzle: Puzzle) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_all_words_placed(puzzle)
            self._check_no_conflicts(puzzle)
            self._check_tight_bounds(puzzle)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_all_words_placed(self, puzzle: Puzzle) -> None:
        missing = [word for word in puzzle.words if word not in puzzle.placements]
        if missing:
            raise ValidationError(f"Words without placement: {', '.join(missing)}")

    def _check_no_conflicts(self, puzzle: Puzzle) -> None:
        claimed: Dict[Position, Tuple[str, str]] = {}
        for word, placement in puzzle.placements.items():
            for index, position in enumerate(placement.positions(len(word))):
                letter = word[index]
                previous = claimed.get(position)
                if previous is not None and previous[1] != letter:
                    raise ValidationError(
                        f"'{word}' and '{previous[0]}' disagree at {position}: "
                        f"'{letter}' vs '{previous[1]}'"
                    )
                claimed[position] = (word, letter)
                if puzzle.letter_at(position) != letter:
                    raise ValidationError(
                        f"Grid holds '{puzzle.letter_at(position)}' at {position}, "
                        f"'{word}' expects '{letter}'"
                    )

    def _check_tight_bounds(self, puzzle: Puzzle) -> None:
        positions = [
            position
            for word, placement in puzzle.placements.items()
            for position in placement.positions(len(word))
        ]
        if not positions:
            if puzzle.bounds is not None:
                raise ValidationError(f"Empty puzzle reports bounds {puzzle.bounds}")
            return
        expected = Bounds(
            Position(min(p.x for p in positions), min(p.y for p in positions)),
            Position(max(p.x for p in positions), max(p.y for p in positions)),
        )
        if puzzle.bounds != expected:
            raise ValidationError(f"Bounds {puzzle.bounds} do not match content {expected}")
