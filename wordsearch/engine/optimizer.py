"""Best-of-N random restart search over complete puzzle builds."""

from __future__ import annotations

import random
import time
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import DIRECTIONS, FIELD_SIZE_MULT, PUZZLE_SIZE_MAX, Direction, Objective
from ..core.exceptions import InfeasiblePlacementError, ValidationError, WordSearchError
from ..utils.logger import get_logger
from .puzzle import Puzzle, PuzzleConfig
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


@dataclass
class OptimizerConfig:
    expansion: float = 0.5
    directions: Tuple[Direction, ...] = DIRECTIONS
    objective: Objective = Objective.COMPACTNESS
    attempts: Optional[int] = 10
    time_budget_seconds: Optional[float] = None
    seed: Optional[int] = None
    workers: int = 1
    max_dimension: int = PUZZLE_SIZE_MAX
    field_multiplier: int = FIELD_SIZE_MULT

    def __post_init__(self) -> None:
        self.objective = Objective(self.objective)
        if self.attempts is None and self.time_budget_seconds is None:
            raise ValueError("Either attempts or time_budget_seconds must be set")
        if self.attempts is not None and self.attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {self.attempts}")
        if self.time_budget_seconds is not None and self.time_budget_seconds < 0:
            raise ValueError(f"time_budget_seconds must not be negative, got {self.time_budget_seconds}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        self.directions = self.to_puzzle_config().directions

    def to_puzzle_config(self) -> PuzzleConfig:
        return PuzzleConfig(
            max_dimension=self.max_dimension,
            field_multiplier=self.field_multiplier,
            expansion=self.expansion,
            directions=self.directions,
            objective=self.objective,
        )


def build_puzzle(words: Sequence[str], config: PuzzleConfig, seed: int) -> Puzzle:
    """Run one complete, validated build. Module level so worker processes can pickle it."""

    puzzle = Puzzle(list(words), config=config, rng=random.Random(seed))
    puzzle.create()
    validation = PuzzleValidator().validate(puzzle)
    if not validation.ok:
        raise ValidationError(f"Puzzle validation failed: {validation.messages}")
    return puzzle


def score_puzzle(puzzle: Puzzle, objective: Objective) -> int:
    """Higher is better for both objectives."""

    if objective == Objective.INTERSECTIONS:
        return puzzle.intersection_score
    return -puzzle.size


class PuzzleOptimizer:
    """Builds independent puzzles and keeps the best one."""

    def __init__(
        self,
        config: OptimizerConfig,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.rng = rng or random.Random(config.seed)
        self.clock = clock

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def find_best(self, words: Sequence[str]) -> Puzzle:
        # Construct once up front so bad input fails before any search runs.
        Puzzle(list(words), config=self.config.to_puzzle_config())
        if self.config.workers > 1 and self.config.attempts is not None:
            results = self._run_parallel(words, self.config.attempts)
        else:
            results = self._run_sequential(words)

        best: Optional[Puzzle] = None
        best_attempt = 0
        failures: List[str] = []
        for attempt, outcome in results:
            if isinstance(outcome, WordSearchError):
                failures.append(str(outcome))
                continue
            if best is None or score_puzzle(outcome, self.config.objective) > score_puzzle(
                best, self.config.objective
            ):
                best = outcome
                best_attempt = attempt

        if best is None:
            raise InfeasiblePlacementError(
                f"Unable to place all words in {len(failures)} attempts: {failures[-1]}"
            )
        LOGGER.info(
            "Best puzzle from attempt %s: size %s, intersection score %s",
            best_attempt,
            best.size,
            best.intersection_score,
        )
        return best

    # ------------------------------------------------------------------
    # Attempt loops
    # ------------------------------------------------------------------
    def _attempt_seeds(self) -> Iterable[int]:
        while True:
            yield self.rng.randrange(2**32)

    def _out_of_time(self, started: float) -> bool:
        budget = self.config.time_budget_seconds
        return budget is not None and self.clock() - started >= budget

    def _run_sequential(self, words: Sequence[str]) -> List[Tuple[int, object]]:
        puzzle_config = self.config.to_puzzle_config()
        started = self.clock()
        results: List[Tuple[int, object]] = []
        for attempt, seed in enumerate(self._attempt_seeds(), start=1):
            results.append((attempt, self._attempt(words, puzzle_config, seed, attempt)))
            if self.config.attempts is not None and attempt >= self.config.attempts:
                break
            if self._out_of_time(started):
                LOGGER.info("Time budget exhausted after %s attempts", attempt)
                break
        return results

    def _attempt(self, words: Sequence[str], puzzle_config: PuzzleConfig, seed: int, attempt: int) -> object:
        LOGGER.info("Generation attempt %s/%s", attempt, self.config.attempts or "?")
        try:
            puzzle = build_puzzle(words, puzzle_config, seed)
        except (InfeasiblePlacementError, ValidationError) as exc:
            LOGGER.warning("Generation attempt failed: %s", exc)
            return exc
        LOGGER.info("Attempt %s: size %s, intersection score %s", attempt, puzzle.size, puzzle.intersection_score)
        return puzzle

    def _run_parallel(self, words: Sequence[str], attempts: int) -> List[Tuple[int, object]]:
        puzzle_config = self.config.to_puzzle_config()
        seeds = [self.rng.randrange(2**32) for _ in range(attempts)]
        started = self.clock()
        results: Dict[int, object] = {}
        with ProcessPoolExecutor(max_workers=self.config.workers) as executor:
            pending: Dict[Future, int] = {
                executor.submit(build_puzzle, list(words), puzzle_config, seed): attempt
                for attempt, seed in enumerate(seeds, start=1)
            }
            while pending:
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    attempt = pending.pop(future)
                    try:
                        results[attempt] = future.result()
                    except (InfeasiblePlacementError, ValidationError) as exc:
                        LOGGER.warning("Generation attempt %s failed: %s", attempt, exc)
                        results[attempt] = exc
                if pending and results and self._out_of_time(started):
                    LOGGER.info("Time budget exhausted after %s attempts", len(results))
                    for future in pending:
                        future.cancel()
                    break
        return sorted(results.items())


def find_best_puzzle(
    words: Sequence[str],
    expansion: float = 0.5,
    allowed_directions: Optional[Sequence[Direction]] = None,
    attempts: Optional[int] = 10,
    *,
    objective: Objective = Objective.COMPACTNESS,
    time_budget_seconds: Optional[float] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    workers: int = 1,
    max_dimension: int = PUZZLE_SIZE_MAX,
) -> Puzzle:
    """Build ``attempts`` puzzles (or as many as fit the time budget) and return the best."""

    config = OptimizerConfig(
        expansion=expansion,
        directions=tuple(allowed_directions) if allowed_directions is not None else DIRECTIONS,
        objective=objective,
        attempts=attempts,
        time_budget_seconds=time_budget_seconds,
        seed=seed,
        workers=workers,
        max_dimension=max_dimension,
    )
    return PuzzleOptimizer(config, rng=rng).find_best(words)
