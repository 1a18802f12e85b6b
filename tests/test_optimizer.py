import itertools
import random
import unittest
from unittest import mock

from wordsearch.core.constants import Direction, Objective
from wordsearch.core.exceptions import InfeasiblePlacementError, InvalidWordError
from wordsearch.engine import optimizer as optimizer_module
from wordsearch.engine.optimizer import (
    OptimizerConfig,
    PuzzleOptimizer,
    build_puzzle,
    find_best_puzzle,
    score_puzzle,
)
from wordsearch.engine.puzzle import PuzzleConfig
from wordsearch.engine.validator import PuzzleValidator


WORDS = ["escape", "label", "sum", "swoop", "vanish"]


class OptimizerConfigTests(unittest.TestCase):
    def test_requires_a_stopping_rule(self) -> None:
        with self.assertRaises(ValueError):
            OptimizerConfig(attempts=None, time_budget_seconds=None)
        with self.assertRaises(ValueError):
            OptimizerConfig(attempts=0)
        with self.assertRaises(ValueError):
            OptimizerConfig(workers=0)

    def test_validates_puzzle_knobs(self) -> None:
        with self.assertRaises(ValueError):
            OptimizerConfig(expansion=-0.1)
        with self.assertRaises(ValueError):
            OptimizerConfig(directions=())

    def test_to_puzzle_config(self) -> None:
        config = OptimizerConfig(expansion=0.3, directions=("E",), max_dimension=12)
        self.assertEqual(
            config.to_puzzle_config(),
            PuzzleConfig(max_dimension=12, expansion=0.3, directions=(Direction.E,)),
        )


class FindBestPuzzleTests(unittest.TestCase):
    def test_single_word(self) -> None:
        for directions in (None, [Direction.E], [Direction.NW, Direction.S]):
            puzzle = find_best_puzzle(["cat"], 0.0, directions, attempts=3, seed=1)
            self.assertEqual(list(puzzle.placements), ["cat"])
            placement = puzzle.placements["cat"]
            self.assertEqual(placement.intersection_count, 0)
            self.assertEqual(puzzle.bounds.size(), 3)
            if directions:
                self.assertIn(placement.direction, directions)

    def test_cat_and_car_share_a_cell(self) -> None:
        puzzle = find_best_puzzle(
            ["cat", "car"], 0.0, None, attempts=10, seed=4, objective=Objective.INTERSECTIONS
        )
        counts = sorted(p.intersection_count for p in puzzle.placements.values())
        self.assertEqual(counts, [0, 1])
        self.assertEqual(puzzle.intersection_score, 1)

    def test_cat_and_car_fit_the_word_length(self) -> None:
        puzzle = find_best_puzzle(["cat", "car"], 0.0, None, attempts=10, seed=4)
        self.assertEqual(puzzle.size, 3)

    def test_overlapping_run_found(self) -> None:
        puzzle = find_best_puzzle(
            ["atom", "cat"], 0.0, None, attempts=20, seed=2, objective=Objective.INTERSECTIONS
        )
        self.assertEqual(puzzle.placements["cat"].intersection_count, 2)
        self.assertEqual(puzzle.intersection_score, 2)

    def test_same_seed_is_deterministic(self) -> None:
        first = find_best_puzzle(WORDS, 0.3, None, attempts=3, seed=99)
        second = find_best_puzzle(WORDS, 0.3, None, attempts=3, seed=99)
        self.assertEqual(first.to_jsonable(), second.to_jsonable())

    def test_injected_rng_matches_seed(self) -> None:
        seeded = find_best_puzzle(WORDS, 0.3, None, attempts=2, seed=17)
        injected = find_best_puzzle(WORDS, 0.3, None, attempts=2, rng=random.Random(17))
        self.assertEqual(seeded.to_jsonable(), injected.to_jsonable())

    def test_compact_expansion_not_larger_than_loose(self) -> None:
        compact = find_best_puzzle(WORDS, 0.0, None, attempts=2, seed=5)
        loose = find_best_puzzle(WORDS, 1.0, None, attempts=2, seed=5)
        self.assertLessEqual(compact.size, loose.size)

    def test_result_is_valid(self) -> None:
        puzzle = find_best_puzzle(WORDS, 0.5, [Direction.E, Direction.SE, Direction.S], attempts=2, seed=3)
        self.assertTrue(PuzzleValidator().validate(puzzle).ok)
        for placement in puzzle.placements.values():
            self.assertIn(placement.direction, (Direction.E, Direction.SE, Direction.S))

    def test_long_word_rejected_before_search(self) -> None:
        with mock.patch("wordsearch.engine.puzzle.PlacementSelector.choose") as choose:
            with self.assertRaises(InvalidWordError):
                find_best_puzzle(["abcdef", "cat"], 0.5, None, attempts=2, max_dimension=5)
            choose.assert_not_called()

    def test_overfull_field_raises(self) -> None:
        words = ["ab", "cd", "ef", "gh", "ij", "kl", "mn", "op", "qr"]
        with self.assertRaises(InfeasiblePlacementError):
            find_best_puzzle(words, 0.0, None, attempts=3, seed=0, max_dimension=2)


class OptimizerLoopTests(unittest.TestCase):
    def test_failed_attempts_are_absorbed(self) -> None:
        calls = []

        def flaky(words, config, seed):
            calls.append(seed)
            if len(calls) == 1:
                raise InfeasiblePlacementError("no room")
            return build_puzzle(words, config, seed)

        config = OptimizerConfig(attempts=3, seed=6)
        with mock.patch.object(optimizer_module, "build_puzzle", side_effect=flaky):
            puzzle = PuzzleOptimizer(config).find_best(["cat", "dog"])
        self.assertEqual(len(calls), 3)
        self.assertTrue(puzzle.is_complete)

    def test_time_budget_stops_early(self) -> None:
        clock = itertools.count(0.0, 0.5).__next__
        config = OptimizerConfig(attempts=None, time_budget_seconds=1.0, seed=6)
        with mock.patch.object(optimizer_module, "build_puzzle", wraps=build_puzzle) as build:
            PuzzleOptimizer(config, clock=clock).find_best(["cat", "dog"])
        self.assertEqual(build.call_count, 2)

    def test_attempt_count_caps_time_budget(self) -> None:
        clock = itertools.count(0.0, 0.001).__next__
        config = OptimizerConfig(attempts=4, time_budget_seconds=60.0, seed=6)
        with mock.patch.object(optimizer_module, "build_puzzle", wraps=build_puzzle) as build:
            PuzzleOptimizer(config, clock=clock).find_best(["cat", "dog"])
        self.assertEqual(build.call_count, 4)

    def test_best_score_is_kept(self) -> None:
        config = OptimizerConfig(attempts=5, seed=12)
        sizes = []

        def recording(words, puzzle_config, seed):
            puzzle = build_puzzle(words, puzzle_config, seed)
            sizes.append(puzzle.size)
            return puzzle

        with mock.patch.object(optimizer_module, "build_puzzle", side_effect=recording):
            best = PuzzleOptimizer(config).find_best(WORDS)
        self.assertEqual(best.size, min(sizes))
        self.assertEqual(score_puzzle(best, Objective.COMPACTNESS), -min(sizes))

    def test_parallel_matches_sequential(self) -> None:
        sequential = PuzzleOptimizer(OptimizerConfig(attempts=3, seed=42)).find_best(WORDS)
        parallel = PuzzleOptimizer(OptimizerConfig(attempts=3, seed=42, workers=2)).find_best(WORDS)
        self.assertEqual(sequential.to_jsonable(), parallel.to_jsonable())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
