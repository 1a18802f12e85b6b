"""Word-search puzzle generator.

This package exposes the public API surface via:

- ``wordsearch.engine.optimizer.find_best_puzzle``: best-of-N search over builds.
- ``wordsearch.engine.optimizer.PuzzleOptimizer``: the same, driven by ``OptimizerConfig``.
- ``wordsearch.engine.puzzle.Puzzle``: a single build with its grid, bounds and placements.
"""

from .core.constants import DIRECTIONS, Direction, Objective, SpreadsheetStyle
from .engine.optimizer import OptimizerConfig, PuzzleOptimizer, find_best_puzzle
from .engine.puzzle import Puzzle, PuzzleConfig

__all__ = [
    "DIRECTIONS",
    "Direction",
    "Objective",
    "SpreadsheetStyle",
    "OptimizerConfig",
    "PuzzleOptimizer",
    "find_best_puzzle",
    "Puzzle",
    "PuzzleConfig",
]

__version__ = "0.1.0"
