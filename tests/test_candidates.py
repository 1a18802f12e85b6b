import unittest

from wordsearch.core.constants import Direction
from wordsearch.core.geometry import Bounds, Position
from wordsearch.engine.candidates import count_adjacent, try_placement
from wordsearch.engine.grid import WordSearchGrid


def write_word(grid: WordSearchGrid, word: str, start: Position, direction: Direction) -> None:
    for index, letter in enumerate(word):
        grid.write(start.translate(direction, index), letter, is_word_start=index == 0)


class TryPlacementTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = WordSearchGrid(10)

    def test_empty_grid_placement(self) -> None:
        placement = try_placement(self.grid, None, "cat", 0, Position(2, 2), Direction.E)
        self.assertIsNotNone(placement)
        assert placement is not None
        self.assertEqual(placement.position, Position(2, 2))
        self.assertEqual(placement.intersection_count, 0)
        self.assertEqual(placement.adjacent_count, 0)
        self.assertEqual(placement.bounds, Bounds(Position(2, 2), Position(4, 2)))
        self.assertEqual(placement.bounds.size(), 3)

    def test_anchor_index_rewinds_to_start(self) -> None:
        placement = try_placement(self.grid, None, "cat", 2, Position(4, 2), Direction.E)
        assert placement is not None
        self.assertEqual(placement.position, Position(2, 2))

    def test_rejects_words_leaving_the_field(self) -> None:
        self.assertIsNone(try_placement(self.grid, None, "cat", 0, Position(8, 0), Direction.E))
        self.assertIsNone(try_placement(self.grid, None, "cat", 2, Position(1, 1), Direction.E))
        self.assertIsNone(try_placement(self.grid, None, "cat", 0, Position(1, 1), Direction.NW))
        self.assertIsNotNone(try_placement(self.grid, None, "cat", 0, Position(7, 9), Direction.E))

    def test_rejects_conflicting_letter(self) -> None:
        write_word(self.grid, "dog", Position(2, 2), Direction.E)
        bounds = Bounds(Position(2, 2), Position(4, 2))
        self.assertIsNone(try_placement(self.grid, bounds, "cat", 0, Position(2, 2), Direction.E))
        self.assertIsNone(try_placement(self.grid, bounds, "cat", 0, Position(3, 0), Direction.S))

    def test_counts_intersections_and_adjacency(self) -> None:
        write_word(self.grid, "cat", Position(2, 2), Direction.E)
        bounds = Bounds(Position(2, 2), Position(4, 2))
        placement = try_placement(self.grid, bounds, "tab", 0, Position(4, 2), Direction.S)
        assert placement is not None
        self.assertEqual(placement.intersection_count, 1)
        # Only the new 'a' at (4, 3) touches an old letter: the 'a' of "cat" at (3, 2).
        self.assertEqual(placement.adjacent_count, 1)
        self.assertEqual(placement.bounds, Bounds(Position(2, 2), Position(4, 4)))
        self.assertEqual(placement.intersection_score, 1)

    def test_overlapping_run_scores_two_intersections(self) -> None:
        write_word(self.grid, "atom", Position(3, 3), Direction.E)
        bounds = Bounds(Position(3, 3), Position(6, 3))
        placement = try_placement(self.grid, bounds, "cat", 0, Position(2, 3), Direction.E)
        assert placement is not None
        self.assertEqual(placement.intersection_count, 2)
        self.assertEqual(placement.intersection_score, 2)
        self.assertEqual(placement.bounds, Bounds(Position(2, 3), Position(6, 3)))

    def test_grid_is_not_mutated(self) -> None:
        write_word(self.grid, "cat", Position(2, 2), Direction.E)
        try_placement(self.grid, None, "tab", 0, Position(4, 2), Direction.S)
        self.assertIsNone(self.grid.letter_at(Position(4, 3)))
        self.assertEqual(self.grid.cell(Position(4, 2)).word_count, 1)


class AdjacencyTests(unittest.TestCase):
    def test_run_axis_is_excluded(self) -> None:
        grid = WordSearchGrid(10)
        grid.write(Position(4, 5), "x")
        grid.write(Position(6, 5), "y")
        grid.write(Position(5, 4), "z")
        self.assertEqual(count_adjacent(grid, Position(5, 5), Direction.E), 1)
        self.assertEqual(count_adjacent(grid, Position(5, 5), Direction.S), 2)
        self.assertEqual(count_adjacent(grid, Position(5, 5), Direction.NE), 3)

    def test_field_edge_is_ignored(self) -> None:
        grid = WordSearchGrid(4)
        grid.write(Position(1, 1), "x")
        self.assertEqual(count_adjacent(grid, Position(0, 0), Direction.E), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
