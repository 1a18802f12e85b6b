"""Custom exception hierarchy for word-search generation."""


class WordSearchError(Exception):
    """Base exception for generator failures."""


class InvalidWordError(WordSearchError):
    """Raised when the word list cannot be used to build a puzzle."""


class InfeasiblePlacementError(WordSearchError):
    """Raised when a word has no legal placement anywhere in the field."""


class ValidationError(WordSearchError):
    """Raised when the puzzle integrity checks fail."""


class GridConsistencyError(WordSearchError):
    """Raised when applying an already validated placement hits a conflicting letter.

    This indicates a logic defect (a stale candidate or a grid mutated between
    evaluation and application) and is never retried.
    """
