"""Exception hierarchy for the puzzle core."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error raised by ``tilepuzzle``."""


class InvalidPuzzleError(PuzzleError, ValueError):
    """A puzzle state (or goal) could not be constructed from the given data."""


class UnsolvablePuzzleError(PuzzleError):
    """The layout cannot reach its goal by legal moves."""


class SolverFaultError(PuzzleError, RuntimeError):
    """The layer-peeling solver reached a configuration it has no move for.

    Raised for rotate case-table misses, blocked walks of the empty cell
    and slope walks that hit their iteration ceiling.
    """


class SearchExhaustedError(PuzzleError, RuntimeError):
    """A* gave up because its open set grew past the configured bound."""

    def __init__(self, message: str, open_nodes: int) -> None:
        super().__init__(message)
        self.open_nodes = open_nodes
