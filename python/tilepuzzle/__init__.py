"""Sliding tile puzzle: state machine, scrambler and automated solver."""

from tilepuzzle.config import DEFAULT_LIMITS, SolverLimits
from tilepuzzle.errors import (
    InvalidPuzzleError,
    PuzzleError,
    SearchExhaustedError,
    SolverFaultError,
    UnsolvablePuzzleError,
)

__all__ = [
    "DEFAULT_LIMITS",
    "InvalidPuzzleError",
    "PuzzleError",
    "SearchExhaustedError",
    "SolverFaultError",
    "SolverLimits",
    "UnsolvablePuzzleError",
]
