"""Solver limits."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverLimits:
    """Safety valves for the two solver layers.

    ``slope_walk_iterations`` bounds the single-step approach of one tile
    to its target ring; ``max_open_nodes`` bounds the A* open set.  The
    defaults are never reached for grids up to 10×10.
    """

    slope_walk_iterations: int = 25
    max_open_nodes: int = 100_000

    def __post_init__(self) -> None:
        if self.slope_walk_iterations < 1:
            raise ValueError("slope_walk_iterations must be positive.")
        if self.max_open_nodes < 1:
            raise ValueError("max_open_nodes must be positive.")


DEFAULT_LIMITS = SolverLimits()
