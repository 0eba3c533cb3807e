"""Sliding puzzle solver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tilepuzzle.config import DEFAULT_LIMITS, SolverLimits
from tilepuzzle.engine.gamegenerator import is_solvable
from tilepuzzle.engine.gamesolver.astar import solve_residual
from tilepuzzle.engine.gamesolver.peeling import Layer, peel_layers, solve_layer, solve_piece
from tilepuzzle.errors import UnsolvablePuzzleError
from tilepuzzle.models.action import Move
from tilepuzzle.models.board import PuzzleState

logger = logging.getLogger(__name__)


@dataclass
class SolveResult:
    """Moves that solve a puzzle plus what it took to find them."""

    moves: list[Move]
    state: PuzzleState
    layer_moves: list[tuple[Layer, int]] = field(default_factory=list)
    residual_moves: int = 0
    expanded: int = 0


def solve_puzzle_with_trace(
    state: PuzzleState, limits: SolverLimits | None = None
) -> SolveResult:
    """Solve *state* and report per-layer move counts and search effort.

    Raises :class:`UnsolvablePuzzleError` for layouts with the wrong parity.
    Solver faults and search exhaustion propagate unchanged.
    """
    limits = limits or DEFAULT_LIMITS
    if not is_solvable(state):
        raise UnsolvablePuzzleError(
            f"{state.row_size}×{state.column_size} layout has the wrong parity."
        )
    if state.is_solved():
        return SolveResult([], state)

    result = SolveResult([], state)
    plan = peel_layers(state.row_size, state.column_size)
    for layer in plan.layers:
        moves, state = solve_layer(state, layer, limits)
        logger.debug(
            "Solved %s at (%d, %d) in %d moves",
            layer.kind,
            layer.top,
            layer.left,
            len(moves),
        )
        result.moves += moves
        result.layer_moves.append((layer, len(moves)))

    residual = solve_residual(state, plan.residual, limits)
    result.moves += residual.moves
    result.residual_moves = len(residual.moves)
    result.expanded = residual.expanded
    result.state = residual.state
    logger.info(
        "Solved %d×%d puzzle in %d moves",
        state.row_size,
        state.column_size,
        len(result.moves),
    )
    return result


def solve_puzzle(
    state: PuzzleState, limits: SolverLimits | None = None
) -> list[Move]:
    """Return a move sequence that takes *state* to the solved layout."""
    return solve_puzzle_with_trace(state, limits).moves


class Solver:
    """Stateless solver; all methods are static."""

    @staticmethod
    def solve(state: PuzzleState, limits: SolverLimits | None = None) -> list[Move]:
        """Return a move sequence that solves *state*, or ``[]`` if solved."""
        return solve_puzzle(state, limits)

    @staticmethod
    def solve_piece(
        state: PuzzleState, tile_id: int, limits: SolverLimits | None = None
    ) -> tuple[list[Move], PuzzleState]:
        """Place one tile; every tile peeled before it must already be solved."""
        return solve_piece(state, tile_id, limits)

    @staticmethod
    def hint(state: PuzzleState, limits: SolverLimits | None = None) -> Move | None:
        """Return the next move of a full solution, or ``None`` if solved."""
        if state.is_solved():
            return None
        moves = Solver.solve(state, limits)
        return moves[0] if moves else None

    @staticmethod
    def is_solvable(state: PuzzleState) -> bool:
        """Return True if *state* can reach the goal state."""
        return is_solvable(state)
