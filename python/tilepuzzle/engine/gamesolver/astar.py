"""A* search over a rectangular block of the puzzle.

The residual block left by layer peeling is small (2×3 or 3×2 at most), so
the search works on whole :class:`PuzzleState` values and only lets the
empty cell move inside the block.  Children are produced by the transition
engine, never by editing matrices directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from tilepuzzle.config import DEFAULT_LIMITS, SolverLimits
from tilepuzzle.engine.gameplay.game import apply
from tilepuzzle.engine.gamesolver.min_queue import MinQueue
from tilepuzzle.errors import (
    InvalidPuzzleError,
    SearchExhaustedError,
    UnsolvablePuzzleError,
)
from tilepuzzle.models.action import Move
from tilepuzzle.models.board import EMPTY_SENTINEL, Direction, PuzzleState, Slot

logger = logging.getLogger(__name__)

Matrix = tuple[tuple[int, ...], ...]

# Children are generated in this order: left, right, up, down.
_EXPANSION_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


@dataclass
class _Node:
    key: Matrix
    state: PuzzleState
    g: int
    h: int
    actions: tuple[Move, ...]

    @property
    def f(self) -> int:
        return self.g + self.h


@dataclass(frozen=True)
class SearchResult:
    moves: list[Move]
    state: PuzzleState
    expanded: int


def manhattan_distance(matrix: Sequence[Sequence[int]], goal: Sequence[Sequence[int]]) -> int:
    """Sum the grid distance of every tile from its cell in *goal*.

    The empty cell is not counted, which keeps the estimate admissible.
    """
    goal_cells = {
        tile_id: (row, column)
        for row, line in enumerate(goal)
        for column, tile_id in enumerate(line)
    }
    total = 0
    for row, line in enumerate(matrix):
        for column, tile_id in enumerate(line):
            if tile_id == EMPTY_SENTINEL:
                continue
            goal_row, goal_column = goal_cells[tile_id]
            total += abs(row - goal_row) + abs(column - goal_column)
    return total


def a_star_search(
    state: PuzzleState,
    goal: Sequence[Sequence[int]],
    origin: Slot = Slot(0, 0),
    limits: SolverLimits | None = None,
) -> SearchResult:
    """Solve the block of *state* at *origin* so it matches *goal*.

    *goal* is a matrix of tile ids with ``-1`` for the empty cell; its shape
    is the shape of the block.  The empty cell must already be inside the
    block and never leaves it.
    """
    limits = limits or DEFAULT_LIMITS
    goal_key = _freeze(goal)
    _check_block(state, goal_key, origin)
    rows, columns = len(goal_key), len(goal_key[0])

    def key_of(s: PuzzleState) -> Matrix:
        return _freeze(s.to_matrix(origin, rows, columns))

    def inside(slot: Slot) -> bool:
        return (
            origin.row <= slot.row < origin.row + rows
            and origin.column <= slot.column < origin.column + columns
        )

    start_key = key_of(state)
    start_h = manhattan_distance(start_key, goal_key)
    nodes: dict[Matrix, _Node] = {
        start_key: _Node(start_key, state, 0, start_h, ())
    }
    open_nodes: MinQueue[Matrix] = MinQueue()
    open_nodes.push(start_key, start_h)
    closed: set[Matrix] = set()
    expanded = 0

    while open_nodes:
        if len(open_nodes) > limits.max_open_nodes:
            raise SearchExhaustedError(
                f"A* open set exceeded {limits.max_open_nodes} nodes "
                f"after expanding {expanded}.",
                len(open_nodes),
            )

        current = nodes[open_nodes.pop()]
        if current.key == goal_key:
            logger.debug(
                "A* reached goal in %d moves, %d nodes expanded",
                current.g,
                expanded,
            )
            return SearchResult(list(current.actions), current.state, expanded)

        expanded += 1
        empty_id = current.state.empty_id
        for direction in _EXPANSION_ORDER:
            if not inside(current.state.empty_location.step(direction)):
                continue
            action = Move(empty_id, direction)
            child_state = apply(current.state, action)
            child_key = key_of(child_state)
            g = current.g + 1

            if child_key in open_nodes:
                existing = nodes[child_key]
                if existing.g <= g:
                    continue
                existing.g = g
                existing.state = child_state
                existing.actions = current.actions + (action,)
                open_nodes.push(child_key, existing.f)
            elif child_key in closed:
                existing = nodes[child_key]
                if existing.g <= g:
                    continue
                # A cheaper path to an expanded node: reopen it.
                nodes[child_key] = _Node(
                    child_key, child_state, g, existing.h, current.actions + (action,)
                )
                closed.discard(child_key)
                open_nodes.push(child_key, g + existing.h)
            else:
                h = manhattan_distance(child_key, goal_key)
                nodes[child_key] = _Node(
                    child_key, child_state, g, h, current.actions + (action,)
                )
                open_nodes.push(child_key, g + h)

        closed.add(current.key)

    raise UnsolvablePuzzleError(
        f"Exhausted all {expanded} reachable layouts without reaching the goal."
    )


def a_star_solve(
    state: PuzzleState,
    goal: Sequence[Sequence[int]],
    origin: Slot = Slot(0, 0),
    limits: SolverLimits | None = None,
) -> list[Move]:
    """Return the moves that turn the block at *origin* into *goal*."""
    return a_star_search(state, goal, origin, limits).moves


def residual_goal(state: PuzzleState, origin: Slot) -> list[list[int]]:
    """Return the solved contents of the block from *origin* to the corner."""
    return PuzzleState.solved(state.row_size, state.column_size).to_matrix(origin)


def solve_residual(
    state: PuzzleState, origin: Slot, limits: SolverLimits | None = None
) -> SearchResult:
    """Solve the bottom-right block that starts at *origin*."""
    return a_star_search(state, residual_goal(state, origin), origin, limits)


# -- helpers ------------------------------------------------------------------


def _freeze(matrix: Sequence[Sequence[int]]) -> Matrix:
    return tuple(tuple(line) for line in matrix)


def _check_block(state: PuzzleState, goal: Matrix, origin: Slot) -> None:
    rows, columns = len(goal), len(goal[0]) if goal else 0
    if not rows or not columns or any(len(line) != columns for line in goal):
        raise InvalidPuzzleError("Goal must be a non-empty rectangular matrix.")
    corner = Slot(origin.row + rows - 1, origin.column + columns - 1)
    if not (state.in_bounds(origin) and state.in_bounds(corner)):
        raise InvalidPuzzleError("Goal block does not fit inside the puzzle.")
    block = sorted(
        tile_id for line in state.to_matrix(origin, rows, columns) for tile_id in line
    )
    if block != sorted(tile_id for line in goal for tile_id in line):
        raise InvalidPuzzleError("Goal block must hold the same tiles as the puzzle block.")
