"""Layer-peeling solver.

Tiles are placed one at a time, a whole row or column at a time, from the
top-left corner inward.  Every primitive takes a state, returns
``(moves, new_state)`` and never touches cells in its *frozen* set except
where a procedure says so explicitly.  What is left after peeling is a
2×2, 2×3 or 3×2 block that :mod:`astar` finishes off.

Moves are always expressed as the empty cell walking one step, i.e.
``Move(empty_id, direction)``.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import StrEnum
from typing import AbstractSet, Callable, Iterable

from tilepuzzle.config import DEFAULT_LIMITS, SolverLimits
from tilepuzzle.engine.gameplay.game import apply
from tilepuzzle.engine.gamesolver.astar import solve_residual
from tilepuzzle.errors import SolverFaultError
from tilepuzzle.models.action import Move
from tilepuzzle.models.board import (
    Direction,
    PuzzleState,
    Slot,
    column_ids,
    goal_slot,
    in_square_ring,
    row_ids,
)

logger = logging.getLogger(__name__)

Step = tuple[list[Move], PuzzleState]

# Order in which the empty cell explores its neighbours.
_WALK_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

# Empty-cell walk that swaps the last two tiles of a row when the last tile
# sits in the second-to-last tile's cell and that tile sits in the corner.
# Written for the 2×3 block below the pair with the empty cell starting
# directly under the notch.
ROW_NOTCH_ESCAPE = (
    Direction.DOWN, Direction.RIGHT, Direction.UP, Direction.UP,
    Direction.LEFT, Direction.DOWN,
    Direction.DOWN, Direction.RIGHT, Direction.UP, Direction.UP,
    Direction.LEFT, Direction.DOWN,
    Direction.RIGHT,
    Direction.DOWN, Direction.LEFT, Direction.UP, Direction.UP,
    Direction.RIGHT, Direction.DOWN, Direction.DOWN, Direction.LEFT,
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN, Direction.LEFT, Direction.UP,
    Direction.UP, Direction.RIGHT, Direction.DOWN,
)

# The same escape mirrored across the diagonal for the bottom of a column.
_TRANSPOSED = {
    Direction.UP: Direction.LEFT,
    Direction.DOWN: Direction.RIGHT,
    Direction.LEFT: Direction.UP,
    Direction.RIGHT: Direction.DOWN,
}
COLUMN_NOTCH_ESCAPE = tuple(_TRANSPOSED[d] for d in ROW_NOTCH_ESCAPE)

_ROW_FINISH = (Direction.UP, Direction.RIGHT, Direction.DOWN)
_COLUMN_FINISH = tuple(_TRANSPOSED[d] for d in _ROW_FINISH)


# -- empty-cell walks -----------------------------------------------------------


def walk(state: PuzzleState, directions: Iterable[Direction]) -> Step:
    """Move the empty cell along *directions* through the transition engine."""
    moves: list[Move] = []
    for direction in directions:
        move = Move(state.empty_id, direction)
        next_state = apply(state, move)
        if next_state is state:
            raise SolverFaultError(
                f"Empty cell at {state.empty_location} cannot move {direction}."
            )
        moves.append(move)
        state = next_state
    return moves, state


def _find_path(
    state: PuzzleState,
    is_destination: Callable[[Slot], bool],
    blocked: AbstractSet[Slot],
) -> list[Direction] | None:
    """Breadth-first search for the empty cell.

    The starting cell is never treated as blocked, so the empty cell may
    leave a frozen cell it happens to occupy.
    """
    start = state.empty_location
    if is_destination(start):
        return []
    parents: dict[Slot, tuple[Slot, Direction]] = {}
    seen = {start}
    queue = deque([start])
    while queue:
        slot = queue.popleft()
        for direction in _WALK_ORDER:
            neighbour = slot.step(direction)
            if neighbour in seen or neighbour in blocked:
                continue
            if not state.in_bounds(neighbour):
                continue
            seen.add(neighbour)
            parents[neighbour] = (slot, direction)
            if is_destination(neighbour):
                path: list[Direction] = []
                while neighbour != start:
                    neighbour, direction = parents[neighbour]
                    path.append(direction)
                path.reverse()
                return path
            queue.append(neighbour)
    return None


def walk_empty_to_slot(
    state: PuzzleState, destination: Slot, blocked: AbstractSet[Slot]
) -> Step:
    """Walk the empty cell to *destination* without crossing *blocked*."""
    if destination in blocked or not state.in_bounds(destination):
        raise SolverFaultError(f"Cannot walk the empty cell onto {destination}.")
    path = _find_path(state, lambda slot: slot == destination, blocked)
    if path is None:
        raise SolverFaultError(
            f"No route for the empty cell from {state.empty_location} "
            f"to {destination}."
        )
    return walk(state, path)


def walk_empty_to_piece(
    state: PuzzleState, tile_id: int, frozen: AbstractSet[Slot]
) -> Step:
    """Bring the empty cell next to *tile_id* without moving the tile.

    Neighbouring cells are tried above and below first, then left and
    right.
    """
    tile = state.tile(tile_id).slot
    blocked = frozen | {tile}
    beside = {tile.step(direction) for direction in _WALK_ORDER}
    path = _find_path(state, lambda slot: slot in beside, blocked)
    if path is None:
        raise SolverFaultError(f"Empty cell cannot reach tile {tile_id}.")
    return walk(state, path)


# -- slope walk -----------------------------------------------------------------


def _slope_candidates(tile: Slot, target: Slot, vertical_first: bool) -> list[Direction]:
    vertical: list[Direction] = []
    if tile.row > target.row + 1:
        vertical.append(Direction.UP)
    elif tile.row < target.row:
        vertical.append(Direction.DOWN)
    horizontal: list[Direction] = []
    if tile.column > target.column + 1:
        horizontal.append(Direction.LEFT)
    elif tile.column < target.column:
        horizontal.append(Direction.RIGHT)
    return vertical + horizontal if vertical_first else horizontal + vertical


def slope_walk_to_target(
    state: PuzzleState,
    tile_id: int,
    target: Slot,
    frozen: AbstractSet[Slot],
    max_iterations: int = DEFAULT_LIMITS.slope_walk_iterations,
) -> Step:
    """Shift *tile_id* one cell at a time until it enters the ring at *target*.

    Row and column corrections alternate, so the tile approaches along a
    diagonal.  Raises :class:`SolverFaultError` if the ring is not reached
    within *max_iterations* steps.
    """
    moves: list[Move] = []
    iteration = 0
    while not in_square_ring(state.tile(tile_id), target):
        if iteration >= max_iterations:
            raise SolverFaultError(
                f"Tile {tile_id} did not reach the ring at {target} "
                f"within {max_iterations} steps."
            )
        tile = state.tile(tile_id).slot
        for step in _slope_candidates(tile, target, iteration % 2 == 0):
            destination = tile.step(step)
            if state.in_bounds(destination) and destination not in frozen:
                break
        else:
            raise SolverFaultError(
                f"Tile {tile_id} at {tile} has no free cell toward {target}."
            )
        walk_moves, state = walk_empty_to_slot(state, destination, frozen | {tile})
        step_moves, state = walk(state, [step.opposite])
        moves += walk_moves + step_moves
        iteration += 1
    return moves, state


# -- rotate ---------------------------------------------------------------------


class RingPosition(StrEnum):
    """Where a tile sits inside the 2×2 ring anchored at its target."""

    TARGET = "target"
    RIGHT = "right"
    BELOW = "below"
    DIAGONAL = "diagonal"


def ring_position(tile: Slot, target: Slot) -> RingPosition | None:
    offset = (tile.row - target.row, tile.column - target.column)
    return _RING_OFFSETS.get(offset)


_RING_OFFSETS = {
    (0, 0): RingPosition.TARGET,
    (0, 1): RingPosition.RIGHT,
    (1, 0): RingPosition.BELOW,
    (1, 1): RingPosition.DIAGONAL,
}


def _rotate_from_target(
    state: PuzzleState, tile_id: int, target: Slot, frozen: AbstractSet[Slot]
) -> Step:
    return [], state


def _rotate_from_right(
    state: PuzzleState, tile_id: int, target: Slot, frozen: AbstractSet[Slot]
) -> Step:
    tile = state.tile(tile_id).slot
    moves, state = walk_empty_to_slot(state, target, frozen | {tile})
    last, state = walk(state, [Direction.RIGHT])
    return moves + last, state


def _rotate_from_below(
    state: PuzzleState, tile_id: int, target: Slot, frozen: AbstractSet[Slot]
) -> Step:
    tile = state.tile(tile_id).slot
    moves, state = walk_empty_to_slot(state, target, frozen | {tile})
    last, state = walk(state, [Direction.DOWN])
    return moves + last, state


def _rotate_from_diagonal(
    state: PuzzleState, tile_id: int, target: Slot, frozen: AbstractSet[Slot]
) -> Step:
    tile = state.tile(tile_id).slot
    above = target.step(Direction.RIGHT)
    if state.in_bounds(above) and above not in frozen:
        moves, state = walk_empty_to_slot(state, above, frozen | {tile})
        lift, state = walk(state, [Direction.DOWN])
        rest, state = _rotate_from_right(state, tile_id, target, frozen)
    else:
        beside = target.step(Direction.DOWN)
        moves, state = walk_empty_to_slot(state, beside, frozen | {tile})
        lift, state = walk(state, [Direction.RIGHT])
        rest, state = _rotate_from_below(state, tile_id, target, frozen)
    return moves + lift + rest, state


_ROTATIONS: dict[RingPosition, Callable[..., Step]] = {
    RingPosition.TARGET: _rotate_from_target,
    RingPosition.RIGHT: _rotate_from_right,
    RingPosition.BELOW: _rotate_from_below,
    RingPosition.DIAGONAL: _rotate_from_diagonal,
}


def rotate(
    state: PuzzleState, tile_id: int, target: Slot, frozen: AbstractSet[Slot]
) -> Step:
    """Cycle *tile_id* from anywhere in the ring at *target* onto *target*."""
    position = ring_position(state.tile(tile_id).slot, target)
    if position is None:
        raise SolverFaultError(
            f"Tile {tile_id} at {state.tile(tile_id).slot} is outside "
            f"the ring at {target}."
        )
    return _ROTATIONS[position](state, tile_id, target, frozen)


def place_piece(
    state: PuzzleState,
    tile_id: int,
    target: Slot,
    frozen: AbstractSet[Slot],
    limits: SolverLimits | None = None,
) -> Step:
    """Move *tile_id* onto *target* without touching *frozen* cells."""
    limits = limits or DEFAULT_LIMITS
    if state.tile(tile_id).slot == target:
        return [], state
    approach, state = walk_empty_to_piece(state, tile_id, frozen)
    slope, state = slope_walk_to_target(
        state, tile_id, target, frozen, limits.slope_walk_iterations
    )
    turn, state = rotate(state, tile_id, target, frozen)
    return approach + slope + turn, state


# -- last pair of a row or column -------------------------------------------------


def solve_last_piece_in_row(
    state: PuzzleState,
    tile_id: int,
    frozen: AbstractSet[Slot],
    limits: SolverLimits | None = None,
) -> Step:
    """Place *tile_id*, the last tile of its row, together with its neighbour.

    The neighbour (``tile_id - 1``) is parked in the corner first, the last
    tile is staged directly below the corner and the pair then drops into
    place with a three-step turn.  If the last tile is caught in the notch
    the pair is swapped with :data:`ROW_NOTCH_ESCAPE` instead.  Needs two
    free rows below the pair.
    """
    row_size = state.row_size
    notch = goal_slot(tile_id - 1, row_size)
    corner = goal_slot(tile_id, row_size)
    if corner.column != row_size - 1:
        raise SolverFaultError(f"Tile {tile_id} is not the last tile of its row.")
    staging = corner.step(Direction.DOWN)
    pivot = notch.step(Direction.DOWN)
    return _solve_last_pair(
        state,
        tile_id,
        tile_id - 1,
        (notch, corner, staging, pivot),
        frozen,
        Direction.DOWN,
        ROW_NOTCH_ESCAPE,
        _ROW_FINISH,
        limits,
    )


def solve_last_piece_in_column(
    state: PuzzleState,
    tile_id: int,
    frozen: AbstractSet[Slot],
    limits: SolverLimits | None = None,
) -> Step:
    """Column counterpart of :func:`solve_last_piece_in_row`.

    The neighbour is ``tile_id - row_size`` and the staging cell is to the
    right of the corner.  Needs two free columns right of the pair.
    """
    row_size = state.row_size
    notch = goal_slot(tile_id - row_size, row_size)
    corner = goal_slot(tile_id, row_size)
    if corner.row != state.column_size - 1:
        raise SolverFaultError(f"Tile {tile_id} is not the last tile of its column.")
    staging = corner.step(Direction.RIGHT)
    pivot = notch.step(Direction.RIGHT)
    return _solve_last_pair(
        state,
        tile_id,
        tile_id - row_size,
        (notch, corner, staging, pivot),
        frozen,
        Direction.RIGHT,
        COLUMN_NOTCH_ESCAPE,
        _COLUMN_FINISH,
        limits,
    )


def _solve_last_pair(
    state: PuzzleState,
    last_id: int,
    partner_id: int,
    cells: tuple[Slot, Slot, Slot, Slot],
    frozen: AbstractSet[Slot],
    clear: Direction,
    escape: tuple[Direction, ...],
    finish: tuple[Direction, ...],
    limits: SolverLimits | None,
) -> Step:
    notch, corner, staging, pivot = cells
    if state.tile(partner_id).slot == notch and state.tile(last_id).slot == corner:
        return [], state

    moves, state = place_piece(state, partner_id, corner, frozen, limits)
    if state.empty_location == notch:
        step, state = walk(state, [clear])
        moves += step

    pair = frozen | {notch, corner}
    if state.tile(last_id).slot == notch:
        logger.debug("Tile %d is stuck in the notch, swapping the pair", last_id)
        approach, state = walk_empty_to_slot(state, pivot, pair)
        swap, state = walk(state, escape)
        return moves + approach + swap, state

    staged, state = place_piece(state, last_id, staging, pair, limits)
    approach, state = walk_empty_to_slot(state, pivot, pair | {staging})
    turn, state = walk(state, finish)
    return moves + staged + approach + turn, state


# -- orchestration --------------------------------------------------------------


class LayerKind(StrEnum):
    ROW = "row"
    COLUMN = "column"


@dataclass(frozen=True)
class Layer:
    """One row or column to peel; *top*/*left* is its first unsolved cell."""

    kind: LayerKind
    top: int
    left: int

    def ids(self, row_size: int, column_size: int) -> list[int]:
        if self.kind is LayerKind.ROW:
            return row_ids(self.top, row_size)[self.left :]
        return column_ids(self.left, row_size, column_size)[self.top :]


@dataclass(frozen=True)
class PeelPlan:
    layers: list[Layer]
    residual: Slot


def peel_layers(row_size: int, column_size: int) -> PeelPlan:
    """Plan which rows and columns to solve before the residual search.

    The longer side of the unsolved block is peeled first until what is left
    fits in a 2×3 or 3×2 block.
    """
    layers: list[Layer] = []
    top = left = 0
    while True:
        rows = column_size - top
        columns = row_size - left
        if (rows <= 2 and columns <= 3) or (rows <= 3 and columns <= 2):
            break
        if rows >= columns:
            layers.append(Layer(LayerKind.ROW, top, left))
            top += 1
        else:
            layers.append(Layer(LayerKind.COLUMN, top, left))
            left += 1
    return PeelPlan(layers, Slot(top, left))


def solved_region(
    row_size: int, column_size: int, top: int, left: int
) -> frozenset[Slot]:
    """Cells above row *top* or left of column *left*."""
    return frozenset(
        Slot(row, column)
        for row in range(column_size)
        for column in range(row_size)
        if row < top or column < left
    )


def solve_row(
    state: PuzzleState,
    row: int,
    left: int = 0,
    limits: SolverLimits | None = None,
) -> Step:
    """Solve *row* from column *left* to the right edge.

    Rows above and columns left of *left* must already be solved.
    """
    ids = row_ids(row, state.row_size)[left:]
    frozen = solved_region(state.row_size, state.column_size, row, left)
    return _solve_line(state, ids, frozen, solve_last_piece_in_row, limits)


def solve_column(
    state: PuzzleState,
    column: int,
    top: int = 0,
    limits: SolverLimits | None = None,
) -> Step:
    """Solve *column* from row *top* to the bottom edge."""
    ids = column_ids(column, state.row_size, state.column_size)[top:]
    frozen = solved_region(state.row_size, state.column_size, top, column)
    return _solve_line(state, ids, frozen, solve_last_piece_in_column, limits)


def _solve_line(
    state: PuzzleState,
    ids: list[int],
    frozen: frozenset[Slot],
    finish_pair: Callable[..., Step],
    limits: SolverLimits | None,
) -> Step:
    moves: list[Move] = []
    for tile_id in ids[:-2]:
        target = goal_slot(tile_id, state.row_size)
        placed, state = place_piece(state, tile_id, target, frozen, limits)
        moves += placed
        frozen = frozen | {target}
    pair, state = finish_pair(state, ids[-1], frozen, limits)
    return moves + pair, state


def solve_layer(
    state: PuzzleState, layer: Layer, limits: SolverLimits | None = None
) -> Step:
    if layer.kind is LayerKind.ROW:
        return solve_row(state, layer.top, layer.left, limits)
    return solve_column(state, layer.left, layer.top, limits)


def solve_piece(
    state: PuzzleState, tile_id: int, limits: SolverLimits | None = None
) -> Step:
    """Solve *tile_id* assuming every tile peeled before it is in place.

    The last tile of a row or column brings its neighbour along.  A tile in
    the residual block solves the whole block.
    """
    row_size, column_size = state.row_size, state.column_size
    plan = peel_layers(row_size, column_size)
    for layer in plan.layers:
        ids = layer.ids(row_size, column_size)
        if tile_id not in ids:
            continue
        frozen = solved_region(row_size, column_size, layer.top, layer.left)
        index = ids.index(tile_id)
        frozen = frozen | {goal_slot(i, row_size) for i in ids[: min(index, len(ids) - 2)]}
        if index < len(ids) - 1:
            return place_piece(
                state, tile_id, goal_slot(tile_id, row_size), frozen, limits
            )
        if layer.kind is LayerKind.ROW:
            return solve_last_piece_in_row(state, tile_id, frozen, limits)
        return solve_last_piece_in_column(state, tile_id, frozen, limits)

    if not state.in_bounds(goal_slot(tile_id, row_size)):
        raise KeyError(tile_id)
    result = solve_residual(state, plan.residual, limits)
    return result.moves, result.state
