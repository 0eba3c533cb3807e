"""Core gameplay logic: applies actions to puzzle states."""

from __future__ import annotations

import logging
import random

from tilepuzzle.engine.gamegenerator import GameGenerator
from tilepuzzle.models.action import Action, AutoComplete, Move, Reset, Resize
from tilepuzzle.models.board import Direction, PuzzleState, Slot, Tile

logger = logging.getLogger(__name__)


def apply(
    state: PuzzleState, action: Action, rng: random.Random | None = None
) -> PuzzleState:
    """Return the state that results from applying *action* to *state*.

    *state* is never modified.  Illegal moves return *state* itself.
    """
    if isinstance(action, Move):
        return _slide(state, action)
    if isinstance(action, Reset):
        return GameGenerator.generate(state.row_size, state.column_size, rng)
    if isinstance(action, Resize):
        return GameGenerator.generate(action.row_size, action.column_size, rng)
    if isinstance(action, AutoComplete):
        return GameGenerator.solved(state.row_size, state.column_size)
    raise TypeError(f"Unknown action: {action!r}")


def _slide(state: PuzzleState, move: Move) -> PuzzleState:
    """Line-slide the named tile toward the empty cell.

    Every tile between the target and the empty cell (the target included)
    moves one step toward the empty cell, which jumps to the target's old
    position.
    """
    if not 1 <= move.id <= state.empty_id:
        return state

    empty = state.empty_location
    target = state.tile(move.id).slot
    direction = move.direction

    if move.id == state.empty_id:
        # The empty cell cannot move itself: slide the neighbour that lies
        # in the requested direction the opposite way.
        target = empty.step(direction)
        direction = direction.opposite
        if not state.in_bounds(target):
            logger.error(
                "Tried to move a tile that was out of bounds: (%d, %d)",
                target.row,
                target.column,
            )
            return state

    dr, dc = direction.delta
    if dr:
        if target.column != empty.column or (empty.row - target.row) * dr <= 0:
            return state
        distance = abs(empty.row - target.row)
    else:
        if target.row != empty.row or (empty.column - target.column) * dc <= 0:
            return state
        distance = abs(empty.column - target.column)

    moved: dict[int, Slot] = {state.empty_id: target}
    for step in range(distance):
        row = target.row + step * dr
        column = target.column + step * dc
        moved[state.tile_id_at(row, column)] = Slot(row + dr, column + dc)

    tiles = tuple(
        Tile(tile.id, moved[tile.id].row, moved[tile.id].column)
        if tile.id in moved
        else tile
        for tile in state.tiles
    )
    return PuzzleState(state.row_size, state.column_size, tiles, target)


def direction_toward_empty(state: PuzzleState, tile_id: int) -> Direction | None:
    """Return the direction that slides *tile_id* toward the empty cell.

    ``None`` if the tile does not share a row or column with the empty cell.
    """
    tile = state.tile(tile_id)
    empty = state.empty_location
    if tile_id == state.empty_id:
        return None
    if empty.column > tile.column and empty.row == tile.row:
        return Direction.RIGHT
    if empty.column < tile.column and empty.row == tile.row:
        return Direction.LEFT
    if empty.row > tile.row and empty.column == tile.column:
        return Direction.DOWN
    if empty.row < tile.row and empty.column == tile.column:
        return Direction.UP
    return None


class GamePlay:
    """Orchestrates a single game session.

    Holds the current state and feeds every action through :func:`apply`.
    """

    def __init__(
        self,
        row_size: int,
        column_size: int,
        rng: random.Random | None = None,
    ) -> None:
        self.rng = rng
        self.state = GameGenerator.generate(row_size, column_size, rng)
        self.moves: int = 0

    @classmethod
    def from_state(
        cls, state: PuzzleState, rng: random.Random | None = None
    ) -> GamePlay:
        """Create a game session from an existing state."""
        obj = object.__new__(cls)
        obj.rng = rng
        obj.state = state
        obj.moves = 0
        return obj

    # -- actions --------------------------------------------------------------

    def dispatch(self, action: Action) -> bool:
        """Apply *action* and return True if the layout changed."""
        new_state = apply(self.state, action, self.rng)
        if new_state == self.state:
            return False
        self.state = new_state
        if isinstance(action, Move):
            self.moves += 1
        else:
            self.moves = 0
        return True

    def move_tile(self, tile_id: int) -> bool:
        """Slide *tile_id* toward the empty cell if they share a line."""
        direction = direction_toward_empty(self.state, tile_id)
        if direction is None:
            return False
        return self.dispatch(Move(tile_id, direction))

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved()
