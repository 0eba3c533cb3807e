"""Grid model: construction, validation and position helpers."""

from __future__ import annotations

import pytest

from tilepuzzle.errors import InvalidPuzzleError
from tilepuzzle.models import Direction, PuzzleState, Slot, Tile
from tilepuzzle.models.board import (
    column_ids,
    delta_column,
    delta_row,
    goal_slot,
    in_square_ring,
    is_directly_above,
    is_directly_below,
    is_directly_left_of,
    is_directly_right_of,
    is_right_of,
    row_ids,
)


# -- construction -------------------------------------------------------------


def test_solved_layout_is_row_major() -> None:
    state = PuzzleState.solved(3, 2)
    assert state.to_matrix() == [[1, 2, 3], [4, 5, -1]]
    assert state.empty_id == 6
    assert state.empty_location == Slot(1, 2)
    assert state.is_solved()


def test_from_matrix_accepts_sentinel_or_empty_id() -> None:
    with_sentinel = PuzzleState.from_matrix([[1, 2], [-1, 3]])
    with_id = PuzzleState.from_matrix([[1, 2], [4, 3]])
    assert with_sentinel == with_id
    assert with_sentinel.empty_location == Slot(1, 0)
    assert not with_sentinel.is_solved()


def test_tile_order_does_not_affect_equality() -> None:
    tiles = (Tile(4, 1, 1), Tile(1, 0, 0), Tile(3, 1, 0), Tile(2, 0, 1))
    state = PuzzleState(2, 2, tiles, Slot(1, 1))
    assert state == PuzzleState.solved(2, 2)
    assert hash(state) == hash(PuzzleState.solved(2, 2))


@pytest.mark.parametrize(
    "row_size, column_size, flat",
    [
        (1, 4, [1, 2, 3, 4]),
        (2, 2, [1, 2, 3]),
        (2, 2, [1, 1, 2, 4]),
        (2, 2, [1, 2, 3, 5]),
        (2, 2, [1, 2, -1, -1]),
    ],
    ids=["too-narrow", "too-few", "duplicate", "out-of-range", "two-empty"],
)
def test_malformed_flat_layouts_are_rejected(
    row_size: int, column_size: int, flat: list[int]
) -> None:
    with pytest.raises(InvalidPuzzleError):
        PuzzleState.from_flat(row_size, column_size, flat)


def test_shared_cell_is_rejected() -> None:
    tiles = (Tile(1, 0, 0), Tile(2, 0, 0), Tile(3, 1, 0), Tile(4, 1, 1))
    with pytest.raises(InvalidPuzzleError, match="share"):
        PuzzleState(2, 2, tiles, Slot(1, 1))


def test_empty_location_must_match_empty_tile() -> None:
    solved = PuzzleState.solved(2, 2)
    with pytest.raises(InvalidPuzzleError, match="empty_location"):
        PuzzleState(2, 2, solved.tiles, Slot(0, 0))


def test_ragged_matrix_is_rejected() -> None:
    with pytest.raises(InvalidPuzzleError):
        PuzzleState.from_matrix([[1, 2, 3], [4, -1]])


def test_invalid_puzzle_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        PuzzleState.from_flat(2, 2, [])


# -- queries ------------------------------------------------------------------


def test_lookup_by_id_and_position() -> None:
    state = PuzzleState.from_matrix([[3, 1], [2, -1]])
    assert state.tile(1) == Tile(1, 0, 1)
    assert state.tile_id_at(1, 0) == 2
    assert state.tile_at(0, 0) == Tile(3, 0, 0)
    assert state.is_tile_correct(3) is False
    assert state.cells == (3, 1, 2, 4)

    with pytest.raises(KeyError):
        state.tile(0)
    with pytest.raises(IndexError):
        state.tile_id_at(2, 0)


def test_in_bounds_uses_width_for_columns() -> None:
    state = PuzzleState.solved(4, 2)
    assert state.in_bounds(Slot(1, 3))
    assert not state.in_bounds(Slot(2, 0))
    assert not state.in_bounds(Slot(0, 4))
    assert not state.in_bounds(Slot(-1, 0))


def test_to_matrix_of_a_block() -> None:
    state = PuzzleState.solved(3, 3)
    assert state.to_matrix(Slot(1, 1)) == [[5, 6], [8, -1]]
    assert state.to_matrix(Slot(0, 1), rows=2, columns=1) == [[2], [5]]


# -- helpers ------------------------------------------------------------------


def test_direction_helpers() -> None:
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.DOWN.delta == (1, 0)
    assert Direction.UP.is_vertical and not Direction.RIGHT.is_vertical
    assert Slot(1, 1).step(Direction.LEFT) == Slot(1, 0)


def test_goal_and_line_ids() -> None:
    assert goal_slot(5, 3) == Slot(1, 1)
    assert goal_slot(4, 4) == Slot(0, 3)
    assert goal_slot(6, 3) == Slot(1, 2)
    assert row_ids(1, 3) == [4, 5, 6]
    assert column_ids(2, 3, 3) == [3, 6, 9]
    assert column_ids(0, 4, 2) == [1, 5]


def test_deltas_point_from_tile_to_target() -> None:
    state = PuzzleState.solved(3, 3)
    assert delta_row(state, 9, 0) == -2
    assert delta_column(state, 1, 2) == 2


def test_adjacency_predicates() -> None:
    tile = Tile(5, 1, 1)
    assert is_directly_above(Slot(0, 1), tile)
    assert is_directly_below(Slot(2, 1), tile)
    assert is_directly_left_of(Slot(1, 0), tile)
    assert is_directly_right_of(Slot(1, 2), tile)
    assert not is_directly_above(Slot(0, 0), tile)
    assert is_right_of(Slot(1, 3), tile)
    assert not is_right_of(Slot(0, 3), tile)


def test_square_ring_membership() -> None:
    target = Slot(0, 0)
    assert in_square_ring(Tile(1, 0, 0), target)
    assert in_square_ring(Tile(1, 0, 1), target)
    assert in_square_ring(Tile(1, 1, 0), target)
    assert in_square_ring(Tile(1, 1, 1), target)
    assert not in_square_ring(Tile(1, 0, 2), target)
    assert not in_square_ring(Tile(1, 2, 0), target)
