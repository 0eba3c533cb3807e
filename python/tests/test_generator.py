"""Scrambler: parity rule and solvable output."""

from __future__ import annotations

import random

import pytest

from tilepuzzle.engine.gamegenerator import (
    GameGenerator,
    inversion_count,
    is_solvable,
    is_solvable_order,
    row_number_from_bottom,
)
from tilepuzzle.engine.gameplay import apply
from tilepuzzle.models import Direction, Move, PuzzleState


class _FixedShuffle:
    """Stands in for ``random.Random`` and "shuffles" into a fixed order."""

    def __init__(self, order: list[int]) -> None:
        self.order = order

    def shuffle(self, items: list[int]) -> None:
        items[:] = self.order


def test_inversion_count_ignores_empty() -> None:
    assert inversion_count([3, 4, 1, 2], 5) == 4
    assert inversion_count([2, 9, 1], 9) == 1
    assert inversion_count(list(range(1, 10)), 9) == 0


def test_row_number_from_bottom_is_one_based() -> None:
    assert row_number_from_bottom(4, 4, 15) == 1
    assert row_number_from_bottom(4, 4, 0) == 4
    assert row_number_from_bottom(3, 2, 4) == 1


@pytest.mark.parametrize("row_size", range(2, 7))
@pytest.mark.parametrize("column_size", range(2, 7))
def test_solved_layout_is_solvable(row_size: int, column_size: int) -> None:
    assert is_solvable(PuzzleState.solved(row_size, column_size))


@pytest.mark.parametrize("row_size, column_size", [(3, 3), (4, 4), (4, 3), (3, 4)])
def test_swapping_two_tiles_breaks_solvability(row_size: int, column_size: int) -> None:
    order = list(range(1, row_size * column_size + 1))
    order[0], order[1] = order[1], order[0]
    assert not is_solvable_order(order, row_size, column_size)


def test_moving_the_empty_cell_keeps_even_width_solvable() -> None:
    state = apply(PuzzleState.solved(4, 4), Move(16, Direction.UP))
    assert is_solvable(state)


def test_parity_fix_swaps_first_two() -> None:
    rng = _FixedShuffle([2, 1, 3, 4, 5, 6, 7, 8, 9])
    assert GameGenerator.shuffled_order(3, 3, rng) == list(range(1, 10))  # type: ignore[arg-type]


def test_parity_fix_swaps_last_two_when_empty_leads() -> None:
    rng = _FixedShuffle([9, 2, 1, 3, 4, 5, 6, 7, 8])
    order = GameGenerator.shuffled_order(3, 3, rng)  # type: ignore[arg-type]
    assert order == [9, 2, 1, 3, 4, 5, 6, 8, 7]
    assert is_solvable_order(order, 3, 3)


def test_scramble_4x4_is_always_solvable() -> None:
    rng = random.Random(1234)
    for _ in range(1000):
        state = GameGenerator.generate(4, 4, rng)
        assert is_solvable(state)


@pytest.mark.parametrize("row_size", [2, 3, 5, 6])
@pytest.mark.parametrize("column_size", [2, 3, 4, 7])
def test_scramble_any_shape_is_solvable(row_size: int, column_size: int) -> None:
    rng = random.Random(row_size * 100 + column_size)
    for _ in range(50):
        state = GameGenerator.generate(row_size, column_size, rng)
        assert (state.row_size, state.column_size) == (row_size, column_size)
        assert is_solvable(state)


def test_scramble_is_reproducible_with_a_seed() -> None:
    first = GameGenerator.generate(5, 5, random.Random(3))
    second = GameGenerator.generate(5, 5, random.Random(3))
    assert first == second
