"""Generates solvable sliding puzzle layouts."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from tilepuzzle.models.board import PuzzleState

logger = logging.getLogger(__name__)


def inversion_count(order: Sequence[int], empty_id: int) -> int:
    """Count pairs of tiles that appear out of order, ignoring the empty id.

    Example: ``[3, 4, 1, 2]`` has four inversions (3>1, 3>2, 4>1, 4>2).
    """
    tiles = [tile_id for tile_id in order if tile_id != empty_id]
    inversions = 0
    for i, tile_id in enumerate(tiles):
        for later in tiles[i + 1 :]:
            if tile_id > later:
                inversions += 1
    return inversions


def row_number_from_bottom(row_size: int, column_size: int, index: int) -> int:
    """Return the 1-based row of cell *index*, counting up from the bottom."""
    return column_size - index // row_size


def is_solvable_order(order: Sequence[int], row_size: int, column_size: int) -> bool:
    """Apply the inversion-parity rule to a row-major id order.

    Odd width: solvable iff the inversion count is even.  Even width:
    solvable iff inversions plus the empty cell's row (1-based, from the
    bottom) is odd.
    """
    empty_id = row_size * column_size
    inversions = inversion_count(order, empty_id)
    if row_size % 2 == 1:
        return inversions % 2 == 0
    from_bottom = row_number_from_bottom(row_size, column_size, order.index(empty_id))
    return (inversions + from_bottom) % 2 == 1


def is_solvable(state: PuzzleState) -> bool:
    """Return True if *state* can reach the solved layout."""
    return is_solvable_order(state.cells, state.row_size, state.column_size)


class GameGenerator:
    """Creates solvable layouts from a shuffled id order."""

    @staticmethod
    def solved(row_size: int, column_size: int) -> PuzzleState:
        """Return the goal layout (ids in order, empty bottom-right)."""
        return PuzzleState.solved(row_size, column_size)

    @staticmethod
    def shuffled_order(
        row_size: int, column_size: int, rng: random.Random | None = None
    ) -> list[int]:
        """Return a uniformly shuffled, solvable row-major id order."""
        rng = rng or random.Random()
        empty_id = row_size * column_size
        order = list(range(1, empty_id + 1))
        rng.shuffle(order)

        if not is_solvable_order(order, row_size, column_size):
            # Swapping two tiles flips the inversion parity by exactly one.
            if empty_id not in (order[0], order[1]):
                order[0], order[1] = order[1], order[0]
            else:
                order[-1], order[-2] = order[-2], order[-1]
        return order

    @staticmethod
    def generate(
        row_size: int, column_size: int, rng: random.Random | None = None
    ) -> PuzzleState:
        """Return a random *solvable* layout of the given size."""
        order = GameGenerator.shuffled_order(row_size, column_size, rng)
        state = PuzzleState.from_flat(row_size, column_size, order)
        logger.debug(
            "Scrambled %d×%d puzzle, empty cell at (%d, %d)",
            row_size,
            column_size,
            state.empty_location.row,
            state.empty_location.column,
        )
        return state
