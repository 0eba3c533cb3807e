"""Grid model for the sliding tile puzzle.

``row_size`` is the number of tiles in one row (the grid width) and
``column_size`` the number of tiles in one column (the grid height).  Tile
ids run from 1 to ``row_size * column_size``; the largest id is the empty
cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from functools import cached_property
from typing import Sequence

from tilepuzzle.errors import InvalidPuzzleError

# Marks the empty cell in matrix form.
EMPTY_SENTINEL = -1


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Slot:
    """A zero-based ``(row, column)`` grid coordinate."""

    row: int
    column: int

    def step(self, direction: Direction) -> Slot:
        dr, dc = direction.delta
        return Slot(self.row + dr, self.column + dc)


@dataclass(frozen=True)
class Tile:
    id: int
    row: int
    column: int

    @property
    def slot(self) -> Slot:
        return Slot(self.row, self.column)


@dataclass(frozen=True)
class PuzzleState:
    """An immutable puzzle layout.

    ``tiles`` may be given in any order; it is stored sorted by id so two
    states with the same layout compare equal.  Construction validates the
    layout and raises :class:`InvalidPuzzleError` for malformed input.
    """

    row_size: int
    column_size: int
    tiles: tuple[Tile, ...]
    empty_location: Slot

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "tiles", tuple(sorted(self.tiles, key=lambda t: t.id))
        )
        self._validate()

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, row_size: int, column_size: int) -> PuzzleState:
        """Return the goal layout (ids in row-major order, empty bottom-right)."""
        count = row_size * column_size
        return cls.from_flat(row_size, column_size, list(range(1, count + 1)))

    @classmethod
    def from_flat(
        cls, row_size: int, column_size: int, flat: Sequence[int]
    ) -> PuzzleState:
        """Create a state from a flat row-major list of tile ids.

        Example::

            PuzzleState.from_flat(3, 3, [1, 2, 3, 4, 5, 6, 7, 9, 8])
        """
        if row_size < 2 or column_size < 2:
            raise InvalidPuzzleError(
                f"Grid must be at least 2×2, got {row_size}×{column_size}."
            )
        count = row_size * column_size
        if len(flat) != count:
            raise InvalidPuzzleError(
                f"Expected {count} tiles for a {row_size}×{column_size} grid, "
                f"got {len(flat)}."
            )
        tiles: list[Tile] = []
        empty_location = Slot(-1, -1)
        for index, tile_id in enumerate(flat):
            if tile_id == EMPTY_SENTINEL:
                tile_id = count
            row, column = divmod(index, row_size)
            tiles.append(Tile(tile_id, row, column))
            if tile_id == count:
                empty_location = Slot(row, column)
        return cls(row_size, column_size, tuple(tiles), empty_location)

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]]) -> PuzzleState:
        """Create a state from a list of rows.

        The empty cell may be written as ``-1`` or as the empty id.
        """
        if not matrix or not matrix[0]:
            raise InvalidPuzzleError("Matrix must have at least one row and column.")
        row_size = len(matrix[0])
        if any(len(row) != row_size for row in matrix):
            raise InvalidPuzzleError("Matrix rows must all have the same length.")
        flat = [tile_id for row in matrix for tile_id in row]
        return cls.from_flat(row_size, len(matrix), flat)

    # -- queries --------------------------------------------------------------

    @property
    def empty_id(self) -> int:
        return self.row_size * self.column_size

    @cached_property
    def cells(self) -> tuple[int, ...]:
        """Tile ids in row-major cell order."""
        cells = [0] * self.empty_id
        for tile in self.tiles:
            cells[tile.row * self.row_size + tile.column] = tile.id
        return tuple(cells)

    def tile(self, tile_id: int) -> Tile:
        if not 1 <= tile_id <= self.empty_id:
            raise KeyError(tile_id)
        return self.tiles[tile_id - 1]

    def tile_id_at(self, row: int, column: int) -> int:
        if not self.in_bounds(Slot(row, column)):
            raise IndexError(f"({row}, {column}) is outside the grid.")
        return self.cells[row * self.row_size + column]

    def tile_at(self, row: int, column: int) -> Tile:
        return self.tile(self.tile_id_at(row, column))

    def in_bounds(self, slot: Slot) -> bool:
        return 0 <= slot.row < self.column_size and 0 <= slot.column < self.row_size

    def goal_slot(self, tile_id: int) -> Slot:
        return goal_slot(tile_id, self.row_size)

    def is_solved(self) -> bool:
        """Check that tiles appear in (row, column) order by id."""
        return all(
            tile_id == index + 1 for index, tile_id in enumerate(self.cells)
        )

    def is_tile_correct(self, tile_id: int) -> bool:
        return self.tile(tile_id).slot == self.goal_slot(tile_id)

    def to_matrix(
        self,
        origin: Slot = Slot(0, 0),
        rows: int | None = None,
        columns: int | None = None,
    ) -> list[list[int]]:
        """Return the ids of a rectangular block as a list of rows.

        The block starts at *origin* and by default extends to the
        bottom-right corner.  The empty cell is written as ``-1``.
        """
        if rows is None:
            rows = self.column_size - origin.row
        if columns is None:
            columns = self.row_size - origin.column
        matrix: list[list[int]] = []
        for row in range(origin.row, origin.row + rows):
            line: list[int] = []
            for column in range(origin.column, origin.column + columns):
                tile_id = self.tile_id_at(row, column)
                line.append(EMPTY_SENTINEL if tile_id == self.empty_id else tile_id)
            matrix.append(line)
        return matrix

    # -- validation -----------------------------------------------------------

    def _validate(self) -> None:
        if self.row_size < 2 or self.column_size < 2:
            raise InvalidPuzzleError(
                f"Grid must be at least 2×2, got {self.row_size}×{self.column_size}."
            )
        count = self.row_size * self.column_size
        if len(self.tiles) != count:
            raise InvalidPuzzleError(f"Expected {count} tiles, got {len(self.tiles)}.")
        ids = [tile.id for tile in self.tiles]
        if ids != list(range(1, count + 1)):
            raise InvalidPuzzleError(
                f"Tile ids must be exactly 1..{count} with no duplicates."
            )
        occupied: set[Slot] = set()
        for tile in self.tiles:
            if not self.in_bounds(tile.slot):
                raise InvalidPuzzleError(f"Tile {tile.id} is outside the grid.")
            if tile.slot in occupied:
                raise InvalidPuzzleError(
                    f"Two tiles share cell ({tile.row}, {tile.column})."
                )
            occupied.add(tile.slot)
        if self.tiles[count - 1].slot != self.empty_location:
            raise InvalidPuzzleError(
                "empty_location does not match the position of the empty tile."
            )


# -- id and position helpers ----------------------------------------------------


def goal_slot(tile_id: int, row_size: int) -> Slot:
    """Return the solved coordinate of *tile_id*."""
    row, column = divmod(tile_id - 1, row_size)
    return Slot(row, column)


def row_ids(row: int, row_size: int) -> list[int]:
    """Return the ids that belong in *row* of the solved layout."""
    first = row * row_size + 1
    return list(range(first, first + row_size))


def column_ids(column: int, row_size: int, column_size: int) -> list[int]:
    """Return the ids that belong in *column* of the solved layout."""
    return [row * row_size + column + 1 for row in range(column_size)]


def delta_row(state: PuzzleState, tile_id: int, target_row: int) -> int:
    return target_row - state.tile(tile_id).row


def delta_column(state: PuzzleState, tile_id: int, target_column: int) -> int:
    return target_column - state.tile(tile_id).column


def is_directly_above(slot: Slot, tile: Tile) -> bool:
    return slot.column == tile.column and slot.row == tile.row - 1


def is_directly_below(slot: Slot, tile: Tile) -> bool:
    return slot.column == tile.column and slot.row == tile.row + 1


def is_directly_left_of(slot: Slot, tile: Tile) -> bool:
    return slot.row == tile.row and slot.column == tile.column - 1


def is_directly_right_of(slot: Slot, tile: Tile) -> bool:
    return slot.row == tile.row and slot.column == tile.column + 1


def is_right_of(slot: Slot, tile: Tile) -> bool:
    return slot.row == tile.row and slot.column > tile.column


def in_square_ring(tile: Tile, target: Slot) -> bool:
    """Check whether *tile* sits in the 2×2 ring anchored at *target*.

    The ring is the target itself plus the cells to its right, below it and
    diagonally below-right.
    """
    return (
        target.row <= tile.row <= target.row + 1
        and target.column <= tile.column <= target.column + 1
    )
