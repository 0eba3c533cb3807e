"""Actions accepted by the transition engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from tilepuzzle.models.board import Direction


@dataclass(frozen=True)
class Move:
    """Slide tile *id* in *direction*.

    When *id* is the empty tile, *direction* is where the empty cell goes.
    """

    id: int
    direction: Direction


@dataclass(frozen=True)
class Reset:
    """Re-scramble at the current dimensions."""


@dataclass(frozen=True)
class Resize:
    """Re-scramble at new dimensions."""

    row_size: int
    column_size: int


@dataclass(frozen=True)
class AutoComplete:
    """Force the solved layout."""


Action = Union[Move, Reset, Resize, AutoComplete]
