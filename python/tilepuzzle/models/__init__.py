from tilepuzzle.models.action import Action, AutoComplete, Move, Reset, Resize
from tilepuzzle.models.board import (
    EMPTY_SENTINEL,
    Direction,
    PuzzleState,
    Slot,
    Tile,
)

__all__ = [
    "Action",
    "AutoComplete",
    "Direction",
    "EMPTY_SENTINEL",
    "Move",
    "PuzzleState",
    "Reset",
    "Resize",
    "Slot",
    "Tile",
]
