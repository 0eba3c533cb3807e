from tilepuzzle.engine.gamegenerator.generator import (
    GameGenerator,
    inversion_count,
    is_solvable,
    is_solvable_order,
    row_number_from_bottom,
)

__all__ = [
    "GameGenerator",
    "inversion_count",
    "is_solvable",
    "is_solvable_order",
    "row_number_from_bottom",
]
