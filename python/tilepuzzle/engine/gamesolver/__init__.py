from tilepuzzle.engine.gamesolver.astar import (
    SearchResult,
    a_star_search,
    a_star_solve,
    manhattan_distance,
    solve_residual,
)
from tilepuzzle.engine.gamesolver.min_queue import MinQueue
from tilepuzzle.engine.gamesolver.peeling import (
    Layer,
    LayerKind,
    PeelPlan,
    RingPosition,
    peel_layers,
    place_piece,
    rotate,
    slope_walk_to_target,
    solve_column,
    solve_last_piece_in_column,
    solve_last_piece_in_row,
    solve_piece,
    solve_row,
    walk_empty_to_piece,
    walk_empty_to_slot,
)
from tilepuzzle.engine.gamesolver.solver import (
    SolveResult,
    Solver,
    solve_puzzle,
    solve_puzzle_with_trace,
)

__all__ = [
    "Layer",
    "LayerKind",
    "MinQueue",
    "PeelPlan",
    "RingPosition",
    "SearchResult",
    "SolveResult",
    "Solver",
    "a_star_search",
    "a_star_solve",
    "manhattan_distance",
    "peel_layers",
    "place_piece",
    "rotate",
    "slope_walk_to_target",
    "solve_column",
    "solve_last_piece_in_column",
    "solve_last_piece_in_row",
    "solve_piece",
    "solve_puzzle",
    "solve_puzzle_with_trace",
    "solve_residual",
    "solve_row",
    "walk_empty_to_piece",
    "walk_empty_to_slot",
]
