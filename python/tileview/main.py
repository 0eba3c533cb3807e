#!/usr/bin/env python3
"""Sliding tile puzzle solver.

Usage::

    tile-puzzle scramble -w 4 -h 4 --seed 7
    tile-puzzle solve -w 5 -h 5                  # scramble, solve, animate
    tile-puzzle solve --tiles 1,2,3,4,5,6,7,-1,8 --no-animate
"""

import random
from typing import Optional

import typer

from tilepuzzle import DEFAULT_LIMITS, PuzzleError, SolverLimits
from tilepuzzle.engine.gamegenerator import GameGenerator
from tilepuzzle.engine.gamesolver import solve_puzzle_with_trace
from tilepuzzle.models import PuzzleState
from tileview.cli import app as view
from tileview.logging_utils import get_level_from_string, setup_logger

app = typer.Typer(add_completion=False, context_settings={"help_option_names": ["--help"]})


# -- helpers ------------------------------------------------------------------


def parse_tiles(raw: str, row_size: int, column_size: int) -> PuzzleState:
    """Build a state from comma separated row-major ids (``-1`` is empty)."""
    try:
        flat = [int(part) for part in raw.replace(" ", "").split(",") if part]
    except ValueError as exc:
        raise typer.BadParameter(f"Tiles must be integers: {exc}") from exc
    try:
        return PuzzleState.from_flat(row_size, column_size, flat)
    except PuzzleError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _starting_state(
    tiles: Optional[str], width: int, height: int, seed: Optional[int]
) -> PuzzleState:
    if tiles:
        return parse_tiles(tiles, width, height)
    return GameGenerator.generate(width, height, random.Random(seed))


# -- CLI entry point ----------------------------------------------------------

WidthOption = typer.Option(4, "-w", "--width", min=2, max=12, help="Tiles per row.")
HeightOption = typer.Option(4, "-h", "--height", min=2, max=12, help="Tiles per column.")
SeedOption = typer.Option(None, "--seed", help="Seed for a reproducible scramble.")
LogLevelOption = typer.Option("warning", "--log-level", help="debug, info, warning or error.")


@app.command()
def scramble(
    width: int = WidthOption,
    height: int = HeightOption,
    seed: Optional[int] = SeedOption,
    log_level: str = LogLevelOption,
) -> None:
    """Print a random solvable layout."""
    setup_logger("tilepuzzle", get_level_from_string(log_level))
    state = GameGenerator.generate(width, height, random.Random(seed))
    view.show_board(state, "Scrambled")
    typer.echo(",".join(str(tile_id) for tile_id in state.cells))


@app.command()
def solve(
    width: int = WidthOption,
    height: int = HeightOption,
    seed: Optional[int] = SeedOption,
    tiles: Optional[str] = typer.Option(
        None, "--tiles",
        help="Row-major ids, comma separated; -1 marks the empty cell.",
    ),
    animate: bool = typer.Option(True, "--animate/--no-animate", help="Play the solution back."),
    delay: float = typer.Option(0.05, "--delay", min=0.0, help="Seconds between frames."),
    slope_walk_iterations: int = typer.Option(
        DEFAULT_LIMITS.slope_walk_iterations, "--slope-walk-iterations", min=1,
        help="Step ceiling for moving one tile toward its target.",
    ),
    max_open_nodes: int = typer.Option(
        DEFAULT_LIMITS.max_open_nodes, "--max-open-nodes", min=1,
        help="Open-set bound for the residual search.",
    ),
    log_level: str = LogLevelOption,
) -> None:
    """Solve a scrambled (or given) layout and replay the solution."""
    setup_logger("tilepuzzle", get_level_from_string(log_level))
    setup_logger("tileview", get_level_from_string(log_level))
    state = _starting_state(tiles, width, height, seed)
    view.show_board(state, "Start")

    limits = SolverLimits(slope_walk_iterations, max_open_nodes)
    try:
        result = solve_puzzle_with_trace(state, limits)
    except PuzzleError as exc:
        view.report_failure(str(exc))
        raise typer.Exit(code=1) from exc

    final = view.replay(state, result.moves, delay, animate)
    view.report_solution(result, final)
    if not final.is_solved():
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
