"""Solver test suite: convergence, replay and error propagation.

Layouts are scrambled from fixed seeds.  Every returned move list is
replayed through the real game engine; each move must change the board and
the last one must leave it solved.  Tests are hard-killed by
``pytest-timeout`` (configured in ``pyproject.toml``).
"""

from __future__ import annotations

import random

import pytest

from tilepuzzle.config import SolverLimits
from tilepuzzle.engine.gamegenerator import GameGenerator
from tilepuzzle.engine.gameplay import GamePlay
from tilepuzzle.engine.gamesolver import Solver, solve_puzzle, solve_puzzle_with_trace
from tilepuzzle.errors import SolverFaultError, UnsolvablePuzzleError
from tilepuzzle.models import Move, PuzzleState

SHAPES = [
    (2, 2), (3, 2), (2, 3), (3, 3), (4, 4), (5, 5),
    (3, 5), (5, 3), (2, 5), (5, 2), (4, 7), (7, 4),
]


# -- helpers ------------------------------------------------------------------


def _assert_solve(state: PuzzleState, label: str) -> list[Move]:
    """Solve the board and verify the returned moves reach the goal state."""
    moves = Solver.solve(state)

    # ---- move-list sanity ---------------------------------------------------
    assert isinstance(moves, list), "solve() must return a list of Move"
    assert all(isinstance(m, Move) for m in moves), "Every element must be a Move"
    if not state.is_solved():
        assert len(moves) > 0, f"Unsolved board returned 0 moves ({label})"

    # ---- apply moves via the real game engine and check win -----------------
    game = GamePlay.from_state(state)
    for i, move in enumerate(moves):
        ok = game.dispatch(move)
        assert ok, (
            f"Move {i} ({move.direction.value}) was invalid at empty "
            f"{game.state.empty_location}  ({label})"
        )

    assert game.is_won, f"Board not solved after {len(moves)} moves ({label})"
    return moves


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("row_size, column_size", SHAPES)
@pytest.mark.parametrize("seed", range(5))
def test_solve_shapes(row_size: int, column_size: int, seed: int) -> None:
    state = GameGenerator.generate(row_size, column_size, random.Random(seed))
    _assert_solve(state, f"{row_size}x{column_size}-seed{seed}")


@pytest.mark.parametrize("seed", range(3))
def test_solve_10x10(seed: int) -> None:
    state = GameGenerator.generate(10, 10, random.Random(seed))
    _assert_solve(state, f"10x10-seed{seed}")


def test_solved_board_needs_no_moves() -> None:
    assert solve_puzzle(PuzzleState.solved(4, 4)) == []
    assert Solver.hint(PuzzleState.solved(4, 4)) is None


def test_replay_matches_reported_state() -> None:
    state = GameGenerator.generate(6, 6, random.Random(42))
    result = solve_puzzle_with_trace(state)

    replayed = GamePlay.from_state(state)
    for move in result.moves:
        replayed.dispatch(move)
    assert replayed.state == result.state
    assert result.state.is_solved()

    assert solve_puzzle(state) == result.moves


def test_trace_accounts_for_every_move() -> None:
    state = GameGenerator.generate(5, 4, random.Random(8))
    result = solve_puzzle_with_trace(state)
    layer_total = sum(count for _, count in result.layer_moves)
    assert layer_total + result.residual_moves == len(result.moves)
    assert [layer.kind.value for layer, _ in result.layer_moves] == [
        "column", "row", "column", "row",
    ]


def test_hint_is_first_move_of_solution() -> None:
    state = GameGenerator.generate(4, 4, random.Random(5))
    assert Solver.hint(state) == Solver.solve(state)[0]


def test_unsolvable_board_raises() -> None:
    state = PuzzleState.from_flat(3, 3, [2, 1, 3, 4, 5, 6, 7, 8, -1])
    assert not Solver.is_solvable(state)
    with pytest.raises(UnsolvablePuzzleError):
        Solver.solve(state)


def test_solver_faults_propagate() -> None:
    state = PuzzleState.from_flat(
        5, 5, [24, 23, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
               16, 17, 18, 19, 20, 21, 22, 2, 1, -1],
    )
    assert Solver.is_solvable(state)
    with pytest.raises(SolverFaultError):
        solve_puzzle(state, SolverLimits(slope_walk_iterations=1))
