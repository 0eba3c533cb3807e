"""Rich terminal output: board tables, panels and solution playback."""

from __future__ import annotations

import logging
import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tilepuzzle.engine.gameplay import GamePlay
from tilepuzzle.engine.gamesolver import SolveResult
from tilepuzzle.models import Move, PuzzleState

logger = logging.getLogger(__name__)

console = Console()


# -- board rendering ----------------------------------------------------------


def render_board(state: PuzzleState) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(state.empty_id - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(state.row_size):
        table.add_column(width=width + 1, justify="center")

    for r in range(state.column_size):
        cells: list[str] = []
        for c in range(state.row_size):
            tile_id = state.tile_id_at(r, c)
            if tile_id == state.empty_id:
                cells.append("[dim]·[/dim]")
            elif state.is_tile_correct(tile_id):
                cells.append(f"[bold green]{tile_id:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{tile_id:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def board_panel(state: PuzzleState, title: str, style: str = "cyan") -> Panel:
    size = f"{state.row_size}×{state.column_size}"
    return Panel(
        Align.center(render_board(state)),
        title=f"[bold {style}]{title}  {size}[/bold {style}]",
        border_style=style,
        padding=(1, 2),
    )


def show_board(state: PuzzleState, title: str = "Puzzle") -> None:
    console.print()
    console.print(Align.center(board_panel(state, title)))


# -- solution playback --------------------------------------------------------


def _draw_step(game: GamePlay, index: int, total: int, move: Move) -> None:
    console.clear()
    progress = Text()
    progress.append(f"  Solving… move {index}/{total} ", style="bold cyan")
    progress.append(f"({move.direction.value})", style="dim")
    console.print()
    console.print(Align.center(board_panel(game.state, "Auto-Solve")))
    console.print(Align.center(progress))


def replay(
    state: PuzzleState,
    moves: list[Move],
    delay: float = 0.05,
    animate: bool = True,
) -> PuzzleState:
    """Feed *moves* through a game session and return the final state.

    With *animate* the board is redrawn after every move, *delay* seconds
    apart.
    """
    game = GamePlay.from_state(state)
    for i, move in enumerate(moves, 1):
        game.dispatch(move)
        if animate:
            _draw_step(game, i, len(moves), move)
            time.sleep(delay)
    logger.debug("Replayed %d moves, solved=%s", len(moves), game.is_won)
    return game.state


def report_solution(result: SolveResult, final: PuzzleState) -> None:
    """Print the summary shown after a solve."""
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(len(result.moves)), style="bold cyan")
    stats.append("    Residual search: ", style="dim")
    stats.append(f"{result.residual_moves} moves", style="bold yellow")
    stats.append(f" / {result.expanded} nodes", style="dim")

    layers = Table(box=rich.box.SIMPLE, show_header=True, header_style="bold")
    layers.add_column("Layer")
    layers.add_column("Start", justify="center")
    layers.add_column("Moves", justify="right")
    for layer, count in result.layer_moves:
        layers.add_row(layer.kind.value, f"({layer.top}, {layer.left})", str(count))

    verdict = (
        Text("  Replay verified: solved.", style="bold green")
        if final.is_solved() and final == result.state
        else Text("  Replay did not reach the solved layout!", style="bold red")
    )

    parts = [Align.center(render_board(final)), Text(""), Align.center(stats)]
    if result.layer_moves:
        parts += [Text(""), Align.center(layers)]
    parts += [Text(""), Align.center(verdict)]
    panel = Panel(
        Group(*parts),
        title="[bold green]Solved[/bold green]",
        border_style="green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))


def report_failure(message: str) -> None:
    console.print()
    console.print(
        Align.center(
            Panel(
                Text(message, style="red"),
                title="[bold red]Could not solve automatically[/bold red]",
                border_style="red",
                padding=(1, 2),
            )
        )
    )
