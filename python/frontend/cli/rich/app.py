"""Rich terminal frontend — coloured tiles, panels and path overlays.

Uses the ``rich`` library for styled output while sharing the same
line parser and backend as the vanilla CLI.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gameplay import ClickResult, GamePlay
from backend.engine.gamesolver import Hint, SolveStatus
from backend.engine.pathfinder import Path
from backend.models.board import Board, CellState, Point
from backend.models.faces import DECKS
from frontend.cli.input_handler import cell_name, parse_line

console = Console()

_PALETTE = [
    "red", "green", "yellow", "blue", "magenta", "cyan",
    "bright_red", "bright_green", "bright_yellow", "bright_blue",
    "bright_magenta", "bright_cyan", "orange1", "orchid", "spring_green2",
]

_CLICK_MESSAGES = {
    ClickResult.IGNORED: "[dim]Nothing to select there.[/dim]",
    ClickResult.SELECTED: "[cyan]Selected.[/cyan] Pick its partner.",
    ClickResult.DESELECTED: "[dim]Deselected.[/dim]",
    ClickResult.MISMATCH: "[yellow]Those tiles don't match.[/yellow]",
    ClickResult.BLOCKED: "[yellow]No path with two bends or fewer.[/yellow]",
    ClickResult.MATCHED: "[green]Pair removed![/green]",
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _face_style(face: int) -> str:
    return f"bold {_PALETTE[face % len(_PALETTE)]}"


# -- board rendering ----------------------------------------------------------


def render_board(
    board: Board,
    label: Callable[[int], str],
    path: Path | None = None,
    marked: Iterable[int] = (),
) -> Table:
    """Return a Rich Table of the full grid, border ring included."""
    trail = set(path.cells()) if path is not None else set()
    marked = set(marked)

    table = Table(
        show_header=True,
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        header_style="dim",
        padding=(0, 0),
    )
    table.add_column("", justify="right", style="dim", width=3)
    for x in range(board.width):
        header = chr(ord("a") + x - 1) if 1 <= x <= board.cols else ""
        table.add_column(header, justify="center", width=3)

    for y in range(board.height):
        row = [str(y) if 1 <= y <= board.rows else ""]
        for x in range(board.width):
            point = Point(x, y)
            cell = board.cell(point)
            idx = board.index(point)
            if cell.state is CellState.ACTIVE:
                style = _face_style(cell.face)
                if idx in marked or point in trail:
                    style += " underline"
                row.append(f"[{style}]{label(cell.face)}[/]")
            elif cell.state is CellState.SELECTED:
                row.append(f"[reverse {_face_style(cell.face)}]{label(cell.face)}[/]")
            elif point in trail:
                row.append("[bold red]•[/bold red]")
            elif board.is_interior(point):
                row.append("[dim]·[/dim]")
            else:
                row.append("")
        table.add_row(*row)

    return table


# -- solver helpers -----------------------------------------------------------


def _describe_hint(hint: Hint | None, board: Board) -> str:
    if hint is None:
        return "[yellow]Hints are disabled while the demo runs.[/yellow]"
    if hint.status is SolveStatus.CLEARED:
        return "[green]Board already cleared![/green]"
    if hint.status is SolveStatus.NONE:
        return "[bold red]No move available — this board might not be solvable.[/bold red]"
    move = hint.move
    return (
        f"[cyan]Hint:[/cyan] [bold]{cell_name(board.point(move.src))}[/bold] ↔ "
        f"[bold]{cell_name(board.point(move.dst))}[/bold]"
    )


def _run_demo(game: GamePlay, delay: float = 0.6) -> str:
    """Let the solver play until the board clears or gets stuck."""
    if not game.start_demo():
        return "[yellow]Demo is already running.[/yellow]"

    label = DECKS[game.config.deck].label
    try:
        while game.demo_mode:
            board = game.board
            hint = game.demo_step()
            if hint.status is SolveStatus.NONE:
                return "[bold red]Demo stopped: no move available.[/bold red]"
            if hint.status is SolveStatus.CLEARED:
                game.demo_mode = False
                return "[bold green]Demo cleared the board — here is a new one.[/bold green]"

            _draw_screen(game, "[magenta]Demo…[/magenta]  Ctrl-C to stop",
                         render_board(board, label, hint.move.path))
            time.sleep(delay / 2)
            game.remove_selected_pair()
            time.sleep(delay / 2)
    except KeyboardInterrupt:
        game.board.unselect_all()
        game.demo_mode = False
        return "[yellow]Demo interrupted.[/yellow]"
    return ""


# -- screens ------------------------------------------------------------------


def _controls() -> Text:
    controls = Text()
    controls.append("  c4 h7", style="bold cyan")
    controls.append("  select   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("S", style="bold cyan")
    controls.append("  shuffle   ", style="dim")
    controls.append("D", style="bold cyan")
    controls.append("  demo   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")
    return controls


def _draw_screen(game: GamePlay, status: str, board_table: Table,
                 title_style: str = "bold cyan") -> None:
    console.clear()

    stats = Text()
    stats.append("  Pairs: ", style="dim")
    stats.append(str(game.state.score), style="bold yellow")
    stats.append("    Left: ", style="dim")
    stats.append(str(game.board.active_count()), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    panel = Panel(
        Align.center(board_table),
        title=f"[{title_style}]Shisen-Sho  {game.config.cols}×{game.config.rows}[/]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls()))


def _draw_win(game: GamePlay, label: Callable[[int], str]) -> None:
    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CLEARED!", style="bold green")
    congrats.append(f"  {game.state.score} pairs in "
                    f"{_format_time(game.state.elapsed_time)}  ", style="green")
    congrats.append("★\n", style="bold yellow")

    group = Group(
        Align.center(render_board(game.board, label, game.last_path)),
        Align.center(congrats),
    )
    console.clear()
    console.print()
    console.print(Align.center(Panel(group, border_style="bold green", padding=(1, 2))))


def _help_text() -> str:
    return (
        "Name a tile by column letter and row number ([bold]c4[/bold]); "
        "two names on one line pick a pair. Tiles match when their faces are "
        "equal and a line with at most two bends joins them. "
        "Hints and shuffles cost a time penalty."
    )


# -- game loop ----------------------------------------------------------------


def _play_game(config: GameConfig, demo: bool) -> None:
    game = GamePlay(config)
    label = DECKS[config.deck].label
    status = _run_demo(game) if demo else ""
    path: Path | None = None
    marked: list[int] = []
    last = time.monotonic()

    while True:
        _draw_screen(game, status, render_board(game.board, label, path, marked))
        status, path, marked = "", None, []

        try:
            line = console.input("[bold cyan]  > [/bold cyan]")
        except (EOFError, KeyboardInterrupt):
            return

        for command in parse_line(line):
            if command.action == "click":
                result = game.click(command.point)
                if result is ClickResult.CLEARED:
                    _draw_win(game, label)
                    again = console.input("\n  Press [bold]R[/bold] to play again, anything else to quit: ")
                    if again.strip().lower() != "r":
                        return
                    game.restart()
                    break
                status = _CLICK_MESSAGES[result]
                if result is ClickResult.MATCHED:
                    path = game.last_path
            elif command.action == "hint":
                hint = game.hint()
                status = _describe_hint(hint, game.board)
                if hint is not None and hint.move is not None:
                    path = hint.move.path
            elif command.action == "shuffle":
                result = game.shuffle()
                if result is None:
                    status = "[yellow]Can't shuffle while the demo runs.[/yellow]"
                elif result.success:
                    marked = result.swapped
                    status = f"[yellow]Shuffled {len(result.swapped)} tiles.[/yellow]"
                else:
                    status = "[red]Shuffle failed; board unchanged.[/red]"
            elif command.action == "demo":
                status = _run_demo(game)
            elif command.action == "restart":
                game.restart()
                status = "[yellow]New board dealt.[/yellow]"
            elif command.action == "help":
                status = _help_text()
            elif command.action == "quit":
                return
            else:
                status = "[dim]Unknown command — type ? for help.[/dim]"

        now = time.monotonic()
        auto = game.tick(now - last)
        last = now
        if auto is not None:
            game.release_hint(auto)
            auto_status = "[magenta]Auto-hint:[/magenta] " + _describe_hint(auto, game.board)
            status = f"{status}  {auto_status}" if status else auto_status
            if path is None and auto.move is not None:
                path = auto.move.path


# -- public entry point -------------------------------------------------------


def run(config: GameConfig, demo: bool = False) -> None:
    """Launch the Rich CLI."""
    _play_game(config, demo)
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
