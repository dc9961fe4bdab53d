"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, input, ANSI codes) for rendering and input.
"""

from __future__ import annotations

import sys
import time

from backend.config import GameConfig
from backend.engine.gameplay import ClickResult, GamePlay
from backend.engine.gamesolver import Hint, SolveStatus
from backend.engine.pathfinder import Path
from backend.models.board import Board, CellState, Point
from backend.models.faces import DECKS, Deck
from frontend.cli.input_handler import cell_name, parse_line


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_REV = "\033[7m"     # reverse video (selected)
_R = "\033[0m"       # reset

_FACE_COLOURS = [31, 32, 33, 34, 35, 36, 91, 92, 93, 94, 95, 96]

_CLICK_MESSAGES = {
    ClickResult.IGNORED: f"{_DIM}Nothing to select there.{_R}",
    ClickResult.SELECTED: f"{_C}Selected.{_R} Pick its partner.",
    ClickResult.DESELECTED: f"{_DIM}Deselected.{_R}",
    ClickResult.MISMATCH: f"{_Y}Those tiles don't match.{_R}",
    ClickResult.BLOCKED: f"{_Y}No path with two bends or fewer.{_R}",
    ClickResult.MATCHED: f"{_G}Pair removed!{_R}",
}


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}" if m else f"{s}s"


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board, deck: Deck, path: Path | None = None) -> str:
    """Return an ANSI-coloured text picture of the grid, border included."""
    trail = set(path.cells()) if path is not None else set()

    header = "    " + "".join(
        f" {chr(ord('a') + x - 1)} " if 1 <= x <= board.cols else "   "
        for x in range(board.width)
    )
    lines: list[str] = [f"{_DIM}{header}{_R}"]
    for y in range(board.height):
        row_label = f"{y:>3} " if 1 <= y <= board.rows else "    "
        cells: list[str] = []
        for x in range(board.width):
            point = Point(x, y)
            cell = board.cell(point)
            colour = f"\033[{_FACE_COLOURS[cell.face % len(_FACE_COLOURS)]};1m"
            if cell.state is CellState.ACTIVE:
                cells.append(f"{colour}{deck.label(cell.face):>3}{_R}")
            elif cell.state is CellState.SELECTED:
                cells.append(f"{_REV}{colour}{deck.label(cell.face):>3}{_R}")
            elif point in trail:
                cells.append(f"{_RED}  *{_R}")
            elif board.is_interior(point):
                cells.append(f"{_DIM}  .{_R}")
            else:
                cells.append("   ")
        lines.append(f"{_DIM}{row_label}{_R}" + "".join(cells))
    return "\n".join(lines)


# -- solver helpers -----------------------------------------------------------


def _describe_hint(hint: Hint | None, board: Board) -> str:
    if hint is None:
        return f"{_Y}Hints are disabled while the demo runs.{_R}"
    if hint.status is SolveStatus.CLEARED:
        return f"{_G}Board already cleared!{_R}"
    if hint.status is SolveStatus.NONE:
        return f"{_RED}No move available: this board might not be solvable.{_R}"
    move = hint.move
    return (
        f"{_C}Hint:{_R} {cell_name(board.point(move.src))} <-> "
        f"{cell_name(board.point(move.dst))}"
    )


def _run_demo(game: GamePlay, deck: Deck, delay: float = 0.6) -> str:
    if not game.start_demo():
        return f"{_Y}Demo is already running.{_R}"

    try:
        while game.demo_mode:
            board = game.board
            hint = game.demo_step()
            if hint.status is SolveStatus.NONE:
                return f"{_RED}Demo stopped: no move available.{_R}"
            if hint.status is SolveStatus.CLEARED:
                game.demo_mode = False
                return f"{_G}Demo cleared the board; here is a new one.{_R}"

            _clear()
            print(f"  {_C}=== Demo ==={_R}  (Ctrl-C to stop)\n")
            print(_render_board(board, deck, hint.move.path))
            sys.stdout.flush()
            time.sleep(delay / 2)
            game.remove_selected_pair()
            time.sleep(delay / 2)
    except KeyboardInterrupt:
        game.board.unselect_all()
        game.demo_mode = False
        return f"{_Y}Demo interrupted.{_R}"
    return ""


# -- game screens -------------------------------------------------------------


def _show_game(game: GamePlay, deck: Deck, status: str = "", path: Path | None = None) -> None:
    _clear()
    print(f"  {_C}=== Shisen-Sho ({game.config.cols}×{game.config.rows}) ==={_R}")
    print()
    print(_render_board(game.board, deck, path))
    print()
    print(
        f"  Pairs: {_Y}{game.state.score}{_R}  |  "
        f"Left: {_Y}{game.board.active_count()}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}"
    )
    print(
        f"  {_C}c4 h7{_R}: select  |  {_C}H{_R}: hint  |  {_C}S{_R}: shuffle  |  "
        f"{_C}D{_R}: demo  |  {_C}R{_R}: restart  |  {_C}Q{_R}: quit"
    )
    if status:
        print(f"  {status}")


def _show_win(game: GamePlay, deck: Deck) -> None:
    _clear()
    print(_render_board(game.board, deck, game.last_path))
    print()
    print(f"  {_G}★ CLEARED! ★{_R}  {game.state.score} pairs in "
          f"{_Y}{_format_time(game.state.elapsed_time)}{_R}")


# -- game loop ----------------------------------------------------------------


def _play_game(config: GameConfig, demo: bool) -> None:
    game = GamePlay(config)
    deck = DECKS[config.deck]
    status = _run_demo(game, deck) if demo else ""
    path: Path | None = None
    last = time.monotonic()

    while True:
        _show_game(game, deck, status, path)
        status, path = "", None
        try:
            line = input("  > ")
        except (EOFError, KeyboardInterrupt):
            return

        for command in parse_line(line):
            if command.action == "click":
                result = game.click(command.point)
                if result is ClickResult.CLEARED:
                    _show_win(game, deck)
                    if input("\n  Press R to play again, anything else to quit: ").strip().lower() != "r":
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
                    status = f"{_Y}Can't shuffle while the demo runs.{_R}"
                elif result.success:
                    status = f"{_Y}Shuffled {len(result.swapped)} tiles.{_R}"
                else:
                    status = f"{_RED}Shuffle failed; board unchanged.{_R}"
            elif command.action == "demo":
                status = _run_demo(game, deck)
            elif command.action == "restart":
                game.restart()
                status = f"{_Y}New board dealt.{_R}"
            elif command.action == "help":
                status = ("Name a tile by column and row (c4); two names pick a pair. "
                          "Hints and shuffles cost a time penalty.")
            elif command.action == "quit":
                return
            else:
                status = f"{_DIM}Unknown command; type ? for help.{_R}"

        now = time.monotonic()
        auto = game.tick(now - last)
        last = now
        if auto is not None:
            game.release_hint(auto)
            auto_status = f"Auto-hint: {_describe_hint(auto, game.board)}"
            status = f"{status}  {auto_status}" if status else auto_status
            if path is None and auto.move is not None:
                path = auto.move.path


# -- public entry point -------------------------------------------------------


def run(config: GameConfig, demo: bool = False) -> None:
    """Launch the vanilla CLI."""
    _play_game(config, demo)
    print("\n  Goodbye!\n")
