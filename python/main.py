#!/usr/bin/env python3
"""Shisen-Sho pair-connect puzzle.

Usage::

    python main.py                    # Rich terminal, 14×10 board
    python main.py -f vanilla         # plain ANSI terminal
    python main.py --cols 8 --rows 6  # smaller board
    python main.py --demo             # watch the solver play
    python main.py --check --seed 7   # deal one board, print its play-out, exit
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import MAX_COLS, GameConfig  # noqa: E402
from backend.engine.gamegenerator import GameGenerator, GenerationError  # noqa: E402
from backend.engine.gamesolver import Solver  # noqa: E402
from backend.models.faces import DECKS  # noqa: E402

logger = logging.getLogger("shisen")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _print_check(config: GameConfig) -> None:
    """Deal one board and print it with its solver play-out."""
    from frontend.cli.input_handler import cell_name
    from frontend.cli.rich.app import console, render_board

    rng = config.rng()
    board = GameGenerator.generate(
        config.cols,
        config.rows,
        config.face_supply(rng),
        rng,
        max_attempts=config.max_generation_attempts,
    )
    moves = Solver.solve(board)

    console.print(render_board(board, DECKS[config.deck].label))
    console.print(f"  outcome: [bold]{Solver.simulate(board).value}[/bold]")
    console.print(f"  moves:   {len(moves)}")
    if moves:
        first = moves[0]
        console.print(
            f"  first:   {cell_name(board.point(first.src))} ↔ "
            f"{cell_name(board.point(first.dst))} ({first.path.turns} bend(s))"
        )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Frontend = typer.Option(
        Frontend.rich, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    cols: int = typer.Option(
        14, "--cols",
        min=1, max=MAX_COLS,
        help="Interior board width (1-26).",
    ),
    rows: int = typer.Option(
        10, "--rows",
        min=1, max=40,
        help="Interior board height (1-40).",
    ),
    deck: str = typer.Option(
        "mahjong", "--deck",
        help=f"Tile deck: {', '.join(sorted(DECKS))}.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Random seed for reproducible deals.",
    ),
    demo: bool = typer.Option(
        False, "--demo",
        help="Start with the solver playing the board.",
    ),
    check: bool = typer.Option(
        False, "--check",
        help="Deal one board, print its play-out and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine decisions.",
    ),
) -> None:
    """Shisen-Sho pair-connect puzzle."""
    _configure_logging(verbose)

    try:
        config = GameConfig(cols=cols, rows=rows, deck=deck, seed=seed)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        if check:
            _print_check(config)
            return
        mod = importlib.import_module(_RUNNERS[frontend])
        mod.run(config=config, demo=demo)
    except GenerationError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
