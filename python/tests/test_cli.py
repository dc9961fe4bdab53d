"""CLI tests — command parsing, the frontend game loops and the typer entry point."""

from __future__ import annotations

import itertools
from types import ModuleType, SimpleNamespace

import pytest
from typer.testing import CliRunner

import frontend.cli.rich.app as rich_app
import frontend.cli.vanilla.app as vanilla_app
from backend.config import GameConfig
from backend.engine.gameplay import GamePlay
from backend.models.board import Board, CellState, Point
from frontend.cli.input_handler import Command, cell_name, parse_line
from main import app

runner = CliRunner()

FRONTENDS = [rich_app, vanilla_app]


# -- helpers ------------------------------------------------------------------


def _play(
    monkeypatch: pytest.MonkeyPatch,
    frontend: ModuleType,
    lines: list[str],
    clock: list[float],
) -> GamePlay:
    """Run a frontend's game loop on an ``AABB`` board with scripted input."""
    config = GameConfig(cols=4, rows=1, hint_interval=5, seed=1)
    game = GamePlay.from_board(Board.from_rows(["AABB"], {"A": 1, "B": 2}), config)
    feed = iter(lines)

    def fake_input(*args, **kwargs) -> str:
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    ticks = itertools.chain(clock, itertools.repeat(clock[-1]))
    monkeypatch.setattr(frontend, "GamePlay", lambda cfg: game)
    monkeypatch.setattr(
        frontend, "time", SimpleNamespace(monotonic=lambda: next(ticks), sleep=lambda s: None)
    )
    if frontend is rich_app:
        monkeypatch.setattr(rich_app.console, "input", fake_input)
    else:
        monkeypatch.setattr("builtins.input", fake_input)

    frontend._play_game(config, demo=False)
    return game


# -- input parsing --------------------------------------------------------------


def test_cell_names_become_clicks() -> None:
    assert parse_line("c4") == [Command("click", Point(3, 4))]
    assert parse_line("  A1 b12 ") == [
        Command("click", Point(1, 1)),
        Command("click", Point(2, 12)),
    ]


def test_command_words() -> None:
    assert parse_line("h") == [Command("hint")]
    assert parse_line("Shuffle") == [Command("shuffle")]
    assert parse_line("?") == [Command("help")]
    assert parse_line("q") == [Command("quit")]


def test_blank_and_unknown_lines() -> None:
    assert parse_line("   ") == []
    assert parse_line("zz") == [Command("unknown")]
    assert parse_line("a1 b2 c3") == [Command("unknown")]
    assert parse_line("h a1") == [Command("unknown")]


def test_cell_name_round_trip() -> None:
    assert cell_name(Point(3, 4)) == "c4"
    assert parse_line(cell_name(Point(14, 10))) == [Command("click", Point(14, 10))]


# -- game loops -----------------------------------------------------------------


@pytest.mark.parametrize("frontend", FRONTENDS, ids=["rich", "vanilla"])
def test_quit_leaves_the_loop(monkeypatch: pytest.MonkeyPatch, frontend: ModuleType) -> None:
    game = _play(monkeypatch, frontend, ["q", "a1 b1"], [0])

    assert game.state.score == 0
    assert game.board.active_count() == 4


@pytest.mark.parametrize("frontend", FRONTENDS, ids=["rich", "vanilla"])
def test_typed_pair_survives_auto_hint(monkeypatch: pytest.MonkeyPatch, frontend: ModuleType) -> None:
    game = _play(monkeypatch, frontend, ["a1 b1", "q"], [0, 100])

    assert game.state.score == 1
    assert game.board.cell(Point(1, 1)).state is CellState.DEAD
    assert game.board.cell(Point(2, 1)).state is CellState.DEAD
    assert game.board.indices(CellState.SELECTED) == []
    assert game.board.active_count() == 2


@pytest.mark.parametrize("frontend", FRONTENDS, ids=["rich", "vanilla"])
def test_auto_hint_keeps_half_selected_pair(
    monkeypatch: pytest.MonkeyPatch, frontend: ModuleType
) -> None:
    game = _play(monkeypatch, frontend, ["c1", "d1", "q"], [0, 100, 101])

    assert game.state.score == 1
    assert game.board.cell(Point(3, 1)).state is CellState.DEAD
    assert game.board.cell(Point(4, 1)).state is CellState.DEAD
    assert game.board.cell(Point(1, 1)).state is CellState.ACTIVE


@pytest.mark.parametrize("frontend", FRONTENDS, ids=["rich", "vanilla"])
def test_end_of_input_leaves_the_loop(monkeypatch: pytest.MonkeyPatch, frontend: ModuleType) -> None:
    game = _play(monkeypatch, frontend, [], [0])

    assert game.state.score == 0


# -- entry point ----------------------------------------------------------------


def test_check_prints_play_out() -> None:
    result = runner.invoke(app, ["--check", "--cols", "4", "--rows", "2", "--seed", "3"])

    assert result.exit_code == 0, result.output
    assert "outcome: solved" in result.output
    assert "moves:   4" in result.output


def test_odd_board_is_rejected() -> None:
    result = runner.invoke(app, ["--check", "--cols", "3", "--rows", "3"])

    assert result.exit_code != 0


def test_unknown_deck_is_rejected() -> None:
    result = runner.invoke(app, ["--check", "--deck", "tarot"])

    assert result.exit_code != 0
