"""Gameplay tests — the click contract, hints, shuffles, timer and demo."""

from __future__ import annotations

import pytest

from backend.config import GameConfig
from backend.engine.gameplay.game import ClickResult, GamePlay
from backend.engine.gamesolver.solver import SolveStatus, Solver
from backend.models.board import Board, CellState, Point

FACES = {c: i for i, c in enumerate("ABCDEFGH", start=1)}


# -- helpers ------------------------------------------------------------------


def _game(*rows: str, **config) -> GamePlay:
    board = Board.from_rows(list(rows), FACES)
    cfg = GameConfig(cols=4, rows=1, seed=1, **config)
    return GamePlay.from_board(board, cfg)


def _states(board: Board) -> list[tuple[int, CellState]]:
    return [(c.face, c.state) for c in board.cells]


# -- session setup --------------------------------------------------------------


def test_new_game_deals_a_solvable_board() -> None:
    game = GamePlay(GameConfig(cols=4, rows=4, seed=3))

    assert game.board.active_count() == 16
    assert game.state.score == 0
    assert Solver.is_solvable(game.board)
    assert not game.is_won


def test_restart_replaces_the_board() -> None:
    game = GamePlay(GameConfig(cols=4, rows=2, seed=8))
    old = game.board
    game.state.increment_score()

    game.restart()

    assert game.board is not old
    assert game.state.score == 0
    assert game.board.active_count() == 8


# -- clicks ---------------------------------------------------------------------


def test_click_on_empty_cell_is_ignored() -> None:
    game = _game("A.A", "B.C")

    assert game.click(Point(2, 1)) is ClickResult.IGNORED
    assert game.click(Point(0, 0)) is ClickResult.IGNORED
    assert game.click(Point(99, 99)) is ClickResult.IGNORED
    assert game.board.src_selection is None


def test_click_selects_then_deselects() -> None:
    game = _game("A.A", "B.C")

    assert game.click(Point(1, 1)) is ClickResult.SELECTED
    assert game.board.cell(Point(1, 1)).state is CellState.SELECTED
    assert game.board.src_selection == game.board.index(Point(1, 1))

    assert game.click(Point(1, 1)) is ClickResult.DESELECTED
    assert game.board.cell(Point(1, 1)).state is CellState.ACTIVE
    assert game.board.src_selection is None


def test_mismatched_faces_are_released() -> None:
    game = _game("A.A", "B.C")
    before = _states(game.board)

    game.click(Point(1, 1))
    assert game.click(Point(1, 2)) is ClickResult.MISMATCH

    assert _states(game.board) == before
    assert game.state.score == 0


def test_blocked_pair_is_released() -> None:
    game = _game("BCD", "AEA", "FGH")
    before = _states(game.board)

    game.click(Point(1, 2))
    assert game.click(Point(3, 2)) is ClickResult.BLOCKED

    assert _states(game.board) == before


def test_matching_pair_removes_exactly_two_tiles() -> None:
    game = _game("A.A", "B.C")
    before = _states(game.board)

    game.click(Point(1, 1))
    assert game.click(Point(3, 1)) is ClickResult.MATCHED

    board = game.board
    removed = {board.index(Point(1, 1)), board.index(Point(3, 1))}
    assert board.active_count() == 2
    assert game.state.score == 1
    assert game.last_path is not None and game.last_path.turns == 0
    for i, (face, state) in enumerate(_states(board)):
        if i in removed:
            assert (face, state) == (before[i][0], CellState.DEAD)
        else:
            assert (face, state) == before[i]


def test_last_pair_clears_the_board() -> None:
    game = _game("A..A")

    game.click(Point(1, 1))
    assert game.click(Point(4, 1)) is ClickResult.CLEARED

    assert game.is_won
    assert not game.state.is_running


# -- hints ----------------------------------------------------------------------


def test_interactive_hint_costs_time_and_releases_pair() -> None:
    game = _game("AABB", penalty_seconds=60)

    hint = game.hint()

    assert hint is not None and hint.status is SolveStatus.ONE_MOVE
    assert hint.move.src == game.board.index(Point(1, 1))
    assert game.state.penalty == 60
    assert game.board.indices(CellState.SELECTED) == []
    assert game.last_path == hint.move.path


def test_background_hint_keeps_pair_selected() -> None:
    game = _game("AABB")

    hint = game.hint(interactive=False)

    assert hint.status is SolveStatus.ONE_MOVE
    assert game.state.penalty == 0
    assert game.board.indices(CellState.SELECTED) == [hint.move.src, hint.move.dst]
    assert game.remove_selected_pair()
    assert game.board.active_count() == 2


def test_hint_reports_stuck_board() -> None:
    game = _game("AB", "BA")

    assert game.hint().status is SolveStatus.NONE


# -- shuffle --------------------------------------------------------------------


def test_interactive_shuffle_costs_time(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Solver, "is_solvable", staticmethod(lambda board: True))
    game = _game("AABB", penalty_seconds=45)

    result = game.shuffle()

    assert result is not None and result.success
    assert game.state.penalty == 45


def test_background_shuffle_is_free(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Solver, "is_solvable", staticmethod(lambda board: True))
    game = _game("AABB")

    result = game.shuffle(interactive=False)

    assert result.success
    assert game.state.penalty == 0


def test_failed_shuffle_costs_nothing() -> None:
    game = _game("AA..")

    result = game.shuffle()

    assert not result.success
    assert game.state.penalty == 0


# -- auto-hint timer ------------------------------------------------------------


def test_tick_fires_hint_after_interval() -> None:
    game = _game("AABB", hint_interval=10)

    assert game.tick(4) is None
    hint = game.tick(6)

    assert hint is not None and hint.status is SolveStatus.ONE_MOVE
    assert game.state.penalty == 0
    assert game.tick(9) is None


def test_match_resets_hint_countdown() -> None:
    game = _game("AABB", hint_interval=10)
    game.tick(8)

    game.click(Point(1, 1))
    game.click(Point(2, 1))

    assert game.tick(8) is None


def test_release_hint_keeps_player_selection() -> None:
    game = _game("AABB", hint_interval=1)
    game.click(Point(3, 1))

    hint = game.tick(1)
    assert hint.move.src == game.board.index(Point(1, 1))
    game.release_hint(hint)

    assert game.board.indices(CellState.SELECTED) == [game.board.index(Point(3, 1))]
    assert game.board.src_selection == game.board.index(Point(3, 1))
    assert game.click(Point(4, 1)) is ClickResult.MATCHED


def test_tick_reports_unsolvable_board() -> None:
    game = _game("AB", "BA", hint_interval=1)

    hint = game.tick(1)

    assert hint is not None and hint.status is SolveStatus.NONE


# -- demo -----------------------------------------------------------------------


def test_demo_plays_board_out_and_deals_again() -> None:
    game = _game("AABB")

    assert game.start_demo()
    assert not game.start_demo()
    assert game.hint() is None
    assert game.shuffle() is None

    for _ in range(2):
        hint = game.demo_step()
        assert hint.status is SolveStatus.ONE_MOVE
        assert game.remove_selected_pair()

    hint = game.demo_step()
    assert hint.status is SolveStatus.CLEARED
    assert game.demo_mode
    assert game.state.penalty == 0
    assert game.board.active_count() == 4


def test_demo_stops_on_stuck_board() -> None:
    game = _game("AB", "BA")
    game.start_demo()

    assert game.demo_step().status is SolveStatus.NONE
    assert not game.demo_mode


def test_stop_demo_deals_fresh_board() -> None:
    game = _game("AB", "BA")
    game.start_demo()

    game.stop_demo()

    assert not game.demo_mode
    assert (game.board.cols, game.board.rows) == (4, 1)
    assert game.board.active_count() == 4


# -- config ---------------------------------------------------------------------


@pytest.mark.parametrize(
    "kwargs",
    [
        {"cols": 3, "rows": 3},
        {"cols": 0},
        {"cols": 30, "rows": 2},
        {"deck": "tarot"},
        {"max_shuffle_attempts": 0},
    ],
)
def test_config_rejects_bad_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        GameConfig(**kwargs)
