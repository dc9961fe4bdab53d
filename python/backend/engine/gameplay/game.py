"""Core gameplay logic — cell clicks, hints, shuffles and the demo player."""

from __future__ import annotations

import logging
import random
from enum import StrEnum

from backend.config import GameConfig
from backend.engine.gamegenerator import GameGenerator, ShuffleResult
from backend.engine.gamesolver import Hint, SolveStatus, Solver
from backend.engine.gamestate import GameState
from backend.engine.pathfinder import Path, PathFinder
from backend.models.board import Board, CellState, Point

logger = logging.getLogger(__name__)


class ClickResult(StrEnum):
    IGNORED = "ignored"
    SELECTED = "selected"
    DESELECTED = "deselected"
    MISMATCH = "mismatch"
    BLOCKED = "blocked"
    MATCHED = "matched"
    CLEARED = "cleared"


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(self, config: GameConfig | None = None, rng: random.Random | None = None) -> None:
        self.config = config or GameConfig()
        self._rng = rng if rng is not None else self.config.rng()
        self._faces = self.config.face_supply(self._rng)
        self.demo_mode = False
        self.last_path: Path | None = None
        self._next_hint = self.config.hint_interval
        self.state = GameState(self._deal())

    @classmethod
    def from_board(
        cls,
        board: Board,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> "GamePlay":
        """Create a game session from an existing board (e.g. a hand-built one)."""
        obj = object.__new__(cls)
        obj.config = config or GameConfig()
        obj._rng = rng if rng is not None else obj.config.rng()
        obj._faces = obj.config.face_supply(obj._rng)
        obj.demo_mode = False
        obj.last_path = None
        obj._next_hint = obj.config.hint_interval
        obj.state = GameState(board)
        return obj

    @property
    def board(self) -> Board:
        return self.state.board

    def restart(self) -> None:
        """Deal a fresh validated board and reset score and clock."""
        self.state = GameState(self._deal())
        self.last_path = None
        self._next_hint = self.config.hint_interval

    # -- moves ----------------------------------------------------------------

    def click(self, point: Point) -> ClickResult:
        """Handle a click on *point* (grid coordinates, border included).

        The first click selects an active tile.  The second click either
        deselects, or tries to match the two tiles; a match needs equal
        faces and a legal path between them.
        """
        board = self.board
        point = Point(*point)
        if not board.in_bounds(point):
            logger.info("ignoring click outside the board at %s", tuple(point))
            return ClickResult.IGNORED

        idx = board.index(point)
        cell = board.cells[idx]
        board.dst_selection = None

        if board.src_selection is None:
            if cell.state is not CellState.ACTIVE:
                return ClickResult.IGNORED
            board.src_selection = idx
            cell.state = CellState.SELECTED
            return ClickResult.SELECTED

        src_idx = board.src_selection
        src = board.cells[src_idx]
        try:
            if cell.state is not CellState.ACTIVE:
                src.state = CellState.ACTIVE
                return ClickResult.DESELECTED

            board.dst_selection = idx
            if src.face != cell.face:
                src.state = CellState.ACTIVE
                return ClickResult.MISMATCH

            cell.state = CellState.SELECTED
            path = PathFinder.find_path(board, board.point(src_idx), point)
            if path is None:
                src.state = CellState.ACTIVE
                cell.state = CellState.ACTIVE
                return ClickResult.BLOCKED

            src.state = CellState.DEAD
            cell.state = CellState.DEAD
            self.last_path = path
            self.state.increment_score()
            self._next_hint = self.config.hint_interval
            if board.is_cleared():
                self.state.pause()
                return ClickResult.CLEARED
            return ClickResult.MATCHED
        finally:
            board.src_selection = None
            board.dst_selection = None

    def remove_selected_pair(self) -> bool:
        """Remove the pair a non-interactive hint left selected."""
        return self.board.remove_selected_pair() is not None

    # -- assistance -----------------------------------------------------------

    def hint(self, interactive: bool = True) -> Hint | None:
        """Find one legal move.

        Interactive hints cost a time penalty and leave the board unselected;
        the move is only reported.  Timer and demo hints keep the pair
        selected so the driver can show and remove it.
        """
        if interactive and self.demo_mode:
            logger.info("can't request a hint while the demo is active")
            return None

        hint = Solver.hint(self.board)
        if hint.move is not None:
            self.last_path = hint.move.path
        if interactive:
            self.state.add_penalty(self.config.penalty_seconds)
            self.board.unselect_all()
        return hint

    def shuffle(self, interactive: bool = True) -> ShuffleResult | None:
        if interactive and self.demo_mode:
            logger.info("can't shuffle while the demo is active")
            return None

        result = GameGenerator.shuffle(
            self.board, self._rng, max_attempts=self.config.max_shuffle_attempts
        )
        if result.success and interactive:
            self.state.add_penalty(self.config.penalty_seconds)
        self.last_path = None
        return result

    def tick(self, seconds: float) -> Hint | None:
        """Advance the auto-hint countdown; returns a hint when it fires."""
        self._next_hint -= seconds
        if self._next_hint > 0:
            return None

        self._next_hint = self.config.hint_interval
        logger.info("scheduling auto-hint")
        hint = self.hint(interactive=False)
        if hint is not None and hint.status is SolveStatus.NONE:
            logger.warning("this board might not be solvable")
        return hint

    def release_hint(self, hint: Hint) -> None:
        """Put a timer hint's pair back in play, leaving any player selection alone."""
        if hint.move is None:
            return
        for idx in (hint.move.src, hint.move.dst):
            self.board.cells[idx].state = CellState.ACTIVE

    # -- demo -----------------------------------------------------------------

    def start_demo(self) -> bool:
        if self.demo_mode:
            logger.info("demo is already active")
            return False
        self.board.unselect_all()
        self.demo_mode = True
        return True

    def stop_demo(self) -> None:
        self.demo_mode = False
        self.restart()

    def demo_step(self) -> Hint:
        """Play one demo move.

        On ``ONE_MOVE`` the pair is left selected; call
        :meth:`remove_selected_pair` once it has been shown.
        """
        hint = Solver.hint(self.board)
        if hint.move is not None:
            self.last_path = hint.move.path
        if hint.status is SolveStatus.NONE:
            logger.info("unable to solve board, stopping demo")
            self.demo_mode = False
        elif hint.status is SolveStatus.CLEARED:
            logger.info("board solved, restarting")
            self.restart()
        return hint

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_cleared

    # -- helpers --------------------------------------------------------------

    def _deal(self) -> Board:
        return GameGenerator.generate(
            self.config.cols,
            self.config.rows,
            self._faces,
            self._rng,
            max_attempts=self.config.max_generation_attempts,
        )
