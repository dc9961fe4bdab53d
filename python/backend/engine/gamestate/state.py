"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.models.board import Board


class GameState:
    """Holds the current board, score, elapsed time and time penalties."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.score: int = 0
        self.penalty: float = 0.0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        """Seconds played so far, penalties included."""
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time) + self.penalty
        return self._elapsed_banked + self.penalty

    @property
    def is_running(self) -> bool:
        return self._running

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    def add_penalty(self, seconds: float) -> None:
        self.penalty += seconds

    # -- scoring --------------------------------------------------------------

    def increment_score(self) -> None:
        self.score += 1

    @property
    def is_cleared(self) -> bool:
        return self.board.is_cleared()
