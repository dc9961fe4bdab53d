"""Pair-connect solver: move finding, hints and whole-board play-outs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from backend.engine.pathfinder import Path, PathFinder
from backend.models.board import Board, CellState

logger = logging.getLogger(__name__)


class SolveStatus(StrEnum):
    """What a hint found: board cleared, one move, or nothing."""

    CLEARED = "cleared"
    ONE_MOVE = "one_move"
    NONE = "none"


class SolveOutcome(StrEnum):
    SOLVED = "solved"
    STUCK = "stuck"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Move:
    src: int
    dst: int
    path: Path


@dataclass(frozen=True)
class Hint:
    status: SolveStatus
    move: Move | None = None


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def find_one_move(board: Board) -> Move | None:
        """Select and return the first connectable pair, or ``None``.

        Pairs are tried source-index ascending, then destination-index
        ascending.  The winning pair is left ``SELECTED`` on *board*.
        """
        cells = board.cells
        active = board.indices(CellState.ACTIVE)
        for sidx in active:
            src = cells[sidx]
            for didx in active:
                dst = cells[didx]
                if didx == sidx or src.face != dst.face:
                    continue
                path = PathFinder.find_path(board, board.point(sidx), board.point(didx))
                if path is None:
                    continue
                src.state = CellState.SELECTED
                dst.state = CellState.SELECTED
                return Move(sidx, didx, path)
        return None

    @staticmethod
    def hint(board: Board) -> Hint:
        """Find one move on the live board, leaving its pair selected."""
        move = Solver.find_one_move(board)
        if move is not None:
            return Hint(SolveStatus.ONE_MOVE, move)
        if board.is_cleared():
            return Hint(SolveStatus.CLEARED)
        return Hint(SolveStatus.NONE)

    @staticmethod
    def simulate(board: Board, max_rounds: int | None = None) -> SolveOutcome:
        """Play *board* out on a private copy and report how it ended."""
        outcome, _ = Solver._play_out(board, max_rounds)
        return outcome

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if repeated first-found moves clear *board*."""
        return Solver.simulate(board) is SolveOutcome.SOLVED

    @staticmethod
    def solve(board: Board) -> list[Move]:
        """Return a move sequence that clears *board*, or ``[]`` if none does."""
        outcome, moves = Solver._play_out(board, None)
        return moves if outcome is SolveOutcome.SOLVED else []

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _play_out(board: Board, max_rounds: int | None) -> tuple[SolveOutcome, list[Move]]:
        sim = board.copy()
        rounds = sim.size // 2 if max_rounds is None else max_rounds
        moves: list[Move] = []

        for _ in range(rounds):
            remaining = sim.active_count()
            if remaining == 0:
                return SolveOutcome.SOLVED, moves
            move = Solver.find_one_move(sim)
            if move is None:
                logger.debug("play-out stuck with %d active cells", remaining)
                return SolveOutcome.STUCK, moves
            sim.cells[move.src].state = CellState.DEAD
            sim.cells[move.dst].state = CellState.DEAD
            moves.append(move)

        if sim.is_cleared():
            return SolveOutcome.SOLVED, moves
        logger.warning("play-out gave up after %d rounds", rounds)
        return SolveOutcome.EXHAUSTED, moves
