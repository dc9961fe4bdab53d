"""Generates solvable pair-connect boards and reshuffles them."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from backend.engine.gamesolver import Solver
from backend.models.board import Board, BoardError, CellState
from backend.models.faces import FaceSupply

logger = logging.getLogger(__name__)

DEFAULT_GENERATION_ATTEMPTS = 50
DEFAULT_SHUFFLE_ATTEMPTS = 100


class GenerationError(RuntimeError):
    """Raised when no clearable layout turned up within the attempt budget."""


@dataclass
class ShuffleResult:
    success: bool
    attempts: int
    swapped: list[int] = field(default_factory=list)


class GameGenerator:
    """Deals random pairs and keeps only layouts the solver can clear."""

    @staticmethod
    def populate(board: Board, faces: FaceSupply, rng: random.Random | None = None) -> None:
        """Deal one random face to each of ``interior / 2`` pairs of unused cells."""
        rng = rng if rng is not None else random.Random()
        if board.interior_size % 2:
            raise BoardError(
                f"A {board.cols}×{board.rows} interior has an odd number of cells."
            )

        unused = board.indices(CellState.UNUSED)
        for _ in range(board.interior_size // 2):
            face = faces.random_face()
            for _ in range(2):
                idx = unused.pop(rng.randrange(len(unused)))
                board.cells[idx].face = face
                board.cells[idx].state = CellState.ACTIVE

    @staticmethod
    def generate(
        cols: int,
        rows: int,
        faces: FaceSupply,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_GENERATION_ATTEMPTS,
    ) -> Board:
        """Return a freshly dealt board that :meth:`Solver.is_solvable` accepts."""
        rng = rng if rng is not None else random.Random()
        for attempt in range(1, max_attempts + 1):
            board = Board.empty(cols, rows, faces.blank)
            GameGenerator.populate(board, faces, rng)
            if Solver.is_solvable(board):
                logger.info("attempt %d: board is solvable", attempt)
                return board
            logger.debug("attempt %d: board might not be solvable, dealing again", attempt)

        raise GenerationError(
            f"No solvable {cols}×{rows} layout after {max_attempts} attempts."
        )

    @staticmethod
    def shuffle(
        board: Board,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_SHUFFLE_ATTEMPTS,
    ) -> ShuffleResult:
        """Swap tile faces in place until the board is still clearable.

        Each attempt swaps one more random pair of differently-faced active
        tiles and re-validates.  If no such pair exists, or every attempt
        fails validation, *board* is restored to its state before the call.
        """
        rng = rng if rng is not None else random.Random()
        snapshot = board.copy()
        board.unselect_all()

        swapped: list[int] = []
        for attempt in range(1, max_attempts + 1):
            pair = GameGenerator._pick_swap(board, rng)
            if pair is None:
                logger.warning("attempt %d: unable to find any tiles to swap", attempt)
                board.restore(snapshot)
                return ShuffleResult(False, attempt)

            t1, t2 = pair
            c1, c2 = board.cells[t1], board.cells[t2]
            c1.face, c2.face = c2.face, c1.face
            swapped.extend(pair)

            if Solver.is_solvable(board):
                logger.info("shuffled %d tiles in %d attempt(s)", len(swapped), attempt)
                return ShuffleResult(True, attempt, swapped)
            logger.debug("attempt %d: not solvable, re-shuffling", attempt)

        logger.warning("no solvable shuffle after %d attempts", max_attempts)
        board.restore(snapshot)
        return ShuffleResult(False, max_attempts)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _pick_swap(board: Board, rng: random.Random) -> tuple[int, int] | None:
        active = board.indices(CellState.ACTIVE)
        if len(active) < 2:
            return None

        t1 = rng.choice(active)
        face = board.cells[t1].face
        for _ in range(board.size):
            t2 = rng.choice(active)
            if t2 != t1 and board.cells[t2].face != face:
                return t1, t2
        return None
