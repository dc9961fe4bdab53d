"""Game settings shared by the engine and the frontends."""

from __future__ import annotations

import random
from dataclasses import dataclass

from backend.engine.gamegenerator.generator import (
    DEFAULT_GENERATION_ATTEMPTS,
    DEFAULT_SHUFFLE_ATTEMPTS,
)
from backend.models.faces import DECKS, FaceSupply

MAX_COLS = 26


@dataclass(frozen=True)
class GameConfig:
    """Board shape, deck and timing rules for one game session.

    The default interior is 14×10, a 16×12 grid once the border is added.
    """

    cols: int = 14
    rows: int = 10
    deck: str = "mahjong"
    penalty_seconds: float = 60.0
    hint_interval: float = 300.0
    max_generation_attempts: int = DEFAULT_GENERATION_ATTEMPTS
    max_shuffle_attempts: int = DEFAULT_SHUFFLE_ATTEMPTS
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Board must be at least 1×1, got {self.cols}×{self.rows}.")
        if self.cols > MAX_COLS:
            raise ValueError(
                f"Columns are named a-z, so a board is at most {MAX_COLS} wide, got {self.cols}."
            )
        if (self.cols * self.rows) % 2:
            raise ValueError(
                f"A {self.cols}×{self.rows} board has an odd number of cells; "
                "tiles are dealt in pairs."
            )
        if self.deck not in DECKS:
            raise ValueError(
                f"Unknown deck {self.deck!r}; choose one of {', '.join(sorted(DECKS))}."
            )
        if self.max_generation_attempts < 1 or self.max_shuffle_attempts < 1:
            raise ValueError("Attempt limits must be at least 1.")

    def rng(self) -> random.Random:
        return random.Random(self.seed)

    def face_supply(self, rng: random.Random | None = None) -> FaceSupply:
        return FaceSupply.named(self.deck, rng)
