"""Tile face supply: the decks a layout draws its pairs from."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


@dataclass(frozen=True)
class Deck:
    """A set of tile faces, numbered ``0 .. count - 1``.

    ``blank`` is the sentinel face carried by border and unused cells.
    ``reserved`` faces are decorative or empty pictures that must never be
    dealt as a playable pair; the blank face is always among them.
    """

    name: str
    count: int
    blank: int
    reserved: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not 0 <= self.blank < self.count:
            raise ValueError(f"Blank face {self.blank} is not in deck {self.name!r}.")
        object.__setattr__(self, "reserved", frozenset(self.reserved) | {self.blank})
        if len(self.reserved) >= self.count:
            raise ValueError(f"Deck {self.name!r} has no playable faces.")

    @property
    def playable(self) -> list[int]:
        return [f for f in range(self.count) if f not in self.reserved]

    def label(self, face: int) -> str:
        """Two-character name of *face* for text rendering (``A0``, ``B0``…)."""
        return f"{_LETTERS[face % 26]}{face // 26}"


DECKS: dict[str, Deck] = {
    "mahjong": Deck("mahjong", 50, blank=38, reserved=frozenset({38, 39, 48, 49})),
    "chess": Deck("chess", 72, blank=71),
    "pieces": Deck("pieces", 32, blank=28),
    "cards": Deck("cards", 64, blank=15),
}


class FaceSupply:
    """Vends random playable faces from a deck."""

    def __init__(self, deck: Deck, rng: random.Random | None = None) -> None:
        self.deck = deck
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def named(cls, name: str, rng: random.Random | None = None) -> FaceSupply:
        try:
            deck = DECKS[name]
        except KeyError:
            raise ValueError(
                f"Unknown deck {name!r}; choose one of {', '.join(sorted(DECKS))}."
            ) from None
        return cls(deck, rng)

    @property
    def blank(self) -> int:
        return self.deck.blank

    @property
    def reserved(self) -> frozenset[int]:
        return self.deck.reserved

    def random_face(self) -> int:
        while True:
            face = self._rng.randrange(self.deck.count)
            if face not in self.deck.reserved:
                return face
