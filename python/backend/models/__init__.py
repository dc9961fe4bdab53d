from backend.models.board import Board, BoardError, Cell, CellState, Point
from backend.models.faces import DECKS, Deck, FaceSupply

__all__ = [
    "Board",
    "BoardError",
    "Cell",
    "CellState",
    "DECKS",
    "Deck",
    "FaceSupply",
    "Point",
]
