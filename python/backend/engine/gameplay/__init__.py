from backend.engine.gameplay.game import ClickResult, GamePlay

__all__ = ["ClickResult", "GamePlay"]
