from backend.engine.gamegenerator.generator import GameGenerator, GenerationError, ShuffleResult

__all__ = ["GameGenerator", "GenerationError", "ShuffleResult"]
