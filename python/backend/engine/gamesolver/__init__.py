from backend.engine.gamesolver.solver import Hint, Move, SolveOutcome, SolveStatus, Solver

__all__ = ["Hint", "Move", "SolveOutcome", "SolveStatus", "Solver"]
