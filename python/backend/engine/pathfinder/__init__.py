from backend.engine.pathfinder.finder import Path, PathFinder

__all__ = ["Path", "PathFinder"]
