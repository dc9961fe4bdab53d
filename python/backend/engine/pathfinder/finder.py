"""Connecting-path search under the "at most two bends" rule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from backend.models.board import Board, BoardError, CellState, Point

# (dx, dy) pairs scanned outward from a point, nearest cell first.
_HORIZONTAL = ((-1, 0), (1, 0))
_VERTICAL = ((0, -1), (0, 1))


@dataclass(frozen=True)
class Path:
    """A connecting path: *start*, up to two bend points, *end*."""

    start: Point
    bends: tuple[Point, ...]
    end: Point

    @property
    def waypoints(self) -> list[Point]:
        return [self.start, *self.bends, self.end]

    @property
    def turns(self) -> int:
        return len(self.bends)

    @property
    def segments(self) -> list[tuple[Point, Point]]:
        pts = self.waypoints
        return list(zip(pts, pts[1:]))

    def cells(self) -> Iterator[Point]:
        """Yield every grid point the path passes over, start to end."""
        yield self.start
        for a, b in self.segments:
            dx = (b.x > a.x) - (b.x < a.x)
            dy = (b.y > a.y) - (b.y < a.y)
            x, y = a
            while (x, y) != (b.x, b.y):
                x, y = x + dx, y + dy
                yield Point(x, y)

    def reversed(self) -> Path:
        return Path(self.end, tuple(reversed(self.bends)), self.start)


class PathFinder:
    """Stateless path search — all methods are static."""

    @staticmethod
    def find_path(board: Board, p1: Point, p2: Point) -> Path | None:
        """Return the first legal path from *p1* to *p2*, or ``None``.

        Tries the direct line, then every horizontal-first route (one bend,
        then two), then every vertical-first route.  Only ``ACTIVE`` cells
        other than the two endpoints obstruct a run.
        """
        p1, p2 = Point(*p1), Point(*p2)
        board.require_interior(p1)
        board.require_interior(p2)
        if p1 == p2:
            raise BoardError(f"Cannot connect {tuple(p1)} to itself.")

        ends = (p1, p2)
        if PathFinder._connects(board, p1, p2, ends):
            return Path(p1, (), p2)

        for first, second in ((_HORIZONTAL, _VERTICAL), (_VERTICAL, _HORIZONTAL)):
            for a in PathFinder._reachable(board, p1, first, ends):
                if PathFinder._connects(board, a, p2, ends):
                    return Path(p1, (a,), p2)
                for b in PathFinder._reachable(board, a, second, ends):
                    if PathFinder._connects(board, b, p2, ends):
                        return Path(p1, (a, b), p2)
        return None

    @staticmethod
    def is_connectable(board: Board, p1: Point, p2: Point) -> bool:
        return PathFinder.find_path(board, p1, p2) is not None

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _blocks(board: Board, point: Point, ends: tuple[Point, Point]) -> bool:
        return point not in ends and board.cell(point).state is CellState.ACTIVE

    @staticmethod
    def _reachable(
        board: Board,
        origin: Point,
        directions: tuple[tuple[int, int], ...],
        ends: tuple[Point, Point],
    ) -> list[Point]:
        """Points reachable from *origin* by one unobstructed straight run."""
        reached: list[Point] = []
        for dx, dy in directions:
            for point in board.ray(origin, dx, dy):
                if PathFinder._blocks(board, point, ends):
                    break
                reached.append(point)
        return reached

    @staticmethod
    def _connects(board: Board, a: Point, b: Point, ends: tuple[Point, Point]) -> bool:
        """True if *a* and *b* share a row or column with a clear run between."""
        if a == b:
            return True
        if a.y == b.y:
            step = (1 if b.x > a.x else -1, 0)
        elif a.x == b.x:
            step = (0, 1 if b.y > a.y else -1)
        else:
            return False
        for point in board.ray(a, *step):
            if PathFinder._blocks(board, point, ends):
                return False
            if point == b:
                return True
        return False
