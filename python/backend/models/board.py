"""Board model for the pair-connect puzzle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterator, NamedTuple

logger = logging.getLogger(__name__)


class BoardError(ValueError):
    """Raised for positions or board shapes the board cannot accept."""


class CellState(StrEnum):
    UNUSED = "unused"
    ACTIVE = "active"
    SELECTED = "selected"
    DEAD = "dead"


class Point(NamedTuple):
    x: int
    y: int


@dataclass
class Cell:
    face: int
    state: CellState = CellState.UNUSED


@dataclass
class Board:
    """Represents the puzzle grid.

    ``cols`` × ``rows`` is the playable interior.  The stored grid carries an
    extra one-cell ring around it that is always ``DEAD``, so it is
    ``cols + 2`` wide and ``rows + 2`` high.  Cells are kept in a flat
    row-major list; index ``y * width + x``.
    """

    cols: int
    rows: int
    cells: list[Cell]
    blank_face: int
    src_selection: int | None = field(default=None)
    dst_selection: int | None = field(default=None)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def empty(cls, cols: int, rows: int, blank_face: int) -> Board:
        """Create a board with a dead border and an unused interior."""
        if cols < 1 or rows < 1:
            raise BoardError(f"Board interior must be at least 1×1, got {cols}×{rows}.")
        width, height = cols + 2, rows + 2
        cells: list[Cell] = []
        for y in range(height):
            for x in range(width):
                border = x in (0, width - 1) or y in (0, height - 1)
                state = CellState.DEAD if border else CellState.UNUSED
                cells.append(Cell(blank_face, state))
        return cls(cols=cols, rows=rows, cells=cells, blank_face=blank_face)

    @classmethod
    def from_rows(cls, layout: list[str], faces: dict[str, int], blank_face: int = 0) -> Board:
        """Create a board from a text picture of its interior.

        ``.`` is an unused cell, ``#`` a dead one; any other character is an
        active tile whose face is looked up in *faces*.

        Example::

            Board.from_rows(["A.A", "...", "..."], {"A": 1})
        """
        if not layout or any(len(line) != len(layout[0]) for line in layout):
            raise BoardError("Layout rows must be non-empty and of equal length.")
        board = cls.empty(len(layout[0]), len(layout), blank_face)
        for y, line in enumerate(layout, start=1):
            for x, ch in enumerate(line, start=1):
                cell = board.cell(Point(x, y))
                if ch == "#":
                    cell.state = CellState.DEAD
                elif ch != ".":
                    cell.face = faces[ch]
                    cell.state = CellState.ACTIVE
        return board

    # -- geometry -------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.cols + 2

    @property
    def height(self) -> int:
        return self.rows + 2

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def interior_size(self) -> int:
        return self.cols * self.rows

    def index(self, point: Point) -> int:
        return point.y * self.width + point.x

    def point(self, index: int) -> Point:
        y, x = divmod(index, self.width)
        return Point(x, y)

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def is_interior(self, point: Point) -> bool:
        return 1 <= point.x <= self.cols and 1 <= point.y <= self.rows

    def require_interior(self, point: Point) -> None:
        if not self.is_interior(point):
            raise BoardError(
                f"{tuple(point)} is outside the playable {self.cols}×{self.rows} interior."
            )

    def ray(self, origin: Point, dx: int, dy: int) -> Iterator[Point]:
        """Yield the points after *origin* in one direction, up to the grid edge."""
        x, y = origin.x + dx, origin.y + dy
        while 0 <= x < self.width and 0 <= y < self.height:
            yield Point(x, y)
            x, y = x + dx, y + dy

    # -- queries --------------------------------------------------------------

    def cell(self, point: Point) -> Cell:
        return self.cells[self.index(point)]

    def indices(self, state: CellState) -> list[int]:
        return [i for i, c in enumerate(self.cells) if c.state is state]

    def active_count(self) -> int:
        return sum(1 for c in self.cells if c.state is CellState.ACTIVE)

    def is_cleared(self) -> bool:
        return self.active_count() == 0

    # -- mutation -------------------------------------------------------------

    def unselect_all(self) -> None:
        for c in self.cells:
            if c.state is CellState.SELECTED:
                c.state = CellState.ACTIVE
        self.src_selection = None
        self.dst_selection = None

    def remove_selected_pair(self) -> tuple[int, int] | None:
        """Turn the two selected cells dead.  Returns their indices."""
        selected = self.indices(CellState.SELECTED)
        if len(selected) != 2:
            logger.error("expected a selected pair, found %d selected cells", len(selected))
            return None
        t1, t2 = selected
        if self.cells[t1].face != self.cells[t2].face:
            logger.error(
                "selected cells are not a pair: %d != %d",
                self.cells[t1].face,
                self.cells[t2].face,
            )
        self.cells[t1].state = CellState.DEAD
        self.cells[t2].state = CellState.DEAD
        return t1, t2

    # -- snapshots ------------------------------------------------------------

    def copy(self) -> Board:
        return Board(
            cols=self.cols,
            rows=self.rows,
            cells=[Cell(c.face, c.state) for c in self.cells],
            blank_face=self.blank_face,
            src_selection=self.src_selection,
            dst_selection=self.dst_selection,
        )

    def restore(self, snapshot: Board) -> None:
        """Overwrite this board in place with the contents of *snapshot*."""
        if (snapshot.cols, snapshot.rows) != (self.cols, self.rows):
            raise BoardError("Cannot restore from a snapshot of a different shape.")
        self.cells = [Cell(c.face, c.state) for c in snapshot.cells]
        self.blank_face = snapshot.blank_face
        self.src_selection = snapshot.src_selection
        self.dst_selection = snapshot.dst_selection
