"""Line-based command reader shared by the CLI frontends.

A line holds either one command word or up to two cell names.  Cells are
named by column letter and row number on the interior grid, so ``a1`` is
the top-left playable tile.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from backend.models.board import Point

_CELL_RE = re.compile(r"^([a-z])(\d{1,2})$")


class Command(NamedTuple):
    action: str
    point: Point | None = None


# -- shared command mapping -----------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "h": "hint",
    "hint": "hint",
    "s": "shuffle",
    "shuffle": "shuffle",
    "d": "demo",
    "demo": "demo",
    "r": "restart",
    "restart": "restart",
    "q": "quit",
    "quit": "quit",
    "exit": "quit",
    "?": "help",
    "help": "help",
}


def cell_name(point: Point) -> str:
    """Inverse of the cell parser: ``Point(1, 1)`` → ``"a1"``."""
    return f"{chr(ord('a') + point.x - 1)}{point.y}"


def _parse_cell(token: str) -> Point | None:
    m = _CELL_RE.match(token)
    if m is None:
        return None
    return Point(ord(m.group(1)) - ord("a") + 1, int(m.group(2)))


# -- public API ----------------------------------------------------------------


def parse_line(line: str) -> list[Command]:
    """Turn one input line into commands.

    Possible actions:
        "click"                         — with a ``point``, one per cell name
        "hint", "shuffle", "demo"       — engine requests
        "restart", "help", "quit"       — session control
        "unknown"                       — anything else
    An empty line yields no commands.
    """
    tokens = line.strip().lower().split()
    if not tokens:
        return []

    if len(tokens) == 1 and tokens[0] in _KEY_MAP:
        return [Command(_KEY_MAP[tokens[0]])]

    points = [_parse_cell(t) for t in tokens]
    if len(points) > 2 or any(p is None for p in points):
        return [Command("unknown")]
    return [Command("click", p) for p in points]
