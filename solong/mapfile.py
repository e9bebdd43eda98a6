"""Loading and validating ``.ber`` map files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Sequence

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
_VALID_TILES = frozenset({WALL, FLOOR, PLAYER, EXIT, COLLECTIBLE})


class MapError(Exception):
    """Raised when a map file cannot be read or is not a valid map."""


@dataclass
class GameMap:
    """A validated map: a grid of tile characters and its key positions."""

    rows: list[list[str]]
    width: int
    height: int
    player: tuple[int, int]
    exit: tuple[int, int]
    collectibles: int

    def tile(self, x: int, y: int) -> str:
        """Return the tile character at column ``x`` of row ``y``."""
        return self.rows[y][x]


def read_file(path: str | os.PathLike[str]) -> str:
    """Return the whole content of the file at ``path``."""
    try:
        size = os.stat(path).st_size
    except OSError as exc:
        raise MapError("stat") from exc
    try:
        with open(path, "rb") as handle:
            data = handle.read(size)
    except OSError as exc:
        raise MapError("open") from exc
    if len(data) != size:
        raise MapError("read")
    return data.decode("latin-1")


def split_lines(text: str) -> list[str]:
    """Split ``text`` on newlines; a trailing newline yields a final empty line."""
    return text.split("\n")


def _check_shape(rows: Sequence[str]) -> int:
    if not rows:
        raise MapError("Empty map")
    width = len(rows[0])
    for row in rows:
        if not row:
            raise MapError("Empty line in map")
        if len(row) != width:
            raise MapError("Map must be rectangular")
    return width


def _scan_elements(
    rows: Sequence[str],
) -> tuple[tuple[int, int], tuple[int, int], int]:
    players = 0
    exits = 0
    collectibles = 0
    player = (0, 0)
    exit_pos = (0, 0)
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == PLAYER:
                players += 1
                player = (x, y)
            elif char == EXIT:
                exits += 1
                exit_pos = (x, y)
            elif char == COLLECTIBLE:
                collectibles += 1
            elif char not in _VALID_TILES:
                raise MapError("Invalid map character")
    if players != 1 or exits != 1 or collectibles < 1:
        raise MapError("Map must have 1 player, 1 exit and >=1 collectibles")
    return player, exit_pos, collectibles


def check_walls(rows: Sequence[Sequence[str]]) -> None:
    """Raise MapError unless the border of the grid is all walls."""
    height = len(rows)
    width = len(rows[0])
    top, bottom = rows[0], rows[height - 1]
    if any(top[x] != WALL or bottom[x] != WALL for x in range(width)):
        raise MapError("Map must be enclosed by walls")
    if any(row[0] != WALL or row[width - 1] != WALL for row in rows):
        raise MapError("Map must be enclosed by walls")


def verify_path(game_map: GameMap) -> None:
    """Raise MapError unless every collectible and the exit can be reached."""
    need_collect = game_map.collectibles
    need_exit = 1
    seen: set[tuple[int, int]] = set()
    stack = [game_map.player]
    while stack:
        x, y = stack.pop()
        if not (0 <= x < game_map.width and 0 <= y < game_map.height):
            continue
        if (x, y) in seen or game_map.tile(x, y) == WALL:
            continue
        seen.add((x, y))
        tile = game_map.tile(x, y)
        if tile == COLLECTIBLE:
            need_collect -= 1
        elif tile == EXIT:
            need_exit -= 1
        stack.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    if need_collect != 0 or need_exit != 0:
        raise MapError("Invalid path to all collectibles and exit")


def parse_map_text(text: str) -> GameMap:
    """Parse and validate map text, returning the resulting GameMap."""
    lines = split_lines(text)
    width = _check_shape(lines)
    player, exit_pos, collectibles = _scan_elements(lines)
    check_walls(lines)
    game_map = GameMap(
        rows=[list(line) for line in lines],
        width=width,
        height=len(lines),
        player=player,
        exit=exit_pos,
        collectibles=collectibles,
    )
    verify_path(game_map)
    return game_map


def parse_map(path: str | os.PathLike[str]) -> GameMap:
    """Read, parse and validate the map file at ``path``."""
    return parse_map_text(read_file(path))