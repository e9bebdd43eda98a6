"""Drawing the game with pygame and running its main loop."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import pygame

from .game import KEY_DOWN, KEY_ESCAPE, KEY_LEFT, KEY_RIGHT, KEY_UP, Game, GameExit
from .mapfile import COLLECTIBLE, EXIT, WALL, MapError, parse_map
from .xpm import TRANSPARENT, XpmError, XpmImage, load_xpm

PLAYER_ANIM_DIV = 50000
HUD_POSITION = (10, 10)
HUD_COLOR = (255, 255, 255)
HUD_LABEL = "Moves:"
WINDOW_TITLE = "so_long"
DEFAULT_TEXTURE_DIR = "textures"
_FONT_SIZE = 18

_SPECIAL_KEYS = {
    pygame.K_ESCAPE: KEY_ESCAPE,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_UP: KEY_UP,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_DOWN: KEY_DOWN,
}


@dataclass
class Textures:
    """The images used to draw the map, the player and the enemy."""

    floor: pygame.Surface
    wall: pygame.Surface
    exit: pygame.Surface
    collect: pygame.Surface
    player: tuple[pygame.Surface, pygame.Surface]
    enemy: tuple[pygame.Surface, pygame.Surface]

    @property
    def tile_size(self) -> tuple[int, int]:
        """Width and height of one map cell, taken from the floor image."""
        return self.floor.get_size()


def to_surface(image: XpmImage) -> pygame.Surface:
    """Turn a decoded XPM image into a pygame surface with alpha."""
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA, 32)
    for y, row in enumerate(image.pixels):
        for x, value in enumerate(row):
            alpha = 0 if value == TRANSPARENT else 255
            red = (value >> 16) & 0xFF
            green = (value >> 8) & 0xFF
            blue = value & 0xFF
            surface.set_at((x, y), (red, green, blue, alpha))
    return surface


def _load(base: Path, name: str) -> pygame.Surface:
    return to_surface(load_xpm(base / f"{name}.xpm"))


def load_textures(directory: str | os.PathLike[str] = DEFAULT_TEXTURE_DIR) -> Textures:
    """Load every game texture from the XPM files in ``directory``."""
    base = Path(directory)
    try:
        floor = _load(base, "floor")
    except XpmError as exc:
        raise XpmError("load floor.xpm failed") from exc
    try:
        return Textures(
            floor=floor,
            wall=_load(base, "wall"),
            exit=_load(base, "exit"),
            collect=_load(base, "collect"),
            player=(_load(base, "player1"), _load(base, "player2")),
            enemy=(_load(base, "enemy1"), _load(base, "enemy2")),
        )
    except XpmError as exc:
        raise XpmError("load .xpm failed") from exc


def hud_text(moves: int) -> str:
    """Return the move counter shown in the corner of the window."""
    return f"{HUD_LABEL}{moves}"


def key_from_event(event: pygame.event.Event) -> int | None:
    """Return the keysym of a key release event, or None for other events."""
    if event.type != pygame.KEYUP:
        return None
    return _SPECIAL_KEYS.get(event.key, event.key)


def render(
    screen: pygame.Surface,
    game: Game,
    textures: Textures,
    font: pygame.font.Font | None,
) -> None:
    """Draw the whole map, the player, the enemy and the move counter."""
    tile_w, tile_h = textures.tile_size
    anim_frame = (game.frame // PLAYER_ANIM_DIV) % 2
    tile_images = {
        WALL: textures.wall,
        COLLECTIBLE: textures.collect,
        EXIT: textures.exit,
    }
    enemy_pos = (game.enemy.x, game.enemy.y)
    for y, row in enumerate(game.map.rows):
        for x, tile in enumerate(row):
            pos = (x * tile_w, y * tile_h)
            screen.blit(textures.floor, pos)
            image = tile_images.get(tile)
            if image is not None:
                screen.blit(image, pos)
            if (x, y) == game.player:
                screen.blit(textures.player[anim_frame], pos)
            if (x, y) == enemy_pos:
                screen.blit(textures.enemy[game.enemy.frame], pos)
    if font is not None:
        label = font.render(hud_text(game.moves), True, HUD_COLOR)
        screen.blit(label, HUD_POSITION)


def run(game: Game, textures: Textures) -> int:
    """Open the window and play until the game ends; return the exit code."""
    pygame.init()
    try:
        tile_w, tile_h = textures.tile_size
        screen = pygame.display.set_mode(
            (game.map.width * tile_w, game.map.height * tile_h)
        )
        pygame.display.set_caption(WINDOW_TITLE)
        font = pygame.font.Font(None, _FONT_SIZE)
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.quit()
                key = key_from_event(event)
                if key is not None:
                    game.handle_key(key)
            if game.tick():
                render(screen, game, textures, font)
                pygame.display.flip()
    except GameExit as exc:
        return exc.code
    finally:
        pygame.quit()


def _fail(message: str) -> int:
    print(f"Error\n{message}", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Play the map named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return _fail("Usage: so_long map.ber")
    try:
        game_map = parse_map(args[0])
        textures = load_textures()
    except (MapError, XpmError) as exc:
        return _fail(str(exc))
    try:
        return run(Game(game_map), textures)
    except pygame.error as exc:
        return _fail(str(exc))