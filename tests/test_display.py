import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from solong.display import (  # noqa: E402
    PLAYER_ANIM_DIV,
    Textures,
    hud_text,
    key_from_event,
    load_textures,
    main,
    render,
    run,
    to_surface,
)
from solong.game import (  # noqa: E402
    CAUGHT_MESSAGE,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_UP,
    Game,
)
from solong.mapfile import parse_map_text  # noqa: E402
from solong.xpm import XpmError, parse_xpm  # noqa: E402

FLOOR = (10, 10, 10)
WALL = (200, 0, 0)
EXIT = (0, 200, 0)
COLLECT = (0, 0, 200)
PLAYER = ((200, 200, 0), (0, 200, 200))
ENEMY = ((200, 0, 200), (100, 100, 100))

TEXTURE_NAMES = (
    "floor", "wall", "exit", "collect", "player1", "player2", "enemy1", "enemy2",
)

XPM_TEXT = (
    "/* XPM */\n"
    "static char *img[] = {\n"
    '"2 2 1 1",\n'
    '"a c #00FF00",\n'
    '"aa",\n'
    '"aa"\n'
    "};\n"
)

RENDER_MAP = "11111\n1P0C1\n10E01\n11111"
CAUGHT_MAP = "1111\n10P1\n1EC1\n1111"


def _solid(color, size):
    surface = pygame.Surface((size, size))
    surface.fill(color)
    return surface


def _textures(size=4):
    return Textures(
        floor=_solid(FLOOR, size),
        wall=_solid(WALL, size),
        exit=_solid(EXIT, size),
        collect=_solid(COLLECT, size),
        player=(_solid(PLAYER[0], size), _solid(PLAYER[1], size)),
        enemy=(_solid(ENEMY[0], size), _solid(ENEMY[1], size)),
    )


def _cell(screen, x, y, size=4):
    return tuple(screen.get_at((x * size + 1, y * size + 1)))[:3]


def _write_textures(directory, names=TEXTURE_NAMES):
    directory.mkdir(exist_ok=True)
    for name in names:
        (directory / f"{name}.xpm").write_text(XPM_TEXT)


def test_hud_text_joins_label_and_count():
    assert hud_text(0) == "Moves:0"
    assert hud_text(12) == "Moves:12"


def test_to_surface_keeps_size_and_colours():
    image = parse_xpm(["2 1 2 1", "a c #FF0000", "b c None", "ab"])
    surface = to_surface(image)
    assert surface.get_size() == (2, 1)
    assert tuple(surface.get_at((0, 0))) == (255, 0, 0, 255)
    assert surface.get_at((1, 0)).a == 0


def test_key_release_of_escape_maps_to_keysym():
    event = pygame.event.Event(pygame.KEYUP, key=pygame.K_ESCAPE)
    assert key_from_event(event) == KEY_ESCAPE


@pytest.mark.parametrize(
    "key, expected",
    [(pygame.K_UP, KEY_UP), (pygame.K_LEFT, KEY_LEFT), (pygame.K_w, ord("w"))],
)
def test_key_release_maps_movement_keys(key, expected):
    assert key_from_event(pygame.event.Event(pygame.KEYUP, key=key)) == expected


def test_key_press_is_ignored():
    event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w)
    assert key_from_event(event) is None


def test_load_textures_reads_all_files(tmp_path):
    _write_textures(tmp_path)
    textures = load_textures(tmp_path)
    assert textures.tile_size == (2, 2)
    assert tuple(textures.enemy[1].get_at((1, 1)))[:3] == (0, 255, 0)
    assert len(textures.player) == 2


def test_load_textures_without_floor(tmp_path):
    _write_textures(tmp_path, TEXTURE_NAMES[1:])
    with pytest.raises(XpmError, match="load floor.xpm failed"):
        load_textures(tmp_path)


def test_load_textures_without_other_image(tmp_path):
    _write_textures(tmp_path, [n for n in TEXTURE_NAMES if n != "enemy2"])
    with pytest.raises(XpmError, match=r"load \.xpm failed"):
        load_textures(tmp_path)


def test_render_draws_each_cell():
    game = Game(parse_map_text(RENDER_MAP))
    screen = pygame.Surface((20, 16))
    render(screen, game, _textures(), None)
    assert _cell(screen, 0, 0) == WALL
    assert _cell(screen, 1, 1) == PLAYER[0]
    assert _cell(screen, 2, 1) == ENEMY[0]
    assert _cell(screen, 3, 1) == COLLECT
    assert _cell(screen, 2, 2) == EXIT
    assert _cell(screen, 1, 2) == FLOOR


def test_render_uses_animation_frames():
    game = Game(parse_map_text(RENDER_MAP))
    game.frame = PLAYER_ANIM_DIV
    game.enemy.frame = 1
    screen = pygame.Surface((20, 16))
    render(screen, game, _textures(), None)
    assert _cell(screen, 1, 1) == PLAYER[1]
    assert _cell(screen, 2, 1) == ENEMY[1]


def test_render_draws_hud_in_white():
    pygame.font.init()
    game = Game(parse_map_text(RENDER_MAP))
    screen = pygame.Surface((80, 64))
    render(screen, game, _textures(16), pygame.font.Font(None, 20))
    region = [
        tuple(screen.get_at((x, y)))[:3]
        for x in range(10, 70)
        for y in range(10, 30)
    ]
    assert (255, 255, 255) in region


def test_run_ends_when_enemy_catches_player(capsys):
    game = Game(parse_map_text(CAUGHT_MAP))
    assert run(game, _textures()) == 0
    assert CAUGHT_MESSAGE in capsys.readouterr().out


def test_main_without_map_argument(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_with_invalid_map(tmp_path, capsys):
    path = tmp_path / "bad.ber"
    path.write_text("111\n1P1\n111")
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error\n")
    assert "Map must have 1 player, 1 exit and >=1 collectibles" in err


def test_main_without_textures(tmp_path, monkeypatch, capsys):
    path = tmp_path / "map.ber"
    path.write_text(RENDER_MAP)
    monkeypatch.chdir(tmp_path)
    assert main([str(path)]) == 1
    assert "load floor.xpm failed" in capsys.readouterr().err