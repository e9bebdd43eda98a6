import pytest

from solong.game import (
    CAUGHT_MESSAGE,
    ENEMY_INTERVAL,
    KEY_DOWN,
    KEY_ESCAPE,
    KEY_RIGHT,
    WALKED_INTO_ENEMY_MESSAGE,
    WIN_MESSAGE,
    Game,
    GameExit,
    GameOver,
    format_moves,
)
from solong.mapfile import parse_map_text

MAP_TEXT = "1111111\n1P0C001\n10000E1\n1111111"


@pytest.fixture
def game():
    return Game(parse_map_text(MAP_TEXT))


def test_format_moves():
    assert format_moves(3) == "Moves: 3"


def test_enemy_starts_above_exit_when_free(game):
    exit_x, exit_y = game.map.exit
    assert (game.enemy.x, game.enemy.y) == (exit_x, exit_y - 1)
    assert game.enemy.direction == 1


def test_enemy_starts_below_exit_when_above_is_wall():
    g = Game(parse_map_text("11111\n1PCE1\n10001\n11111"))
    exit_x, exit_y = g.map.exit
    assert (g.enemy.x, g.enemy.y) == (exit_x, exit_y + 1)


def test_wall_blocks_player(game):
    start = game.player
    assert game.move_player(start[0], start[1] - 1) is False
    assert game.player == start
    assert game.moves == 0


def test_move_prints_counter(game, capsys):
    game.handle_key(ord("d"))
    assert game.player == (2, 1)
    assert game.moves == 1
    assert capsys.readouterr().out == format_moves(1) + "\n"


def test_collect_clears_tile(game):
    game.handle_key(KEY_RIGHT)
    game.handle_key(ord("D"))
    assert game.player == (3, 1)
    assert game.collectibles == 0
    assert game.map.tile(3, 1) == "0"


def test_exit_blocked_until_collected(game):
    game.handle_key(KEY_DOWN)
    for _ in range(4):
        game.handle_key(ord("d"))
    assert game.player == (4, 2)
    assert game.map.exit == (5, 2)
    assert game.collectibles == 1


def test_exit_after_collecting_wins(game, capsys):
    for key in (ord("d"), ord("d"), ord("s"), ord("d")):
        game.handle_key(key)
    with pytest.raises(GameOver) as info:
        game.handle_key(ord("d"))
    assert info.value.message == WIN_MESSAGE
    assert capsys.readouterr().out.endswith(WIN_MESSAGE + "\n")


def test_escape_quits(game):
    with pytest.raises(GameExit) as info:
        game.handle_key(KEY_ESCAPE)
    assert info.value.code == 0
    assert not isinstance(info.value, GameOver)


def test_unknown_key_ignored(game):
    game.handle_key(ord("x"))
    assert game.player == game.map.player
    assert game.moves == 0


def test_walking_into_enemy(game):
    game.player = (game.enemy.x - 1, game.enemy.y)
    with pytest.raises(GameOver) as info:
        game.handle_key(ord("d"))
    assert info.value.message == WALKED_INTO_ENEMY_MESSAGE


def test_enemy_turns_at_wall(game):
    start_x = game.enemy.x
    game.move_enemy()
    assert game.enemy.direction == -1
    assert game.enemy.x == start_x - 1


def test_enemy_catches_player(game):
    game.player = (game.enemy.x - 1, game.enemy.y)
    with pytest.raises(GameOver) as info:
        game.move_enemy()
    assert info.value.message == CAUGHT_MESSAGE


def test_tick_moves_enemy_on_interval(game):
    start_x = game.enemy.x
    assert game.tick() is True
    assert game.enemy.x != start_x
    assert game.enemy.frame == 1
    moved_x = game.enemy.x
    assert game.tick() is False
    assert game.enemy.x == moved_x
    assert game.frame == 2


def test_tick_toggles_frame_each_interval(game):
    game.tick()
    game.frame = ENEMY_INTERVAL
    assert game.tick() is True
    assert game.enemy.frame == 0