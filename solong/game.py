"""Game state and rules: player moves, the patrolling enemy and game end."""

from __future__ import annotations

from dataclasses import dataclass

from .mapfile import COLLECTIBLE, EXIT, FLOOR, WALL, GameMap

KEY_ESCAPE = 65307
KEY_LEFT = 65361
KEY_UP = 65362
KEY_RIGHT = 65363
KEY_DOWN = 65364

ENEMY_INTERVAL = 40000

WIN_MESSAGE = "You win! Congratulations!"
WALKED_INTO_ENEMY_MESSAGE = "You are by an enemy!"
CAUGHT_MESSAGE = "You are caught by an enemy!"

_DIRECTIONS = {
    ord("W"): (0, -1),
    ord("w"): (0, -1),
    KEY_UP: (0, -1),
    ord("S"): (0, 1),
    ord("s"): (0, 1),
    KEY_DOWN: (0, 1),
    ord("A"): (-1, 0),
    ord("a"): (-1, 0),
    KEY_LEFT: (-1, 0),
    ord("D"): (1, 0),
    ord("d"): (1, 0),
    KEY_RIGHT: (1, 0),
}


class GameExit(Exception):
    """Raised when the game ends and the program should stop."""

    def __init__(self, code: int = 0, message: str | None = None) -> None:
        super().__init__(message if message is not None else f"exit {code}")
        self.code = code
        self.message = message


class GameOver(GameExit):
    """Raised when the game ends by winning or by meeting the enemy."""

    def __init__(self, message: str) -> None:
        super().__init__(0, message)


def format_moves(moves: int) -> str:
    """Return the move counter line printed after every move."""
    return f"Moves: {moves}"


@dataclass
class Enemy:
    """An enemy patrolling left and right along one row."""

    x: int
    y: int
    direction: int = 1
    frame: int = 0


class Game:
    """The running state of one game on a map; the map is updated in place."""

    def __init__(self, game_map: GameMap) -> None:
        self.map = game_map
        self.player = game_map.player
        self.collectibles = game_map.collectibles
        self.moves = 0
        self.frame = 0
        self.running = True
        exit_x, exit_y = game_map.exit
        if exit_y > 0 and game_map.tile(exit_x, exit_y - 1) != WALL:
            enemy_y = exit_y - 1
        else:
            enemy_y = exit_y + 1
        self.enemy = Enemy(x=exit_x, y=enemy_y, direction=1)

    def _game_over(self, message: str) -> None:
        print(message)
        self.running = False
        raise GameOver(message)

    def handle_key(self, key: int) -> None:
        """React to a key press given as a keysym code."""
        if key == KEY_ESCAPE:
            self.quit()
        step = _DIRECTIONS.get(key)
        if step is None:
            return
        x, y = self.player
        self.move_player(x + step[0], y + step[1])

    def move_player(self, x: int, y: int) -> bool:
        """Try to move the player to ``(x, y)``; return whether it moved."""
        tile = self.map.tile(x, y)
        if tile == WALL:
            return False
        if (x, y) == (self.enemy.x, self.enemy.y):
            self._game_over(WALKED_INTO_ENEMY_MESSAGE)
        if tile == COLLECTIBLE:
            self.collectibles -= 1
            self.map.rows[y][x] = FLOOR
        if tile == EXIT:
            if self.collectibles == 0:
                self._game_over(WIN_MESSAGE)
            return False
        self.player = (x, y)
        self.moves += 1
        print(format_moves(self.moves))
        return True

    def _enemy_blocked(self, x: int) -> bool:
        return x < 0 or x >= self.map.width or self.map.tile(x, self.enemy.y) == WALL

    def move_enemy(self) -> None:
        """Advance the enemy one step, turning around at walls."""
        enemy = self.enemy
        new_x = enemy.x + enemy.direction
        if self._enemy_blocked(new_x):
            enemy.direction = -enemy.direction
            new_x = enemy.x + enemy.direction
            if self._enemy_blocked(new_x):
                return
        if (new_x, enemy.y) == self.player:
            self._game_over(CAUGHT_MESSAGE)
        enemy.x = new_x

    def tick(self) -> bool:
        """Advance one loop iteration; return True when a redraw is due."""
        redraw = self.frame % ENEMY_INTERVAL == 0
        if redraw:
            self.move_enemy()
            self.enemy.frame = (self.enemy.frame + 1) % 2
        self.frame += 1
        return redraw

    def quit(self) -> None:
        """End the game normally: mark it stopped and raise ``GameExit(0)``."""
        self.running = False
        raise GameExit(0)