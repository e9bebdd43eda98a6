# solong

A small top-down puzzle game. Walk the player around a walled map, pick up
every collectible and step onto the exit, while avoiding an enemy that
patrols left and right next to the exit.

## Installing

```
pip install .
```

## Playing

```
solong path/to/level.ber
```

The game reads its tile images from a `textures/` directory in the current
working directory: `floor.xpm`, `wall.xpm`, `exit.xpm`, `collect.xpm`,
`player1.xpm`, `player2.xpm`, `enemy1.xpm` and `enemy2.xpm`. The size of
`floor.xpm` sets the size of one map cell, and so the window size.

Controls:

- `W` / `A` / `S` / `D` or the arrow keys move the player (on key release)
- `Esc`, or closing the window, quits

Every step the player takes prints the running move count (`Moves: N`) to
standard output, and the count is also drawn in the top-left corner of the
window.

The game ends when:

- the player steps onto the exit after picking up every collectible
  (`You win! Congratulations!`); stepping onto the exit earlier does nothing;
- the player walks into the enemy, or the enemy walks into the player.

The enemy starts on the cell above the exit, or below it when the cell above
is a wall, and moves one step sideways at regular intervals, turning round at
walls and at the map edge.

If the map or a texture cannot be loaded, `Error` and a reason are written to
standard error and the command exits with status 1.

## Map format

A map is a plain text file with one row per line, made up of:

| Char | Meaning      |
|------|--------------|
| `0`  | floor        |
| `1`  | wall         |
| `C`  | collectible  |
| `E`  | exit         |
| `P`  | player start |

Example:

```
1111111
1P0C0E1
1111111
```

A map is rejected when it has an empty line (a trailing newline at the end of
the file counts as one), is not rectangular, contains an unknown character,
does not have exactly one player, exactly one exit and at least one
collectible, is not enclosed by walls, or when the exit and all collectibles
cannot be reached from the start.

## Using the pieces from Python

```python
from solong.mapfile import parse_map_text, MapError
from solong.game import Game, GameOver

game_map = parse_map_text("1111111\n1P0C0E1\n1111111")
game = Game(game_map)
try:
    for key in "ddddd":
        game.handle_key(ord(key))
except GameOver as finished:
    print(finished.message)
```

- `solong.mapfile`: `parse_map`, `parse_map_text`, `check_walls`,
  `verify_path` and the `GameMap` grid; problems raise `MapError`.
- `solong.game`: the `Game` state with `handle_key`, `move_player`,
  `move_enemy`, `tick` and `quit`; the end of a game raises `GameOver`
  (winning or meeting the enemy) or `GameExit` (quitting).
- `solong.xpm`: `load_xpm`, `parse_xpm_text` and `parse_xpm` decode XPM
  images into an `XpmImage` of 32-bit pixel values; problems raise `XpmError`.
- `solong.colors.lookup_color` resolves X11 colour names, ignoring case.
- `solong.display`: `load_textures`, `render`, `run` and `main`, the pygame
  front end.

## Running the tests

```
pip install .[test]
pytest
```