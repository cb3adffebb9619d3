# tinygames

A handful of small classic games that run in a plain text terminal:

- **2048**: slide and merge numbered tiles.
- **Maze**: walk through a randomly generated maze to its exit.
- **Snake**: eat food, grow, and don't bite yourself.
- **Gomoku** (five in a row): play against a friend or the computer.
- **Minesweeper**: clear the field without digging up a mine.
- **Tetris**: two variants, one cell-based and one that keeps each row as a bit mask.

The package needs nothing beyond Python 3.10 or later.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

Each game has its own command:

```
tinygames-2048
tinygames-maze
tinygames-snake
tinygames-gomoku
tinygames-minesweeper
tinygames-tetris
tinygames-tetris-rows
```

The games read single key presses. A, D, S and W (either case) move left,
right, down and up, and Esc quits. Every command takes `--seed N` to make
the random play repeatable, and `--help` lists its options.

- **2048** (`--size`, default 4): a new tile appears after every move that
  changes the board. Space also quits. The game stops when no move is left.
- **Maze** (`--width`, default 15): walk from the entrance on the left edge
  to the exit on the right edge; Q, or reaching the exit, brings a new maze.
  With `--carved` the maze is a depth-first maze (`--width` odd, default 21)
  from the top left to the bottom right, and the game ends at the exit.
- **Snake** (`--width`, default 20; `--height`, default the width): the
  snake moves one cell every `--delay` milliseconds (default 100). Space
  pauses until the next key. `--no-wrap` makes the edges deadly instead of
  wrapping round, `--walls` puts dotted walls around the border, and
  `--food N` keeps N pieces of food on the board. After a game, Space starts
  another.
- **Gomoku** (`--size`, default 13, from 5 to 26): Space places a stone at the
  cursor; black moves first and five or more in a row wins. Q cycles the mode
  between `PvP`, `PvE` (the computer answers each of your moves) and `EvE`
  (each Space makes the computer move); `--mode` picks the starting mode.
- **Minesweeper** (`--level easy|medium|hard`, or `--width`, `--height`,
  `--mines`): Space digs, F flags or unflags, E uncovers the neighbours of
  an open number whose flags are all in place. The first dig is always safe.
- **Tetris** (`--width` 10, `--height` 25 by default) and **tetris-rows**
  (`--width` 7, `--height` 15; `--letters` draws each block as the letter of
  its piece): W rotates, S moves the piece down a row, Space drops it
  all the way. Full rows are cleared.

## Using the games as a library

Every game is an ordinary class whose state can be driven and inspected
without a terminal, which makes it easy to script or test. Each one takes a
`random.Random` instance, so a game can be replayed exactly:

```python
import random

from tinygames.game2048 import Game2048
from tinygames.terminal import key_to_direction

game = Game2048(size=4, rng=random.Random(1))
if game.move(key_to_direction("a")):
    game.spawn()
print(game.render())
print("score:", game.score, "moves left:", game.can_move())
```

The other classes work the same way:

- `tinygames.maze.MazeGame`, with `move`; `generate_maze` and `carve_maze`
  build a maze on their own and return `(walls, entrance, exit)`
- `tinygames.snake.SnakeGame`, with `turn` and `step`
- `tinygames.gomoku.Gomoku`, with `place` and `ai_move`
- `tinygames.minesweeper.Minefield`, with `dig`, `toggle_flag` and `chord`
- `tinygames.tetris.Tetris`, with `shift`, `rotate`, `drop`, `hard_drop`
  and `tick`
- `tinygames.tetris_rows.BitTetris`, with `shift`, `rotate`, `drop` and
  `hard_drop`

Every class has a `render` method that returns the board as text.

`tinygames.terminal` holds the `Direction` enum, `key_to_direction` and
`normalize_key`, and the `Terminal` context manager, which switches a POSIX
terminal out of line mode and echo for the length of a game and restores it
afterwards (on Windows it reads keys through the console instead).

## What it does not do

The games draw plain monochrome text, redrawing the whole screen each turn.
There are no colours, no mouse control, no graphical windows, and no saved
scores or high-score table.