"""Minesweeper: uncover every cell that does not hide a mine."""

from __future__ import annotations

import argparse
import random
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

from tinygames.terminal import ESCAPE, Terminal, key_to_direction, normalize_key

Cell = Tuple[int, int]

LEVELS = {
    "easy": (9, 9, 10),
    "medium": (16, 16, 40),
    "hard": (30, 16, 99),
}


class GameState(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class Minefield:
    """A grid of cells, (x, y) with y growing downwards.

    Mines are laid on the first dig, away from the dug cell and its
    neighbours when the board leaves room, so the first dig is always safe.
    """

    def __init__(self, width: int = 9, height: int = 9, mines: int = 10,
                 rng: Optional[random.Random] = None):
        if width < 1 or height < 1:
            raise ValueError("the field must be at least 1 by 1")
        if not 0 <= mines < width * height:
            raise ValueError("the number of mines must leave at least one free cell")
        self.width = width
        self.height = height
        self.mines = mines
        self.rng = rng if rng is not None else random.Random()
        self.state = GameState.PLAYING
        self._mines: Set[Cell] = set()
        self._counts: List[List[int]] = [[0] * width for _ in range(height)]
        self._revealed: Set[Cell] = set()
        self._flags: Set[Cell] = set()
        self._laid = False

    @property
    def mine_cells(self) -> FrozenSet[Cell]:
        """Where the mines are; empty until the first dig."""
        return frozenset(self._mines)

    @property
    def revealed(self) -> FrozenSet[Cell]:
        return frozenset(self._revealed)

    @property
    def flags(self) -> FrozenSet[Cell]:
        return frozenset(self._flags)

    @property
    def mines_left(self) -> int:
        return self.mines - len(self._flags)

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"cell ({x}, {y}) is off the field")

    def _neighbours(self, x: int, y: int) -> Iterator[Cell]:
        for ny in range(max(y - 1, 0), min(y + 2, self.height)):
            for nx in range(max(x - 1, 0), min(x + 2, self.width)):
                if (nx, ny) != (x, y):
                    yield nx, ny

    def _lay_mines(self, x: int, y: int) -> None:
        cells = [(cx, cy) for cy in range(self.height) for cx in range(self.width)]
        pool = [c for c in cells if max(abs(c[0] - x), abs(c[1] - y)) > 1]
        if len(pool) < self.mines:
            pool = [c for c in cells if c != (x, y)]
        self._mines = set(self.rng.sample(pool, self.mines))
        for mx, my in self._mines:
            for nx, ny in self._neighbours(mx, my):
                self._counts[ny][nx] += 1
        self._laid = True

    def _open(self, x: int, y: int) -> bool:
        """Uncover a cell, flooding out from empty ones; return whether a mine was hit."""
        stack = [(x, y)]
        while stack:
            cell = stack.pop()
            if cell in self._revealed or cell in self._flags:
                continue
            self._revealed.add(cell)
            if cell in self._mines:
                return True
            cx, cy = cell
            if self._counts[cy][cx] == 0:
                stack.extend(self._neighbours(cx, cy))
        return False

    def _settle(self, hit: bool) -> GameState:
        if hit:
            self.state = GameState.LOST
        elif self.width * self.height - len(self._revealed) == self.mines:
            self.state = GameState.WON
        return self.state

    def dig(self, x: int, y: int) -> GameState:
        """Uncover a cell unless it is flagged or already open; return the game state."""
        self._check(x, y)
        if self.state is not GameState.PLAYING:
            return self.state
        if not self._laid:
            self._lay_mines(x, y)
        if (x, y) in self._flags or (x, y) in self._revealed:
            return self.state
        return self._settle(self._open(x, y))

    def toggle_flag(self, x: int, y: int) -> bool:
        """Flag or unflag a covered cell; return whether it is flagged now."""
        self._check(x, y)
        if self.state is not GameState.PLAYING or (x, y) in self._revealed:
            return False
        if (x, y) in self._flags:
            self._flags.discard((x, y))
            return False
        self._flags.add((x, y))
        return True

    def chord(self, x: int, y: int) -> GameState:
        """On an open number whose flags are all placed, uncover the rest of its neighbours."""
        self._check(x, y)
        if self.state is not GameState.PLAYING or (x, y) not in self._revealed:
            return self.state
        around = list(self._neighbours(x, y))
        if sum(cell in self._flags for cell in around) != self._counts[y][x]:
            return self.state
        hit = False
        for cell in around:
            if cell not in self._revealed and cell not in self._flags:
                hit = self._open(*cell) or hit
        return self._settle(hit)

    def _glyph(self, cell: Cell) -> str:
        shown = cell in self._revealed or (
            self.state is GameState.LOST and cell in self._mines
        )
        if shown:
            if cell in self._mines:
                return "@"
            count = self._counts[cell[1]][cell[0]]
            return str(count) if count else " "
        return "F" if cell in self._flags else "*"

    def render(self, cursor: Optional[Cell] = None) -> str:
        lines = [
            "".join(
                (">" if (x, y) == cursor else " ") + self._glyph((x, y))
                for x in range(self.width)
            )
            for y in range(self.height)
        ]
        if self.state is GameState.LOST:
            lines.append("Game over!")
        elif self.state is GameState.WON:
            lines.append("You win!")
        else:
            lines.append(f"residue:{self.mines_left}")
        return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="minesweeper",
        description="WASD moves, space digs, F flags, E opens around a number, Esc quits.",
    )
    parser.add_argument("--level", choices=sorted(LEVELS), default="easy")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--mines", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    width, height, mines = LEVELS[args.level]
    width = args.width if args.width is not None else width
    height = args.height if args.height is not None else height
    mines = args.mines if args.mines is not None else mines
    try:
        field = Minefield(width, height, mines, random.Random(args.seed))
    except ValueError as exc:
        parser.error(str(exc))
    size = width * height
    position = 0
    with Terminal() as term:
        while True:
            cursor = (position % width, position // width)
            term.clear()
            term.write(field.render(cursor) + "\n")
            if field.state is not GameState.PLAYING:
                term.read_key()
                break
            key = term.read_key()
            if key is None or key == ESCAPE:
                break
            if key == " ":
                field.dig(*cursor)
                continue
            name = normalize_key(key)
            if name == "F":
                field.toggle_flag(*cursor)
                continue
            if name == "E":
                field.chord(*cursor)
                continue
            direction = key_to_direction(key)
            if direction is not None:
                position = (position + direction.dx + direction.dy * width) % size
    return 0


if __name__ == "__main__":
    raise SystemExit(main())