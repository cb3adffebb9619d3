"""Falling blocks on a well whose rows are kept as bit masks."""

from __future__ import annotations

import argparse
import random
from typing import List, Optional, Tuple

from tinygames.terminal import ESCAPE, Direction, Terminal, key_to_direction

# Each shape is four row masks; bit j of a row is the piece's column j.
# Shapes come in groups of four rotations, one group per piece letter.
SHAPES: Tuple[Tuple[int, int, int, int], ...] = (
    (15, 0, 0, 0), (1, 1, 1, 1), (15, 0, 0, 0), (1, 1, 1, 1),
    (3, 3, 0, 0), (3, 3, 0, 0), (3, 3, 0, 0), (3, 3, 0, 0),
    (1, 7, 0, 0), (6, 2, 2, 0), (0, 7, 4, 0), (2, 2, 3, 0),
    (0, 7, 1, 0), (2, 2, 6, 0), (4, 7, 0, 0), (3, 2, 2, 0),
    (2, 7, 0, 0), (2, 6, 2, 0), (0, 7, 2, 0), (2, 3, 2, 0),
    (6, 3, 0, 0), (1, 3, 2, 0), (6, 3, 0, 0), (1, 3, 2, 0),
    (3, 6, 0, 0), (2, 3, 1, 0), (3, 6, 0, 0), (2, 3, 1, 0),
)

PIECE_LETTERS = "IOJLTZN"
FALL_TICKS = 10
TICK_SECONDS = 0.1


def _turned(index: int) -> int:
    return index + 1 if index & 3 != 3 else index - 3


class BitTetris:
    """A well of width by height cells.

    Row 0 is open air above the well and row height + 1 is the floor; every
    row mask has bit 0 and bit width + 1 set for the side walls, so the
    playing columns are bits 1 to width.
    """

    def __init__(self, width: int = 7, height: int = 15,
                 rng: Optional[random.Random] = None):
        if width < 4 or height < 4:
            raise ValueError("the well must be at least 4 by 4")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.full_row = (4 << width) - 1
        self.empty_row = (2 << width) | 1
        self.rows: List[int] = [self.empty_row] * (height + 1) + [self.full_row]
        self._letters: List[List[Optional[str]]] = [[None] * width for _ in range(height)]
        self.piece = 0
        self.x = 1
        self.y = 1
        self.lines = 0
        self.over = False

    @property
    def letter(self) -> str:
        """The letter naming the falling piece."""
        return PIECE_LETTERS[self.piece >> 2]

    def _collides(self, piece: int, x: int, y: int) -> bool:
        if x < 0:
            return True
        for i, bits in enumerate(SHAPES[piece]):
            if not bits:
                continue
            row = y + i
            if not 0 <= row < len(self.rows) or self.rows[row] & (bits << x):
                return True
        return False

    def _piece_cells(self) -> List[Tuple[int, int]]:
        """The (row, bit) pairs the falling piece covers."""
        return [
            (self.y + i, self.x + j)
            for i, bits in enumerate(SHAPES[self.piece])
            for j in range(4)
            if bits >> j & 1
        ]

    def _try(self, piece: int, x: int, y: int) -> bool:
        if self.over or self._collides(piece, x, y):
            return False
        self.piece, self.x, self.y = piece, x, y
        return True

    def _clear_rows(self) -> None:
        inner = range(1, self.height + 1)
        kept = [r for r in inner if self.rows[r] != self.full_row]
        cleared = self.height - len(kept)
        self.lines += cleared
        self.rows = (
            [self.empty_row] * (cleared + 1)
            + [self.rows[r] for r in kept]
            + [self.full_row]
        )
        self._letters = (
            [[None] * self.width for _ in range(cleared)]
            + [self._letters[r - 1] for r in kept]
        )

    def _lock(self) -> None:
        if self.y == 1 and self.x <= 1:
            self.over = True
            return
        letter = self.letter
        for row, bit in self._piece_cells():
            self.rows[row] |= 1 << bit
            self._letters[row - 1][bit - 1] = letter
        self.x, self.y = 1, 1
        self.piece = self.rng.randrange(len(SHAPES))
        self._clear_rows()

    def shift(self, dx: int) -> bool:
        """Move the piece sideways; return whether it moved."""
        return self._try(self.piece, self.x + dx, self.y)

    def rotate(self) -> bool:
        """Turn the piece a quarter where there is room; return whether it turned."""
        return self._try(_turned(self.piece), self.x, self.y)

    def drop(self) -> bool:
        """Move the piece down a row, locking it when blocked; return whether it fell.

        A piece blocked at the spawn point ends the game.
        """
        if self.over:
            return False
        if self._try(self.piece, self.x, self.y + 1):
            return True
        self._lock()
        return False

    def hard_drop(self) -> int:
        """Let the piece fall until it locks; return the rows it fell."""
        fallen = 0
        while self.drop():
            fallen += 1
        return fallen

    def render(self, letters: bool = False) -> str:
        """Draw the well, blocks as '[]' or as their piece letters, a '#' wall on the right."""
        grid = [list(row) for row in self._letters]
        if not self.over:
            for row, bit in self._piece_cells():
                if 1 <= row <= self.height and 1 <= bit <= self.width:
                    grid[row - 1][bit - 1] = self.letter
        if letters:
            cell = lambda value: value if value is not None else "."
        else:
            cell = lambda value: "[]" if value is not None else ".."
        return "\n".join("".join(cell(v) for v in row) + "#" for row in grid)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="tetris-rows",
        description="A/D move, S falls, W rotates, space drops, Esc quits.",
    )
    parser.add_argument("--width", type=int, default=7)
    parser.add_argument("--height", type=int, default=15)
    parser.add_argument("--letters", action="store_true",
                        help="draw blocks as the letters of their pieces")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    try:
        game = BitTetris(args.width, args.height, random.Random(args.seed))
    except ValueError as exc:
        parser.error(str(exc))
    ticks = 0
    with Terminal() as term:
        term.clear()
        term.write(game.render(args.letters) + "\n")
        while not game.over:
            key = term.read_key(TICK_SECONDS)
            if key == ESCAPE:
                break
            if key is not None:
                if key == " ":
                    game.hard_drop()
                else:
                    direction = key_to_direction(key)
                    if direction is Direction.LEFT:
                        game.shift(-1)
                    elif direction is Direction.RIGHT:
                        game.shift(1)
                    elif direction is Direction.DOWN:
                        game.drop()
                    elif direction is Direction.UP:
                        game.rotate()
            else:
                ticks += 1
                if ticks < FALL_TICKS:
                    continue
                game.drop()
            ticks = 0
            term.clear()
            term.write(game.render(args.letters) + "\n")
        term.write("\nGame over!\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())