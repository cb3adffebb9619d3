"""Falling blocks: steer pieces into full rows, which then disappear."""

from __future__ import annotations

import argparse
import random
from typing import List, Optional, Tuple

from tinygames.terminal import ESCAPE, Direction, Terminal, key_to_direction

Cell = Tuple[int, int]

# Each piece is four cells in a 4x4 box, packed as four nibbles holding
# x + 4 * y. Indices below 8 form rotation pairs, the rest groups of four.
_PACKED = (
    51264, 12816, 21520, 21520, 25872, 34113, 21537, 38208, 25921, 38481,
    38484, 38209, 25922, 43345, 34388, 38160, 25920, 38177, 42580, 38993,
)

FALL_TICKS = 10


def _unpack(packed: int) -> Tuple[Cell, ...]:
    nibbles = [(packed >> shift) & 15 for shift in range(0, 16, 4)]
    return tuple((n % 4, n // 4) for n in nibbles)


SHAPES: Tuple[Tuple[Cell, ...], ...] = tuple(_unpack(p) for p in _PACKED)


def next_rotation(index: int) -> int:
    """The shape index reached by turning the given one a quarter."""
    if index < 8:
        return index ^ 1
    return index + 1 if index & 3 != 3 else index - 3


class Tetris:
    """A well of width by height cells; (x, y) with y growing downwards."""

    def __init__(self, width: int = 10, height: int = 25,
                 rng: Optional[random.Random] = None):
        if width < 4 or height < 4:
            raise ValueError("the well must be at least 4 by 4")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.board: List[List[bool]] = [[False] * width for _ in range(height)]
        self.lines = 0
        self.over = False
        self.piece = 0
        self.x = 0
        self.y = 0
        self._ticks = 0
        self._spawn()

    @property
    def cells(self) -> List[Cell]:
        """The cells the falling piece covers."""
        return [(self.x + dx, self.y + dy) for dx, dy in SHAPES[self.piece]]

    def _fits(self, piece: int, x: int, y: int) -> bool:
        for dx, dy in SHAPES[piece]:
            cx, cy = x + dx, y + dy
            if not (0 <= cx < self.width and 0 <= cy < self.height):
                return False
            if self.board[cy][cx]:
                return False
        return True

    def _spawn(self) -> None:
        self.piece = self.rng.randrange(len(SHAPES))
        self.x = (self.width - 4) // 2
        self.y = 0
        if not self._fits(self.piece, self.x, self.y):
            self.over = True

    def _clear_rows(self) -> int:
        kept = [row for row in self.board if not all(row)]
        cleared = self.height - len(kept)
        self.board[:] = [[False] * self.width for _ in range(cleared)] + kept
        return cleared

    def _lock(self) -> None:
        for cx, cy in self.cells:
            self.board[cy][cx] = True
        landed_on_top = self.y == 0
        self.lines += self._clear_rows()
        if landed_on_top:
            self.over = True
            return
        self._spawn()

    def _try(self, piece: int, x: int, y: int) -> bool:
        if self.over or not self._fits(piece, x, y):
            return False
        self.piece, self.x, self.y = piece, x, y
        return True

    def shift(self, dx: int) -> bool:
        """Move the piece sideways; return whether it moved."""
        return self._try(self.piece, self.x + dx, self.y)

    def rotate(self) -> bool:
        """Turn the piece a quarter where there is room; return whether it turned."""
        return self._try(next_rotation(self.piece), self.x, self.y)

    def drop(self) -> bool:
        """Move the piece down a row, locking it when blocked; return whether it fell."""
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

    def tick(self) -> bool:
        """Advance one frame, falling a row every FALL_TICKS frames; return whether play goes on."""
        if self.over:
            return False
        self._ticks += 1
        if self._ticks >= FALL_TICKS:
            self._ticks = 0
            self.drop()
        return not self.over

    def render(self) -> str:
        piece = set(self.cells) if not self.over else set()
        return "\n".join(
            "".join(
                "[]" if filled or (x, y) in piece else "  "
                for x, filled in enumerate(row)
            )
            + "|"
            for y, row in enumerate(self.board)
        )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="tetris",
        description="A/D move, S falls, W rotates, space drops, Esc quits.",
    )
    parser.add_argument("--width", type=int, default=10)
    parser.add_argument("--height", type=int, default=25)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    try:
        game = Tetris(args.width, args.height, random.Random(args.seed))
    except ValueError as exc:
        parser.error(str(exc))
    with Terminal() as term:
        while not game.over:
            term.clear()
            term.write(f"lines:{game.lines}\n{game.render()}\n")
            key = term.read_key(0.05)
            if key == ESCAPE:
                break
            if key == " ":
                game.hard_drop()
            elif key is not None:
                direction = key_to_direction(key)
                if direction is Direction.LEFT:
                    game.shift(-1)
                elif direction is Direction.RIGHT:
                    game.shift(1)
                elif direction is Direction.DOWN:
                    game.drop()
                elif direction is Direction.UP:
                    game.rotate()
            game.tick()
        term.write("Game over!\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())