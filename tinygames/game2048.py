"""The 2048 sliding tile game."""

from __future__ import annotations

import argparse
import random
from typing import List, Optional, Tuple

from tinygames.terminal import ESCAPE, Terminal, key_to_direction, Direction


def _slide(values: List[int]) -> Tuple[List[int], int]:
    """Push tiles to the front, merging each equal pair once; return line and score gained."""
    out: List[int] = []
    gained = 0
    merged_last = False
    for value in (v for v in values if v):
        if out and out[-1] == value and not merged_last:
            out[-1] *= 2
            gained += value
            merged_last = True
        else:
            out.append(value)
            merged_last = False
    out.extend([0] * (len(values) - len(out)))
    return out, gained


class Game2048:
    """A square board of tiles that slide and merge."""

    def __init__(self, size: int = 4, rng: Optional[random.Random] = None):
        if size < 2:
            raise ValueError("board size must be at least 2")
        self.size = size
        self.rng = rng if rng is not None else random.Random()
        self.board: List[List[int]] = [[0] * size for _ in range(size)]
        self.score = 0
        self.spawn()

    def _lines(self, direction: Direction) -> List[List[Tuple[int, int]]]:
        n = range(self.size)
        if direction is Direction.LEFT:
            return [[(r, c) for c in n] for r in n]
        if direction is Direction.RIGHT:
            return [[(r, c) for c in reversed(n)] for r in n]
        if direction is Direction.UP:
            return [[(r, c) for r in n] for c in n]
        return [[(r, c) for r in reversed(n)] for c in n]

    def move(self, direction: Direction) -> bool:
        """Slide every tile towards the given side; return whether anything moved."""
        changed = False
        for coords in self._lines(direction):
            values = [self.board[r][c] for r, c in coords]
            slid, gained = _slide(values)
            self.score += gained
            if slid != values:
                changed = True
                for (r, c), value in zip(coords, slid):
                    self.board[r][c] = value
        return changed

    def spawn(self) -> Optional[Tuple[int, int]]:
        """Put a 2 (or, one time in five, a 4) on a random empty cell and return it."""
        empty = [
            (r, c)
            for r, row in enumerate(self.board)
            for c, value in enumerate(row)
            if not value
        ]
        if not empty:
            return None
        r, c = self.rng.choice(empty)
        self.board[r][c] = 4 if self.rng.randrange(5) == 0 else 2
        return r, c

    def can_move(self) -> bool:
        """True while there is an empty cell or two equal neighbours."""
        for r, row in enumerate(self.board):
            for c, value in enumerate(row):
                if not value:
                    return True
                if c + 1 < self.size and row[c + 1] == value:
                    return True
                if r + 1 < self.size and self.board[r + 1][c] == value:
                    return True
        return False

    def render(self) -> str:
        status = f"score:{self.score}"
        if not self.can_move():
            status = "Game over!" + status
        separator = " ".join(["-----"] * self.size)
        lines = [status]
        for row in self.board:
            lines.append(separator)
            lines.append("|".join(f"{v:5d}" if v else " " * 5 for v in row))
        return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="game2048", description="Play 2048 with WASD.")
    parser.add_argument("--size", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    game = Game2048(args.size, random.Random(args.seed))
    with Terminal() as term:
        while True:
            term.clear()
            term.write(game.render() + "\n")
            if not game.can_move():
                break
            key = term.read_key()
            if key is None or key in (ESCAPE, " "):
                break
            direction = key_to_direction(key)
            if direction is not None and game.move(direction):
                game.spawn()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())