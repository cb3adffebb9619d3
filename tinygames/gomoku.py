"""Five in a row on a square board, for two players or against a simple AI."""

from __future__ import annotations

import argparse
import random
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from tinygames.terminal import ESCAPE, Terminal, key_to_direction, normalize_key

Point = Tuple[int, int]

MODES = ("PvP", "PvE", "EvE")

# Right, down-left, down, down-right: every line through a stone is one of these.
_LINES = ((0, 1), (1, -1), (1, 0), (1, 1))


class Stone(IntEnum):
    """What occupies a point on the board."""

    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "Stone":
        if self is Stone.EMPTY:
            raise ValueError("an empty point has no opponent")
        return Stone.WHITE if self is Stone.BLACK else Stone.BLACK

    @property
    def glyph(self) -> str:
        return " 0@"[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Gomoku:
    """A board where black moves first and the first run of five or more wins.

    Every placed stone adds to a per-player threat table at the empty points
    that close each of its lines; the AI plays where either table is highest.
    """

    def __init__(self, size: int = 13, rng: Optional[random.Random] = None):
        if not 5 <= size <= 26:
            raise ValueError("board size must be between 5 and 26")
        self.size = size
        self.rng = rng if rng is not None else random.Random()
        self.board: List[List[Stone]] = [[Stone.EMPTY] * size for _ in range(size)]
        self.turn = Stone.BLACK
        self.winner: Optional[Stone] = None
        self._scores: Dict[Stone, List[List[int]]] = {
            stone: [[0] * size for _ in range(size)]
            for stone in (Stone.BLACK, Stone.WHITE)
        }

    @property
    def over(self) -> bool:
        return self.winner is not None or self.full

    @property
    def full(self) -> bool:
        return all(stone is not Stone.EMPTY for row in self.board for stone in row)

    def _inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _run_end(self, row: int, col: int, dr: int, dc: int, stone: Stone) -> Tuple[Point, int]:
        """Walk from a stone while the colour holds; return the first other point and the steps."""
        steps = 0
        while self._inside(row, col) and self.board[row][col] is stone:
            row, col = row + dr, col + dc
            steps += 1
        return (row, col), steps

    def place(self, row: int, col: int) -> bool:
        """Put the current player's stone on an empty point; return whether it was placed."""
        if not self._inside(row, col):
            raise ValueError(f"point ({row}, {col}) is off the board")
        if self.winner is not None or self.board[row][col] is not Stone.EMPTY:
            return False
        stone = self.turn
        self.board[row][col] = stone
        for table in self._scores.values():
            table[row][col] = 0
        for dr, dc in _LINES:
            forward, ahead = self._run_end(row, col, dr, dc, stone)
            backward, behind = self._run_end(row, col, -dr, -dc, stone)
            length = ahead + behind - 1
            weight = 1 << (length + 1)
            for r, c in (forward, backward):
                if self._inside(r, c) and self.board[r][c] is Stone.EMPTY:
                    self._scores[stone][r][c] += weight
            if length >= 5:
                self.winner = stone
        if self.winner is None:
            self.turn = stone.opponent
        return True

    def ai_move(self) -> Optional[Point]:
        """Play for the current player at the most threatening point; return it."""
        if self.over:
            return None
        rated = [
            (max(table[r][c] for table in self._scores.values()), (r, c))
            for r, row in enumerate(self.board)
            for c, stone in enumerate(row)
            if stone is Stone.EMPTY
        ]
        best = max(score for score, _ in rated)
        point = self.rng.choice([p for score, p in rated if score == best])
        self.place(*point)
        return point

    def render(self, cursor: Optional[Point] = None) -> str:
        lines = [
            "".join(
                (">" if (r, c) == cursor else " ") + stone.glyph
                for c, stone in enumerate(row)
            )
            + str(r + 1)
            for r, row in enumerate(self.board)
        ]
        lines.append("".join(f" {chr(97 + c)}" for c in range(self.size)))
        if self.winner is not None:
            lines.append(f"{self.winner.label} win!")
        else:
            lines.append(self.turn.label)
        return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="gomoku",
        description="Five in a row: WASD moves, space places, Q switches mode, Esc quits.",
    )
    parser.add_argument("--size", type=int, default=13)
    parser.add_argument("--mode", choices=MODES, default="PvP")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    game = Gomoku(args.size, random.Random(args.seed))
    mode = MODES.index(args.mode)
    cursor = (args.size // 2, args.size // 2)
    with Terminal() as term:
        while True:
            term.clear()
            term.write(f"{MODES[mode]}\n{game.render(cursor)}\n")
            if game.over:
                term.read_key()
                break
            key = term.read_key()
            if key is None or key == ESCAPE:
                break
            if normalize_key(key) == "Q":
                mode = (mode + 1) % len(MODES)
                continue
            if key == " ":
                if MODES[mode] == "EvE":
                    game.ai_move()
                elif game.place(*cursor) and MODES[mode] == "PvE":
                    game.ai_move()
                continue
            direction = key_to_direction(key)
            if direction is not None:
                row = min(max(cursor[0] + direction.dy, 0), game.size - 1)
                col = min(max(cursor[1] + direction.dx, 0), game.size - 1)
                cursor = (row, col)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())