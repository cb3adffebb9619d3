"""The snake game: steer a growing snake towards food without biting itself."""

from __future__ import annotations

import argparse
import random
import time
from collections import deque
from typing import Deque, FrozenSet, List, Optional, Set, Tuple

from tinygames.terminal import ESCAPE, Direction, Terminal, key_to_direction

Cell = Tuple[int, int]

INITIAL_LENGTH = 4

_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def _border_walls(width: int, height: int) -> Set[Cell]:
    """Wall blocks on every other cell of the border, mirrored on opposite sides."""
    walls: Set[Cell] = set()
    for x in range(0, width, 2):
        walls.add((x, 0))
        walls.add((width - 1 - x, height - 1))
    for y in range(0, height, 2):
        walls.add((0, y))
        walls.add((width - 1, height - 1 - y))
    return walls


class SnakeGame:
    """A snake on a rectangular board; cells are (x, y) with y growing downwards."""

    def __init__(
        self,
        width: int = 20,
        height: Optional[int] = None,
        rng: Optional[random.Random] = None,
        wrap: bool = True,
        walls: bool = False,
        food_count: int = 1,
    ):
        height = width if height is None else height
        if width < 2 or height < 2:
            raise ValueError("board must be at least 2 by 2")
        if food_count < 1:
            raise ValueError("there must be at least one piece of food")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.wrap = wrap
        self.walls: FrozenSet[Cell] = (
            frozenset(_border_walls(width, height)) if walls else frozenset()
        )
        start = (width // 2, height // 2)
        if start in self.walls:
            raise ValueError("board too small for walls")
        self.body: Deque[Cell] = deque([start])
        self.length = INITIAL_LENGTH
        self.direction = Direction.RIGHT
        self.food: Set[Cell] = set()
        self.over = False
        for _ in range(food_count):
            if self._place_food() is None:
                break

    @property
    def head(self) -> Cell:
        return self.body[-1]

    @property
    def score(self) -> int:
        return self.length - INITIAL_LENGTH

    def _free_cells(self) -> List[Cell]:
        occupied = set(self.body) | self.food | self.walls
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in occupied
        ]

    def _place_food(self) -> Optional[Cell]:
        free = self._free_cells()
        if not free:
            return None
        cell = self.rng.choice(free)
        self.food.add(cell)
        return cell

    def turn(self, direction: Direction) -> bool:
        """Change heading unless it would reverse straight back; return whether it took."""
        if direction is _OPPOSITE[self.direction]:
            return False
        self.direction = direction
        return True

    def step(self) -> bool:
        """Advance the snake one cell; return False once the game is over."""
        if self.over:
            return False
        x, y = self.head
        nx, ny = x + self.direction.dx, y + self.direction.dy
        if self.wrap:
            nx %= self.width
            ny %= self.height
        elif not (0 <= nx < self.width and 0 <= ny < self.height):
            self.over = True
            return False
        new_head = (nx, ny)
        if new_head in self.walls:
            self.over = True
            return False
        eating = new_head in self.food
        length = self.length + (1 if eating else 0)
        # The tail cell moves away this step, so only the cells that stay count.
        retained = list(self.body)[-(length - 1):] if length > 1 else []
        if new_head in retained:
            self.over = True
            return False
        self.body.append(new_head)
        while len(self.body) > length:
            self.body.popleft()
        self.length = length
        if eating:
            self.food.discard(new_head)
            self._place_food()
        return True

    def render(self) -> str:
        body = set(self.body)

        def glyph(cell: Cell) -> str:
            if cell in body:
                return "()"
            if cell in self.food:
                return "00"
            if cell in self.walls:
                return "[]"
            return "  "

        return "\n".join(
            "".join(glyph((x, y)) for x in range(self.width)) + "|"
            for y in range(self.height)
        )


def _play(game: SnakeGame, term: Terminal, delay: float) -> bool:
    """Run one game; return False if the player asked to quit."""
    while True:
        term.clear()
        term.write(f"score:{game.score}\n{game.render()}\n")
        deadline = time.monotonic() + delay
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            key = term.read_key(remaining)
            if key is None:
                continue
            if key == ESCAPE:
                return False
            if key == " ":
                term.read_key()
                deadline = time.monotonic() + delay
                continue
            direction = key_to_direction(key)
            if direction is not None:
                game.turn(direction)
        if not game.step():
            return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="snake", description="Play snake with WASD.")
    parser.add_argument("--width", type=int, default=20)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--delay", type=int, default=100, help="milliseconds per step")
    parser.add_argument("--walls", action="store_true", help="dotted walls around the border")
    parser.add_argument("--no-wrap", action="store_true", help="the edges of the board kill")
    parser.add_argument("--food", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    if args.delay <= 0:
        parser.error("delay must be positive")
    rng = random.Random(args.seed)
    with Terminal() as term:
        while True:
            game = SnakeGame(args.width, args.height, rng, not args.no_wrap,
                             args.walls, args.food)
            if not _play(game, term, args.delay / 1000):
                break
            term.write(f"Game over! score:{game.score} (space to restart)\n")
            if term.read_key() != " ":
                break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())