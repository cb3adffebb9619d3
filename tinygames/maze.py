"""Random mazes to walk through from the left edge to the right edge."""

from __future__ import annotations

import argparse
import random
from typing import List, Optional, Tuple

from tinygames.terminal import ESCAPE, Terminal, key_to_direction, normalize_key, Direction

Cell = Tuple[int, int]
Layout = Tuple[List[List[bool]], Cell, Cell]

_NEIGHBOURS = ((0, 1), (0, -1), (-1, 0), (1, 0))


def _try_generate(width: int, rng: random.Random) -> Optional[Layout]:
    # Each wall cell counts carved neighbours; the count's low two bits reach
    # zero once a cell touches too many corridors, and it becomes permanent.
    edge = (0, width - 1)
    counters = [
        [2 + (c in edge) + (r in edge) for c in range(width)] for r in range(width)
    ]
    frontier = [(rng.randrange(1, width - 1), rng.randrange(1, width - 1))]
    while frontier:
        index = rng.randrange(len(frontier))
        r, c = frontier[index]
        frontier[index] = frontier[-1]
        frontier.pop()
        if not counters[r][c] & 3:
            continue
        counters[r][c] = 0
        for dr, dc in _NEIGHBOURS:
            nr, nc = r + dr, c + dc
            if counters[nr][nc] & 3:
                counters[nr][nc] += 1
                if counters[nr][nc] & 3:
                    frontier.append((nr, nc))
    for row in range(1, width - 1):
        mirror = width - 1 - row
        if counters[row][0] == 4 and counters[mirror][width - 1] == 4:
            walls = [[value != 0 for value in line] for line in counters]
            entrance, exit_ = (row, 0), (mirror, width - 1)
            walls[row][0] = False
            walls[mirror][width - 1] = False
            return walls, entrance, exit_
    return None


def generate_maze(width: int = 15, rng: Optional[random.Random] = None) -> Layout:
    """Grow a maze of one-cell corridors on a square grid bordered by walls.

    Returns (walls, entrance, exit): walls[row][col] is True for a wall, the
    entrance is on the left edge and the exit opposite it on the right edge.
    """
    if width < 3:
        raise ValueError("maze width must be at least 3")
    rng = rng if rng is not None else random.Random()
    while True:
        layout = _try_generate(width, rng)
        if layout is not None:
            return layout


def carve_maze(size: int = 21, rng: Optional[random.Random] = None) -> Layout:
    """Carve a perfect maze by depth-first search over the odd cells of a grid.

    Returns (walls, entrance, exit) with the entrance at the top left and the
    exit at the bottom right.
    """
    if size < 3 or size % 2 == 0:
        raise ValueError("maze size must be an odd number of at least 3")
    rng = rng if rng is not None else random.Random()
    walls = [[True] * size for _ in range(size)]

    def shuffled_steps():
        steps = [(0, 2), (0, -2), (2, 0), (-2, 0)]
        rng.shuffle(steps)
        return iter(steps)

    walls[1][1] = False
    stack = [((1, 1), shuffled_steps())]
    while stack:
        (r, c), steps = stack[-1]
        for dr, dc in steps:
            nr, nc = r + dr, c + dc
            if 0 <= nr < size and 0 <= nc < size and walls[nr][nc]:
                walls[r + dr // 2][c + dc // 2] = False
                walls[nr][nc] = False
                stack.append(((nr, nc), shuffled_steps()))
                break
        else:
            stack.pop()
    entrance, exit_ = (1, 0), (size - 2, size - 1)
    walls[1][0] = False
    walls[size - 2][size - 1] = False
    return walls, entrance, exit_


class MazeGame:
    """A player walking a generated maze from its entrance to its exit."""

    def __init__(self, width: int = 15, rng: Optional[random.Random] = None):
        self.width = width
        self.rng = rng if rng is not None else random.Random()
        self.walls: List[List[bool]] = []
        self.position: Cell = (0, 0)
        self.goal: Cell = (0, 0)
        self._new_maze()

    def _layout(self) -> Layout:
        return generate_maze(self.width, self.rng)

    def _new_maze(self) -> None:
        self.walls, self.position, self.goal = self._layout()

    @property
    def solved(self) -> bool:
        return self.position == self.goal

    def move(self, direction: Direction) -> bool:
        """Step one cell unless a wall or the edge is in the way; return whether it moved."""
        r, c = self.position
        nr, nc = r + direction.dy, c + direction.dx
        if not (0 <= nr < len(self.walls) and 0 <= nc < len(self.walls[nr])):
            return False
        if self.walls[nr][nc]:
            return False
        self.position = (nr, nc)
        return True

    def render(self) -> str:
        return "\n".join(
            "".join(
                "<>" if (r, c) == self.position else "[]" if wall else "  "
                for c, wall in enumerate(row)
            )
            for r, row in enumerate(self.walls)
        )


class _CarvedMazeGame(MazeGame):
    def _layout(self) -> Layout:
        return carve_maze(self.width, self.rng)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="maze", description="Walk a maze with WASD.")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--carved", action="store_true",
                        help="a depth-first maze that ends when the exit is reached")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)
    if args.carved:
        game: MazeGame = _CarvedMazeGame(args.width or 21, rng)
    else:
        game = MazeGame(args.width or 15, rng)
    with Terminal() as term:
        while True:
            term.clear()
            term.write(game.render() + "\n")
            if args.carved and game.solved:
                break
            key = term.read_key()
            if key is None or key == ESCAPE:
                break
            if not args.carved and (normalize_key(key) == "Q" or game.solved):
                game._new_maze()
            direction = key_to_direction(key)
            if direction is not None:
                game.move(direction)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())