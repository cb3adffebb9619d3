import random
from collections import deque

import pytest

from tinygames.snake import INITIAL_LENGTH, SnakeGame
from tinygames.terminal import Direction


def make_game(**kwargs):
    kwargs.setdefault("rng", random.Random(7))
    game = SnakeGame(**kwargs)
    game.food = set()
    return game


def test_starts_centred_heading_right():
    game = make_game(width=9, height=7)
    assert game.head == (4, 3)
    assert game.direction is Direction.RIGHT
    assert game.score == 0


def test_step_moves_head_one_cell():
    game = make_game(width=9)
    start = game.head
    assert game.step() is True
    assert game.head == (start[0] + 1, start[1])


def test_reverse_turn_is_rejected():
    game = make_game(width=9)
    assert game.turn(Direction.LEFT) is False
    assert game.direction is Direction.RIGHT
    assert game.turn(Direction.UP) is True
    assert game.direction is Direction.UP


def test_body_grows_to_initial_length():
    game = make_game(width=15)
    lengths = []
    for _ in range(6):
        game.step()
        lengths.append(len(game.body))
    assert lengths == [min(n + 2, INITIAL_LENGTH) for n in range(6)]


def test_wraps_through_edge():
    game = make_game(width=5, height=5)
    game.body = deque([(4, 2)])
    assert game.step() is True
    assert game.head == (0, 2)


def test_edge_kills_without_wrap():
    game = make_game(width=5, height=5, wrap=False)
    game.body = deque([(4, 2)])
    assert game.step() is False
    assert game.over is True
    assert game.head == (4, 2)
    assert game.step() is False


def test_eating_grows_and_respawns_food():
    game = make_game(width=8)
    x, y = game.head
    game.food = {(x + 1, y)}
    assert game.step() is True
    assert game.length == INITIAL_LENGTH + 1
    assert game.score == 1
    assert len(game.food) == 1
    assert not game.food & set(game.body)


def test_moving_onto_tail_is_allowed():
    game = make_game(width=6)
    game.body = deque([(1, 1), (2, 1), (2, 2), (1, 2)])
    game.direction = Direction.UP
    assert game.step() is True
    assert game.head == (1, 1)
    assert len(game.body) == 4


def test_biting_body_ends_game():
    game = make_game(width=6)
    game.length = 5
    game.body = deque([(0, 1), (1, 1), (2, 1), (2, 2), (1, 2)])
    game.direction = Direction.UP
    assert game.step() is False
    assert game.over is True


def test_walls_follow_border_pattern():
    game = make_game(width=5, height=5, walls=True)
    assert {(0, 0), (2, 0), (4, 0)} <= game.walls
    assert (1, 0) not in game.walls
    assert all(x in (0, 4) or y in (0, 4) for x, y in game.walls)


def test_hitting_wall_ends_game():
    game = make_game(width=5, height=5, walls=True)
    game.body = deque([(3, 2)])
    game.direction = Direction.RIGHT
    # the right column holds walls at rows 0, 2 and 4
    assert (4, 2) in game.walls
    assert game.step() is False
    assert game.over is True


def test_food_count_places_distinct_free_cells():
    game = SnakeGame(width=10, rng=random.Random(3), walls=True, food_count=3)
    assert len(game.food) == 3
    assert not game.food & set(game.body)
    assert not game.food & game.walls


def test_render_shape_and_glyphs():
    game = make_game(width=6, height=4)
    x, y = game.head
    game.food = {(0, 0)}
    lines = game.render().split("\n")
    assert len(lines) == 4
    assert all(len(line) == 13 and line.endswith("|") for line in lines)
    assert lines[y][2 * x:2 * x + 2] == "()"
    assert lines[0][:2] == "00"


def test_render_shows_walls():
    game = make_game(width=5, height=5, walls=True)
    assert game.render().split("\n")[0].startswith("[]  []")


@pytest.mark.parametrize("kwargs", [
    {"width": 1},
    {"width": 5, "height": 1},
    {"width": 5, "food_count": 0},
])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        SnakeGame(**kwargs)