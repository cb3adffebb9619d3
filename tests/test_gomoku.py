import random

import pytest

from tinygames.gomoku import Gomoku, Stone


def play(game, moves):
    for row, col in moves:
        assert game.place(row, col)


def black_line(start, step, count):
    r, c = start
    dr, dc = step
    return [(r + i * dr, c + i * dc) for i in range(count)]


FILLER = [(12, 0), (12, 2), (12, 4), (12, 6), (12, 8), (12, 10)]


def interleave(black, white):
    moves = []
    for i, point in enumerate(black):
        moves.append(point)
        if i < len(black) - 1:
            moves.append(white[i])
    return moves


def test_black_moves_first_and_turns_alternate():
    game = Gomoku(13, random.Random(1))
    assert game.turn is Stone.BLACK
    assert game.render().splitlines()[-1] == "Black"
    assert game.place(6, 6)
    assert game.board[6][6] is Stone.BLACK
    assert game.turn is Stone.WHITE
    assert game.render().splitlines()[-1] == "White"


def test_occupied_point_is_refused():
    game = Gomoku(13, random.Random(1))
    game.place(3, 3)
    assert game.place(3, 3) is False
    assert game.board[3][3] is Stone.BLACK
    assert game.turn is Stone.WHITE


@pytest.mark.parametrize("point", [(-1, 0), (0, 13), (13, 5)])
def test_point_off_board_raises(point):
    game = Gomoku(13, random.Random(1))
    with pytest.raises(ValueError):
        game.place(*point)


@pytest.mark.parametrize("size", [4, 27])
def test_bad_size_raises(size):
    with pytest.raises(ValueError):
        Gomoku(size)


@pytest.mark.parametrize(
    "start,step",
    [((6, 2), (0, 1)), ((2, 6), (1, 0)), ((2, 2), (1, 1)), ((2, 8), (1, -1))],
)
def test_five_in_a_row_wins(start, step):
    game = Gomoku(13, random.Random(1))
    play(game, interleave(black_line(start, step, 5), FILLER))
    assert game.winner is Stone.BLACK
    assert game.over
    assert game.render().splitlines()[-1] == "Black win!"


def test_four_does_not_win():
    game = Gomoku(13, random.Random(1))
    play(game, interleave(black_line((6, 2), (0, 1), 4), FILLER))
    assert game.winner is None
    assert game.turn is Stone.WHITE


def test_overline_also_wins():
    game = Gomoku(13, random.Random(1))
    black = [(6, 0), (6, 1), (6, 2), (6, 3), (6, 5), (6, 4)]
    play(game, interleave(black, FILLER))
    assert game.winner is Stone.BLACK


def test_no_moves_after_a_win():
    game = Gomoku(13, random.Random(1))
    play(game, interleave(black_line((6, 2), (0, 1), 5), FILLER))
    assert game.place(0, 12) is False
    assert game.ai_move() is None
    assert game.board[0][12] is Stone.EMPTY


def test_ai_answers_next_to_a_lone_stone():
    game = Gomoku(13, random.Random(5))
    game.place(6, 6)
    row, col = game.ai_move()
    assert max(abs(row - 6), abs(col - 6)) == 1
    assert game.board[row][col] is Stone.WHITE
    assert game.turn is Stone.BLACK


def test_ai_blocks_an_open_four():
    game = Gomoku(13, random.Random(3))
    play(game, [(0, 0), (12, 0), (0, 1), (12, 4), (0, 2), (12, 8), (0, 3)])
    assert game.ai_move() == (0, 4)
    assert game.board[0][4] is Stone.WHITE


def test_ai_plays_on_an_empty_board():
    game = Gomoku(13, random.Random(9))
    row, col = game.ai_move()
    assert game.board[row][col] is Stone.BLACK
    assert game.turn is Stone.WHITE


def test_render_shows_cursor_stones_and_labels():
    game = Gomoku(13, random.Random(1))
    game.place(0, 0)
    game.place(0, 1)
    lines = game.render(cursor=(0, 0)).splitlines()
    assert lines[0].startswith(">0 @")
    assert lines[0].endswith("1")
    assert lines[12].endswith("13")
    assert lines[13].startswith(" a b c")
    assert len(lines) == 15