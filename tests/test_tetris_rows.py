import random

import pytest

from tinygames.tetris_rows import BitTetris, PIECE_LETTERS, SHAPES


def make(width=7, height=15, seed=1):
    return BitTetris(width, height, random.Random(seed))


def test_too_small_well_is_rejected():
    with pytest.raises(ValueError):
        BitTetris(3, 15)
    with pytest.raises(ValueError):
        BitTetris(7, 3)


def test_initial_render_shows_first_piece_on_top():
    game = make()
    lines = game.render(letters=True).split("\n")
    assert len(lines) == 15
    assert lines[0] == "IIII...#"
    assert all(line == "." * 7 + "#" for line in lines[1:])


def test_plain_render_line_widths():
    game = make()
    lines = game.render().split("\n")
    assert all(len(line) == 2 * 7 + 1 and line.endswith("#") for line in lines)
    assert lines[0].startswith("[]" * 4)


def test_shift_left_blocked_by_wall():
    game = make()
    assert game.shift(-1) is False
    assert game.x == 1


def test_shift_right_until_wall():
    game = make()
    moves = 0
    while game.shift(1):
        moves += 1
    assert moves == 7 - 4
    assert game.render(letters=True).split("\n")[0].endswith("IIII#")


def test_rotation_cycles_through_four_states():
    game = make()
    game.piece = 8
    seen = [game.piece]
    for _ in range(4):
        assert game.rotate()
        seen.append(game.piece)
    assert seen == [8, 9, 10, 11, 8]


def test_hard_drop_lands_on_floor():
    height = 15
    game = make(height=height)
    fallen = game.hard_drop()
    assert fallen == height - 1
    lines = game.render(letters=True).split("\n")
    assert lines[-1] == "IIII...#"
    assert game.y == 1 and game.x == 1
    assert 0 <= game.piece < len(SHAPES)


def test_full_row_is_cleared():
    game = make(width=4, height=10)
    game.hard_drop()
    assert game.lines == 1
    assert game.rows[1:11] == [game.empty_row] * 10
    assert game.render(letters=True).split("\n")[-1] == "....#"


def test_drop_moves_one_row():
    game = make()
    assert game.drop() is True
    lines = game.render(letters=True).split("\n")
    assert lines[0] == "." * 7 + "#"
    assert lines[1].startswith("IIII")


def test_game_ends_and_stops_accepting_moves():
    game = make(width=4, height=4, seed=3)
    for _ in range(1000):
        if game.over:
            break
        game.hard_drop()
    assert game.over
    assert game.drop() is False
    assert game.shift(1) is False
    assert game.rotate() is False
    assert game.hard_drop() == 0


def test_locked_cells_keep_their_letter():
    game = make(seed=5)
    game.hard_drop()
    next_letter = game.letter
    assert next_letter in PIECE_LETTERS
    bottom = game.render(letters=True).split("\n")[-1]
    assert bottom.count("I") == 4


def test_walls_stay_in_row_masks():
    game = make(seed=7)
    for _ in range(5):
        game.shift(1)
        game.hard_drop()
    for row in game.rows[1:-1]:
        assert row & 1
        assert row & (1 << (game.width + 1))
    assert game.rows[-1] == game.full_row
    assert game.rows[0] == game.empty_row