# tests/test_moves.py
import numpy as np

from minesweeper.game import GameStatus


def test_reveal_numbered_cell_stops(make_game):
    game = make_game(3, 3, [(0, 0)])
    res = game.cmd_reveal(1, 1)

    assert res.revealed == [(1, 1)]
    assert not res.skipped
    assert game.num_revealed == 1
    assert game.status == GameStatus.ONGOING


def test_flood_fill_reveals_zero_region_and_border(wall_game):
    """
    Revealing a zero cell reveals its connected zero region plus the
    numbered border, and nothing on the far side of the mine wall.
    """
    res = wall_game.cmd_reveal(3, 2)

    expected = np.zeros((8, 8), dtype=bool)
    expected[:, :5] = True
    assert (wall_game.board.revealed_state() == expected).all()
    assert len(res.revealed) == 40
    assert len(set(res.revealed)) == 40
    assert wall_game.num_revealed == 40
    assert wall_game.status == GameStatus.ONGOING


def test_flood_fill_from_other_side(wall_game):
    wall_game.cmd_reveal(0, 7)

    revealed = wall_game.board.revealed_state()
    assert revealed[:, 6:].all()
    assert not revealed[:, :6].any()
    assert wall_game.num_revealed == 16


def test_flood_fill_whole_zero_component(make_game):
    """
    A zero cell surrounded by zero cells reveals the whole component in one call.
    """
    game = make_game(21, 26, [(20, 25)])
    res = game.cmd_reveal(0, 0)

    assert game.status == GameStatus.WIN
    assert len(res.revealed) == 21 * 26 - 1
    assert not game.board.is_revealed(20, 25)


def test_flood_fill_does_not_cross_marks(wall_game):
    wall_game.cmd_toggle_mark(3, 3)
    wall_game.cmd_reveal(0, 0)

    assert not wall_game.board.is_revealed(3, 3)
    assert wall_game.board.is_marked(3, 3)
    assert wall_game.num_revealed == 39


def test_reveal_noops(make_game):
    game = make_game(3, 3, [(0, 0)])

    # out of bounds
    for r, c in [(-1, 0), (0, -1), (3, 0), (0, 3)]:
        assert game.cmd_reveal(r, c).skipped
    assert game.num_revealed == 0

    # already revealed
    game.cmd_reveal(1, 1)
    res = game.cmd_reveal(1, 1)
    assert res.skipped and res.revealed == []
    assert game.num_revealed == 1

    # marked
    game.cmd_toggle_mark(0, 0)
    assert game.cmd_reveal(0, 0).skipped
    assert game.status == GameStatus.ONGOING


def test_mark_toggle_roundtrip(make_game):
    game = make_game(3, 3, [(0, 0)])
    before = game.board.export_numeric_grid()

    game.cmd_toggle_mark(2, 2)
    assert game.board.is_marked(2, 2)
    assert game.num_marked == 1
    assert game.remaining_mines == 0

    game.cmd_toggle_mark(2, 2)
    assert not game.board.is_marked(2, 2)
    assert game.num_marked == 0
    assert (game.board.export_numeric_grid() == before).all()


def test_mark_revealed_cell_is_noop(make_game):
    game = make_game(3, 3, [(0, 0)])
    game.cmd_reveal(1, 1)
    game.cmd_toggle_mark(1, 1)

    assert not game.board.is_marked(1, 1)
    assert game.num_marked == 0


def test_mark_out_of_bounds_is_noop(make_game):
    game = make_game(3, 3, [(0, 0)])
    game.cmd_toggle_mark(5, 5)
    game.cmd_toggle_mark(-1, 0)
    assert game.num_marked == 0


def test_marks_do_not_change_win_condition(make_game):
    game = make_game(2, 2, [(0, 0)])
    for r, c in [(0, 1), (1, 0), (1, 1)]:
        game.cmd_toggle_mark(r, c)
    assert game.remaining_mines == -2
    assert game.status == GameStatus.ONGOING
