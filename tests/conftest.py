# tests/conftest.py
import pytest

from minesweeper.board import MineSweeperBoard
from minesweeper.game import GameConfig, MineSweeperGame
from minesweeper.settings import get_settings


def _make_game(rows: int, cols: int, mines: list[tuple[int, int]], time_limit: int | None = None) -> MineSweeperGame:
    """Game on a board with a fixed mine layout."""
    board = MineSweeperBoard(rows, cols, len(mines))
    board.set_mines(mines)
    return MineSweeperGame(board, GameConfig(time_limit=time_limit))


@pytest.fixture
def make_game():
    return _make_game


@pytest.fixture
def wall_game() -> MineSweeperGame:
    """
    8x8 board with a full column of mines at col 5.

    Cols 0-3 have no adjacent mines, col 4 and col 6 border the wall,
    col 7 is out of reach of any flood fill started left of the wall.
    """
    return _make_game(8, 8, [(r, 5) for r in range(8)])


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for var in ("MS_DIFFICULTY", "MS_SEED", "MS_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
