# minesweeper/board.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

log = logging.getLogger("minesweeper.board")


# Offsets for 8-neighborhood (row, col)
NBR_OFFSETS = [
    (-1, -1), (-1, 0), (-1, 1),
    ( 0, -1),          ( 0, 1),
    ( 1, -1), ( 1, 0), ( 1, 1),
]

# Encoding used by export_numeric_grid()
HIDDEN = -1
MARKED = -2
MINE = 9


class MineSweeperBoard:
    """
    Core Minesweeper board mechanics.

    Responsibilities:
    - Grid geometry and neighbors.
    - Mine placement (once per board).
    - Raw reveal / mark flags.
    - Adjacency counts.

    No game rules live here: the board never refuses a mutation. Rule
    enforcement is MineSweeperGame's job.
    """

    def __init__(self, rows: int, cols: int, nmines: int):
        if rows <= 0 or cols <= 0:
            raise ValueError("Board dimensions must be positive")
        if nmines < 0:
            raise ValueError("Number of mines cannot be negative")
        if nmines >= rows * cols:
            raise ValueError("Too many mines for board size")

        self.rows = rows
        self.cols = cols
        self.n = rows * cols
        self.nmines = nmines

        self._mines = np.zeros((rows, cols), dtype=bool)
        self._revealed = np.zeros((rows, cols), dtype=bool)
        self._marked = np.zeros((rows, cols), dtype=bool)
        self._placed = False

    # ---------- geometry ----------
    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def neighbors(self, r: int, c: int) -> List[Tuple[int, int]]:
        """Return 8-neighborhood of (r, c), clipped to board bounds."""
        out = []
        for dr, dc in NBR_OFFSETS:
            nr, nc = r + dr, c + dc
            if self.in_bounds(nr, nc):
                out.append((nr, nc))
        return out

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.n - self.nmines

    # ---------- placement ----------
    @property
    def mines_placed(self) -> bool:
        return self._placed

    def place_mines(self, rng: Optional[np.random.Generator] = None) -> None:
        """
        Place `nmines` mines uniformly at random.

        Draws (row, col) pairs and rejects duplicates until enough distinct
        cells are mined. Construction guarantees nmines < rows*cols, so the
        loop always terminates.

        Raises
        ------
        RuntimeError
            If mines were already placed on this board.
        """
        if self._placed:
            raise RuntimeError("Mines already placed")
        rng = rng if rng is not None else np.random.default_rng()

        count = 0
        draws = 0
        while count < self.nmines:
            r = int(rng.integers(self.rows))
            c = int(rng.integers(self.cols))
            draws += 1
            if not self._mines[r, c]:
                self._mines[r, c] = True
                count += 1

        self._placed = True
        log.debug("Placed %d mines on %dx%d board (%d draws)", self.nmines, self.rows, self.cols, draws)

    def set_mines(self, cells: Iterable[Tuple[int, int]]) -> None:
        """
        Place mines at explicit positions.

        Parameters
        ----------
        cells : iterable of (row, col)
            Exactly `nmines` distinct in-bounds cells.

        Raises
        ------
        ValueError
            If the cells are out of bounds, repeated, or not `nmines` long.
        RuntimeError
            If mines were already placed on this board.
        """
        if self._placed:
            raise RuntimeError("Mines already placed")
        chosen = {(int(r), int(c)) for r, c in cells}
        for r, c in chosen:
            if not self.in_bounds(r, c):
                raise ValueError(f"Mine position out of bounds: ({r}, {c})")
        if len(chosen) != self.nmines:
            raise ValueError(f"Expected {self.nmines} distinct mine positions, got {len(chosen)}")

        for r, c in chosen:
            self._mines[r, c] = True
        self._placed = True

    # ---------- cell facets ----------
    def is_mine(self, r: int, c: int) -> bool:
        return bool(self._mines[r, c])

    def is_revealed(self, r: int, c: int) -> bool:
        return bool(self._revealed[r, c])

    def is_marked(self, r: int, c: int) -> bool:
        return bool(self._marked[r, c])

    def mine_cells(self) -> List[Tuple[int, int]]:
        """Return all mine positions in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self._mines)]

    def mine_layout(self) -> np.ndarray:
        """Return a copy of the mine grid."""
        return self._mines.copy()

    def revealed_state(self) -> np.ndarray:
        """Return a copy of the revealed grid."""
        return self._revealed.copy()

    def marked_state(self) -> np.ndarray:
        """Return a copy of the marked grid."""
        return self._marked.copy()

    # ---------- adjacency ----------
    def count_adjacent_mines(self, r: int, c: int) -> int:
        return sum(1 for nr, nc in self.neighbors(r, c) if self._mines[nr, nc])

    def count_adjacent_marked(self, r: int, c: int) -> int:
        return sum(1 for nr, nc in self.neighbors(r, c) if self._marked[nr, nc])

    # ---------- raw mutators ----------
    def set_revealed(self, r: int, c: int) -> None:
        self._revealed[r, c] = True

    def set_marked(self, r: int, c: int, value: bool) -> None:
        self._marked[r, c] = bool(value)

    def reveal_mines(self) -> List[Tuple[int, int]]:
        """Reveal every unmarked mine for display; marked mines stay marked."""
        hidden = self._mines & ~self._marked & ~self._revealed
        self._revealed |= hidden
        return [(int(r), int(c)) for r, c in np.argwhere(hidden)]

    # ---------- export for UI ----------
    def export_numeric_grid(self) -> np.ndarray:
        """
        Export board for UI rendering.

        Encoding:
        -1 = hidden
        -2 = marked
         9 = revealed mine
         else = number of adjacent mines (0..8)
        """
        grid = np.full((self.rows, self.cols), HIDDEN, dtype=np.int8)
        for r in range(self.rows):
            for c in range(self.cols):
                if self._marked[r, c]:
                    grid[r, c] = MARKED
                elif not self._revealed[r, c]:
                    grid[r, c] = HIDDEN
                elif self._mines[r, c]:
                    grid[r, c] = MINE
                else:
                    grid[r, c] = self.count_adjacent_mines(r, c)
        return grid
