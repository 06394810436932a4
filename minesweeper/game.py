# minesweeper/game.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

import numpy as np

from minesweeper.board import MineSweeperBoard

log = logging.getLogger("minesweeper.game")


class GameStatus(IntEnum):
    ONGOING = 0
    WIN = 1
    LOST = 2


class LossReason(Enum):
    MINE = "mine"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class DifficultyPreset:
    name: str
    rows: int
    cols: int
    mines: int
    time_limit: int  # seconds


class Difficulty(Enum):
    BEGINNER = DifficultyPreset("beginner", 6, 9, 11, 60)
    INTERMEDIATE = DifficultyPreset("intermediate", 12, 18, 36, 180)
    ADVANCED = DifficultyPreset("advanced", 21, 26, 92, 660)


def get_preset(name: str | Difficulty) -> DifficultyPreset:
    """
    Look up a difficulty preset by enum or (case-insensitive) name.

    Raises
    ------
    ValueError
        If the name matches no preset.
    """
    if isinstance(name, Difficulty):
        return name.value
    key = name.strip().upper()
    try:
        return Difficulty[key].value
    except KeyError:
        choices = ", ".join(d.value.name for d in Difficulty)
        raise ValueError(f"Unknown difficulty: {name!r} (choose from {choices})") from None


@dataclass
class GameConfig:
    time_limit: Optional[int] = None  # seconds; None = no limit
    difficulty: Optional[str] = None


@dataclass
class RevealResult:
    """
    Result of a reveal (or chord) command.

    Attributes
    ----------
    revealed : List[Tuple[int,int]]
        Cells newly revealed by the player, in reveal order (includes the seed).
    hit_mine : Optional[Tuple[int,int]]
        The mine that was revealed, if any.
    skipped : bool
        True if the command was a no-op.
    """
    revealed: List[Tuple[int, int]] = field(default_factory=list)
    hit_mine: Optional[Tuple[int, int]] = None
    skipped: bool = False


class MineSweeperGame:
    """
    Rules engine and game session:
      - maps player commands to board mutations
      - keeps revealed / marked counters and elapsed time
      - computes win / loss (mine hit, all safe cells revealed, time limit)

    Every invalid command (out of bounds, already revealed, marked, game
    over) is a silent no-op.
    """

    def __init__(self, board: MineSweeperBoard, config: Optional[GameConfig] = None):
        self.board = board
        self.cfg = config or GameConfig()
        self.status = GameStatus.ONGOING
        self.loss_reason: Optional[LossReason] = None
        self.num_revealed = 0
        self.num_marked = 0
        self.elapsed = 0

    # ---------- queries ----------
    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.ONGOING

    @property
    def remaining_mines(self) -> int:
        """Mines left according to the player's marks (can go negative)."""
        return self.board.nmines - self.num_marked

    @property
    def time_remaining(self) -> Optional[int]:
        if self.cfg.time_limit is None:
            return None
        return max(0, self.cfg.time_limit - self.elapsed)

    def can_chord(self, r: int, c: int) -> bool:
        """True if (r, c) is a revealed cell with at least one adjacent mine."""
        b = self.board
        return b.in_bounds(r, c) and b.is_revealed(r, c) and b.count_adjacent_mines(r, c) > 0

    # ---------- commands ----------
    def cmd_reveal(self, r: int, c: int) -> RevealResult:
        """
        Reveal cell (r, c); flood-fill outward from cells with no adjacent mines.

        Parameters
        ----------
        r : int
            Row index of the cell to reveal.
        c : int
            Column index of the cell to reveal.

        Returns
        -------
        RevealResult
            The cells revealed by this command.
        """
        res = RevealResult()
        self._reveal_from(r, c, res)
        res.skipped = not res.revealed
        return res

    def cmd_toggle_mark(self, r: int, c: int) -> None:
        """Toggle the mark on cell (r, c). No-op on revealed cells."""
        b = self.board
        if self.is_over or not b.in_bounds(r, c) or b.is_revealed(r, c):
            return
        if b.is_marked(r, c):
            b.set_marked(r, c, False)
            self.num_marked -= 1
        else:
            b.set_marked(r, c, True)
            self.num_marked += 1

    def cmd_chord(self, r: int, c: int) -> RevealResult:
        """
        Reveal the unmarked neighbors of a revealed number cell once the
        number of marked neighbors equals its adjacent-mine count.

        The marks are trusted: a wrong mark can reveal a mine and lose.
        """
        res = RevealResult()
        b = self.board
        if self.is_over or not self.can_chord(r, c):
            res.skipped = True
            return res
        if b.count_adjacent_marked(r, c) != b.count_adjacent_mines(r, c):
            res.skipped = True
            return res

        for nr, nc in b.neighbors(r, c):
            if self.is_over:
                break
            self._reveal_from(nr, nc, res)
        res.skipped = not res.revealed
        return res

    def tick(self) -> None:
        """Advance the clock by one second and enforce the time limit."""
        if self.is_over:
            return
        self.elapsed += 1
        if self.cfg.time_limit is not None and self.elapsed >= self.cfg.time_limit:
            log.info("Time limit of %ds reached", self.cfg.time_limit)
            self._lose(LossReason.TIMEOUT)

    # ---------- rules ----------
    def _reveal_from(self, r: int, c: int, res: RevealResult) -> None:
        b = self.board
        stack = [(r, c)]
        while stack and not self.is_over:
            rr, cc = stack.pop()
            if not b.in_bounds(rr, cc) or b.is_revealed(rr, cc) or b.is_marked(rr, cc):
                continue

            b.set_revealed(rr, cc)
            self.num_revealed += 1
            res.revealed.append((rr, cc))

            if b.is_mine(rr, cc):
                res.hit_mine = (rr, cc)
                self._lose(LossReason.MINE)
                return

            if self.num_revealed == b.safe_cells:
                self.status = GameStatus.WIN
                log.info("Game won in %ds", self.elapsed)
                return

            if b.count_adjacent_mines(rr, cc) == 0:
                stack.extend(b.neighbors(rr, cc))

    def _lose(self, reason: LossReason) -> None:
        self.status = GameStatus.LOST
        self.loss_reason = reason
        self.board.reveal_mines()
        log.info("Game lost (%s) after %ds", reason.value, self.elapsed)


def new_game(
    difficulty: str | Difficulty = Difficulty.BEGINNER,
    rng: Optional[np.random.Generator] = None,
) -> MineSweeperGame:
    """Build a board for a preset, place its mines, and return a fresh game."""
    preset = get_preset(difficulty)
    board = MineSweeperBoard(preset.rows, preset.cols, preset.mines)
    board.place_mines(rng)
    log.debug("New %s game (%dx%d, %d mines)", preset.name, preset.rows, preset.cols, preset.mines)
    return MineSweeperGame(board, GameConfig(time_limit=preset.time_limit, difficulty=preset.name))
