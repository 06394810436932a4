# minesweeper/textUI.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from rich.console import Console
from rich.table import Table
from rich.text import Text

from minesweeper.board import HIDDEN, MARKED, MINE
from minesweeper.game import (
    Difficulty,
    GameStatus,
    LossReason,
    MineSweeperGame,
    get_preset,
    new_game,
)

console = Console()
log = logging.getLogger("minesweeper.tui")


NUMBER_STYLES = {
    1: "bold blue",
    2: "bold green",
    3: "bold red",
    4: "bold magenta",
    5: "bold dark_red",
    6: "bold cyan",
    7: "bold white",
    8: "bold bright_black",
}


# ---------- Timer ----------
class SecondTicker:
    """
    Turns wall-clock time into whole-second game ticks.

    The terminal blocks on input, so ticks owed since the last command are
    delivered in one go right before the next command is applied. Ticks and
    commands therefore run on the same thread, in order.
    """

    def __init__(self, game: MineSweeperGame, clock: Callable[[], float] = time.monotonic):
        self.game = game
        self._clock = clock
        self._start = clock()

    def catch_up(self) -> int:
        """Deliver owed ticks; stops as soon as the game is over."""
        owed = int(self._clock() - self._start) - self.game.elapsed
        delivered = 0
        while owed > 0 and self.game.status == GameStatus.ONGOING:
            self.game.tick()
            owed -= 1
            delivered += 1
        return delivered


# ---------- Rendering ----------
def cell_text(val: int) -> Text:
    if val == HIDDEN:
        return Text("■", style="dim")
    if val == MARKED:
        return Text("⚑", style="yellow")
    if val == MINE:
        return Text("✹", style="bold red")
    if val == 0:
        return Text(" ")
    return Text(str(val), style=NUMBER_STYLES.get(int(val), "bold"))


def _header_stats(game: MineSweeperGame) -> None:
    name = (game.cfg.difficulty or "custom").capitalize()
    if game.cfg.time_limit is None:
        clock = f"{game.elapsed}s"
    else:
        clock = f"{game.elapsed}/{game.cfg.time_limit}s"
    console.print(
        f"[bold magenta]{name}[/bold magenta]    "
        f"[bold magenta]Mines left =[/bold magenta] {game.remaining_mines:3d}    "
        f"[bold magenta]Time =[/bold magenta] {clock}"
        f"\n"
    )


def render_rich(game: MineSweeperGame) -> None:
    console.clear()
    _header_stats(game)

    board = game.board
    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 1))
    table.add_column(" ", justify="right")
    for col in range(1, board.cols + 1):
        table.add_column(Text(str(col)), justify="center")

    grid = board.export_numeric_grid()
    for r in range(board.rows):
        row = [Text(str(r + 1))]
        for c in range(board.cols):
            row.append(cell_text(int(grid[r, c])))
        table.add_row(*row)

    console.print(table)


# ---------- Input ----------
@dataclass
class Command:
    action: str  # "reveal" | "mark" | "chord" | "new" | "menu" | "quit"
    r: int = -1
    c: int = -1


ACTIONS = {"R": "reveal", "M": "mark", "C": "chord"}


def _parse_coords(token: str) -> tuple[int, int]:
    try:
        r_str, c_str = token.split(",", 1)
        return int(r_str) - 1, int(c_str) - 1
    except ValueError:
        raise ValueError("Invalid coordinates. Use row,col like 3,4") from None


def parse_command(raw: str) -> Command:
    """
    Parse one line of player input (1-based coordinates).

      r,c | R r,c   reveal
      M r,c         toggle mark
      C r,c         chord (reveal around a satisfied number)
      N             new game, same difficulty
      D             choose a new difficulty
      Q             quit

    Raises
    ------
    ValueError
        If the line is not a valid command.
    """
    u = raw.strip().upper()
    if not u:
        raise ValueError("Empty command")
    if u in ("Q", "QUIT", "EXIT"):
        return Command("quit")
    if u == "N":
        return Command("new")
    if u == "D":
        return Command("menu")

    parts = u.split()
    if len(parts) == 1:
        r, c = _parse_coords(parts[0])
        return Command("reveal", r, c)
    if len(parts) == 2 and parts[0] in ACTIONS:
        r, c = _parse_coords(parts[1])
        return Command(ACTIONS[parts[0]], r, c)
    raise ValueError(f"Unknown command: {raw.strip()}")


def apply_command(game: MineSweeperGame, cmd: Command) -> Optional[str]:
    """Forward a board command to the game. Returns a message for the player, if any."""
    if not game.board.in_bounds(cmd.r, cmd.c):
        return f"Cell {cmd.r + 1},{cmd.c + 1} is off the board."
    if cmd.action == "reveal":
        game.cmd_reveal(cmd.r, cmd.c)
    elif cmd.action == "mark":
        game.cmd_toggle_mark(cmd.r, cmd.c)
    elif cmd.action == "chord":
        if not game.can_chord(cmd.r, cmd.c):
            return "Chord only works on a revealed number."
        game.cmd_chord(cmd.r, cmd.c)
    return None


def outcome_message(game: MineSweeperGame) -> str:
    if game.status == GameStatus.WIN:
        return f"[bold green]Congratulations! You won the game in {game.elapsed} seconds![/]"
    if game.loss_reason == LossReason.TIMEOUT:
        return "[bold red]Time's up! The mines went off.[/]"
    return "[bold red]Boom! You revealed a mine.[/]"


# ---------- Setup flow ----------
def welcome_screen():
    console.clear()
    console.print("[bold magenta]Minesweeper[/bold magenta]")


def ask_int(prompt: str, cond=lambda x: True) -> int:
    while True:
        try:
            v = int(console.input(prompt).strip())
            if cond(v):
                return v
        except ValueError:
            pass
        console.print("[red]Invalid input.[/]")


def choose_difficulty() -> str:
    options = list(Difficulty)
    console.print("[bold]Choose the game difficulty:[/]")
    for i, d in enumerate(options, start=1):
        p = d.value
        console.print(
            f"  [cyan]{i}.[/] {p.name.capitalize()} "
            f"({p.rows}x{p.cols}, {p.mines} mines, {p.time_limit}s)"
        )
    choice = ask_int(f"Choice [1-{len(options)}]: ", lambda x: 1 <= x <= len(options))
    return options[choice - 1].value.name


# ---------- Game loop ----------
def game_loop(game: MineSweeperGame, ticker: SecondTicker) -> str:
    """
    Play one game, then show the post-game menu:
      - N: new game with the same difficulty
      - D: choose a new difficulty
      - Q: quit
    """
    message: Optional[str] = None
    while game.status == GameStatus.ONGOING:
        render_rich(game)
        if message:
            console.print(message)
        message = None
        console.print("[dim]r,c reveal · M r,c mark · C r,c chord · N new · D difficulty · Q quit[/dim]")

        raw = console.input("[yellow]Your move[/] ")
        try:
            cmd = parse_command(raw)
        except ValueError as e:
            message = f"[red]{e}[/]"
            continue

        if cmd.action == "quit":
            console.print("[italic]Game exited.[/]")
            return "QUIT"
        if cmd.action == "new":
            return "SAME_RULES"
        if cmd.action == "menu":
            return "NEW_RULES"

        ticker.catch_up()
        if game.is_over:
            break
        note = apply_command(game, cmd)
        if note:
            message = f"[red]{note}[/]"

    render_rich(game)
    console.print(outcome_message(game))
    console.print("Choose: [bold]N[/] new game · [bold]D[/] new difficulty · [bold]Q[/] quit")
    while True:
        choice = console.input("[yellow]Post-game[/] (N/D/Q): ").strip().upper()
        if choice == "Q":
            return "QUIT"
        if choice == "N":
            return "SAME_RULES"
        if choice == "D":
            return "NEW_RULES"
        console.print("[red]Invalid choice.[/]")


def run_tui(difficulty: Optional[str] = None, seed: Optional[int] = None):
    welcome_screen()
    rng = np.random.default_rng(seed)
    try:
        while True:
            name = get_preset(difficulty).name if difficulty else choose_difficulty()
            difficulty = None

            while True:
                game = new_game(name, rng)
                log.info("Starting %s game", name)
                outcome = game_loop(game, SecondTicker(game))
                if outcome == "QUIT":
                    return
                if outcome == "NEW_RULES":
                    break
    except (KeyboardInterrupt, EOFError):
        console.print("\n[italic]Game exited.[/]")
