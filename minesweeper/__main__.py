# minesweeper/__main__.py
from __future__ import annotations

import typer

from minesweeper.game import get_preset
from minesweeper.logging_config import setup_logging
from minesweeper.settings import get_settings
from minesweeper.textUI import run_tui

app = typer.Typer(help="Minesweeper CLI")


@app.callback()
def main(
    log_level: str | None = typer.Option(None, help="Log level (default: settings.LOG_LEVEL)"),
):
    """Minesweeper with a per-difficulty time limit."""
    setup_logging(log_level)


@app.command()
def tui(
    difficulty: str | None = typer.Option(
        None, help="Difficulty: beginner, intermediate or advanced (asked if omitted)"
    ),
    seed: int | None = typer.Option(None, help="Seed for the mine layout (default: settings.SEED)"),
):
    """
    Run the Text User Interface (TUI).
    Uses settings.DIFFICULTY if set, otherwise asks; --difficulty overrides for this run.
    """
    settings = get_settings()
    chosen = difficulty or settings.DIFFICULTY

    if chosen is not None:
        try:
            chosen = get_preset(chosen).name
        except ValueError as e:
            raise typer.BadParameter(str(e))

    run_tui(chosen, seed if seed is not None else settings.SEED)


if __name__ == "__main__":
    app()
