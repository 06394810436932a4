# minesweeper/cli.py
from minesweeper.__main__ import app as _typer_app


def main():
    """Console script entrypoint for the minesweeper CLI."""
    _typer_app()
