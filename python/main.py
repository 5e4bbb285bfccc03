#!/usr/bin/env python3
"""Photo Puzzle.

Usage::

    python main.py play                      # easy, 10 s preview
    python main.py play -d hard --preview 3  # 5×5, short preview
    python main.py pattern -g 4              # tab/blank layout of a grid
    python main.py outline 2 1 -g 4          # outline path of one piece
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gameplay import PREVIEW_TIME  # noqa: E402
from backend.models.difficulty import DIFFICULTY_CONFIG  # noqa: E402
from backend.models.errors import PuzzleError  # noqa: E402

console = Console()

app = typer.Typer(add_completion=False, help="Photo matching puzzle.")


def _difficulty_callback(value: str) -> str:
    if value not in DIFFICULTY_CONFIG:
        raise typer.BadParameter(f"choose from {', '.join(DIFFICULTY_CONFIG)}")
    return value


# -- commands -----------------------------------------------------------------


@app.callback()
def setup(
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine events to the terminal.",
    ),
) -> None:
    """Photo matching puzzle."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def play(
    difficulty: str = typer.Option(
        "easy", "-d", "--difficulty",
        callback=_difficulty_callback,
        help="easy (3×3), medium (4×4) or hard (5×5).",
    ),
    preview: int = typer.Option(
        PREVIEW_TIME, "-p", "--preview",
        min=0,
        help="Seconds the photo is shown before play.",
    ),
    width: float = typer.Option(300.0, "--width", help="Board width."),
    height: float = typer.Option(400.0, "--height", help="Board height."),
) -> None:
    """Play a session in the terminal."""
    from backend.engine.gameplay import GamePlay
    from frontend.cli.rich import app as rich_app

    try:
        rich_app.run(
            lambda scheduler: GamePlay(
                difficulty, width, height, scheduler=scheduler, preview_time=preview
            )
        )
    except PuzzleError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def pattern(
    grid_size: int = typer.Option(4, "-g", "--grid-size", help="Pieces per side."),
) -> None:
    """Print the edge pattern of every piece."""
    from backend.engine.piecepattern import PatternGenerator

    try:
        grid = PatternGenerator.get_grid(grid_size)
    except PuzzleError as exc:
        raise typer.BadParameter(str(exc)) from exc

    table = Table(title=f"{grid_size}×{grid_size} edge patterns (top right bottom left)")
    table.add_column("row", justify="right", style="dim")
    for c in range(grid_size):
        table.add_column(f"col {c}", justify="center")
    for r, row in enumerate(grid):
        table.add_row(
            str(r),
            *(" ".join(f"{int(s):+d}" if s else "0" for s in p.sides()) for p in row),
        )
    console.print(table)


@app.command()
def outline(
    row: int = typer.Argument(..., help="Piece row."),
    col: int = typer.Argument(..., help="Piece column."),
    grid_size: int = typer.Option(4, "-g", "--grid-size", help="Pieces per side."),
    width: float = typer.Option(100.0, "--width", help="Piece width."),
    height: float = typer.Option(100.0, "--height", help="Piece height."),
) -> None:
    """Print the outline of one piece as SVG path data."""
    from backend.engine.piecepath import OutlineBuilder
    from backend.engine.piecepattern import PatternGenerator

    try:
        shape = OutlineBuilder.build_outline(
            width, height, PatternGenerator.get_pattern(row, col, grid_size)
        )
    except PuzzleError as exc:
        raise typer.BadParameter(str(exc)) from exc

    min_x, min_y, max_x, max_y = shape.bounds()
    console.print(f"[dim]bounds[/dim] ({min_x:g}, {min_y:g}) – ({max_x:g}, {max_y:g})")
    print(shape.to_path_data())


if __name__ == "__main__":
    app()
