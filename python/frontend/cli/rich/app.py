"""Rich terminal frontend — plays a session with tables and panels.

The terminal cannot show the photo, so each piece is drawn by its edge
pattern: pick the choice whose tabs and blanks fit the selected slot.
"""

from __future__ import annotations

from typing import Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import Phase, SessionSnapshot, format_time
from backend.engine.piecepattern import PatternGenerator
from backend.engine.scheduler import PollingScheduler
from backend.models.pattern import EdgePattern, EdgeShape
from backend.models.piece import PlacedBy
from frontend.cli.input_handler import get_key_timeout

console = Console()

_POLL_SECONDS = 0.2

# Glyph per side for (TAB, BLANK, FLAT), indexed top, right, bottom, left.
_SIDE_GLYPHS: tuple[dict[EdgeShape, str], ...] = (
    {EdgeShape.TAB: "^", EdgeShape.BLANK: "v", EdgeShape.FLAT: "─"},
    {EdgeShape.TAB: ">", EdgeShape.BLANK: "<", EdgeShape.FLAT: "│"},
    {EdgeShape.TAB: "v", EdgeShape.BLANK: "^", EdgeShape.FLAT: "─"},
    {EdgeShape.TAB: "<", EdgeShape.BLANK: ">", EdgeShape.FLAT: "│"},
)


# -- rendering ----------------------------------------------------------------


def _pattern_glyph(pattern: EdgePattern, style: str = "bold white") -> Text:
    top, right, bottom, left = (g[s] for g, s in zip(_SIDE_GLYPHS, pattern.sides()))
    text = Text(justify="center")
    text.append(f" {top} \n", style=style)
    text.append(f"{left}■{right}\n", style=style)
    text.append(f" {bottom} ", style=style)
    return text


def _cell(snap: SessionSnapshot, piece_id: int, cursor: int) -> Text:
    piece = snap.pieces[piece_id]
    label = f"{piece_id:>2}"
    if snap.phase == Phase.PREVIEW or piece.placed_by == PlacedBy.CORRECT:
        style = "bold green"
    elif piece.placed_by == PlacedBy.HINT:
        style = "bold cyan"
    elif piece_id in snap.wrong_slot_ids:
        label, style = " ✗", "bold red"
    elif piece_id == snap.selected_slot_id:
        label, style = " ?", "bold yellow"
    else:
        label, style = " ·", "dim"
    if piece_id == cursor and snap.phase == Phase.PLAYING:
        style += " reverse"
    return Text(label, style=style)


def _render_board(snap: SessionSnapshot, cursor: int) -> Table:
    table = Table(
        show_header=False,
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(snap.grid_size):
        table.add_column(width=3, justify="center")
    for r in range(snap.grid_size):
        table.add_row(
            *(_cell(snap, r * snap.grid_size + c, cursor) for c in range(snap.grid_size))
        )
    return table


def _render_choices(snap: SessionSnapshot) -> Table:
    table = Table(box=rich.box.ROUNDED, border_style="dim", show_lines=False)
    slot = snap.pieces[snap.selected_slot_id]
    table.add_column("slot", justify="center", style="yellow")
    for i in range(len(snap.current_choices)):
        table.add_column(str(i + 1), justify="center")
    row = [_pattern_glyph(PatternGenerator.get_pattern(slot.row, slot.col, snap.grid_size), "bold yellow")]
    for choice in snap.current_choices:
        row.append(_pattern_glyph(PatternGenerator.get_pattern(choice.row, choice.col, snap.grid_size)))
    table.add_row(*row)
    return table


def _stats(snap: SessionSnapshot) -> Text:
    stats = Text()
    stats.append("  Time: ", style="dim")
    stats.append(format_time(snap.elapsed_seconds), style="bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(str(snap.move_count), style="bold yellow")
    stats.append("    Hints: ", style="dim")
    stats.append(str(snap.remaining_hints), style="bold yellow")
    stats.append("    Placed: ", style="dim")
    stats.append(f"{snap.placed_count}/{snap.total_pieces}", style="bold yellow")
    return stats


def _controls(snap: SessionSnapshot) -> Text:
    controls = Text()
    if snap.phase == Phase.PREVIEW:
        controls.append("  Space", style="bold cyan")
        controls.append("  start now   ", style="dim")
    elif snap.phase == Phase.PLAYING:
        controls.append("  ↑↓←→", style="bold cyan")
        controls.append("  move   ", style="dim")
        controls.append("Enter", style="bold cyan")
        controls.append("  pick slot   ", style="dim")
        controls.append("1-9", style="bold cyan")
        controls.append("  choose   ", style="dim")
        controls.append("N", style="bold cyan")
        controls.append("  hint   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")
    return controls


def _draw(snap: SessionSnapshot, cursor: int, status: str = "") -> None:
    console.clear()

    if snap.phase == Phase.PREVIEW:
        banner = Text(f"Memorise the photo!  {snap.preview_countdown}", style="bold magenta")
    elif snap.phase == Phase.COMPLETE:
        banner = Text("★ Puzzle complete! ★", style="bold green")
    elif snap.selected_slot_id is not None:
        banner = Text("Pick the piece that fits the slot", style="bold")
    else:
        banner = Text("Select an empty slot", style="bold")

    parts = [Align.center(banner), Text(""), Align.center(_render_board(snap, cursor))]
    if snap.current_choices:
        parts += [Text(""), Align.center(_render_choices(snap))]

    panel = Panel(
        Group(*parts),
        title=f"[bold cyan]Photo Puzzle  {snap.label}[/bold cyan]",
        border_style="bold green" if snap.phase == Phase.COMPLETE else "bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_stats(snap)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(snap)))


# -- input handling -----------------------------------------------------------


def _move_cursor(cursor: int, key: str, grid_size: int) -> int:
    r, c = divmod(cursor, grid_size)
    dr, dc = {"up": (-1, 0), "down": (1, 0), "left": (0, -1), "right": (0, 1)}[key]
    r = min(max(r + dr, 0), grid_size - 1)
    c = min(max(c + dc, 0), grid_size - 1)
    return r * grid_size + c


def _handle(game: GamePlay, key: str, cursor: int) -> tuple[int, str]:
    snap = game.snapshot()
    status = ""
    if key in ("up", "down", "left", "right"):
        cursor = _move_cursor(cursor, key, snap.grid_size)
    elif key == "skip":
        game.skip_preview()
    elif key == "select":
        if not game.select_slot(cursor) and snap.phase == Phase.PLAYING:
            status = "[yellow]That slot is already filled.[/yellow]"
    elif key == "hint":
        if not game.use_hint():
            if snap.remaining_hints <= 0:
                status = "[yellow]No hints left.[/yellow]"
            else:
                status = "[yellow]Select a slot first.[/yellow]"
    elif key.isdigit() and snap.current_choices:
        index = int(key) - 1
        if 0 <= index < len(snap.current_choices):
            slot_id = snap.selected_slot_id
            game.choose_choice(snap.current_choices[index].id)
            if slot_id in game.state.wrong_slot_ids:
                status = "[red]Wrong piece![/red]"
            else:
                status = "[green]Correct![/green]"
    return cursor, status


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay, scheduler: PollingScheduler) -> None:
    cursor = 0
    status = ""

    while True:
        _draw(game.snapshot(), cursor, status)
        status = ""

        # Pump the scheduler while waiting so the clock keeps ticking.
        key = None
        while key is None:
            key = get_key_timeout(_POLL_SECONDS)
            if scheduler.run_pending() and key is None:
                break
        if key is None:
            continue

        if key == "quit":
            return
        if key == "restart":
            game.restart()
            cursor = 0
            continue
        if game.is_won:
            continue
        cursor, status = _handle(game, key, cursor)


# -- public entry point -------------------------------------------------------


def run(game_factory: Callable[[PollingScheduler], GamePlay]) -> None:
    """Play sessions built by *game_factory(scheduler)* until the user quits."""
    scheduler = PollingScheduler()
    game = game_factory(scheduler)
    try:
        _play(game, scheduler)
    finally:
        console.clear()
        console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
