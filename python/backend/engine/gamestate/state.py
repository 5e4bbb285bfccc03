"""Tracks the mutable state of a play session and its read-only view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from backend.models.difficulty import DifficultyConfig
from backend.models.piece import Piece, PuzzleImage


class Phase(StrEnum):
    PREVIEW = "preview"
    PLAYING = "playing"
    COMPLETE = "complete"


@dataclass
class GameSession:
    """Holds the pieces, selection, counters and phase of one play-through.

    Owned by a single ``GamePlay``; replaced wholesale on restart.
    """

    difficulty_key: str
    difficulty: DifficultyConfig
    width: float
    height: float
    pieces: list[Piece]
    preview_countdown: int
    remaining_hints: int
    phase: Phase = Phase.PREVIEW
    selected_slot_id: int | None = None
    current_choices: list[Piece] = field(default_factory=list)
    elapsed_seconds: int = 0
    move_count: int = 0
    wrong_slot_ids: set[int] = field(default_factory=set)
    image: PuzzleImage | None = None

    # -- queries --------------------------------------------------------------

    def piece(self, piece_id: int) -> Piece | None:
        if 0 <= piece_id < len(self.pieces) and self.pieces[piece_id].id == piece_id:
            return self.pieces[piece_id]
        for p in self.pieces:
            if p.id == piece_id:
                return p
        return None

    def unplaced(self) -> list[Piece]:
        return [p for p in self.pieces if not p.is_placed]

    @property
    def placed_count(self) -> int:
        return sum(1 for p in self.pieces if p.is_placed)

    @property
    def all_placed(self) -> bool:
        return bool(self.pieces) and all(p.is_placed for p in self.pieces)

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.move_count += 1

    def clear_selection(self) -> None:
        self.selected_slot_id = None
        self.current_choices = []

    def snapshot(self) -> SessionSnapshot:
        pieces = tuple(p.copy() for p in self.pieces)
        return SessionSnapshot(
            difficulty_key=self.difficulty_key,
            label=self.difficulty.label,
            grid_size=self.difficulty.grid_size,
            width=self.width,
            height=self.height,
            pieces=pieces,
            phase=self.phase,
            preview_countdown=self.preview_countdown,
            elapsed_seconds=self.elapsed_seconds,
            move_count=self.move_count,
            remaining_hints=self.remaining_hints,
            selected_slot_id=self.selected_slot_id,
            current_choices=tuple(p.copy() for p in self.current_choices),
            wrong_slot_ids=frozenset(self.wrong_slot_ids),
            image=self.image,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable copy of a session, handed to renderers."""

    difficulty_key: str
    label: str
    grid_size: int
    width: float
    height: float
    pieces: tuple[Piece, ...]
    phase: Phase
    preview_countdown: int
    elapsed_seconds: int
    move_count: int
    remaining_hints: int
    selected_slot_id: int | None
    current_choices: tuple[Piece, ...]
    wrong_slot_ids: frozenset[int]
    image: PuzzleImage | None = None

    @property
    def total_pieces(self) -> int:
        return len(self.pieces)

    @property
    def placed_count(self) -> int:
        return sum(1 for p in self.pieces if p.is_placed)

    @property
    def remaining_pieces(self) -> int:
        return self.total_pieces - self.placed_count

    @property
    def progress(self) -> float:
        """Percentage of pieces placed, 0..100."""
        if not self.pieces:
            return 0.0
        return self.placed_count / self.total_pieces * 100


def format_time(seconds: int) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"
