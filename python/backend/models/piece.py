"""Piece model for the photo puzzle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.models.pattern import GridCoordinate


class PlacedBy(StrEnum):
    NONE = "none"
    CORRECT = "correct"
    HINT = "hint"


@dataclass
class Piece:
    """One cell of the photo grid.

    ``x``/``y``/``width``/``height`` are in board coordinates, so the same
    rectangle is both the slot on the board and the crop of the photo shown
    on the piece.
    """

    id: int
    row: int
    col: int
    x: float
    y: float
    width: float
    height: float
    is_placed: bool = False
    placed_by: PlacedBy = PlacedBy.NONE

    # -- queries --------------------------------------------------------------

    @property
    def coordinate(self) -> GridCoordinate:
        return GridCoordinate(self.row, self.col)

    def copy(self) -> Piece:
        return Piece(
            id=self.id,
            row=self.row,
            col=self.col,
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            is_placed=self.is_placed,
            placed_by=self.placed_by,
        )

    # -- mutation -------------------------------------------------------------

    def place(self, placed_by: PlacedBy) -> None:
        self.is_placed = True
        self.placed_by = placed_by


@dataclass(frozen=True)
class PuzzleImage:
    """Opaque photo handed over by the image picker.

    ``ref`` is never inspected; only the natural size is used to fit the
    board to the photo's aspect ratio.
    """

    ref: object
    width: float | None = None
    height: float | None = None
