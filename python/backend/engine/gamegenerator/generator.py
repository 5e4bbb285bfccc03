"""Partitions the board area into a grid of pieces."""

from __future__ import annotations

import math

from backend.models.errors import InvalidConfiguration
from backend.models.piece import Piece

DEFAULT_RATIO = 3 / 4  # width / height used when the photo size is unknown


class PuzzleGenerator:
    """Creates the piece set for a session. No randomness: the same input
    always yields the same pieces, which is how a restart rebuilds the board.
    """

    @staticmethod
    def generate_pieces(grid_size: int, width: float, height: float) -> list[Piece]:
        """Return ``grid_size²`` unplaced pieces in row-major order."""
        PuzzleGenerator._check_grid_size(grid_size)
        PuzzleGenerator._check_dimension("width", width)
        PuzzleGenerator._check_dimension("height", height)

        piece_w = width / grid_size
        piece_h = height / grid_size
        pieces: list[Piece] = []
        for r in range(grid_size):
            for c in range(grid_size):
                pieces.append(
                    Piece(
                        id=r * grid_size + c,
                        row=r,
                        col=c,
                        x=c * piece_w,
                        y=r * piece_h,
                        width=piece_w,
                        height=piece_h,
                    )
                )
        return pieces

    @staticmethod
    def fit_area(
        image_width: float | None,
        image_height: float | None,
        max_width: float,
        max_height: float,
    ) -> tuple[float, float]:
        """Return the largest board size with the photo's aspect ratio that
        fits in *max_width* × *max_height*.

        Falls back to a 3:4 portrait ratio when the photo size is missing.
        """
        PuzzleGenerator._check_dimension("max_width", max_width)
        PuzzleGenerator._check_dimension("max_height", max_height)

        ratio = DEFAULT_RATIO
        if (
            image_width
            and image_height
            and math.isfinite(image_width)
            and math.isfinite(image_height)
            and image_width > 0
            and image_height > 0
        ):
            ratio = image_width / image_height

        if ratio > max_width / max_height:
            return max_width, max_width / ratio
        return max_height * ratio, max_height

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _check_grid_size(grid_size: int) -> None:
        if isinstance(grid_size, bool) or not isinstance(grid_size, int) or grid_size < 2:
            raise InvalidConfiguration(
                f"Grid size must be an integer >= 2, got {grid_size!r}."
            )

    @staticmethod
    def _check_dimension(name: str, value: float) -> None:
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not math.isfinite(value)
            or value <= 0
        ):
            raise InvalidConfiguration(
                f"Board {name} must be a finite positive number, got {value!r}."
            )
