"""Deterministic tab/blank patterns derived from grid coordinates."""

from __future__ import annotations

from backend.models.errors import InvalidConfiguration
from backend.models.pattern import EdgePattern, EdgeShape


class PatternGenerator:
    """Stateless pattern source — all methods are static.

    Nothing is stored per edge: both pieces sharing an edge compute its
    shape from the same coordinates, so neighbours always agree.
    """

    @staticmethod
    def get_pattern(row: int, col: int, grid_size: int) -> EdgePattern:
        """Return the edge pattern of the piece at (*row*, *col*).

        Border sides are ``FLAT``; every inner side is ``TAB`` or ``BLANK``
        and is the opposite of the matching side of the neighbour.
        """
        PatternGenerator._validate(row, col, grid_size)

        top = EdgeShape.FLAT
        if row > 0:
            top = PatternGenerator._top(row, col, grid_size)

        right = EdgeShape.FLAT
        if col < grid_size - 1:
            right = PatternGenerator._right(row, col, grid_size)

        # bottom/left mirror the neighbour's top/right. For even grid sizes
        # this is the same parity rule as (seed + row + 1) and
        # (seed + col + grid_size); for odd sizes that rule would give both
        # neighbours a tab.
        bottom = EdgeShape.FLAT
        if row < grid_size - 1:
            bottom = PatternGenerator._top(row + 1, col, grid_size).opposite

        left = EdgeShape.FLAT
        if col > 0:
            left = PatternGenerator._right(row, col - 1, grid_size).opposite

        return EdgePattern(top=top, right=right, bottom=bottom, left=left)

    @staticmethod
    def get_grid(grid_size: int) -> list[list[EdgePattern]]:
        """Return the patterns of every piece, row by row."""
        return [
            [PatternGenerator.get_pattern(r, c, grid_size) for c in range(grid_size)]
            for r in range(grid_size)
        ]

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _top(row: int, col: int, grid_size: int) -> EdgeShape:
        seed = row * grid_size + col
        return EdgeShape.TAB if (seed + row) % 2 == 0 else EdgeShape.BLANK

    @staticmethod
    def _right(row: int, col: int, grid_size: int) -> EdgeShape:
        seed = row * grid_size + col
        return EdgeShape.TAB if (seed + col) % 2 == 0 else EdgeShape.BLANK

    @staticmethod
    def _validate(row: int, col: int, grid_size: int) -> None:
        if isinstance(grid_size, bool) or not isinstance(grid_size, int) or grid_size < 2:
            raise InvalidConfiguration(
                f"Grid size must be an integer >= 2, got {grid_size!r}."
            )
        if not (0 <= row < grid_size and 0 <= col < grid_size):
            raise InvalidConfiguration(
                f"Cell ({row}, {col}) is outside a {grid_size}×{grid_size} grid."
            )
