"""Edge shapes and per-piece edge patterns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class EdgeShape(IntEnum):
    FLAT = 0
    TAB = 1
    BLANK = -1

    @property
    def opposite(self) -> EdgeShape:
        return EdgeShape(-self.value)


@dataclass(frozen=True)
class GridCoordinate:
    row: int
    col: int


@dataclass(frozen=True)
class EdgePattern:
    """Shape of each side of a piece, listed clockwise from the top.

    ``TAB`` protrudes away from the piece, ``BLANK`` is cut into it.
    """

    top: EdgeShape
    right: EdgeShape
    bottom: EdgeShape
    left: EdgeShape

    def sides(self) -> tuple[EdgeShape, EdgeShape, EdgeShape, EdgeShape]:
        return (self.top, self.right, self.bottom, self.left)

    @property
    def is_border(self) -> bool:
        return EdgeShape.FLAT in self.sides()
