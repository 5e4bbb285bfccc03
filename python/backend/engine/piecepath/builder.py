"""Builds closed jigsaw outlines from an edge pattern."""

from __future__ import annotations

import math

from backend.models.errors import InvalidDimension
from backend.models.outline import CubicSegment, LineSegment, PieceOutline, Point, Segment
from backend.models.pattern import EdgePattern, EdgeShape

TAB_RATIO = 0.2  # tab depth relative to the shorter side
NECK_RATIO = 0.4  # neck half-width relative to the tab depth

# Control points of the three curves forming one tab. Each point is
# ((neck, tab) multipliers of the offset along the side from its midpoint,
# depth as a fraction of the tab size).
_TAB_CURVES: tuple[tuple[tuple[tuple[int, int], float], ...], ...] = (
    (((-1, 0), 0.3), ((0, -1), 0.3), ((0, -1), 0.6)),
    (((0, -1), 1.0), ((0, 1), 1.0), ((0, 1), 0.6)),
    (((0, 1), 0.3), ((1, 0), 0.3), ((1, 0), 0.0)),
)


class OutlineBuilder:
    """Stateless outline builder — all methods are static."""

    @staticmethod
    def build_outline(
        width: float,
        height: float,
        pattern: EdgePattern,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
    ) -> PieceOutline:
        """Return the closed outline of a *width* × *height* piece.

        The path starts at the top-left corner ``(offset_x, offset_y)`` and
        runs clockwise: top, right, bottom, left. A ``FLAT`` side is one
        straight segment; any other side is a line to the neck, three
        cubics forming the tab (outward) or blank (inward), and a line to
        the next corner.
        """
        for name, value in (("width", width), ("height", height)):
            if not math.isfinite(value) or value <= 0:
                raise InvalidDimension(f"Piece {name} must be positive, got {value!r}.")

        tab = min(width, height) * TAB_RATIO
        neck = tab * NECK_RATIO

        x0, y0 = offset_x, offset_y
        x1, y1 = offset_x + width, offset_y + height
        corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
        # (direction of travel, outward normal) per side, clockwise.
        frames = [
            ((1.0, 0.0), (0.0, -1.0)),
            ((0.0, 1.0), (1.0, 0.0)),
            ((-1.0, 0.0), (0.0, 1.0)),
            ((0.0, -1.0), (-1.0, 0.0)),
        ]

        segments: list[Segment] = []
        for i, shape in enumerate(pattern.sides()):
            start = corners[i]
            end = corners[(i + 1) % 4]
            along, outward = frames[i]
            segments.extend(
                OutlineBuilder._side(start, end, along, outward, shape, tab, neck)
            )
        return PieceOutline(segments=tuple(segments))

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _side(
        start: Point,
        end: Point,
        along: Point,
        outward: Point,
        shape: EdgeShape,
        tab: float,
        neck: float,
    ) -> list[Segment]:
        if shape == EdgeShape.FLAT:
            return [LineSegment(start, end)]

        mid = ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
        depth = int(shape) * tab

        def at(coef: tuple[int, int], k: float) -> Point:
            a = coef[0] * neck + coef[1] * tab
            return (
                mid[0] + along[0] * a + outward[0] * k * depth,
                mid[1] + along[1] * a + outward[1] * k * depth,
            )

        neck_in = at((-1, 0), 0.0)
        segments: list[Segment] = [LineSegment(start, neck_in)]
        current = neck_in
        for c1, c2, c3 in _TAB_CURVES:
            p3 = at(*c3)
            segments.append(CubicSegment(current, at(*c1), at(*c2), p3))
            current = p3
        segments.append(LineSegment(current, end))
        return segments
