"""Closed piece outlines built from line and cubic Bezier segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Point = tuple[float, float]


@dataclass(frozen=True)
class LineSegment:
    p0: Point
    p1: Point

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p1

    def points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1)

    def evaluate(self, t: float) -> Point:
        return (
            self.p0[0] + (self.p1[0] - self.p0[0]) * t,
            self.p0[1] + (self.p1[1] - self.p0[1]) * t,
        )


@dataclass(frozen=True)
class CubicSegment:
    """A cubic Bezier curve defined by 4 control points."""

    p0: Point  # Start point
    p1: Point  # Control point 1
    p2: Point  # Control point 2
    p3: Point  # End point

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p3

    def points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1, self.p2, self.p3)

    def evaluate(self, t: float) -> Point:
        """Evaluate the curve at parameter t (0 to 1)."""
        mt = 1 - t
        a = mt * mt * mt
        b = 3 * mt * mt * t
        c = 3 * mt * t * t
        d = t * t * t
        x = a * self.p0[0] + b * self.p1[0] + c * self.p2[0] + d * self.p3[0]
        y = a * self.p0[1] + b * self.p1[1] + c * self.p2[1] + d * self.p3[1]
        return (x, y)


Segment = Union[LineSegment, CubicSegment]


@dataclass(frozen=True)
class PieceOutline:
    """Outline of one piece, traversed top, right, bottom, left.

    Every segment starts where the previous one ended and the last one
    ends at ``start``.
    """

    segments: tuple[Segment, ...]

    @property
    def start(self) -> Point:
        return self.segments[0].start

    @property
    def is_closed(self) -> bool:
        if not self.segments:
            return False
        for prev, nxt in zip(self.segments, self.segments[1:]):
            if not _same_point(prev.end, nxt.start):
                return False
        return _same_point(self.segments[-1].end, self.start)

    def curves(self) -> list[CubicSegment]:
        return [s for s in self.segments if isinstance(s, CubicSegment)]

    def bounds(self) -> tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)`` over all control points.

        Control points of a cubic enclose the curve, so the box also covers
        every protruding tab.
        """
        xs = [p[0] for s in self.segments for p in s.points()]
        ys = [p[1] for s in self.segments for p in s.points()]
        return (min(xs), min(ys), max(xs), max(ys))

    def sample(self, steps_per_curve: int = 8) -> list[Point]:
        """Flatten the outline into a polygon (closing point not repeated)."""
        points: list[Point] = [self.start]
        for seg in self.segments:
            if isinstance(seg, LineSegment):
                points.append(seg.end)
                continue
            for i in range(1, steps_per_curve + 1):
                points.append(seg.evaluate(i / steps_per_curve))
        return points[:-1]

    def to_path_data(self, precision: int = 2) -> str:
        """Encode as SVG-style path data: ``M x y L x y C ... Z``."""

        def fmt(p: Point) -> str:
            return f"{round(p[0], precision):g} {round(p[1], precision):g}"

        parts = [f"M {fmt(self.start)}"]
        for seg in self.segments:
            if isinstance(seg, LineSegment):
                parts.append(f"L {fmt(seg.p1)}")
            else:
                parts.append(f"C {fmt(seg.p1)} {fmt(seg.p2)} {fmt(seg.p3)}")
        parts.append("Z")
        return " ".join(parts)


def _same_point(a: Point, b: Point, eps: float = 1e-9) -> bool:
    return abs(a[0] - b[0]) <= eps and abs(a[1] - b[1]) <= eps
