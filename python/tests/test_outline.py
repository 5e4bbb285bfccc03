"""Outline builder tests."""

from __future__ import annotations

import math

import pytest

from backend.engine.piecepath import OutlineBuilder
from backend.engine.piecepattern import PatternGenerator
from backend.models.errors import InvalidDimension
from backend.models.outline import CubicSegment, LineSegment
from backend.models.pattern import EdgePattern, EdgeShape

FLAT = EdgePattern(EdgeShape.FLAT, EdgeShape.FLAT, EdgeShape.FLAT, EdgeShape.FLAT)
ALL_TABS = EdgePattern(EdgeShape.TAB, EdgeShape.TAB, EdgeShape.TAB, EdgeShape.TAB)
ALL_BLANKS = EdgePattern(EdgeShape.BLANK, EdgeShape.BLANK, EdgeShape.BLANK, EdgeShape.BLANK)


# -- helpers ------------------------------------------------------------------


def _polygon_area(points: list[tuple[float, float]]) -> float:
    """Signed shoelace area; positive for clockwise in screen coordinates."""
    total = 0.0
    for (x0, y0), (x1, y1) in zip(points, points[1:] + points[:1]):
        total += x0 * y1 - x1 * y0
    return total / 2


# -- tests --------------------------------------------------------------------


def test_flat_piece_is_rectangle() -> None:
    outline = OutlineBuilder.build_outline(40, 30, FLAT, 5, 7)
    assert len(outline.segments) == 4
    assert all(isinstance(s, LineSegment) for s in outline.segments)
    assert [s.start for s in outline.segments] == [(5, 7), (45, 7), (45, 37), (5, 37)]
    assert outline.is_closed


def test_shaped_side_structure() -> None:
    outline = OutlineBuilder.build_outline(100, 100, ALL_TABS)
    # per side: line, 3 cubics, line
    assert len(outline.segments) == 20
    kinds = [type(s) for s in outline.segments[:5]]
    assert kinds == [LineSegment, CubicSegment, CubicSegment, CubicSegment, LineSegment]
    assert len(outline.curves()) == 12
    assert outline.is_closed


def test_tab_protrudes_blank_indents() -> None:
    w, h = 100.0, 80.0
    tab = min(w, h) * 0.2
    min_x, min_y, max_x, max_y = OutlineBuilder.build_outline(w, h, ALL_TABS).bounds()
    assert min_y == pytest.approx(-tab)
    assert max_x == pytest.approx(w + tab)
    assert max_y == pytest.approx(h + tab)
    assert min_x == pytest.approx(-tab)

    bounds = OutlineBuilder.build_outline(w, h, ALL_BLANKS).bounds()
    assert bounds == pytest.approx((0.0, 0.0, w, h))


def test_top_tab_geometry() -> None:
    pattern = EdgePattern(EdgeShape.TAB, EdgeShape.FLAT, EdgeShape.FLAT, EdgeShape.FLAT)
    outline = OutlineBuilder.build_outline(100, 100, pattern)
    tab, neck = 20.0, 8.0
    first = outline.segments[0]
    assert first == LineSegment((0, 0), (50 - neck, 0))
    peak = outline.segments[2]
    assert peak.p1 == pytest.approx((50 - tab, -tab))
    assert peak.p2 == pytest.approx((50 + tab, -tab))
    assert outline.segments[3].p3 == pytest.approx((50 + neck, 0))


@pytest.mark.parametrize("n", [3, 4, 5])
def test_every_piece_closes_clockwise(n: int) -> None:
    for r in range(n):
        for c in range(n):
            pattern = PatternGenerator.get_pattern(r, c, n)
            outline = OutlineBuilder.build_outline(60, 45, pattern, 10, 10)
            assert outline.is_closed
            assert _polygon_area(outline.sample()) > 0


def test_area_changes_with_tabs() -> None:
    flat = _polygon_area(OutlineBuilder.build_outline(100, 100, FLAT).sample())
    tabs = _polygon_area(OutlineBuilder.build_outline(100, 100, ALL_TABS).sample(16))
    blanks = _polygon_area(OutlineBuilder.build_outline(100, 100, ALL_BLANKS).sample(16))
    assert flat == pytest.approx(10000)
    assert tabs > flat > blanks


def test_path_data() -> None:
    data = OutlineBuilder.build_outline(10, 20, FLAT).to_path_data()
    assert data == "M 0 0 L 10 0 L 10 20 L 0 20 L 0 0 Z"


def test_cubic_evaluate_endpoints() -> None:
    curve = CubicSegment((0, 0), (1, 2), (3, 2), (4, 0))
    assert curve.evaluate(0) == (0, 0)
    assert curve.evaluate(1) == (4, 0)
    assert curve.evaluate(0.5) == pytest.approx((2.0, 1.5))


@pytest.mark.parametrize(
    "width, height",
    [(0, 10), (10, 0), (-5, 10), (10, -1), (math.inf, 10), (10, math.nan)],
)
def test_non_positive_dimensions_rejected(width: float, height: float) -> None:
    with pytest.raises(InvalidDimension):
        OutlineBuilder.build_outline(width, height, FLAT)
