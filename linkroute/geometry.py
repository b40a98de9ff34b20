"""Geometry primitives for link routing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import Side

if TYPE_CHECKING:
    from .models import Point, Rect


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Check whether two rectangles overlap.

    Rectangles that only share an edge do not overlap.
    """
    return not (
        a.right <= b.x
        or a.x >= b.right
        or a.bottom <= b.y
        or a.y >= b.bottom
    )


def side_midpoint(rect: Rect, side: Side) -> Point:
    """Get the midpoint of one edge of a rectangle."""
    cx, cy = rect.center
    if side == Side.LEFT:
        return (rect.x, cy)
    if side == Side.RIGHT:
        return (rect.right, cy)
    if side == Side.TOP:
        return (cx, rect.y)
    return (cx, rect.bottom)


def squared_distance(p: Point, q: Point) -> float:
    """Squared Euclidean distance, enough for comparing lengths."""
    dx = q[0] - p[0]
    dy = q[1] - p[1]
    return dx * dx + dy * dy


def point_inside_rect(x: float, y: float, rect: Rect) -> bool:
    """Check whether a point lies inside a rectangle or on its border."""
    return rect.x <= x <= rect.right and rect.y <= y <= rect.bottom


def _orientation(p: Point, q: Point, r: Point) -> int:
    """0 = collinear, 1 = clockwise, 2 = counter-clockwise."""
    val = (q[1] - p[1]) * (r[0] - q[0]) - (q[0] - p[0]) * (r[1] - q[1])
    if val == 0:
        return 0
    return 1 if val > 0 else 2


def _on_segment(p: Point, q: Point, r: Point) -> bool:
    """Check if q lies on segment pr, given the three are collinear."""
    return (
        min(p[0], r[0]) <= q[0] <= max(p[0], r[0])
        and min(p[1], r[1]) <= q[1] <= max(p[1], r[1])
    )


def segments_intersect(
    seg1: tuple[Point, Point],
    seg2: tuple[Point, Point],
) -> bool:
    """Check whether two line segments intersect or touch."""
    p1, q1 = seg1
    p2, q2 = seg2

    o1 = _orientation(p1, q1, p2)
    o2 = _orientation(p1, q1, q2)
    o3 = _orientation(p2, q2, p1)
    o4 = _orientation(p2, q2, q1)

    if o1 != o2 and o3 != o4:
        return True

    # Collinear special cases
    if o1 == 0 and _on_segment(p1, p2, q1):
        return True
    if o2 == 0 and _on_segment(p1, q2, q1):
        return True
    if o3 == 0 and _on_segment(p2, p1, q2):
        return True
    if o4 == 0 and _on_segment(p2, q1, q2):
        return True

    return False


def segment_intersects_rect(p: Point, q: Point, rect: Rect) -> bool:
    """Check whether segment pq touches or crosses a rectangle."""
    # Quick rejection on bounding boxes
    if max(p[0], q[0]) < rect.x or min(p[0], q[0]) > rect.right:
        return False
    if max(p[1], q[1]) < rect.y or min(p[1], q[1]) > rect.bottom:
        return False

    if point_inside_rect(p[0], p[1], rect) or point_inside_rect(q[0], q[1], rect):
        return True

    top_left = (rect.x, rect.y)
    top_right = (rect.right, rect.y)
    bottom_left = (rect.x, rect.bottom)
    bottom_right = (rect.right, rect.bottom)
    edges = (
        (top_left, top_right),
        (top_right, bottom_right),
        (bottom_right, bottom_left),
        (bottom_left, top_left),
    )
    return any(segments_intersect((p, q), edge) for edge in edges)
