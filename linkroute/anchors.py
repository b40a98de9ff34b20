"""Anchor point selection on card edges."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .geometry import rects_overlap, side_midpoint, squared_distance
from .models import Side

if TYPE_CHECKING:
    from .models import Point, Rect

# Candidate side pairings for free-style links, in tie-breaking order
FREE_SIDE_PAIRS: tuple[tuple[Side, Side], ...] = (
    (Side.LEFT, Side.RIGHT),
    (Side.RIGHT, Side.LEFT),
    (Side.TOP, Side.BOTTOM),
    (Side.BOTTOM, Side.TOP),
)


def orthogonal_anchors(source: Rect, target: Rect) -> tuple[Point, Point]:
    """Anchor orthogonal links from source right-middle to target left-middle.

    Orthogonal links always read left to right, so the anchors do not
    depend on where the cards are relative to each other.
    """
    return side_midpoint(source, Side.RIGHT), side_midpoint(target, Side.LEFT)


def free_anchors(source: Rect, target: Rect) -> tuple[Point, Point] | None:
    """Pick the closest pair of facing side midpoints.

    Args:
        source: Source card rectangle
        target: Target card rectangle

    Returns:
        (start, end) anchors, or None if the cards overlap
    """
    if rects_overlap(source, target):
        return None

    best: tuple[Point, Point] | None = None
    best_distance = math.inf

    for source_side, target_side in FREE_SIDE_PAIRS:
        start = side_midpoint(source, source_side)
        end = side_midpoint(target, target_side)
        distance = squared_distance(start, end)
        if not math.isfinite(distance):
            continue
        # Strict comparison keeps the first minimum on ties
        if best is None or distance < best_distance:
            best = (start, end)
            best_distance = distance

    if best is None:
        return (
            project_anchor(source, target.center),
            project_anchor(target, source.center),
        )
    return best


def project_anchor(rect: Rect, toward: Point) -> Point:
    """Intersect the ray from the rect center toward a point with the rect border."""
    cx, cy = rect.center
    if rect.width == 0 and rect.height == 0:
        return (cx, cy)

    angle = math.atan2(toward[1] - cy, toward[0] - cx)
    cos = math.cos(angle)
    sin = math.sin(angle)
    half_width = rect.width / 2
    half_height = rect.height / 2

    if abs(cos) * rect.height > abs(sin) * rect.width or sin == 0:
        # Left or right edge
        if cos > 0:
            return (rect.right, cy + half_width * sin / cos)
        return (rect.x, cy - half_width * sin / cos)

    # Top or bottom edge
    if sin > 0:
        return (cx + half_height * cos / sin, rect.bottom)
    return (cx - half_height * cos / sin, rect.y)
