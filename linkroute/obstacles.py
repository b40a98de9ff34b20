"""Obstacle collection and path clearance checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .geometry import segment_intersects_rect

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import Point, Rect

# Minimum clearance a routed line keeps from any obstacle
DEFAULT_OBSTACLE_PADDING = 20.0


def obstacles_for_link(
    cards: Iterable[Rect],
    source: Rect,
    target: Rect,
) -> tuple[Rect, ...]:
    """Collect obstacle rectangles for a link.

    Cards are excluded when their origin matches the source or target
    origin. Two cards stacked on the exact same position are therefore
    both excluded.
    """
    excluded = {source.origin, target.origin}
    return tuple(card for card in cards if card.origin not in excluded)


def path_intersects_obstacles(
    points: Sequence[Point],
    obstacles: Iterable[Rect],
    padding: float = DEFAULT_OBSTACLE_PADDING,
) -> bool:
    """Check whether any segment of a path comes within padding of an obstacle."""
    padded = [obstacle.inflate(padding) for obstacle in obstacles]
    if not padded:
        return False

    for start, end in zip(points, points[1:]):
        for rect in padded:
            if segment_intersects_rect(start, end, rect):
                return True
    return False
