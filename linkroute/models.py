"""Data models for link routing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

Point = tuple[float, float]


class Side(Enum):
    """Edges of a rectangle a free-style link can attach to."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class LinkStyle(Enum):
    """How a link is drawn."""

    FREE = "free"
    ORTHOGONAL = "orthogonal"

    @classmethod
    def parse(cls, value: str | LinkStyle) -> LinkStyle:
        """Convert a persisted style string to LinkStyle."""
        if isinstance(value, LinkStyle):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Invalid link style '{value}', must be 'free' or 'orthogonal'"
            ) from None


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas world coordinates."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rect size must be non-negative, got {self.width}x{self.height}"
            )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def origin(self) -> Point:
        return (self.x, self.y)

    def inflate(self, padding: float) -> Rect:
        """Return a copy grown by padding on all four sides."""
        return Rect(
            self.x - padding,
            self.y - padding,
            self.width + padding * 2,
            self.height + padding * 2,
        )


def _as_obstacle_tuple(obstacles: Iterable[Rect] | None) -> tuple[Rect, ...]:
    return tuple(obstacles) if obstacles else ()


@dataclass(frozen=True)
class LinkRequest:
    """Everything needed to route one link.

    Instances are hashable, so callers can memoize routing results keyed
    on the request itself.
    """

    source: Rect
    target: Rect
    style: LinkStyle = LinkStyle.FREE
    route_around: bool = False
    obstacles: tuple[Rect, ...] = ()

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "style", LinkStyle.parse(self.style))
        object.__setattr__(self, "obstacles", _as_obstacle_tuple(self.obstacles))


@dataclass
class RoutedLink:
    """A computed link path ready for drawing."""

    points: list[Point]
    arrow_segment: list[Point]
    strategy: str

    def flat(self) -> list[float]:
        """Flatten points to [x0, y0, x1, y1, ...]."""
        return [c for point in self.points for c in point]
