"""Shared fixtures for linkroute tests."""

import pytest

from linkroute.models import LinkRequest, LinkStyle, Rect
from linkroute.pathfinding import RoutingConfig


# =============================================================================
# Geometry fixtures
# =============================================================================

@pytest.fixture
def source_rect() -> Rect:
    """Standard-size card at the origin."""
    return Rect(0, 0, 200, 120)


@pytest.fixture
def target_rect() -> Rect:
    """Standard-size card to the right of source_rect, same row."""
    return Rect(400, 0, 200, 120)


@pytest.fixture
def blocking_obstacle() -> Rect:
    """Card sitting on the simple path between source_rect and target_rect."""
    return Rect(250, 50, 100, 80)


@pytest.fixture
def enclosing_ring() -> list:
    """Four walls boxing in target_rect's left anchor with no way in."""
    return [
        Rect(340, -100, 320, 40),   # top
        Rect(340, 180, 320, 40),    # bottom
        Rect(340, -100, 40, 320),   # left
        Rect(620, -100, 40, 320),   # right
    ]


# =============================================================================
# Request fixtures
# =============================================================================

@pytest.fixture
def default_config() -> RoutingConfig:
    return RoutingConfig()


@pytest.fixture
def blocked_request(source_rect, target_rect, blocking_obstacle) -> LinkRequest:
    """Orthogonal route-around request whose simple path is blocked."""
    return LinkRequest(
        source=source_rect,
        target=target_rect,
        style=LinkStyle.ORTHOGONAL,
        route_around=True,
        obstacles=[blocking_obstacle],
    )
