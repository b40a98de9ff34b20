"""Tests for link path selection.

Tests cover:
- Orthogonal anchors and simple paths
- Obstacle avoidance with route-around
- Fallback to the simple path
- Free-style links
- Recording of routing decisions
"""

import logging

import pytest

from linkroute.debug import RoutingDebugRecorder
from linkroute.models import LinkRequest, LinkStyle, Rect
from linkroute.obstacles import path_intersects_obstacles
from linkroute.pathfinding import RoutingConfig, simple_orthogonal_path
from linkroute.router import compute_path


def assert_orthogonal(points):
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        assert x1 == x2 or y1 == y2, f"Diagonal segment {(x1, y1)} -> {(x2, y2)}"


# =============================================================================
# Orthogonal style
# =============================================================================

class TestOrthogonalSimplePath:
    def test_side_by_side(self, source_rect, target_rect):
        routed = compute_path(LinkRequest(
            source=source_rect,
            target=target_rect,
            style=LinkStyle.ORTHOGONAL,
        ))
        assert routed.flat() == [200, 60, 300, 60, 300, 60, 400, 60]
        assert routed.strategy == "simple"

    def test_route_around_disabled_keeps_simple_path(
        self, source_rect, target_rect, blocking_obstacle,
    ):
        routed = compute_path(LinkRequest(
            source=source_rect,
            target=target_rect,
            style=LinkStyle.ORTHOGONAL,
            route_around=False,
            obstacles=[blocking_obstacle],
        ))
        assert routed.points == simple_orthogonal_path((200, 60), (400, 60))

    def test_no_obstacles_keeps_simple_path(self, source_rect, target_rect):
        for obstacles in ([], None):
            routed = compute_path(LinkRequest(
                source=source_rect,
                target=target_rect,
                style=LinkStyle.ORTHOGONAL,
                route_around=True,
                obstacles=obstacles,
            ))
            assert routed.points == simple_orthogonal_path((200, 60), (400, 60))
            assert routed.strategy == "simple"

    def test_clear_obstacle_keeps_simple_path(self, source_rect, target_rect):
        routed = compute_path(LinkRequest(
            source=source_rect,
            target=target_rect,
            style=LinkStyle.ORTHOGONAL,
            route_around=True,
            obstacles=[Rect(250, 400, 100, 80)],
        ))
        assert routed.strategy == "simple"
        assert len(routed.points) == 4

    def test_stacked_cards_leave_source_horizontally(self):
        routed = compute_path(LinkRequest(
            source=Rect(100, 0, 200, 120),
            target=Rect(100, 200, 200, 120),
            style=LinkStyle.ORTHOGONAL,
        ))
        points = routed.points
        assert points[0] == (300, 60)
        assert points[1][1] == 60
        assert points[1][0] != 300
        assert points[-1] == (100, 260)

    def test_arrow_segment_is_final_approach(self):
        routed = compute_path(LinkRequest(
            source=Rect(0, 0, 200, 120),
            target=Rect(400, 200, 200, 120),
            style="orthogonal",
        ))
        assert routed.arrow_segment == [(300, 260), (400, 260)]
        assert routed.arrow_segment == routed.points[-2:]

    def test_overlapping_cards_still_routed(self):
        routed = compute_path(LinkRequest(
            source=Rect(0, 0, 200, 120),
            target=Rect(150, 50, 200, 120),
            style=LinkStyle.ORTHOGONAL,
        ))
        assert routed is not None
        assert routed.points[0] == (200, 60)
        assert routed.points[-1] == (150, 110)


class TestOrthogonalRouteAround:
    def test_routes_around_blocking_obstacle(self, blocked_request, blocking_obstacle):
        routed = compute_path(blocked_request)

        assert routed.strategy == "grid"
        assert len(routed.flat()) >= 8
        assert routed.points[0] == (200, 60)
        assert routed.points[-1] == (400, 60)
        assert_orthogonal(routed.points)
        assert not path_intersects_obstacles(routed.points, [blocking_obstacle])

    def test_arrow_segment_follows_route(self, blocked_request):
        routed = compute_path(blocked_request)
        assert routed.arrow_segment == routed.points[-2:]
        # Last leg comes down onto the target anchor
        (fx, fy), (tx, ty) = routed.arrow_segment
        assert fx == tx
        assert fy < ty

    @pytest.mark.parametrize("target,obstacles", [
        (Rect(400, 0, 200, 120), [Rect(250, 50, 100, 80)]),
        (Rect(500, 200, 200, 120), [Rect(260, -20, 100, 100), Rect(300, 150, 60, 200)]),
        (Rect(-400, 300, 200, 120), [Rect(-150, 150, 100, 100)]),
        (Rect(700, 0, 200, 120), [Rect(300, -100, 80, 320), Rect(480, -60, 60, 220)]),
    ])
    def test_grid_routes_keep_invariants(self, source_rect, target, obstacles, default_config):
        request = LinkRequest(
            source=source_rect,
            target=target,
            style=LinkStyle.ORTHOGONAL,
            route_around=True,
            obstacles=obstacles,
        )
        routed = compute_path(request)

        assert routed.strategy == "grid"
        assert routed.points[0] == (source_rect.right, source_rect.y + source_rect.height / 2)
        assert routed.points[-1] == (target.x, target.y + target.height / 2)
        assert_orthogonal(routed.points)
        # Clearance holds up to one grid cell of discretization
        tolerance = default_config.padding - default_config.grid_spacing
        assert not path_intersects_obstacles(routed.points, obstacles, padding=tolerance)

    def test_deterministic(self, blocked_request):
        first = compute_path(blocked_request)
        second = compute_path(blocked_request)
        assert first == second
        assert first.flat() == second.flat()


class TestFallback:
    def test_enclosed_target_falls_back(self, source_rect, target_rect, enclosing_ring):
        routed = compute_path(LinkRequest(
            source=source_rect,
            target=target_rect,
            style=LinkStyle.ORTHOGONAL,
            route_around=True,
            obstacles=enclosing_ring,
        ))
        assert routed.strategy == "fallback"
        assert routed.points == simple_orthogonal_path((200, 60), (400, 60))

    def test_search_error_falls_back(self, blocked_request, caplog):
        def broken_search(grid, start, end):
            raise RuntimeError("search exploded")

        config = RoutingConfig(search=broken_search)
        with caplog.at_level(logging.WARNING, logger="linkroute.router"):
            routed = compute_path(blocked_request, config)

        assert routed.strategy == "fallback"
        assert routed.points == simple_orthogonal_path((200, 60), (400, 60))
        assert "search exploded" in caplog.text

    def test_oversized_grid_falls_back(self, blocked_request):
        routed = compute_path(blocked_request, RoutingConfig(max_grid_cells=1))
        assert routed.strategy == "fallback"
        assert len(routed.points) == 4

    def test_pathological_coordinates_fall_back(self, source_rect, target_rect):
        routed = compute_path(LinkRequest(
            source=source_rect,
            target=target_rect,
            style=LinkStyle.ORTHOGONAL,
            route_around=True,
            obstacles=[Rect(250, 50, 100, 80), Rect(float("inf"), 0, 10, 10)],
        ))
        assert routed.strategy == "fallback"
        assert routed.points[0] == (200, 60)
        assert routed.points[-1] == (400, 60)

    def test_distant_obstacle_does_not_disable_routing(self, source_rect, target_rect):
        obstacles = [Rect(250, 50, 100, 80), Rect(1e300, 1e300, 10, 10)]
        routed = compute_path(LinkRequest(
            source=source_rect,
            target=target_rect,
            style=LinkStyle.ORTHOGONAL,
            route_around=True,
            obstacles=obstacles,
        ))
        assert routed.strategy == "grid"
        assert not path_intersects_obstacles(routed.points, obstacles, padding=0)


# =============================================================================
# Free style
# =============================================================================

class TestFreeStyle:
    def test_direct_line(self, source_rect, target_rect):
        routed = compute_path(LinkRequest(source=source_rect, target=target_rect))
        assert routed.flat() == [200, 60, 400, 60]
        assert routed.strategy == "direct"
        assert routed.arrow_segment == routed.points

    def test_overlap_is_not_drawn(self):
        routed = compute_path(LinkRequest(
            source=Rect(0, 0, 200, 120),
            target=Rect(150, 50, 200, 120),
            style=LinkStyle.FREE,
        ))
        assert routed is None

    def test_ignores_obstacles(self, source_rect, target_rect, blocking_obstacle):
        plain = compute_path(LinkRequest(source=source_rect, target=target_rect))
        with_obstacles = compute_path(LinkRequest(
            source=source_rect,
            target=target_rect,
            style="free",
            route_around=True,
            obstacles=[blocking_obstacle],
        ))
        assert with_obstacles.points == plain.points


# =============================================================================
# Recording
# =============================================================================

class TestRecording:
    def test_grid_route_is_recorded(self, blocked_request):
        recorder = RoutingDebugRecorder(enabled=True)
        routed = compute_path(blocked_request, recorder=recorder, source_id="a", target_id="b")

        session = recorder.latest_session()
        assert session.source_id == "a"
        assert session.target_id == "b"
        assert session.start_point == (200, 60)
        assert session.final_strategy == "grid"
        assert session.final_path == routed.points
        assert [step.decision for step in session.steps] == ["Blocked", "Accepted"]
        assert session.steps[0].rejected

    def test_free_route_is_recorded(self, source_rect, target_rect):
        recorder = RoutingDebugRecorder(enabled=True)
        compute_path(LinkRequest(source=source_rect, target=target_rect), recorder=recorder)
        assert recorder.latest_session().final_strategy == "direct"

    def test_disabled_recorder_stays_empty(self, blocked_request):
        recorder = RoutingDebugRecorder()
        compute_path(blocked_request, recorder=recorder)
        assert recorder.sessions == []
