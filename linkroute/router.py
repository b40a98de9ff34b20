"""Link path selection: picks and runs the routing strategy for a link."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .anchors import free_anchors, orthogonal_anchors
from .models import LinkStyle, RoutedLink
from .obstacles import path_intersects_obstacles
from .pathfinding import RoutingConfig, route_around_obstacles, simple_orthogonal_path

if TYPE_CHECKING:
    from .debug import RoutingDebugRecorder
    from .models import LinkRequest, Point

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = RoutingConfig()


def compute_path(
    request: LinkRequest,
    config: RoutingConfig | None = None,
    recorder: RoutingDebugRecorder | None = None,
    *,
    source_id: str = "source",
    target_id: str = "target",
) -> RoutedLink | None:
    """Compute the drawable path for a link.

    The result only depends on the arguments, so callers can memoize it
    keyed on the request.

    Args:
        request: Link geometry, style and obstacles
        config: Routing configuration (defaults to DEFAULT_CONFIG)
        recorder: Optional recorder for routing decisions
        source_id: Source label used in recorded sessions
        target_id: Target label used in recorded sessions

    Returns:
        RoutedLink, or None if the link should not be drawn
    """
    config = config or DEFAULT_CONFIG

    if request.style == LinkStyle.FREE:
        return _route_free(request, recorder, source_id, target_id)
    return _route_orthogonal(request, config, recorder, source_id, target_id)


def _finish(
    points: list[Point],
    strategy: str,
    recorder: RoutingDebugRecorder | None,
) -> RoutedLink:
    if recorder is not None:
        recorder.end_session(points, strategy)
    return RoutedLink(points=points, arrow_segment=points[-2:], strategy=strategy)


def _route_free(
    request: LinkRequest,
    recorder: RoutingDebugRecorder | None,
    source_id: str,
    target_id: str,
) -> RoutedLink | None:
    """Direct line between the closest facing sides; obstacles are ignored."""
    anchors = free_anchors(request.source, request.target)
    if anchors is None:
        logger.debug("Cards overlap, free link %s -> %s not drawn", source_id, target_id)
        return None

    start, end = anchors
    if recorder is not None:
        recorder.start_session(source_id, target_id, start, end, request.obstacles)
        recorder.add_step("Free style", "Direct line between closest sides", [start, end])
    return _finish([start, end], "direct", recorder)


def _route_orthogonal(
    request: LinkRequest,
    config: RoutingConfig,
    recorder: RoutingDebugRecorder | None,
    source_id: str,
    target_id: str,
) -> RoutedLink:
    """Simple three-segment path, or a grid route when it is blocked."""
    start, end = orthogonal_anchors(request.source, request.target)
    obstacles = request.obstacles
    simple = simple_orthogonal_path(start, end)

    if recorder is not None:
        recorder.start_session(source_id, target_id, start, end, obstacles)

    if not request.route_around or not obstacles:
        if recorder is not None:
            reason = "route around disabled" if not request.route_around else "no obstacles"
            recorder.add_step("Simple path", f"Accepted, {reason}", simple)
        return _finish(simple, "simple", recorder)

    if not path_intersects_obstacles(simple, obstacles, config.padding):
        if recorder is not None:
            recorder.add_step("Simple path", "Accepted, clear of obstacles", simple)
        return _finish(simple, "simple", recorder)

    if recorder is not None:
        recorder.add_step(
            "Simple path", "Blocked", simple,
            rejected=True, reason="intersects padded obstacle",
        )

    try:
        routed = route_around_obstacles(start, end, obstacles, config)
    except Exception as e:
        logger.warning(
            "Grid search failed for %s -> %s, using simple path: %s",
            source_id, target_id, e,
        )
        if recorder is not None:
            recorder.add_step("Grid search", "Failed", rejected=True, reason=str(e))
        return _finish(simple, "fallback", recorder)

    if routed is None:
        logger.debug("No grid route for %s -> %s, using simple path", source_id, target_id)
        if recorder is not None:
            recorder.add_step("Grid search", "No route found", rejected=True, reason="exhausted")
        return _finish(simple, "fallback", recorder)

    if recorder is not None:
        recorder.add_step("Grid search", "Accepted", routed)
    return _finish(routed, "grid", recorder)
