"""linkroute - Link routing between cards on an infinite canvas.

Example usage:
    from linkroute import LinkRequest, LinkStyle, Rect, compute_path

    request = LinkRequest(
        source=Rect(0, 0, 200, 120),
        target=Rect(400, 0, 200, 120),
        style=LinkStyle.ORTHOGONAL,
        route_around=True,
        obstacles=[Rect(250, 50, 100, 80)],
    )
    routed = compute_path(request)
    if routed is not None:
        print(routed.flat())
"""

from .anchors import (
    free_anchors,
    orthogonal_anchors,
    project_anchor,
)
from .canvas import (
    Card,
    Link,
    LinkRouteCache,
    route_links,
)
from .debug import (
    RoutingDebugRecorder,
    RoutingDebugSession,
    RoutingStep,
)
from .geometry import (
    point_inside_rect,
    rects_overlap,
    segments_intersect,
    side_midpoint,
    squared_distance,
)
from .models import (
    LinkRequest,
    LinkStyle,
    Rect,
    RoutedLink,
    Side,
)
from .obstacles import (
    DEFAULT_OBSTACLE_PADDING,
    obstacles_for_link,
    path_intersects_obstacles,
)
from .pathfinding import (
    GridTooLargeError,
    RoutingConfig,
    RoutingError,
    RoutingGrid,
    find_grid_path,
    simple_orthogonal_path,
)
from .renderer import (
    DEFAULT_THEME,
    LinkRenderer,
    Theme,
    render_to_svg,
)
from .router import compute_path

__version__ = "0.1.0"

__all__ = [
    # Routing
    "compute_path",
    "RoutingConfig",
    "RoutingGrid",
    "find_grid_path",
    "simple_orthogonal_path",
    "RoutingError",
    "GridTooLargeError",
    # Models
    "Rect",
    "Side",
    "LinkStyle",
    "LinkRequest",
    "RoutedLink",
    # Geometry
    "rects_overlap",
    "side_midpoint",
    "squared_distance",
    "point_inside_rect",
    "segments_intersect",
    # Anchors and obstacles
    "orthogonal_anchors",
    "free_anchors",
    "project_anchor",
    "obstacles_for_link",
    "path_intersects_obstacles",
    "DEFAULT_OBSTACLE_PADDING",
    # Canvas
    "Card",
    "Link",
    "LinkRouteCache",
    "route_links",
    # Debugging
    "RoutingDebugRecorder",
    "RoutingDebugSession",
    "RoutingStep",
    # Rendering
    "render_to_svg",
    "LinkRenderer",
    "Theme",
    "DEFAULT_THEME",
    # Version
    "__version__",
]
