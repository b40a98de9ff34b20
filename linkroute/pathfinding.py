"""Grid-based A* pathfinding for orthogonal link routing using NetworkX."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

import networkx as nx

from .geometry import rects_overlap
from .models import Rect
from .obstacles import DEFAULT_OBSTACLE_PADDING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from .models import Point

# Grid cell as (row, col)
Cell = tuple[int, int]
GridSearch = Callable[["RoutingGrid", Cell, Cell], "list[Cell] | None"]

DEFAULT_CELL_SIZE = 20.0
DEFAULT_MARGIN_CELLS = 5
DEFAULT_MAX_GRID_CELLS = 250_000

# Movement axes as (d_row, d_col)
_ORTHOGONAL_AXES: dict[str, Cell] = {"h": (0, 1), "v": (1, 0)}
_DIAGONAL_AXES: dict[str, Cell] = {"d1": (1, 1), "d2": (1, -1)}

_START = "start"
_END = "end"


class RoutingError(Exception):
    """Raised when the grid search cannot be set up."""


class GridTooLargeError(RoutingError):
    """Raised when the search area exceeds RoutingConfig.max_grid_cells."""


@dataclass(frozen=True)
class RoutingConfig:
    """Configuration for obstacle-aware link routing."""

    # Clearance kept between a routed line and any obstacle
    padding: float = DEFAULT_OBSTACLE_PADDING
    grid_spacing: float = DEFAULT_CELL_SIZE
    # Extra cells around the bounding box so routes can go around edge obstacles
    margin_cells: int = DEFAULT_MARGIN_CELLS
    # Diagonal moves break orthogonal output; only for custom callers
    allow_diagonal: bool = False
    turn_penalty: float = 1.0  # Added cost per direction change (prefer straight)
    max_grid_cells: int = DEFAULT_MAX_GRID_CELLS
    # Grid search implementation, defaults to find_grid_path
    search: GridSearch | None = None


def simple_orthogonal_path(start: Point, end: Point) -> list[Point]:
    """Build the 3-segment horizontal-vertical-horizontal path between anchors."""
    sx, sy = start
    ex, ey = end
    mid_x = (sx + ex) / 2
    return [(sx, sy), (mid_x, sy), (mid_x, ey), (ex, ey)]


class RoutingGrid:
    """Walkability grid covering the area around one link."""

    def __init__(
        self,
        origin: Point,
        rows: int,
        cols: int,
        grid_spacing: float = DEFAULT_CELL_SIZE,
        allow_diagonal: bool = False,
        turn_penalty: float = 1.0,
    ):
        """Initialize the grid.

        Args:
            origin: World coordinates of the center of cell (0, 0)
            rows: Number of grid rows
            cols: Number of grid columns
            grid_spacing: Cell size in world units
            allow_diagonal: Allow diagonal moves (without corner cutting)
            turn_penalty: Cost added for every change of direction
        """
        self.origin = origin
        self.rows = rows
        self.cols = cols
        self.grid_spacing = grid_spacing
        self.allow_diagonal = allow_diagonal
        self.turn_penalty = turn_penalty
        self.blocked: set[Cell] = set()

    @classmethod
    def generate(
        cls,
        start: Point,
        end: Point,
        obstacles: Sequence[Rect],
        config: RoutingConfig,
    ) -> RoutingGrid:
        """Build the grid for one link and mark padded obstacles.

        Args:
            start: Source anchor
            end: Target anchor
            obstacles: Obstacle rectangles (unpadded)
            config: Routing configuration

        Returns:
            Grid with start and end cells guaranteed walkable

        Raises:
            GridTooLargeError: If the search area is too large, even when
                restricted to the obstacles near the anchors
        """
        spacing = config.grid_spacing
        if not spacing > 0:
            raise RoutingError(f"Grid spacing must be positive, got {spacing}")

        padded = [obstacle.inflate(config.padding) for obstacle in obstacles]
        margin = config.margin_cells * spacing
        bounds = cls._compute_bounds(start, end, padded, margin)
        rows, cols = cls._grid_shape(bounds, spacing)

        if rows * cols > config.max_grid_cells:
            # Retry with bounds sized by the obstacles around the anchors;
            # the rest are still blocked where they fall inside the grid
            nearby = cls._nearby_obstacles(start, end, padded, margin)
            if len(nearby) < len(padded):
                bounds = cls._compute_bounds(start, end, nearby, margin)
                rows, cols = cls._grid_shape(bounds, spacing)

        if rows * cols > config.max_grid_cells:
            raise GridTooLargeError(
                f"Routing grid of {rows}x{cols} cells exceeds limit of "
                f"{config.max_grid_cells}"
            )

        min_x, min_y = bounds[0], bounds[1]
        grid = cls(
            (min_x, min_y),
            rows,
            cols,
            grid_spacing=spacing,
            allow_diagonal=config.allow_diagonal,
            turn_penalty=config.turn_penalty,
        )
        # Every obstacle is marked; those outside the grid clamp to no cells
        grid._mark_obstacles(padded)

        # Terminals always stay reachable candidates
        grid.blocked.discard(grid.cell_at(*start))
        grid.blocked.discard(grid.cell_at(*end))

        return grid

    @staticmethod
    def _compute_bounds(
        start: Point,
        end: Point,
        padded: Sequence[Rect],
        margin: float,
    ) -> tuple[float, float, float, float]:
        """Compute (min_x, min_y, max_x, max_y) covering terminals and obstacles."""
        min_x = min(start[0], end[0])
        min_y = min(start[1], end[1])
        max_x = max(start[0], end[0])
        max_y = max(start[1], end[1])

        for rect in padded:
            min_x = min(min_x, rect.x)
            min_y = min(min_y, rect.y)
            max_x = max(max_x, rect.right)
            max_y = max(max_y, rect.bottom)

        return (min_x - margin, min_y - margin, max_x + margin, max_y + margin)

    @staticmethod
    def _grid_shape(
        bounds: tuple[float, float, float, float],
        spacing: float,
    ) -> tuple[int, int]:
        """Get (rows, cols) needed to cover bounds."""
        min_x, min_y, max_x, max_y = bounds
        cols = math.ceil((max_x - min_x) / spacing) + 1
        rows = math.ceil((max_y - min_y) / spacing) + 1
        return rows, cols

    @staticmethod
    def _nearby_obstacles(
        start: Point,
        end: Point,
        padded: Sequence[Rect],
        margin: float,
    ) -> list[Rect]:
        """Padded obstacles overlapping the anchor box grown by margin.

        The simple path never leaves the box spanned by its anchors, so this
        window also covers every obstacle that blocks it.
        """
        min_x = min(start[0], end[0]) - margin
        min_y = min(start[1], end[1]) - margin
        window = Rect(
            min_x,
            min_y,
            max(start[0], end[0]) + margin - min_x,
            max(start[1], end[1]) + margin - min_y,
        )
        return [rect for rect in padded if rects_overlap(rect, window)]

    def _mark_obstacles(self, padded: Sequence[Rect]) -> None:
        """Block every cell whose footprint overlaps a padded obstacle."""
        ox, oy = self.origin
        spacing = self.grid_spacing

        for rect in padded:
            # Candidate range, one cell wider than needed, verified per cell
            col_lo = max(0, math.floor((rect.x - ox) / spacing) - 1)
            col_hi = min(self.cols - 1, math.ceil((rect.right - ox) / spacing) + 1)
            row_lo = max(0, math.floor((rect.y - oy) / spacing) - 1)
            row_hi = min(self.rows - 1, math.ceil((rect.bottom - oy) / spacing) + 1)

            for row in range(row_lo, row_hi + 1):
                for col in range(col_lo, col_hi + 1):
                    if rects_overlap(self.cell_rect((row, col)), rect):
                        self.blocked.add((row, col))

    def cell_at(self, x: float, y: float) -> Cell:
        """Get the grid cell nearest to world coordinates."""
        ox, oy = self.origin
        col = round((x - ox) / self.grid_spacing)
        row = round((y - oy) / self.grid_spacing)
        return (
            min(max(row, 0), self.rows - 1),
            min(max(col, 0), self.cols - 1),
        )

    def to_world(self, cell: Cell) -> Point:
        """Get world coordinates of a cell center."""
        row, col = cell
        ox, oy = self.origin
        return (ox + col * self.grid_spacing, oy + row * self.grid_spacing)

    def cell_rect(self, cell: Cell) -> Rect:
        """Get the world-space footprint of a cell."""
        x, y = self.to_world(cell)
        half = self.grid_spacing / 2
        return Rect(x - half, y - half, self.grid_spacing, self.grid_spacing)

    def in_bounds(self, cell: Cell) -> bool:
        row, col = cell
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_walkable(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and cell not in self.blocked

    def _axes(self) -> dict[str, Cell]:
        if self.allow_diagonal:
            return {**_ORTHOGONAL_AXES, **_DIAGONAL_AXES}
        return _ORTHOGONAL_AXES

    def _can_move(self, cell: Cell, d_row: int, d_col: int) -> bool:
        """Check a single step, refusing to squeeze between diagonal obstacles."""
        row, col = cell
        if not self.is_walkable((row + d_row, col + d_col)):
            return False
        if d_row and d_col:
            return (
                self.is_walkable((row + d_row, col))
                and self.is_walkable((row, col + d_col))
            )
        return True

    def walkable_cells(self) -> Iterator[Cell]:
        for row in range(self.rows):
            for col in range(self.cols):
                if (row, col) not in self.blocked:
                    yield (row, col)

    def build_graph(self) -> nx.Graph:
        """Create the NetworkX search graph.

        Every walkable cell gets one graph node per movement axis. Moving
        along an axis costs the distance travelled; switching axis inside
        a cell costs turn_penalty, so among equally long routes the one
        with fewer corners wins.
        """
        graph = nx.Graph()
        axes = self._axes()
        axis_names = list(axes)

        for cell in self.walkable_cells():
            row, col = cell
            for name in axis_names:
                graph.add_node((row, col, name))

            for i, name in enumerate(axis_names):
                for other in axis_names[i + 1:]:
                    graph.add_edge(
                        (row, col, name), (row, col, other),
                        weight=self.turn_penalty,
                    )

            for name, (d_row, d_col) in axes.items():
                if self._can_move(cell, d_row, d_col):
                    weight = self.grid_spacing * math.hypot(d_row, d_col)
                    graph.add_edge(
                        (row, col, name), (row + d_row, col + d_col, name),
                        weight=weight,
                    )

        return graph

    def heuristic_distance(self, a: Cell, b: Cell) -> float:
        """Admissible distance estimate between two cells in world units."""
        d_row = abs(a[0] - b[0])
        d_col = abs(a[1] - b[1])
        if self.allow_diagonal:
            straight = abs(d_row - d_col)
            return self.grid_spacing * (straight + math.sqrt(2) * min(d_row, d_col))
        return self.grid_spacing * (d_row + d_col)


def find_grid_path(
    grid: RoutingGrid,
    start: Cell,
    end: Cell,
) -> list[Cell] | None:
    """Find a cell path using A* with NetworkX.

    Args:
        grid: Walkability grid
        start: Grid coordinates (row, col) of start
        end: Grid coordinates (row, col) of end

    Returns:
        List of cells from start to end, or None if no path
    """
    if not grid.is_walkable(start) or not grid.is_walkable(end):
        return None

    if start == end:
        return [start]

    graph = grid.build_graph()
    axes = list(grid._axes())

    # Virtual terminals let the route leave and enter along any axis
    for name in axes:
        graph.add_edge(_START, (start[0], start[1], name), weight=0.0)
        graph.add_edge((end[0], end[1], name), _END, weight=0.0)

    def heuristic(a: object, b: object) -> float:
        if a in (_START, _END):
            return 0.0
        return grid.heuristic_distance((a[0], a[1]), end)  # type: ignore[index]

    try:
        path = nx.astar_path(graph, _START, _END, heuristic=heuristic, weight="weight")
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return None

    cells: list[Cell] = []
    for node in path[1:-1]:
        cell = (node[0], node[1])
        if not cells or cells[-1] != cell:
            cells.append(cell)
    return cells


def _direction(a: Point, b: Point) -> tuple[int, int]:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return ((dx > 0) - (dx < 0), (dy > 0) - (dy < 0))


def simplify_collinear(points: Sequence[Point]) -> list[Point]:
    """Merge runs of points that keep going in the same direction.

    Consecutive duplicates are dropped; the first and last points are kept.
    """
    if len(points) <= 2:
        return list(points)

    deduped = [points[0]]
    for point in points[1:]:
        if point != deduped[-1]:
            deduped.append(point)
    if len(deduped) == 1:
        return [points[0], points[-1]]

    result = [deduped[0]]
    for i in range(1, len(deduped) - 1):
        if _direction(result[-1], deduped[i]) != _direction(deduped[i], deduped[i + 1]):
            result.append(deduped[i])
    result.append(deduped[-1])
    return result


def attach_anchors(points: Sequence[Point], start: Point, end: Point) -> list[Point]:
    """Replace grid endpoints with the exact anchors, keeping segments axis-aligned.

    Cell centers can be up to half a cell away from the anchors. The corner
    next to each end is shifted along with it, so a horizontal first or
    last segment stays horizontal and a vertical one stays vertical.
    """
    result = list(points)
    if len(result) < 2:
        return [start, end]

    if len(result) == 2:
        (ax, ay), (bx, by) = result
        if ay == by:
            # Jog onto the grid row at both anchors
            return simplify_collinear([start, (start[0], ay), (end[0], ay), end])
        if ax == bx:
            return simplify_collinear([start, (ax, start[1]), (ax, end[1]), end])
        return [start, end]

    first, second = result[0], result[1]
    if first[1] == second[1]:
        result[1] = (second[0], start[1])
    elif first[0] == second[0]:
        result[1] = (start[0], second[1])
    result[0] = start

    last, before_last = result[-1], result[-2]
    if last[1] == before_last[1]:
        result[-2] = (before_last[0], end[1])
    elif last[0] == before_last[0]:
        result[-2] = (end[0], before_last[1])
    result[-1] = end

    return simplify_collinear(result)


def route_around_obstacles(
    start: Point,
    end: Point,
    obstacles: Sequence[Rect],
    config: RoutingConfig,
) -> list[Point] | None:
    """Route between two anchors on a grid, avoiding padded obstacles.

    Args:
        start: Source anchor
        end: Target anchor
        obstacles: Obstacle rectangles (unpadded)
        config: Routing configuration

    Returns:
        Simplified world-space path from start to end, or None if no route
    """
    grid = RoutingGrid.generate(start, end, obstacles, config)
    search = config.search or find_grid_path
    cells = search(grid, grid.cell_at(*start), grid.cell_at(*end))
    if not cells or len(cells) < 2:
        return None

    points = simplify_collinear([grid.to_world(cell) for cell in cells])
    return attach_anchors(points, start, end)


def count_turns(points: Sequence[Point]) -> int:
    """Count direction changes along a path."""
    simplified = simplify_collinear(points)
    return max(0, len(simplified) - 2)
