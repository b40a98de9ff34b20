"""SVG renderer for routed links using drawsvg."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import drawsvg as draw

from .canvas import route_links
from .router import DEFAULT_CONFIG

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .canvas import Card, Link
    from .models import RoutedLink
    from .pathfinding import RoutingConfig


class Theme:
    """Color theme for rendered canvases."""

    def __init__(
        self,
        background: str = "#ffffff",
        card_fill: str = "#ffffff",
        card_stroke: str = "#cccccc",
        text_color: str = "#1f2937",
        link_color: str = "#6b7280",
        padding_fill: str = "rgba(255, 100, 100, 0.2)",
        padding_stroke: str = "rgba(255, 0, 0, 0.4)",
        obstacle_fill: str = "rgba(255, 50, 50, 0.3)",
        obstacle_stroke: str = "rgba(200, 0, 0, 0.6)",
    ):
        self.background = background
        self.card_fill = card_fill
        self.card_stroke = card_stroke
        self.text_color = text_color
        self.link_color = link_color
        self.padding_fill = padding_fill
        self.padding_stroke = padding_stroke
        self.obstacle_fill = obstacle_fill
        self.obstacle_stroke = obstacle_stroke


DEFAULT_THEME = Theme()


class LinkRenderer:
    """Renders cards and their routed links to SVG."""

    def __init__(
        self,
        theme: Theme | None = None,
        config: RoutingConfig | None = None,
        margin: float = 40,
        arrow_size: float = 10,
    ):
        self.theme = theme or DEFAULT_THEME
        self.config = config or DEFAULT_CONFIG
        self.margin = margin
        self.arrow_size = arrow_size

    def render(
        self,
        cards: Sequence[Card],
        links: Sequence[Link],
        debug: bool = False,
    ) -> draw.Drawing:
        """Render cards and links to an SVG Drawing object.

        Args:
            cards: All cards on the canvas
            links: Links between the cards
            debug: Draw the padded no-go zone around every card
        """
        routes = route_links(cards, links, config=self.config)

        min_x, min_y, max_x, max_y = self._compute_bounds(cards, routes.values())
        width = max_x - min_x
        height = max_y - min_y

        d = draw.Drawing(width, height, origin=(min_x, min_y))
        d.append(
            draw.Rectangle(
                min_x, min_y, width, height,
                fill=self.theme.background,
            )
        )

        if debug:
            self._render_debug_overlay(d, cards)

        # Links below cards, as on the canvas
        for link in links:
            routed = routes.get(link.id)
            if routed is not None:
                self._render_link(d, routed)

        for card in cards:
            self._render_card(d, card)

        return d

    def _compute_bounds(
        self,
        cards: Sequence[Card],
        routes: Iterable[RoutedLink | None],
    ) -> tuple[float, float, float, float]:
        xs: list[float] = []
        ys: list[float] = []
        for card in cards:
            xs.extend((card.x, card.x + card.width))
            ys.extend((card.y, card.y + card.height))
        for routed in routes:
            if routed is None:
                continue
            for x, y in routed.points:
                xs.append(x)
                ys.append(y)

        if not xs:
            return (0, 0, 200, 200)

        margin = self.margin + self.config.padding
        return (min(xs) - margin, min(ys) - margin, max(xs) + margin, max(ys) + margin)

    def _render_card(self, d: draw.Drawing, card: Card) -> None:
        d.append(
            draw.Rectangle(
                card.x, card.y, card.width, card.height,
                fill=self.theme.card_fill,
                stroke=self.theme.card_stroke,
                stroke_width=2,
                rx=10, ry=10,
            )
        )
        d.append(
            draw.Text(
                card.id,
                14,
                card.x + card.width / 2, card.y + card.height / 2,
                fill=self.theme.text_color,
                font_family="Arial",
                text_anchor="middle",
                dominant_baseline="middle",
            )
        )

    def _render_debug_overlay(self, d: draw.Drawing, cards: Sequence[Card]) -> None:
        """Draw the padded area routing keeps clear of, plus the card itself."""
        padding = self.config.padding
        for card in cards:
            d.append(
                draw.Rectangle(
                    card.x - padding, card.y - padding,
                    card.width + padding * 2, card.height + padding * 2,
                    fill=self.theme.padding_fill,
                    stroke=self.theme.padding_stroke,
                    stroke_width=1,
                )
            )
            d.append(
                draw.Rectangle(
                    card.x, card.y, card.width, card.height,
                    fill=self.theme.obstacle_fill,
                    stroke=self.theme.obstacle_stroke,
                    stroke_width=2,
                )
            )

    def _render_link(self, d: draw.Drawing, routed: RoutedLink) -> None:
        points = routed.points
        sx, sy = points[0]

        path = draw.Path(
            stroke=self.theme.link_color,
            stroke_width=2,
            fill="none",
        )
        path.M(sx, sy)
        for px, py in points[1:]:
            path.L(px, py)
        d.append(path)

        # Arrowhead follows the final approach, not the straight line to the anchor
        (fx, fy), (tx, ty) = routed.arrow_segment
        angle = math.atan2(ty - fy, tx - fx)
        self._draw_arrowhead(d, tx, ty, angle, self.arrow_size)

    def _draw_arrowhead(
        self,
        d: draw.Drawing,
        x: float,
        y: float,
        angle: float,
        size: float,
    ) -> None:
        """Draw an arrowhead at the given position and angle."""
        p1_x = x - size * math.cos(angle - math.pi / 6)
        p1_y = y - size * math.sin(angle - math.pi / 6)
        p2_x = x - size * math.cos(angle + math.pi / 6)
        p2_y = y - size * math.sin(angle + math.pi / 6)

        d.append(
            draw.Lines(
                x, y,
                p1_x, p1_y,
                p2_x, p2_y,
                x, y,
                fill=self.theme.link_color,
                stroke="none",
            )
        )


def render_to_svg(
    cards: Sequence[Card],
    links: Sequence[Link],
    filename: str | None = None,
    debug: bool = False,
) -> str:
    """Render cards and links to SVG.

    Args:
        cards: All cards on the canvas
        links: Links between the cards
        filename: Optional filename to save to (without extension)
        debug: Draw padded obstacle zones

    Returns:
        SVG content as string
    """
    renderer = LinkRenderer()
    drawing = renderer.render(cards, links, debug=debug)

    if filename:
        drawing.save_svg(f"{filename}.svg")

    return drawing.as_svg()
