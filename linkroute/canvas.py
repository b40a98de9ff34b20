"""Canvas-level helpers: cards, links and memoized routing of many links."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import LinkRequest, LinkStyle, Rect
from .obstacles import obstacles_for_link
from .router import DEFAULT_CONFIG, compute_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import RoutedLink
    from .pathfinding import RoutingConfig

logger = logging.getLogger(__name__)

CARD_WIDTH = 200
CARD_HEIGHT = 120


@dataclass
class Card:
    """A card on the canvas."""

    id: str
    x: float
    y: float
    width: float = CARD_WIDTH
    height: float = CARD_HEIGHT

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class Link:
    """A persisted link between two cards."""

    id: str
    source_id: str
    target_id: str
    style: LinkStyle = LinkStyle.FREE
    route_around: bool = False

    def __post_init__(self) -> None:
        self.style = LinkStyle.parse(self.style)


class LinkRouteCache:
    """Bounded LRU cache of routing results keyed on request and config."""

    def __init__(self, max_size: int = 512):
        self.max_size = max_size
        self._entries: OrderedDict[
            tuple[LinkRequest, RoutingConfig], RoutedLink | None
        ] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(
        self,
        request: LinkRequest,
        config: RoutingConfig | None = None,
        *,
        source_id: str = "source",
        target_id: str = "target",
    ) -> RoutedLink | None:
        """Return the cached route for request, computing it on a miss.

        Args:
            request: Link geometry, style and obstacles
            config: Routing configuration (defaults to DEFAULT_CONFIG)
            source_id: Source label used in log messages on a miss
            target_id: Target label used in log messages on a miss

        Returns:
            RoutedLink, or None if the link should not be drawn
        """
        key = (request, config or DEFAULT_CONFIG)
        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]

        self.misses += 1
        result = compute_path(
            request, key[1],
            source_id=source_id, target_id=target_id,
        )
        self._entries[key] = result
        if len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


def route_links(
    cards: Iterable[Card],
    links: Iterable[Link],
    cache: LinkRouteCache | None = None,
    config: RoutingConfig | None = None,
) -> dict[str, RoutedLink | None]:
    """Route every link between the given cards.

    Links whose source or target card is missing are skipped. All other
    cards act as obstacles for orthogonal links with route_around set.

    Args:
        cards: All cards on the canvas
        links: Links to route
        cache: Optional cache reused across calls
        config: Routing configuration

    Returns:
        Mapping of link id to RoutedLink, or None for links not to draw
    """
    card_by_id = {card.id: card for card in cards}
    all_rects = [card.rect for card in card_by_id.values()]
    results: dict[str, RoutedLink | None] = {}

    for link in links:
        source = card_by_id.get(link.source_id)
        target = card_by_id.get(link.target_id)
        if source is None or target is None:
            logger.debug("Skipping link %s with missing endpoint", link.id)
            continue

        # Obstacles only affect orthogonal links routed around them; leaving
        # them out elsewhere keeps cache keys stable when other cards move
        obstacles: tuple[Rect, ...] = ()
        if link.style == LinkStyle.ORTHOGONAL and link.route_around:
            obstacles = obstacles_for_link(all_rects, source.rect, target.rect)

        request = LinkRequest(
            source=source.rect,
            target=target.rect,
            style=link.style,
            route_around=link.route_around,
            obstacles=obstacles,
        )
        route = cache.get if cache is not None else compute_path
        results[link.id] = route(
            request, config,
            source_id=link.source_id, target_id=link.target_id,
        )

    return results
