"""Showcase examples for linkroute."""

from linkroute import Card, Link, render_to_svg


def side_by_side_example():
    """Orthogonal and free links between two cards in the same row."""
    cards = [
        Card("source", 0, 0),
        Card("target", 400, 0),
        Card("below", 400, 300),
    ]
    links = [
        Link("orthogonal", "source", "target", style="orthogonal"),
        Link("free", "source", "below"),
    ]
    render_to_svg(cards, links, filename="docs/side_by_side")


def route_around_example():
    """A card blocking the simple path, with and without route-around."""
    cards = [
        Card("source", 0, 0),
        Card("blocker", 250, 50, 100, 80),
        Card("target", 400, 0),
    ]
    render_to_svg(
        cards,
        [Link("plain", "source", "target", style="orthogonal")],
        filename="docs/route_around_off",
    )
    render_to_svg(
        cards,
        [Link("routed", "source", "target", style="orthogonal", route_around=True)],
        filename="docs/route_around_on",
        debug=True,
    )


def busy_canvas_example():
    """Several links weaving between cards on a busy canvas."""
    cards = [
        Card("plan", 0, 0),
        Card("build", 0, 300),
        Card("review", 300, 150),
        Card("ship", 700, 0),
        Card("monitor", 700, 300),
        Card("wall", 520, -60, 60, 480),
    ]
    links = [
        Link("l1", "plan", "ship", style="orthogonal", route_around=True),
        Link("l2", "build", "monitor", style="orthogonal", route_around=True),
        Link("l3", "plan", "review"),
        Link("l4", "build", "review"),
        Link("l5", "review", "monitor", style="orthogonal", route_around=True),
    ]
    render_to_svg(cards, links, filename="docs/busy_canvas", debug=True)


if __name__ == "__main__":
    import os

    os.makedirs("docs", exist_ok=True)

    print("Generating side-by-side example...")
    side_by_side_example()

    print("Generating route-around examples...")
    route_around_example()

    print("Generating busy canvas example...")
    busy_canvas_example()

    print("\nAll examples generated in docs/")
