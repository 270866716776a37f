"""Render pass: paints links, then nodes, from the current graph state."""

import math
from dataclasses import dataclass, field
from typing import Any, Protocol

from brainmap.graph.geometry import CanvasBounds, Geometry
from brainmap.graph.models import Link, WordNode
from brainmap.graph.store import GraphStore

LINK_COLOR = "#999"
NODE_COLOR = "#000"
LABEL_COLOR = "#fff"

FOCAL_LINK_WIDTH = 3.0
LINK_WIDTH = 1.5

ARROW_LENGTH = 12.0
ARROW_SPREAD = 0.3  # Half-angle of the arrow head, radians

LOADING_DOT_FRAMES = 18  # ~300 ms per dot at 60 fps


class Surface(Protocol):
    """2D drawing primitives."""

    def clear(self, width: float, height: float) -> None:
        ...

    def line(self, x1: float, y1: float, x2: float, y2: float, width: float, color: str) -> None:
        ...

    def polygon(self, points: list[tuple[float, float]], color: str) -> None:
        ...

    def circle(self, x: float, y: float, radius: float, color: str) -> None:
        ...

    def text(self, x: float, y: float, text: str, font_size: float, color: str) -> None:
        ...


@dataclass
class DrawCommand:
    """One recorded drawing call."""

    op: str
    args: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"op": self.op, **self.args}


class RecordingSurface:
    """Surface that records draw calls, e.g. to ship frames to a browser."""

    def __init__(self) -> None:
        self.commands: list[DrawCommand] = []

    def _record(self, op: str, **args: Any) -> None:
        self.commands.append(DrawCommand(op=op, args=args))

    def clear(self, width: float, height: float) -> None:
        self.commands = []
        self._record("clear", width=width, height=height)

    def line(self, x1: float, y1: float, x2: float, y2: float, width: float, color: str) -> None:
        self._record("line", x1=x1, y1=y1, x2=x2, y2=y2, width=width, color=color)

    def polygon(self, points: list[tuple[float, float]], color: str) -> None:
        self._record("polygon", points=[list(p) for p in points], color=color)

    def circle(self, x: float, y: float, radius: float, color: str) -> None:
        self._record("circle", x=x, y=y, radius=radius, color=color)

    def text(self, x: float, y: float, text: str, font_size: float, color: str) -> None:
        self._record("text", x=x, y=y, text=text, font_size=font_size, color=color)

    def to_list(self) -> list[dict]:
        return [c.to_dict() for c in self.commands]


def arrow_head(source: WordNode, target: WordNode) -> list[tuple[float, float]]:
    """Triangle whose tip touches the target's circle."""
    angle = math.atan2(target.y - source.y, target.x - source.x)
    tx = target.x - math.cos(angle) * target.radius
    ty = target.y - math.sin(angle) * target.radius
    return [
        (tx, ty),
        (tx - ARROW_LENGTH * math.cos(angle - ARROW_SPREAD), ty - ARROW_LENGTH * math.sin(angle - ARROW_SPREAD)),
        (tx - ARROW_LENGTH * math.cos(angle + ARROW_SPREAD), ty - ARROW_LENGTH * math.sin(angle + ARROW_SPREAD)),
    ]


def node_label(node: WordNode, frame: int = 0) -> str:
    """Label with cycling dots while the node is loading."""
    if not node.is_loading:
        return node.text
    return node.text + "." * ((frame // LOADING_DOT_FRAMES) % 4)


def draw_link(surface: Surface, link: Link, focal: WordNode | None) -> None:
    width = FOCAL_LINK_WIDTH if link.source is focal else LINK_WIDTH
    source, target = link.source, link.target
    surface.line(source.x, source.y, target.x, target.y, width, LINK_COLOR)
    surface.polygon(arrow_head(source, target), LINK_COLOR)


def render(
    store: GraphStore,
    surface: Surface,
    bounds: CanvasBounds,
    geometry: Geometry,
    frame: int = 0,
) -> None:
    """Paint the whole graph onto ``surface``."""
    surface.clear(bounds.width, bounds.height)

    for link in store.links:
        draw_link(surface, link, store.focal)

    for node in store.nodes:
        surface.circle(node.x, node.y, node.radius, NODE_COLOR)
        font_size = geometry.font_size(node is store.focal)
        surface.text(node.x, node.y, node_label(node, frame), font_size, LABEL_COLOR)
