"""Node metrics and canvas geometry.

Sizes nodes from their labels, proposes spawn positions for new children
and keeps nodes inside the visible canvas.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, Protocol

from brainmap.graph.config import GeometryConfig
from brainmap.graph.models import WordNode

logger = logging.getLogger(__name__)


@dataclass
class CanvasBounds:
    """Size of the drawing surface in pixels."""

    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height


class TextMeasurer(Protocol):
    """Measures rendered label width."""

    def measure(self, text: str, font_size: float) -> float:
        ...


class AverageWidthMeasurer:
    """Estimates label width from an average glyph advance.

    0.72 em per glyph approximates a heavy sans-serif face such as Arial Black.
    """

    def __init__(self, char_width_ratio: float = 0.72) -> None:
        self.char_width_ratio = char_width_ratio

    def measure(self, text: str, font_size: float) -> float:
        return len(text) * font_size * self.char_width_ratio


def distance(a: WordNode, b: WordNode) -> float:
    """Distance between two node centres."""
    return math.hypot(a.x - b.x, a.y - b.y)


class Geometry:
    """Metrics provider shared by the store, layout engine and renderer."""

    def __init__(
        self,
        bounds: CanvasBounds,
        config: GeometryConfig | None = None,
        measurer: TextMeasurer | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.bounds = bounds
        self.config = config or GeometryConfig()
        self.measurer = measurer or AverageWidthMeasurer()
        self.rng = rng or random.Random()

    def font_size(self, is_focal: bool = False) -> int:
        return self.config.center_font_size if is_focal else self.config.normal_font_size

    def measure_radius(self, label: str, is_focal: bool = False) -> int:
        """Radius of the circle drawn around a label.

        Never smaller than ``min_label_width / 2 + padding``, so one-letter
        labels stay clickable.
        """
        width = self.measurer.measure(label, self.font_size(is_focal))
        return math.ceil(max(width, self.config.min_label_width) / 2 + self.config.padding)

    def create_node(self, text: str, x: float, y: float) -> WordNode:
        return WordNode(text=text, x=x, y=y, radius=self.measure_radius(text))

    def generate_child_position(self, parent: WordNode) -> tuple[float, float]:
        """Propose a spawn point near ``parent``.

        Tries a few random points in a ring around the parent and keeps the
        first one inside the safe rectangle; otherwise falls back to a random
        point near the canvas centre.
        """
        cfg = self.config
        inset = cfg.spawn_margin + cfg.estimated_radius
        min_x, max_x = inset, self.bounds.width - inset
        min_y, max_y = inset, self.bounds.height - inset

        for _ in range(cfg.spawn_attempts):
            radius = cfg.spawn_inner_radius + self.rng.random() * cfg.spawn_band
            angle = self.rng.random() * 2 * math.pi
            x = parent.x + math.cos(angle) * radius
            y = parent.y + math.sin(angle) * radius
            if min_x <= x <= max_x and min_y <= y <= max_y:
                return x, y

        logger.debug(f"No room around '{parent.text}', spawning near canvas centre")
        cx, cy = self.bounds.center
        safe_radius = min(self.bounds.width, self.bounds.height) / 4
        angle = self.rng.random() * 2 * math.pi
        radius = self.rng.random() * safe_radius
        return cx + math.cos(angle) * radius, cy + math.sin(angle) * radius

    def clamp_into_view(self, node: WordNode, margin: float | None = None) -> WordNode:
        """Hard-clamp a node so its whole circle sits ``margin`` inside the canvas.

        On an axis too small to hold the circle the node is centred instead.
        """
        if margin is None:
            margin = self.config.view_margin
        node.x = self._clamp_axis(node.x, node.radius, margin, self.bounds.width)
        node.y = self._clamp_axis(node.y, node.radius, margin, self.bounds.height)
        return node

    @staticmethod
    def _clamp_axis(value: float, radius: float, margin: float, size: float) -> float:
        low = radius + margin
        high = size - radius - margin
        if low > high:
            return size / 2
        return min(max(value, low), high)

    def find_node_at(self, nodes: Iterable[WordNode], x: float, y: float) -> WordNode | None:
        """First node whose circle contains the point."""
        for node in nodes:
            if math.hypot(node.x - x, node.y - y) <= node.radius:
                return node
        return None
