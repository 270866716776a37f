"""Per-frame relaxation layout.

A cheap overlap-removal scheme rather than a physical simulation:

1. Pairwise repulsion between overlapping circles
2. Boundary containment force near the canvas edges
3. Integration with friction; the focal node homes in on the canvas centre
4. Hard clamp into view
5. Stability flag so settled frames can skip the step
"""

import logging
import math

from brainmap.graph.config import LayoutConfig
from brainmap.graph.geometry import Geometry
from brainmap.graph.models import WordNode
from brainmap.graph.store import GraphStore

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Relaxes node positions one frame at a time."""

    def __init__(self, geometry: Geometry, config: LayoutConfig | None = None) -> None:
        self.geometry = geometry
        self.config = config or LayoutConfig()

    def advance(self, store: GraphStore) -> bool:
        """Run one step unless the graph is already stable. Returns stability."""
        if store.is_stable:
            return True
        return self.step(store)

    def step(self, store: GraphStore) -> bool:
        """Run one relaxation step over every node and return stability."""
        nodes = store.nodes
        self._repel(nodes)

        moving = False
        for node in nodes:
            self._contain(node)
            if not node.dragging:
                if node is store.focal:
                    moving |= self._home(node)
                else:
                    moving |= self._integrate(node)
            self.geometry.clamp_into_view(node, self.config.margin)

        store.is_stable = not moving
        return store.is_stable

    def _repel(self, nodes: list[WordNode]) -> None:
        cfg = self.config
        for i, n1 in enumerate(nodes):
            for n2 in nodes[i + 1:]:
                dx = n2.x - n1.x
                dy = n2.y - n1.y
                d = max(math.hypot(dx, dy), 1.0)
                overlap = n1.radius + n2.radius + cfg.min_spacing - d
                if overlap <= 0:
                    continue
                fx = overlap * dx / d * cfg.repulsion_damping
                fy = overlap * dy / d * cfg.repulsion_damping
                # Dragged nodes push but are not pushed
                if not n1.dragging:
                    n1.vx -= fx
                    n1.vy -= fy
                if not n2.dragging:
                    n2.vx += fx
                    n2.vy += fy

    def _contain(self, node: WordNode) -> None:
        cfg = self.config
        bounds = self.geometry.bounds
        left = node.x - node.radius
        right = node.x + node.radius
        top = node.y - node.radius
        bottom = node.y + node.radius

        if left < cfg.margin:
            node.vx += (cfg.margin - left) * cfg.boundary_gain
        if right > bounds.width - cfg.margin:
            node.vx -= (right - (bounds.width - cfg.margin)) * cfg.boundary_gain
        if top < cfg.margin:
            node.vy += (cfg.margin - top) * cfg.boundary_gain
        if bottom > bounds.height - cfg.margin:
            node.vy -= (bottom - (bounds.height - cfg.margin)) * cfg.boundary_gain

    def _integrate(self, node: WordNode) -> bool:
        cfg = self.config
        node.vx *= cfg.friction
        node.vy *= cfg.friction
        if abs(node.vx) > cfg.move_threshold or abs(node.vy) > cfg.move_threshold:
            node.x += node.vx * cfg.time_step
            node.y += node.vy * cfg.time_step
            return True
        return False

    def _home(self, node: WordNode) -> bool:
        cfg = self.config
        # Homing is positional; forces gathered while focal are discarded
        node.vx = 0.0
        node.vy = 0.0
        cx, cy = self.geometry.bounds.center
        dx = cx - node.x
        dy = cy - node.y
        if abs(dx) > cfg.focal_move_threshold or abs(dy) > cfg.focal_move_threshold:
            node.x += dx * cfg.focal_homing
            node.y += dy * cfg.focal_homing
            return True
        return False
