"""Pointer input state machine: idle -> dragging -> idle.

A press on a node captures it until release. Non-focal nodes follow the
pointer while captured; the focal node never moves but can still be clicked.
A release close to the press point is a click.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from brainmap.graph.config import InputConfig
from brainmap.graph.geometry import Geometry
from brainmap.graph.models import WordNode
from brainmap.graph.store import GraphStore

logger = logging.getLogger(__name__)


class PointerState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class Capture:
    """A node held by the pointer."""

    node: WordNode
    start_x: float
    start_y: float
    offset_x: float
    offset_y: float
    draggable: bool


class PointerInput:
    """Translates press/move/release events into drags and clicks."""

    def __init__(
        self,
        store: GraphStore,
        geometry: Geometry,
        config: InputConfig | None = None,
    ) -> None:
        self.store = store
        self.geometry = geometry
        self.config = config or InputConfig()
        self.capture: Capture | None = None

    @property
    def state(self) -> PointerState:
        return PointerState.IDLE if self.capture is None else PointerState.DRAGGING

    def press(self, x: float, y: float) -> WordNode | None:
        """Capture the node under the pointer, if any."""
        if self.capture is not None:
            self.cancel()

        node = self.geometry.find_node_at(self.store.nodes, x, y)
        if node is None:
            return None

        draggable = node is not self.store.focal
        self.capture = Capture(
            node=node,
            start_x=x,
            start_y=y,
            offset_x=x - node.x,
            offset_y=y - node.y,
            draggable=draggable,
        )
        if draggable:
            node.dragging = True
            node.vx = node.vy = 0.0
            self.store.mark_unstable()
        return node

    def move(self, x: float, y: float) -> None:
        capture = self.capture
        if capture is None or not capture.draggable:
            return
        node = capture.node
        node.x = x - capture.offset_x
        node.y = y - capture.offset_y
        self.geometry.clamp_into_view(node)
        self.store.mark_unstable()

    def release(self, x: float, y: float) -> WordNode | None:
        """End the capture. Returns the node when the gesture was a click."""
        capture = self.capture
        if capture is None:
            return None

        # The release point is the drop point
        self.move(x, y)
        self.capture = None

        node = capture.node
        if capture.draggable:
            node.dragging = False
            node.vx = node.vy = 0.0

        moved = math.hypot(x - capture.start_x, y - capture.start_y)
        if moved < self.config.click_threshold and not node.expanded and node in self.store:
            logger.debug(f"Click on '{node.text}'")
            return node
        return None

    def cancel(self) -> None:
        """Drop the capture without producing a click."""
        if self.capture is not None:
            self.capture.node.dragging = False
            self.capture = None
