"""Data models for the word graph."""

from dataclasses import dataclass, field
from enum import Enum


class NodeState(str, Enum):
    """Expansion state of a word node."""

    COLLAPSED = "collapsed"  # Related words not fetched yet
    LOADING = "loading"  # Expansion request in flight
    EXPANDED = "expanded"  # Related words fetched and linked


@dataclass(eq=False)
class WordNode:
    """A word on the canvas.

    Identity is the label text; two live nodes never share a label.
    Nodes compare by object identity so they can be kept in sets.
    """

    text: str
    x: float
    y: float
    radius: float

    # Velocity, canvas pixels per frame before the time step is applied
    vx: float = 0.0
    vy: float = 0.0

    expanded: bool = False
    is_loading: bool = False
    dragging: bool = False

    # Neighbours, used for the pruning keep-set (not for layout forces)
    links: list["WordNode"] = field(default_factory=list, repr=False)

    @property
    def state(self) -> NodeState:
        if self.is_loading:
            return NodeState.LOADING
        if self.expanded:
            return NodeState.EXPANDED
        return NodeState.COLLAPSED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
            "state": self.state.value,
            "dragging": self.dragging,
        }


@dataclass(frozen=True)
class Link:
    """Edge drawn as an arrow from source to target, undirected for pruning."""

    source: WordNode
    target: WordNode

    def touches(self, node: WordNode) -> bool:
        return self.source is node or self.target is node

    def to_dict(self) -> dict:
        return {"source": self.source.text, "target": self.target.text}
