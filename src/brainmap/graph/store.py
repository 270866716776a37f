"""Graph store: the mutable node and link sets of the current topic."""

import logging

from brainmap.exceptions import InvariantViolation
from brainmap.graph.geometry import Geometry
from brainmap.graph.models import Link, WordNode

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Owns the nodes, links and focal node of one topic.

    Nodes are added only by expansion and removed only by ``prune``;
    ``reset`` discards everything when the topic changes. ``epoch`` counts
    resets so late expansion results can tell that their graph is gone.
    """

    def __init__(self, geometry: Geometry) -> None:
        self.geometry = geometry
        self.nodes: list[WordNode] = []
        self.links: list[Link] = []
        self.focal: WordNode | None = None
        self.is_stable = False
        self.epoch = 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: object) -> bool:
        return any(n is node for n in self.nodes)

    def find(self, label: str) -> WordNode | None:
        """Node with exactly this label, if any."""
        for node in self.nodes:
            if node.text == label:
                return node
        return None

    def add_node(self, node: WordNode) -> None:
        # Duplicate labels are the caller's concern
        self.nodes.append(node)
        self.is_stable = False

    def link(self, a: WordNode, b: WordNode) -> Link:
        """Link two member nodes and record them as each other's neighbours."""
        for node in (a, b):
            if node not in self:
                raise InvariantViolation(f"Cannot link '{node.text}': node is not in the graph")
        link = Link(source=a, target=b)
        self.links.append(link)
        a.links.append(b)
        b.links.append(a)
        self.is_stable = False
        return link

    def set_focus(self, node: WordNode) -> None:
        """Make ``node`` the focal node.

        The previous focal node is marked expanded even if its own expansion
        never finished. Refocusing the current focal node leaves its state
        alone.
        """
        if node not in self:
            raise InvariantViolation(f"Cannot focus '{node.text}': node is not in the graph")
        if self.focal is not None and self.focal is not node:
            self.focal.expanded = True
        self.focal = node
        node.radius = self.geometry.measure_radius(node.text, is_focal=True)
        self.is_stable = False

    def prune(self, max_nodes: int) -> list[WordNode]:
        """Drop everything outside the focal neighbourhood once over ``max_nodes``.

        The neighbourhood itself is never trimmed, even when it alone exceeds
        the cap. Returns the dropped nodes.
        """
        if len(self.nodes) <= max_nodes or self.focal is None:
            return []

        keep = {self.focal, *self.focal.links}
        dropped = [n for n in self.nodes if n not in keep]
        self.nodes = [n for n in self.nodes if n in keep]
        self.links = [
            link for link in self.links
            if not any(link.touches(n) for n in dropped)
        ]
        for node in self.nodes:
            node.links = [n for n in node.links if n in keep]

        self.is_stable = False
        logger.info(
            f"Pruned {len(dropped)} nodes around '{self.focal.text}', "
            f"{len(self.nodes)} remain"
        )
        return dropped

    def reset(self) -> None:
        """Discard the whole graph (topic change)."""
        self.nodes = []
        self.links = []
        self.focal = None
        self.epoch += 1
        self.is_stable = False

    def mark_unstable(self) -> None:
        self.is_stable = False

    def check_invariants(self) -> None:
        """Raise if any link has an endpoint outside the node set."""
        members = set(self.nodes)
        for link in self.links:
            if link.source not in members or link.target not in members:
                raise InvariantViolation(
                    f"Dangling link {link.source.text} -> {link.target.text}"
                )
        if self.focal is not None and self.focal not in members:
            raise InvariantViolation(f"Focal node '{self.focal.text}' is not in the graph")

    def snapshot(self) -> dict:
        """JSON-able view of the graph."""
        return {
            "epoch": self.epoch,
            "focal": self.focal.text if self.focal else None,
            "stable": self.is_stable,
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }
