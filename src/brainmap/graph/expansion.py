"""Node expansion: collapsed -> loading -> expanded.

Expanding a node focuses it, asks the word source for related words and
materialises them as linked nodes, then prunes the graph back to the focal
neighbourhood. A failed request leaves the node collapsed so it can be
retried; a request that outlives its topic is discarded.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from brainmap.exceptions import SourceUnavailable
from brainmap.graph.geometry import Geometry
from brainmap.graph.models import NodeState, WordNode
from brainmap.graph.store import GraphStore
from brainmap.sources.word_source import WordSource

logger = logging.getLogger(__name__)


class ExpansionOutcome(str, Enum):
    """How an expansion request ended."""

    EXPANDED = "expanded"
    SKIPPED = "skipped"  # Already loading or expanded
    FAILED = "failed"  # Word source unavailable, node retryable
    STALE = "stale"  # Topic changed while the request was in flight


@dataclass
class ExpansionResult:
    """Result of one expansion request."""

    node: WordNode
    outcome: ExpansionOutcome
    created: list[WordNode] = field(default_factory=list)  # New nodes
    merged: list[WordNode] = field(default_factory=list)  # Existing nodes linked again
    pruned: list[WordNode] = field(default_factory=list)
    error: SourceUnavailable | None = None


class NodeExpander:
    """Turns leaf nodes into expanded nodes."""

    def __init__(
        self,
        store: GraphStore,
        geometry: Geometry,
        source: WordSource,
        max_connections: int = 4,
        max_nodes: int = 20,
    ) -> None:
        self.store = store
        self.geometry = geometry
        self.source = source
        self.max_connections = max_connections
        self.max_nodes = max_nodes

    async def expand(self, node: WordNode, topic: str) -> ExpansionResult:
        """
        Expand ``node`` with related words for ``topic``.

        Args:
            node: Node to expand, must be in the store
            topic: Topic passed to the word source

        Returns:
            ExpansionResult describing what changed
        """
        if node.state is not NodeState.COLLAPSED:
            logger.debug(f"Skipping expansion of '{node.text}': {node.state.value}")
            return ExpansionResult(node=node, outcome=ExpansionOutcome.SKIPPED)

        epoch = self.store.epoch
        self.store.set_focus(node)
        node.is_loading = True
        logger.info(f"Expanding '{node.text}' ({topic})")

        try:
            words = await self.source.fetch_related(node.text, topic, self.max_connections)
        except SourceUnavailable as e:
            logger.warning(f"Failed to expand '{node.text}': {e}")
            return ExpansionResult(node=node, outcome=ExpansionOutcome.FAILED, error=e)
        finally:
            node.is_loading = False

        if epoch != self.store.epoch:
            logger.info(f"Discarding related words for '{node.text}': topic changed")
            return ExpansionResult(node=node, outcome=ExpansionOutcome.STALE)

        node.expanded = True
        result = ExpansionResult(node=node, outcome=ExpansionOutcome.EXPANDED)

        for word in words:
            existing = self.store.find(word)
            if existing is node:
                continue
            if existing is not None:
                self.store.link(node, existing)
                result.merged.append(existing)
                continue

            x, y = self.geometry.generate_child_position(node)
            child = self.geometry.create_node(word, x, y)
            self.geometry.clamp_into_view(child)
            self.store.add_node(child)
            self.store.link(node, child)
            result.created.append(child)

        result.pruned = self.store.prune(self.max_nodes)
        logger.info(
            f"Expanded '{node.text}': {len(result.created)} new, "
            f"{len(result.merged)} merged, {len(result.pruned)} pruned"
        )
        return result
