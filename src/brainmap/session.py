"""Mind-map session: one interactive graph and the driver around it.

Wires geometry, store, layout, expansion and pointer input together and
decides the cadence: ``tick`` advances the layout, ``draw`` paints, ``run``
loops both at a fixed frame rate.
"""

import asyncio
import logging
import random

from brainmap.config import DEFAULT_SEED_WORD, Settings, fallback_words, settings as default_settings
from brainmap.exceptions import SourceUnavailable
from brainmap.graph.config import GeometryConfig, InputConfig, LayoutConfig
from brainmap.graph.expansion import ExpansionResult, NodeExpander
from brainmap.graph.geometry import CanvasBounds, Geometry, TextMeasurer
from brainmap.graph.input import PointerInput
from brainmap.graph.layout import LayoutEngine
from brainmap.graph.models import WordNode
from brainmap.graph.store import GraphStore
from brainmap.render import Surface, render
from brainmap.sources.word_source import WordSource

logger = logging.getLogger(__name__)


class MindMapSession:
    """An interactive vocabulary graph for one viewer."""

    def __init__(
        self,
        source: WordSource,
        settings: Settings | None = None,
        bounds: CanvasBounds | None = None,
        measurer: TextMeasurer | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.source = source
        self.bounds = bounds or CanvasBounds(self.settings.canvas_width, self.settings.canvas_height)

        self.geometry = Geometry(
            self.bounds,
            config=GeometryConfig.from_settings(self.settings),
            measurer=measurer,
            rng=rng,
        )
        self.store = GraphStore(self.geometry)
        self.layout = LayoutEngine(self.geometry, LayoutConfig.from_settings(self.settings))
        self.expander = NodeExpander(
            self.store,
            self.geometry,
            source,
            max_connections=self.settings.graph_max_connections,
            max_nodes=self.settings.graph_max_nodes,
        )
        self.pointer = PointerInput(self.store, self.geometry, InputConfig())

        self.topic: str | None = None
        self.frame_count = 0
        self._pending: set[asyncio.Task] = set()

    async def start(self, topic: str) -> ExpansionResult:
        """Build a fresh graph for ``topic`` and expand its seed word."""
        self.pointer.cancel()
        self.store.reset()
        self.topic = topic

        seeds = await self.seed_words(topic)
        seed = seeds[0] if seeds else DEFAULT_SEED_WORD
        logger.info(f"Starting topic '{topic}' from '{seed}'")

        cx, cy = self.bounds.center
        root = self.geometry.create_node(seed, cx, cy)
        self.store.add_node(root)
        self.store.set_focus(root)
        return await self.expand(root)

    async def change_topic(self, topic: str) -> ExpansionResult:
        return await self.start(topic)

    async def seed_words(self, topic: str) -> list[str]:
        """Topic words from the source, or the static list when it fails."""
        count = self.settings.graph_seed_count
        try:
            return await self.source.fetch_topic_words(topic, count)
        except SourceUnavailable as e:
            logger.warning(f"Topic words unavailable for '{topic}', using fallback: {e}")
            return fallback_words(topic, count)

    async def expand(self, node: WordNode) -> ExpansionResult:
        if self.topic is None:
            raise RuntimeError("Session not started")
        return await self.expander.expand(node, self.topic)

    def resize(self, width: float, height: float) -> None:
        self.bounds.resize(width, height)
        self.store.mark_unstable()

    def tick(self) -> bool:
        """Advance the layout one frame. Returns stability."""
        return self.layout.advance(self.store)

    def draw(self, surface: Surface) -> None:
        render(self.store, surface, self.bounds, self.geometry, self.frame_count)

    def frame(self, surface: Surface) -> bool:
        stable = self.tick()
        self.draw(surface)
        self.frame_count += 1
        return stable

    async def run(self, surface: Surface, fps: float = 60.0, frames: int | None = None) -> None:
        """Animation loop; runs forever unless ``frames`` is given."""
        interval = 1.0 / fps
        while frames is None or self.frame_count < frames:
            self.frame(surface)
            await asyncio.sleep(interval)

    def pointer_down(self, x: float, y: float) -> WordNode | None:
        return self.pointer.press(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.pointer.move(x, y)

    def pointer_up(self, x: float, y: float) -> asyncio.Task | None:
        """Release the pointer; a click schedules expansion of the clicked node."""
        node = self.pointer.release(x, y)
        if node is None:
            return None
        task = asyncio.get_running_loop().create_task(self.expand(node))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def lookup(self, x: float, y: float) -> str | None:
        """Label under a double-click, for word detail lookup."""
        node = self.geometry.find_node_at(self.store.nodes, x, y)
        return node.text if node else None

    async def wait_idle(self) -> None:
        """Wait for scheduled expansions to finish."""
        if self._pending:
            await asyncio.gather(*self._pending)
