"""Pytest configuration and fixtures."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from brainmap.config import Settings, get_test_settings
from brainmap.graph.geometry import CanvasBounds, Geometry
from brainmap.graph.models import WordNode
from brainmap.graph.store import GraphStore
from brainmap.sources.word_source import LLMWordSource


class FixedWidthMeasurer:
    """Half an em per glyph, so radii are easy to compute by hand."""

    def measure(self, text: str, font_size: float) -> float:
        return len(text) * font_size * 0.5


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return get_test_settings()


@pytest.fixture
def bounds() -> CanvasBounds:
    return CanvasBounds(800, 600)


@pytest.fixture
def measurer() -> FixedWidthMeasurer:
    return FixedWidthMeasurer()


@pytest.fixture
def geometry(bounds: CanvasBounds, measurer: FixedWidthMeasurer) -> Geometry:
    """Geometry with deterministic randomness and text widths."""
    return Geometry(bounds, measurer=measurer, rng=random.Random(42))


@pytest.fixture
def store(geometry: Geometry) -> GraphStore:
    return GraphStore(geometry)


@pytest.fixture
def make_node(geometry: Geometry):
    """Factory creating a node through the geometry provider."""

    def _make(text: str, x: float = 400.0, y: float = 300.0) -> WordNode:
        return geometry.create_node(text, x, y)

    return _make


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_word_source() -> LLMWordSource:
    """Mock word source for testing without an LLM."""
    source = MagicMock(spec=LLMWordSource)
    source.fetch_related = AsyncMock(return_value=["ecosystem", "pollution", "climate", "habitat"])
    source.fetch_topic_words = AsyncMock(
        return_value=["environment", "ecosystem", "sustainable", "biodiversity", "conservation"]
    )
    source.close = AsyncMock()
    return source
