"""Unit tests for node metrics and canvas geometry."""

import math
import random

import pytest

from brainmap.graph.config import GeometryConfig
from brainmap.graph.geometry import AverageWidthMeasurer, CanvasBounds, Geometry, distance


class TestMeasureRadius:
    """Tests for label-derived radii."""

    def test_floor_for_short_labels(self, geometry: Geometry) -> None:
        """Short labels are sized as if min_label_width wide."""
        floor = geometry.config.min_label_width / 2 + geometry.config.padding
        assert geometry.measure_radius("a") == math.ceil(floor)
        assert geometry.measure_radius("") >= floor

    def test_long_label(self, geometry: Geometry) -> None:
        # 10 glyphs * 16px * 0.5 = 80px wide
        assert geometry.measure_radius("vocabulary") == math.ceil(80 / 2 + 14)

    def test_focal_font_is_larger(self, geometry: Geometry) -> None:
        assert geometry.measure_radius("vocabulary", is_focal=True) > geometry.measure_radius("vocabulary")

    def test_monotonic_in_length(self) -> None:
        """Default measurer: radius never shrinks as the label grows."""
        geometry = Geometry(CanvasBounds(800, 600), measurer=AverageWidthMeasurer())
        floor = geometry.config.min_label_width / 2 + geometry.config.padding
        radii = [geometry.measure_radius("x" * n) for n in range(0, 40)]
        assert all(r >= floor for r in radii)
        assert radii == sorted(radii)

    def test_create_node_uses_normal_radius(self, geometry: Geometry) -> None:
        node = geometry.create_node("climate", 10, 20)
        assert node.radius == geometry.measure_radius("climate")
        assert (node.x, node.y) == (10, 20)
        assert not node.expanded and not node.is_loading and not node.dragging


class TestClampIntoView:
    """Tests for the hard view clamp."""

    @pytest.mark.parametrize("x,y", [(-500, -500), (5000, 5000), (0, 300), (400, 10_000), (400, 300)])
    def test_result_inside_margin(self, geometry: Geometry, make_node, x, y) -> None:
        node = make_node("habitat", x, y)
        geometry.clamp_into_view(node, margin=20)
        assert node.x - node.radius >= 20
        assert node.x + node.radius <= 800 - 20
        assert node.y - node.radius >= 20
        assert node.y + node.radius <= 600 - 20

    @pytest.mark.parametrize("x,y", [(-50, 900), (790, 5), (400, 300)])
    def test_idempotent(self, geometry: Geometry, make_node, x, y) -> None:
        node = make_node("pollution", x, y)
        geometry.clamp_into_view(node)
        once = (node.x, node.y)
        geometry.clamp_into_view(node)
        assert (node.x, node.y) == once

    def test_inside_point_unchanged(self, geometry: Geometry, make_node) -> None:
        node = make_node("climate", 400, 300)
        geometry.clamp_into_view(node)
        assert (node.x, node.y) == (400, 300)

    def test_tiny_canvas_centres_node(self, make_node) -> None:
        """A viewport smaller than the node centres it, still idempotently."""
        geometry = Geometry(CanvasBounds(50, 40))
        node = geometry.create_node("environment", 3, 3)
        geometry.clamp_into_view(node)
        assert (node.x, node.y) == (25, 20)
        geometry.clamp_into_view(node)
        assert (node.x, node.y) == (25, 20)


class TestChildPosition:
    """Tests for spawn position generation."""

    def test_ring_around_parent(self, geometry: Geometry, make_node) -> None:
        parent = make_node("environment", 400, 300)
        for _ in range(50):
            x, y = geometry.generate_child_position(parent)
            d = math.hypot(x - parent.x, y - parent.y)
            assert 80 <= d < 150

    def test_inside_safe_rectangle(self, geometry: Geometry, make_node) -> None:
        parent = make_node("environment", 400, 300)
        cfg = geometry.config
        inset = cfg.spawn_margin + cfg.estimated_radius
        for _ in range(50):
            x, y = geometry.generate_child_position(parent)
            assert inset <= x <= 800 - inset
            assert inset <= y <= 600 - inset

    def test_fallback_near_centre_in_tiny_viewport(self) -> None:
        """No ring point fits a tiny canvas, so the centre disc is used."""
        bounds = CanvasBounds(120, 100)
        geometry = Geometry(bounds, rng=random.Random(7))
        parent = geometry.create_node("environment", 60, 50)
        for _ in range(20):
            x, y = geometry.generate_child_position(parent)
            assert math.hypot(x - 60, y - 50) <= min(120, 100) / 4

    def test_fallback_after_bounded_attempts(self) -> None:
        """The rng is consulted for at most spawn_attempts ring candidates."""
        calls = []

        class CountingRandom(random.Random):
            def random(self) -> float:
                calls.append(1)
                return super().random()

        config = GeometryConfig(spawn_attempts=3)
        geometry = Geometry(CanvasBounds(100, 100), config=config, rng=CountingRandom(1))
        parent = geometry.create_node("x", 50, 50)
        geometry.generate_child_position(parent)
        # 2 draws per attempt, 2 more for the fallback
        assert len(calls) == 3 * 2 + 2


class TestFindNode:
    def test_hit_and_miss(self, geometry: Geometry, make_node) -> None:
        a = make_node("a", 100, 100)
        b = make_node("b", 300, 300)
        assert geometry.find_node_at([a, b], 105, 100) is a
        assert geometry.find_node_at([a, b], 300, 300 + b.radius) is b
        assert geometry.find_node_at([a, b], 700, 500) is None

    def test_distance(self, make_node) -> None:
        assert distance(make_node("a", 0, 0), make_node("b", 3, 4)) == 5


class TestCanvasBounds:
    def test_resize_moves_center(self) -> None:
        bounds = CanvasBounds(800, 600)
        assert bounds.center == (400, 300)
        bounds.resize(1000, 200)
        assert bounds.center == (500, 100)
