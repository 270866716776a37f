"""Unit tests for the relaxation layout."""

import math

import pytest

from brainmap.graph.config import LayoutConfig
from brainmap.graph.layout import LayoutEngine
from brainmap.graph.store import GraphStore


@pytest.fixture
def engine(geometry) -> LayoutEngine:
    return LayoutEngine(geometry, LayoutConfig())


def run_until_stable(engine: LayoutEngine, store: GraphStore, max_frames: int = 2000) -> int:
    for frame in range(max_frames):
        if engine.step(store):
            return frame + 1
    raise AssertionError("layout did not settle")


class TestRepulsion:
    """Tests for overlap removal between nodes."""

    def test_overlapping_nodes_pushed_apart(self, engine, store, make_node) -> None:
        a, b = make_node("alpha", 390, 300), make_node("beta", 410, 300)
        store.add_node(a)
        store.add_node(b)
        engine.step(store)
        assert a.vx < 0 < b.vx
        assert a.x < 390 and b.x > 410

    def test_separated_after_settling(self, engine, store, make_node) -> None:
        labels = ["ecosystem", "pollution", "climate", "habitat", "species", "forest"]
        offsets = [(0, 0), (5, -3), (-4, 6), (8, 8), (-7, -2), (2, 9)]
        for label, (dx, dy) in zip(labels, offsets):
            store.add_node(make_node(label, 400 + dx, 300 + dy))
        run_until_stable(engine, store)
        nodes = store.nodes
        for i, n1 in enumerate(nodes):
            for n2 in nodes[i + 1:]:
                gap = math.hypot(n1.x - n2.x, n1.y - n2.y) - n1.radius - n2.radius
                # Settling stops at the movement threshold, allow a little residual overlap
                assert gap > -5

    def test_coincident_nodes_do_not_blow_up(self, engine, store, make_node) -> None:
        a, b = make_node("same", 400, 300), make_node("spot", 400, 300)
        store.add_node(a)
        store.add_node(b)
        engine.step(store)
        for node in (a, b):
            assert math.isfinite(node.x) and math.isfinite(node.y)

    def test_dragged_node_not_pushed(self, engine, store, make_node) -> None:
        a, b = make_node("alpha", 390, 300), make_node("beta", 410, 300)
        a.dragging = True
        store.add_node(a)
        store.add_node(b)
        engine.step(store)
        assert (a.x, a.y) == (390, 300)
        assert a.vx == 0
        # It still pushes the other node
        assert b.vx > 0


class TestBoundary:
    def test_containment_force_points_inward(self, engine, store, make_node) -> None:
        node = make_node("edge", 0, 300)
        store.add_node(node)
        engine._contain(node)
        assert node.vx > 0
        assert node.vy == 0

    def test_nodes_stay_in_view(self, engine, store, make_node, geometry) -> None:
        for i in range(10):
            store.add_node(make_node(f"word{i}", 790, 590))
        for _ in range(50):
            engine.step(store)
            for node in store.nodes:
                assert node.x - node.radius >= engine.config.margin - 1e-9
                assert node.x + node.radius <= geometry.bounds.width - engine.config.margin + 1e-9
                assert node.y - node.radius >= engine.config.margin - 1e-9
                assert node.y + node.radius <= geometry.bounds.height - engine.config.margin + 1e-9


class TestFocalHoming:
    def test_focal_eases_to_center(self, engine, store, make_node) -> None:
        node = make_node("focus", 200, 200)
        store.add_node(node)
        store.set_focus(node)
        engine.step(store)
        assert node.x == pytest.approx(200 + (400 - 200) * 0.2)
        assert node.y == pytest.approx(200 + (300 - 200) * 0.2)
        run_until_stable(engine, store)
        assert abs(node.x - 400) <= 0.5 / 0.8 + 1e-9
        assert abs(node.y - 300) <= 0.5 / 0.8 + 1e-9

    def test_focal_velocity_ignored(self, engine, store, make_node) -> None:
        node = make_node("focus", 400, 300)
        store.add_node(node)
        store.set_focus(node)
        node.vx = 500.0
        assert engine.step(store) is True
        assert (node.x, node.y) == (400, 300)
        assert node.vx == 0


class TestStability:
    def test_lone_settled_node_is_stable(self, engine, store, make_node) -> None:
        store.add_node(make_node("calm", 400, 300))
        assert engine.step(store) is True
        assert store.is_stable is True

    def test_advance_skips_stable_graph(self, engine, store, make_node) -> None:
        node = make_node("calm", 400, 300)
        store.add_node(node)
        engine.step(store)
        node.vx = 100.0
        assert engine.advance(store) is True
        assert node.x == 400

    def test_advance_runs_when_unstable(self, engine, store, make_node) -> None:
        node = make_node("calm", 400, 300)
        store.add_node(node)
        engine.step(store)
        node.vx = 100.0
        store.mark_unstable()
        assert engine.advance(store) is False
        assert node.x == pytest.approx(400 + 100 * 0.8 * 0.2)

    def test_small_velocity_not_moving(self, engine, store, make_node) -> None:
        node = make_node("calm", 400, 300)
        node.vx = 0.06  # decays to 0.048, under the threshold
        store.add_node(node)
        assert engine.step(store) is True
        assert node.x == 400
