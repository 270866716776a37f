"""Unit tests for the pointer input state machine."""

from unittest.mock import patch

import pytest

from brainmap.graph.input import PointerInput, PointerState
from brainmap.graph.layout import LayoutEngine


@pytest.fixture
def pointer(store, geometry) -> PointerInput:
    return PointerInput(store, geometry)


@pytest.fixture
def graph(store, make_node):
    """Focal root with one collapsed leaf."""
    root = make_node("environment", 400, 300)
    leaf = make_node("climate", 200, 200)
    store.add_node(root)
    store.add_node(leaf)
    store.set_focus(root)
    store.link(root, leaf)
    return root, leaf


class TestDrag:
    """Tests for dragging nodes."""

    def test_press_on_empty_canvas(self, pointer, graph) -> None:
        assert pointer.press(700, 550) is None
        assert pointer.state is PointerState.IDLE

    def test_drag_moves_node_and_unsettles(self, pointer, store, graph) -> None:
        _, leaf = graph
        store.is_stable = True

        assert pointer.press(205, 200) is leaf
        assert pointer.state is PointerState.DRAGGING
        assert leaf.dragging is True
        assert store.is_stable is False

        store.is_stable = True
        pointer.move(305, 250)
        assert (leaf.x, leaf.y) == (300, 250)
        assert store.is_stable is False

    def test_drag_unsettles_layout(self, pointer, store, geometry, graph) -> None:
        """A drag forces at least one real layout step."""
        _, leaf = graph
        engine = LayoutEngine(geometry)
        for _ in range(500):
            if engine.step(store):
                break
        assert store.is_stable

        pointer.press(leaf.x, leaf.y)
        pointer.move(leaf.x + 30, leaf.y + 10)
        assert store.is_stable is False

        with patch.object(engine, "step", wraps=engine.step) as step:
            engine.advance(store)
        step.assert_called_once_with(store)

    def test_release_leaves_node_at_drop_point(self, pointer, graph) -> None:
        _, leaf = graph
        pointer.press(200, 200)
        pointer.move(250, 260)
        assert pointer.release(300, 320) is None
        assert (leaf.x, leaf.y) == (300, 320)
        assert leaf.dragging is False
        assert (leaf.vx, leaf.vy) == (0, 0)
        assert pointer.state is PointerState.IDLE

    def test_drop_point_is_clamped(self, pointer, graph) -> None:
        _, leaf = graph
        pointer.press(200, 200)
        pointer.release(-100, -100)
        assert leaf.x == leaf.radius + 20
        assert leaf.y == leaf.radius + 20

    def test_focal_node_never_dragged(self, pointer, store, graph) -> None:
        root, _ = graph
        assert pointer.press(400, 300) is root
        pointer.move(100, 100)
        assert (root.x, root.y) == (400, 300)
        assert root.dragging is False

    def test_offset_preserved(self, pointer, graph) -> None:
        _, leaf = graph
        pointer.press(210, 195)
        pointer.move(310, 295)
        assert (leaf.x, leaf.y) == (300, 300)


class TestClick:
    """Tests for click detection."""

    def test_short_press_is_click(self, pointer, graph) -> None:
        _, leaf = graph
        pointer.press(200, 200)
        assert pointer.release(203, 202) is leaf

    def test_long_drag_is_not_click(self, pointer, graph) -> None:
        pointer.press(200, 200)
        assert pointer.release(205, 200) is None

    def test_expanded_node_not_clicked(self, pointer, graph) -> None:
        _, leaf = graph
        leaf.expanded = True
        pointer.press(200, 200)
        assert pointer.release(200, 200) is None

    def test_unexpanded_focal_node_clickable(self, pointer, graph) -> None:
        """The focal node can be clicked to retry a failed expansion."""
        root, _ = graph
        pointer.press(400, 300)
        assert pointer.release(401, 300) is root

    def test_release_without_press(self, pointer, graph) -> None:
        assert pointer.release(200, 200) is None

    def test_cancel(self, pointer, graph) -> None:
        _, leaf = graph
        pointer.press(200, 200)
        pointer.cancel()
        assert leaf.dragging is False
        assert pointer.release(200, 200) is None
