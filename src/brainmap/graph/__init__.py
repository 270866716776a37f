"""Word graph engine.

Provides:
- Node and link models
- Geometry (node sizing, spawn positions, view clamping)
- Graph store with focal-neighbourhood pruning
- Per-frame relaxation layout
- Node expansion and pointer input state machines
"""

from brainmap.graph.config import GeometryConfig, InputConfig, LayoutConfig
from brainmap.graph.expansion import ExpansionOutcome, ExpansionResult, NodeExpander
from brainmap.graph.geometry import AverageWidthMeasurer, CanvasBounds, Geometry, TextMeasurer
from brainmap.graph.input import PointerInput, PointerState
from brainmap.graph.layout import LayoutEngine
from brainmap.graph.models import Link, NodeState, WordNode
from brainmap.graph.store import GraphStore

__all__ = [
    # Config
    "GeometryConfig",
    "LayoutConfig",
    "InputConfig",
    # Models
    "WordNode",
    "Link",
    "NodeState",
    # Engine
    "CanvasBounds",
    "TextMeasurer",
    "AverageWidthMeasurer",
    "Geometry",
    "GraphStore",
    "LayoutEngine",
    "NodeExpander",
    "ExpansionOutcome",
    "ExpansionResult",
    "PointerInput",
    "PointerState",
]
