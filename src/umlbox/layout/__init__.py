"""
umlbox layout engine.

Deterministic two-pass layout for component diagrams.

Key components:
- Container sizing and child stacking (sizing.py)
- Root placement: pinned, port-anchored and grid (placement.py)
- Entry points and the drag rule (engine.py)
"""

from umlbox.layout.config import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from umlbox.layout.engine import apply_layout, compute_layout, layout, move_node
from umlbox.layout.placement import grid_positions, place_roots
from umlbox.layout.sizing import size_subtree
from umlbox.layout.types import NodeBox

__all__ = [
    # Core functions
    "compute_layout",
    "apply_layout",
    "layout",
    "move_node",
    # Passes
    "size_subtree",
    "place_roots",
    "grid_positions",
    # Configuration
    "LayoutConfig",
    "DEFAULT_LAYOUT_CONFIG",
    # Geometry
    "NodeBox",
]
