"""
Layout engine entry points.

compute_layout() is pure: it reads a Diagram and returns boxes. apply_layout()
writes boxes back; layout() does both. move_node() is the drag rule used by
editors.
"""

import logging

from umlbox.core.ir import Diagram, DiagramAST

from .config import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from .placement import place_roots
from .sizing import size_subtree
from .types import NodeBox

logger = logging.getLogger(__name__)


def compute_layout(diagram: Diagram, config: LayoutConfig | None = None) -> dict[str, NodeBox]:
    """
    Compute a box for every node.

    Args:
        diagram: Flat diagram; not modified
        config: Layout constants (defaults when omitted)

    Returns:
        Mapping of node ID to its final box
    """
    config = config or DEFAULT_LAYOUT_CONFIG
    boxes: dict[str, NodeBox] = {}

    for root in diagram.roots():
        size_subtree(diagram, root.id, boxes, config)

    place_roots(diagram, boxes, config)

    logger.debug("Laid out %d nodes", len(boxes))
    return boxes


def apply_layout(diagram: Diagram, boxes: dict[str, NodeBox]) -> None:
    """Write computed boxes back onto the diagram's nodes."""
    for node in diagram.nodes:
        box = boxes.get(node.id)
        if box is None:
            continue
        node.x = box.x
        node.y = box.y
        node.width = box.width
        node.height = box.height


def layout(diagram: Diagram, config: LayoutConfig | None = None) -> dict[str, NodeBox]:
    """Compute and apply a layout; returns the boxes."""
    boxes = compute_layout(diagram, config)
    apply_layout(diagram, boxes)
    return boxes


def move_node(
    diagram: Diagram,
    node_id: str,
    dx: float,
    dy: float,
    ast: DiagramAST | None = None,
) -> None:
    """
    Drag a node: move it and its descendants by one vector.

    The node becomes pinned, so later layouts keep it where it was dropped.
    When the tree view is given, the same delta is applied there.

    Raises:
        KeyError: If the node does not exist
    """
    node = diagram.get_node(node_id)
    if node is None:
        raise KeyError(node_id)

    diagram.translate_subtree(node_id, dx, dy)
    node.pinned = True

    if ast is not None:
        ast_node = ast.find_node(node_id)
        if ast_node is not None:
            for moved in ast_node.walk():
                if moved.x is not None and moved.y is not None:
                    moved.x += dx
                    moved.y += dy
                    continue
                # Unpositioned in the tree view: take the flat view's centre
                flat = diagram.get_node(moved.id)
                if flat is not None:
                    moved.x, moved.y = flat.x, flat.y
