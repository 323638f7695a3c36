"""
Pass 1 of the layout engine: container sizing.

Each root's subtree is laid out around a temporary origin. Children are
stacked vertically, then each container is sized to enclose its children
plus padding. Positions are refined relative to the origin only; pass 2
moves whole subtrees to their final place.
"""

import logging

from umlbox.core.ir import Diagram

from .config import LayoutConfig
from .types import NodeBox, union_bounds

logger = logging.getLogger(__name__)


def size_subtree(
    diagram: Diagram,
    node_id: str,
    boxes: dict[str, NodeBox],
    config: LayoutConfig,
    origin: tuple[float, float] = (0.0, 0.0),
) -> NodeBox:
    """
    Size and stack a subtree, post-order.

    Args:
        diagram: Flat diagram (read only)
        node_id: Subtree root
        boxes: Output map, filled for the node and all its descendants
        config: Layout constants
        origin: The container's current position; children are stacked at
            its X, the first child's top at its Y

    Returns:
        The box of `node_id`
    """
    children = diagram.children_of(node_id)
    if not children:
        box = NodeBox(origin[0], origin[1], config.leaf_width, config.leaf_height)
        boxes[node_id] = box
        return box

    previous: NodeBox | None = None
    for child in children:
        child_box = size_subtree(diagram, child.id, boxes, config, origin)
        if previous is None:
            target_y = origin[1] + child_box.height / 2
        else:
            target_y = previous.bottom + config.child_spacing + child_box.height / 2
        shift_subtree(
            diagram, child.id, boxes, origin[0] - child_box.x, target_y - child_box.y
        )
        previous = boxes[child.id]

    box = enclose(
        [boxes[child.id] for child in children],
        config,
    )
    boxes[node_id] = box
    return box


def enclose(child_boxes: list[NodeBox], config: LayoutConfig) -> NodeBox:
    """Container box around stacked children, with padding and minimum size."""
    left, top, right, bottom = union_bounds(child_boxes)

    width = max(config.min_container_width, right - left + 2 * config.side_padding)
    height = max(
        config.min_container_height,
        bottom - top + 2 * config.vertical_padding + config.label_band,
    )
    # Padded content is centred; extra height from the minimum is split evenly
    padded_top = top - config.vertical_padding - config.label_band
    padded_bottom = bottom + config.vertical_padding
    center_y = (padded_top + padded_bottom) / 2
    return NodeBox((left + right) / 2, center_y, width, height)


def shift_subtree(
    diagram: Diagram, node_id: str, boxes: dict[str, NodeBox], dx: float, dy: float
) -> None:
    """Translate the boxes of a node and its descendants by one delta."""
    if dx == 0 and dy == 0:
        return
    for node_key in (node_id, *(d.id for d in diagram.descendants_of(node_id))):
        if node_key in boxes:
            boxes[node_key] = boxes[node_key].translated(dx, dy)
