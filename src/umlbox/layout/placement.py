"""
Pass 2 of the layout engine: root placement.

Roots are placed in three groups:
- pinned roots keep their authored centre
- port-anchored roots sit a fixed standoff away from the port they connect to
- every other root fills a near-square grid

Each root is then moved together with its subtree.
"""

import logging
import math
from dataclasses import dataclass

from umlbox.core.ir import Diagram, DiagramNode, DiagramPort, Side

from .config import LayoutConfig
from .sizing import shift_subtree
from .types import NodeBox

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortAnchor:
    """A root placed relative to a port on another root."""

    node_id: str
    owner_id: str
    port: DiagramPort


def place_roots(diagram: Diagram, boxes: dict[str, NodeBox], config: LayoutConfig) -> None:
    """
    Move every root subtree from its pass-1 box to its final position.

    Args:
        diagram: Flat diagram (read only)
        boxes: Pass-1 boxes, updated in place
        config: Layout constants
    """
    roots = diagram.roots()
    pinned = [root for root in roots if root.pinned]
    anchors = resolve_anchors(diagram, roots)
    gridded = [root for root in roots if not root.pinned and root.id not in anchors]

    placed: list[str] = []

    for root in pinned:
        move_root(diagram, boxes, root.id, boxes[root.id].moved_to(root.x, root.y))
        placed.append(root.id)

    for root, target in zip(gridded, grid_positions([boxes[r.id] for r in gridded], config)):
        move_root(diagram, boxes, root.id, target)
        placed.append(root.id)

    for anchor in anchors.values():
        target = anchored_position(boxes, anchor, config)
        target = slide_clear(target, [boxes[node_id] for node_id in placed], anchor.port.side, config)
        move_root(diagram, boxes, anchor.node_id, target)
        placed.append(anchor.node_id)


def move_root(diagram: Diagram, boxes: dict[str, NodeBox], root_id: str, target: NodeBox) -> None:
    current = boxes[root_id]
    shift_subtree(diagram, root_id, boxes, target.x - current.x, target.y - current.y)


def find_port_anchors(diagram: Diagram, roots: list[DiagramNode]) -> dict[str, PortAnchor]:
    """
    Collect roots at the outer end of a cross-level connector.

    Only unpinned roots are anchored, and only to a port that exists on
    another root. The first connector naming a root wins.
    """
    root_ids = {root.id for root in roots}
    pinned_ids = {root.id for root in roots if root.pinned}
    anchors: dict[str, PortAnchor] = {}

    for connector in diagram.connectors:
        if not connector.is_cross_level or connector.source_id == connector.target_id:
            continue
        ends = (
            (connector.source_id, connector.target_id, connector.target_port),
            (connector.target_id, connector.source_id, connector.source_port),
        )
        for free_id, owner_id, port_id in ends:
            if port_id is None or free_id in anchors or free_id in pinned_ids:
                continue
            if free_id not in root_ids or owner_id not in root_ids:
                continue
            port = diagram.find_port(owner_id, port_id)
            if port is None:
                logger.debug("Port %s.%s not found, %s goes to the grid", owner_id, port_id, free_id)
                continue
            anchors[free_id] = PortAnchor(free_id, owner_id, port)

    return anchors


def resolve_anchors(diagram: Diagram, roots: list[DiagramNode]) -> dict[str, PortAnchor]:
    """
    Order anchors so each owner is placed before the roots anchored to it.

    Anchors that end up in a cycle are dropped and their roots go to the grid.
    """
    candidates = find_port_anchors(diagram, roots)
    ordered: dict[str, PortAnchor] = {}

    def settle(node_id: str, visiting: set[str]) -> bool:
        if node_id in ordered:
            return True
        anchor = candidates[node_id]
        if anchor.owner_id in visiting:
            return False
        if anchor.owner_id in candidates and not settle(anchor.owner_id, visiting | {node_id}):
            return False
        ordered[node_id] = anchor
        return True

    for node_id in candidates:
        if not settle(node_id, set()):
            logger.debug("Anchor cycle through %s, placing it on the grid", node_id)

    return ordered


def grid_positions(sizes: list[NodeBox], config: LayoutConfig) -> list[NodeBox]:
    """
    Lay boxes out on a grid with ceil(sqrt(n)) columns, row-major.

    Column widths and row heights follow the largest box in them, so cells
    never overlap whatever the box sizes.
    """
    if not sizes:
        return []

    columns = math.ceil(math.sqrt(len(sizes)))
    rows = math.ceil(len(sizes) / columns)

    col_widths = [0.0] * columns
    row_heights = [0.0] * rows
    for index, box in enumerate(sizes):
        row, col = divmod(index, columns)
        col_widths[col] = max(col_widths[col], box.width)
        row_heights[row] = max(row_heights[row], box.height)

    col_lefts = []
    x = config.grid_start_x
    for width in col_widths:
        col_lefts.append(x)
        x += width + config.grid_horizontal_spacing

    row_tops = []
    y = config.grid_start_y
    for height in row_heights:
        row_tops.append(y)
        y += height + config.grid_vertical_spacing

    positions = []
    for index, box in enumerate(sizes):
        row, col = divmod(index, columns)
        positions.append(box.moved_to(col_lefts[col] + box.width / 2, row_tops[row] + box.height / 2))
    return positions


def port_point(owner: NodeBox, port: DiagramPort) -> tuple[float, float]:
    """Point on the owner's border where a port sits."""
    if port.side == Side.LEFT:
        return owner.left, owner.y + port.offset
    if port.side == Side.RIGHT:
        return owner.right, owner.y + port.offset
    if port.side == Side.TOP:
        return owner.x + port.offset, owner.top
    return owner.x + port.offset, owner.bottom


def anchored_position(boxes: dict[str, NodeBox], anchor: PortAnchor, config: LayoutConfig) -> NodeBox:
    """Box of an anchored root, standing off from its port in the side's direction."""
    box = boxes[anchor.node_id]
    px, py = port_point(boxes[anchor.owner_id], anchor.port)
    standoff = config.port_standoff
    side = anchor.port.side

    if side == Side.LEFT:
        return box.moved_to(px - standoff - box.width / 2, py)
    if side == Side.RIGHT:
        return box.moved_to(px + standoff + box.width / 2, py)
    if side == Side.TOP:
        return box.moved_to(px, py - standoff - box.height / 2)
    return box.moved_to(px, py + standoff + box.height / 2)


def slide_clear(candidate: NodeBox, placed: list[NodeBox], side: Side, config: LayoutConfig) -> NodeBox:
    """
    Slide a box along its port side until it overlaps no placed box.

    Boxes anchored on a left or right port slide down, on a top or bottom
    port slide right. Every step moves past one blocker, so the loop ends.
    """
    vertical = side in (Side.LEFT, Side.RIGHT)
    while True:
        blocker = next((box for box in placed if candidate.intersects(box)), None)
        if blocker is None:
            return candidate
        if vertical:
            candidate = candidate.moved_to(
                candidate.x, blocker.bottom + config.child_spacing + candidate.height / 2
            )
        else:
            candidate = candidate.moved_to(
                blocker.right + config.child_spacing + candidate.width / 2, candidate.y
            )
