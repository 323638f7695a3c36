"""
Flat diagram types for umlbox IR.

The flat view holds the same nodes as the AST in a single list, linked by
`parent_id` and `child_ids` instead of nesting. Nodes are addressed by ID, so
subtree operations walk explicit child lists instead of scanning the list.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, PrivateAttr

from .ast import DiagramType, Side
from .connectors import Connector


class DiagramNode(BaseModel):
    """
    A node in the flat view.

    Attributes:
        id: Node identifier
        label: Display label
        x: Centre X
        y: Centre Y
        width: Box width (set by layout)
        height: Box height (set by layout)
        parent_id: Enclosing node, None for roots
        depth: Nesting depth, 0 for roots
        child_ids: Direct children in document order
        pinned: True when the position was authored (`@ x,y`) or dragged
    """

    id: str
    label: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None
    parent_id: str | None = None
    depth: int = 0
    child_ids: list[str] = Field(default_factory=list)
    pinned: bool = False


class DiagramPort(BaseModel):
    """A port in the flat view, tied to its owning node."""

    id: str
    node_id: str
    label: str | None = None
    side: Side
    offset: float = 0.0
    connector_ref: str | None = None


class Diagram(BaseModel):
    """
    Flattened diagram consumed by layout and rendering.

    Attributes:
        type: Diagram type
        nodes: All nodes in pre-order
        ports: All ports, declared and synthesized
        connectors: Connectors after boundary synthesis
    """

    type: DiagramType = DiagramType.COMPONENT
    nodes: list[DiagramNode] = Field(default_factory=list)
    ports: list[DiagramPort] = Field(default_factory=list)
    connectors: list[Connector] = Field(default_factory=list)

    _index: dict[str, DiagramNode] = PrivateAttr(default_factory=dict)

    def _node_index(self) -> dict[str, DiagramNode]:
        """ID index, rebuilt whenever it no longer maps every node to itself."""
        index = self._index
        if len(index) != len(self.nodes) or any(index.get(n.id) is not n for n in self.nodes):
            self._index = {node.id: node for node in self.nodes}
        return self._index

    def get_node(self, node_id: str) -> DiagramNode | None:
        return self._node_index().get(node_id)

    def roots(self) -> list[DiagramNode]:
        return [node for node in self.nodes if node.parent_id is None]

    def children_of(self, node_id: str) -> list[DiagramNode]:
        node = self.get_node(node_id)
        if node is None:
            return []
        index = self._node_index()
        return [index[child_id] for child_id in node.child_ids if child_id in index]

    def descendants_of(self, node_id: str) -> Iterator[DiagramNode]:
        """Yield all descendants of a node in pre-order (excluding the node)."""
        for child in self.children_of(node_id):
            yield child
            yield from self.descendants_of(child.id)

    def ports_of(self, node_id: str) -> list[DiagramPort]:
        return [port for port in self.ports if port.node_id == node_id]

    def find_port(self, node_id: str, port_id: str) -> DiagramPort | None:
        for port in self.ports:
            if port.node_id == node_id and port.id == port_id:
                return port
        return None

    def translate_subtree(self, node_id: str, dx: float, dy: float) -> None:
        """Move a node and all its descendants by the same vector."""
        node = self.get_node(node_id)
        if node is None:
            return
        for moved in (node, *self.descendants_of(node_id)):
            moved.x += dx
            moved.y += dy
