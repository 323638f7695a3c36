"""
Abstract syntax tree types for umlbox IR.

The AST is the nested view of a diagram as the user wrote it: nodes own
their children and ports, connectors form a flat list.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, Field

from .connectors import Connector


class DiagramType(str, Enum):
    """Diagram kinds accepted by the `[type] { ... }` wrapper."""

    COMPONENT = "uml2.5-component"
    CLASS = "uml2.5-class"
    SEQUENCE = "uml2.5-sequence"
    ACTIVITY = "uml2.5-activity"


DIAGRAM_TYPE_NAMES = {t.value for t in DiagramType}


class Side(str, Enum):
    """Side of a node a port is attached to."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class ASTPort(BaseModel):
    """
    Port declared on a node.

    Attributes:
        id: Port identifier, unique within its node
        label: Optional label
        side: Side of the node the port sits on
        offset: Optional offset along the side, from its centre
        connector_ref: Connector name from `port [p] with [name]`, used to
            reuse this port for a boundary-crossing connector
    """

    id: str
    label: str | None = None
    side: Side
    offset: float | None = None
    connector_ref: str | None = None


class ASTNode(BaseModel):
    """
    A box in the diagram, possibly containing other boxes.

    Coordinates are the centre of the box. `x`/`y` are set when the source
    carried `@ x,y` or after positions were synced back from a layout.
    """

    id: str
    label: str = ""
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    children: list[ASTNode] = Field(default_factory=list)
    ports: list[ASTPort] = Field(default_factory=list)

    def walk(self) -> Iterator[ASTNode]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: str) -> ASTNode | None:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def translate(self, dx: float, dy: float) -> None:
        """Move this node and its whole subtree by the same vector."""
        for node in self.walk():
            node.x = (node.x or 0) + dx
            node.y = (node.y or 0) + dy


class ParseDiagnostic(BaseModel):
    """Non-fatal problem found while parsing; the construct was dropped."""

    message: str
    line: int
    column: int
    severity: str = "warning"

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.severity}: {self.message}"


class DiagramAST(BaseModel):
    """
    Parser output for one document.

    Attributes:
        type: Diagram type from the wrapper (component when absent)
        root_nodes: Top-level nodes in document order
        connectors: All edges, in document order
        diagnostics: Warnings for constructs that were dropped
    """

    type: DiagramType = DiagramType.COMPONENT
    root_nodes: list[ASTNode] = Field(default_factory=list)
    connectors: list[Connector] = Field(default_factory=list)
    diagnostics: list[ParseDiagnostic] = Field(default_factory=list)

    def walk_nodes(self) -> Iterator[ASTNode]:
        for root in self.root_nodes:
            yield from root.walk()

    def find_node(self, node_id: str) -> ASTNode | None:
        for node in self.walk_nodes():
            if node.id == node_id:
                return node
        return None

    def parent_of(self, node_id: str) -> ASTNode | None:
        """Return the parent of a node, None for roots and unknown IDs."""
        for node in self.walk_nodes():
            for child in node.children:
                if child.id == node_id:
                    return node
        return None
