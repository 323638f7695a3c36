"""
DSL serializer for umlbox.

Two ways back to text:
- serialize_ast() regenerates a whole document from a DiagramAST
- update_source_positions() patches `@ x,y` into the user's own text,
  leaving everything else as written

sync_ast_positions() keeps the tree view in step with the flat view after
a layout or a drag.
"""

from __future__ import annotations

import logging
import re

from . import ir
from .lexer import INTERFACE_PATTERN

logger = logging.getLogger(__name__)

INDENT = "    "

NODE_LINE = re.compile(r"^(?P<indent>\s*)\[(?P<id>[^\]\s]+)\](?P<rest>.*)$")
POSITION = re.compile(r"\s*@\s*-?\d+(?:\.\d+)?\s*,\s*-?\d+(?:\.\d+)?")


# =============================================================================
# AST -> DSL
# =============================================================================


def serialize_ast(ast: ir.DiagramAST) -> str:
    """
    Regenerate DSL text for an AST.

    Nodes come first, in document order, with their ports inside their
    block; connectors follow at the end of the diagram block. Parsing the
    result gives back an equal AST.
    """
    lines = [f"[{ast.type.value}] {{"]
    for node in ast.root_nodes:
        emit_node(node, lines, 1)
    if ast.root_nodes and ast.connectors:
        lines.append("")
    for connector in ast.connectors:
        lines.append(INDENT + format_connector(connector))
    lines.append("}")
    return "\n".join(lines) + "\n"


def emit_node(node: ir.ASTNode, lines: list[str], depth: int) -> None:
    pad = INDENT * depth
    header = f"[{node.id}]"
    if node.label:
        header += f" {node.label}"
    if node.x is not None and node.y is not None:
        header += f" @ {format_coordinate(node.x)},{format_coordinate(node.y)}"

    if not node.children and not node.ports:
        lines.append(pad + header)
        return

    lines.append(f"{pad}{header} {{")
    for port in node.ports:
        lines.append(pad + INDENT + format_port(port, node.id))
    for child in node.children:
        emit_node(child, lines, depth + 1)
    lines.append(pad + "}")


def format_coordinate(value: float) -> str:
    return str(int(round(value)))


def format_label(label: str | None) -> str:
    if label is None:
        return ""
    return f" : {label}".rstrip()


def format_port(port: ir.ASTPort, owner_id: str) -> str:
    if port.connector_ref:
        text = f"port [{port.id}] with [{port.connector_ref}] {port.side.value}"
    else:
        text = f"port [{port.id}] on [{owner_id}] {port.side.value}"
    return text + format_label(port.label)


def format_endpoint(node_id: str, port_id: str | None) -> str:
    return f"{node_id}.{port_id}" if port_id else node_id


def connector_symbol(connector: ir.Connector) -> str:
    if isinstance(connector, ir.InterfaceConnector):
        return connector.notation
    if isinstance(connector, ir.DelegateConnector):
        return "->delegate->"
    return connector.arrow


def format_connector(connector: ir.Connector) -> str:
    parts = []
    if connector.name:
        parts.append(f"[{connector.name}]")
    if connector.interface_name:
        parts.append(connector.interface_name)
    parts.append(format_endpoint(connector.source_id, connector.source_port))
    parts.append(connector_symbol(connector))
    parts.append(format_endpoint(connector.target_id, connector.target_port))
    return " ".join(parts) + format_label(connector.label)


# =============================================================================
# Position write-back
# =============================================================================


def is_connector_line(line: str) -> bool:
    return "->" in line or INTERFACE_PATTERN.search(line) is not None


def update_source_positions(text: str, diagram: ir.Diagram) -> str:
    """
    Write node positions into the original source text.

    Each line that starts with `[id]` for a known node gets its `@ x,y`
    replaced, or inserted before the `{` that opens its block. Lines
    holding a connector are left alone, as is every other line.

    Args:
        text: Original DSL text
        diagram: Laid out diagram

    Returns:
        Patched text; identical line structure
    """
    out = []
    patched = 0
    for line in text.split("\n"):
        match = NODE_LINE.match(line)
        node = diagram.get_node(match.group("id")) if match else None
        if node is None or is_connector_line(line):
            out.append(line)
            continue

        # Only the header before the node's own `{` is rewritten
        header, brace, block = match.group("rest").partition("{")
        header = POSITION.sub("", header).rstrip()
        header += f" @ {format_coordinate(node.x)},{format_coordinate(node.y)}"
        if brace:
            header += " {" + block.rstrip()
        out.append(f"{match.group('indent')}[{node.id}]{header}")
        patched += 1

    logger.debug("Updated positions on %d lines", patched)
    return "\n".join(out)


def sync_ast_positions(ast: ir.DiagramAST, diagram: ir.Diagram) -> None:
    """Copy centres and sizes from the flat view onto the AST nodes."""
    for ast_node in ast.walk_nodes():
        node = diagram.get_node(ast_node.id)
        if node is None:
            continue
        ast_node.x = node.x
        ast_node.y = node.y
        ast_node.width = node.width
        ast_node.height = node.height
