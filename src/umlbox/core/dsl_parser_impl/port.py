"""
Port parsing for the umlbox DSL.

Handles `port [id] on [node] side : label` and, inside a node block,
`port [id] with [connector] side : label`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class PortParserMixin:
    """Mixin for port declarations."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        error: Any
        warn: Any
        parse_trailing_label: Any
        scope: list[ir.ASTNode]
        root_nodes: list[ir.ASTNode]

    def parse_port(self) -> ir.ASTPort | None:
        """
        Parse a port declaration and attach it to its node.

        Grammar:
            PortDecl := 'port' '[' ID ']' ('on' '[' NodeId ']' | 'with' '[' Name ']') SIDE (':' Label)?

        Returns:
            The attached port, or None when the target node does not exist
        """
        port_token = self.expect(TokenType.PORT)
        self.expect(TokenType.LBRACKET, "Expected '[' after 'port'")
        port_id = self.expect(TokenType.IDENTIFIER, "Expected port ID").value
        self.expect(TokenType.RBRACKET, f"Expected ']' after port ID '{port_id}'")

        owner: ir.ASTNode | None = None
        node_id: str | None = None
        connector_ref: str | None = None

        if self.match(TokenType.ON):
            self.advance()
            self.expect(TokenType.LBRACKET, "Expected '[' after 'on'")
            node_id = self.expect(TokenType.IDENTIFIER, "Expected node ID").value
            self.expect(TokenType.RBRACKET, f"Expected ']' after node ID '{node_id}'")
        elif self.match(TokenType.WITH):
            with_token = self.advance()
            self.expect(TokenType.LBRACKET, "Expected '[' after 'with'")
            connector_ref = self.expect(TokenType.IDENTIFIER, "Expected connector name").value
            self.expect(TokenType.RBRACKET, f"Expected ']' after connector name '{connector_ref}'")
            if not self.scope:
                raise self.error(
                    f"'port [{port_id}] with [{connector_ref}]' is only allowed inside a node block",
                    with_token,
                )
            owner = self.scope[-1]
        else:
            raise self.error(f"Expected 'on' or 'with' after port ID '{port_id}'")

        side = ir.Side(
            self.expect(TokenType.SIDE, "Expected port side (left, right, top or bottom)").value
        )
        label = self.parse_trailing_label()

        if owner is None:
            owner = self.find_declared_node(node_id)
        if owner is None:
            self.warn(f"Node '{node_id}' not found for port '{port_id}'", port_token)
            return None

        port = ir.ASTPort(id=port_id, label=label, side=side, connector_ref=connector_ref)
        owner.ports.append(port)
        return port

    def find_declared_node(self, node_id: str | None) -> ir.ASTNode | None:
        """Search the open blocks first (innermost out), then every node declared so far."""
        if not node_id:
            return None
        for open_node in reversed(self.scope):
            if open_node.id == node_id:
                return open_node
        for root in self.root_nodes:
            found = root.find(node_id)
            if found:
                return found
        return None
