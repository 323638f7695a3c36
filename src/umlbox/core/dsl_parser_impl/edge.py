"""
Edge parsing for the umlbox DSL.

Handles plain, delegate and interface connectors, optional connector names
and interface names, and the node-vs-edge decision after `[id]`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import Token, TokenType
from .base import CONNECTOR_TOKENS


def split_endpoint(value: str) -> tuple[str, str | None]:
    """Split `node.port` into its node and port parts."""
    node_id, _, port_id = value.partition(".")
    return node_id, port_id or None


class EdgeParserMixin:
    """Mixin for edges and named edges."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        mark: Any
        reset: Any
        error: Any
        current_token: Any
        parse_trailing_label: Any
        parse_node: Any
        connectors: list[ir.Connector]

    def at_edge_start(self) -> bool:
        """
        Check whether the tokens at the cursor start an edge body.

        An edge body is one identifier (the source) or two identifiers (an
        interface name and the source) followed by a connector. The cursor
        is always restored.
        """
        start = self.mark()
        try:
            for _ in range(2):
                if not self.match(TokenType.IDENTIFIER):
                    return False
                self.advance()
                if self.match(*CONNECTOR_TOKENS):
                    return True
            return False
        finally:
            self.reset(start)

    def parse_bracket_statement(self) -> None:
        """
        Parse a statement starting with `[`: a named edge or a node.

        After `[ID]` the parser looks ahead for an edge body. If there is
        none it rewinds to the opening bracket and parses a node.
        """
        start = self.mark()
        self.expect(TokenType.LBRACKET)
        name_token = self.expect(TokenType.IDENTIFIER, "Expected node ID or connector name")
        self.expect(TokenType.RBRACKET, f"Expected ']' after '{name_token.value}'")

        if self.at_edge_start():
            self.parse_edge(name=name_token.value)
            return

        self.reset(start)
        self.parse_node()

    def parse_edge(self, name: str | None = None) -> ir.Connector:
        """
        Parse an edge.

        Grammar:
            Edge := (InterfaceName Identifier | Identifier) Connector Identifier (':' Label)?
        """
        first = self.expect(TokenType.IDENTIFIER, "Expected source node")
        interface_name = None
        source = first
        if self.match(TokenType.IDENTIFIER):
            interface_name = first.value
            source = self.advance()

        connector_token = self.current_token()
        if not self.match(*CONNECTOR_TOKENS):
            raise self.error(
                f"Expected connector (->, -->, ->delegate-> or interface notation) "
                f"after '{source.value}'",
                connector_token,
            )
        self.advance()

        target = self.expect(TokenType.IDENTIFIER, "Expected target node")
        label = self.parse_trailing_label()

        source_id, source_port = split_endpoint(source.value)
        target_id, target_port = split_endpoint(target.value)

        connector = self.make_connector(
            connector_token,
            id=f"edge-{len(self.connectors)}",
            name=name,
            source_id=source_id,
            target_id=target_id,
            source_port=source_port,
            target_port=target_port,
            label=label,
            interface_name=interface_name,
        )
        self.connectors.append(connector)
        return connector

    def make_connector(self, token: Token, **payload: str | None) -> ir.Connector:
        """Create the connector variant matching the connector token."""
        if token.type == TokenType.DELEGATE_ARROW:
            return ir.DelegateConnector(**payload)
        if token.type == TokenType.INTERFACE_CONNECTOR:
            return ir.InterfaceConnector(notation=token.value, **payload)
        return ir.PlainConnector(arrow=token.value, **payload)
