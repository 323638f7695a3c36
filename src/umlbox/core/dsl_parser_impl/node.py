"""
Node parsing for the umlbox DSL.

Handles `[id] label @ x,y { ... }` declarations and nesting.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType
from .base import MAX_DEPTH


class NodeParserMixin:
    """Mixin for node declarations."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        warn: Any
        collect_text: Any
        parse_block: Any
        scope: list[ir.ASTNode]
        root_nodes: list[ir.ASTNode]

    def parse_node(self) -> ir.ASTNode:
        """
        Parse a node declaration and attach it to the tree.

        Grammar:
            Node := '[' ID ']' Label? ('@' NUMBER ',' NUMBER)? ('{' Block '}')?

        A node is attached to its parent when it is opened, so ports and
        edges inside its own block can already find it. Nodes opened at
        MAX_DEPTH or deeper are parsed but left out of the tree.
        """
        open_token = self.expect(TokenType.LBRACKET)
        node_id = self.expect(TokenType.IDENTIFIER, "Expected node ID").value
        self.expect(TokenType.RBRACKET, f"Expected ']' after node ID '{node_id}'")

        label = self.collect_text(
            TokenType.AT, TokenType.LBRACE, TokenType.NEWLINE, TokenType.RBRACE
        )

        x = y = None
        if self.match(TokenType.AT):
            self.advance()
            x = self.parse_coordinate()
            self.expect(TokenType.COMMA, "Expected ',' between coordinates")
            y = self.parse_coordinate()

        node = ir.ASTNode(id=node_id, label=label, x=x, y=y)

        if len(self.scope) >= MAX_DEPTH:
            self.warn(
                f"Node '{node_id}' exceeds maximum nesting depth of {MAX_DEPTH} and was dropped",
                open_token,
            )
        elif self.scope:
            self.scope[-1].children.append(node)
        else:
            self.root_nodes.append(node)

        if self.match(TokenType.LBRACE):
            self.advance()
            self.scope.append(node)
            self.parse_block()
            self.expect(TokenType.RBRACE, f"Expected '}}' to close node '{node_id}'")
            self.scope.pop()

        return node

    def parse_coordinate(self) -> float:
        token = self.expect(TokenType.NUMBER, "Expected number in coordinates")
        return float(int(token.value))
