"""
umlbox DSL Parser Package.

This package provides a modular recursive-descent parser for the umlbox
component-diagram DSL. Parsing logic is split into mixins by construct type:

- NodeParserMixin: `[id] label @ x,y { ... }`
- EdgeParserMixin: edges, named edges, node-vs-edge lookahead
- PortParserMixin: `port [id] on [node] side` / `port [id] with [conn] side`

Usage:
    from umlbox.core.dsl_parser_impl import parse_dsl

    ast = parse_dsl(text)
"""

from pathlib import Path

from .. import ir
from ..lexer import TokenType, tokenize
from .base import MAX_DEPTH, BaseParser
from .edge import EdgeParserMixin, split_endpoint
from .node import NodeParserMixin
from .port import PortParserMixin


class Parser(
    BaseParser,
    NodeParserMixin,
    EdgeParserMixin,
    PortParserMixin,
):
    """
    Complete umlbox DSL Parser.

    Grammar (informal):
        Diagram   := '[' DiagramType ']' '{' Block '}' | Block
        Block     := (Statement | NEWLINE)*
        Statement := PortDecl | NamedEdge | Node | Edge
    """

    def parse(self) -> ir.DiagramAST:
        """
        Parse the whole document.

        Returns:
            DiagramAST with root nodes, connectors and diagnostics

        Raises:
            ParseError: On the first syntax error; nothing is returned
        """
        diagram_type = ir.DiagramType.COMPONENT

        self.skip_newlines()

        if self.at_diagram_wrapper():
            self.advance()
            diagram_type = ir.DiagramType(self.advance().value)
            self.expect(TokenType.RBRACKET, "Expected ']' after diagram type")
            self.skip_newlines()
            self.expect(TokenType.LBRACE, f"Expected '{{' to open {diagram_type.value} diagram")
            self.parse_block()
            self.expect(TokenType.RBRACE, f"Expected '}}' to close {diagram_type.value} diagram")
            self.skip_newlines()
            if not self.match(TokenType.EOF):
                raise self.error("Unexpected content after diagram block")
        else:
            self.parse_block()
            if self.match(TokenType.RBRACE):
                raise self.error("Unexpected '}' without matching '{'")

        return ir.DiagramAST(
            type=diagram_type,
            root_nodes=self.root_nodes,
            connectors=self.connectors,
            diagnostics=self.diagnostics,
        )

    def at_diagram_wrapper(self) -> bool:
        """`[` starts the wrapper only when a known diagram type follows it."""
        next_token = self.peek_token()
        return (
            self.match(TokenType.LBRACKET)
            and next_token.type == TokenType.IDENTIFIER
            and next_token.value in ir.DIAGRAM_TYPE_NAMES
        )

    def parse_statement(self) -> None:
        if self.match(TokenType.PORT):
            self.parse_port()
        elif self.match(TokenType.LBRACKET):
            self.parse_bracket_statement()
        elif self.match(TokenType.IDENTIFIER):
            self.parse_edge()
        else:
            self.skip_line()


def parse_dsl(text: str, file: Path | None = None) -> ir.DiagramAST:
    """
    Parse DSL text into a DiagramAST.

    Args:
        text: Diagram source
        file: Source path, used only in error messages

    Returns:
        DiagramAST

    Raises:
        ParseError: If the text has a syntax error
    """
    parser = Parser(tokenize(text), file=file, text=text)
    return parser.parse()


__all__ = [
    "MAX_DEPTH",
    "Parser",
    "parse_dsl",
    "split_endpoint",
]
