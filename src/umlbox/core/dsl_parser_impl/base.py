"""
Base parser class for the umlbox DSL.

Provides common token manipulation, checkpointing and diagnostic utilities
used by all parser mixins.
"""

import logging
from pathlib import Path

from .. import ir
from ..errors import ParseError, extract_snippet, make_parse_error
from ..lexer import Token, TokenType

logger = logging.getLogger(__name__)

MAX_DEPTH = 50

CONNECTOR_TOKENS = (
    TokenType.ARROW,
    TokenType.DELEGATE_ARROW,
    TokenType.INTERFACE_CONNECTOR,
)

# Readable names for error messages
TOKEN_DESCRIPTIONS = {
    TokenType.LBRACKET: "'['",
    TokenType.RBRACKET: "']'",
    TokenType.LBRACE: "'{'",
    TokenType.RBRACE: "'}'",
    TokenType.AT: "'@'",
    TokenType.COMMA: "','",
    TokenType.COLON: "':'",
    TokenType.ARROW: "arrow",
    TokenType.DELEGATE_ARROW: "delegate arrow",
    TokenType.INTERFACE_CONNECTOR: "interface connector",
    TokenType.PORT: "'port'",
    TokenType.ON: "'on'",
    TokenType.WITH: "'with'",
    TokenType.SIDE: "side",
    TokenType.IDENTIFIER: "identifier",
    TokenType.NUMBER: "number",
    TokenType.STRING: "text",
    TokenType.NEWLINE: "end of line",
    TokenType.WHITESPACE: "whitespace",
    TokenType.EOF: "end of input",
}


def describe(token_type: TokenType) -> str:
    return TOKEN_DESCRIPTIONS.get(token_type, token_type.name)


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing:
    an explicit cursor over the token list, checkpoints for lookahead,
    the stack of currently open node scopes and the diagnostics list.
    """

    def __init__(self, tokens: list[Token], file: Path | None = None, text: str | None = None):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer (whitespace trivia is dropped)
            file: Source file path (for error reporting)
            text: Source text (for error snippets)
        """
        self.tokens = [t for t in tokens if t.type != TokenType.WHITESPACE]
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            last = self.tokens[-1] if self.tokens else None
            line = last.line if last else 1
            column = last.column + len(last.value) if last else 1
            self.tokens.append(Token(TokenType.EOF, "", line, column))
        self.file = file
        self.text = text
        self.pos = 0

        self.scope: list[ir.ASTNode] = []
        self.root_nodes: list[ir.ASTNode] = []
        self.connectors: list[ir.Connector] = []
        self.diagnostics: list[ir.ParseDiagnostic] = []

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType, message: str | None = None) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise self.error(
                message or f"Expected {describe(token_type)}, got {describe(token.type)}",
                token,
            )
        return self.advance()

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def mark(self) -> int:
        """Checkpoint the cursor for a speculative parse."""
        return self.pos

    def reset(self, mark: int) -> None:
        """Rewind the cursor to a checkpoint taken with mark()."""
        self.pos = mark

    def skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def error(self, message: str, token: Token | None = None) -> ParseError:
        """Build a ParseError located at a token (current token by default)."""
        token = token or self.current_token()
        snippet = extract_snippet(self.text, token.line) if self.text else None
        return make_parse_error(message, token.line, token.column, self.file, snippet)

    def warn(self, message: str, token: Token | None = None) -> None:
        """Record a non-fatal diagnostic; the offending construct is dropped."""
        token = token or self.current_token()
        self.diagnostics.append(
            ir.ParseDiagnostic(message=message, line=token.line, column=token.column)
        )
        logger.warning("%s:%d:%d: %s", self.file or "<input>", token.line, token.column, message)

    def collect_text(self, *stop_types: TokenType) -> str:
        """Join token values with single spaces up to one of the stop types."""
        parts = []
        while not self.match(TokenType.EOF, *stop_types):
            parts.append(self.advance().value)
        return " ".join(parts).strip()

    def parse_trailing_label(self) -> str | None:
        """Parse an optional `: label` running to the end of the line."""
        if not self.match(TokenType.COLON):
            return None
        self.advance()
        return self.collect_text(TokenType.NEWLINE, TokenType.RBRACE)

    def parse_block(self) -> None:
        """
        Parse statements until `}` or end of input.

        The closing brace itself is left for the caller.
        """
        while not self.match(TokenType.EOF, TokenType.RBRACE):
            if self.match(TokenType.NEWLINE):
                self.advance()
                continue
            self.parse_statement()

    def parse_statement(self) -> None:
        raise NotImplementedError

    def skip_line(self) -> None:
        """Drop an unrecognized statement up to the end of its line."""
        token = self.current_token()
        self.warn(f"Unexpected {describe(token.type)} {token.value!r}, skipping line", token)
        self.advance()
        while not self.match(TokenType.NEWLINE, TokenType.RBRACE, TokenType.EOF):
            self.advance()
