"""
Lexer/Tokenizer for the umlbox component-diagram DSL.

Converts raw DSL text into a stream of tokens with source location tracking.
The lexer never rejects input: characters that do not start a known token
become single-character STRING tokens and any failure is left to the parser.
"""

import re
from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Token types in the umlbox DSL."""

    # Delimiters
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    AT = "@"
    COMMA = ","
    COLON = ":"

    # Connectors
    ARROW = "ARROW"  # -> and -->
    DELEGATE_ARROW = "DELEGATE_ARROW"  # ->delegate->
    INTERFACE_CONNECTOR = "INTERFACE_CONNECTOR"  # -())-, -(()-, -)-, ...

    # Keywords
    PORT = "port"
    ON = "on"
    WITH = "with"
    SIDE = "SIDE"  # left, right, top, bottom

    # Literals
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"

    # Trivia
    NEWLINE = "NEWLINE"
    WHITESPACE = "WHITESPACE"

    # Special
    EOF = "EOF"


KEYWORDS = {
    "port": TokenType.PORT,
    "on": TokenType.ON,
    "with": TokenType.WITH,
}

SIDES = {"left", "right", "top", "bottom"}

SINGLE_CHAR_TOKENS = {
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "@": TokenType.AT,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}

# Tried longest first
CONNECTOR_LITERALS = (
    ("->delegate->", TokenType.DELEGATE_ARROW),
    ("-->", TokenType.ARROW),
    ("->", TokenType.ARROW),
)

INTERFACE_PATTERN = re.compile(r"-(?:\(\)|[()])+-")

# A dash followed by one of these ends an identifier
CONNECTOR_FOLLOWERS = (">", "(", ")")

TRIVIA = (" ", "\t", "\r")

DIGITS = "0123456789"


@dataclass
class Token:
    """
    A single token in the DSL.

    Attributes:
        type: Type of token
        value: Source text of the token
        line: Line number (1-indexed)
        column: Column number of the first character (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the umlbox DSL.

    Line breaks are significant only as statement separators, so they are
    emitted as NEWLINE tokens rather than skipped.
    """

    def __init__(self, text: str, keep_trivia: bool = False):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            keep_trivia: Emit WHITESPACE tokens instead of skipping blanks
        """
        self.text = text
        self.keep_trivia = keep_trivia
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self, count: int = 1) -> None:
        """Move forward, updating line/column."""
        for _ in range(count):
            if self.pos >= len(self.text):
                return
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def read_whitespace(self) -> str:
        """Read a run of blanks (never newlines)."""
        start = self.pos
        while self.current_char() in TRIVIA:
            self.advance()
        return self.text[start : self.pos]

    def read_identifier(self) -> str:
        """
        Read an identifier, keyword or side name.

        Dots are kept so that `node.port` arrives as one token. A dash is
        part of the identifier (`uml2.5-component`) unless the next character
        is `>`, `(` or `)`.
        """
        chars = []
        current = self.current_char()
        while current is not None:
            if current.isalnum() or current in ("_", "."):
                chars.append(current)
            elif current == "-" and self.peek_char() not in CONNECTOR_FOLLOWERS:
                chars.append(current)
            else:
                break
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_number(self) -> str:
        """Read an integer with optional leading minus sign."""
        chars = []
        if self.current_char() == "-":
            chars.append("-")
            self.advance()
        current = self.current_char()
        while current is not None and current in DIGITS:
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def match_connector(self) -> tuple[TokenType, str] | None:
        """Match a connector literal or interface notation at the cursor."""
        for literal, token_type in CONNECTOR_LITERALS:
            if self.text.startswith(literal, self.pos):
                return token_type, literal

        match = INTERFACE_PATTERN.match(self.text, self.pos)
        if match:
            return TokenType.INTERFACE_CONNECTOR, match.group(0)
        return None

    def emit(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(token_type, value, line, column))

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens terminated by a single EOF token
        """
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            token_line = self.line
            token_col = self.column

            # Blanks
            if ch in TRIVIA:
                value = self.read_whitespace()
                if self.keep_trivia:
                    self.emit(TokenType.WHITESPACE, value, token_line, token_col)
                continue

            # Newlines
            if ch == "\n":
                self.advance()
                self.emit(TokenType.NEWLINE, "\n", token_line, token_col)
                continue

            # Delimiters
            if ch in SINGLE_CHAR_TOKENS:
                self.advance()
                self.emit(SINGLE_CHAR_TOKENS[ch], ch, token_line, token_col)
                continue

            # Arrows and interface connectors
            if ch == "-":
                connector = self.match_connector()
                if connector:
                    token_type, value = connector
                    self.advance(len(value))
                    self.emit(token_type, value, token_line, token_col)
                    continue

            # Identifiers, keywords and sides
            if ch.isalpha() or ch in ("_", "."):
                value = self.read_identifier()
                if value in KEYWORDS:
                    token_type = KEYWORDS[value]
                elif value in SIDES:
                    token_type = TokenType.SIDE
                else:
                    token_type = TokenType.IDENTIFIER
                self.emit(token_type, value, token_line, token_col)
                continue

            # Numbers
            if ch in DIGITS or (ch == "-" and (self.peek_char() or "x") in DIGITS):
                value = self.read_number()
                self.emit(TokenType.NUMBER, value, token_line, token_col)
                continue

            # Anything else is opaque label text
            self.advance()
            self.emit(TokenType.STRING, ch, token_line, token_col)

        self.emit(TokenType.EOF, "", self.line, self.column)
        return self.tokens


def tokenize(text: str, keep_trivia: bool = False) -> list[Token]:
    """
    Convenience function to tokenize DSL text.

    Args:
        text: Source text
        keep_trivia: Keep blank runs as WHITESPACE tokens (for highlighters)

    Returns:
        List of tokens
    """
    lexer = Lexer(text, keep_trivia=keep_trivia)
    return lexer.tokenize()
