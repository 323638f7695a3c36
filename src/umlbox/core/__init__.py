"""Core umlbox functionality: lexer, parser, IR, diagram builder, serializer, manifest."""

from . import ir
from .builder import build_diagram
from .dsl_parser_impl import parse_dsl
from .errors import ConfigError, ErrorContext, ParseError, UmlboxError
from .lexer import Token, TokenType, tokenize
from .parser import ParseResult, parse_diagram, parse_file
from .serializer import serialize_ast, sync_ast_positions, update_source_positions

__all__ = [
    "ir",
    "UmlboxError",
    "ParseError",
    "ConfigError",
    "ErrorContext",
    "Token",
    "TokenType",
    "tokenize",
    "parse_dsl",
    "parse_file",
    "parse_diagram",
    "ParseResult",
    "build_diagram",
    "serialize_ast",
    "update_source_positions",
    "sync_ast_positions",
]
