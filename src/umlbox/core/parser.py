import logging
from dataclasses import dataclass, field
from pathlib import Path

from . import ir
from .builder import build_diagram
from .dsl_parser_impl import parse_dsl
from .errors import ParseError
from .lexer import Token, tokenize

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """
    Outcome of one parse attempt for an editor host.

    Attributes:
        diagram: Built diagram, empty when parsing failed
        ast: Parsed AST, None when parsing failed
        tokens: Tokens of the source (without trivia), None when parsing failed
        error: The parse error, if any
    """

    diagram: ir.Diagram = field(default_factory=ir.Diagram)
    ast: ir.DiagramAST | None = None
    tokens: list[Token] | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_file(path: Path) -> ir.DiagramAST:
    """
    Parse a diagram file.

    Args:
        path: Path to a UTF-8 DSL file

    Returns:
        DiagramAST

    Raises:
        ParseError: If the file has a syntax error
    """
    text = path.read_text(encoding="utf-8")
    return parse_dsl(text, path)


def parse_diagram(text: str, file: Path | None = None) -> ParseResult:
    """
    Parse and build a diagram, all or nothing.

    On a syntax error the result carries an empty diagram and the error;
    nothing from the failed attempt is kept.

    Args:
        text: Diagram source
        file: Optional source path for error messages

    Returns:
        ParseResult
    """
    try:
        ast = parse_dsl(text, file)
    except ParseError as e:
        logger.info("Parse failed: %s", e.message)
        return ParseResult(error=e)

    return ParseResult(
        diagram=build_diagram(ast),
        ast=ast,
        tokens=tokenize(text),
    )
