"""
Error types for umlbox DSL parsing and configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class UmlboxError(Exception):
    """Base exception for all umlbox errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(UmlboxError):
    """
    Raised when diagram source cannot be parsed.

    Examples:
    - Missing closing bracket or brace
    - Edge without a connector between its endpoints
    - Port declaration with an invalid side
    - `port ... with [...]` outside a node block

    A ParseError aborts the whole parse attempt; no partial AST is produced.
    """

    @property
    def line(self) -> int:
        return self.context.line if self.context else 1

    @property
    def column(self) -> int:
        return self.context.column if self.context else 1


class ConfigError(UmlboxError):
    """
    Raised when umlbox.toml cannot be loaded.

    Examples:
    - Unknown key in the [layout] table
    - Non-numeric spacing value
    - Unknown theme name
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional path to the source file where the error occurred
        snippet: Optional code snippet showing the error location
    """

    line: int
    column: int
    file: Path | None = None
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "diagram.uml:10:5"
        """
        location = f"{self.file or '<input>'}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to 2 lines before the error
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def extract_snippet(text: str, line: int, context: int = 2) -> str:
    """Return the source lines around ``line`` for error display."""
    lines = text.split("\n")
    start = max(0, line - 1 - context)
    end = min(len(lines), line + context)
    return "\n".join(lines[start:end])


def make_parse_error(
    message: str,
    line: int,
    column: int,
    file: Path | None = None,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional source file path
        snippet: Optional code snippet

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(line=line, column=column, file=file, snippet=snippet)
    return ParseError(message, context)


def make_config_error(message: str, file: Path | None = None) -> ConfigError:
    """
    Helper to create a ConfigError, locating it at the top of the file.

    Args:
        message: Error description
        file: Optional manifest path

    Returns:
        ConfigError with context if a file is known
    """
    if file:
        return ConfigError(message, ErrorContext(line=1, column=1, file=file))
    return ConfigError(message)
