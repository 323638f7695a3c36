"""
Rich output components for the umlbox CLI.

Tables for tokens and diagram summaries; machine-readable output (JSON,
DSL text) goes through typer.echo instead.
"""

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from umlbox.core.ir import Diagram
from umlbox.core.lexer import Token, TokenType

console = Console()

# Style definitions
STYLES = {
    "title": Style(color="bright_cyan", bold=True),
    "success": Style(color="green", bold=True),
    "muted": Style(color="bright_black"),
    "keyword": Style(color="magenta"),
    "connector": Style(color="yellow"),
    "identifier": Style(color="bright_white"),
}

TOKEN_STYLES = {
    TokenType.PORT: "keyword",
    TokenType.ON: "keyword",
    TokenType.WITH: "keyword",
    TokenType.SIDE: "keyword",
    TokenType.ARROW: "connector",
    TokenType.DELEGATE_ARROW: "connector",
    TokenType.INTERFACE_CONNECTOR: "connector",
    TokenType.IDENTIFIER: "identifier",
    TokenType.WHITESPACE: "muted",
    TokenType.NEWLINE: "muted",
    TokenType.EOF: "muted",
}


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_tokens(tokens: list[Token]) -> None:
    """Print a token stream as a table: position, type, value."""
    table = Table(box=box.SIMPLE, padding=(0, 1))
    table.add_column("Pos", justify="right", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Value", overflow="fold")

    for token in tokens:
        style = STYLES.get(TOKEN_STYLES.get(token.type, ""), "")
        table.add_row(
            f"{token.line}:{token.column}",
            Text(token.type.name, style=style),
            repr(token.value),
        )

    console.print(table)


def print_diagram_summary(diagram: Diagram) -> None:
    """Print node, port and connector counts with the node tree."""
    console.print(Text(f"{diagram.type.value}", style=STYLES["title"]))

    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    table.add_column("Node", no_wrap=True)
    table.add_column("Label")
    table.add_column("Ports", justify="right")

    for node in diagram.nodes:
        table.add_row(
            "  " * node.depth + node.id,
            node.label,
            str(len(diagram.ports_of(node.id))),
        )

    console.print(table)
    console.print(
        Text(
            f"{len(diagram.nodes)} nodes, {len(diagram.ports)} ports, "
            f"{len(diagram.connectors)} connectors",
            style=STYLES["muted"],
        )
    )
