"""
umlbox CLI Package.

- diagram.py: tokens, check, build, fmt and layout commands
- ui.py: rich tables and styled messages
- utils.py: version, logging, manifest lookup and diagnostics output
"""

import typer

from umlbox.cli.diagram import (
    build_command,
    check_command,
    fmt_command,
    layout_command,
    tokens_command,
)
from umlbox.cli.utils import configure_logging, get_version, version_callback

app = typer.Typer(
    help="""umlbox – text DSL for UML component diagrams

Commands:
  • Inspect: tokens, check
  • Produce: build (JSON), fmt (canonical DSL)
  • Edit in place: layout --write, fmt --write
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """umlbox CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="tokens")(tokens_command)
app.command(name="check")(check_command)
app.command(name="build")(build_command)
app.command(name="fmt")(fmt_command)
app.command(name="layout")(layout_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]
