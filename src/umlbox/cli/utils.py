"""
umlbox CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer

from umlbox.core.errors import ConfigError, ParseError
from umlbox.core.ir import ParseDiagnostic
from umlbox.core.manifest import ProjectManifest, find_manifest, load_manifest

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_version() -> str:
    """Get umlbox version from package metadata."""
    from umlbox import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"umlbox version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(
            f"  Python:        {platform.python_implementation()} {platform.python_version()}"
        )
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def read_source(file: Path) -> str:
    """Read a diagram file or exit with an error."""
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {file}: {e.strerror}", err=True)
        raise typer.Exit(code=1) from None


def resolve_manifest(file: Path, manifest: Path | None) -> ProjectManifest:
    """
    Load the manifest given on the command line, or the nearest one above the file.

    Exits with status 1 on a configuration error.
    """
    path = manifest or find_manifest(file.parent)
    if path is None:
        return ProjectManifest()
    try:
        return load_manifest(path)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(code=1) from None


def print_human_diagnostics(diagnostics: list[ParseDiagnostic], file: Path) -> None:
    """Print diagnostics in human-readable format."""
    for diagnostic in diagnostics:
        typer.echo(
            f"WARNING: {file}:{diagnostic.line}:{diagnostic.column}: {diagnostic.message}"
        )

    if not diagnostics:
        typer.echo("OK: diagram is valid.")


def print_vscode_diagnostics(diagnostics: list[ParseDiagnostic], file: Path) -> None:
    """
    Print diagnostics in VS Code format: file:line:col: severity: message
    """
    for diagnostic in diagnostics:
        typer.echo(
            f"{file}:{diagnostic.line}:{diagnostic.column}: "
            f"{diagnostic.severity}: {diagnostic.message}",
            err=True,
        )

    if not diagnostics:
        typer.echo("::notice: Validation successful")


def print_parse_error(error: ParseError, file: Path, format: str) -> None:
    """Print a parse error with its location, in either output format."""
    if format == "vscode":
        typer.echo(f"{file}:{error.line}:{error.column}: error: {error.message}", err=True)
    else:
        typer.echo(f"Parse error: {error}", err=True)
