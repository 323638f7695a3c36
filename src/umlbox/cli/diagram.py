"""
Diagram commands for the umlbox CLI.

Each command takes one diagram file. Machine-readable output goes to stdout;
errors and warnings go to stderr.
"""

import json
from pathlib import Path

import typer

from umlbox.core.builder import build_diagram
from umlbox.core.dsl_parser_impl import parse_dsl
from umlbox.core.errors import ParseError
from umlbox.core.ir import DiagramAST
from umlbox.core.lexer import tokenize
from umlbox.core.serializer import serialize_ast, update_source_positions
from umlbox.layout import layout

from .ui import print_diagram_summary, print_success, print_tokens
from .utils import (
    print_human_diagnostics,
    print_parse_error,
    print_vscode_diagnostics,
    read_source,
    resolve_manifest,
)


def parse_or_exit(text: str, file: Path, format: str = "human") -> DiagramAST:
    try:
        return parse_dsl(text, file)
    except ParseError as e:
        print_parse_error(e, file, format)
        raise typer.Exit(code=1) from None


def tokens_command(
    file: Path = typer.Argument(..., help="Diagram file"),
    trivia: bool = typer.Option(False, "--trivia", help="Include whitespace tokens"),
) -> None:
    """
    Print the token stream of a diagram file.
    """
    text = read_source(file)
    print_tokens(tokenize(text, keep_trivia=trivia))


def check_command(
    file: Path = typer.Argument(..., help="Diagram file"),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human' or 'vscode'"
    ),
) -> None:
    """
    Parse a diagram and report syntax errors and warnings.

    Exits with status 1 on a syntax error. Warnings (dropped nodes, unknown
    statements) do not fail the check.
    """
    text = read_source(file)
    ast = parse_or_exit(text, file, format)

    if format == "vscode":
        print_vscode_diagnostics(ast.diagnostics, file)
    else:
        print_diagram_summary(build_diagram(ast))
        print_human_diagnostics(ast.diagnostics, file)


def build_command(
    file: Path = typer.Argument(..., help="Diagram file"),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Path to umlbox.toml (default: nearest above FILE)"
    ),
    no_layout: bool = typer.Option(False, "--no-layout", help="Skip the layout pass"),
) -> None:
    """
    Build the flat diagram and print it as JSON.
    """
    text = read_source(file)
    project = resolve_manifest(file, manifest)
    ast = parse_or_exit(text, file)

    diagram = build_diagram(ast)
    if not no_layout:
        layout(diagram, project.layout)

    output = {
        "theme": project.theme.value,
        "diagram": diagram.model_dump(mode="json"),
        "diagnostics": [d.model_dump(mode="json") for d in ast.diagnostics],
    }
    typer.echo(json.dumps(output, indent=2))


def fmt_command(
    file: Path = typer.Argument(..., help="Diagram file"),
    write: bool = typer.Option(False, "--write", "-w", help="Rewrite the file in place"),
) -> None:
    """
    Reformat a diagram file in canonical form.
    """
    text = read_source(file)
    formatted = serialize_ast(parse_or_exit(text, file))

    if write:
        file.write_text(formatted, encoding="utf-8")
        print_success(f"Formatted {file}")
    else:
        typer.echo(formatted, nl=False)


def layout_command(
    file: Path = typer.Argument(..., help="Diagram file"),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Path to umlbox.toml (default: nearest above FILE)"
    ),
    write: bool = typer.Option(False, "--write", "-w", help="Rewrite the file in place"),
) -> None:
    """
    Lay out a diagram and write the node positions into its source.

    Only `@ x,y` on node lines changes; everything else is kept as written.
    """
    text = read_source(file)
    project = resolve_manifest(file, manifest)
    diagram = build_diagram(parse_or_exit(text, file))
    layout(diagram, project.layout)

    updated = update_source_positions(text, diagram)
    if write:
        file.write_text(updated, encoding="utf-8")
        print_success(f"Updated positions in {file}")
    else:
        typer.echo(updated, nl=False)
