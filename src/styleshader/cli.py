"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .compiler import compile_expression
from .config import ATTRIBUTE_PREFIX
from .errors import ExpressionError, StyleShaderError
from .inference import infer_kind
from .literal_style import TextureHandle, parse_literal_style
from .style_loader import load_style

_LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Compile literal symbol styles into WebGL shaders")
console = Console()


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ExpressionError as exc:
            _LOGGER.error("Invalid expression: %s", exc)
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except StyleShaderError as exc:
            _LOGGER.error("Style compilation failed: %s", exc)
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("compile")
@_handle_errors
def compile_style(
    style_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Literal style JSON file"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", file_okay=False, help="Write symbol.vert/symbol.frag here"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Compile a style and print its shaders, attributes and uniforms."""

    _configure_logging(verbose)
    result = parse_literal_style(load_style(style_path))
    vertex_source = result.builder.get_symbol_vertex_shader()
    fragment_source = result.builder.get_symbol_fragment_shader()

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / "symbol.vert").write_text(vertex_source + "\n", encoding="utf-8")
        (output_dir / "symbol.frag").write_text(fragment_source + "\n", encoding="utf-8")
        print(f"[green]Wrote shaders to {output_dir}")
    else:
        console.rule("vertex shader")
        typer.echo(vertex_source)
        console.rule("fragment shader")
        typer.echo(fragment_source)

    names = ", ".join(attribute.name for attribute in result.attributes) or "none"
    print(f"[bold]Attributes:[/bold] {names}")

    table = Table(title="Uniforms")
    table.add_column("Name")
    table.add_column("Source")
    table.add_column("Current value")
    for name, value in result.uniforms.items():
        if isinstance(value, TextureHandle):
            table.add_row(name, "texture", value.src)
        elif callable(value):
            table.add_row(name, "variable", str(value()))
        else:
            table.add_row(name, "constant", str(value))
    console.print(table)


@app.command()
@_handle_errors
def check(
    expression: str = typer.Argument(..., help="Expression encoded as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Infer, validate and compile a single expression."""

    _configure_logging(verbose)
    try:
        value = json.loads(expression)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Expression is not valid JSON: {exc}") from exc

    print(f"Kind: [cyan]{infer_kind(value).label}")
    attributes: list[str] = []
    variables: list[str] = []
    code = compile_expression(value, attributes, ATTRIBUTE_PREFIX, variables)
    typer.echo(code)
    print(f"Attributes: {', '.join(attributes) or 'none'}")
    print(f"Variables: {', '.join(variables) or 'none'}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
