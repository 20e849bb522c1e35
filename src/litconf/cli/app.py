"""Typer application wiring for the litconf CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.table import Table
from rich.traceback import Traceback
import typer

from ..api import bindings_for_document
from ..config import LoaderConfig
from ..exceptions import LitconfError, exception_hint
from ..extractor import DEFAULT_MARKER
from ..markdown import DEFAULT_MARKDOWN_EXTENSIONS
from ..values import Binding, to_python
from .state import configure_logging, debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Read named values from literate Markdown configuration documents.",
    context_settings={"help_option_names": ["--help"]},
    invoke_without_command=True,
)


def _document_argument() -> Path:
    return typer.Argument(
        ...,
        metavar="DOCUMENT",
        help="Markdown document declaring bindings.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    )


def _marker_option() -> str:
    return typer.Option(
        DEFAULT_MARKER,
        "--marker",
        "-m",
        help="Section attribute naming the variable to bind.",
    )


@app.callback()
def _app_root(
    ctx: typer.Context,
    list_extensions: bool = typer.Option(
        False,
        "--list-extensions",
        help="List Markdown extensions enabled by default and exit.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
) -> None:
    ctx.obj = get_cli_state()
    set_cli_state(verbosity=verbose, debug=debug)
    configure_logging()

    if list_extensions:
        for extension in DEFAULT_MARKDOWN_EXTENSIONS:
            typer.echo(extension)
        raise typer.Exit(code=0)


def _collect(document: Path, marker: str) -> list[Binding]:
    try:
        return bindings_for_document(document, config=LoaderConfig(marker=marker))
    except LitconfError as exc:
        if debug_enabled():
            raise
        emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


def _describe(binding: Binding) -> tuple[str, str, str]:
    kind = type(binding.value).__name__.removesuffix("Value").lower()
    return binding.name, kind, repr(to_python(binding.value))


def _jsonable(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


@app.command(name="show")
def show(
    document: Path = _document_argument(),
    marker: str = _marker_option(),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print bindings as a JSON object instead of a table.",
    ),
) -> None:
    """Print the bindings declared by DOCUMENT."""
    bindings = _collect(document, marker)
    state = get_cli_state()

    if as_json:
        payload = {binding.name: _jsonable(to_python(binding.value)) for binding in bindings}
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    table = Table(title=str(document.name))
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Value", overflow="fold")
    for row in map(_describe, bindings):
        table.add_row(*row)
    state.console.print(table)


@app.command(name="check")
def check(
    document: Path = _document_argument(),
    marker: str = _marker_option(),
) -> None:
    """Convert DOCUMENT and report how many bindings it declares."""
    bindings = _collect(document, marker)
    typer.echo(f"{document.name}: {len(bindings)} binding(s)")


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
