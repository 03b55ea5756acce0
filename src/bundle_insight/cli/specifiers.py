"""Specifiers CLI command -- resolve module specifiers to packages."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from ..exceptions import BundleInsightError
from ..logging_config import setup_logging_from_config
from ..specifiers import parse_all
from . import app
from ._common import console, resolve_config


@app.command()
def specifiers(
    values: List[str] = typer.Argument(
        ...,
        metavar="SPECIFIER...",
        help="Module specifiers as written in import statements",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        hidden=True,
    ),
):
    """
    Resolve module specifiers to canonical package identifiers.

    Local paths (./, ../, ~/, absolute) have no package and print empty.

    [bold cyan]Examples:[/bold cyan]

      bundle-insight specifiers lodash/fp/map.js @babel/core/package.json

      bundle-insight specifiers --json @org/pkg@v1.0.0 ./local.js
    """
    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)
    except BundleInsightError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging_from_config(settings)
    identifiers = parse_all(values)

    if json_output:
        print(json.dumps(identifiers, indent=settings.json_indent))
        return

    table = Table(title="Package Specifiers", show_header=True, header_style="bold")
    table.add_column("Specifier")
    table.add_column("Package", style="green")
    for value, identifier in zip(values, identifiers):
        table.add_row(value, identifier or "[dim]-[/dim]")
    console.print(table)
