"""Treemap CLI command -- bundle size groups from a bundle manifest."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import BundleInsightError
from ..logging_config import setup_logging_from_config
from ..visualization import build_target_reports, load_manifest, reports_enabled
from ..visualization.report import REPORT_ENV_VAR
from . import app
from ._common import console, resolve_config


@app.command()
def treemap(
    manifest: Path = typer.Argument(
        ...,
        help="JSON manifest listing bundles and their assets",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        "-t",
        help="Only print the data for this build target",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Project root asset paths are made relative to",
    ),
    separator: Optional[str] = typer.Option(
        None,
        "--separator",
        help="Path separator for asset paths and collapsed labels",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help=f"Build the report even when {REPORT_ENV_VAR} is unset",
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
    ),
):
    """
    Print treemap data for each build target as JSON.

    Every bundle becomes a root cell weighted by its size, holding its
    assets grouped by directory. Single-entry directories are collapsed
    into one cell.

    [bold cyan]Examples:[/bold cyan]

      bundle-insight treemap bundles.json --force

      bundle-insight treemap bundles.json --target modern --root ./app
    """
    try:
        settings = resolve_config(
            config=config,
            root=root,
            separator=separator,
            force=force,
            verbose=verbose,
            quiet=quiet,
        )
    except BundleInsightError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    logger = setup_logging_from_config(settings)

    try:
        if not reports_enabled(settings):
            console.print(
                f"[yellow]Bundle reports are disabled.[/yellow] Set {REPORT_ENV_VAR}, "
                "enable [bold]reports_enabled[/bold] in config, or pass [bold]--force[/bold]."
            )
            raise typer.Exit(0)

        bundles = load_manifest(manifest)
        reports = build_target_reports(bundles, settings.root_path, settings.path_separator)

        if target is not None:
            if target not in reports:
                console.print(f"[red]Error:[/red] no bundles for target '{target}'")
                raise typer.Exit(1)
            output = reports[target]
        else:
            output = reports

        print(json.dumps(output, indent=settings.json_indent))

    except typer.Exit:
        raise
    except BundleInsightError as e:
        logger.debug("Treemap generation failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
