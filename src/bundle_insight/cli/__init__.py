"""CLI entry point — registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="bundle-insight",
    help="Bundle Insight - Bundle Size Treemaps and Package Specifiers",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True, no_args_is_help=True)
def _callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        is_eager=True,
    ),
):
    if version:
        console.print(f"bundle-insight {__version__}")
        raise typer.Exit(0)


# Import subcommands to register them
from .specifiers import specifiers as _specifiers  # noqa: F401, E402
from .treemap import treemap as _treemap  # noqa: F401, E402


def main() -> None:
    app()
