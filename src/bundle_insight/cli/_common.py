"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import InsightConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    root: Optional[Path] = None,
    separator: Optional[str] = None,
    force: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> InsightConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if root is not None:
        overrides["project_root"] = str(root)
    if separator is not None:
        overrides["path_separator"] = separator
    if force:
        overrides["reports_enabled"] = True
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)
