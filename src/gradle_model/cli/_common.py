"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import ModelConfig, load_config
from ..exceptions import GradleModelError
from ..loader import ConventionalLayoutLoader
from ..logging_config import setup_logging
from ..snapshot import ProjectSnapshot

console = Console()

PATH_ARGUMENT = typer.Argument(
    Path("."),
    help="Path to the Gradle project directory",
    exists=True,
    file_okay=False,
    dir_okay=True,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
)


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ModelConfig:
    """Build configuration from CLI options."""
    return load_config(config_file=config, verbose=verbose, quiet=quiet)


def load_project(
    path: Path,
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ProjectSnapshot:
    """Set up logging and load *path*, exiting with code 1 on model errors."""
    setup_logging(verbose=verbose, quiet=quiet)
    try:
        settings = resolve_config(config, verbose=verbose, quiet=quiet)
        return ConventionalLayoutLoader(settings).load(path)
    except GradleModelError as e:
        fail(e)


def fail(error: GradleModelError) -> None:
    console.print(f"[red]Error:[/red] {error}", markup=True, highlight=False)
    raise typer.Exit(code=1)
