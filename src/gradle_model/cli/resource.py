"""Resource: locate a resource in a source set's roots."""

from pathlib import Path
from typing import List, Optional

import typer

from ..sourceset import MAIN_SOURCESET_NAME, SourceKind
from . import app
from ._common import CONFIG_OPTION, PATH_ARGUMENT, console, load_project


@app.command()
def resource(
    path: Path = PATH_ARGUMENT,
    name: str = typer.Argument(..., help="Resource name, '/'-separated"),
    source_set: str = typer.Option(MAIN_SOURCESET_NAME, "--set", "-s", help="Source set to search"),
    no_outputs: bool = typer.Option(False, "--no-outputs", help="Skip output directories"),
    kinds: Optional[List[SourceKind]] = typer.Option(
        None, "--kind", "-k", help="Source kinds to search, in order (default: all)"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Print the first file NAME resolves to, outputs before sources.

    Exits with code 1 when nothing is found.
    """
    snapshot = load_project(path, config, quiet=quiet)
    ss = snapshot.source_set(source_set)
    if ss is None:
        console.print(f"[red]No source set named {source_set}[/red]", highlight=False)
        raise typer.Exit(code=1)

    found = ss.find_resource(name, include_outputs=not no_outputs, kinds=kinds or ())
    if found is None:
        console.print(f"[yellow]{name} not found in {source_set}[/yellow]", highlight=False)
        raise typer.Exit(code=1)
    typer.echo(str(found))
