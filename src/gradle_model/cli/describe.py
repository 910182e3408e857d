"""Describe: quality, problems and source sets of a project."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..sourceset import KIND_PRIORITY
from . import app
from ._common import CONFIG_OPTION, PATH_ARGUMENT, console, load_project
from ._serialize import snapshot_to_dict


@app.command()
def describe(
    path: Path = PATH_ARGUMENT,
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Show the loaded model of a Gradle project.

    [bold cyan]Examples:[/bold cyan]

      gradle-model describe /path/to/project

      gradle-model describe . --format json
    """
    snapshot = load_project(path, config, verbose=verbose, quiet=quiet)

    if fmt == "json":
        typer.echo(json.dumps(snapshot_to_dict(snapshot), indent=2))
        return

    base = snapshot.base_project
    console.print()
    console.print(f"[bold cyan]{base.name}[/bold cyan]  [dim]{base.project_dir}[/dim]")
    console.print(f"Quality: [bold]{snapshot.quality.name}[/bold]  [dim]{snapshot.quality.description}[/dim]")
    if base.sub_projects:
        console.print(f"Sub-projects: {', '.join(sorted(base.sub_projects))}")
    for problem in snapshot.problems:
        console.print(f"[yellow]![/yellow] {problem}", highlight=False)

    table = Table(title="Source sets", show_lines=True)
    table.add_column("Name", style="bold")
    table.add_column("Roots")
    table.add_column("Outputs")
    table.add_column("Depends on")
    table.add_column("Test", justify="center")

    for ss in snapshot.dependency_graph():
        roots = "\n".join(
            f"{kind}: {_rel(d, base.project_dir)}"
            for kind in KIND_PRIORITY
            for d in sorted(ss.source_dirs(kind))
        )
        if ss.has_overlapping_source_dirs():
            roots += "\n[yellow](overlapping)[/yellow]"
        outputs = "\n".join(
            _rel(d, base.project_dir)
            for d in [*sorted(ss.output_class_dirs), ss.output_resources_dir]
            if d is not None
        )
        table.add_row(
            ss.name,
            roots,
            outputs,
            ", ".join(sorted(d.name for d in ss.depends_on)) or "-",
            "yes" if ss.is_test else "",
        )
    console.print(table)


def _rel(path: Path, project_dir: Path) -> str:
    try:
        return path.relative_to(project_dir).as_posix()
    except ValueError:
        return str(path)
