"""Classify: which source sets and kinds a file belongs to."""

import json
from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import CONFIG_OPTION, PATH_ARGUMENT, console, load_project


@app.command()
def classify(
    path: Path = PATH_ARGUMENT,
    file: Path = typer.Argument(..., help="File or directory to classify"),
    fmt: str = typer.Option("rich", "--format", "-f", help="Output format: rich or json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Show the source sets containing FILE, its source kind and relative path.
    """
    snapshot = load_project(path, config, verbose=verbose, quiet=quiet)
    target = file if file.is_absolute() else (Path.cwd() / file)

    graph = snapshot.dependency_graph()
    owner = graph.owner_of(target)
    matches = []
    for ss in graph.containing(target):
        kinds = ss.classify_all(target)
        primary = ss.classify(target)
        matches.append(
            {
                "source_set": ss.name,
                "kind": primary.value if primary else None,
                "all_kinds": sorted(k.value for k in kinds),
                "ambiguous": len(kinds) > 1,
                "output": ss.produces_output(target),
                "relative_path": ss.relative_path_of(target),
            }
        )

    if fmt == "json":
        typer.echo(
            json.dumps(
                {"file": str(target), "owner": owner.name if owner else None, "matches": matches},
                indent=2,
            )
        )
        return

    if not matches:
        console.print(f"[yellow]{target} is not part of any source set[/yellow]", highlight=False)
        return
    for match in matches:
        marker = "*" if owner is not None and match["source_set"] == owner.name else " "
        where = "output" if match["output"] else (match["kind"] or "web app")
        line = f"{marker} [bold]{match['source_set']}[/bold] {where}"
        if match["relative_path"] is not None:
            line += f"  {match['relative_path']}"
        if match["ambiguous"]:
            line += f"  [yellow](also {', '.join(match['all_kinds'])})[/yellow]"
        console.print(line, highlight=False)
