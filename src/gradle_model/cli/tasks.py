"""Tasks: Gradle task names derived from the source sets."""

from pathlib import Path
from typing import Optional

from rich.table import Table

from ..exceptions import GradleModelError
from ..sourceset import KIND_PRIORITY
from . import app
from ._common import CONFIG_OPTION, PATH_ARGUMENT, console, fail, load_project


@app.command()
def tasks(
    path: Path = PATH_ARGUMENT,
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    List the build tasks of every source set.
    """
    snapshot = load_project(path, config, quiet=True)

    table = Table(title=f"Tasks of {snapshot.base_project.name}")
    table.add_column("Source set", style="bold")
    table.add_column("Classes")
    table.add_column("Build tasks")
    try:
        ordered = snapshot.dependency_graph().topological_order()
    except GradleModelError as e:
        fail(e)
    for ss in ordered:
        build = [ss.build_task_name(kind) for kind in KIND_PRIORITY if ss.source_dirs(kind)]
        table.add_row(ss.name, ss.classes_task_name(), ", ".join(build))
    console.print(table)
