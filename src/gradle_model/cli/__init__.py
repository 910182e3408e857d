"""gradle-model command-line interface."""

import typer

app = typer.Typer(
    name="gradle-model",
    help="Gradle Project Model - inspect source sets, outputs and project quality",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .describe import describe as _describe  # noqa: F401, E402
from .classify import classify as _classify  # noqa: F401, E402
from .resource import resource as _resource  # noqa: F401, E402
from .tasks import tasks as _tasks  # noqa: F401, E402
