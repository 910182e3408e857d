"""Project, registry and source-set exceptions."""

from pathlib import Path
from typing import Iterable, Optional

from .base import GradleModelError


class ProjectError(GradleModelError):
    """Base class for project model errors."""

    pass


class MissingBaseProjectError(ProjectError):
    """Raised when a snapshot's registry does not hold exactly one base project.

    This is a loader bug, not a transient condition: it is never recovered
    from by invalidation.
    """

    def __init__(self, found: int):
        super().__init__(
            "A project snapshot requires exactly one BaseProject in its capabilities",
            details={"found": str(found)},
        )
        self.found = found


class ProjectLoadError(ProjectError):
    """Raised when a project cannot be loaded from disk."""

    def __init__(self, project_dir: Path, reason: str):
        super().__init__(
            f"Cannot load project: {project_dir}",
            details={"project_dir": str(project_dir), "reason": reason},
        )
        self.project_dir = project_dir
        self.reason = reason


class RegistryError(GradleModelError):
    """Base class for capability registry errors."""

    pass


class RegistrySealedError(RegistryError):
    """Raised when registering into a registry that a snapshot already owns."""

    def __init__(self, instance: object):
        super().__init__(
            "Capability registry is sealed",
            details={"instance": type(instance).__name__},
        )
        self.instance = instance


class SourceSetError(GradleModelError):
    """Base class for source-set errors."""

    pass


class DuplicateSourceSetError(SourceSetError):
    """Raised when two source sets of one project share a name."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate source set: {name}", details={"name": name})
        self.name = name


class SourceSetCycleError(SourceSetError):
    """Raised when an ordering is requested over cyclic source-set dependencies."""

    def __init__(self, names: Iterable[str], detail: Optional[str] = None):
        members = sorted(names)
        details = {"members": ", ".join(members)}
        if detail:
            details["detail"] = detail
        super().__init__("Source set dependencies form a cycle", details=details)
        self.names = members
