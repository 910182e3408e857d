"""Exception hierarchy for the Gradle project model."""

from .base import GradleModelError
from .config import ConfigurationError, InvalidConfigError
from .project import (
    DuplicateSourceSetError,
    MissingBaseProjectError,
    ProjectError,
    ProjectLoadError,
    RegistryError,
    RegistrySealedError,
    SourceSetCycleError,
    SourceSetError,
)

__all__ = [
    "GradleModelError",
    "ConfigurationError",
    "InvalidConfigError",
    "ProjectError",
    "MissingBaseProjectError",
    "ProjectLoadError",
    "RegistryError",
    "RegistrySealedError",
    "SourceSetError",
    "DuplicateSourceSetError",
    "SourceSetCycleError",
]
