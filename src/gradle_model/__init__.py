"""
Gradle Project Model - in-memory model of a loaded Gradle project.

Represents source sets, outputs and classpaths together with the quality of
the loaded data, and answers structural queries: which source set a file
belongs to, where outputs live, what depends on what.
"""

__version__ = "0.3.0"

from .base_project import BaseProject
from .capabilities import CapabilityRegistry
from .dependencies import SourceSetDependencyGraph
from .handle import ProjectHandle
from .loader import ConventionalLayoutLoader
from .quality import ProjectQuality
from .snapshot import ProjectSnapshot
from .sourceset import (
    KIND_PRIORITY,
    MAIN_SOURCESET_NAME,
    TEST_SOURCESET_NAME,
    ClassPathKind,
    SourceKind,
    SourceSet,
)

__all__ = [
    "BaseProject",
    "CapabilityRegistry",
    "ClassPathKind",
    "ConventionalLayoutLoader",
    "KIND_PRIORITY",
    "MAIN_SOURCESET_NAME",
    "ProjectHandle",
    "ProjectQuality",
    "ProjectSnapshot",
    "SourceKind",
    "SourceSet",
    "SourceSetDependencyGraph",
    "TEST_SOURCESET_NAME",
]
