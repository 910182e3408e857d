"""The base project fact every snapshot must carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class BaseProject:
    """Identity and layout of a Gradle project, independent of any plugin.

    Attributes:
        name:            Project name (directory name unless configured).
        project_dir:     Directory holding the build file.
        root_dir:        Directory of the enclosing multi-project build.
        build_dir:       Gradle's build output directory.
        build_file:      ``build.gradle`` / ``build.gradle.kts``, if any.
        sub_projects:    Included projects by name (root project only).
        task_names:      Known task names.
        ide_properties:  IDE-specific settings from ``gradle.properties``.
    """

    name: str
    project_dir: Path
    root_dir: Path
    build_dir: Path
    build_file: Optional[Path] = None
    sub_projects: Mapping[str, Path] = field(default_factory=dict)
    task_names: frozenset[str] = frozenset()
    ide_properties: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        return self.project_dir == self.root_dir

    def ide_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.ide_properties.get(key, default)

    def has_task(self, name: str) -> bool:
        return name in self.task_names
