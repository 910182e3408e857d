"""Heuristic project loading from the conventional Gradle directory layout.

Gradle itself is never run. The loader only reads the directory layout and a
few well-known statements of the build and settings files, so the resulting
snapshot carries the configured fallback quality. It gives the IDE something to
work with before a real evaluation arrives.

Layout conventions:
    src/<set>/<java|groovy|scala|resources>    source roots
    src/main/webapp                            web application root of ``main``
    build/classes/<language>/<set>             compiled classes
    build/resources/<set>                      processed resources
    libs/*.jar                                 local jars on every compile classpath
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from .base_project import BaseProject
from .config import DEFAULT_CONFIG, ModelConfig
from .dependencies import SourceSetDependencyGraph
from .exceptions import ProjectLoadError
from .paths import PathLike, normalize
from .snapshot import ProjectSnapshot
from .sourceset import (
    LANGUAGE_KINDS,
    MAIN_SOURCESET_NAME,
    TEST_SOURCESET_NAME,
    SourceKind,
    SourceSet,
)

logger = logging.getLogger(__name__)

BUILD_FILE_NAMES = ("build.gradle.kts", "build.gradle")
SETTINGS_FILE_NAMES = ("settings.gradle.kts", "settings.gradle")

LIFECYCLE_TASKS = frozenset({"assemble", "build", "check", "clean", "jar", "javadoc", "test"})

# include 'a', ':b:c'   /   include("a", "b:c")
_INCLUDE_RE = re.compile(r"^\s*include\b(.*)$")
_QUOTED_RE = re.compile(r"""["']([^"']+)["']""")
_ROOT_NAME_RE = re.compile(r"""rootProject\.name\s*=\s*["']([^"']+)["']""")

# sourceCompatibility = '1.8' | = 17 | = JavaVersion.VERSION_1_8
_COMPAT_RE = r"""\b{0}\s*=\s*(?:JavaVersion\.VERSION_([\d_]+)|["']?(\d+(?:\.\d+)?)["']?)"""
_SOURCE_COMPAT_RE = re.compile(_COMPAT_RE.format("sourceCompatibility"))
_TARGET_COMPAT_RE = re.compile(_COMPAT_RE.format("targetCompatibility"))
_TOOLCHAIN_RE = re.compile(
    r"languageVersion(?:\.set\s*\(|\s*=)\s*JavaLanguageVersion\.of\(\s*(\d+)\s*\)"
)


def find_build_file(project_dir: Path) -> Optional[Path]:
    for name in BUILD_FILE_NAMES:
        p = project_dir / name
        if p.is_file():
            return p
    return None


def _find_settings_file(directory: Path) -> Optional[Path]:
    for name in SETTINGS_FILE_NAMES:
        p = directory / name
        if p.is_file():
            return p
    return None


def is_gradle_project(project_dir: PathLike) -> bool:
    return find_build_file(Path(project_dir)) is not None


def _read_text(path: Path, project_dir: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ProjectLoadError(project_dir, f"cannot read {path.name}: {e}")


def _find_root_dir(project_dir: Path) -> tuple[Path, Optional[Path]]:
    """Nearest directory at or above *project_dir* holding a settings file."""
    for directory in (project_dir, *project_dir.parents):
        settings = _find_settings_file(directory)
        if settings is not None:
            return directory, settings
    return project_dir, None


def parse_settings(text: str, root_dir: Path) -> tuple[Optional[str], dict[str, Path]]:
    """Root project name and included sub-projects of a settings script."""
    name_match = _ROOT_NAME_RE.search(text)
    includes: dict[str, Path] = {}
    for line in text.splitlines():
        m = _INCLUDE_RE.match(line)
        if not m:
            continue
        for path in _QUOTED_RE.findall(m.group(1)):
            project_path = path.strip(":")
            if project_path:
                includes[project_path] = root_dir.joinpath(*project_path.split(":"))
    return (name_match.group(1) if name_match else None), includes


def _compat_version(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    if not m:
        return None
    if m.group(1):
        return m.group(1).replace("_", ".")
    return m.group(2)


def parse_compatibility(text: str) -> tuple[Optional[str], Optional[str]]:
    """``(sourceCompatibility, targetCompatibility)`` declared by a build script.

    A toolchain ``languageVersion`` stands in for both when they are absent;
    the target defaults to the source level.
    """
    source = _compat_version(_SOURCE_COMPAT_RE, text)
    target = _compat_version(_TARGET_COMPAT_RE, text)
    if source is None:
        toolchain = _TOOLCHAIN_RE.search(text)
        if toolchain:
            source = toolchain.group(1)
    if target is None:
        target = source
    return source, target


def parse_ide_properties(text: str, prefix: str) -> dict[str, str]:
    """``gradle.properties`` entries starting with *prefix*, prefix removed."""
    props: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        m = re.match(r"([^=:\s]+)\s*[=:]\s*(.*)$", line)
        if not m:
            continue
        key, value = m.group(1), m.group(2).strip()
        if key.startswith(prefix) and len(key) > len(prefix):
            props[key[len(prefix):]] = value
    return props


def _configuration_name(set_name: str, suffix: str) -> str:
    if set_name == MAIN_SOURCESET_NAME:
        return suffix[:1].lower() + suffix[1:]
    return set_name + suffix


class ConventionalLayoutLoader:
    """Build project snapshots from the conventional Gradle layout."""

    def __init__(self, config: ModelConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def load(self, project_dir: PathLike) -> ProjectSnapshot:
        """Load *project_dir* into a new snapshot with a fresh registry.

        Raises:
            ProjectLoadError: If the directory is not a Gradle project.
        """
        project_dir = normalize(Path(project_dir).absolute())
        if not project_dir.is_dir():
            raise ProjectLoadError(project_dir, "not a directory")
        build_file = find_build_file(project_dir)
        if build_file is None:
            raise ProjectLoadError(project_dir, "no build.gradle or build.gradle.kts")

        problems: list[str] = []
        build_text = _read_text(build_file, project_dir)
        root_dir, settings_file = _find_root_dir(project_dir)

        root_name: Optional[str] = None
        sub_projects: dict[str, Path] = {}
        if settings_file is not None:
            root_name, includes = parse_settings(_read_text(settings_file, project_dir), root_dir)
            if root_dir == project_dir:
                sub_projects = includes
        name = root_name if (root_name and root_dir == project_dir) else project_dir.name

        source_sets = self._source_sets(project_dir, build_text)
        if not (project_dir / "src").is_dir():
            problems.append(f"No src directory in {project_dir}; assuming the default layout.")

        ide_properties: dict[str, str] = {}
        properties_file = project_dir / "gradle.properties"
        if properties_file.is_file():
            ide_properties = parse_ide_properties(
                _read_text(properties_file, project_dir), self.config.property_prefix
            )

        base = BaseProject(
            name=name,
            project_dir=project_dir,
            root_dir=root_dir,
            build_dir=project_dir / self.config.build_dir_name,
            build_file=build_file,
            sub_projects=sub_projects,
            task_names=self._task_names(source_sets),
            ide_properties=ide_properties,
        )
        graph = SourceSetDependencyGraph(source_sets)

        logger.debug(
            "Loaded %s from layout: source sets %s, %d sub-projects",
            name,
            ", ".join(graph.names),
            len(sub_projects),
        )
        return ProjectSnapshot.create(
            self.config.fallback_project_quality,
            problems,
            [base, *source_sets, graph],
        )

    def _source_sets(self, project_dir: Path, build_text: str) -> list[SourceSet]:
        src_dir = project_dir / "src"
        build_dir = project_dir / self.config.build_dir_name
        names = [MAIN_SOURCESET_NAME, TEST_SOURCESET_NAME]
        if src_dir.is_dir():
            names.extend(
                sorted(d.name for d in src_dir.iterdir() if d.is_dir() and d.name not in names)
            )

        jars = self._local_jars(project_dir)
        source_level, target_level = parse_compatibility(build_text)

        sets: dict[str, SourceSet] = {}
        for set_name in names:
            base = src_dir / set_name
            ss = SourceSet(
                set_name,
                is_test=set_name.lower().endswith("test"),
                source_compatibility=source_level,
                target_compatibility=target_level,
                compile_classpath=set(jars),
                compile_configuration_name=_configuration_name(set_name, "CompileClasspath"),
                runtime_configuration_name=_configuration_name(set_name, "RuntimeClasspath"),
            )
            for kind in SourceKind:
                declared = kind in (SourceKind.JAVA, SourceKind.RESOURCES) or (base / kind.value).is_dir()
                if not declared:
                    continue
                ss.set_source_dirs(kind, [base / kind.value])
                if kind in LANGUAGE_KINDS:
                    ss.output_class_dirs.add(build_dir / "classes" / kind.value / set_name)
            ss.output_resources_dir = build_dir / "resources" / set_name

            web_app = base / "webapp"
            if set_name == MAIN_SOURCESET_NAME and web_app.is_dir():
                ss.web_app_root = web_app
            sets[set_name] = ss

        main = sets[MAIN_SOURCESET_NAME]
        for ss in sets.values():
            if ss.is_test:
                ss.depends_on.add(main)
                ss.compile_classpath.update(main.output_class_dirs)
                ss.compile_classpath.add(main.output_resources_dir)
        return list(sets.values())

    def _local_jars(self, project_dir: Path) -> list[Path]:
        libs = project_dir / self.config.libs_dir_name
        if not libs.is_dir():
            return []
        return sorted(libs.glob("*.jar"))

    @staticmethod
    def _task_names(source_sets: list[SourceSet]) -> frozenset[str]:
        names = set(LIFECYCLE_TASKS)
        for ss in source_sets:
            names.add(ss.classes_task_name())
            for kind in SourceKind:
                if ss.source_dirs(kind):
                    names.add(ss.build_task_name(kind))
            if ss.is_test:
                names.add(ss.name)
        return frozenset(names)
