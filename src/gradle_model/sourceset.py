"""Source sets: one logical group of sources, outputs and classpaths.

A Gradle Java project declares several source sets (``main`` and ``test`` by
default). Each one owns source roots per :class:`SourceKind`, output
directories, compile/runtime classpaths and the in-project source sets whose
output it consumes.

Classification of a file against the roots scans kinds in
:data:`KIND_PRIORITY`; that order is the tie-break when the same directory is
registered under several kinds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import chain
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .paths import PathLike, is_ancestor_or_same, relativize

MAIN_SOURCESET_NAME = "main"
TEST_SOURCESET_NAME = "test"


class SourceKind(Enum):
    """Kinds of source root. The value is the conventional directory name."""

    JAVA = "java"
    GROOVY = "groovy"
    SCALA = "scala"
    RESOURCES = "resources"

    @property
    def label(self) -> str:
        """Human-readable name, also used as the compile-task target."""
        return _KIND_LABELS[self]

    def __str__(self) -> str:
        return self.label


_KIND_LABELS = {
    SourceKind.JAVA: "Java",
    SourceKind.GROOVY: "Groovy",
    SourceKind.SCALA: "Scala",
    SourceKind.RESOURCES: "Resources",
}

# Fixed scan order for classify(); never derived from dict iteration.
KIND_PRIORITY: tuple[SourceKind, ...] = (
    SourceKind.JAVA,
    SourceKind.GROOVY,
    SourceKind.SCALA,
    SourceKind.RESOURCES,
)

LANGUAGE_KINDS: tuple[SourceKind, ...] = tuple(k for k in KIND_PRIORITY if k is not SourceKind.RESOURCES)


class ClassPathKind(Enum):
    """Which classpath of a source set to read."""

    COMPILE = "compile"
    RUNTIME = "runtime"


def capitalize(text: str) -> str:
    """Upper-case the first character only (``integTest`` -> ``IntegTest``)."""
    return text[:1].upper() + text[1:]


def _path_set(paths: Optional[Iterable[PathLike]]) -> set[Path]:
    return {Path(p) for p in paths} if paths else set()


@dataclass(eq=False, repr=False)
class SourceSet:
    """One source set of a Java project.

    Attributes:
        name:                  Unique within the project.
        source_roots:          Directories per source kind. Kinds may share directories.
        output_class_dirs:     Compiled class output directories.
        output_resources_dir:  Processed resources output directory.
        web_app_root:          Web application doc-root, associated with ``main``.
        compile_classpath:     Compile classpath entries.
        runtime_classpath:     Runtime classpath entries, or None to follow
                               ``compile_classpath`` at read time.
        depends_on:            In-project source sets whose output is on this
                               set's classpath (``test`` -> ``main``).
    """

    name: str
    source_roots: dict[SourceKind, set[Path]] = field(default_factory=dict)
    output_class_dirs: set[Path] = field(default_factory=set)
    output_resources_dir: Optional[Path] = None
    web_app_root: Optional[Path] = None
    compile_classpath: set[Path] = field(default_factory=set)
    runtime_classpath: Optional[set[Path]] = None
    source_compatibility: Optional[str] = None
    target_compatibility: Optional[str] = None
    is_test: bool = False
    depends_on: set[SourceSet] = field(default_factory=set)
    compile_configuration_name: Optional[str] = None
    runtime_configuration_name: Optional[str] = None

    def __post_init__(self) -> None:
        self.source_roots = {SourceKind(k): _path_set(v) for k, v in self.source_roots.items()}
        self.output_class_dirs = _path_set(self.output_class_dirs)
        self.compile_classpath = _path_set(self.compile_classpath)
        self.depends_on = set(self.depends_on)
        if self.runtime_classpath is not None:
            self.runtime_classpath = _path_set(self.runtime_classpath)
        if self.output_resources_dir is not None:
            self.output_resources_dir = Path(self.output_resources_dir)
        if self.web_app_root is not None:
            self.web_app_root = Path(self.web_app_root)

    # -----------------------------------------------------------------
    # Source roots
    # -----------------------------------------------------------------

    def set_source_dirs(self, kind: SourceKind, dirs: Iterable[PathLike]) -> None:
        """Replace the roots of *kind*. Loader use only."""
        self.source_roots[kind] = _path_set(dirs)

    def source_dirs(self, kind: SourceKind) -> frozenset[Path]:
        """Configured roots of *kind*; empty when none are configured."""
        return frozenset(self.source_roots.get(kind, ()))

    @property
    def java_dirs(self) -> frozenset[Path]:
        return self.source_dirs(SourceKind.JAVA)

    @property
    def groovy_dirs(self) -> frozenset[Path]:
        return self.source_dirs(SourceKind.GROOVY)

    @property
    def scala_dirs(self) -> frozenset[Path]:
        return self.source_dirs(SourceKind.SCALA)

    @property
    def resources_dirs(self) -> frozenset[Path]:
        return self.source_dirs(SourceKind.RESOURCES)

    def all_dirs(self, deduplicate: bool = True) -> Union[set[Path], list[Path]]:
        """All configured source roots, whether or not they exist.

        With ``deduplicate=False`` the result is a list in kind-priority
        order and a directory shared by several kinds appears once per kind.
        """
        if deduplicate:
            return set(chain.from_iterable(self.source_dirs(k) for k in KIND_PRIORITY))
        return [d for kind in KIND_PRIORITY for d in sorted(self.source_dirs(kind))]

    def available_dirs(self, deduplicate: bool = True) -> Union[set[Path], list[Path]]:
        """Like :meth:`all_dirs`, restricted to directories present on disk."""
        dirs = self.all_dirs(deduplicate)
        if deduplicate:
            return {d for d in dirs if d.is_dir()}
        return [d for d in dirs if d.is_dir()]

    def has_overlapping_source_dirs(self) -> bool:
        seen: set[Path] = set()
        for kind in KIND_PRIORITY:
            for d in self.source_dirs(kind):
                if d in seen:
                    return True
                seen.add(d)
        return False

    # -----------------------------------------------------------------
    # Classification
    # -----------------------------------------------------------------

    def classify(self, file: PathLike) -> Optional[SourceKind]:
        """The first kind in :data:`KIND_PRIORITY` with a root containing *file*."""
        for kind in KIND_PRIORITY:
            if any(is_ancestor_or_same(file, root) for root in self.source_dirs(kind)):
                return kind
        return None

    def classify_all(self, file: PathLike) -> frozenset[SourceKind]:
        """Every kind with a root containing *file*, surfacing ambiguity."""
        return frozenset(
            kind
            for kind in KIND_PRIORITY
            if any(is_ancestor_or_same(file, root) for root in self.source_dirs(kind))
        )

    def _output_roots(self) -> list[Path]:
        roots = sorted(self.output_class_dirs)
        if self.output_resources_dir is not None:
            roots.append(self.output_resources_dir)
        return roots

    def produces_output(self, file: PathLike) -> bool:
        """True iff *file* lies in one of the output directories."""
        return any(is_ancestor_or_same(file, root) for root in self._output_roots())

    def contains(self, file: PathLike) -> bool:
        """True if *file* belongs to the sources or the outputs of this set.

        The web application root, when set, counts as part of the set even
        though it is neither compiled nor a declared output.
        """
        in_web_app = self.web_app_root is not None and is_ancestor_or_same(file, self.web_app_root)
        return in_web_app or self.produces_output(file) or self.classify(file) is not None

    # -----------------------------------------------------------------
    # Resolution
    # -----------------------------------------------------------------

    def _resource_roots(self, include_outputs: bool, kinds: tuple[SourceKind, ...]) -> Iterator[Path]:
        if include_outputs:
            yield from self._output_roots()
        for kind in kinds or KIND_PRIORITY:
            yield from sorted(self.source_dirs(kind))

    def find_resource(
        self,
        name: str,
        include_outputs: bool = True,
        kinds: Iterable[SourceKind] = (),
    ) -> Optional[Path]:
        """Find the resource *name* (``/``-separated) under this set's roots.

        Outputs (class dirs, then the resources dir) are checked before the
        source roots when *include_outputs* is true. Source roots follow in
        the order of *kinds*, all kinds by default. The first existing
        candidate is returned and later roots are not probed. *name* always
        resolves inside a root: a leading ``/`` is ignored and a name that
        climbs out with ``..`` matches nothing.
        """
        relative = name.lstrip("/")
        for root in self._resource_roots(include_outputs, tuple(kinds)):
            candidate = root / relative
            if not is_ancestor_or_same(candidate, root):
                continue
            if candidate.exists():
                return candidate
        return None

    def relative_path_of(self, file: PathLike) -> Optional[str]:
        """Path of *file* relative to its source or output root, ``/``-separated."""
        source_roots = list(dict.fromkeys(self.all_dirs(deduplicate=False)))
        return relativize(file, chain(source_roots, self._output_roots()))

    # -----------------------------------------------------------------
    # Classpaths
    # -----------------------------------------------------------------

    def effective_runtime_classpath(self) -> frozenset[Path]:
        if self.runtime_classpath is not None:
            return frozenset(self.runtime_classpath)
        return frozenset(self.compile_classpath)

    def classpath(self, kind: ClassPathKind) -> frozenset[Path]:
        if kind is ClassPathKind.RUNTIME:
            return self.effective_runtime_classpath()
        return frozenset(self.compile_classpath)

    # -----------------------------------------------------------------
    # Task naming
    # -----------------------------------------------------------------

    def task_name(self, verb: str, target: Optional[str] = None) -> str:
        """Gradle task name for *verb* on this set, e.g. ``compileTestJava``."""
        n = "" if self.name == MAIN_SOURCESET_NAME else capitalize(self.name)
        t = "" if target is None else capitalize(target)
        return verb + n + t

    def compile_task_name(self, language: str) -> str:
        return self.task_name("compile", language)

    def process_resources_task_name(self) -> str:
        return self.task_name("process", "Resources")

    def classes_task_name(self) -> str:
        return self.task_name("classes")

    def build_task_name(self, kind: SourceKind) -> str:
        if kind is SourceKind.RESOURCES:
            return self.process_resources_task_name()
        return self.compile_task_name(kind.label)

    # -----------------------------------------------------------------
    # Identity
    # -----------------------------------------------------------------

    def _identity(self) -> tuple:
        roots = {k: frozenset(v) for k, v in self.source_roots.items() if v}
        runtime = None if self.runtime_classpath is None else frozenset(self.runtime_classpath)
        return (
            self.name,
            roots,
            frozenset(self.output_class_dirs),
            self.output_resources_dir,
            self.web_app_root,
            frozenset(self.compile_classpath),
            runtime,
            frozenset(d.name for d in self.depends_on),
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, SourceSet):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"SourceSet({self.name!r})"
