"""Project snapshots: one immutable view of a project's facts and their quality.

A successful load builds a new snapshot with its own capability registry. A
failed reload calls :meth:`ProjectSnapshot.invalidate` on the current snapshot
instead: the successor drops to ``EVALUATED`` and records the failure reasons,
but keeps the very same registry, so previously retrieved structure stays
available at reduced trust.

Example:
    >>> snapshot = ProjectSnapshot.create(ProjectQuality.FULL, [], [base, main])
    >>> stale = snapshot.invalidate("build.gradle: syntax error")
    >>> stale.quality
    <ProjectQuality.EVALUATED: 'evaluated'>
    >>> stale.capabilities is snapshot.capabilities
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Type, TypeVar

from .base_project import BaseProject
from .capabilities import CapabilityRegistry
from .dependencies import SourceSetDependencyGraph
from .exceptions import MissingBaseProjectError
from .quality import ProjectQuality
from .sourceset import SourceSet

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Recorded when invalidate() is called without a usable reason.
DEFAULT_INVALIDATION_REASON = "Project reload failed."


def _clean_problems(problems: Iterable[Optional[str]]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(p for p in problems if p))


@dataclass(frozen=True)
class ProjectSnapshot:
    """Quality, problems and capabilities of a project at one point in time.

    Attributes:
        quality:          How far the data can be trusted.
        problems:         Ordered, de-duplicated problem descriptions.
        capabilities:     Sealed registry of project facts; shared with
                          invalidated successors.
        evaluation_time:  When this snapshot was created.

    Raises:
        MissingBaseProjectError: If the registry does not hold exactly one
            :class:`BaseProject`.
    """

    quality: ProjectQuality
    problems: tuple[str, ...]
    capabilities: CapabilityRegistry
    evaluation_time: datetime = field(default_factory=datetime.now, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "problems", _clean_problems(self.problems))
        found = len(self.capabilities.query_all(BaseProject))
        if found != 1:
            raise MissingBaseProjectError(found)
        self.capabilities.seal()

    @classmethod
    def create(
        cls,
        quality: ProjectQuality,
        problems: Iterable[Optional[str]],
        infos: Iterable[object],
    ) -> ProjectSnapshot:
        """Build a snapshot around a fresh registry holding *infos*."""
        return cls(quality, tuple(problems), CapabilityRegistry(infos))

    def invalidate(self, *reasons: Optional[str]) -> ProjectSnapshot:
        """Successor at ``EVALUATED`` quality that keeps this snapshot's facts.

        Only *reasons* become problems; earlier problems are not carried over.
        """
        problems = _clean_problems(reasons) or (DEFAULT_INVALIDATION_REASON,)
        logger.warning(
            "Project %s invalidated (%s -> %s): %s",
            self.base_project.name,
            self.quality.name,
            ProjectQuality.EVALUATED.name,
            "; ".join(problems),
        )
        return ProjectSnapshot(ProjectQuality.EVALUATED, problems, self.capabilities)

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    @property
    def base_project(self) -> BaseProject:
        return self.capabilities.query_one(BaseProject)

    def query_one(self, kind: Type[T]) -> Optional[T]:
        return self.capabilities.query_one(kind)

    def query_all(self, kind: Type[T]) -> tuple[T, ...]:
        return self.capabilities.query_all(kind)

    def source_sets(self) -> tuple[SourceSet, ...]:
        return self.capabilities.query_all(SourceSet)

    def source_set(self, name: str) -> Optional[SourceSet]:
        for ss in self.source_sets():
            if ss.name == name:
                return ss
        return None

    def dependency_graph(self) -> SourceSetDependencyGraph:
        """The registered graph, or one derived from the registered source sets."""
        graph = self.capabilities.query_one(SourceSetDependencyGraph)
        if graph is None:
            graph = SourceSetDependencyGraph(self.source_sets())
        return graph

    def __str__(self) -> str:
        return f"ProjectSnapshot(quality={self.quality.name}, project={self.base_project.name})"
