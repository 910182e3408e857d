"""Confidence levels of loaded project data.

Loading full Gradle project information is expensive, so the model is often
filled from heuristics or offline evaluation first. Each snapshot records how
far its data can be trusted; reloading can raise (or, after a failure, lower)
that level.
"""

from __future__ import annotations

from enum import Enum


class ProjectQuality(Enum):
    """Totally ordered quality levels, worst first."""

    FALLBACK = "fallback"
    EVALUATED = "evaluated"
    SIMPLE = "simple"
    FULL = "full"
    FULL_ONLINE = "full_online"

    @property
    def ordinal(self) -> int:
        return _ORDER.index(self)

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def better_than(self, other: ProjectQuality) -> bool:
        return self.ordinal > other.ordinal

    def at_least(self, other: ProjectQuality) -> bool:
        return self.ordinal >= other.ordinal

    def worse_than(self, other: ProjectQuality) -> bool:
        return self.ordinal < other.ordinal

    def not_better_than(self, other: ProjectQuality) -> bool:
        return self.ordinal <= other.ordinal

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ProjectQuality):
            return NotImplemented
        return self.worse_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ProjectQuality):
            return NotImplemented
        return self.not_better_than(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ProjectQuality):
            return NotImplemented
        return self.better_than(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ProjectQuality):
            return NotImplemented
        return self.at_least(other)

    @classmethod
    def parse(cls, value: str) -> ProjectQuality:
        """Look up a level by name or value, case-insensitively."""
        key = value.strip().lower()
        for quality in cls:
            if key in (quality.value, quality.name.lower()):
                return quality
        raise ValueError(f"unknown project quality '{value}'")


_ORDER = list(ProjectQuality)

_DESCRIPTIONS = {
    ProjectQuality.FALLBACK: "Unreliable data, based on heuristics.",
    ProjectQuality.EVALUATED: (
        "Unreliable data: the project loaded better once, but a recent change "
        "made it un-loadable and previously retrieved information is in use."
    ),
    ProjectQuality.SIMPLE: "Reliable data; dependency information can be partial.",
    ProjectQuality.FULL: "Reliable data with full dependency information, available offline.",
    ProjectQuality.FULL_ONLINE: "Reliable data with full, network-verified dependency information.",
}
