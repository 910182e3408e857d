"""Registry of heterogeneous per-project facts, queried by kind.

Loaders register plain objects (the base project, source sets, the source set
graph, ...). Consumers ask for the single instance of a kind, or for all of
them. A kind is any class; an instance matches when ``isinstance`` holds.

Once a snapshot owns a registry it is sealed, and the same registry object can
be shared between a snapshot and its invalidated successors.

Usage:
    registry = CapabilityRegistry([base_project, main, test])
    registry.query_one(BaseProject)
    registry.query_all(SourceSet)
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Type, TypeVar

from .exceptions import RegistrySealedError

T = TypeVar("T")


class CapabilityRegistry:
    """Ordered collection of facts; lookups return matches in registration order."""

    def __init__(self, instances: Iterable[object] = ()) -> None:
        self._instances: list[object] = []
        self._sealed = False
        for instance in instances:
            self.register(instance)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> CapabilityRegistry:
        """Refuse further registrations. Returns self for chaining."""
        self._sealed = True
        return self

    def register(self, instance: object) -> None:
        if self._sealed:
            raise RegistrySealedError(instance)
        if instance is None:
            return
        self._instances.append(instance)

    def query_one(self, kind: Type[T]) -> Optional[T]:
        """First registered instance of *kind*, or None."""
        for instance in self._instances:
            if isinstance(instance, kind):
                return instance
        return None

    def query_all(self, kind: Type[T]) -> tuple[T, ...]:
        return tuple(i for i in self._instances if isinstance(i, kind))

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, type) and self.query_one(kind) is not None

    def __iter__(self) -> Iterator[object]:
        return iter(list(self._instances))

    def __len__(self) -> int:
        return len(self._instances)

    def __repr__(self) -> str:
        kinds = ", ".join(type(i).__name__ for i in self._instances)
        return f"CapabilityRegistry([{kinds}], sealed={self._sealed})"
