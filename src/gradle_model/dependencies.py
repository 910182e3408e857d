"""Dependency graph between the source sets of one project.

Edges come from :attr:`SourceSet.depends_on`: ``test -> main`` means the test
set consumes main's output. Gradle build descriptions are expected to be
acyclic; the graph does not enforce it but :meth:`find_cycles` reports
violations and a warning is logged when the graph is built.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .exceptions import DuplicateSourceSetError, SourceSetCycleError
from .paths import PathLike
from .sourceset import SourceSet

logger = logging.getLogger(__name__)


class SourceSetDependencyGraph:
    """The source sets of a project and the ``depends_on`` relation between them."""

    def __init__(self, source_sets: Iterable[SourceSet]) -> None:
        self._sets: dict[str, SourceSet] = {}
        for ss in source_sets:
            if ss.name in self._sets:
                raise DuplicateSourceSetError(ss.name)
            self._sets[ss.name] = ss

        # Edges to sets outside this graph are kept on the SourceSet but not traversed.
        self._adjacency: dict[str, list[str]] = {
            name: sorted(d.name for d in ss.depends_on if d.name in self._sets)
            for name, ss in self._sets.items()
        }
        self._reverse: dict[str, list[str]] = {name: [] for name in self._sets}
        for name, targets in self._adjacency.items():
            for target in targets:
                self._reverse[target].append(name)
        for dependents in self._reverse.values():
            dependents.sort()

        for cycle in self.find_cycles():
            logger.warning("Source set dependency cycle: %s", ", ".join(sorted(cycle)))

    # -----------------------------------------------------------------
    # Container protocol
    # -----------------------------------------------------------------

    @property
    def names(self) -> list[str]:
        return list(self._sets)

    @property
    def source_sets(self) -> list[SourceSet]:
        return list(self._sets.values())

    def get(self, name: str) -> Optional[SourceSet]:
        return self._sets.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[SourceSet]:
        return iter(self._sets.values())

    # -----------------------------------------------------------------
    # Edges
    # -----------------------------------------------------------------

    def dependencies_of(self, name: str) -> list[SourceSet]:
        """Source sets *name* directly depends on."""
        return [self._sets[n] for n in self._adjacency.get(name, [])]

    def dependents_of(self, name: str) -> list[SourceSet]:
        """Source sets that directly depend on *name*."""
        return [self._sets[n] for n in self._reverse.get(name, [])]

    def transitive_dependencies(self, name: str) -> list[SourceSet]:
        """All source sets reachable from *name*, nearest first, excluding *name*."""
        visited: set[str] = {name}
        order: list[str] = []
        queue: deque[str] = deque(self._adjacency.get(name, []))
        while queue:
            node = queue.popleft()
            if node in visited:
                continue
            visited.add(node)
            order.append(node)
            queue.extend(n for n in self._adjacency.get(node, []) if n not in visited)
        return [self._sets[n] for n in order]

    def topological_order(self) -> list[SourceSet]:
        """Dependencies before dependents; ties broken by name.

        Raises:
            SourceSetCycleError: If the dependencies are cyclic.
        """
        remaining = {name: len(targets) for name, targets in self._adjacency.items()}
        ready = sorted(name for name, count in remaining.items() if count == 0)
        order: list[str] = []
        while ready:
            node = ready.pop(0)
            order.append(node)
            for dependent in self._reverse[node]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    ready.append(dependent)
            ready.sort()

        if len(order) != len(self._sets):
            stuck = [name for name, count in remaining.items() if count > 0]
            raise SourceSetCycleError(stuck)
        return [self._sets[n] for n in order]

    def find_cycles(self) -> list[set[str]]:
        """Strongly connected components with more than one member.

        Iterative Tarjan; self-dependencies are reported as one-member cycles.
        """
        counter = 0
        scc_stack: list[str] = []
        on_stack: set[str] = set()
        index: dict[str, int] = {}
        lowlink: dict[str, int] = {}
        result: list[set[str]] = []

        for root in self._sets:
            if root in index:
                continue

            index[root] = lowlink[root] = counter
            counter += 1
            scc_stack.append(root)
            on_stack.add(root)
            call_stack: list[tuple[str, Iterator[str]]] = [(root, iter(self._adjacency[root]))]

            while call_stack:
                v, it = call_stack[-1]
                pushed = False
                for w in it:
                    if w not in index:
                        index[w] = lowlink[w] = counter
                        counter += 1
                        scc_stack.append(w)
                        on_stack.add(w)
                        call_stack.append((w, iter(self._adjacency[w])))
                        pushed = True
                        break
                    elif w in on_stack:
                        lowlink[v] = min(lowlink[v], index[w])

                if not pushed:
                    call_stack.pop()
                    if call_stack:
                        caller = call_stack[-1][0]
                        lowlink[caller] = min(lowlink[caller], lowlink[v])

                    if lowlink[v] == index[v]:
                        component: set[str] = set()
                        while True:
                            w = scc_stack.pop()
                            on_stack.discard(w)
                            component.add(w)
                            if w == v:
                                break
                        if len(component) > 1 or v in self._adjacency[v]:
                            result.append(component)

        return result

    # -----------------------------------------------------------------
    # Queries across sets
    # -----------------------------------------------------------------

    def upstream_outputs(self, name: str) -> list[Path]:
        """Output roots of everything *name* transitively consumes.

        Ordered by :meth:`topological_order` when the graph is acyclic, by
        BFS distance otherwise. Class dirs precede each set's resources dir.
        """
        upstream = {ss.name for ss in self.transitive_dependencies(name)}
        try:
            ordered = [ss for ss in self.topological_order() if ss.name in upstream]
        except SourceSetCycleError:
            ordered = self.transitive_dependencies(name)

        outputs: list[Path] = []
        for ss in ordered:
            outputs.extend(sorted(ss.output_class_dirs))
            if ss.output_resources_dir is not None:
                outputs.append(ss.output_resources_dir)
        return outputs

    def containing(self, file: PathLike) -> list[SourceSet]:
        """Source sets that contain *file*, in graph order."""
        return [ss for ss in self._sets.values() if ss.contains(file)]

    def owner_of(self, file: PathLike) -> Optional[SourceSet]:
        """The source set *file* belongs to, preferring non-test sets."""
        matches = self.containing(file)
        for ss in matches:
            if not ss.is_test:
                return ss
        return matches[0] if matches else None

    def __repr__(self) -> str:
        return f"SourceSetDependencyGraph({', '.join(self._sets)})"
