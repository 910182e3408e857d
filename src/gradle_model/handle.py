"""Thread-safe holder of the currently published project snapshot."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .exceptions import GradleModelError, MissingBaseProjectError, RegistryError, SourceSetError
from .snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[ProjectSnapshot, ProjectSnapshot], None]


class ProjectHandle:
    """Holds the latest snapshot of one project.

    Thread-safe: loader threads write via :meth:`publish`, :meth:`fail` and
    :meth:`reload`; any thread reads :attr:`current`. Snapshots are immutable,
    so readers always see one of them in full.
    """

    def __init__(self, snapshot: ProjectSnapshot) -> None:
        self._lock = threading.RLock()
        self._current = snapshot
        self._listeners: list[Listener] = []

    @property
    def current(self) -> ProjectSnapshot:
        return self._current

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _swap(self, successor: Callable[[ProjectSnapshot], ProjectSnapshot]) -> ProjectSnapshot:
        with self._lock:
            previous = self._current
            snapshot = successor(previous)
            self._current = snapshot
            # Copy listeners list to avoid mutation during iteration
            listeners = list(self._listeners)

        logger.debug("Published %s (was %s)", snapshot.quality.name, previous.quality.name)
        for listener in listeners:
            listener(previous, snapshot)
        return snapshot

    def publish(self, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        """Replace the current snapshot and notify listeners with ``(old, new)``."""
        return self._swap(lambda _previous: snapshot)

    def fail(self, *reasons: Optional[str]) -> ProjectSnapshot:
        """Publish an invalidated successor of the current snapshot."""
        return self._swap(lambda previous: previous.invalidate(*reasons))

    def reload(self, load: Callable[[], ProjectSnapshot]) -> ProjectSnapshot:
        """Run *load* and publish its result, or invalidate on failure.

        A :class:`GradleModelError` from *load* becomes the problem of the
        invalidated snapshot. Broken snapshot invariants (base-project count,
        registry or source-set errors) are loader bugs and propagate, as do
        exceptions outside the model hierarchy.
        """
        try:
            snapshot = load()
        except (MissingBaseProjectError, RegistryError, SourceSetError):
            raise
        except GradleModelError as e:
            logger.warning("Reload of %s failed: %s", self._current.base_project.name, e)
            return self.fail(str(e))
        return self.publish(snapshot)
