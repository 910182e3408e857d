"""Path containment and relativization helpers.

Every check here is lexical: paths are normalised with ``os.path.normpath``
(trailing separators, ``.`` and ``..`` segments) and compared with pathlib
equality, which is case-insensitive on Windows. Symbolic links are never
resolved; callers pass canonical paths.

Example:
    >>> is_ancestor_or_same("/p/src/main/java/A.java", "/p/src/main/java")
    True
    >>> relativize("/p/src/main/java/pkg/A.java", ["/p/src/main/java"])
    'pkg/A.java'
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


def normalize(path: PathLike) -> Path:
    """Return *path* as a lexically normalised :class:`Path`."""
    return Path(os.path.normpath(os.fspath(path)))


def is_ancestor_or_same(candidate: Optional[PathLike], root: Optional[PathLike]) -> bool:
    """True iff *candidate* equals *root* or lies somewhere beneath it."""
    if candidate is None or root is None:
        return False
    c = normalize(candidate)
    r = normalize(root)
    return c == r or r in c.parents


def relativize(path: Optional[PathLike], roots: Iterable[Optional[PathLike]]) -> Optional[str]:
    """Express *path* relative to the first matching root, using ``/`` separators.

    Roots are tried in the given order and ``None`` roots are skipped. A path
    equal to a root yields the empty string. Returns None for a relative
    *path* or when no root contains it.
    """
    if path is None:
        return None
    p = Path(os.fspath(path))
    if not p.is_absolute():
        return None
    p = normalize(p)
    for root in roots:
        if root is None:
            continue
        r = normalize(root)
        if p == r:
            return ""
        if r in p.parents:
            return p.relative_to(r).as_posix()
    return None
