"""JSON-ready views of snapshots and source sets."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

from ..snapshot import ProjectSnapshot
from ..sourceset import KIND_PRIORITY, SourceSet


def _paths(paths: Iterable[Path]) -> list[str]:
    return sorted(str(p) for p in paths)


def _path(path: Optional[Path]) -> Optional[str]:
    return None if path is None else str(path)


def source_set_to_dict(ss: SourceSet) -> dict[str, Any]:
    return {
        "name": ss.name,
        "is_test": ss.is_test,
        "source_roots": {
            kind.value: _paths(ss.source_dirs(kind)) for kind in KIND_PRIORITY if ss.source_dirs(kind)
        },
        "overlapping_source_dirs": ss.has_overlapping_source_dirs(),
        "output_class_dirs": _paths(ss.output_class_dirs),
        "output_resources_dir": _path(ss.output_resources_dir),
        "web_app_root": _path(ss.web_app_root),
        "compile_classpath": _paths(ss.compile_classpath),
        "runtime_classpath": _paths(ss.effective_runtime_classpath()),
        "runtime_classpath_inherited": ss.runtime_classpath is None,
        "source_compatibility": ss.source_compatibility,
        "target_compatibility": ss.target_compatibility,
        "depends_on": sorted(d.name for d in ss.depends_on),
    }


def snapshot_to_dict(snapshot: ProjectSnapshot) -> dict[str, Any]:
    base = snapshot.base_project
    return {
        "project": base.name,
        "project_dir": str(base.project_dir),
        "root_dir": str(base.root_dir),
        "is_root": base.is_root,
        "sub_projects": {name: str(path) for name, path in sorted(base.sub_projects.items())},
        "quality": snapshot.quality.name,
        "problems": list(snapshot.problems),
        "evaluation_time": snapshot.evaluation_time.isoformat(),
        "source_sets": [source_set_to_dict(ss) for ss in snapshot.dependency_graph()],
    }
