"""Tests for the source set dependency graph (dependencies.py)."""

import logging
from pathlib import Path

import pytest

from gradle_model.dependencies import SourceSetDependencyGraph
from gradle_model.exceptions import DuplicateSourceSetError, SourceSetCycleError
from gradle_model.sourceset import SourceKind, SourceSet


def _set(name, *deps, is_test=False):
    return SourceSet(
        name,
        source_roots={SourceKind.JAVA: {Path(f"/p/src/{name}/java")}},
        output_class_dirs={Path(f"/p/build/classes/java/{name}")},
        output_resources_dir=Path(f"/p/build/resources/{name}"),
        is_test=is_test,
        depends_on=set(deps),
    )


@pytest.fixture
def layered():
    """main <- test, main <- shared <- integrationTest."""
    main = _set("main")
    shared = _set("shared", main)
    test = _set("test", main, is_test=True)
    integration = _set("integrationTest", shared, main, is_test=True)
    return SourceSetDependencyGraph([integration, test, shared, main])


class TestContainer:
    def test_lookup(self, layered):
        assert len(layered) == 4
        assert "main" in layered
        assert layered.get("main").name == "main"
        assert layered.get("missing") is None

    def test_iteration_keeps_insertion_order(self, layered):
        assert layered.names == ["integrationTest", "test", "shared", "main"]

    def test_duplicate_names_rejected(self):
        with pytest.raises(DuplicateSourceSetError):
            SourceSetDependencyGraph([_set("main"), _set("main")])


class TestEdges:
    def test_direct_dependencies(self, layered):
        assert [s.name for s in layered.dependencies_of("integrationTest")] == ["main", "shared"]
        assert layered.dependencies_of("main") == []

    def test_dependents(self, layered):
        assert [s.name for s in layered.dependents_of("main")] == [
            "integrationTest",
            "shared",
            "test",
        ]

    def test_transitive(self, layered):
        names = {s.name for s in layered.transitive_dependencies("integrationTest")}
        assert names == {"shared", "main"}
        assert layered.transitive_dependencies("main") == []

    def test_external_targets_ignored(self):
        outside = _set("other")
        graph = SourceSetDependencyGraph([_set("main", outside)])
        assert graph.dependencies_of("main") == []


class TestOrdering:
    def test_topological(self, layered):
        order = [s.name for s in layered.topological_order()]
        assert order.index("main") < order.index("shared") < order.index("integrationTest")
        assert order.index("main") < order.index("test")
        assert order[0] == "main"

    def test_acyclic_has_no_cycles(self, layered):
        assert layered.find_cycles() == []

    def test_cycle_detected(self, caplog):
        a = _set("a")
        b = _set("b", a)
        a.depends_on.add(b)
        with caplog.at_level(logging.WARNING, logger="gradle_model.dependencies"):
            graph = SourceSetDependencyGraph([a, b])
        assert graph.find_cycles() == [{"a", "b"}]
        assert "cycle" in caplog.text
        with pytest.raises(SourceSetCycleError) as exc:
            graph.topological_order()
        assert exc.value.names == ["a", "b"]

    def test_self_dependency_is_a_cycle(self):
        a = _set("a")
        a.depends_on.add(a)
        graph = SourceSetDependencyGraph([a])
        assert graph.find_cycles() == [{"a"}]


class TestQueries:
    def test_upstream_outputs(self, layered):
        assert layered.upstream_outputs("integrationTest") == [
            Path("/p/build/classes/java/main"),
            Path("/p/build/resources/main"),
            Path("/p/build/classes/java/shared"),
            Path("/p/build/resources/shared"),
        ]
        assert layered.upstream_outputs("main") == []

    def test_containing(self, layered):
        assert [s.name for s in layered.containing("/p/src/test/java/T.java")] == ["test"]
        assert layered.containing("/q/x") == []

    def test_owner_prefers_non_test(self):
        shared_root = Path("/p/src/common/java")
        main = SourceSet("main", source_roots={SourceKind.JAVA: {shared_root}})
        test = SourceSet("test", source_roots={SourceKind.JAVA: {shared_root}}, is_test=True)
        graph = SourceSetDependencyGraph([test, main])
        assert graph.owner_of(shared_root / "A.java").name == "main"

    def test_owner_of_test_only_file(self, layered):
        assert layered.owner_of("/p/src/test/java/T.java").name == "test"
        assert layered.owner_of("/elsewhere") is None
