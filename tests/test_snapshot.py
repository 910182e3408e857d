"""Tests for project snapshots and invalidation (snapshot.py)."""

import logging
from datetime import datetime
from pathlib import Path

import pytest

from gradle_model.base_project import BaseProject
from gradle_model.capabilities import CapabilityRegistry
from gradle_model.dependencies import SourceSetDependencyGraph
from gradle_model.exceptions import GradleModelError, MissingBaseProjectError, RegistrySealedError
from gradle_model.quality import ProjectQuality
from gradle_model.snapshot import (
    DEFAULT_INVALIDATION_REASON,
    ProjectSnapshot,
)


@pytest.fixture
def snapshot(base_project, main_set, test_set):
    return ProjectSnapshot.create(
        ProjectQuality.FULL_ONLINE,
        ["old problem"],
        [base_project, main_set, test_set],
    )


class TestConstruction:
    def test_problems_drop_empty_and_keep_order(self, base_project):
        s = ProjectSnapshot.create(ProjectQuality.SIMPLE, ["b", None, "", "a", "b"], [base_project])
        assert s.problems == ("b", "a")

    def test_evaluation_time(self, base_project):
        before = datetime.now()
        s = ProjectSnapshot.create(ProjectQuality.SIMPLE, [], [base_project])
        assert before <= s.evaluation_time <= datetime.now()

    def test_missing_base_project_is_fatal(self, main_set):
        with pytest.raises(MissingBaseProjectError) as exc:
            ProjectSnapshot.create(ProjectQuality.FULL, [], [main_set])
        assert exc.value.found == 0
        assert isinstance(exc.value, GradleModelError)

    def test_two_base_projects_rejected(self, base_project):
        other = BaseProject("q", Path("/q"), Path("/q"), Path("/q/build"))
        with pytest.raises(MissingBaseProjectError) as exc:
            ProjectSnapshot.create(ProjectQuality.FULL, [], [base_project, other])
        assert exc.value.found == 2

    def test_registry_is_sealed(self, snapshot):
        assert snapshot.capabilities.sealed
        with pytest.raises(RegistrySealedError):
            snapshot.capabilities.register(object())

    def test_immutable(self, snapshot):
        with pytest.raises(AttributeError):
            snapshot.quality = ProjectQuality.FALLBACK


class TestInvalidate:
    def test_degrades_and_shares_registry(self, snapshot):
        stale = snapshot.invalidate("x")
        assert stale.quality is ProjectQuality.EVALUATED
        assert set(stale.problems) == {"x"}
        assert stale.capabilities is snapshot.capabilities

    def test_original_untouched(self, snapshot):
        snapshot.invalidate("x")
        assert snapshot.quality is ProjectQuality.FULL_ONLINE
        assert snapshot.problems == ("old problem",)

    @pytest.mark.parametrize("quality", list(ProjectQuality))
    def test_always_lands_on_evaluated(self, base_project, quality):
        s = ProjectSnapshot.create(quality, [], [base_project])
        assert s.invalidate("broken").quality is ProjectQuality.EVALUATED

    def test_chained_invalidation_keeps_facts(self, snapshot):
        stale = snapshot.invalidate("a").invalidate("b", "c")
        assert stale.problems == ("b", "c")
        assert stale.capabilities is snapshot.capabilities
        assert stale.source_set("main") is snapshot.source_set("main")

    def test_without_reasons_records_default(self, snapshot):
        assert snapshot.invalidate().problems == (DEFAULT_INVALIDATION_REASON,)
        assert snapshot.invalidate(None, "").problems == (DEFAULT_INVALIDATION_REASON,)

    def test_logs_warning(self, snapshot, caplog):
        with caplog.at_level(logging.WARNING, logger="gradle_model.snapshot"):
            snapshot.invalidate("build.gradle: unexpected token")
        assert "unexpected token" in caplog.text


class TestQueries:
    def test_base_project(self, snapshot, base_project):
        assert snapshot.base_project is base_project

    def test_source_sets(self, snapshot):
        assert [s.name for s in snapshot.source_sets()] == ["main", "test"]
        assert snapshot.source_set("test").is_test
        assert snapshot.source_set("nope") is None

    def test_query_delegates(self, snapshot, base_project):
        assert snapshot.query_one(BaseProject) is base_project
        assert len(snapshot.query_all(object)) == 3

    def test_derived_dependency_graph(self, snapshot):
        graph = snapshot.dependency_graph()
        assert [s.name for s in graph.dependencies_of("test")] == ["main"]

    def test_registered_dependency_graph_preferred(self, base_project, main_set):
        graph = SourceSetDependencyGraph([main_set])
        s = ProjectSnapshot(ProjectQuality.FULL, (), CapabilityRegistry([base_project, main_set, graph]))
        assert s.dependency_graph() is graph

    def test_str(self, snapshot):
        assert str(snapshot) == "ProjectSnapshot(quality=FULL_ONLINE, project=p)"
