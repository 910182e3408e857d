"""Tests for the capability registry (capabilities.py)."""

import pytest

from gradle_model.base_project import BaseProject
from gradle_model.capabilities import CapabilityRegistry
from gradle_model.exceptions import RegistrySealedError
from gradle_model.sourceset import SourceSet


class Marker:
    pass


class SubMarker(Marker):
    pass


class TestQueries:
    def test_query_one_returns_first_match(self):
        first, second = Marker(), Marker()
        registry = CapabilityRegistry([first, second])
        assert registry.query_one(Marker) is first

    def test_query_one_missing(self):
        assert CapabilityRegistry().query_one(Marker) is None

    def test_query_all_in_registration_order(self):
        a, b = SourceSet("main"), SourceSet("test")
        registry = CapabilityRegistry([a, Marker(), b])
        assert registry.query_all(SourceSet) == (a, b)
        assert registry.query_all(BaseProject) == ()

    def test_subclasses_match(self):
        sub = SubMarker()
        registry = CapabilityRegistry([sub])
        assert registry.query_one(Marker) is sub
        assert Marker in registry
        assert SourceSet not in registry

    def test_none_is_not_registered(self):
        registry = CapabilityRegistry([None, Marker()])
        assert len(registry) == 1


class TestSealing:
    def test_register_until_sealed(self):
        registry = CapabilityRegistry()
        registry.register(Marker())
        assert not registry.sealed
        assert registry.seal() is registry
        with pytest.raises(RegistrySealedError) as exc:
            registry.register(Marker())
        assert exc.value.details == {"instance": "Marker"}
        assert len(registry) == 1

    def test_iteration_is_a_copy(self):
        registry = CapabilityRegistry([Marker()])
        items = list(registry)
        assert len(items) == 1
        assert "Marker" in repr(registry)
