"""
Tests for the ServiceContainer dependency injection system.
"""

import pytest

from coderep.core.container import ServiceContainer


class TestServiceContainer:
    """Tests for ServiceContainer."""

    def test_register_and_get_singleton(self):
        """Test registering and retrieving a singleton service."""
        container = ServiceContainer()

        class Clock:
            pass

        container.register("clock", lambda c: Clock())

        first = container.get("clock")
        second = container.get("clock")

        assert isinstance(first, Clock)
        assert first is second

    def test_register_transient(self):
        """Test transient services are created on every get."""
        container = ServiceContainer()
        container.register("counter", lambda c: object(), singleton=False)

        assert container.get("counter") is not container.get("counter")

    def test_register_class_factory(self):
        """Test a class can be registered directly as a factory."""
        container = ServiceContainer()

        class Repo:
            pass

        container.register("repo", Repo)

        assert isinstance(container.get("repo"), Repo)

    def test_factory_receives_container(self):
        """Test factories can resolve their own dependencies."""
        container = ServiceContainer()
        container.register_instance("threshold", 0.5)
        container.register("search", lambda c: {"threshold": c.get("threshold")})

        assert container.get("search") == {"threshold": 0.5}

    def test_register_instance(self):
        """Test registering a pre-built instance."""
        container = ServiceContainer()
        instance = object()

        container.register_instance("thing", instance)

        assert container.get("thing") is instance

    def test_reregister_clears_cached_instance(self):
        """Test overriding a registration drops the old singleton."""
        container = ServiceContainer()
        container.register("value", lambda c: "old")
        assert container.get("value") == "old"

        container.register("value", lambda c: "new")

        assert container.get("value") == "new"

    def test_override_restores_previous(self):
        """Test override swaps a service only inside the block."""
        container = ServiceContainer()
        container.register("repo", lambda c: "real")
        assert container.get("repo") == "real"

        with container.override("repo", "fake") as fake:
            assert fake == "fake"
            assert container.get("repo") == "fake"

        assert container.get("repo") == "real"

    def test_override_unregistered_name(self):
        """Test overriding a new name removes it afterwards."""
        container = ServiceContainer()

        with container.override("extra", 1):
            assert container.has("extra")

        assert not container.has("extra")

    def test_get_unregistered_raises(self):
        """Test getting an unknown service raises KeyError."""
        container = ServiceContainer()

        with pytest.raises(KeyError, match="not registered"):
            container.get("missing")

    def test_has_and_names(self):
        """Test has() and names() see factories and instances."""
        container = ServiceContainer()
        container.register("b_factory", lambda c: 1)
        container.register_instance("a_instance", 2)

        assert container.has("b_factory")
        assert container.has("a_instance")
        assert not container.has("missing")
        assert container.names() == ["a_instance", "b_factory"]

    def test_clear(self):
        """Test clear removes everything."""
        container = ServiceContainer()
        container.register("service", lambda c: 1)
        container.get("service")

        container.clear()

        assert not container.has("service")
        assert container.names() == []
