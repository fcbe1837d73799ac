"""Unit tests for testing utilities."""

import pytest

from lattice_di.application import Container, ContainerBuilder
from lattice_di.domain import Lifetime, NotFoundError
from lattice_di.infrastructure.testing.utilities import (
    MockScope,
    TestContainer,
    create_mock_container,
)
from resolution_fixtures import A, B


class RealService:
    def __init__(self):
        self.is_real = True


class MockService:
    def __init__(self):
        self.is_real = False


class RequestContext:
    pass


@pytest.fixture
def parent():
    builder = ContainerBuilder()
    builder.add_class(RealService).singleton().alias("service")
    builder.add_class(RequestContext).scoped()
    builder.add_value("setting", "production")
    return builder.build()


class TestTestContainerInitialization:
    """Test cases for TestContainer initialization."""

    def test_test_container_initialization_without_parent(self):
        """Test TestContainer can be initialized without parent container."""
        test_container = TestContainer()

        assert isinstance(test_container, Container)
        assert test_container._parent_container is None
        assert not test_container.has("service")

    def test_test_container_initialization_with_parent(self, parent):
        """Test TestContainer inherits definitions from the parent container."""
        test_container = TestContainer(parent)

        assert test_container._parent_container is parent
        assert isinstance(test_container.get(RealService), RealService)
        assert test_container.get("setting") == "production"

    def test_test_container_does_not_share_parent_values(self, parent):
        """Test that singletons are produced again by the test container."""
        test_container = TestContainer(parent)

        assert test_container.get(RealService) is not parent.get(RealService)

    def test_test_container_has_empty_overrides_initially(self):
        """Test TestContainer starts with no overrides."""
        assert len(TestContainer()._overrides) == 0


class TestMockValue:
    """Test cases for mock_value method."""

    def test_mock_value_replaces_dependency(self, parent):
        """Test that mock_value replaces a dependency."""
        test_container = TestContainer(parent)
        mock_instance = MockService()

        test_container.mock_value(RealService, mock_instance)

        assert test_container.get(RealService) is mock_instance
        assert not test_container.get(RealService).is_real

    def test_mock_value_replaces_alias(self, parent):
        """Test that an alias can be overridden."""
        test_container = TestContainer(parent)
        mock_instance = MockService()

        test_container.mock_value("service", mock_instance)

        assert test_container.get("service") is mock_instance
        assert isinstance(test_container.get(RealService), RealService)

    def test_mock_value_does_not_affect_parent(self, parent):
        """Test that the parent container is left untouched."""
        test_container = TestContainer(parent)

        test_container.mock_value(RealService, MockService())

        assert parent.get(RealService).is_real

    def test_mock_value_is_injected_into_constructed_classes(self):
        """Test that auto-wired classes receive the mock."""
        test_container = TestContainer()
        mock_a = A()

        test_container.mock_value(A, mock_a)

        assert test_container.construct(B).a is mock_a


class TestMockFactory:
    """Test cases for mock_factory method."""

    def test_mock_factory_transient_by_default(self):
        """Test that mocked factories are transient unless stated otherwise."""
        test_container = TestContainer()

        test_container.mock_factory(RealService, lambda: MockService())

        first = test_container.get(RealService)
        assert isinstance(first, MockService)
        assert test_container.get(RealService) is not first

    def test_mock_factory_with_singleton_lifetime(self):
        """Test mocked factory with an explicit lifetime."""
        test_container = TestContainer()

        test_container.mock_factory(RealService, lambda: MockService(), Lifetime.SINGLETON)

        assert test_container.get(RealService) is test_container.get(RealService)

    def test_mock_factory_resolves_parameters(self):
        """Test that mocked factories are invoked with resolved parameters."""
        test_container = TestContainer()
        mock_a = A()
        test_container.mock_value(A, mock_a)

        def create_b(a: A) -> B:
            return B(a)

        test_container.mock_factory(B, create_b)

        assert test_container.get(B).a is mock_a


class TestResetOverrides:
    """Test cases for reset_overrides method."""

    def test_reset_overrides_restores_parent_definitions(self, parent):
        """Test that parent definitions are active again after a reset."""
        test_container = TestContainer(parent)
        test_container.mock_value(RealService, MockService())

        test_container.reset_overrides()

        assert test_container.get(RealService).is_real
        assert len(test_container._overrides) == 0

    def test_reset_overrides_removes_new_identifiers(self):
        """Test that identifiers only added as overrides disappear."""
        test_container = TestContainer()
        test_container.mock_value("mock", object())

        test_container.reset_overrides()

        with pytest.raises(NotFoundError):
            test_container.get("mock")

    def test_context_manager_resets_overrides(self, parent):
        """Test that leaving the block cleans up overrides."""
        with TestContainer(parent) as test_container:
            test_container.mock_value(RealService, MockService())
            assert not test_container.get(RealService).is_real

        assert test_container.get(RealService).is_real


class TestCreateMockContainer:
    """Test cases for create_mock_container function."""

    def test_create_mock_container_with_values(self):
        """Test that every pair becomes a mocked value."""
        mock_service = MockService()

        test_container = create_mock_container((RealService, mock_service), ("setting", "test"))

        assert test_container.get(RealService) is mock_service
        assert test_container.get("setting") == "test"

    def test_create_mock_container_empty(self):
        """Test creating an empty mock container."""
        test_container = create_mock_container()

        assert isinstance(test_container, TestContainer)
        assert len(test_container._overrides) == 0


class TestMockScope:
    """Test cases for MockScope context manager."""

    def test_mock_scope_provides_child_scope(self, parent):
        """Test that scoped values are cached within the block."""
        with MockScope(parent) as scoped:
            context = scoped.get(RequestContext)
            assert scoped.get(RequestContext) is context
            assert scoped is not parent

    def test_mock_scope_shares_singletons(self, parent):
        """Test that singleton values come from the parent."""
        service = parent.get(RealService)

        with MockScope(parent) as scoped:
            assert scoped.get(RealService) is service

    def test_mock_scopes_are_isolated(self, parent):
        """Test that each block gets its own scoped values."""
        with MockScope(parent) as first:
            first_context = first.get(RequestContext)

        with MockScope(parent) as second:
            assert second.get(RequestContext) is not first_context

    def test_mock_scope_does_not_suppress_exceptions(self, parent):
        """Test that errors raised inside the block propagate."""
        with pytest.raises(ValueError):
            with MockScope(parent):
                raise ValueError("inside scope")
