"""Overridable containers and throwaway scopes for application tests."""

from .utilities import MockScope, TestContainer, create_mock_container

__all__ = ["MockScope", "TestContainer", "create_mock_container"]
