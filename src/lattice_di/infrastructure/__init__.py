"""Infrastructure layer: adapters binding the resolution engine to frameworks and test suites."""

from . import fastapi_integration, testing

__all__ = ["fastapi_integration", "testing"]
