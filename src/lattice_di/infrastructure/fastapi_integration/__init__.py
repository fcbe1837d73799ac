"""Request-scoped resolution and ``Depends()`` providers for FastAPI applications."""

from .integration import ScopedContainerMiddleware, create_fastapi_dependency, create_scoped_dependency

__all__ = ["ScopedContainerMiddleware", "create_fastapi_dependency", "create_scoped_dependency"]
