from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from lattice_di.domain import IContainer, Identifier

REQUEST_STATE_ATTRIBUTE = "di_container"


def create_fastapi_dependency(container: IContainer, identifier: Identifier) -> Callable[[], Any]:
    """Adapt ``container.get(identifier)`` to a zero-argument ``Depends()`` provider.

    Lifetimes are those of the definition: singletons are shared by every
    request, transient values are produced per call.

    Example:
        >>> provide_mailer = create_fastapi_dependency(container, "mailer")
        >>>
        >>> @app.post("/invite")
        >>> def invite(mailer: Mailer = Depends(provide_mailer)):
        ...     mailer.send("welcome")
    """

    def provide() -> Any:
        """Resolve the dependency from the application container."""
        return container.get(identifier)

    return provide


def create_scoped_dependency(identifier: Identifier) -> Callable[[Request], Any]:
    """Adapt a lookup in the request's child scope to a ``Depends()`` provider.

    Scoped definitions then produce one value per request. Requires
    ``ScopedContainerMiddleware``.

    Args:
        identifier: Arbitrary identifier, alias or class.

    Returns:
        Provider receiving the current request.

    Raises:
        RuntimeError: When called for a request the middleware did not handle.

    Example:
        >>> provide_unit_of_work = create_scoped_dependency(UnitOfWork)
        >>>
        >>> @app.put("/orders/{order_id}")
        >>> def update(order_id: int, work: UnitOfWork = Depends(provide_unit_of_work)):
        ...     work.commit()
    """

    def provide_scoped(request: Request) -> Any:
        """Resolve the dependency from the child scope attached to the request."""
        scoped: IContainer = getattr(request.state, REQUEST_STATE_ATTRIBUTE, None)
        if scoped is None:
            raise RuntimeError(
                "Request does not have a scoped DI container. Did you forget to add ScopedContainerMiddleware?"
            )
        return scoped.get(identifier)

    return provide_scoped


class ScopedContainerMiddleware(BaseHTTPMiddleware):
    """Gives every request its own child scope of the application container.

    The child shares singleton values with the application container, owns
    its scoped values and is stored on ``request.state.di_container``.
    Scoped values are discarded once the response is produced, even when the
    endpoint raises.

    Example:
        >>> app.add_middleware(ScopedContainerMiddleware, container=builder.build())
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware.

        Args:
            app: The FastAPI/Starlette application.
            container: Application container every request scope is created from.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Handle one request inside its own child scope.

        Args:
            request: The incoming request; receives the scope on its state.
            call_next: The next middleware or the endpoint.

        Returns:
            The endpoint's response, unchanged.
        """
        scoped = self.container.create_scope()
        setattr(request.state, REQUEST_STATE_ATTRIBUTE, scoped)

        try:
            return await call_next(request)
        finally:
            scoped.begin_scope()
