from typing import Any, List, Optional


class DIException(Exception):
    """Base exception for DI-related errors."""


class NotFoundError(DIException):
    """Raised when a value cannot be found or a parameter cannot be resolved.

    This occurs when:
    - No definition exists for the requested identifier.
    - A parameter lacks a type hint, default value and explicit identifier.
    - A parameter is typed with a builtin type the container cannot resolve.

    Attributes:
        identifier: The identifier (or parameter name) that was not found.
        reason: Optional reason for the failure.
    """

    def __init__(self, identifier: str, reason: Optional[str] = None) -> None:
        self.identifier = identifier
        self.reason = reason
        message = reason if reason else f"Dependency definition for '{identifier}' not found"
        super().__init__(message)


class CircularReferenceError(DIException):
    """Raised when an identifier or type is requested while already being resolved.

    Attributes:
        identifier: The identifier or type name that was encountered twice.
        chain: Names on the resolution path from the first occurrence to the repeat.
    """

    def __init__(self, identifier: str, chain: Optional[List[str]] = None) -> None:
        self.identifier = identifier
        self.chain = chain or [identifier, identifier]
        message = f"Circular reference detected: {' -> '.join(self.chain)}"
        super().__init__(message)


class LifetimeViolationError(DIException):
    """Raised when a longer-lived dependency would capture a shorter-lived one.

    Attributes:
        identifier: The shorter-lived dependency being resolved.
        lifetime: Lifetime of that dependency.
        dependent: The longer-lived dependency currently under construction.
        dependent_lifetime: Lifetime of the dependent.
    """

    def __init__(self, identifier: str, lifetime: Any, dependent: str, dependent_lifetime: Any) -> None:
        self.identifier = identifier
        self.lifetime = lifetime
        self.dependent = dependent
        self.dependent_lifetime = dependent_lifetime
        message = (
            f"Dependency '{identifier}' ({lifetime}) cannot be injected into "
            f"'{dependent}' ({dependent_lifetime}) with a longer lifetime"
        )
        super().__init__(message)


class DuplicateIdentifierError(DIException):
    """Raised when an identifier or alias is already configured.

    Attributes:
        identifier: The colliding identifier or alias.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Dependency identifier '{identifier}' is already configured")


class ConstructionError(DIException):
    """Raised when a type cannot be instantiated or inspected.

    This occurs when:
    - The type name cannot be imported.
    - The target is not a class, is abstract or is a protocol.
    - Type hints of a signature cannot be evaluated.

    The underlying exception, if any, is chained as ``__cause__``.

    Attributes:
        target: The type or type name that could not be constructed.
        reason: Description of the failure.
    """

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot construct {target}: {reason}")
