from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from lattice_di.domain.models import DependencyDefinition, ParameterDescriptor

Identifier = Union[str, type]


class IContainer(ABC):
    """Abstract interface for dependency resolution operations."""

    @abstractmethod
    def has(self, identifier: Identifier) -> bool:
        """Determine whether a definition exists for an identifier or alias.

        Args:
            identifier: Arbitrary identifier, alias or class.
        """

    @abstractmethod
    def get(self, identifier: Identifier) -> Any:
        """Produce the value for an identifier.

        Args:
            identifier: Arbitrary identifier, alias or class.

        Raises:
            NotFoundError: If no definition exists for the identifier.
            CircularReferenceError: If the identifier is already being resolved.
            LifetimeViolationError: If a longer-lived dependency would capture it.
        """

    @abstractmethod
    def construct(self, target: Union[str, type], *parameters: Any) -> Any:
        """Construct a class, resolving any constructor parameters not given.

        Args:
            target: Class or fully-qualified class name.
            *parameters: Explicit positional constructor parameters.

        Raises:
            ConstructionError: If the class does not exist or is not instantiable.
            CircularReferenceError: If the class is already being constructed.
        """

    @abstractmethod
    def invoke(self, func: Callable[..., Any], *parameters: Any) -> Any:
        """Call a callable, resolving any parameters not given.

        Args:
            func: Arbitrary callable.
            *parameters: Explicit positional parameters.
        """

    @abstractmethod
    def begin_scope(self) -> None:
        """Begin a new scope, discarding every scoped value."""

    @abstractmethod
    def create_scope(self) -> "IContainer":
        """Create a child container sharing singletons but owning its scoped values."""


class IDefinitionHandle(ABC):
    """Fluent configuration of a single dependency definition."""

    @abstractmethod
    def transient(self) -> "IDefinitionHandle":
        """Produce a new value every time the dependency is requested."""

    @abstractmethod
    def scoped(self) -> "IDefinitionHandle":
        """Produce the value once per scope."""

    @abstractmethod
    def singleton(self) -> "IDefinitionHandle":
        """Produce the value only once."""

    @abstractmethod
    def alias(self, alias: str) -> "IDefinitionHandle":
        """Make the dependency available under an additional identifier.

        Raises:
            DuplicateIdentifierError: If the alias is already configured.
        """


class IContainerBuilder(ABC):
    """Abstract interface for accumulating definitions and building containers."""

    @abstractmethod
    def add_class(self, cls: Union[str, type]) -> IDefinitionHandle:
        """Configure a class dependency identified by its fully-qualified name."""

    @abstractmethod
    def add_factory(self, identifier: Identifier, factory: Callable[..., Any]) -> IDefinitionHandle:
        """Configure a factory dependency for the given identifier."""

    @abstractmethod
    def add_value(self, identifier: Identifier, value: Any) -> IDefinitionHandle:
        """Configure a pre-built value for the given identifier."""

    @abstractmethod
    def configure(self, identifier: Identifier) -> Optional[IDefinitionHandle]:
        """Produce the handle of a configured definition, if any."""

    @abstractmethod
    def build(self) -> IContainer:
        """Build a container from the configured definitions."""


class IParameterBinder(ABC):
    """Abstract interface for completing argument lists of callables."""

    @abstractmethod
    def bind(
        self,
        descriptors: Sequence[ParameterDescriptor],
        parameters: Tuple[Any, ...],
        container: IContainer,
    ) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
        """Resolve every parameter not supplied by position.

        Args:
            descriptors: Described parameters of the target callable.
            parameters: Known positional values.
            container: The container used to resolve missing values.

        Returns:
            Positional and keyword arguments for the call.
        """


class ILifetimeManager(ABC):
    """Abstract interface for caching values according to their lifetime."""

    @abstractmethod
    def cached(self, definition: DependencyDefinition) -> Tuple[bool, Any]:
        """Look up a cached value, singleton tier first.

        Returns:
            ``(True, value)`` on a hit, ``(False, None)`` otherwise.
        """

    @abstractmethod
    def cache(self, definition: DependencyDefinition, value: Any) -> None:
        """Cache a value if its definition's lifetime allows it."""

    @abstractmethod
    def clear_scoped_cache(self) -> None:
        """Clear only the scoped values cache."""
