import logging
from typing import Any, Callable, List, Optional, Union

from lattice_di.application.container import Container
from lattice_di.domain import (
    DependencyDefinition,
    DuplicateIdentifierError,
    IContainerBuilder,
    IDefinitionHandle,
    Identifier,
    Lifetime,
    as_identifier,
)

logger = logging.getLogger(__name__)


class DefinitionHandle(IDefinitionHandle):
    """Fluent configuration of a single dependency definition.

    Attributes:
        _definition: The configured definition.
        _builder: Builder owning the definition, used to validate aliases.
    """

    def __init__(self, definition: DependencyDefinition, builder: "ContainerBuilder") -> None:
        """Initialize the handle.

        Args:
            definition: The definition configured through this handle.
            builder: Builder owning the definition.
        """
        self._definition = definition
        self._builder = builder

    @property
    def definition(self) -> DependencyDefinition:
        """The configured definition.

        Returns:
            The definition as mutated by this handle so far.
        """
        return self._definition

    def transient(self) -> "DefinitionHandle":
        """Produce a new value every time the dependency is requested. This is the default."""
        self._definition.lifetime = Lifetime.TRANSIENT
        return self

    def scoped(self) -> "DefinitionHandle":
        """Produce the value only once per scope.

        The lifetime of a scope is up to the user of the container, see
        ``Container.begin_scope()``.
        """
        self._definition.lifetime = Lifetime.SCOPED
        return self

    def singleton(self) -> "DefinitionHandle":
        """Produce the value only once."""
        self._definition.lifetime = Lifetime.SINGLETON
        return self

    def alias(self, alias: str) -> "DefinitionHandle":
        """Make the dependency available under an additional identifier.

        Args:
            alias: Arbitrary alias.

        Raises:
            DuplicateIdentifierError: If the alias is already configured.
        """
        self._builder.assert_availability_of(alias)
        self._definition.aliases.append(alias)
        return self


class ContainerBuilder(IContainerBuilder):
    """Accumulates dependency definitions and builds containers from them.

    Identifiers and aliases are unique across the builder; a collision is
    rejected and the first registration remains active.

    Example:
        >>> builder = ContainerBuilder()
        >>> builder.add_class(DatabaseConnection).singleton()
        >>> builder.add_factory("settings", load_settings).singleton().alias("config")
        >>> builder.add_class(RequestContext).scoped()
        >>> container = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder without any definitions."""
        self._handles: List[DefinitionHandle] = []

    def add_class(self, cls: Union[str, type]) -> DefinitionHandle:
        """Configure a class dependency identified by its fully-qualified name.

        The class is constructed by the container, resolving its constructor
        parameters.

        Args:
            cls: Class or fully-qualified class name.

        Raises:
            DuplicateIdentifierError: If the class is already configured.
        """
        return self._add(
            as_identifier(cls),
            lambda container, parameters: container.construct(cls, *parameters),
        )

    def add_factory(self, identifier: Identifier, factory: Callable[..., Any]) -> DefinitionHandle:
        """Configure a factory dependency for the given identifier.

        The factory is invoked by the container, resolving its parameters.
        Declare a parameter typed ``IContainer`` to receive the container.

        Args:
            identifier: Arbitrary identifier or class.
            factory: Arbitrary callable producing the value.

        Raises:
            DuplicateIdentifierError: If the identifier is already configured.
        """
        return self._add(
            as_identifier(identifier),
            lambda container, parameters: container.invoke(factory, *parameters),
        )

    def add_value(self, identifier: Identifier, value: Any) -> DefinitionHandle:
        """Configure a pre-built value for the given identifier (singleton).

        Raises:
            DuplicateIdentifierError: If the identifier is already configured.
        """
        return self._add(as_identifier(identifier), lambda container, parameters: value).singleton()

    def configure(self, identifier: Identifier) -> Optional[DefinitionHandle]:
        """Produce the handle of a configured definition.

        Args:
            identifier: Primary identifier or class; aliases are not considered.

        Returns:
            The handle, or None if nothing is configured for the identifier.
        """
        identifier = as_identifier(identifier)
        for handle in self._handles:
            if handle.definition.identifier == identifier:
                return handle
        return None

    def build(self) -> Container:
        """Build a container from a snapshot of the configured definitions.

        Changes made to handles afterwards only affect containers built later.
        """
        definitions = [
            handle.definition.model_copy(update={"aliases": list(handle.definition.aliases)})
            for handle in self._handles
        ]
        logger.debug("Building container with %d definition(s)", len(definitions))
        return Container(definitions)

    def assert_availability_of(self, identifier: str) -> None:
        """Assert that no definition uses an identifier or alias.

        Raises:
            DuplicateIdentifierError: If a definition already uses the identifier.
        """
        for handle in self._handles:
            if handle.definition.matches(identifier):
                raise DuplicateIdentifierError(identifier)

    def _add(self, identifier: str, factory: Callable[..., Any]) -> DefinitionHandle:
        self.assert_availability_of(identifier)

        handle = DefinitionHandle(DependencyDefinition(identifier=identifier, factory=factory), self)
        self._handles.append(handle)

        logger.debug("Configured dependency '%s'", identifier)
        return handle
