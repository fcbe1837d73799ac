import inspect
import logging
from typing import Any, Callable, List, Optional, Sequence, Union

from lattice_di.application.lifetime_manager import LifetimeManager
from lattice_di.application.parameter_binder import ParameterBinder
from lattice_di.application.resolution_stack import ResolutionStack
from lattice_di.application.signature_inspector import SignatureInspector, import_type
from lattice_di.domain import (
    ConstructionError,
    DependencyDefinition,
    IContainer,
    Identifier,
    IParameterBinder,
    LifetimeViolationError,
    NotFoundError,
    ResolutionKey,
    as_identifier,
    type_identifier,
)

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Dependency resolution engine.

    Produces values for configured definitions, constructs classes and invokes
    callables while resolving any parameters they require. Supports transient,
    scoped and singleton lifetimes, detects circular references and prevents
    longer-lived values from capturing shorter-lived ones.

    Attributes:
        _definitions: Configured definitions in registration order.
        _lifetime_manager: Component caching singleton and scoped values.
        _binder: Component resolving missing parameters.
        _inspector: Component describing signatures.
        _resolution_stack: Keys currently being resolved.
    """

    def __init__(
        self,
        definitions: Optional[Sequence[DependencyDefinition]] = None,
        *,
        lifetime_manager: Optional[LifetimeManager] = None,
        binder: Optional[IParameterBinder] = None,
        inspector: Optional[SignatureInspector] = None,
    ) -> None:
        """Initialize the container.

        Args:
            definitions: Configured definitions; usually supplied by ``ContainerBuilder.build()``.
            lifetime_manager: Optional lifetime manager, shared singleton cache for child scopes.
            binder: Optional parameter binder.
            inspector: Optional signature inspector.
        """
        self._definitions: List[DependencyDefinition] = list(definitions or [])
        self._lifetime_manager = lifetime_manager or LifetimeManager()
        self._binder: IParameterBinder = binder or ParameterBinder()
        self._inspector = inspector or SignatureInspector()
        self._resolution_stack = ResolutionStack()

    def find(self, identifier: Identifier) -> Optional[DependencyDefinition]:
        """Find the definition owning an identifier or alias.

        Args:
            identifier: Arbitrary identifier, alias or class.

        Returns:
            The first matching definition, or None.
        """
        identifier = as_identifier(identifier)
        for definition in self._definitions:
            if definition.matches(identifier):
                return definition
        return None

    def has(self, identifier: Identifier) -> bool:
        """Determine whether a definition exists for an identifier or alias."""
        return self.find(identifier) is not None

    def get(self, identifier: Identifier) -> Any:
        """Produce the value for an identifier or alias.

        Cached singleton and scoped values are returned without invoking the
        factory again. Transient values are produced on every call.

        Args:
            identifier: Arbitrary identifier, alias or class.

        Returns:
            The produced value.

        Raises:
            NotFoundError: If no definition exists for the identifier.
            CircularReferenceError: If the identifier is already being resolved.
            LifetimeViolationError: If a longer-lived dependency currently being
                resolved would capture this one.

        Example:
            >>> container = builder.build()
            >>> settings = container.get("settings")
        """
        definition = self.find(identifier)

        if definition is None:
            raise NotFoundError(as_identifier(identifier))

        key = ResolutionKey.identifier(definition.identifier)
        self._resolution_stack.ensure_absent(key)

        hit, value = self._lifetime_manager.cached(definition)
        if hit:
            logger.debug("Using cached value for '%s'", definition.identifier)
            return value

        self._ensure_lifetime_expectancy_of(definition)

        with self._resolution_stack.entry(key):
            logger.debug("Producing %s value for '%s'", definition.lifetime, definition.identifier)
            value = definition.factory(self, ())

        self._lifetime_manager.cache(definition, value)
        return value

    def construct(self, target: Union[str, type], *parameters: Any) -> Any:
        """Construct a class, resolving any constructor parameters not given.

        Args:
            target: Class or fully-qualified class name.
            *parameters: Explicit positional constructor parameters.

        Returns:
            The constructed instance.

        Raises:
            ConstructionError: If the class does not exist or is not instantiable.
            CircularReferenceError: If the class is already being constructed.
            NotFoundError: If a constructor parameter cannot be resolved.

        Example:
            >>> remaining = container.construct(Remaining, "first")
        """
        type_name = type_identifier(target) if inspect.isclass(target) else str(target)

        with self._resolution_stack.entry(ResolutionKey.type_name(type_name)):
            cls = self._reflect(target, type_name)

            if cls.__init__ is object.__init__:
                return cls()

            descriptors = self._inspector.describe_constructor(cls)
            if not descriptors:
                return cls(*parameters)

            args, kwargs = self._binder.bind(descriptors, tuple(parameters), self)
            return cls(*args, **kwargs)

    def invoke(self, func: Callable[..., Any], *parameters: Any) -> Any:
        """Call a callable, resolving any parameters not given.

        Exceptions raised by the callable itself propagate unmodified. Classes
        are constructed, so their ``__init__`` parameters are resolved even when
        ``__new__`` declares a different signature.

        Args:
            func: Arbitrary callable.
            *parameters: Explicit positional parameters.

        Returns:
            The callable's return value.

        Example:
            >>> container.invoke(lambda: "value")
            'value'
        """
        if inspect.isclass(func):
            return self.construct(func, *parameters)

        descriptors = self._inspector.describe(func)
        if not descriptors:
            return func(*parameters)

        args, kwargs = self._binder.bind(descriptors, tuple(parameters), self)
        return func(*args, **kwargs)

    def begin_scope(self) -> None:
        """Begin a new scope.

        Discards every scoped value so that it is produced again when next
        requested. Singleton values are unaffected.
        """
        logger.debug("Beginning new scope")
        self._lifetime_manager.clear_scoped_cache()

    def create_scope(self) -> "Container":
        """Create a child container for scoped lifetime.

        The child shares definitions and singleton values with this container
        but owns its scoped values and resolution stack. Useful for giving each
        request or worker its own scope.

        Returns:
            New container over the same definitions.

        Example:
            >>> scoped = container.create_scope()
            >>> assert scoped.get("config") is container.get("config")
        """
        return Container(
            self._definitions,
            lifetime_manager=LifetimeManager(self._lifetime_manager.get_singleton_cache()),
            binder=self._binder,
            inspector=self._inspector,
        )

    def _reflect(self, target: Union[str, type], type_name: str) -> type:
        """Load a class and make sure it can be instantiated."""
        cls = import_type(target) if isinstance(target, str) else target

        if not inspect.isclass(cls):
            raise ConstructionError(type_name, f"{type_name} is not a class")

        if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            raise ConstructionError(type_name, f"{type_name} is not instantiable")

        return cls

    def _ensure_lifetime_expectancy_of(self, definition: DependencyDefinition) -> None:
        """Ensure no dependent currently being resolved outlives a dependency.

        A singleton cannot capture a transient dependency; that would defeat
        the purpose of the transient lifetime.

        Raises:
            LifetimeViolationError: If a dependent on the stack has a longer lifetime.
        """
        for identifier in self._resolution_stack.identifiers():
            dependent = self.find(identifier)
            if dependent is not None and definition.lifetime.ordinal < dependent.lifetime.ordinal:
                self._resolution_stack.clear()
                logger.warning(
                    "Lifetime violation: '%s' (%s) requested by '%s' (%s)",
                    definition.identifier,
                    definition.lifetime,
                    dependent.identifier,
                    dependent.lifetime,
                )
                raise LifetimeViolationError(
                    definition.identifier,
                    definition.lifetime,
                    dependent.identifier,
                    dependent.lifetime,
                )
