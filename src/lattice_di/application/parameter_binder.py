import inspect
import logging
from typing import Any, Dict, List, Sequence, Tuple

from lattice_di.domain import (
    IContainer,
    IParameterBinder,
    NotFoundError,
    ParameterDescriptor,
    type_identifier,
)

logger = logging.getLogger(__name__)


class ParameterBinder(IParameterBinder):
    """Completes argument lists by resolving parameters from the container.

    Resolution precedence for every parameter not supplied by position:
    1. explicit identifier (``Annotated[T, Inject("id")]``)
    2. default value
    3. the container itself, for parameters typed with the container interface
    4. registered definition for the declared type
    5. auto-wiring of the declared type
    6. error.
    """

    def bind(
        self,
        descriptors: Sequence[ParameterDescriptor],
        parameters: Tuple[Any, ...],
        container: IContainer,
    ) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
        """Resolve every parameter not supplied by position.

        Every position is checked individually; a prefix as long as the
        parameter list is not trusted to cover keyword-only parameters.

        Args:
            descriptors: Described parameters of the target callable.
            parameters: Known positional values.
            container: The container used to resolve missing values.

        Returns:
            Positional and keyword arguments for the call. Positional values
            beyond the described parameters are forwarded unchanged.

        Raises:
            NotFoundError: If a parameter has no usable type, default or identifier.

        Example:
            >>> class Remaining:
            ...     def __init__(self, first: str, a: A):
            ...         ...
            >>> binder.bind(inspector.describe_constructor(Remaining), ("first",), container)
            (('first', <A object>), {})
        """
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        positional_count = 0

        for descriptor in descriptors:
            if descriptor.keyword_only:
                kwargs[descriptor.name] = self.resolve(descriptor, container)
                continue

            positional_count += 1
            if descriptor.position < len(parameters):
                args.append(parameters[descriptor.position])
            else:
                args.append(self.resolve(descriptor, container))

        args.extend(parameters[positional_count:])
        return tuple(args), kwargs

    def resolve(self, descriptor: ParameterDescriptor, container: IContainer) -> Any:
        """Resolve a value for a single parameter.

        Args:
            descriptor: The parameter to resolve.
            container: The container to resolve from.

        Returns:
            The resolved value.
        """
        if descriptor.explicit_identifier is not None:
            if descriptor.has_default and not container.has(descriptor.explicit_identifier):
                return descriptor.default
            return container.get(descriptor.explicit_identifier)

        if descriptor.has_default:
            return descriptor.default

        declared_type = descriptor.declared_type

        if inspect.isclass(declared_type) and issubclass(declared_type, IContainer):
            if isinstance(container, declared_type):
                return container

        if declared_type is None or not inspect.isclass(declared_type) or declared_type.__module__ == "builtins":
            raise NotFoundError(
                descriptor.name,
                f"Value for parameter '{descriptor.name}' could not be resolved",
            )

        identifier = type_identifier(declared_type)

        if container.has(identifier):
            return container.get(identifier)

        logger.debug("Auto-wiring %s for parameter '%s'", identifier, descriptor.name)
        return container.construct(declared_type)
