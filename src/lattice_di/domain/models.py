import inspect
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from lattice_di.domain.enums import Lifetime, ResolutionKind

if TYPE_CHECKING:
    from lattice_di.domain.interfaces import IContainer


def type_identifier(cls: type) -> str:
    """Return the fully-qualified name used as the identifier of a class.

    Args:
        cls: Arbitrary class.

    Returns:
        ``module.QualName`` of the class.

    Example:
        >>> type_identifier(collections.OrderedDict)
        'collections.OrderedDict'
    """
    return f"{cls.__module__}.{cls.__qualname__}"


def as_identifier(identifier: Any) -> str:
    """Normalize an identifier given either as a string or as a class."""
    if inspect.isclass(identifier):
        return type_identifier(identifier)
    return identifier


class DependencyDefinition(BaseModel):
    """Registered recipe for producing a value.

    Identifier and factory are fixed once created; lifetime and aliases are
    configured fluently through a definition handle until the container is built.

    Attributes:
        identifier: Unique identifier, either a type name or an arbitrary logical name.
        aliases: Alternative identifiers resolving to this definition.
        lifetime: How long produced values live.
        factory: Callable of shape ``(container, explicit_parameters) -> value``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    identifier: str = Field(..., frozen=True, description="Unique dependency identifier.")
    factory: Callable[["IContainer", Tuple[Any, ...]], Any] = Field(
        ..., frozen=True, description="Factory receiving the container and explicit parameters."
    )
    lifetime: Lifetime = Field(default=Lifetime.TRANSIENT, description="The lifetime of produced values.")
    aliases: List[str] = Field(default_factory=list, description="Alternative identifiers.")

    def matches(self, identifier: str) -> bool:
        """Determine whether the identifier or one of the aliases equals ``identifier``."""
        return self.identifier == identifier or identifier in self.aliases


class ParameterDescriptor(BaseModel):
    """Reflection-independent description of a single callable parameter.

    Attributes:
        position: Zero-based position among the described parameters.
        name: Parameter name.
        keyword_only: Whether the parameter can only be passed by keyword.
        declared_type: Evaluated type hint, with ``Annotated`` metadata stripped.
        has_default: Whether the parameter declares a default value.
        default: The default value, if any.
        explicit_identifier: Identifier from an ``Inject`` marker, if any.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    position: int
    name: str
    keyword_only: bool = False
    declared_type: Optional[Any] = None
    has_default: bool = False
    default: Any = None
    explicit_identifier: Optional[str] = None


class ResolutionKey(BaseModel):
    """Tagged entry of the resolution stack.

    Identifier-based and type-based resolutions of the same name are distinct
    keys, so a class registered under its own type name is not mistaken for a
    cycle when its factory constructs it.
    """

    model_config = ConfigDict(frozen=True)

    kind: ResolutionKind
    name: str

    @classmethod
    def identifier(cls, name: str) -> "ResolutionKey":
        """Create the key of a resolution by identifier (``get``).

        Args:
            name: Primary identifier of the definition.

        Returns:
            Key tagged ``ResolutionKind.IDENTIFIER``.
        """
        return cls(kind=ResolutionKind.IDENTIFIER, name=name)

    @classmethod
    def type_name(cls, name: str) -> "ResolutionKey":
        """Create the key of a resolution by construction (``construct``).

        Args:
            name: Fully-qualified name of the constructed class.

        Returns:
            Key tagged ``ResolutionKind.TYPE_NAME``.
        """
        return cls(kind=ResolutionKind.TYPE_NAME, name=name)

    def __str__(self) -> str:
        """Render the key as its name, as used in cycle chains."""
        return self.name
