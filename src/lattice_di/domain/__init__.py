"""
Domain layer - Core models and rules of dependency resolution.

This layer contains the definitions, lifetimes, errors and interfaces the
resolution engine is built on. It has no dependencies on other layers.
"""

from .enums import Lifetime, ResolutionKind
from .exceptions import (
    CircularReferenceError,
    ConstructionError,
    DIException,
    DuplicateIdentifierError,
    LifetimeViolationError,
    NotFoundError,
)
from .interfaces import (
    IContainer,
    IContainerBuilder,
    IDefinitionHandle,
    Identifier,
    ILifetimeManager,
    IParameterBinder,
)
from .markers import Inject
from .models import (
    DependencyDefinition,
    ParameterDescriptor,
    ResolutionKey,
    as_identifier,
    type_identifier,
)

# Rebuild Pydantic models to resolve forward references
DependencyDefinition.model_rebuild()

__all__ = [
    # Enums
    "Lifetime",
    "ResolutionKind",
    # Exceptions
    "DIException",
    "NotFoundError",
    "CircularReferenceError",
    "LifetimeViolationError",
    "DuplicateIdentifierError",
    "ConstructionError",
    # Interfaces
    "IContainer",
    "IContainerBuilder",
    "IDefinitionHandle",
    "IParameterBinder",
    "ILifetimeManager",
    "Identifier",
    # Markers
    "Inject",
    # Models
    "DependencyDefinition",
    "ParameterDescriptor",
    "ResolutionKey",
    "as_identifier",
    "type_identifier",
]
