"""
lattice-di: Identifier based dependency resolution engine with auto-wiring.

Public API exports for the lattice-di package.
"""

# Application exports
from lattice_di.application.builder import ContainerBuilder, DefinitionHandle
from lattice_di.application.container import Container

# Domain exports
from lattice_di.domain.enums import Lifetime
from lattice_di.domain.exceptions import (
    CircularReferenceError,
    ConstructionError,
    DIException,
    DuplicateIdentifierError,
    LifetimeViolationError,
    NotFoundError,
)
from lattice_di.domain.interfaces import IContainer
from lattice_di.domain.markers import Inject
from lattice_di.domain.models import type_identifier

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "ContainerBuilder",
    "DefinitionHandle",
    "IContainer",
    # Enums
    "Lifetime",
    # Markers
    "Inject",
    "type_identifier",
    # Exceptions
    "DIException",
    "NotFoundError",
    "CircularReferenceError",
    "LifetimeViolationError",
    "DuplicateIdentifierError",
    "ConstructionError",
]
