"""
Application layer - Resolution engine and its collaborators.

This layer builds containers from definitions and resolves values from them.
It depends only on the Domain layer.
"""

from .builder import ContainerBuilder, DefinitionHandle
from .container import Container
from .lifetime_manager import LifetimeManager
from .parameter_binder import ParameterBinder
from .resolution_stack import ResolutionStack
from .signature_inspector import SignatureInspector, import_type

__all__ = [
    "Container",
    "ContainerBuilder",
    "DefinitionHandle",
    "LifetimeManager",
    "ParameterBinder",
    "ResolutionStack",
    "SignatureInspector",
    "import_type",
]
