"""
chefling: Dependency container that builds object graphs from constructor signatures.

Public API exports for the chefling package.
"""

# Application exports
from chefling.application.container import Container
from chefling.application.inspector import SignatureInspector

# Domain exports
from chefling.domain.enums import ErrorReason, MappingKind
from chefling.domain.exceptions import ContainerError
from chefling.domain.identity_map import IdentityMap
from chefling.domain.interfaces import IConstructorInspector, IContainer

# Infrastructure exports
from chefling.infrastructure.default_container import get_default_container, reset_default_container
from chefling.infrastructure.loaders import import_loader, namespace_loader

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "IContainer",
    # Inspection
    "SignatureInspector",
    "IConstructorInspector",
    # Enums
    "ErrorReason",
    "MappingKind",
    # Exceptions
    "ContainerError",
    # Storage
    "IdentityMap",
    # Default container
    "get_default_container",
    "reset_default_container",
    # Loaders
    "import_loader",
    "namespace_loader",
]
