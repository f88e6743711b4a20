"""
Domain layer - Core models and contracts.

This layer contains the building blocks of dependency resolution.
It has no dependencies on other layers.
"""

from .enums import ErrorReason, MappingKind
from .exceptions import ContainerError, display_name
from .identity_map import IdentityMap
from .interfaces import (
    DependencyDescriptor,
    IConstructorInspector,
    IContainer,
    ILifecycleManager,
    Loader,
)
from .models import Mapping

# Rebuild Pydantic models to resolve forward references
Mapping.model_rebuild()

__all__ = [
    # Enums
    "ErrorReason",
    "MappingKind",
    # Exceptions
    "ContainerError",
    "display_name",
    # Storage
    "IdentityMap",
    # Interfaces
    "IContainer",
    "IConstructorInspector",
    "ILifecycleManager",
    "DependencyDescriptor",
    "Loader",
    # Models
    "Mapping",
]
