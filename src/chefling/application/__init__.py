"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .container import Container
from .inspector import SignatureInspector
from .lifecycle_manager import LifecycleManager

__all__ = [
    "Container",
    "SignatureInspector",
    "LifecycleManager",
    "CircularDependencyDetector",
]
