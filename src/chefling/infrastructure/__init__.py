"""
Infrastructure layer - External integrations.

This layer contains loaders, the default container and integrations with
external frameworks and tools. It depends on both Application and Domain layers.
"""

# fastapi_integration is imported on demand, FastAPI is an optional extra
from . import default_container, loaders, testing

__all__ = [
    "default_container",
    "loaders",
    "testing",
]
