"""
FastAPI integration module.

Provides helpers and utilities for integrating chefling with FastAPI.
"""

from .integration import create_fastapi_dependency, inject_dependencies

__all__ = [
    "create_fastapi_dependency",
    "inject_dependencies",
]
