"""Loaders turning dependency names into types.

A loader is any callable taking a name and returning a class. The
container calls it for every constructor dependency that is not already
a class, for example an unannotated parameter or a forward reference.
"""

import importlib
import inspect
from typing import Any, Mapping, Optional

from chefling.domain import ContainerError, ErrorReason, Loader


def namespace_loader(namespace: Mapping[str, Any]) -> Loader:
    """Create a loader that looks names up in a mapping.

    Args:
        namespace: Mapping of names to classes, typically a module's
            ``globals()`` or ``vars(module)``.

    Returns:
        Loader resolving names from ``namespace``.

    Example:
        >>> container.set_loader(namespace_loader(globals()))
    """

    def load(name: str) -> Any:
        value = namespace.get(name)
        if not inspect.isclass(value):
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Name '{name}' does not refer to a class in the namespace",
            )
        return value

    return load


def import_loader(default_module: Optional[str] = None) -> Loader:
    """Create a loader that imports classes by dotted path.

    ``"package.module.ClassName"`` imports ``package.module`` and reads
    ``ClassName`` from it. A bare name is read from ``default_module``
    when one is given.

    Args:
        default_module: Module searched for names without a dot.

    Returns:
        Loader resolving names with :mod:`importlib`.

    Example:
        >>> container.set_loader(import_loader("myapp.services"))
        >>> # "Mailer" -> myapp.services.Mailer, "myapp.db.Pool" -> myapp.db.Pool
    """

    def load(name: str) -> Any:
        if "." in name:
            module_name, _, attribute = name.rpartition(".")
        elif default_module:
            module_name, attribute = default_module, name
        else:
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Cannot import '{name}' without a module path",
            )

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Cannot import module '{module_name}' for dependency '{name}': {e}",
            ) from e

        value = getattr(module, attribute, None)
        if not inspect.isclass(value):
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Module '{module_name}' has no class named '{attribute}'",
            )
        return value

    return load
