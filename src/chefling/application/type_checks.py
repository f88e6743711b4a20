"""Application layer - Argument validation shared by the container entry points."""

import inspect
from typing import Any, Optional, Type

from chefling.domain import ContainerError, ErrorReason, display_name

_BASE_TYPES = (object, type)


def is_sub_type(dependency_type: Any, sub_type: Any) -> bool:
    """Return whether ``sub_type`` is a strict subclass of ``dependency_type``.

    A type is never its own subtype.
    """
    return (
        inspect.isclass(dependency_type)
        and inspect.isclass(sub_type)
        and sub_type is not dependency_type
        and issubclass(sub_type, dependency_type)
    )


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (str, bytes, tuple, list, dict, set)) and len(value) == 0


def validate_type(value: Any, container_type: Type) -> None:
    """Check that ``value`` can be registered or resolved by a container.

    Args:
        value: The candidate type.
        container_type: The container class, which is never injectable.

    Raises:
        ContainerError: With reason INVALID_TYPE naming the value and why
            it was rejected.
    """
    error = _find_type_error(value, container_type)
    if error:
        raise ContainerError(
            ErrorReason.INVALID_TYPE,
            f"Type [{display_name(value)}] is invalid, because it is {error}",
            dependency_type=value,
        )


def _find_type_error(value: Any, container_type: Type) -> Optional[str]:
    if is_empty(value):
        return "empty"
    if inspect.isclass(value) and issubclass(value, container_type):
        return "a container type"
    if isinstance(value, container_type):
        return "a container instance"
    if not inspect.isclass(value):
        return "not a class"
    if any(value is base for base in _BASE_TYPES):
        return "a base builtin type"
    if issubclass(value, BaseException):
        return "an exception type"
    return None
