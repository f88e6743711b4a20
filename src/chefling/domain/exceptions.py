from typing import Any, List, Optional, Type

from chefling.domain.enums import ErrorReason


class ContainerError(Exception):
    """Single error kind raised by the container.

    Callers tell failures apart through ``reason`` rather than through a
    class hierarchy.

    Attributes:
        reason: Why the operation failed.
        message: Human-readable description of the failure.
        dependency_type: The type involved in the failure, if any.
        dependency_chain: Types that closed a circular dependency, in
            resolution order. Empty for every other reason.
    """

    def __init__(
        self,
        reason: ErrorReason,
        message: str,
        dependency_type: Optional[Any] = None,
        dependency_chain: Optional[List[Type]] = None,
    ) -> None:
        self.reason = reason
        self.message = message
        self.dependency_type = dependency_type
        self.dependency_chain = dependency_chain or []
        super().__init__(message)

    @classmethod
    def circular(cls, dependency_chain: List[Type]) -> "ContainerError":
        """Build the error raised when a type is requested while it is being resolved.

        Args:
            dependency_chain: Types from the first occurrence of the repeated
                type up to and including its second request.
        """
        names = " -> ".join(display_name(dependency_type) for dependency_type in dependency_chain)
        return cls(
            ErrorReason.CIRCULAR_DEPENDENCY,
            f"Circular dependency detected: {names}",
            dependency_type=dependency_chain[-1],
            dependency_chain=dependency_chain,
        )

    def __repr__(self) -> str:
        return f"ContainerError(reason={self.reason.value!r}, message={self.message!r})"


def display_name(value: Any) -> str:
    """Return a short name for a type or value, for use in error messages."""
    if value is None:
        return "None"
    name = getattr(value, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return type(value).__name__.capitalize()
