"""Application layer - Circular dependency detection."""

from contextlib import contextmanager
from typing import Iterator, List, Type

from chefling.domain import ContainerError, IdentityMap


class CircularDependencyDetector:
    """Detects circular dependencies during resolution.

    Keeps a resolution marker for every type currently being resolved on
    the call stack. Requesting a type that already carries a marker closes
    a cycle.

    Attributes:
        _markers: Store of in-flight types, in the order they were entered.
    """

    def __init__(self) -> None:
        """Initialize the detector with no type in flight."""
        self._markers = IdentityMap()

    def is_resolving(self, dependency_type: Type) -> bool:
        """Return whether ``dependency_type`` is being resolved right now."""
        return self._markers.has(dependency_type)

    def push(self, dependency_type: Type) -> None:
        """Mark a dependency as being resolved.

        Args:
            dependency_type: The type being resolved.

        Raises:
            ContainerError: With reason CIRCULAR_DEPENDENCY if the type is
                already marked.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push(ServiceA)
            >>> detector.push(ServiceB)
            >>> detector.push(ServiceA)  # Raises ContainerError
        """
        if self._markers.has(dependency_type):
            raise ContainerError.circular(self._cycle_for(dependency_type))

        self._markers.set(dependency_type, True)

    def pop(self, dependency_type: Type) -> None:
        """Clear the marker of a dependency. Does nothing if it has none."""
        self._markers.remove(dependency_type)

    @contextmanager
    def guard(self, dependency_type: Type) -> Iterator[None]:
        """Mark ``dependency_type`` for the duration of the block.

        The marker is cleared on every exit path, so a failed resolution can
        be retried without reporting a false cycle.

        Example:
            >>> with detector.guard(ServiceA):
            ...     instance = build(ServiceA)
        """
        self.push(dependency_type)
        try:
            yield
        finally:
            self.pop(dependency_type)

    def get_stack(self) -> List[Type]:
        """Return the types in flight, outermost first."""
        return self._markers.keys()

    def clear(self) -> None:
        """Drop every marker."""
        self._markers.clear()

    def _cycle_for(self, dependency_type: Type) -> List[Type]:
        stack = self._markers.keys()
        start = next(index for index, entry in enumerate(stack) if entry is dependency_type)
        return stack[start:] + [dependency_type]
