from abc import ABC, abstractmethod
from typing import Any, Callable, List, Type, TypeVar, Union

T = TypeVar("T")

DependencyDescriptor = Union[Type, str]
Loader = Callable[[str], Type]


class IContainer(ABC):
    """Abstract interface for dependency container operations."""

    @abstractmethod
    def create(self, dependency_type: Type[T]) -> T:
        """Create a new, uncached instance of the requested type.

        Args:
            dependency_type: The type to instantiate.
        """

    @abstractmethod
    def get(self, dependency_type: Type[T]) -> T:
        """Return the shared instance of the requested type, creating it on first use.

        Args:
            dependency_type: The type to resolve.
        """

    @abstractmethod
    def has(self, dependency_type: Type) -> bool:
        """Return whether an instance or a mapping exists for the type."""

    @abstractmethod
    def map_factory(self, dependency_type: Type[T], factory: Callable[["IContainer"], T]) -> None:
        """Map a type to a factory that receives the container.

        Args:
            dependency_type: The type to map.
            factory: Callable building the instance.
        """

    @abstractmethod
    def map_instance(self, dependency_type: Type[T], instance: T) -> None:
        """Map a type to a pre-built instance.

        Args:
            dependency_type: The type to map.
            instance: Object handed out for the type.
        """

    @abstractmethod
    def map_type(self, dependency_type: Type[T], sub_type: Type[T]) -> None:
        """Redirect a type to one of its subtypes.

        Args:
            dependency_type: The type to map.
            sub_type: Subclass resolved in its place.
        """

    @abstractmethod
    def remove(self, dependency_type: Type) -> None:
        """Remove the instance and mapping of a type, and of every type redirected to it."""

    @abstractmethod
    def reset(self) -> None:
        """Destroy every cached instance and drop all mappings."""

    @abstractmethod
    def set_loader(self, loader: Loader) -> None:
        """Install the callable used to turn dependency names into types."""


class IConstructorInspector(ABC):
    """Abstract interface for discovering a type's constructor dependencies."""

    @abstractmethod
    def get_dependencies(self, dependency_type: Type) -> List[DependencyDescriptor]:
        """Return the ordered dependency descriptors of a type's constructor.

        Must be deterministic for a given type.

        Args:
            dependency_type: The type to inspect.

        Returns:
            One descriptor per positional constructor argument: either a type
            or a name for the loader to resolve.
        """


class ILifecycleManager(ABC):
    """Abstract interface for running instance lifecycle hooks."""

    @abstractmethod
    def created(self, instance: Any) -> None:
        """Run the creation hook of a freshly produced instance."""

    @abstractmethod
    def destroyed(self, instance: Any) -> None:
        """Run the destruction hook of an instance leaving the container."""
