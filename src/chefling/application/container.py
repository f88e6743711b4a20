import inspect
import logging
from typing import Any, Callable, List, Optional, Type, TypeVar

from chefling.application.circular_detector import CircularDependencyDetector
from chefling.application.inspector import SignatureInspector
from chefling.application.lifecycle_manager import LifecycleManager
from chefling.application.type_checks import is_sub_type, validate_type
from chefling.domain import (
    ContainerError,
    DependencyDescriptor,
    ErrorReason,
    IConstructorInspector,
    IContainer,
    IdentityMap,
    ILifecycleManager,
    Loader,
    Mapping,
    MappingKind,
    display_name,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Container(IContainer):
    """Main dependency container.

    Builds object graphs by resolving constructor dependencies recursively.
    Instances obtained through :meth:`get` are shared; :meth:`create` always
    builds a new one. Mappings override how a type is produced: with a
    pre-built instance, a factory, or a redirect to a subtype.

    The container registers itself under :class:`Container`, so any
    component may depend on it. That entry survives :meth:`reset` and can
    never be removed.

    Attributes:
        _instances: Store of shared instances, keyed by type.
        _mappings: Store of :class:`Mapping` objects, keyed by type.
        _circular_detector: Component holding the resolution markers.
        _inspector: Component reading constructor dependencies.
        _lifecycle_manager: Component running ``on_create``/``on_destroy`` hooks.
        _loader: Optional callable turning dependency names into types.
    """

    def __init__(
        self,
        inspector: Optional[IConstructorInspector] = None,
        loader: Optional[Loader] = None,
    ) -> None:
        """Initialize the container.

        Args:
            inspector: Reads constructor dependencies. Defaults to
                :class:`SignatureInspector`.
            loader: Optional callable resolving dependency names to types.

        Raises:
            ContainerError: With reason INVALID_LOADER if ``loader`` is not callable.
        """
        self._inspector: IConstructorInspector = inspector if inspector is not None else SignatureInspector()
        self._lifecycle_manager: ILifecycleManager = LifecycleManager()
        self._loader: Optional[Loader] = None
        self._initialize()

        if loader is not None:
            self.set_loader(loader)

    def _initialize(self) -> None:
        self._instances = IdentityMap()
        self._mappings = IdentityMap()
        self._circular_detector = CircularDependencyDetector()

        self._instances.set(Container, self)

    def create(self, dependency_type: Type[T]) -> T:
        """Create a new instance of the specified type without caching it.

        Dependencies of the new instance are still resolved through
        :meth:`get`, so they are shared.

        Args:
            dependency_type: The type to instantiate.

        Returns:
            A new instance, or the mapped instance for an instance mapping.

        Raises:
            ContainerError: If the type is invalid or no instance can be produced.

        Example:
            >>> first = container.create(RequestHandler)
            >>> second = container.create(RequestHandler)
            >>> assert first is not second
        """
        validate_type(dependency_type, Container)

        instance = None
        mapping: Optional[Mapping] = self._mappings.get(dependency_type)

        if mapping is None:
            instance = self._construct(dependency_type)
        elif mapping.kind is MappingKind.INSTANCE:
            if isinstance(mapping.target, dependency_type):
                instance = mapping.target
        elif mapping.kind is MappingKind.SUB_TYPE:
            # The nested create already ran the creation hook
            return self.create(mapping.target)
        elif mapping.kind is MappingKind.FACTORY:
            instance = self._resolve_using_factory(dependency_type, mapping.target)

        if instance is None:
            raise ContainerError(
                ErrorReason.CREATION_FAILURE,
                f"Could not create an instance for type {display_name(dependency_type)}",
                dependency_type=dependency_type,
            )

        self._lifecycle_manager.created(instance)
        return instance

    def get(self, dependency_type: Type[T]) -> T:
        """Return the shared instance of the specified type.

        The first call builds the instance through :meth:`create` and caches
        it; later calls return the cached object. Types mapped to a subtype
        share the subtype's instance.

        Args:
            dependency_type: The type to resolve.

        Returns:
            The shared instance.

        Raises:
            ContainerError: If the type is invalid, a circular dependency is
                detected, or the instance cannot be created.

        Example:
            >>> service = container.get(UserService)
            >>> assert container.get(UserService) is service
        """
        if self._instances.has(dependency_type):
            return self._instances.get(dependency_type)

        validate_type(dependency_type, Container)

        mapping: Optional[Mapping] = self._mappings.get(dependency_type)
        if mapping is not None and mapping.kind is MappingKind.SUB_TYPE:
            return self.get(mapping.target)

        with self._circular_detector.guard(dependency_type):
            instance = self.create(dependency_type)

        self._instances.set(dependency_type, instance)
        logger.debug("Cached instance of %s", display_name(dependency_type))
        return instance

    def has(self, dependency_type: Type) -> bool:
        """Return whether an instance or a mapping exists for the type."""
        return self._instances.has(dependency_type) or self._mappings.has(dependency_type)

    def map_factory(self, dependency_type: Type[T], factory: Callable[[IContainer], T]) -> None:
        """Map a type to a factory.

        The factory receives the container and must return an instance of
        the type. It runs once for :meth:`get` and on every :meth:`create`.

        Args:
            dependency_type: The type to map.
            factory: Callable building the instance.

        Raises:
            ContainerError: If the type is invalid, the factory is not
                callable, or the type already has an instance or mapping.

        Example:
            >>> container.map_factory(Database, lambda c: Database(c.get(Settings).dsn))
        """
        validate_type(dependency_type, Container)

        if not callable(factory):
            raise ContainerError(
                ErrorReason.INVALID_FACTORY_MAPPING,
                "Factory is not callable",
                dependency_type=dependency_type,
            )

        self._add_mapping(Mapping.factory(dependency_type, factory))

    def map_instance(self, dependency_type: Type[T], instance: T) -> None:
        """Map a type to a pre-built instance.

        Args:
            dependency_type: The type to map.
            instance: Object returned for the type.

        Raises:
            ContainerError: If the type is invalid, the value is not an
                instance of the type, or the type already has an instance or
                mapping.
        """
        validate_type(dependency_type, Container)

        if instance is None:
            raise ContainerError(
                ErrorReason.INVALID_INSTANCE_MAPPING,
                "`instance` is empty",
                dependency_type=dependency_type,
            )
        if not isinstance(instance, dependency_type):
            raise ContainerError(
                ErrorReason.INVALID_INSTANCE_MAPPING,
                f"Value is not an instance of {display_name(dependency_type)}",
                dependency_type=dependency_type,
            )

        self._add_mapping(Mapping.instance(dependency_type, instance))

    def map_type(self, dependency_type: Type[T], sub_type: Type[T]) -> None:
        """Redirect a type to one of its subtypes.

        Resolving the type then yields the subtype's shared instance.

        Args:
            dependency_type: The type to map, usually an abstract base.
            sub_type: Strict subclass of ``dependency_type``.

        Raises:
            ContainerError: If either type is invalid or the type already
                has an instance or mapping.

        Example:
            >>> container.map_type(Repository, SqlRepository)
            >>> assert container.get(Repository) is container.get(SqlRepository)
        """
        validate_type(dependency_type, Container)

        if not inspect.isclass(sub_type):
            raise ContainerError(
                ErrorReason.INVALID_SUB_TYPE_MAPPING,
                "`sub_type` is not a class",
                dependency_type=dependency_type,
            )
        if not is_sub_type(dependency_type, sub_type):
            raise ContainerError(
                ErrorReason.INVALID_SUB_TYPE_MAPPING,
                f"{display_name(sub_type)} does not extend {display_name(dependency_type)}",
                dependency_type=dependency_type,
            )

        self._add_mapping(Mapping.sub_type(dependency_type, sub_type))

    def remove(self, dependency_type: Type) -> None:
        """Remove the instance and mapping of a type.

        The cached instance, if any, gets its destruction hook called. Every
        type redirected to ``dependency_type`` through :meth:`map_type` is
        removed as well.

        Args:
            dependency_type: The type to remove.

        Raises:
            ContainerError: If the type is the container's own type or is invalid.
        """
        if inspect.isclass(dependency_type) and issubclass(dependency_type, Container):
            raise ContainerError(
                ErrorReason.CONTAINER_PROTECTED,
                "Container instance can not be removed",
                dependency_type=dependency_type,
            )

        validate_type(dependency_type, Container)

        if self._instances.has(dependency_type):
            self._lifecycle_manager.destroyed(self._instances.get(dependency_type))

        self._instances.remove(dependency_type)
        self._mappings.remove(dependency_type)
        logger.debug("Removed %s", display_name(dependency_type))

        redirected = self._mappings.find_keys(lambda mapping: mapping.redirects_to(dependency_type))
        for mapped_type in redirected:
            self.remove(mapped_type)

    def reset(self) -> None:
        """Destroy every cached instance and drop all mappings.

        The loader and the inspector are kept.
        """
        # One object can be cached under several types
        destroyed = IdentityMap()
        for instance in self._instances.get_values():
            if instance is self or destroyed.has(instance):
                continue
            destroyed.set(instance, True)
            self._lifecycle_manager.destroyed(instance)

        self._initialize()
        logger.debug("Container reset")

    def set_loader(self, loader: Loader) -> None:
        """Install the callable used to turn dependency names into types.

        Replaces any previous loader.

        Args:
            loader: Callable receiving a name and returning a type.

        Raises:
            ContainerError: With reason INVALID_LOADER if ``loader`` is not callable.
        """
        if not callable(loader):
            raise ContainerError(ErrorReason.INVALID_LOADER, "Loader is not callable")

        self._loader = loader

    @property
    def loader(self) -> Optional[Loader]:
        return self._loader

    def get_mappings_copy(self) -> IdentityMap:
        """Get a copy of the mapping store for containers inheriting registrations.

        Returns:
            New store holding the same :class:`Mapping` objects.
        """
        mappings = IdentityMap()
        for dependency_type, mapping in self._mappings.items():
            mappings.set(dependency_type, mapping)
        return mappings

    def _add_mapping(self, mapping: Mapping) -> None:
        if self.has(mapping.dependency_type):
            raise ContainerError(
                ErrorReason.DUPLICATE_MAPPING,
                f"A mapping for {display_name(mapping.dependency_type)} already exists",
                dependency_type=mapping.dependency_type,
            )

        self._mappings.set(mapping.dependency_type, mapping)
        logger.debug("Mapped %s as %s", display_name(mapping.dependency_type), mapping.kind)

    def _construct(self, dependency_type: Type[T]) -> T:
        """Instantiate a type, resolving each constructor dependency in order."""
        descriptors = self._inspector.get_dependencies(dependency_type)
        arguments: List[Any] = [self.get(self._as_type(descriptor)) for descriptor in descriptors]

        try:
            return dependency_type(*arguments)
        except ContainerError:
            raise
        except Exception as e:
            raise ContainerError(
                ErrorReason.CREATION_FAILURE,
                f"Failed to create an instance of {display_name(dependency_type)}: {e}",
                dependency_type=dependency_type,
            ) from e

    def _resolve_using_factory(self, dependency_type: Type[T], factory: Callable[[IContainer], T]) -> T:
        try:
            instance = factory(self)
        except ContainerError:
            raise
        except Exception as e:
            raise ContainerError(
                ErrorReason.FACTORY_FAILURE,
                f"Factory for {display_name(dependency_type)} raised an error: {e}",
                dependency_type=dependency_type,
            ) from e

        if instance is None:
            raise ContainerError(
                ErrorReason.FACTORY_FAILURE,
                "Factory returned an empty value",
                dependency_type=dependency_type,
            )
        if not isinstance(instance, dependency_type):
            raise ContainerError(
                ErrorReason.FACTORY_FAILURE,
                f"Factory returned an unexpected value of type {display_name(type(instance))}",
                dependency_type=dependency_type,
            )

        return instance

    def _as_type(self, descriptor: DependencyDescriptor) -> Type:
        if inspect.isclass(descriptor):
            return descriptor

        if self._loader is None:
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Dependency '{descriptor}' is not a class and no loader is set",
            )

        try:
            loaded = self._loader(descriptor)
        except ContainerError:
            raise
        except Exception as e:
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Loader failed to resolve dependency '{descriptor}': {e}",
            ) from e

        if not inspect.isclass(loaded):
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Value '{descriptor}' ({display_name(type(loaded))}) is not a class",
            )

        return loaded
