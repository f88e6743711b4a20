from enum import Enum


class MappingKind(str, Enum):
    """Defines how a mapped type is turned into an instance.

    Attributes:
        INSTANCE: A pre-built object is handed out as-is.
        FACTORY: A callable receives the container and builds the object.
        SUB_TYPE: Resolution is redirected to a subclass of the mapped type.
    """

    INSTANCE = "instance"
    FACTORY = "factory"
    SUB_TYPE = "sub_type"

    def __str__(self) -> str:
        return self.value


class ErrorReason(str, Enum):
    """Machine-readable reason attached to every ContainerError."""

    INVALID_TYPE = "invalid_type"
    DUPLICATE_MAPPING = "duplicate_mapping"
    CIRCULAR_DEPENDENCY = "circular_dependency"
    CREATION_FAILURE = "creation_failure"
    FACTORY_FAILURE = "factory_failure"
    INVALID_INSTANCE_MAPPING = "invalid_instance_mapping"
    INVALID_SUB_TYPE_MAPPING = "invalid_sub_type_mapping"
    INVALID_FACTORY_MAPPING = "invalid_factory_mapping"
    UNRESOLVABLE_DEPENDENCY = "unresolvable_dependency"
    CONTAINER_PROTECTED = "container_protected"
    INVALID_LOADER = "invalid_loader"

    def __str__(self) -> str:
        return self.value
