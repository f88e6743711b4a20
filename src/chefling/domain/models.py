from typing import TYPE_CHECKING, Any, Callable, Type

from pydantic import BaseModel, ConfigDict, Field

from chefling.domain.enums import MappingKind

if TYPE_CHECKING:
    from chefling.domain.interfaces import IContainer


class Mapping(BaseModel):
    """Value object describing how the container produces a mapped type.

    Attributes:
        dependency_type: The type the mapping is registered for.
        kind: Which variant the mapping is.
        target: The pre-built instance, the factory callable or the subtype,
            depending on ``kind``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Type = Field(..., description="The type the mapping is registered for.")
    kind: MappingKind = Field(..., description="The variant of the mapping.")
    target: Any = Field(..., description="Instance, factory or subtype, depending on the kind.")

    @classmethod
    def instance(cls, dependency_type: Type, instance: Any) -> "Mapping":
        return cls(dependency_type=dependency_type, kind=MappingKind.INSTANCE, target=instance)

    @classmethod
    def factory(cls, dependency_type: Type, factory: Callable[["IContainer"], Any]) -> "Mapping":
        return cls(dependency_type=dependency_type, kind=MappingKind.FACTORY, target=factory)

    @classmethod
    def sub_type(cls, dependency_type: Type, sub_type: Type) -> "Mapping":
        return cls(dependency_type=dependency_type, kind=MappingKind.SUB_TYPE, target=sub_type)

    def redirects_to(self, dependency_type: Type) -> bool:
        """Return whether this is a subtype mapping pointing at ``dependency_type``."""
        return self.kind is MappingKind.SUB_TYPE and self.target is dependency_type
