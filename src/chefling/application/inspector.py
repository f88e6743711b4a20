import inspect
import logging
from typing import Any, Dict, List, Type, get_type_hints

from chefling.domain import (
    ContainerError,
    DependencyDescriptor,
    ErrorReason,
    IConstructorInspector,
    display_name,
)

logger = logging.getLogger(__name__)

INJECT_ATTRIBUTE = "__inject__"

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_INSTANCE_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class SignatureInspector(IConstructorInspector):
    """Reads constructor dependencies from an explicit declaration or from the signature.

    Lookup order:

    1. A ``__inject__`` class attribute listing types or names, returned verbatim.
    2. The ``__init__`` signature. Each positional parameter without a
       default yields its type hint when the hint is a class, its string
       annotation when that forward reference cannot be evaluated, and
       its parameter name otherwise. Names are left for the container's
       loader to resolve.

    Example:
        >>> class UserService:
        ...     def __init__(self, db: DatabaseConnection, cache):
        ...         ...
        >>> SignatureInspector().get_dependencies(UserService)
        [<class 'DatabaseConnection'>, 'cache']
    """

    def get_dependencies(self, dependency_type: Type) -> List[DependencyDescriptor]:
        """Return the ordered dependency descriptors of ``dependency_type``.

        Raises:
            ContainerError: With reason UNRESOLVABLE_DEPENDENCY if the
                constructor cannot be called positionally.
        """
        declared = getattr(dependency_type, INJECT_ATTRIBUTE, None)
        if declared is not None:
            return list(declared)

        constructor = dependency_type.__init__
        if constructor is object.__init__:
            return []

        try:
            signature = inspect.signature(constructor)
        except (TypeError, ValueError) as e:
            raise ContainerError(
                ErrorReason.UNRESOLVABLE_DEPENDENCY,
                f"Cannot read the constructor signature of {display_name(dependency_type)}: {e}",
                dependency_type=dependency_type,
            ) from e

        type_hints = self._get_type_hints(dependency_type, constructor)

        dependencies: List[DependencyDescriptor] = []
        for index, (param_name, param) in enumerate(signature.parameters.items()):
            # Skip the instance parameter, whatever its name
            if index == 0 and param.kind in _INSTANCE_KINDS:
                continue

            if param.kind in _SKIPPED_KINDS:
                continue

            # Parameters with defaults keep them
            if param.default is not inspect.Parameter.empty:
                continue

            if param.kind is inspect.Parameter.KEYWORD_ONLY:
                raise ContainerError(
                    ErrorReason.UNRESOLVABLE_DEPENDENCY,
                    f"Keyword-only parameter '{param_name}' of {display_name(dependency_type)} "
                    "has no default value and cannot be injected.",
                    dependency_type=dependency_type,
                )

            dependencies.append(self._describe(param, type_hints.get(param_name)))

        return dependencies

    @staticmethod
    def _describe(param: inspect.Parameter, hint: Any) -> DependencyDescriptor:
        if inspect.isclass(hint):
            return hint
        if isinstance(param.annotation, str) and param.annotation:
            return param.annotation
        return param.name

    @staticmethod
    def _get_type_hints(dependency_type: Type, constructor: Any) -> Dict[str, Any]:
        try:
            return get_type_hints(constructor)
        except (NameError, TypeError) as e:
            # Unresolvable forward references fall back to their string form
            logger.warning(
                "Could not evaluate type hints of %s (%s): %s",
                dependency_type.__name__,
                dependency_type.__qualname__,
                e,
            )
            return {}
