import functools
import inspect
from typing import Any, Callable, Dict, Type, TypeVar

from fastapi import Depends

from chefling.domain import IContainer

T = TypeVar("T")


def create_fastapi_dependency(container: IContainer, dependency_type: Type[T]) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that resolves from the container.

    The dependency returns the container's shared instance of the type, so
    every request sees the same object.

    Args:
        container: The container to resolve dependencies from.
        dependency_type: The type to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.map_type(UserRepository, SqlUserRepository)
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> T:
        """Resolve the dependency from the container."""
        return container.get(dependency_type)

    return dependency


def inject_dependencies(container: IContainer, *dependency_types: Type[Any]) -> Callable:
    """Decorator that injects dependencies into an async endpoint function.

    The n-th type fills the n-th parameter of the decorated function
    whenever the caller does not pass it explicitly.

    Args:
        container: The container to resolve dependencies from.
        *dependency_types: Types to resolve and inject, in parameter order.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(container, UserService, Logger)
        >>> async def list_users(user_service: UserService, logger: Logger):
        ...     logger.info("Listing users")
        ...     return await user_service.get_all()
    """

    def decorator(func: Callable) -> Callable:
        """Wrap the function with dependency injection logic."""
        signature = inspect.signature(func)
        param_names = list(signature.parameters.keys())

        resolvers: Dict[str, Callable[[], Any]] = {}
        for param_name, dependency_type in zip(param_names, dependency_types):
            resolvers[param_name] = create_fastapi_dependency(container, dependency_type)

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            """Resolve dependencies and call the original function."""
            bound = signature.bind_partial(*args, **kwargs)
            for param_name, resolver in resolvers.items():
                if param_name not in bound.arguments:
                    kwargs[param_name] = resolver()

            return await func(*args, **kwargs)

        # FastAPI calls endpoints with keyword arguments only, so every
        # parameter is exposed as keyword-only and the injected ones get a
        # Depends() default.
        parameters = []
        for param in signature.parameters.values():
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                continue
            if param.kind is not inspect.Parameter.VAR_KEYWORD:
                param = param.replace(kind=inspect.Parameter.KEYWORD_ONLY)
            if param.name in resolvers:
                param = param.replace(default=Depends(resolvers[param.name]))
            parameters.append(param)
        wrapper.__signature__ = signature.replace(parameters=parameters)

        return wrapper

    return decorator
