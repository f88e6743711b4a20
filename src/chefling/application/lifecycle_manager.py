from typing import Any

from chefling.domain import ILifecycleManager

CREATE_HOOK = "on_create"
DESTROY_HOOK = "on_destroy"


class LifecycleManager(ILifecycleManager):
    """Runs the optional lifecycle hooks of container-managed instances.

    An instance opts in by defining ``on_create`` and/or ``on_destroy``
    methods taking no arguments. Their return values are ignored.

    Example:
        >>> class Connection:
        ...     def on_create(self):
        ...         self.open()
        ...     def on_destroy(self):
        ...         self.close()
    """

    def created(self, instance: Any) -> None:
        """Call ``instance.on_create()`` if it exists."""
        self._call_hook(instance, CREATE_HOOK)

    def destroyed(self, instance: Any) -> None:
        """Call ``instance.on_destroy()`` if it exists."""
        self._call_hook(instance, DESTROY_HOOK)

    @staticmethod
    def _call_hook(instance: Any, hook_name: str) -> None:
        if instance is None:
            return
        hook = getattr(instance, hook_name, None)
        if callable(hook):
            hook()
