"""Process-wide default container.

Opt-in convenience for applications that want one shared container
without passing it around. The first caller of
:func:`get_default_container` creates it; every later call returns the
same object until :func:`reset_default_container` is called.
"""

from typing import Optional

from chefling.application import Container

_default_container: Optional[Container] = None


def get_default_container() -> Container:
    """Get or create the process-wide container."""
    global _default_container
    if _default_container is None:
        _default_container = Container()
    return _default_container


def reset_default_container() -> None:
    """Reset the process-wide container and forget it.

    Cached instances get their destruction hooks called. The next call to
    :func:`get_default_container` creates a fresh container.
    """
    global _default_container
    if _default_container is not None:
        _default_container.reset()
    _default_container = None
