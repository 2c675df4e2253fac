"""High level entry points for constructing containers."""

from typing import Any, Optional

from typewire.container import Container
from typewire.contracts import Injector

__all__ = ["make_container"]


def make_container(*values: Any, parent: Optional[Injector] = None) -> Container:
    """Construct a container, optionally pre-populated and scoped under a parent.

    Args:
        values: Values to register, each under its own type. Later values of a
            repeated type replace earlier ones.
        parent: An optional container consulted for types this one cannot resolve.

    Returns:
        The new :class:`Container`.

    Example:
        >>> app = make_container(Database())
        >>> request = make_container(CurrentUser("arthur"), parent=app)
        >>> request.get(Database)  # Found in parent
    """
    container = Container(parent)
    container.maps(*values)
    return container
