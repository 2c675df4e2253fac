"""Interface detection and satisfaction checks.

An interface is a ``typing.Protocol`` or an abstract base class: an ABCMeta-based
class that is still abstract or roots its own ABC hierarchy.
Registered keys satisfy an interface nominally (``issubclass``, which honours
``ABC.register``) or, for protocols, structurally: every protocol member must
be present on the candidate class. Protocols need not be ``@runtime_checkable``.
"""

import inspect
from abc import ABC, ABCMeta
from typing import Annotated, Any, Protocol, get_args, get_origin

from typewire.errors import InterfaceError

__all__ = ["interface_of", "is_interface", "implements", "unwrap_annotated"]

_PROTOCOL_INTERNALS = frozenset(
    {
        "__abstractmethods__",
        "__annotate__",
        "__annotate_func__",
        "__annotations__",
        "__annotations_cache__",
        "__callable_proto_members_only__",
        "__class_getitem__",
        "__dict__",
        "__doc__",
        "__firstlineno__",
        "__init__",
        "__init_subclass__",
        "__module__",
        "__new__",
        "__non_callable_proto_members__",
        "__orig_bases__",
        "__parameters__",
        "__protocol_attrs__",
        "__qualname__",
        "__slots__",
        "__static_attributes__",
        "__subclasshook__",
        "__type_params__",
        "__weakref__",
        "_is_protocol",
        "_is_runtime_protocol",
    }
)


def unwrap_annotated(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata, returning the underlying type."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def is_interface(type_: Any) -> bool:
    """Return True if ``type_`` is a protocol or an abstract base class.

    An ABCMeta-based class counts when it still has abstract methods or is the
    root of its ABC hierarchy. Concrete implementations deriving from an
    interface are not interfaces themselves.
    """
    if not inspect.isclass(type_):
        return False
    if _is_protocol(type_):
        return True
    if not isinstance(type_, ABCMeta):
        return False
    return inspect.isabstract(type_) or not any(
        isinstance(base, ABCMeta) and base is not ABC for base in type_.__bases__
    )


def interface_of(marker: Any) -> type:
    """Extract the interface type denoted by ``marker``.

    ``marker`` may be the interface itself or the interface wrapped in any
    number of ``type[...]``/``Type[...]`` or ``Annotated[...]`` layers.

    Raises:
        InterfaceError: If the unwrapped marker is not an interface. This signals
            a mistake at the call site and is not meant to be handled.

    Example:
        >>> interface_of(type[Printer])  # Returns Printer
        >>> interface_of(int)            # Raises InterfaceError
    """
    type_ = unwrap_annotated(marker)
    while get_origin(type_) is type:
        type_ = unwrap_annotated(get_args(type_)[0])
    if not is_interface(type_):
        raise InterfaceError(
            f"interface_of: {marker!r} does not denote an interface "
            "(a Protocol or an abstract base class)"
        )
    return type_


def implements(candidate: Any, interface: type) -> bool:
    """Check whether a registered key satisfies ``interface``.

    Non-class keys (for example ``Callable[[str], str]``) never satisfy an interface.
    """
    if not inspect.isclass(candidate):
        return False
    if interface in candidate.__mro__:
        return True
    if _is_protocol(interface):
        return all(_has_member(candidate, name) for name in _protocol_members(interface))
    return issubclass(candidate, interface)


def _is_protocol(type_: type) -> bool:
    return bool(type_.__dict__.get("_is_protocol", False))


def _protocol_members(protocol: type) -> frozenset:
    members = protocol.__dict__.get("__protocol_attrs__")
    if members is not None:
        return frozenset(members)
    names = set()
    for base in protocol.__mro__[:-1]:
        if base is Protocol or not _is_protocol(base):
            continue
        names.update(vars(base))
        names.update(inspect.get_annotations(base))
    return frozenset(
        name
        for name in names
        if name not in _PROTOCOL_INTERNALS and not name.startswith("_abc_")
    )


def _has_member(candidate: type, name: str) -> bool:
    if hasattr(candidate, name):
        return True
    return any(name in inspect.get_annotations(base) for base in candidate.__mro__)
