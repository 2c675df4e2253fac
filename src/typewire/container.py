"""The injection container.

A ``Container`` holds values keyed by type and hands them out again by type:
to callers of ``get``, to fields marked ``Annotated[T, Inject]`` via ``apply``,
and to the parameters of callables via ``invoke``.

Containers may be layered: a child container falls back to its parent for any
type it cannot resolve itself, allowing request-level containers over an
application-level one without repeating registrations. A child's own entries
always take precedence.

Resolution of a type proceeds as follows:
    1. A value registered exactly under the type.
    2. If the type is an interface (Protocol or ABC), the first registered
       value, in registration order, whose type implements it.
    3. The parent container, repeating these steps there.
"""

import inspect
import logging
from typing import Any, Callable, Optional

from typewire.contracts import Injector, TypeMapper
from typewire.errors import DependencyError
from typewire.interfaces import interface_of, is_interface
from typewire.introspection import injectable_fields, parameter_dependencies
from typewire.registry import MISSING, TypeRegistry

__all__ = ["Container"]

logger = logging.getLogger(__name__)


class Container(Injector):
    """A type registry that injects its values into objects and callables.

    The container performs no locking. Populate it fully before sharing it
    between threads, or guard it externally.

    Example:
        >>> container = Container()
        >>> container.map(Address("Shenzhen")).map(AuthCode("123456"))
        >>> user = User()
        >>> container.apply(user)
        >>> user.address.city
        'Shenzhen'
    """

    def __init__(self, parent: Optional[Injector] = None):
        self._registry = TypeRegistry()
        self._parent = parent

    @property
    def parent(self) -> Optional[Injector]:
        return self._parent

    def set_parent(self, parent: Optional[Injector]) -> None:
        self._parent = parent

    def map(self, value: Any) -> TypeMapper:
        self._registry.set(type(value), value)
        return self

    def maps(self, *values: Any) -> TypeMapper:
        for value in values:
            self.map(value)
        return self

    def map_to(self, value: Any, interface: Any) -> TypeMapper:
        """Register ``value`` under an interface rather than its own type.

        Args:
            value: The value to register.
            interface: The interface, optionally wrapped as ``type[Interface]``.

        Raises:
            InterfaceError: If ``interface`` does not denote a Protocol or ABC.
        """
        self._registry.set(interface_of(interface), value)
        return self

    def set(self, type_: Any, value: Any) -> TypeMapper:
        self._registry.set(type_, value)
        return self

    def get(self, type_: Any, default: Any = None) -> Any:
        value = self._resolve(type_)
        return default if value is MISSING else value

    def apply(self, target: Any) -> None:
        """Set every field of ``target`` annotated with ``Inject``.

        Fields are processed in declaration order. Classes, and objects with no
        marked fields, are left alone.

        Raises:
            DependencyError: If a field's type cannot be resolved or the field
                cannot be assigned. Fields set before the failure keep their
                new values.
        """
        if inspect.isclass(target):
            return
        target_type = type(target)
        for field in injectable_fields(target_type):
            value = self._resolve(field.declared_type)
            if value is MISSING:
                raise DependencyError(
                    f"Value not found for type {_type_name(field.declared_type)} "
                    f"of field {target_type.__qualname__}.{field.name}"
                )
            try:
                setattr(target, field.name, value)
            except AttributeError as e:
                raise DependencyError(
                    f"Field {target_type.__qualname__}.{field.name} cannot be assigned: {e}"
                ) from e
            logger.debug(
                "Injected %s into %s.%s",
                _type_name(field.declared_type),
                target_type.__qualname__,
                field.name,
            )

    def apply_all(self) -> None:
        """Apply injection to each value registered in this container.

        Values held by the parent are not touched. Stops at the first failure.
        """
        for value in self._registry.values():
            self.apply(value)

    def invoke(self, func: Callable) -> Any:
        """Call ``func`` with arguments resolved from its annotated parameter types.

        Positional parameters are passed positionally and keyword-only ones by
        keyword. A parameter that cannot be resolved falls back to its default,
        if it has one.

        Returns:
            Whatever ``func`` returns. Exceptions raised by ``func`` propagate
            unchanged.

        Raises:
            DependencyError: If a parameter without a default cannot be
                resolved. ``func`` is not called in that case.
        """
        args = []
        kwargs = {}
        for parameter in parameter_dependencies(func):
            value = (
                MISSING
                if parameter.declared_type is None
                else self._resolve(parameter.declared_type)
            )
            if value is MISSING:
                if not parameter.has_default:
                    raise DependencyError(_unresolved_parameter_message(func, parameter))
                if parameter.is_keyword_only:
                    continue
                value = parameter.default
            if parameter.is_keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)

        logger.debug("Invoking %s with %d resolved arguments", _type_name(func), len(args) + len(kwargs))
        return func(*args, **kwargs)

    def _resolve(self, type_: Any) -> Any:
        value = self._registry.lookup(type_)
        if value is MISSING and is_interface(type_):
            value = self._registry.find_implementation(type_)
        if value is MISSING and self._parent is not None:
            logger.debug("Delegating lookup of %s to parent container", _type_name(type_))
            value = self._parent.get(type_, MISSING)
        return value

    def __getitem__(self, type_: Any) -> Any:
        value = self._resolve(type_)
        if value is MISSING:
            raise KeyError(type_)
        return value

    def __contains__(self, type_: Any) -> bool:
        return self._resolve(type_) is not MISSING

    def __len__(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"Container(types={[_type_name(t) for t in self._registry]!r})"


def _type_name(type_: Any) -> str:
    return getattr(type_, "__qualname__", None) or repr(type_)


def _unresolved_parameter_message(func: Callable, parameter) -> str:
    if parameter.declared_type is None:
        return (
            f"Parameter {parameter.position} ({parameter.name}) of {_type_name(func)} "
            "has no type annotation"
        )
    return (
        f"Value not found for type {_type_name(parameter.declared_type)} "
        f"of parameter {parameter.position} ({parameter.name}) of {_type_name(func)}"
    )
