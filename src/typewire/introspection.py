"""Introspection utilities for injection targets and invoked callables."""

import functools
import inspect
from typing import Annotated, Any, Callable, get_args, get_origin, get_type_hints

from typewire.domain import Inject, InjectableField, Parameter
from typewire.errors import DependencyError
from typewire.interfaces import unwrap_annotated

__all__ = ["injectable_fields", "parameter_dependencies"]


def injectable_fields(cls: type) -> list[InjectableField]:
    """Collect the fields of ``cls`` annotated for injection, in declaration order.

    Fields inherited from base classes come first, as ``get_type_hints`` walks
    the MRO from the most basic class down. Only annotations of the form
    ``Annotated[T, Inject]`` are considered; the field's type identity is ``T``.

    Args:
        cls: The class whose annotations are analysed.

    Returns:
        A list of InjectableField records, empty if nothing is marked.

    Example:
        >>> class User:
        ...     name: str
        ...     address: Annotated[Address, Inject]
        >>> injectable_fields(User)
        [InjectableField(name='address', declared_type=Address)]
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except NameError:
        hints = _unevaluated_annotations(cls)
    return [
        InjectableField(name, unwrap_annotated(annotation))
        for name, annotation in hints.items()
        if _is_marked(annotation)
    ]


def parameter_dependencies(func: Callable) -> list[Parameter]:
    """Extract the parameters of ``func`` that can be supplied by type.

    Variadic parameters (``*args``, ``**kwargs``) are skipped. Unannotated
    parameters, and those whose annotation cannot be evaluated,
    are returned with a ``declared_type`` of None.

    Args:
        func: The callable to analyse.

    Returns:
        A list of Parameter records in signature order.
    """
    sig = inspect.signature(func)
    hints = _callable_hints(func)
    return [
        Parameter(
            position,
            name,
            unwrap_annotated(hints.get(name, _raw_annotation(param))),
            param.kind,
            param.default,
        )
        for position, (name, param) in enumerate(sig.parameters.items())
        if param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def _is_marked(annotation: Any) -> bool:
    if get_origin(annotation) is not Annotated:
        return False
    _, *metadata = get_args(annotation)
    return any(m is Inject or isinstance(m, Inject) for m in metadata)


def _callable_hints(func: Callable) -> dict[str, Any]:
    # Classes are invoked through their constructor; partials through the wrapped function.
    if inspect.isclass(func):
        target = func.__init__
    elif isinstance(func, functools.partial):
        target = func.func
    elif inspect.isroutine(func):
        target = func
    else:
        target = getattr(func, "__call__", func)
    try:
        return get_type_hints(target, include_extras=True)
    except (NameError, TypeError):
        return {}


def _unevaluated_annotations(cls: type) -> dict[str, Any]:
    # Forward references that cannot be resolved stay strings and are never marked.
    annotations: dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        try:
            annotations.update(inspect.get_annotations(base))
        except NameError as e:
            raise DependencyError(
                f"Annotations of {cls.__qualname__} cannot be evaluated: {e}"
            ) from e
    return annotations


def _raw_annotation(param: inspect.Parameter) -> Any:
    if param.annotation is param.empty or isinstance(param.annotation, str):
        return None
    return param.annotation
