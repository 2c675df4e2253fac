"""Domain models used throughout the framework."""

from dataclasses import dataclass
from inspect import Parameter as _SignatureParameter
from typing import Any

__all__ = ["Inject", "InjectableField", "Parameter"]


class Inject:
    """Marker placed in ``Annotated`` metadata to request injection into a field.

    Either the class itself or an instance may be used.

    Example:
        >>> class User:
        ...     address: Annotated[Address, Inject]
        ...     auth_code: Annotated[AuthCode, Inject()]
    """

    def __repr__(self) -> str:
        return "Inject"


@dataclass(frozen=True)
class InjectableField:
    """A field marked for injection.

    Attributes:
        name: The attribute name on the target object.
        declared_type: The type identity used to resolve the field's value.
    """

    name: str
    declared_type: Any


@dataclass(frozen=True)
class Parameter:
    """Represents a parameter of a callable to be supplied by type.

    Attributes:
        position: Zero-based position of the parameter in the signature.
        name: The parameter name.
        declared_type: The annotated type with any ``Annotated`` metadata removed,
            or None if the parameter is unannotated.
        kind: The ``inspect.Parameter`` kind, deciding how the argument is passed.
        default: The declared default, or ``inspect.Parameter.empty``.
    """

    position: int
    name: str
    declared_type: Any
    kind: Any
    default: Any = _SignatureParameter.empty

    @property
    def has_default(self) -> bool:
        return self.default is not _SignatureParameter.empty

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is _SignatureParameter.KEYWORD_ONLY
