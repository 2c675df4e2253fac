"""Type-keyed value storage."""

import logging
from typing import Any, Iterator

from typewire.interfaces import implements

__all__ = ["MISSING", "TypeRegistry"]

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()
"""Sentinel returned by lookups that find nothing, so that None can be stored."""


class TypeRegistry:
    """Mapping from type identities to stored values.

    Entries keep the order in which their type was first registered; overwriting
    a value leaves its position unchanged. That order decides which value wins
    when several registered types satisfy the same interface.
    """

    def __init__(self):
        self._values: dict[Any, Any] = {}

    def set(self, type_: Any, value: Any):
        if type_ in self:
            logger.debug("Replacing value registered for %r", type_)
        else:
            logger.debug("Registering value for %r", type_)
        self._values[type_] = value

    def lookup(self, type_: Any) -> Any:
        """Return the value stored exactly under ``type_``, or MISSING."""
        return self._values.get(type_, MISSING)

    def find_implementation(self, interface: type) -> Any:
        """Return the value of the first registered type implementing ``interface``.

        Args:
            interface: A protocol or ABC.

        Returns:
            The matching value, or MISSING if no registered type implements it.
        """
        for registered_type, value in self._values.items():
            if implements(registered_type, interface):
                logger.debug("Resolved %r via implementation %r", interface, registered_type)
                return value
        return MISSING

    def values(self) -> list[Any]:
        return list(self._values.values())

    def __contains__(self, type_: Any) -> bool:
        return type_ in self._values

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
