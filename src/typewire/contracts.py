"""Abstract contracts implemented by containers.

The contracts are split the way callers use them: code that only registers
values can depend on ``TypeMapper``, code that only wires objects on
``Applicator`` or ``Invoker``. ``Injector`` combines all three and adds parent
scoping; ``typewire.container.Container`` is the standard implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

__all__ = ["Applicator", "Invoker", "TypeMapper", "Injector"]


class Applicator(ABC):
    @abstractmethod
    def apply(self, target: Any) -> None:
        """Inject registered values into the marked fields of ``target``."""

    @abstractmethod
    def apply_all(self) -> None:
        """Apply injection to every locally registered value."""


class Invoker(ABC):
    @abstractmethod
    def invoke(self, func: Callable) -> Any:
        """Call ``func`` with arguments resolved from its parameter types."""


class TypeMapper(ABC):
    @abstractmethod
    def map(self, value: Any) -> "TypeMapper":
        """Register ``value`` under its own type."""

    @abstractmethod
    def maps(self, *values: Any) -> "TypeMapper":
        """Register each of ``values`` under its own type, in order."""

    @abstractmethod
    def map_to(self, value: Any, interface: Any) -> "TypeMapper":
        """Register ``value`` under the interface denoted by ``interface``."""

    @abstractmethod
    def set(self, type_: Any, value: Any) -> "TypeMapper":
        """Register ``value`` under an explicit type identity."""

    @abstractmethod
    def get(self, type_: Any, default: Any = None) -> Any:
        """Resolve a value for ``type_``, returning ``default`` if none is found."""


class Injector(Applicator, Invoker, TypeMapper):
    @property
    @abstractmethod
    def parent(self) -> Optional["Injector"]:
        """The container consulted for types this one cannot resolve."""

    @abstractmethod
    def set_parent(self, parent: Optional["Injector"]) -> None:
        """Install ``parent`` as the fallback for unresolved lookups."""
