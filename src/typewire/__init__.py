"""Typewire type-keyed injection container.

Typewire holds arbitrary values keyed by their type and supplies them again,
by declared type, to the marked fields of objects or the parameters of
callables. It is meant for small composition roots where wiring everything
explicitly is tedious. There are no lifecycles, scopes or qualifiers: a
container stores values, not factories, and one value per type.

Key Features:
    - Registration by concrete type, by interface, or by explicit type identity
    - Field injection driven by ``Annotated[T, Inject]`` class annotations
    - Call-time injection of parameters from their type hints
    - Interface fallback: Protocols and ABCs resolve to a registered implementer
    - Layered containers with lookups falling through to a parent

Basic Usage:
    >>> from typing import Annotated
    >>> from typewire import Inject, make_container
    >>>
    >>> class Service:
    ...     database: Annotated[Database, Inject]
    >>>
    >>> container = make_container(Database())
    >>> service = Service()
    >>> container.apply(service)
    >>> container.invoke(make_report)  # parameters resolved from type hints

The framework consists of several modules:
    - container: The Container implementation
    - builders: Convenience construction functions
    - contracts: Abstract TypeMapper, Applicator, Invoker and Injector contracts
    - registry: Type-keyed storage with interface fallback
    - interfaces: Interface detection and satisfaction checks
    - introspection: Field and parameter analysis
    - domain: The Inject marker and field/parameter records
    - errors: Framework-specific exceptions
"""

from typewire.builders import make_container
from typewire.container import Container
from typewire.contracts import Applicator, Injector, Invoker, TypeMapper
from typewire.domain import Inject
from typewire.errors import DependencyError, InterfaceError
from typewire.interfaces import interface_of

__version__ = "0.1.0"

__all__ = [
    "Applicator",
    "Container",
    "DependencyError",
    "Inject",
    "Injector",
    "InterfaceError",
    "Invoker",
    "TypeMapper",
    "interface_of",
    "make_container",
]
