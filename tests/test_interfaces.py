from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Annotated, Callable, Protocol, Type

import pytest

from typewire import Inject, InterfaceError, interface_of
from typewire.domain import InjectableField
from typewire.errors import DependencyError
from typewire.interfaces import implements, is_interface
from typewire.introspection import injectable_fields, parameter_dependencies


class Store(ABC):
    @abstractmethod
    def save(self, item: str) -> None:
        pass


class MemoryStore:
    def save(self, item: str) -> None:
        pass


Store.register(MemoryStore)


class Named(Protocol):
    name: str

    def describe(self) -> str: ...


@dataclass
class Person:
    name: str

    def describe(self) -> str:
        return self.name


class Nameless:
    def describe(self) -> str:
        return "?"


class FileStore(Store):
    def save(self, item: str) -> None:
        pass


class Plugin(ABC):
    def name(self) -> str:
        return type(self).__name__


class PartialStore(Store):
    pass


def test_is_interface():
    assert is_interface(Store)
    assert is_interface(Named)
    assert is_interface(Plugin)
    assert is_interface(PartialStore)
    assert not is_interface(FileStore)
    assert not is_interface(Person)
    assert not is_interface(Callable[[str], str])
    assert not is_interface(Person("Arthur"))


def test_interface_of_unwraps_type_layers():
    assert interface_of(Store) is Store
    assert interface_of(type[Store]) is Store
    assert interface_of(Type[type[Named]]) is Named
    assert interface_of(Annotated[type[Store], "primary"]) is Store


@pytest.mark.parametrize("marker", [Person, int, type[Person], FileStore, Callable[[str], str]])
def test_interface_of_rejects_non_interfaces(marker):
    with pytest.raises(InterfaceError):
        interface_of(marker)


def test_interface_error_is_not_a_dependency_error():
    assert issubclass(InterfaceError, TypeError)
    assert not issubclass(InterfaceError, DependencyError)


def test_virtual_subclass_implements_abc():
    assert implements(MemoryStore, Store)
    assert not implements(Person, Store)


def test_protocol_is_satisfied_structurally():
    assert implements(Person, Named)
    assert not implements(Nameless, Named)


def test_non_class_keys_never_implement():
    assert not implements(Callable[[str], str], Named)


class Base:
    store: Annotated[Store, Inject] = None


class Derived(Base):
    label: str = "derived"
    person: Annotated[Person, "not a marker", Inject()] = None
    qualified: Annotated[Person, "not a marker"] = None


def test_injectable_fields_in_declaration_order():
    assert injectable_fields(Derived) == [
        InjectableField("store", Store),
        InjectableField("person", Person),
    ]


def test_parameter_dependencies():
    def provider(store: Store, *args, name: Annotated[str, "label"] = "x", untyped=None, **kwargs):
        pass

    dependencies = parameter_dependencies(provider)

    assert [(d.position, d.name, d.declared_type) for d in dependencies] == [
        (0, "store", Store),
        (2, "name", str),
        (3, "untyped", None),
    ]
    assert dependencies[1].is_keyword_only
    assert dependencies[1].default == "x"
    assert not dependencies[0].has_default
