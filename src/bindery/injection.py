"""Lazy field injection.

:class:`InjectedProperty` is a data descriptor: the first read of the field
on an instance resolves the dependency and stores it in the instance's
``__dict__``; later reads return the stored value and writes replace it
without resolving anything.
"""

from typing import Any, Callable, Dict, Optional

from .identity import check_type

Resolver = Callable[[type, Optional[Dict[str, Any]]], Any]


class InjectedProperty:
    """Field whose value is resolved on first read and then behaves as a stored attribute.

    Args:
        dependency: The type to resolve.
        qualifier: Qualifier used for the resolution.
        resolver: ``resolver(dependency, qualifier)`` returning the instance.
    """

    def __init__(self, dependency: type, qualifier: Optional[Dict[str, Any]], resolver: Resolver) -> None:
        self.dependency = dependency
        self.qualifier = dict(qualifier) if qualifier else None
        self._resolver = resolver
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        slots = instance.__dict__
        if self.name not in slots:
            slots[self.name] = self._resolver(self.dependency, self.qualifier)
        return slots[self.name]

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = value

    def __delete__(self, instance: Any) -> None:
        instance.__dict__.pop(self.name, None)

    def is_resolved(self, instance: Any) -> bool:
        return self.name in instance.__dict__


def install_property(
    owner: type,
    field: str,
    dependency: type,
    qualifier: Optional[Dict[str, Any]],
    resolver: Resolver,
) -> InjectedProperty:
    """Replace *field* on *owner* with an :class:`InjectedProperty`."""
    check_type(owner)
    check_type(dependency)
    prop = InjectedProperty(dependency, qualifier, resolver)
    prop.__set_name__(owner, field)
    setattr(owner, field, prop)
    return prop
