"""Providers and the constructor factory.

A provider is any object with a zero-argument ``get()`` returning an
instance. :class:`ConstructorFactory` keeps the ordered constructor
parameters of one binding and builds fresh instances of its target.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence, Tuple

from .identity import check_type

if TYPE_CHECKING:
    from .registry import BindingRegistry


class Provider:
    """Factory for instances created by the container.

    Subclasses implement :meth:`get`; scopes call it whenever a new instance
    is needed.
    """

    def get(self) -> Any:
        raise NotImplementedError

    def __call__(self) -> Any:
        return self.get()


class FunctionProvider(Provider):
    """Provider backed by a zero-argument callable."""

    def __init__(self, fn: Callable[[], Any]) -> None:
        self.fn = fn

    def get(self) -> Any:
        return self.fn()


class InstanceProvider(Provider):
    """Provider that always returns the same pinned value."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def get(self) -> Any:
        return self.value


class ConstructorProvider(Provider):
    """Provider that builds *target* through a :class:`ConstructorFactory`."""

    def __init__(self, factory: "ConstructorFactory", target: type) -> None:
        self.factory = factory
        self.target = target

    def get(self) -> Any:
        return self.factory.build(self.target)


class DelegateProvider(Provider):
    """Provider that resolves another type through the registry under the same qualifier."""

    def __init__(self, registry: "BindingRegistry", target: type, qualifier: Optional[Dict[str, Any]]) -> None:
        self.registry = registry
        self.target = target
        self.qualifier = qualifier

    def get(self) -> Any:
        return self.registry.get(self.target, self.qualifier)


@dataclass(frozen=True)
class ParamSpec:
    """One constructor dependency: the type to resolve and its qualifier."""

    key: type
    qualifier: Optional[Dict[str, Any]] = None


class ConstructorFactory:
    """Builds instances of a concrete type from its ordered dependencies.

    Declaration discovery reports constructor parameters from the last one
    to the first. :meth:`prepend` therefore inserts every new fact at the
    front of the list, so once discovery is complete the list is in
    left-to-right constructor order. An explicit list given through
    :meth:`override` replaces the discovered parameters entirely.
    """

    def __init__(self, registry: "BindingRegistry") -> None:
        self._registry = registry
        self._discovered: List[ParamSpec] = []
        self._explicit: Optional[List[ParamSpec]] = None

    def prepend(self, key: type, qualifier: Optional[Dict[str, Any]] = None) -> None:
        check_type(key)
        self._discovered.insert(0, ParamSpec(key, dict(qualifier) if qualifier else None))

    def override(self, params: Sequence[Any]) -> None:
        """Set the parameter list explicitly.

        Each entry is a class or a ``(class, qualifier)`` pair.
        """
        explicit: List[ParamSpec] = []
        for p in params:
            if isinstance(p, tuple):
                key, qualifier = p
            else:
                key, qualifier = p, None
            explicit.append(ParamSpec(check_type(key), dict(qualifier) if qualifier else None))
        self._explicit = explicit

    @property
    def parameters(self) -> Tuple[ParamSpec, ...]:
        return tuple(self._explicit if self._explicit is not None else self._discovered)

    def resolve_arguments(self) -> List[Any]:
        return [self._registry.get(p.key, p.qualifier) for p in self.parameters]

    def build(self, target: type) -> Any:
        args = self.resolve_arguments()
        return target(*args)
