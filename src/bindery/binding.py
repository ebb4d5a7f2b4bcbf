"""Binding: the configuration stored for one (type, qualifier) pair.

A :class:`Binding` is returned by ``Container.bind`` and is also the
configurator used to change it. Its methods return the binding itself so
calls can be chained::

    container.bind(PersonDAO).to(ProgrammerDAO).scope("singleton")
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union

from .exceptions import ConfigurationError, UnboundTypeError
from .factory import (
    ConstructorFactory,
    ConstructorProvider,
    DelegateProvider,
    FunctionProvider,
    InstanceProvider,
    Provider,
)
from .identity import canonical_type, check_type
from .scope import Scope

if TYPE_CHECKING:
    from .registry import BindingRegistry

_logger = logging.getLogger(__name__)


class Binding:
    """Stored configuration for one (type, qualifier) pair.

    Attributes:
        source: Logical identity governed by this binding.
        qualifier: The qualifier the binding was created for.
        target: The class instances are built from, once :meth:`to` was called.
        active_provider: The provider currently in use, or ``None``.
        active_scope: The scope currently attached, or ``None`` until the
            first resolution assigns the prototype scope.
        factory: Holds the ordered constructor parameters.
        wired: Whether the declared injection points of *source* were registered.
    """

    def __init__(self, registry: "BindingRegistry", source: type, qualifier: Optional[Dict[str, Any]]) -> None:
        self._registry = registry
        self.source = source
        self.qualifier: Dict[str, Any] = dict(qualifier or {})
        self.target: Optional[type] = None
        self.active_provider: Optional[Provider] = None
        self.active_scope: Optional[Scope] = None
        self.factory = ConstructorFactory(registry)
        self.wired = False

    def __repr__(self) -> str:
        target = getattr(self.target, "__name__", None)
        return f"<Binding {self.source.__name__}{self.qualifier or ''} -> {target}>"

    def to(self, target: type) -> "Binding":
        """Use *target* as the implementation of the bound type.

        Binding a type to itself (or to one of its wrappers) builds it through
        the constructor factory; any other target is resolved through the
        container under the same qualifier.
        """
        check_type(target)
        self.target = target
        if canonical_type(target) is self.source:
            provider: Provider = ConstructorProvider(self.factory, target)
        else:
            provider = DelegateProvider(self._registry, target, self.qualifier)
        _logger.debug("Bound %r to %s", self, target.__name__)
        return self._replace_provider(provider)

    def to_instance(self, value: Any) -> "Binding":
        """Pin a fixed value, equivalent to a provider that always returns it."""
        return self.provider(InstanceProvider(value))

    def provider(self, provider: Provider) -> "Binding":
        """Use *provider* (an object with a ``get()`` method) to create instances."""
        if not callable(getattr(provider, "get", None)):
            raise ConfigurationError(f"Provider for '{self.source.__name__}' must define get()")
        return self._replace_provider(provider)

    def provider_fun(self, fn: Callable[[], Any]) -> "Binding":
        """Use a zero-argument callable to create instances."""
        if not callable(fn):
            raise ConfigurationError(f"Provider function for '{self.source.__name__}' is not callable")
        return self._replace_provider(FunctionProvider(fn))

    def scope(self, scope: Union[str, Scope]) -> "Binding":
        """Attach a lifecycle strategy, by name (``"singleton"``, ``"prototype"``) or instance."""
        resolved = self._registry.resolve_scope(scope)
        previous = self.active_scope
        self.active_scope = resolved
        if previous is not None and previous is not resolved:
            previous.reset(self.source, self.qualifier)
        if resolved.blocks_construction:
            self._registry.guard.block(self.source)
        else:
            self._registry.guard.release(self.source)
        resolved.reset(self.source, self.qualifier)
        return self

    def with_params(self, *params: Any) -> "Binding":
        """Override the discovered constructor dependencies.

        Each entry is a class or a ``(class, qualifier)`` pair, in
        constructor order.
        """
        self.factory.override(params)
        return self

    def add_param(self, key: type, qualifier: Optional[Dict[str, Any]] = None) -> "Binding":
        """Record a discovered constructor dependency (facts arrive last-to-first)."""
        self.factory.prepend(key, qualifier)
        return self

    def get_instance(self) -> Any:
        if self.active_provider is None:
            raise UnboundTypeError(self.source, self.qualifier)
        if self.active_scope is None:
            self.scope(self._registry.prototype)
        return self.active_scope.resolve(self.active_provider, self.source, self.qualifier)

    def _replace_provider(self, provider: Provider) -> "Binding":
        self.active_provider = provider
        if self.active_scope is not None:
            self.active_scope.reset(self.source, self.qualifier)
        return self
