"""Scope strategies for binding lifecycles.

Provides the :class:`Scope` base class and the built-in strategies:
:class:`PrototypeScope` (a new instance per resolution, the default),
:class:`SingletonScope` (one cached instance per binding) and
:class:`CountingScope` (a custom strategy that wraps another scope).
"""

import logging
from typing import Any, Dict, Optional, Tuple

from .factory import Provider
from .guard import ConstructionGuard
from .identity import canonical_type
from .qualifiers import QualifierT, normalize_qualifier

_logger = logging.getLogger(__name__)


class Scope:
    """Lifecycle policy applied when a binding is resolved.

    Custom scopes subclass this and implement :meth:`resolve`; they may
    override :meth:`reset` to drop cached state when the binding changes.
    """

    blocks_construction: bool = False
    """Whether direct construction of the bound class is refused while this scope is attached."""

    def resolve(self, provider: Provider, source: type, qualifier: QualifierT) -> Any:
        """Return the instance for *source*, calling ``provider.get()`` when a new one is needed."""
        raise NotImplementedError

    def reset(self, source: type, qualifier: QualifierT) -> None:
        """Called when the provider or scope of the binding for *source* changes."""
        return None


class PrototypeScope(Scope):
    def resolve(self, provider: Provider, source: type, qualifier: QualifierT) -> Any:
        return provider.get()


class SingletonScope(Scope):
    """Creates a single instance per (type, qualifier) and returns it on every resolution.

    Args:
        guard: The registry's construction guard, lifted while the provider runs.
    """

    blocks_construction = True

    def __init__(self, guard: ConstructionGuard) -> None:
        self._guard = guard
        self._instances: Dict[Tuple[type, str], Any] = {}

    def _key(self, source: type, qualifier: QualifierT) -> Tuple[type, str]:
        return canonical_type(source), normalize_qualifier(qualifier)

    def resolve(self, provider: Provider, source: type, qualifier: QualifierT) -> Any:
        key = self._key(source, qualifier)
        if key in self._instances:
            return self._instances[key]
        with self._guard.lifted(key[0]):
            instance = provider.get()
        self._instances[key] = instance
        _logger.debug("Singleton created for %s%s", key[0].__name__, key[1])
        return instance

    def reset(self, source: type, qualifier: QualifierT) -> None:
        self._instances.pop(self._key(source, qualifier), None)

    def has_instance(self, source: type, qualifier: QualifierT = None) -> bool:
        return self._key(source, qualifier) in self._instances


class CountingScope(Scope):
    """Counts and logs resolutions, delegating the lifecycle to *inner*.

    Args:
        inner: The scope that actually produces instances. Defaults to a
            fresh :class:`PrototypeScope`.
    """

    def __init__(self, inner: Optional[Scope] = None) -> None:
        self.inner = inner if inner is not None else PrototypeScope()
        self.counts: Dict[Tuple[type, str], int] = {}

    @property
    def blocks_construction(self) -> bool:  # type: ignore[override]
        return self.inner.blocks_construction

    def resolve(self, provider: Provider, source: type, qualifier: QualifierT) -> Any:
        key = (canonical_type(source), normalize_qualifier(qualifier))
        self.counts[key] = self.counts.get(key, 0) + 1
        _logger.info("Resolving %s%s (#%d)", key[0].__name__, key[1], self.counts[key])
        return self.inner.resolve(provider, source, qualifier)

    def reset(self, source: type, qualifier: QualifierT) -> None:
        self.inner.reset(source, qualifier)

    def count(self, source: type, qualifier: QualifierT = None) -> int:
        return self.counts.get((canonical_type(source), normalize_qualifier(qualifier)), 0)
