"""Binding registry.

Stores one :class:`~bindery.binding.Binding` per (logical type, normalized
qualifier) pair and resolves instances through them.
"""

import contextvars
import logging
import weakref
from typing import Any, Dict, List, Optional, Tuple, Union

from .analysis import analyze_constructor, analyze_fields
from .binding import Binding
from .config import ContainerSettings
from .constants import SCOPE_PROTOTYPE, SCOPE_SINGLETON, SCOPE_TRANSIENT
from .exceptions import CircularDependencyError, ConfigurationError, UnboundTypeError
from .guard import ConstructionGuard
from .identity import canonical_type, intercept_construction
from .injection import install_property
from .qualifiers import QualifierT, normalize_qualifier
from .scope import PrototypeScope, Scope, SingletonScope

_logger = logging.getLogger(__name__)

_resolve_chain: contextvars.ContextVar[Tuple[Tuple[type, str], ...]] = contextvars.ContextVar(
    "bindery_resolve_chain", default=()
)


class BindingRegistry:
    """Maps (type, qualifier) pairs to bindings.

    Args:
        settings: Engine settings; defaults to :class:`ContainerSettings()`.

    Attributes:
        guard: Construction guard toggled by construction-blocking scopes.
        prototype: The registry's prototype scope (the default scope).
        singleton: The registry's singleton scope.
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        self.settings = settings or ContainerSettings()
        self.guard = ConstructionGuard()
        self.prototype = PrototypeScope()
        self.singleton = SingletonScope(self.guard)
        self._bindings: Dict[type, Dict[str, Binding]] = {}
        self._fields_wired: "weakref.WeakSet[type]" = weakref.WeakSet()

    def _lookup(self, source: Any, qualifier: QualifierT) -> Optional[Binding]:
        by_qualifier = self._bindings.get(canonical_type(source))
        if not by_qualifier:
            return None
        return by_qualifier.get(normalize_qualifier(qualifier))

    def bind(self, source: Any, qualifier: QualifierT = None) -> Binding:
        """Return the binding for (*source*, *qualifier*), creating an empty one if needed."""
        identity = canonical_type(source)
        nq = normalize_qualifier(qualifier)
        by_qualifier = self._bindings.setdefault(identity, {})
        binding = by_qualifier.get(nq)
        if binding is None:
            binding = Binding(self, identity, dict(qualifier or {}))
            by_qualifier[nq] = binding
            _logger.debug("Registered binding %s%s", identity.__name__, nq)
        return binding

    def is_bound(self, source: Any, qualifier: QualifierT = None) -> bool:
        return self._lookup(source, qualifier) is not None

    def wire(self, binding: Binding) -> Binding:
        """Register the injection points declared by the bound type, once per binding.

        Constructor dependencies go to the binding's factory. Injected fields
        are installed on the class itself, once per class.
        """
        if binding.wired:
            return binding
        source = binding.source
        for point in analyze_constructor(source):
            binding.add_param(point.key, point.qualifier)
        if source not in self._fields_wired:
            for point in analyze_fields(source):
                self.inject_property(source, point.name, point.key, point.qualifier)
            self._fields_wired.add(source)
        binding.wired = True
        return binding

    def configure(self, source: Any, qualifier: QualifierT = None) -> Binding:
        """Like :meth:`bind`, but wires the declarations of the type and self-binds it.

        The implicit self-binding only happens when ``auto_bind`` is enabled,
        and at most once per (type, qualifier) since it installs a provider.
        """
        binding = self.wire(self.bind(source, qualifier))
        if binding.active_provider is None and self.settings.auto_bind:
            _logger.debug("Implicit self-binding for %r", binding)
            binding.to(source)
        return binding

    def get(self, source: Any, qualifier: QualifierT = None) -> Any:
        """Resolve an instance for (*source*, *qualifier*).

        Raises:
            UnboundTypeError: If there is no binding or it has no provider, and
                ``auto_bind`` is disabled.
            CircularDependencyError: If ``detect_cycles`` is enabled and the
                resolution re-enters a key already being resolved.
        """
        binding = self._lookup(source, qualifier)
        if binding is None or binding.active_provider is None:
            if not self.settings.auto_bind:
                raise UnboundTypeError(source, qualifier)
            binding = self.configure(source, qualifier)
        if not self.settings.detect_cycles:
            return binding.get_instance()

        key = (binding.source, normalize_qualifier(binding.qualifier))
        chain = _resolve_chain.get()
        if key in chain:
            raise CircularDependencyError([k for k, _ in chain], key[0])
        token = _resolve_chain.set(chain + (key,))
        try:
            return binding.get_instance()
        finally:
            _resolve_chain.reset(token)

    def get_all(self, source: Any) -> List[Tuple[Dict[str, Any], Any]]:
        """Resolve every binding of *source*, whatever its qualifier, in registration order.

        Each binding is resolved through :meth:`get`. Bindings without a
        provider are skipped when ``auto_bind`` is disabled.
        """
        results: List[Tuple[Dict[str, Any], Any]] = []
        for b in self.bindings(source):
            if b.active_provider is None and not self.settings.auto_bind:
                continue
            results.append((dict(b.qualifier), self.get(b.source, b.qualifier)))
        return results

    def bindings(self, source: Any) -> List[Binding]:
        return list(self._bindings.get(canonical_type(source), {}).values())

    def resolve_scope(self, scope: Union[str, Scope]) -> Scope:
        if isinstance(scope, Scope):
            return scope
        if scope == SCOPE_SINGLETON:
            return self.singleton
        if scope in (SCOPE_PROTOTYPE, SCOPE_TRANSIENT):
            return self.prototype
        raise ConfigurationError(f"Unknown scope: {scope!r}")

    def intercept(self, target: type, qualifier: QualifierT = None) -> type:
        """Wrap *target* so that its direct construction honours the construction guard."""
        return intercept_construction(target, dict(qualifier or {}), self.guard.check)

    def inject_property(self, owner: type, field: str, dependency: type, qualifier: QualifierT = None) -> None:
        install_property(owner, field, dependency, qualifier, self.get)
