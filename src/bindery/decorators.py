# bindery/decorators.py
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Union

from .analysis import Inject, InjectionPoint
from .api import default_container
from .constants import INJECT_PARAMS, SCOPE_SINGLETON
from .container import Container
from .exceptions import ConfigurationError
from .factory import Provider
from .identity import check_type, qualifier_of
from .scope import Scope


def _target(container: Optional[Container]) -> Container:
    return container if container is not None else default_container()


def _require_qualifier(cls: type, decorator: str) -> Dict[str, Any]:
    qualifier = qualifier_of(check_type(cls))
    if qualifier is None:
        raise ConfigurationError(f"@{decorator} must be applied on top of @autowired (class '{cls.__name__}')")
    return qualifier


def autowired(cls=None, *, qualifier: Optional[Dict[str, Any]] = None, container: Optional[Container] = None):
    """Hand construction of the class over to the container.

    Returns a wrapper subclass: constructor and field dependencies are
    registered, and direct construction honours singleton scope.
    """
    def dec(c):
        return _target(container).autowire(c, qualifier)
    return dec(cls) if cls is not None else dec


def singleton(cls=None, *, container: Optional[Container] = None):
    """Same as ``container.bind(cls).scope("singleton")`` for an autowired class."""
    def dec(c):
        _target(container).bind(c, _require_qualifier(c, "singleton")).scope(SCOPE_SINGLETON)
        return c
    return dec(cls) if cls is not None else dec


def scoped(scope: Union[str, Scope], *, container: Optional[Container] = None):
    """Same as ``container.bind(cls).scope(scope)`` for an autowired class."""
    def dec(c):
        _target(container).bind(c, _require_qualifier(c, "scoped")).scope(scope)
        return c
    return dec


def provided(provider: Provider, qualifier: Optional[Dict[str, Any]] = None, *, container: Optional[Container] = None):
    """Same as ``container.bind(cls, qualifier).provider(provider)``."""
    def dec(c):
        _target(container).bind(c, qualifier).provider(provider)
        return c
    return dec


def provides(base: type, qualifier: Optional[Dict[str, Any]] = None, *, container: Optional[Container] = None):
    """Register the decorated class as the implementation of *base*."""
    def dec(c):
        _target(container).bind(base, qualifier).to(c)
        return c
    return dec


def inject_arg(dependency: type, **qualifier: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare one constructor dependency, stacked on ``__init__`` in parameter order.

    Stacked decorators apply bottom-up, so the facts are recorded from the
    last parameter to the first::

        class Report:
            @inject_arg(Clock)
            @inject_arg(Date, name="x")
            def __init__(self, clock, created): ...
    """
    check_type(dependency)

    def dec(fn):
        points = getattr(fn, INJECT_PARAMS, None)
        if points is None:
            points = []
            setattr(fn, INJECT_PARAMS, points)
        points.append(InjectionPoint(name=None, key=dependency, qualifier=dict(qualifier) or None))
        return fn
    return dec


__all__ = [
    "autowired", "singleton", "scoped", "provided", "provides", "inject_arg",
    "Inject",
]
