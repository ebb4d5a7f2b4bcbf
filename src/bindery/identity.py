"""Logical type identity.

Construction interception replaces a class with a synthetic subclass. Each
such wrapper carries an explicit :class:`WrapperLink` in its own namespace,
pointing at the class it wraps and the qualifier active when it was created.
:func:`canonical_type` walks these links back to the genuine declaration.
"""

import types
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .constants import WRAPPER_LINK
from .exceptions import InvalidTypeError, UnresolvableIdentityError


@dataclass(frozen=True)
class WrapperLink:
    """Back-link stored on a synthetic wrapper class.

    Attributes:
        wrapped: The class the wrapper derives from.
        qualifier: The qualifier the wrapper was created under.
    """

    wrapped: Optional[type]
    qualifier: Dict[str, Any] = field(default_factory=dict)


def check_type(handle: Any) -> type:
    if handle is None or not isinstance(handle, type):
        raise InvalidTypeError(handle)
    return handle


def link_of(handle: type) -> Optional[WrapperLink]:
    """Return the link declared by *handle* itself (inherited links are ignored)."""
    return vars(handle).get(WRAPPER_LINK)


def is_synthetic(handle: type) -> bool:
    return link_of(handle) is not None


def canonical_type(handle: Any) -> type:
    """Map a possibly wrapped class to its logical identity.

    Raises:
        InvalidTypeError: If *handle* is ``None`` or not a class.
        UnresolvableIdentityError: If the wrapper chain ends without a
            genuine class.
    """
    current: Optional[type] = check_type(handle)
    while current is not None:
        link = link_of(current)
        if link is None:
            return current
        current = link.wrapped
    raise UnresolvableIdentityError(handle)


def qualifier_of(handle: Any) -> Optional[Dict[str, Any]]:
    """Return the qualifier *handle* was wrapped under, or ``None`` for a plain class."""
    link = link_of(check_type(handle))
    return dict(link.qualifier) if link is not None else None


def intercept_construction(
    target: type,
    qualifier: Optional[Dict[str, Any]],
    on_construct: Callable[[type], None],
) -> type:
    """Create a wrapper subclass of *target* that reports every construction.

    The wrapper keeps the name, module and qualified name of *target*, so it
    reads like the wrapped class. ``on_construct`` receives the identity of
    the class being built before ``__init__`` of *target* runs, and may raise
    to refuse the construction.
    """
    check_type(target)
    link = WrapperLink(wrapped=target, qualifier=dict(qualifier or {}))

    def __init__(self, *args, **kwargs):
        on_construct(canonical_type(type(self)))
        super(wrapper, self).__init__(*args, **kwargs)

    def body(ns: Dict[str, Any]) -> None:
        ns["__init__"] = __init__
        ns["__module__"] = target.__module__
        ns["__qualname__"] = target.__qualname__
        ns["__doc__"] = target.__doc__
        ns[WRAPPER_LINK] = link

    wrapper = types.new_class(target.__name__, (target,), exec_body=body)
    return wrapper
