"""Discovery of injection points on classes.

Constructor dependencies are declared either with ``inject_arg`` stacked on
``__init__`` or with ``Annotated[T, Inject(...)]`` parameter annotations.
Field dependencies are declared with ``Annotated[T, Inject(...)]`` class
annotations. Constructor facts are always reported from the last parameter
to the first, the order in which stacked decorators are applied.
"""

import inspect
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Optional, Tuple, get_args, get_origin

from .constants import INJECT_PARAMS
from .exceptions import ConfigurationError
from .identity import is_synthetic


class Inject:
    """Marker for injected parameters and fields, optionally carrying a qualifier.

    Example:
        >>> class Report:
        ...     created: Annotated[Date, Inject(name="x")]
    """

    def __init__(self, **qualifier: Any) -> None:
        self.qualifier: Optional[Dict[str, Any]] = dict(qualifier) or None

    def __repr__(self) -> str:
        return f"Inject({self.qualifier or ''})"


@dataclass(frozen=True)
class InjectionPoint:
    name: Optional[str]
    key: type
    qualifier: Optional[Dict[str, Any]] = None


def _extract_inject(ann: Any) -> Optional[Tuple[Any, Optional[Dict[str, Any]]]]:
    if get_origin(ann) is not Annotated:
        return None
    args = get_args(ann)
    base = args[0]
    for meta in args[1:]:
        if meta is Inject:
            return base, None
        if isinstance(meta, Inject):
            return base, meta.qualifier
    return None


def _point(name: str, ann: Any, owner: type) -> Optional[InjectionPoint]:
    found = _extract_inject(ann)
    if found is None:
        return None
    base, qualifier = found
    if not isinstance(base, type):
        raise ConfigurationError(f"Injected '{name}' on '{owner.__name__}' must be annotated with a class, got {base!r}")
    return InjectionPoint(name=name, key=base, qualifier=qualifier)


def _declared_init(cls: type) -> Any:
    # Wrapper classes only forward to the class they wrap.
    for klass in cls.__mro__:
        if is_synthetic(klass):
            continue
        init = vars(klass).get("__init__")
        if init is not None:
            return init
    return object.__init__


def analyze_constructor(cls: type) -> Tuple[InjectionPoint, ...]:
    """Return the constructor injection points of *cls*, last parameter first.

    The constructor is the nearest ``__init__`` in the MRO that is not
    defined by a construction-intercepting wrapper.
    """
    init = _declared_init(cls)
    stamped = getattr(init, INJECT_PARAMS, None)
    if stamped:
        return tuple(stamped)
    if init is object.__init__:
        return ()
    try:
        sig = inspect.signature(init, eval_str=True)
    except NameError as e:
        raise ConfigurationError(f"Cannot evaluate constructor annotations of '{cls.__name__}': {e}") from e
    except (TypeError, ValueError):
        # builtin constructor without a signature
        return ()

    points: List[InjectionPoint] = []
    for name, param in sig.parameters.items():
        if name in ("self", "cls"):
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        point = _point(name, param.annotation, cls)
        if point is not None:
            points.append(point)
    return tuple(reversed(points))


def analyze_fields(cls: type) -> Tuple[InjectionPoint, ...]:
    """Return the injected fields declared on *cls* itself, in declaration order."""
    try:
        annotations = inspect.get_annotations(cls, eval_str=True)
    except NameError as e:
        raise ConfigurationError(f"Cannot evaluate field annotations of '{cls.__name__}': {e}") from e

    points: List[InjectionPoint] = []
    for name, ann in annotations.items():
        point = _point(name, ann, cls)
        if point is not None:
            points.append(point)
    return tuple(points)
