"""Qualifier normalization.

A qualifier is an unordered mapping of attribute names to scalar values
(numbers, booleans, strings or classes) that tells apart several bindings of
one type. :func:`normalize_qualifier` renders it as a stable string key.
"""

import hashlib
import weakref
from typing import Any, Mapping, Optional

from .exceptions import InvalidQualifierTypeError
from .identity import canonical_type

QualifierT = Optional[Mapping[str, Any]]

_type_tokens: "weakref.WeakKeyDictionary[type, str]" = weakref.WeakKeyDictionary()


def _type_token(value: type) -> str:
    identity = canonical_type(value)
    token = _type_tokens.get(identity)
    if token is None:
        text = f"{identity.__module__}.{identity.__qualname__}@{id(identity):x}"
        digest = hashlib.sha1(text.encode("utf-8")).hexdigest()[:12]
        token = f"{digest}{identity.__name__}"
        _type_tokens[identity] = token
    return token


def _render(name: Any, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    if isinstance(value, type):
        return _type_token(value)
    raise InvalidQualifierTypeError(name, value)


def normalize_qualifier(qualifier: QualifierT) -> str:
    """Render *qualifier* as ``{name:value,...}`` with names sorted.

    >>> normalize_qualifier({"b": 2, "a": 1})
    '{a:1,b:2}'

    Raises:
        InvalidQualifierTypeError: If a name is not a string or a value is not
            a number, bool, str or class.
    """
    if not qualifier:
        return "{}"
    for name in qualifier:
        if not isinstance(name, str):
            raise InvalidQualifierTypeError(name, qualifier[name])
    parts = [f"{name}:{_render(name, qualifier[name])}" for name in sorted(qualifier)]
    return "{" + ",".join(parts) + "}"
