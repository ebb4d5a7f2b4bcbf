"""Exception hierarchy for bindery.

All engine exceptions inherit from :class:`BinderyError`, so any failure can
be caught with a single ``except BinderyError`` clause. Every error is raised
to the direct caller; the engine never retries or logs them.
"""

from typing import Any, Mapping, Optional, Sequence


def _name(key: Any) -> str:
    return getattr(key, "__name__", str(key))


class BinderyError(Exception):
    """Base exception for all bindery errors."""

    pass


class InvalidTypeError(BinderyError):
    """Raised when ``None`` or a non-class is passed where a type was required.

    Attributes:
        handle: The rejected value.
    """

    def __init__(self, handle: Any):
        if handle is None:
            msg = "Invalid type requested to the container: type is not defined"
        else:
            msg = f"Invalid type requested to the container: {handle!r} is not a class"
        super().__init__(msg)
        self.handle = handle


class UnresolvableIdentityError(BinderyError):
    """Raised when a wrapper chain ends without reaching a genuine class."""

    def __init__(self, handle: Any):
        super().__init__(f"Can not identify the base type for '{_name(handle)}'")
        self.handle = handle


class InvalidQualifierTypeError(BinderyError):
    """Raised when a qualifier attribute is not a number, bool, str or class.

    Attributes:
        name: The attribute name.
        value: The rejected value.
    """

    def __init__(self, name: Any, value: Any):
        super().__init__(
            f"Qualifier attribute '{name}' must map a string name to a number, bool, str or class; "
            f"got {type(value).__name__}"
        )
        self.name = name
        self.value = value


class UnboundTypeError(BinderyError):
    """Raised when no provider is configured for a (type, qualifier) pair.

    Attributes:
        key: The requested type.
        qualifier: The requested qualifier, if any.
    """

    def __init__(self, key: Any, qualifier: Optional[Mapping[str, Any]] = None):
        suffix = f" with qualifier {dict(qualifier)}" if qualifier else ""
        super().__init__(f"No provider bound for type '{_name(key)}'{suffix}")
        self.key = key
        self.qualifier = qualifier


class BlockedDirectInstantiationError(BinderyError):
    """Raised when a singleton-managed class is constructed outside the container."""

    def __init__(self, key: Any):
        super().__init__(
            f"Can not instantiate singleton class '{_name(key)}'. Ask the container for it, using Container.get"
        )
        self.key = key


class NoSnapshotRecordedError(BinderyError):
    """Raised by ``restore`` when the type was never snapshotted."""

    def __init__(self, key: Any):
        super().__init__(f"Config for '{_name(key)}' was never snapshotted")
        self.key = key


class ConfigurationError(BinderyError):
    """Raised for configuration problems (bad settings, bad sources, misplaced decorators)."""

    def __init__(self, msg: str):
        super().__init__(msg)


class CircularDependencyError(BinderyError):
    """Raised when cycle detection is enabled and a resolution re-enters itself.

    Attributes:
        chain: The keys being resolved, outermost first.
        current: The key that closed the cycle.
    """

    def __init__(self, chain: Sequence[Any], current: Any):
        path = " -> ".join(_name(k) for k in (*chain, current))
        super().__init__(f"Circular dependency detected: {path}")
        self.chain = tuple(chain)
        self.current = current
