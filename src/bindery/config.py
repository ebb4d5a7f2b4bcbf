"""Engine settings and their sources.

Provides :class:`ContainerSettings` (the immutable settings consumed by the
registry), the built-in sources :class:`EnvSource`, :class:`DictSource`,
:class:`JsonTreeSource` and :class:`YamlTreeSource`, and the
:func:`load_settings` builder that merges them.
"""

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .constants import ENV_PREFIX, SETTINGS_SECTION
from .exceptions import ConfigurationError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ContainerSettings:
    """Settings of a container.

    Attributes:
        auto_bind: Self-bind unregistered types on ``bind``/``get`` instead
            of raising :class:`~bindery.exceptions.UnboundTypeError`.
        detect_cycles: Track the resolution chain and raise
            :class:`~bindery.exceptions.CircularDependencyError` when a
            resolution re-enters itself. Off by default: a cycle then ends in
            ``RecursionError``.
    """

    auto_bind: bool = True
    detect_cycles: bool = False


class SettingsSource:
    """Base class for settings sources.

    Subclasses implement :meth:`read`, returning the raw values they define
    keyed by setting name. Missing settings are simply left out.
    """

    def read(self) -> Mapping[str, Any]:
        raise NotImplementedError


class EnvSource(SettingsSource):
    """Reads settings from environment variables.

    Args:
        prefix: Prepended to the upper-cased setting name
            (``auto_bind`` is read from ``BINDERY_AUTO_BIND`` by default).
        environ: Mapping to read instead of :data:`os.environ`.
    """

    def __init__(self, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> None:
        self.prefix = prefix
        self._environ = environ

    def read(self) -> Mapping[str, Any]:
        env = self._environ if self._environ is not None else os.environ
        out: Dict[str, Any] = {}
        for f in fields(ContainerSettings):
            value = env.get(self.prefix + f.name.upper())
            if value is not None:
                out[f.name] = value
        return out


class TreeSource(SettingsSource):
    """Base class for nested sources; settings may sit under a ``bindery`` key."""

    def get_tree(self) -> Mapping[str, Any]:
        raise NotImplementedError

    def read(self) -> Mapping[str, Any]:
        tree = self.get_tree()
        if not isinstance(tree, Mapping):
            raise ConfigurationError(f"{type(self).__name__} did not produce a mapping")
        section = tree.get(SETTINGS_SECTION, tree)
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"'{SETTINGS_SECTION}' section must be a mapping")
        return section


class DictSource(TreeSource):
    """Tree source backed by an in-memory dictionary.

    Example:
        >>> DictSource({"bindery": {"detect_cycles": True}}).read()
        {'detect_cycles': True}
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def get_tree(self) -> Mapping[str, Any]:
        return self._data


class JsonTreeSource(TreeSource):
    """Tree source that reads a JSON file.

    Raises:
        ConfigurationError: If the file cannot be loaded or parsed.
    """

    def __init__(self, path: str) -> None:
        self._path = path

    def get_tree(self) -> Mapping[str, Any]:
        try:
            with open(self._path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to load JSON config: {e}") from e


class YamlTreeSource(TreeSource):
    """Tree source that reads a YAML file.

    Requires ``PyYAML`` (``pip install bindery[yaml]``).

    Raises:
        ConfigurationError: If PyYAML is not installed, or if the file
            cannot be loaded or parsed.
    """

    def __init__(self, path: str) -> None:
        self._path = path

    def get_tree(self) -> Mapping[str, Any]:
        try:
            import yaml
        except ImportError as e:
            raise ConfigurationError("PyYAML not installed") from e
        try:
            with open(self._path, encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load YAML config: {e}") from e


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ConfigurationError(f"Invalid boolean for setting '{name}': {value!r}")


def load_settings(*sources: SettingsSource, overrides: Optional[Mapping[str, Any]] = None) -> ContainerSettings:
    """Build :class:`ContainerSettings` from *sources*.

    Later sources take precedence over earlier ones and *overrides* take
    precedence over all of them. Unknown keys are ignored.

    Raises:
        ConfigurationError: If a source has an unknown type or a value
            cannot be coerced.

    Example:
        >>> load_settings(EnvSource(), DictSource({"auto_bind": "no"})).auto_bind
        False
    """
    known = {f.name for f in fields(ContainerSettings)}
    merged: Dict[str, Any] = {}
    for src in sources:
        if not isinstance(src, SettingsSource):
            raise ConfigurationError(f"Unknown configuration source type: {type(src)}")
        merged.update({k: v for k, v in src.read().items() if k in known})
    merged.update({k: v for k, v in dict(overrides or {}).items() if k in known})
    values = {k: _coerce_bool(k, v) for k, v in merged.items()}
    return replace(ContainerSettings(), **values)
