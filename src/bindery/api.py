"""Process-wide default container.

The decorators in :mod:`bindery.decorators` register into this container
unless they are given one explicitly.
"""

import logging
from typing import Any, Mapping, Optional

from .config import ContainerSettings, SettingsSource, load_settings
from .container import Container

_logger = logging.getLogger(__name__)

_default: Optional[Container] = None


def default_container() -> Container:
    global _default
    if _default is None:
        _default = Container()
    return _default


def reset(settings: Optional[ContainerSettings] = None) -> Container:
    """Replace the default container with a fresh one and return it."""
    global _default
    _default = Container(settings)
    _logger.debug("Default container reset (%s)", _default.settings)
    return _default


def configure(*sources: SettingsSource, overrides: Optional[Mapping[str, Any]] = None) -> Container:
    """Load settings from *sources* and install a default container using them.

    Example:
        >>> configure(EnvSource(), YamlTreeSource("bindery.yaml"))
    """
    return reset(load_settings(*sources, overrides=overrides))
