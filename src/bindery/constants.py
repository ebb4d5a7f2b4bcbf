"""Constants used throughout bindery.

This module defines the attribute names stamped onto wrapper classes and
decorated functions, the package logger, and the built-in scope names.
"""

import logging

LOGGER_NAME: str = "bindery"
"""Default logger name for bindery."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Package logger for bindery internal diagnostics."""

WRAPPER_LINK: str = "__bindery_link__"
"""Attribute holding the :class:`~bindery.identity.WrapperLink` of a synthetic wrapper class."""

INJECT_PARAMS: str = "_bindery_params"
"""Attribute on ``__init__`` holding constructor parameter facts in discovery order."""

SCOPE_SINGLETON: str = "singleton"
"""Built-in scope: one instance per binding."""

SCOPE_PROTOTYPE: str = "prototype"
"""Built-in scope: a new instance on every resolution (the default)."""

SCOPE_TRANSIENT: str = "transient"
"""Alias of :data:`SCOPE_PROTOTYPE`."""

ENV_PREFIX: str = "BINDERY_"
"""Prefix of environment variables read by :class:`~bindery.config.EnvSource`."""

SETTINGS_SECTION: str = "bindery"
"""Key under which tree sources may nest the container settings."""
