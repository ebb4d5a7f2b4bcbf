"""Construction guard.

The registry owns one :class:`ConstructionGuard`. A class whose binding uses
a construction-blocking scope (the singleton scope) is marked blocked, and
its intercepted constructor refuses to run unless the scope lifted the guard
for the duration of its own provider call.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator

from .exceptions import BlockedDirectInstantiationError

_logger = logging.getLogger(__name__)


class ConstructionGuard:
    def __init__(self) -> None:
        self._blocked: Dict[type, bool] = {}

    def block(self, identity: type) -> None:
        self._blocked[identity] = True
        _logger.debug("Direct construction of %s blocked", identity.__name__)

    def release(self, identity: type) -> None:
        if self._blocked.pop(identity, False):
            _logger.debug("Direct construction of %s released", identity.__name__)

    def is_blocked(self, identity: type) -> bool:
        return self._blocked.get(identity, False)

    def check(self, identity: type) -> None:
        """Raise :class:`BlockedDirectInstantiationError` if *identity* is blocked."""
        if self.is_blocked(identity):
            raise BlockedDirectInstantiationError(identity)

    @contextmanager
    def lifted(self, identity: type) -> Iterator[None]:
        """Allow construction of *identity* inside the block, then restore the previous state."""
        previous = self._blocked.get(identity)
        self._blocked[identity] = False
        try:
            yield
        finally:
            if previous is None:
                self._blocked.pop(identity, None)
            else:
                self._blocked[identity] = previous
