"""Snapshot and restore of bindings.

Useful in tests: save the provider and scope of a binding, replace them
with a mock, then put the saved configuration back.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .exceptions import NoSnapshotRecordedError
from .factory import Provider
from .identity import canonical_type
from .qualifiers import QualifierT
from .registry import BindingRegistry
from .scope import Scope

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotRecord:
    provider: Optional[Provider]
    scope: Optional[Scope]


class SnapshotLedger:
    """One snapshot slot per logical type; a second snapshot overwrites the first."""

    def __init__(self, registry: BindingRegistry) -> None:
        self._registry = registry
        self._records: Dict[type, SnapshotRecord] = {}

    def snapshot(self, source: type, qualifier: QualifierT = None) -> None:
        binding = self._registry.configure(source, qualifier)
        self._records[binding.source] = SnapshotRecord(binding.active_provider, binding.active_scope)
        _logger.debug("Snapshot taken for %r", binding)

    def restore(self, source: type, qualifier: QualifierT = None) -> None:
        """Re-apply the saved provider (and scope, if one was saved).

        Raises:
            NoSnapshotRecordedError: If *source* was never snapshotted.
        """
        record = self._records.get(canonical_type(source))
        if record is None:
            raise NoSnapshotRecordedError(source)
        binding = self._registry.configure(source, qualifier)
        if record.provider is not None:
            binding.provider(record.provider)
        if record.scope is not None:
            binding.scope(record.scope)
        _logger.debug("Snapshot restored for %r", binding)

    def has_snapshot(self, source: type) -> bool:
        return canonical_type(source) in self._records

    def discard(self, source: type) -> None:
        self._records.pop(canonical_type(source), None)
