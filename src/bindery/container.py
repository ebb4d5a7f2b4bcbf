"""The container facade.

:class:`Container` ties together the binding registry and the snapshot
ledger and exposes the operations used by applications and by the
declaration layer (:mod:`bindery.decorators`).
"""

from typing import Any, Dict, List, Optional, Tuple

from .binding import Binding
from .config import ContainerSettings
from .constants import LOGGER
from .identity import canonical_type, check_type
from .qualifiers import QualifierT
from .registry import BindingRegistry
from .scope import PrototypeScope, SingletonScope
from .snapshot import SnapshotLedger


class Container:
    """Registry of bindings that resolves object graphs on demand.

    Args:
        settings: Engine settings; defaults to :class:`ContainerSettings()`.

    Example:
        >>> container = Container()
        >>> container.bind(PersonDAO).to(ProgrammerDAO).scope("singleton")
        >>> dao = container.get(PersonDAO)
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        self.settings = settings or ContainerSettings()
        self.registry = BindingRegistry(self.settings)
        self.ledger = SnapshotLedger(self.registry)

    @property
    def singleton_scope(self) -> SingletonScope:
        return self.registry.singleton

    @property
    def prototype_scope(self) -> PrototypeScope:
        return self.registry.prototype

    def bind(self, source: type, qualifier: QualifierT = None) -> Binding:
        """Return the binding for *source*, creating it if needed.

        A type seen for the first time has its declared constructor and field
        dependencies registered and is bound to itself (when ``auto_bind`` is
        enabled), so ``get`` works right away.
        """
        return self.registry.configure(source, qualifier)

    def get(self, source: type, qualifier: QualifierT = None) -> Any:
        return self.registry.get(source, qualifier)

    def get_all(self, source: type) -> List[Tuple[Dict[str, Any], Any]]:
        return self.registry.get_all(source)

    def is_bound(self, source: type, qualifier: QualifierT = None) -> bool:
        return self.registry.is_bound(source, qualifier)

    def snapshot(self, source: type, qualifier: QualifierT = None) -> None:
        """Store the provider and scope of a binding so :meth:`restore` can bring them back."""
        self.ledger.snapshot(source, qualifier)

    def restore(self, source: type, qualifier: QualifierT = None) -> None:
        self.ledger.restore(source, qualifier)

    def inject_property(self, owner: type, field: str, dependency: type, qualifier: QualifierT = None) -> None:
        self.registry.inject_property(owner, field, dependency, qualifier)

    def autowire(self, cls: type, qualifier: QualifierT = None) -> type:
        """Register the injection points of *cls* and return its construction-intercepting wrapper.

        Constructor dependencies are recorded on the binding of *cls*, injected
        fields are installed on *cls*, and the binding is pointed at the
        wrapper unless it was already bound to another implementation.
        """
        check_type(cls)
        binding = self.registry.wire(self.registry.bind(cls, qualifier))
        wrapper = self.registry.intercept(cls, qualifier)
        self_bound = binding.target is not None and canonical_type(binding.target) is binding.source
        if binding.active_provider is None or self_bound:
            binding.to(wrapper)
        LOGGER.debug("Autowired %s with %d constructor dependencies", cls.__name__, len(binding.factory.parameters))
        return wrapper
