# bindery/__init__.py
__version__ = "0.1.0"

from .container import Container
from .binding import Binding
from .config import (
    ContainerSettings, SettingsSource, EnvSource, DictSource,
    JsonTreeSource, YamlTreeSource, load_settings,
)
from .decorators import (
    autowired, singleton, scoped, provided, provides, inject_arg, Inject,
)
from .factory import Provider, FunctionProvider, InstanceProvider
from .scope import Scope, PrototypeScope, SingletonScope, CountingScope
from .qualifiers import normalize_qualifier
from .identity import canonical_type, qualifier_of
from .api import default_container, reset, configure
from .exceptions import (
    BinderyError,
    InvalidTypeError,
    UnresolvableIdentityError,
    InvalidQualifierTypeError,
    UnboundTypeError,
    BlockedDirectInstantiationError,
    NoSnapshotRecordedError,
    ConfigurationError,
    CircularDependencyError,
)

__all__ = [
    "__version__",
    "Container",
    "Binding",
    "ContainerSettings",
    "SettingsSource",
    "EnvSource",
    "DictSource",
    "JsonTreeSource",
    "YamlTreeSource",
    "load_settings",
    "autowired",
    "singleton",
    "scoped",
    "provided",
    "provides",
    "inject_arg",
    "Inject",
    "Provider",
    "FunctionProvider",
    "InstanceProvider",
    "Scope",
    "PrototypeScope",
    "SingletonScope",
    "CountingScope",
    "normalize_qualifier",
    "canonical_type",
    "qualifier_of",
    "default_container",
    "reset",
    "configure",
    "BinderyError",
    "InvalidTypeError",
    "UnresolvableIdentityError",
    "InvalidQualifierTypeError",
    "UnboundTypeError",
    "BlockedDirectInstantiationError",
    "NoSnapshotRecordedError",
    "ConfigurationError",
    "CircularDependencyError",
]
