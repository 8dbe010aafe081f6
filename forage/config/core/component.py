"""
Self-registering configuration components.

A component declares its settings once (name -> source) and, when built,
binds them in the registry it is given, optionally under an instance prefix
so that several instances of the same component can coexist.
"""

import threading
from typing import Dict, List, Mapping, Optional

from .key import ConfigKey, component_name, normalize_property_name
from .registry import ConfigRegistry, get_config_registry
from .source import ConfigSource, KeySource


class ConfigEntries:
    """
    Catalogue of the keys declared by one component type.

    The catalogue starts with the unprefixed keys; `register` adds the
    prefixed variant of each of them for a named instance.
    """

    def __init__(self, owner: type, declared: Mapping[str, Optional[ConfigSource]]):
        self.owner = owner
        self._lock = threading.RLock()
        self._entries: Dict[ConfigKey, ConfigSource] = {
            ConfigKey.of(owner, name): source if source is not None else KeySource()
            for name, source in declared.items()
        }

    def entries(self) -> Dict[ConfigKey, ConfigSource]:
        return self._entries.copy()

    def keys(self, prefix: Optional[str] = None) -> List[ConfigKey]:
        return [key for key in self._entries if key.prefix == prefix]

    def register(self, prefix: Optional[str]):
        """Add the prefixed variant of every declared key, ignored without a prefix."""
        if prefix is None:
            return

        with self._lock:
            entries = self._entries.copy()
            for key, source in self._entries.items():
                if key.prefix is None:
                    entries.setdefault(key.with_prefix(prefix), source.without_alias())
            self._entries = entries

    def find(self, prefix: Optional[str], name: str) -> Optional[ConfigKey]:
        """Look up a key by instance prefix and raw setting name."""
        target = normalize_property_name(f"{prefix}.{name}" if prefix else name)
        for key in self._entries:
            if key.prefix == prefix and key.matches(target):
                return key
        return None

    def bind(self, registry: ConfigRegistry, prefix: Optional[str] = None):
        """Register the keys of one instance (and their sources) in ``registry``."""
        self.register(prefix)
        entries = self._entries
        for key in self.keys(prefix):
            registry.register(key, entries[key])


_catalogues: Dict[type, ConfigEntries] = {}
_catalogues_lock = threading.Lock()


class Config:
    """
    Base class for configuration components.

    Subclasses list their settings in ``ENTRIES`` and may set
    ``component_name``, which also names their properties file. Values are
    read through the instance so that a prefixed instance reads its own keys.
    """

    component_name: Optional[str] = None
    ENTRIES: Mapping[str, Optional[ConfigSource]] = {}

    def __init__(self, prefix: Optional[str] = None, registry: Optional[ConfigRegistry] = None):
        self.prefix = prefix
        self.registry = registry if registry is not None else get_config_registry()
        type(self).config_entries().bind(self.registry, prefix)
        self.registry.register_instance(type(self), self)

    @classmethod
    def config_entries(cls) -> ConfigEntries:
        catalogue = _catalogues.get(cls)
        if catalogue is None:
            with _catalogues_lock:
                catalogue = _catalogues.setdefault(cls, ConfigEntries(cls, cls.ENTRIES))
        return catalogue

    @property
    def name(self) -> str:
        return component_name(type(self))

    def key(self, name: str) -> ConfigKey:
        return ConfigKey(type(self), name, self.prefix)

    def get(self, name: str) -> Optional[str]:
        return self.registry.resolve(self.key(name))

    def require(self, name: str, message: Optional[str] = None) -> str:
        return self.registry.require(self.key(name), message)

    def get_list(self, name: str) -> List[str]:
        return self.registry.helper.read_as_list(self.key(name))

    def get_int(self, name: str, default: Optional[int] = None) -> Optional[int]:
        return self.registry.helper.read_as_int(self.key(name), default)

    def get_float(self, name: str, default: Optional[float] = None) -> Optional[float]:
        return self.registry.helper.read_as_float(self.key(name), default)

    def get_bool(self, name: str, default: bool = False) -> bool:
        return self.registry.helper.read_as_bool(self.key(name), default)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(prefix={self.prefix!r})"
