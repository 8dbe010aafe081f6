"""
Configuration registry: the resolution engine.

The registry binds configuration keys to sources, keeps one instance per
component type, resolves keys through the fixed tier order and discovers the
instance prefixes present in the raw configured names.
"""

import os
import re
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Pattern, Sequence, Set, Union

from forage.core.enums import TIER_ORDER, Tier
from forage.core.exceptions import MissingConfigurationError
from forage.logger import get_forage_logger
from .helper import ConfigHelper
from .host import HostAdapter
from .key import ConfigKey, component_name, normalize_property_name
from .source import ConfigSource, KeySource
from .store import PropertiesFileLoader, PropertyStore

CONFIG_PATH_ENV = "FORAGE_CONFIG_PATH"
DEFAULT_SEARCH_PATH = ("settings", ".")

_KEY_SOURCE = KeySource()


def default_search_path(environ: Mapping[str, str]) -> list[Path]:
    """Directories from FORAGE_CONFIG_PATH, or ``settings`` then the working directory."""
    configured = environ.get(CONFIG_PATH_ENV)
    if configured:
        return [Path(entry) for entry in configured.split(os.pathsep) if entry]
    return [Path(entry) for entry in DEFAULT_SEARCH_PATH]


class ConfigRegistry:
    """
    Central registry resolving component settings.

    Tiers are always consulted in the order environment, runtime property,
    component file, host, default, whatever source a key is bound to. Writes
    replace the binding tables under the lock; reads use the current table
    without locking.
    """

    def __init__(
        self,
        search_path: Optional[Sequence[Union[str, Path]]] = None,
        environ: Optional[Mapping[str, str]] = None,
        properties: Optional[Mapping[str, Any]] = None,
        hosts: Optional[Sequence[HostAdapter]] = None,
    ):
        # Live view of os.environ unless the caller passes a snapshot
        self.environ = os.environ if environ is None else environ
        if search_path is None:
            search_path = default_search_path(self.environ)
        self.search_path = [Path(directory) for directory in search_path]
        self.logger = get_forage_logger().bind(component="ConfigRegistry")
        self._lock = threading.RLock()

        self._bindings: Dict[ConfigKey, ConfigSource] = {}
        self._instances: Dict[type, Any] = {}

        self.properties = PropertyStore(properties)
        self.files = PropertiesFileLoader(self.search_path)
        self.helper = ConfigHelper(self, hosts)

        self.logger.debug("ConfigRegistry initialized", search_path=[str(d) for d in self.search_path])

    # Registration

    def register(self, key: ConfigKey, source: Optional[ConfigSource] = None):
        """
        Bind a source to a key.

        Args:
            key: The setting to bind
            source: Where its value comes from, defaults to the key spellings only

        A different source replaces the current binding; an equal one is a no-op.
        """
        if source is None:
            source = _KEY_SOURCE

        with self._lock:
            previous = self._bindings.get(key)
            if previous == source:
                return
            bindings = self._bindings.copy()
            bindings[key] = source
            self._bindings = bindings

        self.logger.debug("Key registered", key=str(key), source=repr(source),
                          overridden=previous is not None)

    def register_all(self, entries: Mapping[ConfigKey, ConfigSource]):
        for key, source in entries.items():
            self.register(key, source)

    def register_instance(self, owner: type, instance: Any):
        """Store the instance for a component type; the last registration wins."""
        with self._lock:
            instances = self._instances.copy()
            instances[owner] = instance
            self._instances = instances

        self.logger.debug("Instance registered", owner=owner.__name__)

    def get_instance(self, owner: type, default: Any = None) -> Any:
        return self._instances.get(owner, default)

    def source_for(self, key: ConfigKey) -> Optional[ConfigSource]:
        return self._bindings.get(key)

    def bindings(self) -> Dict[ConfigKey, ConfigSource]:
        return self._bindings.copy()

    def registered_keys(self, owner: Optional[type] = None) -> list[ConfigKey]:
        keys = self._bindings.keys()
        if owner is None:
            return list(keys)
        return [key for key in keys if key.owner is owner]

    def clear(self, key: ConfigKey) -> bool:
        """Remove the binding of one key, returns whether it was bound."""
        with self._lock:
            if key not in self._bindings:
                return False
            bindings = self._bindings.copy()
            del bindings[key]
            self._bindings = bindings
            return True

    def reset(self):
        """Drop every binding, instance, runtime property and cached file."""
        with self._lock:
            self._bindings = {}
            self._instances = {}
            self.properties.clear()
            self.files.clear()
            self.helper.reset()

        self.logger.debug("Registry reset completed")

    # Runtime properties

    def set_property(self, name: str, value: Any):
        self.properties.set(name, value)

    def clear_property(self, name: str) -> bool:
        return self.properties.remove(name)

    # Resolution

    def resolve(self, key: ConfigKey) -> Optional[str]:
        """
        Resolve the effective raw value of a key.

        Returns:
            The value of the first tier that has one, or None
        """
        source = self._bindings.get(key)
        if source is None:
            source = _KEY_SOURCE

        for tier in TIER_ORDER:
            value = self._lookup(tier, key, source)
            if value is not None:
                return value
        return None

    def require(self, key: ConfigKey, message: Optional[str] = None) -> str:
        """Resolve a key that must have a value."""
        value = self.resolve(key)
        if value is None:
            raise MissingConfigurationError(key.property_name(), key.env_name(), message)
        return value

    def resolve_tier(self, key: ConfigKey) -> Optional[Tier]:
        """Tier that currently provides the value of ``key``, for diagnostics."""
        source = self._bindings.get(key) or _KEY_SOURCE
        for tier in TIER_ORDER:
            if self._lookup(tier, key, source) is not None:
                return tier
        return None

    def _lookup(self, tier: Tier, key: ConfigKey, source: ConfigSource) -> Optional[str]:
        if tier is Tier.DEFAULT:
            try:
                return source.default_value()
            except Exception as e:
                self.logger.warning("Default supplier failed, treating value as absent",
                                    key=str(key), error=str(e))
                return None

        if tier is Tier.ENVIRONMENT:
            names = (source.alias(tier), key.env_name())
            lookup = self.environ.get
        elif tier is Tier.PROPERTY:
            names = (source.alias(tier), key.property_name())
            lookup = self.properties.get
        elif tier is Tier.FILE:
            names = (source.alias(tier), key.property_name())
            component = key.component

            def lookup(name):
                return self.files.lookup(component, name)
        else:
            names = (source.alias(tier), key.property_name())
            lookup = self.helper.host_property

        for name in names:
            if name is None:
                continue
            value = lookup(name)
            if value is not None:
                return value
        return None

    # Prefix discovery

    def discover_prefixes(self, pattern: Union[str, Pattern[str]], owner: Optional[type] = None) -> Set[str]:
        """
        Discover instance prefixes from the raw names visible in every tier.

        Args:
            pattern: Regular expression with exactly one capture group, matched
                against whole normalized names, e.g. ``(.+)\\.jdbc\\..*``
            owner: Component whose file should be read even if none of its
                keys is registered yet

        Returns:
            The distinct, non-empty values of the capture group

        Raises:
            ValueError: If the pattern does not have exactly one capture group
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        if regex.groups != 1:
            raise ValueError(
                f"Prefix pattern must have exactly one capture group, "
                f"'{regex.pattern}' has {regex.groups}"
            )

        prefixes = set()
        for name in self.visible_names(owner):
            match = regex.fullmatch(name)
            if match and match.group(1):
                prefixes.add(match.group(1))

        self.logger.debug("Prefixes discovered", pattern=regex.pattern, prefixes=sorted(prefixes))
        return prefixes

    def visible_names(self, owner: Optional[type] = None) -> Set[str]:
        """Every raw setting name of every tier, in normalized property form."""
        names = {normalize_property_name(name) for name in list(self.environ.keys())}
        names.update(self.properties.names())

        for component in self._known_components(owner):
            names.update(self.files.get(component).keys())

        names.update(self.helper.host_property_names())
        return names

    def _known_components(self, owner: Optional[type]) -> Iterable[str]:
        components = {key.component for key in self._bindings}
        components.update(component_name(owner_type) for owner_type in self._instances)
        components.update(self.files.loaded_names())
        if owner is not None:
            components.add(component_name(owner))
        return sorted(components)


_default_registry: Optional[ConfigRegistry] = None
_default_lock = threading.Lock()


def get_config_registry() -> ConfigRegistry:
    """Get or lazily create the process-wide default registry."""
    global _default_registry
    registry = _default_registry
    if registry is not None:
        return registry

    with _default_lock:
        if _default_registry is None:
            _default_registry = ConfigRegistry()
        return _default_registry


def reset_config_registry():
    """Reset the process-wide default registry, if one was created."""
    with _default_lock:
        if _default_registry is not None:
            _default_registry.reset()
