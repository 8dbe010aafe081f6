"""
Core configuration resolution components.

This module provides the foundational pieces of the resolution engine:
- ConfigKey: Identity of a setting and its derived spellings
- ConfigSource: Where the raw value of a setting may come from
- ConfigRegistry: Bindings, tier walk and prefix discovery
- ConfigHelper: Host-integration tier and value shaping
- Config / ConfigEntries: Self-registering configuration components
"""

from .key import ConfigKey, component_name, normalize_property_name, normalize_env_name
from .source import (
    ConfigSource, KeySource, LiteralSource, EnvironmentSource, PropertySource,
    FileSource, DefaultSource, from_key, from_env, from_property, from_file, literal
)
from .store import PropertyStore, PropertiesFileLoader
from .host import HostAdapter, EmbeddedHost, ApplicationFileHost, StandaloneHost
from .helper import ConfigHelper
from .registry import ConfigRegistry, get_config_registry, reset_config_registry
from .component import Config, ConfigEntries

__all__ = [
    # Keys
    'ConfigKey',
    'component_name',
    'normalize_property_name',
    'normalize_env_name',

    # Sources
    'ConfigSource',
    'KeySource',
    'LiteralSource',
    'EnvironmentSource',
    'PropertySource',
    'FileSource',
    'DefaultSource',
    'from_key',
    'from_env',
    'from_property',
    'from_file',
    'literal',

    # Stores
    'PropertyStore',
    'PropertiesFileLoader',

    # Host tier
    'HostAdapter',
    'EmbeddedHost',
    'ApplicationFileHost',
    'StandaloneHost',
    'ConfigHelper',

    # Registry
    'ConfigRegistry',
    'get_config_registry',
    'reset_config_registry',

    # Components
    'Config',
    'ConfigEntries'
]
