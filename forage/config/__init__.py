"""
Configuration resolution for forage components.

Components register their settings with a ConfigRegistry; values resolve
through environment variables, runtime properties, per-component YAML files,
the host environment and declared defaults, in that order.
"""

from .core import *
from .core import __all__ as _core_all


def read_as_list(key: ConfigKey, registry: ConfigRegistry = None) -> list[str]:
    """Read a comma-separated setting from ``registry`` (default registry if omitted)."""
    if registry is None:
        registry = get_config_registry()
    return registry.helper.read_as_list(key)


def detect_host_environment(registry: ConfigRegistry = None):
    """Get the host adapter used by ``registry`` (default registry if omitted)."""
    if registry is None:
        registry = get_config_registry()
    return registry.helper.detect_host_environment()


__all__ = list(_core_all) + [
    'read_as_list',
    'detect_host_environment'
]
