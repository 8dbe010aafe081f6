"""
Backing stores for the property and file tiers.

This module provides the in-memory runtime property store and the loader for
per-component YAML properties files.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple

import yaml

from forage.logger import get_forage_logger
from .key import normalize_property_name


def render_value(value: Any) -> Optional[str]:
    """Render a YAML scalar (or list of scalars) as the raw string a tier returns."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(render_value(item) or "" for item in value)
    return str(value)


def flatten_mapping(mapping: Mapping[Any, Any], parent: str = "") -> Iterator[Tuple[str, str]]:
    """
    Flatten nested mappings into dotted property names.

    ``{"orders": {"jdbc": {"url": "x"}}}`` yields ``("orders.jdbc.url", "x")``.
    Null values are skipped.
    """
    for key, value in mapping.items():
        name = normalize_property_name(f"{parent}.{key}" if parent else str(key))
        if isinstance(value, Mapping):
            yield from flatten_mapping(value, name)
        else:
            rendered = render_value(value)
            if rendered is not None:
                yield name, rendered


class PropertyStore:
    """
    Mutable, process-lifetime runtime properties.

    Updates swap in a new dictionary under the lock, so readers never take
    the lock and never see a half-applied update.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._lock = threading.RLock()
        self._properties: Dict[str, str] = dict(flatten_mapping(initial or {}))

    def get(self, name: str) -> Optional[str]:
        return self._properties.get(normalize_property_name(name))

    def set(self, name: str, value: Any):
        """
        Set a property; a nested mapping sets one dotted property per leaf.

        Setting None removes the property.
        """
        if value is None:
            self.remove(name)
            return

        if isinstance(value, Mapping):
            values = dict(flatten_mapping(value, normalize_property_name(name)))
        else:
            values = {normalize_property_name(name): render_value(value)}

        with self._lock:
            properties = self._properties.copy()
            properties.update(values)
            self._properties = properties

    def remove(self, name: str) -> bool:
        with self._lock:
            normalized = normalize_property_name(name)
            if normalized not in self._properties:
                return False
            properties = self._properties.copy()
            del properties[normalized]
            self._properties = properties
            return True

    def names(self) -> list[str]:
        return list(self._properties.keys())

    def snapshot(self) -> Dict[str, str]:
        return self._properties.copy()

    def clear(self):
        with self._lock:
            self._properties = {}


class PropertiesFileLoader:
    """
    Loads one YAML properties file per component, at most once.

    Files are looked up as ``<component>.yaml`` then ``<component>.yml`` in
    each directory of the search path. A missing, unreadable or malformed file
    is remembered as empty: the file tier then contributes nothing.
    """

    SUFFIXES = (".yaml", ".yml")

    def __init__(self, search_path: Sequence[Path]):
        self.search_path = [Path(directory) for directory in search_path]
        self.logger = get_forage_logger().bind(component="PropertiesFileLoader")
        self._lock = threading.Lock()
        self._loaded: Dict[str, Dict[str, str]] = {}

    def find(self, name: str) -> Optional[Path]:
        """Get the first file for ``name`` on the search path."""
        for directory in self.search_path:
            for suffix in self.SUFFIXES:
                candidate = directory / f"{name}{suffix}"
                if candidate.is_file():
                    return candidate
        return None

    def get(self, name: str) -> Dict[str, str]:
        """Get the flattened properties of file ``name``, loading it on first use."""
        properties = self._loaded.get(name)
        if properties is not None:
            return properties

        with self._lock:
            properties = self._loaded.get(name)
            if properties is None:
                properties = self._load(name)
                self._loaded[name] = properties
            return properties

    def lookup(self, name: str, property_name: str) -> Optional[str]:
        return self.get(name).get(normalize_property_name(property_name))

    def loaded_names(self) -> list[str]:
        return list(self._loaded.keys())

    def clear(self):
        with self._lock:
            self._loaded = {}

    def _load(self, name: str) -> Dict[str, str]:
        path = self.find(name)
        if path is None:
            self.logger.debug("No properties file found", file=name,
                              search_path=[str(d) for d in self.search_path])
            return {}

        try:
            with open(path, 'r') as f:
                content = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            self.logger.warning("Failed to load properties file", path=str(path), error=str(e))
            return {}

        if not isinstance(content, Mapping):
            self.logger.warning("Ignoring properties file without a top-level mapping",
                                path=str(path), content_type=type(content).__name__)
            return {}

        properties = dict(flatten_mapping(content))
        self.logger.info("Properties file loaded", path=str(path), entries=len(properties))
        return properties
