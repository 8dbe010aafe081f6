"""
Configuration keys.

A ConfigKey is the identity of one configurable setting: the component type
that owns it, its dotted name and an optional instance prefix. Keys derive the
property and environment-variable spellings used by every resolution tier.
"""

import re
from dataclasses import dataclass
from typing import Optional


def component_name(owner) -> str:
    """
    Name of the component owning a key, used to locate its properties file.

    Owners may declare a ``component_name`` class attribute, otherwise the
    class name is converted to kebab-case (``QdrantConfig`` -> ``qdrant-config``).
    """
    name = getattr(owner, "component_name", None)
    if isinstance(name, str) and name:
        return name
    type_name = owner.__name__ if isinstance(owner, type) else type(owner).__name__
    return re.sub(r"(?<!^)(?=[A-Z])", "-", type_name).lower()


def normalize_property_name(raw: str) -> str:
    """Fold underscores to dots and lower-case, the canonical property spelling."""
    return raw.replace("_", ".").lower()


def normalize_env_name(raw: str) -> str:
    """Fold dots to underscores and upper-case, the canonical environment spelling."""
    return raw.replace(".", "_").upper()


@dataclass(frozen=True)
class ConfigKey:
    """
    Immutable identity of a setting.

    Two keys are equal only when owner, name and prefix are all equal, with
    no case folding. A prefixed key is a distinct value sharing owner and name.
    """
    owner: type
    name: str
    prefix: Optional[str] = None

    def __post_init__(self):
        if self.owner is None:
            raise ValueError("ConfigKey owner must not be None")
        if not self.name:
            raise ValueError("ConfigKey name must not be empty")

    @classmethod
    def of(cls, owner: type, name: str) -> "ConfigKey":
        """Create an unprefixed key for ``owner``."""
        return cls(owner, name)

    @classmethod
    def from_property_name(cls, owner: type, property_name: str, prefix: Optional[str] = None) -> "ConfigKey":
        """
        Rebuild a key from its property spelling.

        Args:
            owner: Component type owning the key
            property_name: Raw property name, e.g. ``orders.pool.max.size``
            prefix: Instance prefix to strip from the front of the name

        Returns:
            The key whose ``property_name()`` equals the normalized input
        """
        name = normalize_property_name(property_name)
        if prefix is not None:
            lead = normalize_property_name(prefix) + "."
            if not name.startswith(lead):
                raise ValueError(f"'{property_name}' does not start with prefix '{prefix}'")
            name = name[len(lead):]
        return cls(owner, name, prefix)

    @classmethod
    def from_env_name(cls, owner: type, env_name: str, prefix: Optional[str] = None) -> "ConfigKey":
        """Rebuild a key from its environment-variable spelling."""
        return cls.from_property_name(owner, env_name.replace("_", ".").lower(), prefix)

    def with_prefix(self, prefix: Optional[str]) -> "ConfigKey":
        if prefix is None:
            return self
        return ConfigKey(self.owner, self.name, prefix)

    def full_name(self) -> str:
        """Prefix and name joined by a dot, without normalization."""
        if self.prefix is None:
            return self.name
        return f"{self.prefix}.{self.name}"

    def property_name(self) -> str:
        return normalize_property_name(self.full_name())

    def env_name(self) -> str:
        return normalize_env_name(self.full_name())

    def matches(self, raw_name: str) -> bool:
        """True when ``raw_name`` is exactly this key's property spelling."""
        return raw_name == self.property_name()

    @property
    def component(self) -> str:
        return component_name(self.owner)

    def __str__(self) -> str:
        return f"{self.component}:{self.full_name()}"
