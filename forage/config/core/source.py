"""
Configuration sources.

A source describes where a raw string for a key may come from. Sources never
hold resolved values: environment and property values may change between two
resolutions, so the registry reads them again on every call.

Whatever source is bound, the registry walks the tiers in a fixed order. A
source only contributes an alias name for its own tier (tried before the
key-derived spelling) and, for literals and defaults, the last-resort value.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from forage.core.enums import Tier

DefaultValue = Union[str, Callable[[], Optional[str]]]


class ConfigSource:
    """Base of the source variants."""

    tier: Optional[Tier] = None

    def alias(self, tier: Tier) -> Optional[str]:
        """Explicit lookup name for ``tier``, or None to use the key spelling only."""
        return None

    def default_value(self) -> Optional[str]:
        return None

    def with_default(self, default: DefaultValue) -> "DefaultSource":
        return DefaultSource(self, default)

    def without_alias(self) -> "ConfigSource":
        """The same source minus any alias name, used for prefixed variants of a key."""
        return KeySource()


@dataclass(frozen=True)
class KeySource(ConfigSource):
    """No alias: every tier is looked up with the key's own spellings."""


@dataclass(frozen=True)
class LiteralSource(ConfigSource):
    """A fixed value, used when no higher tier provides one."""
    value: str
    tier = Tier.DEFAULT

    def default_value(self) -> Optional[str]:
        return self.value

    def without_alias(self) -> ConfigSource:
        return self


@dataclass(frozen=True)
class EnvironmentSource(ConfigSource):
    """Read from a named environment variable."""
    var_name: str
    tier = Tier.ENVIRONMENT

    def alias(self, tier: Tier) -> Optional[str]:
        return self.var_name if tier is Tier.ENVIRONMENT else None


@dataclass(frozen=True)
class PropertySource(ConfigSource):
    """Read from a named runtime property."""
    property_name: str
    tier = Tier.PROPERTY

    def alias(self, tier: Tier) -> Optional[str]:
        return self.property_name if tier is Tier.PROPERTY else None


@dataclass(frozen=True)
class FileSource(ConfigSource):
    """Read from a named entry of the component's properties file."""
    property_name: str
    tier = Tier.FILE

    def alias(self, tier: Tier) -> Optional[str]:
        return self.property_name if tier is Tier.FILE else None


@dataclass(frozen=True)
class DefaultSource(ConfigSource):
    """
    Wraps another source with a default value or a zero-argument supplier.

    Suppliers are invoked on each resolution that reaches the default tier.
    """
    inner: ConfigSource
    default: DefaultValue
    tier = Tier.DEFAULT

    def alias(self, tier: Tier) -> Optional[str]:
        return self.inner.alias(tier)

    def default_value(self) -> Optional[str]:
        value = self.default() if callable(self.default) else self.default
        if value is None:
            return self.inner.default_value()
        return str(value)

    def without_alias(self) -> ConfigSource:
        return DefaultSource(self.inner.without_alias(), self.default)


def from_key() -> KeySource:
    return KeySource()


def from_env(var_name: str) -> EnvironmentSource:
    return EnvironmentSource(var_name)


def from_property(property_name: str) -> PropertySource:
    return PropertySource(property_name)


def from_file(property_name: str) -> FileSource:
    return FileSource(property_name)


def literal(value: str) -> LiteralSource:
    return LiteralSource(value)
