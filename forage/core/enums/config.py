"""
Configuration-related enums for the forage system.
"""

from enum import Enum


class Tier(Enum):
    """Resolution tiers, declared in precedence order (highest first)."""
    ENVIRONMENT = "environment"
    PROPERTY = "property"
    FILE = "file"
    HOST = "host"
    DEFAULT = "default"


TIER_ORDER = tuple(Tier)


class HostKind(Enum):
    """Host environments the engine can read settings from."""
    EMBEDDED = "embedded"
    APPLICATION = "application"
    STANDALONE = "standalone"
