"""
Core enums for the forage system.
"""

from .config import (
    Tier,
    TIER_ORDER,
    HostKind
)

__all__ = [
    'Tier',
    'TIER_ORDER',
    'HostKind'
]
