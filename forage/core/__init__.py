"""
Core module for the forage system.

This module provides the foundational components used throughout forage:
- Exception classes organized by domain
- Enum definitions for resolution tiers and host environments
"""

from .exceptions import *
from .enums import *

from . import exceptions
from . import enums

__all__ = exceptions.__all__ + enums.__all__
