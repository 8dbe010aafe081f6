"""
Core exceptions for the forage system.

This module provides all exception classes used throughout forage,
organized by domain and with a clear inheritance hierarchy.
"""

# Base exceptions
from .base import (
    ForageError,
    ConfigurationError,
    NotFoundError
)

# Configuration exceptions
from .config import MissingConfigurationError

# Provider exceptions
from .provider import (
    ProviderError,
    ProviderNotFoundError,
    AmbiguousProviderError
)

# Agent exceptions
from .agent import UndefinedAgentError

__all__ = [
    # Base exceptions
    'ForageError',
    'ConfigurationError',
    'NotFoundError',

    # Configuration exceptions
    'MissingConfigurationError',

    # Provider exceptions
    'ProviderError',
    'ProviderNotFoundError',
    'AmbiguousProviderError',

    # Agent exceptions
    'UndefinedAgentError'
]
