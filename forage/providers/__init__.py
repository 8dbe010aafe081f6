"""
Capability provider discovery.

This module provides the explicit provider registry and the selection rules:
- ProviderRegistry / provides: Register implementations of a capability
- select_single / select_by_name / select: Pick exactly one provider
- MultiInstanceFactory: One instance per discovered configuration prefix
"""

from .registry import (
    ProviderDescriptor, ProviderRegistry, get_provider_registry, provides,
    provider_names, qualified_name, select, select_by_name, select_single
)
from .factory import DEFAULT_INSTANCE, MultiInstanceFactory, MultiInstanceResult

__all__ = [
    # Registry
    'ProviderDescriptor',
    'ProviderRegistry',
    'get_provider_registry',
    'provides',
    'provider_names',
    'qualified_name',

    # Selection
    'select',
    'select_by_name',
    'select_single',

    # Multi-instance creation
    'DEFAULT_INSTANCE',
    'MultiInstanceFactory',
    'MultiInstanceResult'
]
