"""
JDBC data source settings and provider selection.
"""

from .config import JDBC_PREFIX_PATTERN, DataSourceFactoryConfig, DbKind
from .provider import DataSourceProvider, create_data_sources, data_source_factory

__all__ = [
    'JDBC_PREFIX_PATTERN',
    'DataSourceFactoryConfig',
    'DbKind',
    'DataSourceProvider',
    'create_data_sources',
    'data_source_factory'
]
