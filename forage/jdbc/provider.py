"""
Data source capability and orchestration.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from forage.config.core import ConfigRegistry
from forage.providers import MultiInstanceFactory, MultiInstanceResult, ProviderRegistry, get_provider_registry
from .config import JDBC_PREFIX_PATTERN, DataSourceFactoryConfig


class DataSourceProvider(ABC):
    """Capability implemented by each database driver integration."""

    def __init__(self, config: DataSourceFactoryConfig):
        self.config = config

    @abstractmethod
    def create(self) -> Any:
        """Build the data source described by ``self.config``."""
        pass

    def test_query(self) -> Optional[str]:
        return None


def _db_kind_discriminator(config: DataSourceFactoryConfig) -> Optional[str]:
    if config.get("jdbc.db.kind") is None:
        return None
    return config.db_kind().provider_name


def data_source_factory(config_registry: ConfigRegistry,
                        provider_registry: Optional[ProviderRegistry] = None) -> MultiInstanceFactory:
    """
    Factory creating one DataSourceProvider per configured data source.

    With several providers registered, each data source selects its provider
    through its ``jdbc.db.kind`` setting.
    """
    return MultiInstanceFactory(
        config_registry,
        provider_registry if provider_registry is not None else get_provider_registry(),
        DataSourceProvider,
        JDBC_PREFIX_PATTERN,
        lambda registry, prefix: DataSourceFactoryConfig(prefix, registry),
        discriminator=_db_kind_discriminator,
        owner=DataSourceFactoryConfig,
    )


def create_data_sources(config_registry: ConfigRegistry,
                        provider_registry: Optional[ProviderRegistry] = None) -> MultiInstanceResult:
    return data_source_factory(config_registry, provider_registry).create_all()
