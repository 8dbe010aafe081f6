"""
Multi-instance component factory.

Builds one component per instance prefix found in the configuration (for
example one data source per ``<name>.jdbc.*`` group of settings), or a single
default component when no prefixed settings exist.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Pattern, Union

from forage.config.core.registry import ConfigRegistry
from forage.logger import get_forage_logger
from .registry import ProviderDescriptor, ProviderRegistry, select

DEFAULT_INSTANCE = "default"


@dataclass
class MultiInstanceResult:
    """Instances created by name; ``default`` is the first one created."""
    instances: Dict[str, Any] = field(default_factory=dict)
    providers: Dict[str, ProviderDescriptor] = field(default_factory=dict)
    default_name: Optional[str] = None

    @property
    def default(self) -> Any:
        if self.default_name is None:
            return None
        return self.instances[self.default_name]

    def __len__(self) -> int:
        return len(self.instances)


class MultiInstanceFactory:
    """
    Creates the instances of a capability described by the configuration.

    Args:
        config_registry: Registry used for prefix discovery and passed to configs
        provider_registry: Registry holding the capability's providers
        capability: Capability whose providers build the instances
        prefix_pattern: One-group pattern extracting instance names from setting names
        config_factory: ``(registry, prefix) -> config`` building an instance's config
        discriminator: ``config -> provider name`` used when several providers exist
        owner: Config type whose file should be scanned during discovery
    """

    def __init__(
        self,
        config_registry: ConfigRegistry,
        provider_registry: ProviderRegistry,
        capability: type,
        prefix_pattern: Union[str, Pattern[str]],
        config_factory: Callable[[ConfigRegistry, Optional[str]], Any],
        discriminator: Optional[Callable[[Any], Optional[str]]] = None,
        owner: Optional[type] = None,
    ):
        self.config_registry = config_registry
        self.provider_registry = provider_registry
        self.capability = capability
        self.prefix_pattern = prefix_pattern
        self.config_factory = config_factory
        self.discriminator = discriminator
        self.owner = owner
        self.logger = get_forage_logger().bind(component="MultiInstanceFactory",
                                               capability=capability.__name__)

    def create_all(self) -> MultiInstanceResult:
        prefixes = self.config_registry.discover_prefixes(self.prefix_pattern, self.owner)
        result = MultiInstanceResult()

        if prefixes:
            self.logger.info("Creating named instances", prefixes=sorted(prefixes))
            for prefix in sorted(prefixes):
                self._create(result, prefix, prefix)
        else:
            self.logger.debug("No prefixed configuration found, creating default instance")
            self._create(result, DEFAULT_INSTANCE, None)

        return result

    def create(self, prefix: Optional[str] = None) -> Any:
        """Create the instance configured under ``prefix`` (None for the unprefixed one)."""
        result = MultiInstanceResult()
        self._create(result, prefix or DEFAULT_INSTANCE, prefix)
        return result.default

    def _create(self, result: MultiInstanceResult, name: str, prefix: Optional[str]):
        config = self.config_factory(self.config_registry, prefix)
        providers = self.provider_registry.discover(self.capability)
        provider = select(providers, self._discriminate(config), self.capability)

        instance = provider.create(config)
        result.instances[name] = instance
        result.providers[name] = provider
        if result.default_name is None:
            result.default_name = name

        self.logger.info("Instance created", instance=name, provider=provider.qualified_name)

    def _discriminate(self, config: Any) -> Optional[str]:
        if self.discriminator is None:
            return None
        return self.discriminator(config)
