"""
Capability provider registry and selection.

Implementations of a capability (a data source driver, a chat model backend)
register themselves explicitly, usually with the `provides` decorator at
import time. Orchestration code discovers the registered providers of a
capability and selects exactly one: automatically when only one is present,
by name otherwise.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from forage.core.exceptions import AmbiguousProviderError, ProviderNotFoundError
from forage.logger import get_forage_logger


def qualified_name(implementation) -> str:
    return f"{implementation.__module__}.{implementation.__qualname__}"


@dataclass(frozen=True)
class ProviderDescriptor:
    """A registered implementation of a capability."""
    capability: type
    implementation: type
    factory: Callable[..., Any] = field(compare=False)
    name: str
    description: str = ""

    @property
    def qualified_name(self) -> str:
        return qualified_name(self.implementation)

    def matches(self, name: str) -> bool:
        """True when ``name`` is exactly the registered name or the qualified name."""
        return name == self.name or name == self.qualified_name

    def create(self, *args, **kwargs) -> Any:
        return self.factory(*args, **kwargs)


class ProviderRegistry:
    """
    Registry of capability providers.

    Providers are kept per capability in registration order. Registering the
    same implementation again replaces its descriptor in place.
    """

    def __init__(self):
        self.logger = get_forage_logger().bind(component="ProviderRegistry")
        self._lock = threading.RLock()
        self._providers: Dict[type, tuple] = {}

    def register(
        self,
        capability: type,
        implementation: type,
        factory: Optional[Callable[..., Any]] = None,
        name: Optional[str] = None,
        description: str = "",
    ) -> ProviderDescriptor:
        """
        Register an implementation of a capability.

        Args:
            capability: The capability type, usually an abstract base class
            implementation: The implementing type
            factory: Callable building an instance, defaults to the implementation
            name: Short name used as discriminator, defaults to the qualified name
            description: Human readable description

        Returns:
            The registered descriptor
        """
        descriptor = ProviderDescriptor(
            capability=capability,
            implementation=implementation,
            factory=factory if factory is not None else implementation,
            name=name or qualified_name(implementation),
            description=description,
        )

        with self._lock:
            current = list(self._providers.get(capability, ()))
            for index, existing in enumerate(current):
                if existing.implementation is implementation:
                    current[index] = descriptor
                    break
            else:
                current.append(descriptor)
            self._providers[capability] = tuple(current)

        self.logger.debug("Provider registered", capability=capability.__name__,
                          provider=descriptor.qualified_name, name=descriptor.name)
        return descriptor

    def provides(self, capability: type, name: Optional[str] = None, description: str = "",
                 factory: Optional[Callable[..., Any]] = None):
        """Class decorator registering the decorated class as a provider of ``capability``."""
        def decorator(implementation):
            self.register(capability, implementation, factory=factory, name=name, description=description)
            return implementation
        return decorator

    def unregister(self, capability: type, implementation: type) -> bool:
        with self._lock:
            current = self._providers.get(capability, ())
            remaining = tuple(d for d in current if d.implementation is not implementation)
            if len(remaining) == len(current):
                return False
            self._providers[capability] = remaining
            return True

    def discover(self, capability: type) -> List[ProviderDescriptor]:
        """Snapshot of the providers of ``capability`` in registration order."""
        providers = list(self._providers.get(capability, ()))
        self.logger.debug("Providers discovered", capability=capability.__name__,
                          providers=provider_names(providers))
        return providers

    def capabilities(self) -> List[type]:
        return [capability for capability, providers in self._providers.items() if providers]

    def clear(self):
        with self._lock:
            self._providers = {}


def provider_names(providers: Sequence[ProviderDescriptor]) -> List[str]:
    """Candidate names for messages, ``name (qualified.Name)`` when a short name is registered."""
    return [
        provider.qualified_name if provider.name == provider.qualified_name
        else f"{provider.name} ({provider.qualified_name})"
        for provider in providers
    ]


def _capability_of(providers: Sequence[ProviderDescriptor], capability: Optional[type]) -> Optional[type]:
    if capability is None and providers:
        return providers[0].capability
    return capability


def select_single(providers: Sequence[ProviderDescriptor], capability: Optional[type] = None) -> ProviderDescriptor:
    """
    Get the only provider of the list.

    Raises:
        ProviderNotFoundError: If the list is empty
        AmbiguousProviderError: If it has more than one provider
    """
    capability = _capability_of(providers, capability)
    if not providers:
        raise ProviderNotFoundError(capability)
    if len(providers) > 1:
        raise AmbiguousProviderError(capability, provider_names(providers))
    return providers[0]


def select_by_name(providers: Sequence[ProviderDescriptor], name: str,
                   capability: Optional[type] = None) -> ProviderDescriptor:
    """
    Get the provider registered under ``name`` or whose qualified name is ``name``.

    Raises:
        ProviderNotFoundError: If none matches exactly
    """
    for provider in providers:
        if provider.matches(name):
            return provider
    raise ProviderNotFoundError(_capability_of(providers, capability), provider_names(providers), name)


def select(providers: Sequence[ProviderDescriptor], discriminator: Optional[str] = None,
           capability: Optional[type] = None) -> ProviderDescriptor:
    """
    Select one provider: the only one if there is exactly one, else by name.

    A single provider is used even if the discriminator names another one,
    matching zero-configuration setups where the discriminator has a default.
    """
    if len(providers) == 1 or discriminator is None:
        return select_single(providers, capability)
    return select_by_name(providers, discriminator, capability)


_default_registry = ProviderRegistry()


def get_provider_registry() -> ProviderRegistry:
    """The process-wide provider registry used by the module-level `provides`."""
    return _default_registry


def provides(capability: type, name: Optional[str] = None, description: str = "",
             factory: Optional[Callable[..., Any]] = None):
    """Register the decorated class in the process-wide provider registry."""
    return _default_registry.provides(capability, name=name, description=description, factory=factory)
