"""
Host-integration tier and value shaping utilities.
"""

import threading
from typing import TYPE_CHECKING, List, Optional, Sequence

from forage.core.enums import HostKind
from forage.core.exceptions import ConfigurationError
from forage.logger import get_forage_logger
from .host import ApplicationFileHost, HostAdapter, StandaloneHost
from .key import ConfigKey

if TYPE_CHECKING:
    from .registry import ConfigRegistry


HOST_PROPERTY = "forage.host"
HOST_ENV = "FORAGE_HOST"


class ConfigHelper:
    """
    Selects the host environment and shapes resolved values.

    The host is detected once and cached until `reset`. Detection honours the
    ``forage.host`` setting (environment ``FORAGE_HOST`` or runtime property)
    when it names a registered adapter kind; otherwise adapters are probed in
    order and the first present one wins.
    """

    def __init__(self, registry: "ConfigRegistry", hosts: Optional[Sequence[HostAdapter]] = None):
        self._registry = registry
        self.logger = get_forage_logger().bind(component="ConfigHelper")
        self._lock = threading.RLock()
        if hosts is None:
            hosts = [ApplicationFileHost(registry.search_path), StandaloneHost()]
        self._hosts: List[HostAdapter] = list(hosts)
        self._detected: Optional[HostAdapter] = None

    @property
    def hosts(self) -> List[HostAdapter]:
        return list(self._hosts)

    def register_host(self, host: HostAdapter, first: bool = True):
        """
        Add a host adapter, probed before the others unless ``first`` is False.

        Clears any cached detection so the new adapter is considered.
        """
        with self._lock:
            if first:
                self._hosts.insert(0, host)
            else:
                self._hosts.append(host)
            self._detected = None
        self.logger.info("Host adapter registered", kind=host.kind.value, first=first)

    def detect_host_environment(self) -> Optional[HostAdapter]:
        detected = self._detected
        if detected is not None:
            return detected

        with self._lock:
            if self._detected is None:
                self._detected = self._configured_host() or self._probe_hosts()
                if self._detected is not None:
                    self.logger.info("Host environment detected", kind=self._detected.kind.value)
            return self._detected

    def host_property(self, name: str) -> Optional[str]:
        host = self.detect_host_environment()
        if host is None:
            return None
        return host.get_property(name)

    def host_property_names(self) -> list[str]:
        host = self.detect_host_environment()
        if host is None:
            return []
        return host.property_names()

    def reset(self):
        with self._lock:
            self._detected = None
            for host in self._hosts:
                if isinstance(host, ApplicationFileHost):
                    host.clear()

    def _configured_host(self) -> Optional[HostAdapter]:
        configured = self._registry.environ.get(HOST_ENV) or self._registry.properties.get(HOST_PROPERTY)
        if not configured:
            return None

        try:
            kind = HostKind(configured.strip().lower())
        except ValueError:
            self.logger.warning("Unknown host kind configured, probing instead",
                                value=configured, supported=[k.value for k in HostKind])
            return None

        for host in self._hosts:
            if host.kind is kind:
                return host

        self.logger.warning("Configured host kind has no registered adapter, probing instead",
                            kind=kind.value)
        return None

    def _probe_hosts(self) -> Optional[HostAdapter]:
        for host in self._hosts:
            if host.is_present():
                return host
        return None

    # Value shaping

    def read_as_list(self, key: ConfigKey) -> List[str]:
        """
        Read a comma-separated value as a list.

        Items are not trimmed. An absent key gives an empty list and an empty
        value gives ``[""]``.
        """
        value = self._registry.resolve(key)
        if value is None:
            return []
        return value.split(",")

    def read_as_int(self, key: ConfigKey, default: Optional[int] = None) -> Optional[int]:
        value = self._registry.resolve(key)
        if value is None:
            return default
        try:
            return int(value.strip())
        except ValueError:
            raise ConfigurationError(key.property_name(), value, "expected an integer")

    def read_as_float(self, key: ConfigKey, default: Optional[float] = None) -> Optional[float]:
        value = self._registry.resolve(key)
        if value is None:
            return default
        try:
            return float(value.strip())
        except ValueError:
            raise ConfigurationError(key.property_name(), value, "expected a number")

    def read_as_bool(self, key: ConfigKey, default: bool = False) -> bool:
        """Only ``true`` (any case) is true, any other present value is false."""
        value = self._registry.resolve(key)
        if value is None:
            return default
        return value.strip().lower() == "true"
