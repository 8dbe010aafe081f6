"""
Host environment adapters for the host-integration tier.

The set of hosts is closed (see HostKind). The embedding application either
registers the adapter it wants or names its kind through the ``forage.host``
setting; otherwise the first present adapter is used.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from forage.core.enums import HostKind
from .key import normalize_property_name
from .store import PropertiesFileLoader, flatten_mapping


class HostAdapter(ABC):
    """Reads settings from the environment hosting the engine."""

    kind: HostKind

    @abstractmethod
    def is_present(self) -> bool:
        """Whether this host is available in the current process."""
        pass

    @abstractmethod
    def get_property(self, name: str) -> Optional[str]:
        pass

    def property_names(self) -> list[str]:
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value})"


class EmbeddedHost(HostAdapter):
    """
    Settings supplied by the embedding application as a (possibly nested) mapping.

    The mapping is read on every lookup, so an application may keep updating it.
    """

    kind = HostKind.EMBEDDED

    def __init__(self, properties: Mapping[str, Any]):
        self._properties = properties

    def is_present(self) -> bool:
        return self._properties is not None

    def get_property(self, name: str) -> Optional[str]:
        return dict(flatten_mapping(self._properties)).get(normalize_property_name(name))

    def property_names(self) -> list[str]:
        return [name for name, _ in flatten_mapping(self._properties)]


class ApplicationFileHost(HostAdapter):
    """Settings from the application file (``application.yaml``) on the search path."""

    kind = HostKind.APPLICATION
    FILE_NAME = "application"

    def __init__(self, search_path: Sequence[Path]):
        self._loader = PropertiesFileLoader(search_path)

    def is_present(self) -> bool:
        return self._loader.find(self.FILE_NAME) is not None

    def get_property(self, name: str) -> Optional[str]:
        return self._loader.lookup(self.FILE_NAME, name)

    def property_names(self) -> list[str]:
        return list(self._loader.get(self.FILE_NAME).keys())

    def clear(self):
        self._loader.clear()


class StandaloneHost(HostAdapter):
    """No surrounding host: the tier contributes nothing."""

    kind = HostKind.STANDALONE

    def is_present(self) -> bool:
        return True

    def get_property(self, name: str) -> Optional[str]:
        return None
