"""
Shared pytest configuration and fixtures for the forage tests.
"""

import pytest
import yaml

from forage.config.core import ConfigRegistry, StandaloneHost, reset_config_registry
from forage.providers import ProviderRegistry


class SampleConfig:
    """Owner type for keys that do not need a full Config component."""
    component_name = "sample"


@pytest.fixture
def sample_owner():
    return SampleConfig


@pytest.fixture
def settings_dir(tmp_path):
    """Directory used as the search path of the test registries."""
    directory = tmp_path / "settings"
    directory.mkdir()
    return directory


@pytest.fixture
def write_settings(settings_dir):
    """Write ``<name>.yaml`` in the settings directory from a mapping or raw text."""
    def write(name, content, suffix=".yaml"):
        path = settings_dir / f"{name}{suffix}"
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(yaml.safe_dump(content))
        return path
    return write


@pytest.fixture
def environ():
    """Environment snapshot handed to the registry instead of os.environ."""
    return {}


@pytest.fixture
def registry(settings_dir, environ):
    """Isolated registry: injected environment, temporary search path, no host."""
    return ConfigRegistry(search_path=[settings_dir], environ=environ, hosts=[StandaloneHost()])


@pytest.fixture
def provider_registry():
    return ProviderRegistry()


@pytest.fixture(autouse=True)
def reset_default_registry():
    yield
    reset_config_registry()


# Pytest marks for categorizing tests
pytestmark = pytest.mark.unit
