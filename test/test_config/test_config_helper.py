"""
Tests for value shaping and host environment detection.
"""

import pytest

from forage.config import detect_host_environment, read_as_list
from forage.config.core import (
    ApplicationFileHost, ConfigKey, ConfigRegistry, EmbeddedHost, StandaloneHost
)
from forage.core.enums import HostKind
from forage.core.exceptions import ConfigurationError


class TestValueShaping:

    @pytest.fixture
    def key(self, sample_owner):
        return ConfigKey.of(sample_owner, "values")

    @pytest.mark.parametrize("raw,expected", [
        ("a,b,c", ["a", "b", "c"]),
        ("a, b", ["a", " b"]),
        ("single", ["single"]),
        ("", [""]),
    ])
    def test_read_as_list(self, registry, key, raw, expected):
        registry.set_property("values", raw)
        assert read_as_list(key, registry) == expected

    def test_read_as_list_absent(self, registry, key):
        assert registry.helper.read_as_list(key) == []

    def test_read_as_int(self, registry, key):
        assert registry.helper.read_as_int(key, 7) == 7
        registry.set_property("values", " 12 ")
        assert registry.helper.read_as_int(key) == 12

    def test_read_as_int_rejects_garbage(self, registry, key):
        registry.set_property("values", "twelve")

        with pytest.raises(ConfigurationError) as context:
            registry.helper.read_as_int(key)
        assert "values" in str(context.value)
        assert "twelve" in str(context.value)

    def test_read_as_float(self, registry, key):
        registry.set_property("values", "0.25")
        assert registry.helper.read_as_float(key) == 0.25

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("TRUE", True), ("false", False), ("yes", False), ("1", False)
    ])
    def test_read_as_bool(self, registry, key, raw, expected):
        registry.set_property("values", raw)
        assert registry.helper.read_as_bool(key) is expected

    def test_read_as_bool_default(self, registry, key):
        assert registry.helper.read_as_bool(key) is False
        assert registry.helper.read_as_bool(key, True) is True


class TestHostDetection:

    @pytest.fixture
    def default_hosts_registry(self, settings_dir, environ):
        return ConfigRegistry(search_path=[settings_dir], environ=environ)

    def test_standalone_without_application_file(self, default_hosts_registry):
        host = detect_host_environment(default_hosts_registry)
        assert host.kind is HostKind.STANDALONE

    def test_application_file_detected(self, default_hosts_registry, write_settings, sample_owner):
        write_settings("application", {"sample": {"name": "from-host"}, "name": "host-value"})

        host = detect_host_environment(default_hosts_registry)

        assert isinstance(host, ApplicationFileHost)
        assert default_hosts_registry.resolve(ConfigKey.of(sample_owner, "name")) == "host-value"

    def test_configured_kind_wins_over_probing(self, default_hosts_registry, environ, write_settings):
        write_settings("application", {"name": "host-value"})
        environ["FORAGE_HOST"] = "standalone"

        assert default_hosts_registry.helper.detect_host_environment().kind is HostKind.STANDALONE

    def test_configured_kind_from_runtime_property(self, default_hosts_registry, write_settings):
        write_settings("application", {"name": "host-value"})
        default_hosts_registry.set_property("forage.host", "STANDALONE")

        assert default_hosts_registry.helper.detect_host_environment().kind is HostKind.STANDALONE

    def test_unknown_kind_falls_back_to_probing(self, default_hosts_registry, environ, write_settings):
        write_settings("application", {"name": "host-value"})
        environ["FORAGE_HOST"] = "mainframe"

        assert default_hosts_registry.helper.detect_host_environment().kind is HostKind.APPLICATION

    def test_kind_without_adapter_falls_back_to_probing(self, default_hosts_registry, environ):
        environ["FORAGE_HOST"] = "embedded"
        assert default_hosts_registry.helper.detect_host_environment().kind is HostKind.STANDALONE

    def test_detection_is_cached_until_reset(self, default_hosts_registry, write_settings):
        helper = default_hosts_registry.helper
        assert helper.detect_host_environment().kind is HostKind.STANDALONE

        write_settings("application", {"name": "host-value"})
        assert helper.detect_host_environment().kind is HostKind.STANDALONE

        helper.reset()
        assert helper.detect_host_environment().kind is HostKind.APPLICATION

    def test_registered_host_probed_first(self, registry, sample_owner):
        assert registry.helper.detect_host_environment().kind is HostKind.STANDALONE

        registry.helper.register_host(EmbeddedHost({"name": "embedded"}))

        assert registry.helper.detect_host_environment().kind is HostKind.EMBEDDED
        assert registry.resolve(ConfigKey.of(sample_owner, "name")) == "embedded"

    def test_host_appended_last_is_probed_after_others(self, registry):
        registry.helper.register_host(EmbeddedHost({}), first=False)

        assert [host.kind for host in registry.helper.hosts] == [HostKind.STANDALONE, HostKind.EMBEDDED]
        assert registry.helper.detect_host_environment().kind is HostKind.STANDALONE

    def test_standalone_host_has_no_values(self):
        host = StandaloneHost()
        assert host.is_present()
        assert host.get_property("anything") is None
        assert host.property_names() == []
