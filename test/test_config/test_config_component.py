"""
Tests for self-registering configuration components.
"""

import pytest

from forage.config.core import (
    Config, ConfigEntries, ConfigKey, KeySource, from_env, literal
)
from forage.core.exceptions import MissingConfigurationError


class WidgetConfig(Config):
    component_name = "widget"

    ENTRIES = {
        "widget.url": from_env("WIDGET_ENDPOINT"),
        "widget.timeout": literal("30"),
        "widget.tags": None,
    }


class TestConfigComponent:

    def test_entries_are_bound_on_creation(self, registry):
        config = WidgetConfig(registry=registry)

        assert set(registry.registered_keys(WidgetConfig)) == {
            ConfigKey.of(WidgetConfig, "widget.url"),
            ConfigKey.of(WidgetConfig, "widget.timeout"),
            ConfigKey.of(WidgetConfig, "widget.tags"),
        }
        assert registry.get_instance(WidgetConfig) is config
        assert config.name == "widget"

    def test_values_read_through_instance(self, registry, environ):
        environ["WIDGET_ENDPOINT"] = "http://widget"
        registry.set_property("widget.tags", "a,b")
        config = WidgetConfig(registry=registry)

        assert config.get("widget.url") == "http://widget"
        assert config.get_int("widget.timeout") == 30
        assert config.get_list("widget.tags") == ["a", "b"]
        assert config.get_bool("widget.enabled") is False

    def test_prefixed_instance_reads_its_own_keys(self, registry, environ):
        environ["WIDGET_ENDPOINT"] = "http://default"
        environ["EAST_WIDGET_URL"] = "http://east"
        unprefixed = WidgetConfig(registry=registry)
        east = WidgetConfig("east", registry)

        assert unprefixed.get("widget.url") == "http://default"
        assert east.get("widget.url") == "http://east"
        assert east.key("widget.url") == ConfigKey(WidgetConfig, "widget.url", "east")

    def test_prefixed_instance_drops_aliases_but_keeps_defaults(self, registry, environ):
        environ["WIDGET_ENDPOINT"] = "http://default"
        west = WidgetConfig("west", registry)

        assert west.get("widget.url") is None
        assert west.get("widget.timeout") == "30"
        assert registry.source_for(west.key("widget.url")) == KeySource()

    def test_last_created_instance_is_registered(self, registry):
        WidgetConfig(registry=registry)
        south = WidgetConfig("south", registry)

        assert registry.get_instance(WidgetConfig) is south

    def test_require_reports_prefixed_spellings(self, registry):
        config = WidgetConfig("north", registry)

        with pytest.raises(MissingConfigurationError) as context:
            config.require("widget.url")
        assert "north.widget.url" in str(context.value)
        assert "NORTH_WIDGET_URL" in str(context.value)

    def test_config_entries_cached_per_class(self, registry):
        assert WidgetConfig.config_entries() is WidgetConfig.config_entries()
        assert repr(WidgetConfig("east", registry)) == "WidgetConfig(prefix='east')"


class TestConfigEntries:

    @pytest.fixture
    def entries(self):
        return ConfigEntries(WidgetConfig, WidgetConfig.ENTRIES)

    def test_declared_keys_are_unprefixed(self, entries):
        assert len(entries.keys()) == 3
        assert entries.keys("east") == []

    def test_register_adds_prefixed_variants(self, entries):
        entries.register("east")

        assert len(entries.keys("east")) == 3
        assert entries.entries()[ConfigKey(WidgetConfig, "widget.url", "east")] == KeySource()
        assert entries.entries()[ConfigKey(WidgetConfig, "widget.timeout", "east")] == literal("30")

    def test_register_without_prefix_is_noop(self, entries):
        entries.register(None)
        assert len(entries.entries()) == 3

    def test_find(self, entries):
        entries.register("east")

        assert entries.find("east", "widget.url") == ConfigKey(WidgetConfig, "widget.url", "east")
        assert entries.find(None, "widget.url") == ConfigKey.of(WidgetConfig, "widget.url")
        assert entries.find("west", "widget.url") is None
        assert entries.find(None, "widget.missing") is None
