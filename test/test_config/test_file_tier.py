"""
Tests for the per-component YAML properties files.
"""

import threading
from unittest import mock

import yaml

from forage.config.core import ConfigKey, PropertiesFileLoader
from forage.config.core.store import flatten_mapping, render_value


class TestFlatten:

    def test_nested_mapping_becomes_dotted_names(self):
        content = {"orders": {"jdbc": {"url": "x", "pool": {"max_size": 5}}}}

        assert dict(flatten_mapping(content)) == {
            "orders.jdbc.url": "x",
            "orders.jdbc.pool.max.size": "5",
        }

    def test_scalars_render_as_raw_strings(self):
        assert render_value(True) == "true"
        assert render_value(False) == "false"
        assert render_value(3) == "3"
        assert render_value(["a", "b"]) == "a,b"
        assert render_value(None) is None

    def test_null_values_are_skipped(self):
        assert dict(flatten_mapping({"a": None, "b": "x"})) == {"b": "x"}


class TestFileTier:

    def test_value_read_from_component_file(self, registry, write_settings, sample_owner):
        write_settings("sample", {"pool": {"max": {"size": 20}}, "enabled": True})

        assert registry.resolve(ConfigKey.of(sample_owner, "pool.max.size")) == "20"
        assert registry.resolve(ConfigKey.of(sample_owner, "enabled")) == "true"

    def test_yml_suffix(self, registry, write_settings, sample_owner):
        write_settings("sample", {"name": "from-yml"}, suffix=".yml")
        assert registry.resolve(ConfigKey.of(sample_owner, "name")) == "from-yml"

    def test_missing_file_contributes_nothing(self, registry, sample_owner):
        assert registry.resolve(ConfigKey.of(sample_owner, "name")) is None
        assert registry.files.get("sample") == {}

    def test_malformed_file_is_treated_as_empty(self, registry, write_settings, sample_owner):
        write_settings("sample", "name: [unclosed\n")
        assert registry.resolve(ConfigKey.of(sample_owner, "name")) is None

    def test_file_without_mapping_is_treated_as_empty(self, registry, write_settings, sample_owner):
        write_settings("sample", "- one\n- two\n")
        assert registry.resolve(ConfigKey.of(sample_owner, "name")) is None

    def test_first_directory_on_search_path_wins(self, tmp_path):
        first, second = tmp_path / "first", tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (first / "sample.yaml").write_text("name: first\n")
        (second / "sample.yaml").write_text("name: second\n")

        loader = PropertiesFileLoader([first, second])

        assert loader.lookup("sample", "name") == "first"

    def test_file_is_read_once(self, registry, write_settings, sample_owner):
        path = write_settings("sample", {"name": "before"})
        key = ConfigKey.of(sample_owner, "name")
        assert registry.resolve(key) == "before"

        path.write_text("name: after\n")
        assert registry.resolve(key) == "before"

        registry.reset()
        assert registry.resolve(key) == "after"

    def test_concurrent_first_use_loads_once(self, registry, write_settings, sample_owner):
        write_settings("sample", {"name": "value"})
        key = ConfigKey.of(sample_owner, "name")
        barrier = threading.Barrier(10)
        results = []

        def resolve():
            barrier.wait()
            results.append(registry.resolve(key))

        with mock.patch.object(yaml, "safe_load", wraps=yaml.safe_load) as safe_load:
            threads = [threading.Thread(target=resolve) for _ in range(10)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert results == ["value"] * 10
        assert safe_load.call_count == 1
