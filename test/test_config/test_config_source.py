"""
Tests for the configuration source variants.
"""

import unittest
from unittest.mock import Mock

from forage.config.core import (
    DefaultSource, EnvironmentSource, FileSource, KeySource, LiteralSource, PropertySource,
    from_env, from_file, from_key, from_property, literal
)
from forage.core.enums import Tier


class TestSourceAliases(unittest.TestCase):
    """
    Each source only names a lookup alias for its own tier.
    """

    def test_each_source_aliases_only_its_tier(self):
        self.assertEqual(from_env("DB_URL").alias(Tier.ENVIRONMENT), "DB_URL")
        self.assertIsNone(from_env("DB_URL").alias(Tier.PROPERTY))
        self.assertEqual(from_property("db.url").alias(Tier.PROPERTY), "db.url")
        self.assertIsNone(from_property("db.url").alias(Tier.FILE))
        self.assertEqual(from_file("db.url").alias(Tier.FILE), "db.url")
        self.assertIsNone(from_file("db.url").alias(Tier.ENVIRONMENT))

    def test_key_source_has_no_alias_nor_default(self):
        source = from_key()
        for tier in Tier:
            self.assertIsNone(source.alias(tier))
        self.assertIsNone(source.default_value())

    def test_builders_return_variants(self):
        self.assertIsInstance(from_key(), KeySource)
        self.assertIsInstance(from_env("X"), EnvironmentSource)
        self.assertIsInstance(from_property("x"), PropertySource)
        self.assertIsInstance(from_file("x"), FileSource)
        self.assertIsInstance(literal("x"), LiteralSource)


class TestSourceDefaults(unittest.TestCase):

    def test_literal_is_its_own_default(self):
        self.assertEqual(literal("42").default_value(), "42")

    def test_default_keeps_inner_alias(self):
        source = from_env("DB_URL").with_default("jdbc:h2:mem")

        self.assertIsInstance(source, DefaultSource)
        self.assertEqual(source.alias(Tier.ENVIRONMENT), "DB_URL")
        self.assertEqual(source.default_value(), "jdbc:h2:mem")

    def test_supplier_called_on_every_resolution(self):
        supplier = Mock(side_effect=["first", "second"])
        source = from_key().with_default(supplier)

        self.assertEqual(source.default_value(), "first")
        self.assertEqual(source.default_value(), "second")
        self.assertEqual(supplier.call_count, 2)

    def test_supplier_returning_none_falls_back_to_inner(self):
        source = literal("inner").with_default(lambda: None)
        self.assertEqual(source.default_value(), "inner")

    def test_non_string_defaults_are_rendered(self):
        self.assertEqual(from_key().with_default(lambda: 5).default_value(), "5")


class TestSourceValueSemantics(unittest.TestCase):

    def test_equal_descriptions_are_equal(self):
        self.assertEqual(from_env("X"), from_env("X"))
        self.assertEqual(from_env("X").with_default("d"), from_env("X").with_default("d"))
        self.assertNotEqual(from_env("X"), from_property("X"))

    def test_without_alias(self):
        self.assertEqual(from_env("X").without_alias(), from_key())
        self.assertEqual(literal("v").without_alias(), literal("v"))
        self.assertEqual(from_env("X").with_default("d").without_alias(), from_key().with_default("d"))


if __name__ == "__main__":
    unittest.main()
