"""Noun Registry Tests.

Tests for lookups across the shipped catalogs.
"""

import unittest

import pytest

from nouns.catalog.registry import ENTITY_CATEGORIES, LEGACY_ALIASES, NounRegistry
from nouns.core.exceptions import (
    AmbiguousNounError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    NounNotFoundError,
)
from nouns.core.models import CategoryCatalog


class RegistryLookupTest(unittest.TestCase):
    """Test lookups against the shipped catalogs."""

    @classmethod
    def setUpClass(cls) -> None:
        cls.registry = NounRegistry()
        cls.registry.load_defaults()

    def test_categories_in_canonical_order(self) -> None:
        self.assertEqual(self.registry.categories(), list(ENTITY_CATEGORIES))

    def test_qualified_get(self) -> None:
        invoice = self.registry.get("finance.Invoice")
        self.assertEqual(invoice.singular, "invoice")
        self.assertEqual(invoice.plural, "invoices")
        self.assertEqual(invoice.category, "finance")

    def test_bare_get(self) -> None:
        self.assertEqual(self.registry.get("WikiPage").ref, "knowledge.WikiPage")

    def test_ambiguous_bare_name(self) -> None:
        with self.assertRaises(AmbiguousNounError) as ctx:
            self.registry.get("Customer")
        self.assertEqual(set(ctx.exception.candidates), {"finance.Customer", "commerce.Customer"})

    def test_unknown_noun(self) -> None:
        with self.assertRaises(NounNotFoundError):
            self.registry.get("finance.Nope")
        with self.assertRaises(NounNotFoundError):
            self.registry.get("Nope")

    def test_unknown_category(self) -> None:
        with self.assertRaises(CategoryNotFoundError):
            self.registry.get("nope.Invoice")

    def test_not_found_errors_are_key_errors(self) -> None:
        with self.assertRaises(KeyError):
            self.registry.category("nope")

    def test_contains(self) -> None:
        self.assertIn("finance.Invoice", self.registry)
        self.assertIn("Customer", self.registry)
        self.assertNotIn("finance.Nope", self.registry)
        self.assertNotIn(42, self.registry)

    def test_category_by_collection_name(self) -> None:
        self.assertEqual(self.registry.category("FinanceEntities").key, "finance")
        self.assertEqual(self.registry.category("CRMEntities").key, "sales")
        self.assertEqual(self.registry.category("DevelopmentEntities").key, "code")
        self.assertEqual(self.registry.category("FormsEntities").key, "form")

    def test_category_case_insensitive_key(self) -> None:
        self.assertEqual(self.registry.category("Finance").key, "finance")

    def test_legacy_aliases_resolve(self) -> None:
        for alias, key in LEGACY_ALIASES.items():
            with self.subTest(alias=alias):
                self.assertEqual(self.registry.category(alias).key, key)

    def test_find(self) -> None:
        refs = {n.ref for n in self.registry.find("invoices")}
        self.assertEqual(refs, {"finance.Invoice"})
        self.assertEqual(len(self.registry.find("customer")), 2)

    def test_search(self) -> None:
        refs = {n.ref for n in self.registry.search("wiki")}
        self.assertIn("knowledge.WikiPage", refs)
        self.assertIn("knowledge.WikiSpace", refs)

    def test_resolve_prefers_category(self) -> None:
        self.assertEqual(self.registry.resolve("Customer", prefer="commerce").ref, "commerce.Customer")
        self.assertEqual(self.registry.resolve("Customer", prefer="finance").ref, "finance.Customer")
        self.assertIsNone(self.registry.resolve("User"))

    def test_stats(self) -> None:
        stats = self.registry.stats()
        self.assertEqual(stats["categories"], 31)
        self.assertEqual(stats["nouns"], 281)
        self.assertEqual(stats["relationships"], 872)
        self.assertEqual(len(self.registry), 281)

    def test_iterate(self) -> None:
        pairs = list(self.registry.iterate())
        self.assertEqual(len(pairs), 281)
        self.assertEqual(pairs[0][0], "message")

    def test_to_dict(self) -> None:
        data = self.registry.to_dict()
        self.assertEqual(list(data), list(ENTITY_CATEGORIES))
        self.assertEqual(data["finance"]["Invoice"]["plural"], "invoices")


class RegistryMutationTest(unittest.TestCase):
    """Test registering and removing catalogs."""

    def setUp(self) -> None:
        self.registry = NounRegistry()
        self.catalog = CategoryCatalog.from_dict({"category": "legal", "entities": {"Contract": {}}})

    def test_register(self) -> None:
        self.registry.register(self.catalog)
        self.assertEqual(self.registry.get("Contract").ref, "legal.Contract")

    def test_duplicate_rejected(self) -> None:
        self.registry.register(self.catalog)
        with self.assertRaises(DuplicateCategoryError):
            self.registry.register(CategoryCatalog.from_dict({"category": "legal"}))

    def test_replace(self) -> None:
        self.registry.register(self.catalog)
        replacement = CategoryCatalog.from_dict({"category": "legal", "entities": {"Clause": {}}})
        self.registry.register(replacement, replace=True)
        self.assertEqual(self.registry.get("Clause").ref, "legal.Clause")
        self.assertNotIn("Contract", self.registry)

    def test_unregister(self) -> None:
        self.registry.register(self.catalog)
        removed = self.registry.unregister("legal")
        self.assertIs(removed, self.catalog)
        self.assertEqual(self.registry.categories(), [])
        self.assertNotIn("Contract", self.registry)

    def test_clear(self) -> None:
        self.registry.register(self.catalog)
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)


def test_alias_targets_are_shipped_categories():
    assert set(LEGACY_ALIASES.values()) <= set(ENTITY_CATEGORIES)


def test_unknown_category_message():
    with pytest.raises(CategoryNotFoundError, match="Unknown category: nope"):
        NounRegistry().category("nope")
