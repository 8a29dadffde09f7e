"""
Noun Registry.

Central index of every loaded category catalog: the "all entities" view
of the noun catalog. Lookups accept qualified references
("finance.Invoice"), bare names when unambiguous ("WikiPage"), and the
collection names categories were historically exported under
("CRMEntities").
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from nouns.core.exceptions import (
    AmbiguousNounError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    NounNotFoundError,
)
from nouns.core.models import CategoryCatalog, Noun
from nouns.utils.logging import get_logger

logger = get_logger("catalog.registry")

DEFAULT_CATALOG_DIR = Path(__file__).parent / "data"

# Shipped categories in canonical order.
ENTITY_CATEGORIES: tuple[str, ...] = (
    "message",
    "productivity",
    "project",
    "code",
    "sales",
    "finance",
    "support",
    "media",
    "marketing",
    "knowledge",
    "commerce",
    "analytics",
    "storage",
    "meeting",
    "form",
    "signature",
    "document",
    "spreadsheet",
    "presentation",
    "infrastructure",
    "experiment",
    "advertising",
    "video",
    "identity",
    "notification",
    "hr",
    "recruiting",
    "design",
    "shipping",
    "automation",
    "ai",
)

# Older collection names that still resolve to a category.
LEGACY_ALIASES: dict[str, str] = {
    "MessageEntities": "message",
    "CommunicationEntities": "message",
    "ProjectEntities": "project",
    "ProjectManagementEntities": "project",
    "CodeEntities": "code",
    "DevelopmentEntities": "code",
    "SalesEntities": "sales",
    "CRMEntities": "sales",
    "CommerceEntities": "commerce",
    "EcommerceEntities": "commerce",
    "MeetingEntities": "meeting",
    "VideoConferencingEntities": "meeting",
    "FormEntities": "form",
    "FormsEntities": "form",
    "CloudEntities": "infrastructure",
    "InfrastructureEntities": "infrastructure",
    "ExperimentationEntities": "experiment",
    "StreamingEntities": "video",
}


class NounRegistry:
    """Registry of category catalogs.

    Usage:
        registry = NounRegistry()
        registry.load_defaults()

        invoice = registry.get("finance.Invoice")
        page = registry.get("WikiPage")
        for category, noun in registry.iterate():
            ...
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._catalogs: dict[str, CategoryCatalog] = {}
        self._by_name: dict[str, list[Noun]] = {}

    def __len__(self) -> int:
        return sum(len(c) for c in self._catalogs.values())

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, str):
            return False
        try:
            self.get(ref)
        except (NounNotFoundError, CategoryNotFoundError):
            return False
        except AmbiguousNounError:
            return True
        return True

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, catalog: CategoryCatalog, replace: bool = False) -> None:
        """Register a category catalog.

        Args:
            catalog: Catalog to register
            replace: Replace an existing catalog with the same key

        Raises:
            DuplicateCategoryError: If the key is taken and replace is False
        """
        if catalog.key in self._catalogs and not replace:
            raise DuplicateCategoryError(catalog.key)

        self._catalogs[catalog.key] = catalog
        self._reindex()
        logger.debug(f"Registered {len(catalog)} nouns", extra={"category": catalog.key})

    def unregister(self, key: str) -> CategoryCatalog:
        """Remove a category and return it."""
        catalog = self.category(key)
        del self._catalogs[catalog.key]
        self._reindex()
        return catalog

    def clear(self) -> None:
        """Remove all categories."""
        self._catalogs.clear()
        self._by_name.clear()

    def load_defaults(self) -> None:
        """Load the shipped catalogs in canonical order."""
        from nouns.catalog.loader import CatalogLoader

        loader = CatalogLoader(self)
        for key in ENTITY_CATEGORIES:
            loader.load_file(DEFAULT_CATALOG_DIR / f"{key}.yaml")
        logger.info(f"Loaded {len(ENTITY_CATEGORIES)} default categories ({len(self)} nouns)")

    def _reindex(self) -> None:
        self._by_name = {}
        for catalog in self._catalogs.values():
            for noun in catalog:
                self._by_name.setdefault(noun.name, []).append(noun)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def categories(self) -> list[str]:
        """Registered category keys in registration order."""
        return list(self._catalogs.keys())

    def catalogs(self) -> list[CategoryCatalog]:
        return list(self._catalogs.values())

    def category(self, key: str) -> CategoryCatalog:
        """Get a category by key, collection name or legacy alias.

        Raises:
            CategoryNotFoundError: If nothing matches
        """
        if key in self._catalogs:
            return self._catalogs[key]

        lowered = key.lower()
        if lowered in self._catalogs:
            return self._catalogs[lowered]

        for catalog in self._catalogs.values():
            if catalog.collection == key:
                return catalog

        alias = LEGACY_ALIASES.get(key)
        if alias and alias in self._catalogs:
            return self._catalogs[alias]

        raise CategoryNotFoundError(key)

    def get(self, ref: str) -> Noun:
        """Get a noun by 'category.Name' or by bare name.

        Raises:
            CategoryNotFoundError: If the category part is unknown
            NounNotFoundError: If no noun matches
            AmbiguousNounError: If a bare name exists in several categories
        """
        if "." in ref:
            key, name = ref.split(".", 1)
            noun = self.category(key).get(name)
            if noun is None:
                raise NounNotFoundError(ref)
            return noun

        matches = self._by_name.get(ref, [])
        if not matches:
            raise NounNotFoundError(ref)
        if len(matches) > 1:
            raise AmbiguousNounError(ref, [n.ref for n in matches])
        return matches[0]

    def resolve(self, name: str, prefer: str | None = None) -> Noun | None:
        """Resolve a relationship target name to a noun.

        Prefers a noun in the `prefer` category, then the first
        registered match. Returns None for undefined targets.
        """
        matches = self._by_name.get(name, [])
        if not matches:
            return None
        for noun in matches:
            if noun.category == prefer:
                return noun
        return matches[0]

    def find(self, name: str) -> list[Noun]:
        """Find nouns by type name, singular or plural (case-insensitive)."""
        wanted = name.lower()
        return [
            noun for _, noun in self.iterate()
            if wanted in (noun.name.lower(), noun.singular.lower(), noun.plural.lower())
        ]

    def search(self, text: str) -> list[Noun]:
        """Find nouns whose name or description contains the text."""
        wanted = text.lower()
        return [
            noun for _, noun in self.iterate()
            if wanted in noun.name.lower() or wanted in noun.description.lower()
        ]

    def iterate(self) -> Iterator[tuple[str, Noun]]:
        """Iterate over (category key, noun) pairs."""
        for key, catalog in self._catalogs.items():
            for noun in catalog:
                yield key, noun

    def defined_names(self) -> set[str]:
        return set(self._by_name.keys())

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def stats(self) -> dict[str, int]:
        """Count categories, nouns and their parts."""
        nouns = [noun for _, noun in self.iterate()]
        return {
            "categories": len(self._catalogs),
            "nouns": len(nouns),
            "properties": sum(len(n.properties) for n in nouns),
            "relationships": sum(len(n.relationships) for n in nouns),
            "actions": sum(len(n.actions) for n in nouns),
            "events": sum(len(n.events) for n in nouns),
        }

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Export as {category: {Name: noun}}."""
        return {
            key: {name: noun.to_dict() for name, noun in catalog.entities.items()}
            for key, catalog in self._catalogs.items()
        }
