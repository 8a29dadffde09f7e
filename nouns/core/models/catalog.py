"""
Category Catalog.

A category is one business domain ("finance", "form", "meeting", ...)
holding an ordered set of nouns and their grouping into sub-categories.
It is the unit of one catalog file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from nouns.core.models.noun import Noun

CATEGORY_KEY_PATTERN = re.compile(r"^[a-z][a-z0-9]*$")


@dataclass
class CategoryCatalog:
    """Nouns of a single category.

    Attributes:
        key: Single-word category key (e.g., "finance")
        title: Human-readable title
        description: Category description
        collection: Collection name the category is also exported as
            (e.g., "FinanceEntities")
        groups: Sub-category name to ordered noun names
        entities: Noun name to noun, in declaration order
        source: File the catalog was loaded from, if any
    """

    key: str
    title: str = ""
    description: str = ""
    collection: str = ""
    groups: dict[str, list[str]] = field(default_factory=dict)
    entities: dict[str, Noun] = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self):
        if not self.title:
            self.title = self.key.replace("_", " ").title()
        if not self.collection:
            self.collection = f"{self.key[:1].upper()}{self.key[1:]}Entities"
        for noun in self.entities.values():
            noun.category = self.key

    def __iter__(self) -> Iterator[Noun]:
        return iter(self.entities.values())

    def __len__(self) -> int:
        return len(self.entities)

    def __contains__(self, name: object) -> bool:
        return name in self.entities

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "CategoryCatalog":
        """Create a catalog from its file form.

        Raises:
            ValueError: If the category key is missing or malformed
        """
        key = data.get("category")
        if not key or not isinstance(key, str):
            raise ValueError("catalog is missing a 'category' key")
        if not CATEGORY_KEY_PATTERN.match(key):
            raise ValueError(f"category key must be a single lower-case word: {key!r}")

        raw_entities = data.get("entities") or {}
        if not isinstance(raw_entities, Mapping):
            raise ValueError(f"'entities' of category '{key}' must map noun names to definitions")
        raw_groups = data.get("groups") or {}
        if not isinstance(raw_groups, Mapping):
            raise ValueError(f"'groups' of category '{key}' must map group names to noun lists")

        entities = {
            name: Noun.from_dict(name, definition or {}, strict=strict)
            for name, definition in raw_entities.items()
        }
        groups = {}
        for group, names in raw_groups.items():
            if names is not None and not isinstance(names, list):
                raise ValueError(f"group '{group}' of category '{key}' must be a list of noun names")
            groups[str(group)] = list(names or [])

        return cls(
            key=key,
            title=data.get("title", ""),
            description=data.get("description", ""),
            collection=data.get("collection", ""),
            groups=groups,
            entities=entities,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the file form."""
        return {
            "category": self.key,
            "title": self.title,
            "collection": self.collection,
            "description": self.description,
            "groups": {g: list(names) for g, names in self.groups.items()},
            "entities": {name: noun.to_dict() for name, noun in self.entities.items()},
        }

    def get(self, name: str) -> Noun | None:
        """Get a noun by type name."""
        return self.entities.get(name)

    def names(self) -> list[str]:
        """Noun names in declaration order."""
        return list(self.entities.keys())

    def group_of(self, name: str) -> str | None:
        """Get the first group listing a noun."""
        for group, names in self.groups.items():
            if name in names:
                return group
        return None

    def add(self, noun: Noun) -> None:
        """Add or replace a noun."""
        noun.category = self.key
        self.entities[noun.name] = noun
