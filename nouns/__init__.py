"""Noun catalog package.

Declarative definitions of business-domain entity types grouped by
category, with a registry for lookups and exporters for documentation
and schemas.

Usage:
    from nouns import load_default_registry

    registry = load_default_registry()
    registry.get("finance.Invoice").properties
"""

__version__ = "0.1.0"

from nouns.catalog import (
    CatalogLoader,
    NounRegistry,
    create_registry,
    load_default_registry,
)
from nouns.core.exceptions import (
    AmbiguousNounError,
    CatalogError,
    CatalogLoadError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    NounNotFoundError,
)
from nouns.core.models import (
    CategoryCatalog,
    Noun,
    NounProperty,
    NounRelationship,
)

__all__ = [
    "__version__",
    "CatalogLoader",
    "NounRegistry",
    "create_registry",
    "load_default_registry",
    "AmbiguousNounError",
    "CatalogError",
    "CatalogLoadError",
    "CategoryNotFoundError",
    "DuplicateCategoryError",
    "NounNotFoundError",
    "CategoryCatalog",
    "Noun",
    "NounProperty",
    "NounRelationship",
]
