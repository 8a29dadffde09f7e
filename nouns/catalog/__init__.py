"""
Noun catalog: shipped category data, the registry and its loader.
"""

from nouns.catalog.registry import (
    DEFAULT_CATALOG_DIR,
    ENTITY_CATEGORIES,
    LEGACY_ALIASES,
    NounRegistry,
)
from nouns.catalog.loader import (
    CatalogLoader,
    create_registry,
    load_default_registry,
    save_catalog,
)

__all__ = [
    "DEFAULT_CATALOG_DIR",
    "ENTITY_CATEGORIES",
    "LEGACY_ALIASES",
    "NounRegistry",
    "CatalogLoader",
    "create_registry",
    "load_default_registry",
    "save_catalog",
]
