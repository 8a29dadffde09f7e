"""
Core data models: nouns, their fields, and category catalogs.
"""

from nouns.core.models.noun import (
    Cardinality,
    Noun,
    NounProperty,
    NounRelationship,
    PrimitiveType,
    Verb,
)
from nouns.core.models.catalog import CategoryCatalog

__all__ = [
    "Cardinality",
    "CategoryCatalog",
    "Noun",
    "NounProperty",
    "NounRelationship",
    "PrimitiveType",
    "Verb",
]
