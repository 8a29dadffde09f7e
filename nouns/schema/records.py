"""
Flat records describing the type system itself.

A noun record stores one noun's naming and definition; edge records store
one row per relationship. Both are plain dicts suitable for writing to any
document store.
"""

from __future__ import annotations

from typing import Any

from nouns.core.linguistic import infer_noun, type_meta
from nouns.core.models import Noun


def noun_record(noun: Noun | str) -> dict[str, Any]:
    """Create a noun record.

    Accepts a Noun, or a bare type name whose naming and default
    actions/events are inferred.

    Example:
        noun_record("BlogPost")["slug"]  # "blog-post"
    """
    if isinstance(noun, str):
        inferred = infer_noun(noun)
        meta = type_meta(noun)
        return {
            "name": noun,
            "singular": inferred.singular,
            "plural": inferred.plural,
            "slug": meta.slug,
            "slug_plural": meta.slug_plural,
            "description": None,
            "properties": {},
            "relationships": {},
            "actions": list(inferred.actions),
            "events": list(inferred.events),
            "metadata": {},
        }

    meta = type_meta(noun.name)
    return {
        "name": noun.name,
        "category": noun.category,
        "singular": noun.singular,
        "plural": noun.plural,
        "slug": meta.slug,
        "slug_plural": meta.slug_plural,
        "description": noun.description or None,
        "properties": {k: p.to_dict() for k, p in noun.properties.items()},
        "relationships": {k: r.to_dict() for k, r in noun.relationships.items()},
        "actions": noun.action_names(),
        "events": list(noun.events),
        "metadata": dict(noun.metadata),
    }


def edge_records(noun: Noun) -> list[dict[str, Any]]:
    """Create one edge record per relationship of a noun."""
    return [
        {
            "from": noun.name,
            "name": field_name,
            "to": rel.target,
            "backref": rel.backref,
            "cardinality": rel.cardinality.value,
            "direction": "forward",
            "match_mode": "exact",
            "required": rel.required,
            "description": rel.description,
        }
        for field_name, rel in noun.relationships.items()
    ]
