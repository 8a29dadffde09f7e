"""
JSON Schema export.

Converts nouns into JSON Schema (draft 2020-12) object schemas. Related
nouns are referenced by id, so relationships become string (or string
array) fields annotated with an `x-relationship` block.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable

from nouns.catalog.registry import NounRegistry
from nouns.core.models import Noun, NounProperty, NounRelationship

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

PRIMITIVE_SCHEMAS: dict[str, dict[str, Any]] = {
    "string": {"type": "string"},
    "markdown": {"type": "string", "contentMediaType": "text/markdown"},
    "url": {"type": "string", "format": "uri"},
    "date": {"type": "string", "format": "date"},
    "datetime": {"type": "string", "format": "date-time"},
    "number": {"type": "number"},
    "boolean": {"type": "boolean"},
    "json": {"type": "object"},
}

# Maps a noun type name to its key under $defs, or None when unknown.
DefResolver = Callable[[str], "str | None"]


def _no_defs(type_name: str) -> str | None:
    return None


def _def_keys(nouns: list[Noun]) -> dict[str, str]:
    """Key each noun by name, or by "category.Name" when the name repeats."""
    counts = Counter(noun.name for noun in nouns)
    return {noun.ref: noun.name if counts[noun.name] == 1 else noun.ref for noun in nouns}


def _registry_resolver(registry: NounRegistry, keys: dict[str, str], prefer: str | None) -> DefResolver:
    def resolve(type_name: str) -> str | None:
        target = registry.resolve(type_name, prefer=prefer)
        return keys.get(target.ref) if target is not None else None
    return resolve


def _property_closure(noun: Noun, registry: NounRegistry) -> list[Noun]:
    """Nouns reachable from a noun through property types, in discovery order."""
    found: dict[str, Noun] = {}
    pending = [noun]
    while pending:
        current = pending.pop(0)
        for prop in current.properties.values():
            type_name = prop.type.removesuffix("[]")
            if type_name in PRIMITIVE_SCHEMAS:
                continue
            target = registry.resolve(type_name, prefer=current.category)
            if target is not None and target.ref not in found:
                found[target.ref] = target
                pending.append(target)
    return list(found.values())


def property_schema(prop: NounProperty, resolve: DefResolver = _no_defs) -> dict[str, Any]:
    """JSON Schema for a single property."""
    type_name = prop.type.removesuffix("[]")

    if type_name in PRIMITIVE_SCHEMAS:
        schema = dict(PRIMITIVE_SCHEMAS[type_name])
    else:
        key = resolve(type_name)
        schema = {"$ref": f"#/$defs/{key}"} if key else {}

    if prop.array or prop.type.endswith("[]"):
        schema = {"type": "array", "items": schema}

    if prop.description:
        schema["description"] = prop.description
    if "default" in prop.model_fields_set:
        schema["default"] = prop.default
    if prop.examples:
        schema["examples"] = list(prop.examples)
    return schema


def relationship_schema(rel: NounRelationship) -> dict[str, Any]:
    """JSON Schema for a relationship field (ids of the related nouns)."""
    if rel.is_many:
        schema: dict[str, Any] = {"type": "array", "items": {"type": "string"}}
    else:
        schema = {"type": "string"}

    if rel.description:
        schema["description"] = rel.description

    meta: dict[str, Any] = {"target": rel.target, "cardinality": rel.cardinality.value}
    if rel.backref:
        meta["backref"] = rel.backref
    schema["x-relationship"] = meta
    return schema


def to_json_schema(
    noun: Noun,
    resolve: DefResolver | None = None,
    standalone: bool = True,
    registry: NounRegistry | None = None,
) -> dict[str, Any]:
    """Convert a noun to a JSON Schema object.

    Args:
        noun: Noun to convert
        resolve: Maps non-primitive property types to $defs keys. Without
            one, such properties become {} unless `registry` is given.
        standalone: Include the $schema dialect keyword
        registry: Resolve noun-typed properties against this registry and
            embed the referenced nouns under $defs (standalone only)

    Returns:
        JSON Schema dict
    """
    defs: dict[str, Any] = {}
    if resolve is None and registry is not None and standalone:
        related = _property_closure(noun, registry)
        keys = _def_keys(related)
        resolve = _registry_resolver(registry, keys, noun.category)
        for other in related:
            defs[keys[other.ref]] = to_json_schema(
                other,
                resolve=_registry_resolver(registry, keys, other.category),
                standalone=False,
            )
    resolve = resolve or _no_defs

    schema: dict[str, Any] = {}
    if standalone:
        schema["$schema"] = SCHEMA_DIALECT
    schema["title"] = noun.name
    if noun.description:
        schema["description"] = noun.description
    schema["type"] = "object"

    properties: dict[str, Any] = {}
    required: list[str] = []

    for name, prop in noun.properties.items():
        properties[name] = property_schema(prop, resolve)
        if not prop.optional:
            required.append(name)

    for name, rel in noun.relationships.items():
        properties[name] = relationship_schema(rel)
        if rel.required:
            required.append(name)

    schema["properties"] = properties
    if required:
        schema["required"] = required
    if defs:
        schema["$defs"] = defs
    return schema


def catalog_json_schema(registry: NounRegistry, category: str | None = None) -> dict[str, Any]:
    """Bundle nouns into one schema document under $defs.

    Nouns are keyed by name. When the same name is defined in several
    bundled categories, every copy is keyed "category.Name" instead.
    Property types naming a noun outside the bundle become {}.
    """
    if category is not None:
        catalog = registry.category(category)
        nouns = list(catalog)
        title = catalog.title
        description = catalog.description
    else:
        nouns = [noun for _, noun in registry.iterate()]
        title = "Noun catalog"
        description = f"{len(registry.categories())} categories"

    keys = _def_keys(nouns)
    defs = {
        keys[noun.ref]: to_json_schema(
            noun,
            resolve=_registry_resolver(registry, keys, noun.category),
            standalone=False,
        )
        for noun in nouns
    }

    return {
        "$schema": SCHEMA_DIALECT,
        "title": title,
        "description": description,
        "$defs": defs,
    }
