"""
Export formats for the noun catalog: JSON Schema, flat records and Markdown.
"""

from nouns.schema.json_schema import (
    PRIMITIVE_SCHEMAS,
    catalog_json_schema,
    to_json_schema,
)
from nouns.schema.markdown import render_markdown, render_noun_markdown
from nouns.schema.records import edge_records, noun_record

__all__ = [
    "PRIMITIVE_SCHEMAS",
    "catalog_json_schema",
    "to_json_schema",
    "render_markdown",
    "render_noun_markdown",
    "edge_records",
    "noun_record",
]
