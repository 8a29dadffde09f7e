"""Shared fixtures for the noun catalog tests."""

from pathlib import Path

import pytest
import yaml

from nouns.catalog.loader import CatalogLoader, create_registry
from nouns.catalog.registry import NounRegistry


BLOG_CATALOG = {
    "category": "blog",
    "title": "Blog",
    "description": "Publishing nouns",
    "groups": {"content": ["Post", "Tag"], "people": ["Author"]},
    "entities": {
        "Author": {
            "singular": "author",
            "plural": "authors",
            "description": "A person who writes posts",
            "properties": {
                "name": {"type": "string", "description": "Display name"},
                "bio": {"type": "markdown", "optional": True},
            },
            "relationships": {
                "posts": {"type": "Post[]", "backref": "author", "description": "Posts written"},
            },
            "actions": ["create", "update", "delete"],
            "events": ["created", "updated", "deleted"],
        },
        "Post": {
            "singular": "post",
            "plural": "posts",
            "description": "A published article",
            "properties": {
                "title": {"type": "string", "description": "Headline"},
                "body": {"type": "markdown", "optional": True},
                "publishedAt": {"type": "datetime", "optional": True},
                "slugs": {"type": "string", "array": True, "optional": True},
                "byline": {"type": "Author", "optional": True},
            },
            "relationships": {
                "author": {"type": "Author", "backref": "posts", "required": True},
                "tags": {"type": "Tag[]", "description": "Tags on the post"},
                "comments": {"type": "Comment[]", "backref": "post"},
            },
            "actions": ["create", "publish", "addTag"],
            "events": ["created", "published", "tagAdded"],
        },
        "Tag": {
            "singular": "tag",
            "plural": "tags",
            "description": "A label",
            "properties": {"name": {"type": "string"}},
        },
    },
}


@pytest.fixture
def blog_data() -> dict:
    """A deep copy of the blog catalog in file form."""
    return yaml.safe_load(yaml.safe_dump(BLOG_CATALOG))


@pytest.fixture
def blog_registry(tmp_path: Path, blog_data: dict) -> NounRegistry:
    """Registry holding only the blog catalog."""
    path = tmp_path / "blog.yaml"
    path.write_text(yaml.safe_dump(blog_data, sort_keys=False), encoding="utf-8")

    registry = NounRegistry()
    CatalogLoader(registry).load_file(path)
    return registry


@pytest.fixture(scope="session")
def default_registry() -> NounRegistry:
    """Registry of the shipped catalogs (treat as read-only)."""
    return create_registry()
