"""
Markdown documentation rendered from Jinja2 templates.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from nouns.catalog.registry import NounRegistry
from nouns.core.models import Noun
from nouns.utils.logging import get_logger

logger = get_logger("schema.markdown")

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env: Environment | None = None


def get_environment() -> Environment:
    """Get the shared template environment."""
    global _env
    if _env is None:
        _env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
    return _env


def render_markdown(registry: NounRegistry, category: str | None = None) -> str:
    """Render documentation for a whole registry or one category.

    Args:
        registry: Registry to document
        category: Category key or alias; all categories when None

    Returns:
        Markdown text
    """
    env = get_environment()

    if category is not None:
        catalog = registry.category(category)
        text = env.get_template("category.md.j2").render(catalog=catalog)
    else:
        text = env.get_template("catalog.md.j2").render(
            title="Noun Catalog",
            catalogs=registry.catalogs(),
            stats=registry.stats(),
        )

    logger.debug(f"Rendered markdown ({len(text)} chars)")
    return text


def render_noun_markdown(noun: Noun, group: str | None = None) -> str:
    """Render documentation for a single noun."""
    return get_environment().get_template("noun.md.j2").render(noun=noun, group=group)
