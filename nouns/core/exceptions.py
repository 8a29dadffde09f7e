"""
Exception types for catalog loading and lookup.
"""

from __future__ import annotations

from pathlib import Path


class CatalogError(Exception):
    """Base exception for all catalog errors."""
    pass


class CatalogLoadError(CatalogError):
    """A catalog file could not be read or does not describe valid nouns."""

    def __init__(self, message: str, path: str | Path | None = None):
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class CategoryNotFoundError(CatalogError, KeyError):
    """No category is registered under the requested key or alias."""

    def __init__(self, key: str):
        super().__init__(f"Unknown category: {key}")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class NounNotFoundError(CatalogError, KeyError):
    """No noun matches the requested reference."""

    def __init__(self, ref: str):
        super().__init__(f"Unknown noun: {ref}")
        self.ref = ref

    def __str__(self) -> str:
        return self.args[0]


class AmbiguousNounError(CatalogError):
    """A bare noun name matches nouns in more than one category."""

    def __init__(self, ref: str, candidates: list[str]):
        super().__init__(
            f"Noun '{ref}' is defined in several categories: {', '.join(candidates)}. "
            f"Qualify it as <category>.{ref}"
        )
        self.ref = ref
        self.candidates = candidates


class DuplicateCategoryError(CatalogError):
    """A category key is already registered."""

    def __init__(self, key: str):
        super().__init__(f"Category already registered: {key}")
        self.key = key
