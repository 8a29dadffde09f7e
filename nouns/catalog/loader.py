"""
Catalog Loader.

Loads category catalogs from YAML/JSON files into a NounRegistry and
writes them back out.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from nouns.catalog.registry import NounRegistry
from nouns.core.exceptions import CatalogLoadError
from nouns.core.models import CategoryCatalog
from nouns.utils.logging import get_logger, log_operation

logger = get_logger("catalog.loader")

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


class CatalogLoader:
    """Loads category catalogs from files.

    Usage:
        loader = CatalogLoader(registry)
        loader.load_file("catalogs/legal.yaml")
        loader.load_directory("catalogs/")
    """

    def __init__(self, registry: NounRegistry, strict: bool = False, replace: bool = False):
        """Initialize the loader.

        Args:
            registry: Registry to load catalogs into
            strict: Reject unknown noun keys instead of keeping them as metadata
            replace: Allow a file to replace an already registered category
        """
        self.registry = registry
        self.strict = strict
        self.replace = replace

    def load_file(self, file_path: str | Path) -> CategoryCatalog:
        """Load a catalog file and register it.

        Args:
            file_path: Path to a .yaml, .yml or .json catalog

        Returns:
            The loaded catalog

        Raises:
            CatalogLoadError: If the file is missing, unreadable or invalid
            DuplicateCategoryError: If the category is already registered
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise CatalogLoadError("catalog file not found", file_path)

        suffix = file_path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise CatalogLoadError(f"unsupported file format: {suffix}", file_path)

        try:
            if suffix == ".json":
                data = self._load_json(file_path)
            else:
                data = self._load_yaml(file_path)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise CatalogLoadError(f"could not parse: {e}", file_path) from e

        if not isinstance(data, dict):
            raise CatalogLoadError("top level must be a mapping", file_path)

        try:
            catalog = CategoryCatalog.from_dict(data, strict=self.strict)
        except (ValidationError, ValueError) as e:
            raise CatalogLoadError(str(e), file_path) from e

        catalog.source = str(file_path)
        self.registry.register(catalog, replace=self.replace)
        logger.debug("Loaded catalog", extra={"category": catalog.key, "path": file_path})

        return catalog

    def load_directory(self, dir_path: str | Path) -> list[CategoryCatalog]:
        """Load all catalog files in a directory, in file name order.

        Args:
            dir_path: Path to the directory

        Returns:
            List of loaded catalogs (empty if the directory does not exist)
        """
        dir_path = Path(dir_path)

        if not dir_path.is_dir():
            logger.warning("Catalog directory not found", extra={"path": dir_path})
            return []

        files = sorted(
            p for p in dir_path.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
        )
        catalogs = [self.load_file(p) for p in files]

        log_operation(logger, "Loaded catalog directory", path=dir_path, catalogs=len(catalogs))
        return catalogs

    def _load_json(self, file_path: Path) -> dict:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _load_yaml(self, file_path: Path) -> dict:
        with open(file_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)


def save_catalog(
    catalog: CategoryCatalog,
    file_path: str | Path,
    format: str = "yaml",
) -> Path:
    """Save a catalog to a file.

    Args:
        catalog: Catalog to save
        file_path: Destination path
        format: "yaml" or "json"

    Returns:
        The written path
    """
    if format not in ("yaml", "json"):
        raise ValueError(f"Unsupported format: {format}")

    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    data = catalog.to_dict()

    with open(file_path, "w", encoding="utf-8") as f:
        if format == "yaml":
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True, width=100)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)

    log_operation(logger, "Saved catalog", category=catalog.key, path=file_path, format=format)
    return file_path


# ============================================================================
# Convenience Functions
# ============================================================================


def create_registry(
    extra_dirs: Iterable[str | Path] = (),
    include_defaults: bool = True,
    strict: bool = False,
) -> NounRegistry:
    """Build a registry from the shipped catalogs plus extra directories.

    A catalog in an extra directory replaces a shipped category with the
    same key.

    Args:
        extra_dirs: Directories of additional catalog files
        include_defaults: Whether to load the shipped catalogs first
        strict: Reject unknown noun keys

    Returns:
        Populated registry
    """
    registry = NounRegistry()

    if include_defaults:
        registry.load_defaults()

    loader = CatalogLoader(registry, strict=strict, replace=True)
    for directory in extra_dirs:
        loader.load_directory(directory)

    return registry


_default_registry: NounRegistry | None = None


def load_default_registry() -> NounRegistry:
    """Get the process-wide registry of shipped catalogs."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_registry()
    return _default_registry
