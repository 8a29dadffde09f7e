"""Catalog Loader Tests.

Tests for reading and writing catalog files.
"""

import json
from pathlib import Path

import pytest
import yaml

from nouns.catalog.loader import (
    CatalogLoader,
    create_registry,
    load_default_registry,
    save_catalog,
)
from nouns.catalog.registry import NounRegistry
from nouns.core.exceptions import CatalogLoadError, DuplicateCategoryError


def write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


LEGAL = {
    "category": "legal",
    "description": "Legal documents",
    "entities": {
        "Contract": {
            "description": "An agreement",
            "properties": {"signedAt": {"type": "datetime", "optional": True}},
            "relationships": {"parties": {"type": "Party[]", "backref": "contracts"}},
            "actions": ["sign"],
            "events": ["signed"],
        },
        "Party": {"description": "A contracting party"},
    },
}


class TestLoadFile:
    def test_yaml(self, tmp_path):
        registry = NounRegistry()
        catalog = CatalogLoader(registry).load_file(write_yaml(tmp_path / "legal.yaml", LEGAL))

        assert catalog.key == "legal"
        assert catalog.source == str(tmp_path / "legal.yaml")
        assert registry.categories() == ["legal"]
        contract = registry.get("legal.Contract")
        assert contract.plural == "contracts"
        assert contract.relationships["parties"].target == "Party"

    def test_json(self, tmp_path):
        path = tmp_path / "legal.json"
        path.write_text(json.dumps(LEGAL), encoding="utf-8")

        registry = NounRegistry()
        CatalogLoader(registry).load_file(path)
        assert registry.get("Party").category == "legal"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError) as exc_info:
            CatalogLoader(NounRegistry()).load_file(tmp_path / "nope.yaml")
        assert exc_info.value.path == tmp_path / "nope.yaml"

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "legal.txt"
        path.write_text("category: legal", encoding="utf-8")
        with pytest.raises(CatalogLoadError, match="unsupported"):
            CatalogLoader(NounRegistry()).load_file(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("category: [legal\nentities: {", encoding="utf-8")
        with pytest.raises(CatalogLoadError) as exc_info:
            CatalogLoader(NounRegistry()).load_file(path)
        assert exc_info.value.path == path
        assert str(path) in str(exc_info.value)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = write_yaml(tmp_path / "list.yaml", ["legal"])
        with pytest.raises(CatalogLoadError, match="mapping"):
            CatalogLoader(NounRegistry()).load_file(path)

    def test_invalid_noun_wrapped(self, tmp_path):
        data = {"category": "legal", "entities": {"Contract": {"properties": {"x": {"kind": "string"}}}}}
        with pytest.raises(CatalogLoadError):
            CatalogLoader(NounRegistry()).load_file(write_yaml(tmp_path / "legal.yaml", data))

    @pytest.mark.parametrize("data, message", [
        ({"category": "legal", "entities": ["Contract"]}, "entities"),
        ({"category": "legal", "groups": ["main"]}, "groups"),
        ({"category": "legal", "entities": {"Contract": 5}}, "Contract"),
        ({"category": "legal", "entities": {"Contract": {"metadata": ["x"]}}}, "metadata"),
        ({"category": "legal", "groups": {"main": "Contract"}, "entities": {"Contract": {}}}, "main"),
    ])
    def test_malformed_shapes_wrapped(self, tmp_path, data, message):
        path = write_yaml(tmp_path / "legal.yaml", data)
        with pytest.raises(CatalogLoadError, match=message) as exc_info:
            CatalogLoader(NounRegistry()).load_file(path)
        assert exc_info.value.path == path

    def test_missing_category_wrapped(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="category"):
            CatalogLoader(NounRegistry()).load_file(write_yaml(tmp_path / "x.yaml", {"entities": {}}))

    def test_strict_rejects_unknown_keys(self, tmp_path):
        data = {"category": "legal", "entities": {"Contract": {"icon": "scroll"}}}
        path = write_yaml(tmp_path / "legal.yaml", data)

        with pytest.raises(CatalogLoadError, match="icon"):
            CatalogLoader(NounRegistry(), strict=True).load_file(path)

        registry = NounRegistry()
        CatalogLoader(registry).load_file(path)
        assert registry.get("legal.Contract").metadata == {"icon": "scroll"}

    def test_duplicate_category(self, tmp_path):
        path = write_yaml(tmp_path / "legal.yaml", LEGAL)
        loader = CatalogLoader(NounRegistry())
        loader.load_file(path)
        with pytest.raises(DuplicateCategoryError):
            loader.load_file(path)

    def test_replace(self, tmp_path):
        path = write_yaml(tmp_path / "legal.yaml", LEGAL)
        registry = NounRegistry()
        loader = CatalogLoader(registry, replace=True)
        loader.load_file(path)
        loader.load_file(path)
        assert len(registry) == 2


class TestLoadDirectory:
    def test_sorted_and_filtered(self, tmp_path):
        write_yaml(tmp_path / "b.yaml", {"category": "beta", "entities": {"B": {}}})
        (tmp_path / "a.json").write_text(json.dumps({"category": "alpha", "entities": {"A": {}}}), encoding="utf-8")
        (tmp_path / "README.md").write_text("# notes", encoding="utf-8")

        registry = NounRegistry()
        catalogs = CatalogLoader(registry).load_directory(tmp_path)

        assert [c.key for c in catalogs] == ["alpha", "beta"]
        assert registry.categories() == ["alpha", "beta"]

    def test_missing_directory(self, tmp_path):
        assert CatalogLoader(NounRegistry()).load_directory(tmp_path / "missing") == []


class TestSaveCatalog:
    @pytest.mark.parametrize("format, suffix", [("yaml", ".yaml"), ("json", ".json")])
    def test_save_and_reload(self, tmp_path, format, suffix):
        registry = NounRegistry()
        catalog = CatalogLoader(registry).load_file(write_yaml(tmp_path / "legal.yaml", LEGAL))

        out = save_catalog(catalog, tmp_path / "out" / f"legal{suffix}", format=format)
        assert out.exists()

        reloaded = CatalogLoader(NounRegistry()).load_file(out)
        assert reloaded.to_dict() == catalog.to_dict()

    def test_unknown_format(self, tmp_path):
        catalog = CatalogLoader(NounRegistry()).load_file(write_yaml(tmp_path / "legal.yaml", LEGAL))
        with pytest.raises(ValueError):
            save_catalog(catalog, tmp_path / "legal.toml", format="toml")


class TestCreateRegistry:
    def test_extra_dirs_only(self, tmp_path):
        write_yaml(tmp_path / "legal.yaml", LEGAL)
        registry = create_registry(extra_dirs=[tmp_path], include_defaults=False)
        assert registry.categories() == ["legal"]

    def test_extra_dir_replaces_default_category(self, tmp_path):
        write_yaml(tmp_path / "finance.yaml", {"category": "finance", "entities": {"Ledger": {}}})
        registry = create_registry(extra_dirs=[tmp_path])

        assert len(registry.categories()) == 31
        assert registry.category("finance").names() == ["Ledger"]

    def test_default_registry_is_cached(self):
        assert load_default_registry() is load_default_registry()
