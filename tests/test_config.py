"""Configuration Tests."""

import json
import os
import unittest
from pathlib import Path

import pytest

from nouns.app import config as config_module
from nouns.app.config import (
    NounsConfig,
    get_config,
    get_default_config_path,
    reload_config,
    set_config,
)


class NounsConfigTest(unittest.TestCase):
    """Test NounsConfig serialization and overrides."""

    def test_defaults(self) -> None:
        config = NounsConfig()
        self.assertEqual(config.catalog_dirs, [])
        self.assertTrue(config.include_defaults)
        self.assertFalse(config.strict)
        self.assertEqual(config.log_level, "WARNING")
        self.assertIsNone(config.log_dir)

    def test_from_dict(self) -> None:
        config = NounsConfig.from_dict({
            "catalog_dirs": ["extra/catalogs"],
            "strict": True,
            "log_level": "debug",
            "log_dir": "logs",
        })
        self.assertEqual(config.catalog_dirs, [Path("extra/catalogs")])
        self.assertTrue(config.strict)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.log_dir, Path("logs"))

    def test_from_dict_nulls_use_defaults(self) -> None:
        config = NounsConfig.from_dict({
            "catalog_dirs": None,
            "include_defaults": None,
            "strict": None,
            "log_level": None,
            "log_dir": None,
        })
        self.assertEqual(config.to_dict(), NounsConfig().to_dict())

    def test_from_dict_rejects_string_dirs(self) -> None:
        with self.assertRaises(ValueError):
            NounsConfig.from_dict({"catalog_dirs": "extra/catalogs"})

    def test_non_string_log_level(self) -> None:
        with self.assertRaises(ValueError):
            NounsConfig(log_level=10)

    def test_invalid_log_level(self) -> None:
        with self.assertRaises(ValueError):
            NounsConfig(log_level="LOUD")

    def test_to_dict(self) -> None:
        config = NounsConfig(catalog_dirs=[Path("a")], include_defaults=False)
        self.assertEqual(config.to_dict(), {
            "catalog_dirs": ["a"],
            "include_defaults": False,
            "strict": False,
            "log_level": "WARNING",
            "log_dir": None,
        })

    def test_apply_env(self) -> None:
        config = NounsConfig(catalog_dirs=[Path("a")])
        config.apply_env({
            "NOUNS_CATALOG_DIRS": os.pathsep.join(["a", "b"]),
            "NOUNS_LOG_LEVEL": "info",
        })
        self.assertEqual(config.catalog_dirs, [Path("a"), Path("b")])
        self.assertEqual(config.log_level, "INFO")

    def test_apply_env_rejects_bad_level(self) -> None:
        with self.assertRaises(ValueError):
            NounsConfig().apply_env({"NOUNS_LOG_LEVEL": "chatty"})


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "config.json"
    NounsConfig(catalog_dirs=[tmp_path / "cats"], strict=True).save(path)

    assert json.loads(path.read_text(encoding="utf-8"))["strict"] is True
    loaded = NounsConfig.load(path, use_env=False)
    assert loaded.catalog_dirs == [tmp_path / "cats"]
    assert loaded.strict is True


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="JSON object"):
        NounsConfig.load(path, use_env=False)


def test_load_missing_file_gives_defaults(tmp_path):
    config = NounsConfig.load(tmp_path / "missing.json", use_env=False)
    assert config.to_dict() == NounsConfig().to_dict()


def test_load_applies_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("NOUNS_LOG_LEVEL", "ERROR")
    assert NounsConfig.load(tmp_path / "missing.json").log_level == "ERROR"


def test_default_path_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("NOUNS_CONFIG", str(tmp_path / "custom.json"))
    assert get_default_config_path() == tmp_path / "custom.json"


@pytest.fixture
def restore_global_config():
    saved = config_module._global_config
    yield
    config_module._global_config = saved


def test_global_config(tmp_path, monkeypatch, restore_global_config):
    config = NounsConfig(strict=True)
    set_config(config)
    assert get_config() is config

    monkeypatch.delenv("NOUNS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NOUNS_CATALOG_DIRS", raising=False)
    path = NounsConfig(log_level="INFO").save(tmp_path / "config.json")
    reloaded = reload_config(path)
    assert reloaded.log_level == "INFO"
    assert get_config() is reloaded
