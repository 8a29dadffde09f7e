"""
Noun Catalog Configuration.

Settings for which catalogs are loaded and how, read from a JSON file and
overridable from the environment.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nouns.utils.logging import LogLevel, setup_logging

ENV_CONFIG = "NOUNS_CONFIG"
ENV_CATALOG_DIRS = "NOUNS_CATALOG_DIRS"
ENV_LOG_LEVEL = "NOUNS_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# ============================================================================
# Default Paths
# ============================================================================


def get_default_config_path() -> Path:
    """Get the default configuration file location."""
    if env_path := os.environ.get(ENV_CONFIG):
        return Path(env_path)
    return Path.home() / ".nouns" / "config.json"


# ============================================================================
# Configuration
# ============================================================================


@dataclass
class NounsConfig:
    """Configuration for catalog loading.

    Attributes:
        catalog_dirs: Extra directories of catalog files, loaded after the
            shipped catalogs (and replacing categories with the same key)
        include_defaults: Whether the shipped catalogs are loaded
        strict: Reject unknown noun keys instead of keeping them as metadata
        log_level: Console log level
        log_dir: Directory for a log file; no file logging when None
    """

    catalog_dirs: list[Path] = field(default_factory=list)
    include_defaults: bool = True
    strict: bool = False
    log_level: LogLevel = "WARNING"
    log_dir: Path | None = None

    def __post_init__(self):
        self.catalog_dirs = [Path(p) for p in self.catalog_dirs]
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        if not isinstance(self.log_level, str):
            raise ValueError(f"Invalid log level: {self.log_level!r}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

    @classmethod
    def load(cls, config_path: str | Path | None = None, use_env: bool = True) -> "NounsConfig":
        """Load configuration from a JSON file.

        A missing file yields the defaults. Environment overrides are
        applied on top unless `use_env` is False.

        Args:
            config_path: Path to config file. If None, uses the default location.
            use_env: Apply NOUNS_* environment overrides

        Returns:
            NounsConfig instance
        """
        if config_path is None:
            config_path = get_default_config_path()

        config_path = Path(config_path)

        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"{config_path}: config must be a JSON object")
            config = cls.from_dict(data)
        else:
            config = cls()

        if use_env:
            config.apply_env()
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NounsConfig":
        """Create config from dictionary. Null values fall back to the defaults."""
        log_dir = data.get("log_dir")
        include_defaults = data.get("include_defaults")
        catalog_dirs = data.get("catalog_dirs") or []
        if not isinstance(catalog_dirs, list):
            raise ValueError("catalog_dirs must be a list of directories")
        return cls(
            catalog_dirs=[Path(p) for p in catalog_dirs],
            include_defaults=True if include_defaults is None else include_defaults,
            strict=data.get("strict") or False,
            log_level=data.get("log_level") or "WARNING",
            log_dir=Path(log_dir) if log_dir else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "catalog_dirs": [str(p) for p in self.catalog_dirs],
            "include_defaults": self.include_defaults,
            "strict": self.strict,
            "log_level": self.log_level,
            "log_dir": str(self.log_dir) if self.log_dir else None,
        }

    def apply_env(self, environ: dict[str, str] | None = None) -> None:
        """Apply NOUNS_CATALOG_DIRS and NOUNS_LOG_LEVEL overrides."""
        environ = os.environ if environ is None else environ

        if dirs := environ.get(ENV_CATALOG_DIRS):
            extra = [Path(p) for p in dirs.split(os.pathsep) if p]
            self.catalog_dirs = self.catalog_dirs + [p for p in extra if p not in self.catalog_dirs]

        if level := environ.get(ENV_LOG_LEVEL):
            level = level.upper()
            if level not in LOG_LEVELS:
                raise ValueError(f"Invalid {ENV_LOG_LEVEL}: {level}")
            self.log_level = level

    def configure_logging(self) -> None:
        """Apply log_level and log_dir to the package logger."""
        setup_logging(level=self.log_level, log_dir=self.log_dir)

    def save(self, config_path: str | Path | None = None) -> Path:
        """Save configuration to a JSON file.

        Args:
            config_path: Path to save to. If None, uses the default location.

        Returns:
            Path to saved file
        """
        if config_path is None:
            config_path = get_default_config_path()

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        return config_path


# ============================================================================
# Global Config Instance
# ============================================================================


_global_config: NounsConfig | None = None


def get_config() -> NounsConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = NounsConfig.load()
    return _global_config


def set_config(config: NounsConfig) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reload_config(config_path: str | Path | None = None) -> NounsConfig:
    """Reload configuration from disk.

    Args:
        config_path: Optional path to load from

    Returns:
        Newly loaded configuration
    """
    global _global_config
    _global_config = NounsConfig.load(config_path)
    return _global_config
