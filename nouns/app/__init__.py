"""
Application layer: configuration and the command line interface.
"""

from nouns.app.config import NounsConfig, get_config, reload_config, set_config

__all__ = ["NounsConfig", "get_config", "reload_config", "set_config"]
