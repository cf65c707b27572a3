"""Configuration loading."""

from mathrush.config.config_manager import load_config

__all__ = ["load_config"]
