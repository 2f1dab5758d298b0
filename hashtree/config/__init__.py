"""
Configuration management for Hashtree.

Handles loading and validation of configuration files.
"""

from hashtree.config.settings import (
    DisplayConfig,
    HashTreeConfig,
    LoggingConfig,
    TreeConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "DisplayConfig",
    "HashTreeConfig",
    "LoggingConfig",
    "TreeConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
