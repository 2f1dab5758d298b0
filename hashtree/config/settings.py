"""
Configuration management for Hashtree.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import codecs
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from hashtree.exceptions import InvalidConfigurationError
from hashtree.logging_config import get_logger

logger = get_logger(__name__)


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class TreeConfig:
    """Tree construction configuration."""

    text_encoding: str = "utf-8"  # Codec for text leaves


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "console"  # "console" or "json"


@dataclass
class DisplayConfig:
    """Console rendering configuration."""

    digest_width: int = 0  # 0 = full hex digest


@dataclass
class HashTreeConfig:
    """Main Hashtree configuration."""

    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.hashtree/config.yaml")


def get_default_config() -> HashTreeConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        HashTreeConfig: Default configuration object
    """
    return HashTreeConfig()


def load_config(config_path: Optional[str] = None) -> HashTreeConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        HashTreeConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(config_path)

    if not os.path.exists(config_path):
        logger.debug(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        )

    if config_data is None:
        logger.debug(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )

    logger.debug(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a config section, rejecting non-mapping values."""
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _build_config_from_dict(config_data: Dict[str, Any]) -> HashTreeConfig:
    """
    Build HashTreeConfig from dictionary loaded from YAML.

    Merges user configuration with defaults. Unknown keys inside a section
    raise TypeError from the dataclass constructor.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        HashTreeConfig: Configuration object
    """
    tree = TreeConfig(**_section(config_data, "tree"))
    logging = LoggingConfig(**_section(config_data, "logging"))

    display_data = dict(_section(config_data, "display"))
    if "digest_width" in display_data:
        display_data["digest_width"] = int(display_data["digest_width"])
    display = DisplayConfig(**display_data)

    return HashTreeConfig(tree=tree, logging=logging, display=display)


def _validate_config(config: HashTreeConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    try:
        codecs.lookup(config.tree.text_encoding)
    except (LookupError, TypeError):
        raise InvalidConfigurationError(
            f"tree text_encoding is not a known codec: '{config.tree.text_encoding}'"
        )

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if str(config.logging.level).upper() not in valid_log_levels:
        raise InvalidConfigurationError(
            f"logging level must be one of {valid_log_levels}, "
            f"got '{config.logging.level}'"
        )

    valid_log_formats = ["console", "json"]
    if config.logging.format not in valid_log_formats:
        raise InvalidConfigurationError(
            f"logging format must be one of {valid_log_formats}, "
            f"got '{config.logging.format}'"
        )

    width = config.display.digest_width
    if width != 0 and width < 8:
        raise InvalidConfigurationError(
            f"display digest_width must be 0 or at least 8, got {width}"
        )
