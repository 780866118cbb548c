"""Configuration management utilities."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / 'configs' / 'thresholds.yaml'


def load_config(config_path=None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file (str or Path).
            Defaults to configs/thresholds.yaml next to the packages.

    Returns:
        Dictionary containing configuration (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
    """
    config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise yaml.YAMLError(f"Top-level configuration must be a mapping: {config_path}")

    logger.debug(f"Loaded config keys: {list(config.keys())}")

    return config


def get_nested_config(config: Optional[Dict[str, Any]], key_path: str, default: Any = None) -> Any:
    """
    Get nested configuration value using dot notation.

    Example:
        get_nested_config(config, 'play_analysis.optimal_window.base_score', default=50)

    Args:
        config: Configuration dictionary (None is treated as empty)
        key_path: Dot-separated path to value
        default: Default value if path not found

    Returns:
        Configuration value or default
    """
    if not config:
        return default

    keys = key_path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def get_section(config: Optional[Dict[str, Any]], section: str) -> Dict[str, Any]:
    """Return a top-level config section, or an empty dict when absent."""
    value = get_nested_config(config, section, default={})
    return value if isinstance(value, dict) else {}


def merge_config(base: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Recursively merge overrides into a copy of base.

    Nested dicts are merged key by key; any other value in overrides
    replaces the base value. Neither input is modified.
    """
    merged = copy.deepcopy(base)

    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def load_merged_config(config_path=None) -> Dict[str, Any]:
    """
    Load a configuration file layered over the bundled defaults.

    A partial YAML file only needs the keys it changes; every other
    threshold keeps its value from configs/thresholds.yaml.
    """
    defaults = load_config()
    if config_path is None or Path(config_path).resolve() == DEFAULT_CONFIG_PATH:
        return defaults
    return merge_config(defaults, load_config(config_path))
