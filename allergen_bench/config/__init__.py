"""
Benchmark Configuration Module

Provides centralized configuration loading for allergen-bench.
Values are read from benchmark_config.yaml next to this module; the
factory layers environment-variable overrides on top.
"""

from pathlib import Path
from typing import Dict, Any, Optional

import yaml


_config_cache: Optional[Dict[str, Any]] = None

CONFIG_DIR = Path(__file__).parent
CONFIG_FILE = CONFIG_DIR / "benchmark_config.yaml"


def get_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load benchmark configuration.

    The default file is cached after the first call. An explicit path is
    always read from disk and never cached.

    Args:
        path: Optional alternative YAML file

    Returns:
        Dict containing all configuration settings

    Raises:
        FileNotFoundError: If the config file doesn't exist
    """
    global _config_cache

    if path is None and _config_cache is not None:
        return _config_cache

    config_path = Path(path) if path is not None else CONFIG_FILE

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    if path is None:
        _config_cache = config
    return config


def get_section(name: str) -> Dict[str, Any]:
    """Return one top-level section of the default config (empty if absent)."""
    return get_config().get(name) or {}


def reload_config() -> None:
    """
    Clear config cache so the next get_config() reads from disk.

    Useful for testing or dynamic config updates.
    """
    global _config_cache
    _config_cache = None


__all__ = [
    'get_config',
    'get_section',
    'reload_config',
    'CONFIG_FILE',
]
