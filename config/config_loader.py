"""
config_loader.py
-----------------
Singleton config loader. Reads config.yaml once and caches it.

The reconciliation core never reads configuration on its own. Callers pull
the local-currency method table from here and hand it to a
CurrencyClassifier explicitly.
"""

import os
import yaml
from typing import Any, Dict


_CONFIG_CACHE: Dict[str, Any] = {}


def load_config(config_path: str | None = None) -> Dict[str, Any]:
    """
    Load and cache the YAML configuration file.

    Args:
        config_path: Path to config.yaml. Defaults to config/ relative to this file.

    Returns:
        Full config dictionary.
    """
    global _CONFIG_CACHE

    if _CONFIG_CACHE:
        return _CONFIG_CACHE

    if config_path is None:
        config_path = os.path.join(os.path.dirname(__file__), "config.yaml")

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        _CONFIG_CACHE = yaml.safe_load(f) or {}

    return _CONFIG_CACHE


def get_local_currency_methods() -> list[str]:
    """
    Returns the payment-method labels denominated in local currency.

    Raises:
        KeyError: If the block is missing from the config.
        ValueError: If the block is not a list of strings.
    """
    config = load_config()
    if "local_currency_methods" not in config:
        raise KeyError("No 'local_currency_methods' block in config")

    methods = config["local_currency_methods"]
    if not isinstance(methods, list) or not all(isinstance(m, str) for m in methods):
        raise ValueError(
            f"'local_currency_methods' must be a list of strings, got: {methods!r}"
        )
    return list(methods)


def get_currency_labels() -> Dict[str, str]:
    """Returns the display labels for the base and local currencies."""
    return load_config()["currency_labels"]


def get_pipeline_config() -> Dict[str, Any]:
    """Returns the pipeline block."""
    return load_config()["pipeline"]


def reset_config() -> None:
    """Clears cached config. Useful for testing."""
    global _CONFIG_CACHE
    _CONFIG_CACHE = {}
