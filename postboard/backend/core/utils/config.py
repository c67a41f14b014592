"""
Configuration Loading Utilities.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = "configs/default_config.yaml"

REQUIRED_SECTIONS = ["site", "server", "auth", "logging"]


def load_config(config_path: str) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    # Validate required sections
    for section in REQUIRED_SECTIONS:
        if section not in config:
            config[section] = {}
    config.setdefault("seed_posts", [])

    return config


def get_default_config() -> dict[str, Any]:
    """
    Get default configuration dictionary.

    Returns:
        Default configuration
    """
    return {
        "site": {
            "title": "Postboard",
            "description": "Create a post, sign in, sign out",
        },
        "server": {
            "host": "127.0.0.1",
            "port": 8000,
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
        "auth": {
            "secret": "change-me",
            "algorithm": "HS256",
            "session_minutes": 60 * 24 * 30,
            "demo_user": {
                "name": "Demo User",
                "image": None,
            },
        },
        "seed_posts": [],
    }


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay ``override`` on a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config(config_path: str | None = None) -> dict[str, Any]:
    """
    Build the effective configuration for the application.

    Defaults are overlaid with the YAML file (``config_path``, then
    ``POSTBOARD_CONFIG``, then the shipped default path, whichever is given
    first) and finally with environment overrides.
    """
    path = config_path or os.getenv("POSTBOARD_CONFIG") or DEFAULT_CONFIG_PATH
    config = get_default_config()
    if config_path or Path(path).exists():
        config = merge_config(config, load_config(path))

    secret = os.getenv("POSTBOARD_SECRET")
    if secret:
        config["auth"]["secret"] = secret

    return config
