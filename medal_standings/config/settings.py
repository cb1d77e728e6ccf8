"""Deployment configuration loaded from config/standings.yaml."""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config/standings.yaml"

# Defaults (can be overridden by config/standings.yaml)
DEFAULT_CONFIG: Dict[str, Any] = {
    "source": "api",
    "timeout_seconds": 10,
    "revalidate_seconds": 3600,
    "api": {
        "base_url": "https://olympic-sports-api.p.rapidapi.com",
        "endpoint": "/medals/countries",
        "host": "olympic-sports-api.p.rapidapi.com",
        "year": "2024",
    },
    "html": {
        "url": "https://olympics.com/en/milano-cortina-2026/medals",
        "preview_chars": 200,
    },
}

VALID_SOURCES = ("api", "html")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_standings_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load standings configuration, preferring config/standings.yaml over defaults.

    Args:
        path: Explicit config path (None = search working dir, then repo root)

    Returns:
        Config dict with every default key present
    """
    if path is not None:
        config_paths = [path]
    else:
        config_paths = [
            CONFIG_FILENAME,
            os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), CONFIG_FILENAME),
        ]

    for candidate in config_paths:
        if os.path.exists(candidate):
            try:
                with open(candidate, 'r') as f:
                    loaded = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load standings config from {candidate}: {e}")
                continue
            if not isinstance(loaded, dict):
                logger.warning(f"Ignoring standings config {candidate}: top level is not a mapping")
                continue
            return _merge(DEFAULT_CONFIG, loaded)

    return copy.deepcopy(DEFAULT_CONFIG)
