"""
Configuration settings for the Art Club admin console
"""

import copy
import json
import os
from typing import Any, Dict, Optional


DEFAULT_CONFIG = {
    "api": {
        "base_url": "http://localhost:8000/api/",
        "token": "",
        "timeout": 30,
        "impersonate": None,
    },
    "ui": {
        "debounce_ms": 500,
    },
    "export": {
        "directory": "exports",
    },
    "logging": {
        "path": "logs/artclub_admin.log",
        "level": "INFO",
    },
}

CONFIG_FILE = os.path.expanduser("~/.artclub_admin_config.json")

# environment variable -> (section, key)
ENV_OVERRIDES = {
    "ARTCLUB_API_BASE_URL": ("api", "base_url"),
    "ARTCLUB_API_TOKEN": ("api", "token"),
    "ARTCLUB_EXPORT_DIR": ("export", "directory"),
    "ARTCLUB_LOG_LEVEL": ("logging", "level"),
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into `base` (in place) and return it."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file or environment variables

    Args:
        path: Optional config file path, defaults to CONFIG_FILE

    Returns:
        The merged configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = path or CONFIG_FILE

    # Check for config file
    if os.path.exists(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                file_config = json.load(f)
            if isinstance(file_config, dict):
                _merge(config, file_config)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Error loading config file: {e}")

    # Override with environment variables
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            config.setdefault(section, {})[key] = value

    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Save configuration to file
    """
    try:
        with open(path or CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        print(f"Error saving config file: {e}")
        return False
