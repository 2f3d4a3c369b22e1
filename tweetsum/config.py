"""Configuration management for tweetsum."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from .models.config import TweetsumConfig

# Application name for XDG paths
APP_NAME = "tweetsum"

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "llm": {
        "api_url": "https://api.fireworks.ai/inference/v1/chat/completions",
        "model": "accounts/sentientfoundation/models/dobby-unhinged-llama-3-3-70b-new",
        "max_tokens": 700,
        "temperature": 1.0,
        "timeout_seconds": 60.0,
        "api_key_env": "FIREWORKS_API_KEY",
    },
    "fetch": {
        "proxy_base": "https://r.jina.ai",
        "timeout_seconds": 30.0,
    },
    "reveal": {
        "interval_seconds": 0.008,  # one character per tick
        "step": 1,
    },
    "summary": {
        "regenerate_includes_media": False,
    },
    "avatar": {
        "base_url": "https://unavatar.io",
    },
    "paths": {
        # If not set, XDG defaults are used
        "data_dir": None,
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config home directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")))


def get_xdg_data_home() -> Path:
    """Get XDG data home directory."""
    return Path(os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share")))


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_xdg_config_home() / APP_NAME / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration, merging with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        with open(config_path) as f:
            user_config = json.load(f)
            config = deep_merge(config, user_config)

    return config


def load_settings() -> TweetsumConfig:
    """Load configuration as a validated settings model."""
    return TweetsumConfig.model_validate(load_config())


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_data_dir() -> Path:
    """
    Get the data directory for tweetsum.

    Priority:
    1. TWEETSUM_DATA_DIR environment variable
    2. paths.data_dir in config.json
    3. XDG default: ~/.local/share/tweetsum/
    """
    env_dir = os.environ.get("TWEETSUM_DATA_DIR")
    if env_dir:
        return Path(env_dir)

    config = load_config()
    config_dir = config.get("paths", {}).get("data_dir")
    if config_dir:
        return Path(config_dir)

    return get_xdg_data_home() / APP_NAME


def get_key_store_path() -> Path:
    """Get the path of the persisted user credential store."""
    return get_data_dir() / "credentials.json"
