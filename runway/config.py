"""Configuration file management for runway."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_RATES_API_URL = "https://api.frankfurter.app"
DEFAULT_OXR_API_URL = "https://openexchangerates.org/api/latest.json"

DEFAULT_CONFIG: dict[str, Any] = {
    "storage": "local",
    "remote": {"url": ""},
    "rates": {
        "api_url": DEFAULT_RATES_API_URL,
        "oxr_api_url": DEFAULT_OXR_API_URL,
        "extra_currencies": ["PEN"],
    },
    "sync": {"quiet_seconds": 2.0},
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "runway" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(DEFAULT_CONFIG, f)

    os.chmod(config_path, 0o600)


def merge_defaults(config: dict[str, Any]) -> dict[str, Any]:
    """Fill in missing keys from DEFAULT_CONFIG, one table deep."""
    merged: dict[str, Any] = {}
    for key, default in DEFAULT_CONFIG.items():
        value = config.get(key)
        if isinstance(default, dict):
            merged[key] = {**default, **(value if isinstance(value, dict) else {})}
        else:
            merged[key] = default if value is None else value
    for key, value in config.items():
        merged.setdefault(key, value)
    return merged


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary with defaults for anything missing. A missing
        file yields the defaults.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return merge_defaults({})

    with open(config_path, "rb") as f:
        return merge_defaults(tomllib.load(f))


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_remote_token() -> str | None:
    """Get the remote storage token from environment.

    Returns:
        Token string or None if not set.
    """
    return os.environ.get("RUNWAY_REMOTE_TOKEN")


def get_oxr_app_id() -> str | None:
    """Get the Open Exchange Rates app id from environment.

    Returns:
        App id or None if not set.
    """
    return os.environ.get("OXR_APP_ID")
