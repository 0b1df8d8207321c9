from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the last session as JSON in the user data
directory, plus loading of explicit per-project configuration files.
Missing or corrupted files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from includeflat.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_ENCODING,
    DEFAULT_LOCALE,
)
from includeflat.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")

# Keys that make up a session; anything else in a config file is ignored
SESSION_KEYS = (
    "input_path",
    "output_path",
    "include_dirs",
    "encoding",
    "print_tree",
    "locale",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": "",
        "output_path": "",

        # Resolution
        "include_dirs": [],
        "encoding": DEFAULT_ENCODING,

        # Reporting
        "print_tree": False,
        "locale": DEFAULT_LOCALE,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default application state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
    """
    default_state = get_default_app_state()

    data = _read_json(CONFIG_FILE)
    if data is None:
        return default_state

    state = default_state
    if isinstance(data.get("last_session"), dict):
        state["last_session"].update(_session_subset(data["last_session"]))

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


def load_config_file(path: str) -> Optional[Dict[str, Any]]:
    """
    Read an explicit configuration file.

    The file may hold session keys at the top level or under 'last_session'.

    Args:
        path: JSON file path.

    Returns:
        Optional[Dict[str, Any]]: Session keys found, or None if unreadable.
    """
    data = _read_json(path)
    if data is None:
        return None
    if isinstance(data.get("last_session"), dict):
        data = data["last_session"]
    return _session_subset(data)


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Retrieve the active configuration (Last Session) merged over defaults.
    """
    state = load_app_state()
    defaults = get_default_config()
    defaults.update(state.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """
    Save the provided config as the 'last_session'.
    """
    state = load_app_state()
    state["last_session"] = _session_subset(config)
    save_app_state(state)


# -----------------------------------------------------------------------------
# Private Helpers
# -----------------------------------------------------------------------------
def _read_json(path: str) -> Optional[Dict[str, Any]]:
    """Load a JSON object from disk, returning None when absent or corrupted."""
    if not os.path.exists(path):
        logger.debug(f"Config file not found: {path}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config {path}: {e}. Using defaults.")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file {path}. Using defaults.")
        return None
    return data


def _session_subset(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k in SESSION_KEYS}
