"""Centralized path management for Mini METARs.

All writable files (settings, profiles, logs) live under the platform's
local configuration directory:

On Windows: %LOCALAPPDATA%/Mini METARs/
On macOS:   ~/Library/Application Support/Mini METARs/
On Linux:   ~/.config/Mini METARs/  (or $XDG_CONFIG_HOME/Mini METARs/)

MINI_METARS_HOME overrides the base directory entirely.
"""

import os
import sys
from pathlib import Path
from typing import Optional

# Application name for user data directory
APP_NAME = "Mini METARs"

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def get_project_root() -> Path:
    """Get the project root directory (where main.py lives)."""
    return _PROJECT_ROOT


def get_config_dir() -> Path:
    """Get the user configuration directory for writable files.

    Returns:
        Path to the application's configuration directory
    """
    override = os.environ.get("MINI_METARS_HOME")
    if override:
        return Path(override)

    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA")
        if not base:
            base = os.path.expanduser("~\\AppData\\Local")
        path = Path(base) / APP_NAME
    elif sys.platform == "darwin":
        path = Path.home() / "Library" / "Application Support" / APP_NAME
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            path = Path(xdg_config) / APP_NAME
        else:
            path = Path.home() / ".config" / APP_NAME

    return path


def get_profiles_dir() -> Path:
    """Get the default directory for saved profiles."""
    return get_config_dir() / "Profiles"


def get_settings_file() -> Path:
    """Get the path to settings.json."""
    return get_config_dir() / "settings.json"


def get_user_logs_dir() -> Path:
    """Get the user logs directory."""
    return get_config_dir() / "logs"


def get_or_create_dir(path: Path) -> Optional[Path]:
    """Create ``path`` (and parents) if needed.

    Returns:
        The directory path, or None if it could not be created
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return path
