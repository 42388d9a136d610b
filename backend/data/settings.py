"""
Application settings persistence (settings.json in the config directory).
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from common import logger as debug_logger
from common.paths import get_settings_file


@dataclass
class Settings:
    """User settings that outlive a single profile."""
    load_most_recent_profile_on_open: bool = True
    most_recent_profile: Optional[str] = None
    always_on_top: bool = True
    auto_resize: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'loadMostRecentProfileOnOpen': self.load_most_recent_profile_on_open,
            'mostRecentProfile': self.most_recent_profile,
            'alwaysOnTop': self.always_on_top,
            'autoResize': self.auto_resize,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        if not isinstance(data, dict):
            raise ValueError("Settings is not a JSON object")
        defaults = cls()
        most_recent = data.get('mostRecentProfile')
        return cls(
            load_most_recent_profile_on_open=bool(
                data.get('loadMostRecentProfileOnOpen', defaults.load_most_recent_profile_on_open)),
            most_recent_profile=str(most_recent) if most_recent else None,
            always_on_top=bool(data.get('alwaysOnTop', defaults.always_on_top)),
            auto_resize=bool(data.get('autoResize', defaults.auto_resize)),
        )


def read_settings_or_default(path: Optional[Path] = None) -> Settings:
    """Load settings, falling back to defaults if the file is missing or invalid."""
    path = path or get_settings_file()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return Settings.from_dict(json.load(f))
    except FileNotFoundError:
        return Settings()
    except (OSError, ValueError) as e:
        debug_logger.warning(f"Ignoring unreadable settings file {path}: {e}")
        return Settings()


def write_settings_to_file(settings: Settings, path: Optional[Path] = None) -> None:
    """
    Save settings to disk.

    Raises:
        OSError: if the file can't be written
    """
    path = path or get_settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2)
    debug_logger.debug(f"Wrote settings to {path}")
