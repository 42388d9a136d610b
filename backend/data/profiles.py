"""
Profile persistence.

A profile is a JSON file holding the list of stations on screen, the display
options and, optionally, the window geometry it was saved with. Keys are
camelCase so profiles stay interchangeable with the desktop app's files.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from backend.config.constants import UNITS_HPA, UNITS_IN_HG
from common import logger as debug_logger
from common.paths import get_or_create_dir, get_profiles_dir

WINDOW_STATES = ("Normal", "Maximized", "FullScreen")


class ProfileError(Exception):
    """A profile could not be read or written."""


@dataclass
class ProfileWindowState:
    """Window geometry captured when the profile was saved."""
    state: str = "Normal"
    position: Optional[Dict[str, int]] = None  # {"x": .., "y": ..}
    size: Optional[Dict[str, int]] = None  # {"width": .., "height": ..}
    scale_factor: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'state': self.state,
            'position': self.position,
            'size': self.size,
            'scaleFactor': self.scale_factor,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileWindowState":
        if not isinstance(data, dict):
            raise ValueError("Profile 'window' must be an object")
        state = data.get('state', 'Normal')
        if state not in WINDOW_STATES:
            raise ValueError(f"Unknown window state: {state}")
        for key in ('position', 'size'):
            if data.get(key) is not None and not isinstance(data[key], dict):
                raise ValueError(f"Profile window '{key}' must be an object")
        return cls(
            state=state,
            position=data.get('position'),
            size=data.get('size'),
            scale_factor=float(data.get('scaleFactor', 1.0)),
        )


@dataclass
class Profile:
    """Stations and display options for one saved layout."""
    name: str = ""
    stations: List[str] = field(default_factory=list)
    show_input: bool = True
    show_titlebar: bool = True
    window: Optional[ProfileWindowState] = None
    units: str = UNITS_IN_HG

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'stations': list(self.stations),
            'showInput': self.show_input,
            'showTitlebar': self.show_titlebar,
            'window': self.window.to_dict() if self.window else None,
            'units': self.units,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """
        Build a profile from its JSON form.

        Raises:
            ValueError: on missing or malformed fields
        """
        if not isinstance(data, dict):
            raise ValueError("Profile is not a JSON object")

        stations = data.get('stations')
        if not isinstance(stations, list) or not all(isinstance(s, str) for s in stations):
            raise ValueError("Profile 'stations' must be a list of strings")

        units = data.get('units', UNITS_IN_HG)
        if units not in (UNITS_IN_HG, UNITS_HPA):
            raise ValueError(f"Unknown altimeter units: {units}")

        window = data.get('window')
        return cls(
            name=str(data.get('name', '')),
            stations=stations,
            show_input=bool(data.get('showInput', True)),
            show_titlebar=bool(data.get('showTitlebar', True)),
            window=ProfileWindowState.from_dict(window) if window else None,
            units=units,
        )


def default_profiles_dir() -> Optional[Path]:
    """The Profiles directory under the config dir, created if missing."""
    return get_or_create_dir(get_profiles_dir())


def read_profile_from_file(path: Path) -> Profile:
    """
    Load a profile from disk.

    Raises:
        ProfileError: if the file is missing, unreadable or not a valid profile
    """
    debug_logger.debug(f"Reading profile from {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return Profile.from_dict(data)
    except OSError as e:
        raise ProfileError(f"Could not read profile {path}: {e}") from e
    except (TypeError, ValueError) as e:
        raise ProfileError(f"Invalid profile {path}: {e}") from e


def write_profile_to_file(path: Path, profile: Profile) -> None:
    """
    Save a profile to disk, creating parent directories as needed.

    Raises:
        ProfileError: if the file can't be written
    """
    debug_logger.debug(f"Writing profile to {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(profile.to_dict(), f, indent=2)
    except OSError as e:
        raise ProfileError(f"Could not write profile {path}: {e}") from e
