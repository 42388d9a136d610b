"""
Mini METARs Backend
Datafeed caching, ATIS letter resolution, weather and profile access for the UI.
"""

from backend.cache.datafeed import CacheEntry, DatafeedCache, DatafeedUnavailableError
from backend.core.commands import (
    CommandError,
    FetchMetarResponse,
    InitialSettingsLoad,
    check_for_updates,
    fetch_metar,
    get_atis,
    initialize_datafeed,
    load_profile_from_path,
    load_settings,
    load_settings_initial,
    lookup_station,
    save_current_profile,
    save_profile_as,
    save_settings,
    suggested_profile_path,
)
from backend.core.models import BroadcastRecord, DatafeedSnapshot, ResolvedAtis
from backend.core.state import AppState
from backend.data.atis import resolve, resolve_letter

__version__ = "0.9.0"

__all__ = [
    'AppState',
    'BroadcastRecord',
    'CacheEntry',
    'CommandError',
    'DatafeedCache',
    'DatafeedSnapshot',
    'DatafeedUnavailableError',
    'FetchMetarResponse',
    'InitialSettingsLoad',
    'ResolvedAtis',
    'check_for_updates',
    'fetch_metar',
    'get_atis',
    'initialize_datafeed',
    'load_profile_from_path',
    'load_settings',
    'load_settings_initial',
    'lookup_station',
    'resolve',
    'resolve_letter',
    'save_current_profile',
    'save_profile_as',
    'save_settings',
    'suggested_profile_path',
]
