"""
Command handlers consumed by the UI.

Each command takes the shared AppState. Failures are logged and re-raised as
CommandError, whose message is meant to be shown to the user as-is.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from backend.cache.datafeed import DATAFEED_UNAVAILABLE_MESSAGE, DatafeedUnavailableError
from backend.config.constants import APP_VERSION
from backend.core.models import ResolvedAtis
from backend.core.state import AppState, Failed
from backend.data.profiles import (
    Profile,
    ProfileError,
    default_profiles_dir,
    read_profile_from_file,
    write_profile_to_file,
)
from backend.data.settings import Settings, read_settings_or_default, write_settings_to_file
from backend.data.update import ReleaseInfo, UpdateCheckError
from backend.data.update import check_for_updates as check_latest_release
from backend.data.weather import AviationWeatherCenterApi, MetarReport, Station, WeatherError
from common import logger as debug_logger


class CommandError(Exception):
    """User-facing failure of a command."""


@dataclass
class FetchMetarResponse:
    """METAR plus the derived values the station row displays."""
    metar: MetarReport
    wind_string: str
    altimeter_in_hg: Optional[float]
    altimeter_hpa: Optional[float]


@dataclass
class InitialSettingsLoad:
    settings: Settings
    profile: Optional[Profile] = None


def initialize_datafeed(state: AppState) -> None:
    """Construct the VATSIM client and warm the datafeed cache. Never raises."""
    entry = state.datafeed.get_entry()
    if not entry.ok:
        debug_logger.warning(f"Initial datafeed fetch failed: {entry.error}")


def get_atis(state: AppState, icao_id: str) -> ResolvedAtis:
    """
    Current ATIS letter and texts for an airport.

    Raises:
        CommandError: "Could not retrieve datafeed" when the cached fetch failed
    """
    try:
        return state.datafeed.get_current(icao_id)
    except DatafeedUnavailableError as e:
        debug_logger.debug(f"ATIS for {icao_id} unavailable: {e.__cause__}")
        raise CommandError(DATAFEED_UNAVAILABLE_MESSAGE) from e


def _get_awc_client(state: AppState) -> AviationWeatherCenterApi:
    outcome = state.awc_client.get()
    if isinstance(outcome, Failed):
        raise CommandError("AWC Api Client not initialized")
    return outcome.value


def fetch_metar(state: AppState, station_id: str) -> FetchMetarResponse:
    """
    Latest METAR for a station, with wind string and altimeter in both units.

    Raises:
        CommandError: if the weather client is unavailable or the fetch fails
    """
    client = _get_awc_client(state)
    try:
        metar = client.fetch_metar(station_id)
    except WeatherError as e:
        raise CommandError(f"Error fetching METARs: {e}") from e

    return FetchMetarResponse(
        metar=metar,
        wind_string=metar.wind_string(),
        altimeter_in_hg=metar.altimeter_in_hg(),
        altimeter_hpa=metar.altimeter_hpa(),
    )


def lookup_station(state: AppState, station_id: str) -> Station:
    """
    Station metadata for an ICAO/IATA/FAA identifier.

    Raises:
        CommandError: if the weather client is unavailable or no station matches
    """
    client = _get_awc_client(state)
    try:
        return client.lookup_station(station_id)
    except WeatherError as e:
        raise CommandError(f"Error looking up station {station_id}: {e}") from e


def load_settings(state: AppState) -> Settings:
    """Read settings from disk (defaults if missing) and keep them on the state."""
    settings = read_settings_or_default()
    state.settings = settings
    return settings


def load_settings_initial(state: AppState) -> InitialSettingsLoad:
    """
    Read settings and, if enabled, the most recently used profile.

    Raises:
        CommandError: if the most recent profile exists in settings but can't be loaded
    """
    settings = load_settings(state)
    profile = None
    if settings.load_most_recent_profile_on_open and settings.most_recent_profile:
        profile = load_profile_from_path(state, Path(settings.most_recent_profile))
    return InitialSettingsLoad(settings=settings, profile=profile)


def save_settings(state: AppState, settings: Settings) -> None:
    """
    Persist settings, recording the most recent profile path.

    Raises:
        CommandError: if settings.json can't be written
    """
    last_path = state.last_profile_path
    if last_path is not None:
        settings.most_recent_profile = str(last_path)
    try:
        write_settings_to_file(settings)
    except OSError as e:
        debug_logger.error(f"Error writing settings: {e}")
        raise CommandError(f"Could not save settings: {e}") from e
    state.settings = settings


def load_profile_from_path(state: AppState, path: Path) -> Profile:
    """
    Load a profile and remember its path as the most recent one.

    Raises:
        CommandError: if the profile can't be read
    """
    debug_logger.debug(f"Starting to load profile from: {path}")
    try:
        profile = read_profile_from_file(path)
    except ProfileError as e:
        debug_logger.warning(str(e))
        raise CommandError(str(e)) from e
    state.last_profile_path = path
    return profile


def save_profile_as(state: AppState, profile: Profile, path: Path) -> Path:
    """
    Write a profile to ``path`` and make it the most recent profile.

    Raises:
        CommandError: if the profile can't be written
    """
    try:
        write_profile_to_file(path, profile)
    except ProfileError as e:
        debug_logger.error(f"Error writing profile: {e}")
        raise CommandError(str(e)) from e
    debug_logger.debug(f"Successfully wrote profile: {profile}")
    state.last_profile_path = path
    return path


def save_current_profile(state: AppState, profile: Profile) -> Path:
    """
    Overwrite the most recently loaded/saved profile.

    Raises:
        CommandError: if no profile path is known yet, or the write fails
    """
    path = state.last_profile_path
    if path is None:
        raise CommandError("No profile loaded; use Save As")
    return save_profile_as(state, profile, path)


def suggested_profile_path(state: AppState, name: str = "") -> Path:
    """Default location offered by the open/save dialogs."""
    last_path = state.last_profile_path
    if last_path is not None and last_path.parent.exists():
        return last_path
    directory = default_profiles_dir() or Path.cwd()
    return directory / f"{name or 'profile'}.json"


def check_for_updates(current_version: str = APP_VERSION) -> Optional[ReleaseInfo]:
    """
    Newer release information, or None when up to date.

    Raises:
        CommandError: if the release check fails
    """
    try:
        return check_latest_release(current_version)
    except UpdateCheckError as e:
        raise CommandError(str(e)) from e
