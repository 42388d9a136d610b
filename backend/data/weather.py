"""
Weather data fetching for airports (METAR and station information).

Uses the aviationweather.gov Data API. Results are cached per station so
that several widgets polling the same airport don't multiply requests.
"""

import re
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import requests
from cachetools import TTLCache

from backend.config.constants import (
    AWC_API_BASE_URL,
    AWC_REQUEST_TIMEOUT,
    HPA_TO_IN_HG,
    MAX_WEATHER_CACHE_SIZE,
    METAR_CACHE_DURATION,
    STATION_CACHE_DURATION,
    USER_AGENT,
)
from common import logger as debug_logger


class WeatherError(Exception):
    """A METAR or station lookup failed."""


@dataclass
class Station:
    """Station metadata from the aviationweather.gov stationinfo endpoint."""
    icao_id: str
    iata_id: str = "-"
    faa_id: str = "-"
    wmo_id: str = "-"
    lat: Optional[float] = None
    lon: Optional[float] = None
    elev: Optional[float] = None
    site: str = ""
    state: str = ""
    country: str = ""
    priority: Optional[int] = None

    @property
    def display_id(self) -> str:
        """FAA identifier where one exists (e.g. "SFO"), otherwise the ICAO id."""
        if self.faa_id and self.faa_id != "-":
            return self.faa_id
        return self.icao_id

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Station":
        return cls(
            icao_id=data.get('icaoId') or "",
            iata_id=data.get('iataId') or "-",
            faa_id=data.get('faaId') or "-",
            wmo_id=data.get('wmoId') or "-",
            lat=data.get('lat'),
            lon=data.get('lon'),
            elev=data.get('elev'),
            site=data.get('site') or "",
            state=data.get('state') or "",
            country=data.get('country') or "",
            priority=data.get('priority'),
        )


@dataclass
class MetarReport:
    """A decoded METAR from the aviationweather.gov metar endpoint."""
    icao_id: str
    raw_ob: str
    obs_time: Optional[int] = None  # unix seconds
    report_time: Optional[str] = None
    wdir: Optional[Union[int, str]] = None  # degrees or "VRB"
    wspd: Optional[int] = None
    wgst: Optional[int] = None
    altim: Optional[float] = None  # hPa
    temp: Optional[float] = None
    dewp: Optional[float] = None
    name: str = ""
    data: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "MetarReport":
        return cls(
            icao_id=data.get('icaoId') or "",
            raw_ob=data.get('rawOb') or "",
            obs_time=data.get('obsTime'),
            report_time=data.get('reportTime'),
            wdir=data.get('wdir'),
            wspd=data.get('wspd'),
            wgst=data.get('wgst'),
            altim=data.get('altim'),
            temp=data.get('temp'),
            dewp=data.get('dewp'),
            name=data.get('name') or "",
            data=data,
        )

    def wind_string(self) -> str:
        """
        Format wind like the METAR group: "27005KT", "27005G15KT", "VRB03KT", "00000KT".

        Falls back to parsing the raw observation when the decoded fields are missing.
        """
        if self.wspd is None or self.wdir is None:
            return parse_wind_from_metar(self.raw_ob)
        return format_wind(self.wdir, self.wspd, self.wgst)

    def altimeter_hpa(self) -> Optional[float]:
        if self.altim is not None:
            return float(self.altim)
        parsed = parse_altimeter_from_metar(self.raw_ob)
        if parsed is None:
            return None
        value = int(parsed[1:])
        if parsed.startswith('A'):
            return round(value / 100 / HPA_TO_IN_HG, 1)
        return float(value)

    def altimeter_in_hg(self) -> Optional[float]:
        hpa = self.altimeter_hpa()
        if hpa is None:
            return None
        return round(hpa * HPA_TO_IN_HG, 2)


def format_wind(wdir: Union[int, str], wspd: int, wgst: Optional[int] = None) -> str:
    """Format decoded wind direction/speed/gust as a METAR-style wind group."""
    if int(wspd) == 0:
        return "00000KT"

    if isinstance(wdir, str) and not wdir.isdigit():
        direction = wdir.upper()
    else:
        direction = f"{int(wdir):03d}"

    wind_str = f"{direction}{int(wspd):02d}"
    if wgst and int(wgst) > int(wspd):
        wind_str += f"G{int(wgst):02d}"
    return wind_str + "KT"


def parse_wind_from_metar(metar: str) -> str:
    """
    Parse wind information from a METAR string.

    Args:
        metar: The METAR string

    Returns:
        Wind string in format like "27005KT" or "27005G12KT" or "00000KT" or empty string if unavailable
    """
    if not metar:
        return ""

    # direction (3 digits or VRB), speed, optional gust, units
    match = re.search(r'\b(\d{3}|VRB)(\d{2,3})(G\d{2,3})?(KT|KMH|KPH|MPS)\b', metar)
    if not match:
        return ""

    direction, speed, gust, units = match.groups()
    if direction != 'VRB' and int(speed) == 0:
        return "00000KT"

    if units == 'KT':
        return f"{direction}{speed}{gust or ''}KT"

    # Convert km/h or m/s to knots
    factor = 1.852 if units in ('KMH', 'KPH') else 0.514444
    wind_str = f"{direction}{round(int(speed) / factor):02d}"
    if gust:
        wind_str += f"G{round(int(gust[1:]) / factor):02d}"
    return wind_str + "KT"


def parse_altimeter_from_metar(metar: str) -> Optional[str]:
    """
    Extract altimeter setting from METAR.

    Returns:
        Altimeter string in format "A2992" or "Q1013" or None if not found
    """
    if not metar:
        return None
    match = re.search(r'\b([AQ]\d{4})\b', metar)
    return match.group(1) if match else None


class AviationWeatherCenterApi:
    """
    Client for the aviationweather.gov Data API.

    METARs are cached for METAR_CACHE_DURATION seconds and stations for a day.
    This class is thread-safe.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 base_url: str = AWC_API_BASE_URL,
                 timeout: int = AWC_REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', USER_AGENT)
        self._lock = threading.Lock()
        self._metar_cache: TTLCache = TTLCache(maxsize=MAX_WEATHER_CACHE_SIZE, ttl=METAR_CACHE_DURATION)
        self._station_cache: TTLCache = TTLCache(maxsize=MAX_WEATHER_CACHE_SIZE, ttl=STATION_CACHE_DURATION)

    def _get_json(self, endpoint: str, ids: str) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = self.session.get(url, params={'ids': ids, 'format': 'json'}, timeout=self.timeout)
            response.raise_for_status()
            if response.status_code == 204 or not response.content:
                return []
            data = response.json()
        except requests.Timeout as e:
            debug_logger.warning(f"AWC {endpoint} request timed out for {ids}")
            raise WeatherError(f"Request timed out: {e}") from e
        except requests.RequestException as e:
            debug_logger.warning(f"AWC {endpoint} request failed for {ids}: {e}")
            raise WeatherError(f"Request failed: {e}") from e
        except ValueError as e:
            debug_logger.warning(f"AWC {endpoint} JSON decode error for {ids}: {e}")
            raise WeatherError(f"Invalid response: {e}") from e

        if not isinstance(data, list):
            raise WeatherError(f"Unexpected {endpoint} response for {ids}")
        return data

    def fetch_metar(self, station_id: str) -> MetarReport:
        """
        Fetch the latest METAR for a station.

        Raises:
            WeatherError: if the request fails or the station has no METAR
        """
        key = station_id.upper()
        with self._lock:
            cached = self._metar_cache.get(key)
        if cached is not None:
            return cached

        reports = self._get_json('metar', key)
        if not reports:
            raise WeatherError(f"No METAR found for {key}")

        report = MetarReport.from_api(reports[0])
        with self._lock:
            self._metar_cache[key] = report
        debug_logger.debug(f"Fetched METAR for {key}: {report.raw_ob}")
        return report

    def lookup_station(self, station_id: str) -> Station:
        """
        Look up station metadata by ICAO, IATA or FAA identifier.

        Raises:
            WeatherError: if the request fails or no station matches
        """
        key = station_id.upper()
        with self._lock:
            cached = self._station_cache.get(key)
        if cached is not None:
            return cached

        stations = self._get_json('stationinfo', key)
        if not stations:
            raise WeatherError(f"No station found for {key}")

        station = Station.from_api(stations[0])
        with self._lock:
            self._station_cache[key] = station
        return station

    def clear_caches(self) -> None:
        """Clear METAR and station caches (thread-safe)."""
        with self._lock:
            self._metar_cache.clear()
            self._station_cache.clear()
