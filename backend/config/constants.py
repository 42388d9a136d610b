"""
Configuration constants and settings for Mini METARs.
"""

APP_VERSION = "0.9.0"

# VATSIM endpoints. The status document lists the current datafeed URL;
# VATSIM_DATA_URL is used when the status document doesn't provide one.
VATSIM_STATUS_URL = "https://status.vatsim.net/status.json"
VATSIM_DATA_URL = "https://data.vatsim.net/v3/vatsim-data.json"
VATSIM_REQUEST_TIMEOUT = 10  # seconds

# The datafeed is considered stale once it is older than this (seconds)
DATAFEED_STALE_SECONDS = 30

# aviationweather.gov Data API
AWC_API_BASE_URL = "https://aviationweather.gov/api/data"
AWC_REQUEST_TIMEOUT = 5  # seconds
USER_AGENT = f"Mini-METARs/{APP_VERSION}"

# Cache duration settings (in seconds)
METAR_CACHE_DURATION = 60
STATION_CACHE_DURATION = 24 * 60 * 60
MAX_WEATHER_CACHE_SIZE = 1000

# Per-station polling intervals, randomised within these bounds (seconds)
METAR_POLL_RANGE = (120, 150)
ATIS_POLL_RANGE = (20, 30)

# Release checking
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_REPO_OWNER = "kengreim"
GITHUB_REPO_NAME = "mini-metars"
RELEASE_TAG_PATTERN = r"release-v(.+)"
UPDATE_CHECK_TIMEOUT = 10  # seconds

# Altimeter display units
UNITS_IN_HG = "inHg"
UNITS_HPA = "hPa"
HPA_TO_IN_HG = 0.0295299830714
