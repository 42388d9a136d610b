"""
UI Configuration and Constants
"""

# Accepted length of a typed station identifier (FAA "SFO" or ICAO "KSFO")
STATION_ID_MIN_LENGTH = 3
STATION_ID_MAX_LENGTH = 4

# Column widths for station rows
ID_COLUMN_WIDTH = 5
ATIS_COLUMN_WIDTH = 4
WIND_COLUMN_WIDTH = 11

# Rich styles
ID_STYLE = "bold white"
ATIS_STYLE = "bold yellow"
ATIS_MISSING_STYLE = "dim"
INVALID_ID_STYLE = "red"
RAW_METAR_STYLE = "grey70"

APP_TITLE = "Mini METARs"
