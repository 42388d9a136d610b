"""
UI Utility Functions
"""

import random
from typing import Optional, Tuple

from backend.config.constants import UNITS_HPA
from common import logger as debug_logger


def debug_log(message: str):
    """Write a debug message to the log file."""
    debug_logger.debug(message)


def random_poll_interval(bounds: Tuple[int, int]) -> int:
    """Seconds between polls, randomised so stations don't all refresh together."""
    low, high = bounds
    return random.randint(low, high)


def format_altimeter(in_hg: Optional[float], hpa: Optional[float], units: str) -> str:
    """Altimeter for display: "29.92" in inHg, "1013" in hPa, "" when unknown."""
    if units == UNITS_HPA:
        return "" if not hpa else f"{hpa:.0f}"
    return "" if not in_hg else f"{in_hg:.2f}"


def is_plausible_station_id(value: str, min_length: int, max_length: int) -> bool:
    """True if ``value`` looks like a station identifier worth looking up."""
    return min_length <= len(value) <= max_length and value.isalnum()
