"""
Data access layer for VATSIM, weather, profile and settings data.
"""

from .atis import resolve, resolve_letter
from .vatsim_api import ClientNotInitializedError, DatafeedFetchError, VatsimClient

__all__ = [
    'ClientNotInitializedError',
    'DatafeedFetchError',
    'VatsimClient',
    'resolve',
    'resolve_letter',
]
