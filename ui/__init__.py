"""
UI Module for Mini METARs
Provides Textual-based user interface components
"""

from .app import MiniMetarsApp
from .modals import AtisTextScreen, HelpScreen, ProfilePathModal, UpdateAvailableModal
from .utils import debug_log, format_altimeter, random_poll_interval

__all__ = [
    # Main app
    'MiniMetarsApp',

    # Modal screens
    'AtisTextScreen',
    'HelpScreen',
    'ProfilePathModal',
    'UpdateAvailableModal',

    # Utilities
    'debug_log',
    'format_altimeter',
    'random_poll_interval',
]
