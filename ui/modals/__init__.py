"""
Modal Screens Package
Contains the modal dialog screens (ATIS text, profile path, update prompt, help)
"""

from .atis_text import AtisTextScreen
from .profile_path import ProfilePathModal
from .update_available import UpdateAvailableModal
from .help_modal import HelpScreen

__all__ = [
    'AtisTextScreen',
    'ProfilePathModal',
    'UpdateAvailableModal',
    'HelpScreen',
]
