"""
Shared helpers for Mini METARs: the debug logger and user directory paths.

Kept free of backend/ui imports so both sides can depend on it.
"""

from common.logger import debug, info, warning, error, get_log_file_path
from common.paths import get_config_dir, get_profiles_dir, get_settings_file

__all__ = [
    "debug", "info", "warning", "error", "get_log_file_path",
    "get_config_dir", "get_profiles_dir", "get_settings_file",
]
