"""
Release checking against the project's GitHub releases.
"""

import re
from dataclasses import dataclass
from typing import Optional

import requests
from packaging.version import InvalidVersion, Version

from backend.config.constants import (
    APP_VERSION,
    GITHUB_API_BASE_URL,
    GITHUB_REPO_NAME,
    GITHUB_REPO_OWNER,
    RELEASE_TAG_PATTERN,
    UPDATE_CHECK_TIMEOUT,
    USER_AGENT,
)
from common import logger as debug_logger


class UpdateCheckError(Exception):
    """The latest release could not be fetched or its version parsed."""


@dataclass
class ReleaseInfo:
    """A newer release than the running version."""
    version: str
    html_url: str


def parse_version(version: str) -> Version:
    """
    Parse a release version ("1.2.10", "v1.3.0-rc.1") for comparison.

    Pre-releases sort before their release, so "1.3.0-rc.1" < "1.3.0".

    Raises:
        ValueError: if the string is not a valid version
    """
    try:
        return Version(version.strip())
    except InvalidVersion as e:
        raise ValueError(f"Not a version: {version!r}") from e


def version_from_tag(tag_name: str) -> str:
    """
    Extract the version from a release tag like "release-v1.2.0".

    Raises:
        UpdateCheckError: if the tag doesn't follow the release naming scheme
    """
    match = re.search(RELEASE_TAG_PATTERN, tag_name)
    if not match:
        raise UpdateCheckError(f"Could not parse latest release version from {tag_name}")
    return match.group(1)


def check_for_updates(current_version: str = APP_VERSION,
                      session: Optional[requests.Session] = None,
                      timeout: int = UPDATE_CHECK_TIMEOUT) -> Optional[ReleaseInfo]:
    """
    Check GitHub for a release newer than ``current_version``.

    Returns:
        ReleaseInfo for the newer release, or None if already up to date

    Raises:
        UpdateCheckError: if the release can't be fetched or parsed
    """
    url = f"{GITHUB_API_BASE_URL}/repos/{GITHUB_REPO_OWNER}/{GITHUB_REPO_NAME}/releases/latest"
    http = session or requests
    try:
        response = http.get(
            url,
            headers={'Accept': 'application/vnd.github+json', 'User-Agent': USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
        release = response.json()
    except requests.RequestException as e:
        debug_logger.warning(f"Release check failed: {e}")
        raise UpdateCheckError("Could not fetch latest release from Github") from e
    except ValueError as e:
        raise UpdateCheckError("Could not decode latest release from Github") from e

    tag_name = release.get('tag_name', '') if isinstance(release, dict) else ''
    latest = version_from_tag(tag_name)
    try:
        is_newer = parse_version(latest) > parse_version(current_version)
    except ValueError as e:
        raise UpdateCheckError(f"Could not parse latest release version from {tag_name}") from e

    debug_logger.debug(f"Found latest version: {latest}")
    if not is_newer:
        return None

    debug_logger.info(f"Newer version available: {latest} (running {current_version})")
    return ReleaseInfo(version=latest, html_url=release.get('html_url', ''))
