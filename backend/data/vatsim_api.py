"""
VATSIM API client for fetching the live v3 datafeed.
"""

from typing import Any, Dict, Optional

import requests

from backend.config.constants import (
    USER_AGENT,
    VATSIM_DATA_URL,
    VATSIM_REQUEST_TIMEOUT,
    VATSIM_STATUS_URL,
)
from backend.core.models import DatafeedSnapshot
from common import logger as debug_logger


class VatsimApiError(Exception):
    """Base class for VATSIM client errors."""


class DatafeedFetchError(VatsimApiError):
    """The datafeed request failed (network, HTTP status, decoding or payload shape)."""


class ClientNotInitializedError(VatsimApiError):
    """The VATSIM client could not be constructed; no datafeed is available."""


def _discover_data_url(session: requests.Session, timeout: int) -> str:
    """
    Read the VATSIM status document to find the current v3 datafeed URL.

    Raises:
        VatsimApiError: if the status document can't be fetched or decoded
    """
    try:
        response = session.get(VATSIM_STATUS_URL, timeout=timeout)
        response.raise_for_status()
        status = response.json()
    except requests.RequestException as e:
        raise VatsimApiError(f"Could not fetch VATSIM status: {e}") from e
    except ValueError as e:
        raise VatsimApiError(f"Could not decode VATSIM status: {e}") from e

    urls = status.get('data', {}).get('v3') if isinstance(status, dict) else None
    if isinstance(urls, list) and urls and isinstance(urls[0], str):
        return urls[0]

    debug_logger.warning(f"VATSIM status has no v3 datafeed URL, using {VATSIM_DATA_URL}")
    return VATSIM_DATA_URL


class VatsimClient:
    """
    Thin client over the VATSIM v3 datafeed.

    Use ``VatsimClient.create()`` to build one; it discovers the datafeed URL
    from the status document, which is the step that can fail at startup.
    """

    def __init__(self, data_url: str = VATSIM_DATA_URL,
                 session: Optional[requests.Session] = None,
                 timeout: int = VATSIM_REQUEST_TIMEOUT):
        self.data_url = data_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', USER_AGENT)

    @classmethod
    def create(cls, session: Optional[requests.Session] = None,
               timeout: int = VATSIM_REQUEST_TIMEOUT) -> "VatsimClient":
        """
        Construct a client, resolving the datafeed URL from the status document.

        Raises:
            VatsimApiError: if the status document is unavailable
        """
        session = session or requests.Session()
        session.headers.setdefault('User-Agent', USER_AGENT)
        data_url = _discover_data_url(session, timeout)
        debug_logger.info(f"VATSIM client ready, datafeed at {data_url}")
        return cls(data_url=data_url, session=session, timeout=timeout)

    def download_raw(self) -> Dict[str, Any]:
        """
        Download and decode the datafeed JSON in a single attempt.

        Raises:
            DatafeedFetchError: on timeout, HTTP error or invalid JSON
        """
        try:
            response = self.session.get(self.data_url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.Timeout as e:
            debug_logger.warning("VATSIM datafeed request timed out")
            raise DatafeedFetchError(f"Datafeed request timed out: {e}") from e
        except requests.RequestException as e:
            debug_logger.warning(f"VATSIM datafeed request failed: {e}")
            raise DatafeedFetchError(f"Datafeed request failed: {e}") from e
        except ValueError as e:
            debug_logger.warning(f"VATSIM datafeed JSON decode error: {e}")
            raise DatafeedFetchError(f"Datafeed JSON decode error: {e}") from e

    def get_v3_data(self) -> DatafeedSnapshot:
        """
        Fetch the current datafeed snapshot.

        Raises:
            DatafeedFetchError: if the download fails or the payload is malformed
        """
        data = self.download_raw()
        try:
            snapshot = DatafeedSnapshot.from_feed(data)
        except ValueError as e:
            debug_logger.warning(f"VATSIM datafeed payload rejected: {e}")
            raise DatafeedFetchError(f"Unexpected datafeed payload: {e}") from e

        debug_logger.debug(
            f"Fetched VATSIM datafeed ({len(snapshot.atis)} ATIS, "
            f"updated {snapshot.update_timestamp})"
        )
        return snapshot
