"""
Time-limited cache for the VATSIM datafeed.

The datafeed is large and only changes every few tens of seconds, so the
application keeps exactly one snapshot and replaces it once it is older than
DATAFEED_STALE_SECONDS. Failed fetches are cached the same way as successful
ones: the error is served to every reader until the entry goes stale, which
limits a persistent outage to one request per window.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from backend.config.constants import DATAFEED_STALE_SECONDS
from backend.core.models import DatafeedSnapshot, ResolvedAtis
from backend.data.atis import resolve
from common import logger as debug_logger

DATAFEED_UNAVAILABLE_MESSAGE = "Could not retrieve datafeed"


class DatafeedUnavailableError(Exception):
    """The cached datafeed entry holds a fetch error."""


@dataclass(frozen=True)
class CacheEntry:
    """Outcome of one datafeed fetch attempt."""
    fetched_at: float
    snapshot: Optional[DatafeedSnapshot] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DatafeedCache:
    """
    Holds the most recent datafeed fetch result.

    Stale reads are single-flight: concurrent callers that find the entry
    stale queue on the refresh lock and re-check staleness once they hold it,
    so only the first of them performs the fetch.

    Args:
        fetch: Callable returning a DatafeedSnapshot or raising on failure
        clock: Monotonic time source in seconds
        stale_after: Entry age in seconds after which a refresh is required
    """

    def __init__(self, fetch: Callable[[], DatafeedSnapshot],
                 clock: Callable[[], float] = time.monotonic,
                 stale_after: float = DATAFEED_STALE_SECONDS):
        self._fetch = fetch
        self._clock = clock
        self._stale_after = stale_after
        self._entry: Optional[CacheEntry] = None
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()

    @property
    def entry(self) -> Optional[CacheEntry]:
        """The current cache entry, or None before the first fetch."""
        with self._lock:
            return self._entry

    def is_stale(self, now: Optional[float] = None) -> bool:
        """True if there is no entry or it is older than ``stale_after`` seconds."""
        entry = self.entry
        if entry is None:
            return True
        if now is None:
            now = self._clock()
        return now - entry.fetched_at > self._stale_after

    def refresh(self) -> CacheEntry:
        """
        Fetch once and install the result as the cache entry.

        The previous entry is overwritten unconditionally, whether the fetch
        succeeded or not.

        Returns:
            The newly installed entry
        """
        try:
            snapshot = self._fetch()
        except Exception as e:
            debug_logger.error(f"Datafeed refresh failed: {type(e).__name__}: {e}")
            new_entry = CacheEntry(fetched_at=self._clock(), error=e)
        else:
            new_entry = CacheEntry(fetched_at=self._clock(), snapshot=snapshot)

        with self._lock:
            self._entry = new_entry
        return new_entry

    def get_entry(self) -> CacheEntry:
        """Return the current entry, refreshing first if it is stale."""
        if not self.is_stale():
            entry = self.entry
            if entry is not None:
                return entry
            # Cleared between the staleness check and the read

        with self._refresh_lock:
            entry = self.entry
            if entry is None or self.is_stale():
                debug_logger.debug("Datafeed stale, refreshing")
                return self.refresh()
            return entry

    def get_snapshot(self) -> DatafeedSnapshot:
        """
        Return a current snapshot.

        Raises:
            DatafeedUnavailableError: if the current entry holds a fetch error
        """
        entry = self.get_entry()
        if entry.error is not None:
            raise DatafeedUnavailableError(DATAFEED_UNAVAILABLE_MESSAGE) from entry.error
        return entry.snapshot

    def get_current(self, icao: str) -> ResolvedAtis:
        """
        Resolve the ATIS for an airport against a current snapshot.

        Raises:
            DatafeedUnavailableError: if the datafeed could not be retrieved
        """
        return resolve(icao, self.get_snapshot())

    def clear(self) -> None:
        """Drop the cached entry so the next read fetches."""
        with self._lock:
            self._entry = None
