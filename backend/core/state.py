"""
Application state shared by every command handler.

Created once at startup and passed to the commands; holds the datafeed cache,
the lazily constructed API clients, the loaded settings and the path of the
most recently loaded/saved profile.
"""

import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar, Union

from backend.cache.datafeed import DatafeedCache
from backend.core.models import DatafeedSnapshot
from backend.data.settings import Settings
from backend.data.vatsim_api import ClientNotInitializedError, VatsimClient
from backend.data.weather import AviationWeatherCenterApi
from common import logger as debug_logger

T = TypeVar('T')


@dataclass(frozen=True)
class Ready(Generic[T]):
    """Initialisation succeeded."""
    value: T


@dataclass(frozen=True)
class Failed:
    """Initialisation failed; the error is kept for the process lifetime."""
    error: Exception


InitOutcome = Union[Ready[T], Failed]


class InitOnce(Generic[T]):
    """
    Runs a factory at most once and remembers the outcome.

    The first call to ``get()`` constructs the value; concurrent first callers
    wait for it. A failure is remembered and never retried.
    """

    def __init__(self, factory: Callable[[], T], name: str = "client"):
        self._factory = factory
        self._name = name
        self._outcome: Optional[InitOutcome] = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._outcome is not None

    def get(self) -> InitOutcome:
        if self._outcome is not None:
            return self._outcome
        with self._lock:
            if self._outcome is None:
                try:
                    self._outcome = Ready(self._factory())
                    debug_logger.info(f"{self._name} initialized")
                except Exception as e:
                    debug_logger.error(f"{self._name} failed to initialize: {type(e).__name__}: {e}")
                    self._outcome = Failed(e)
            return self._outcome


class AppState:
    """
    Process-wide state for the application.

    Args:
        vatsim_factory: Builds the VATSIM client (called at most once)
        awc_factory: Builds the aviationweather.gov client (called at most once)
        clock: Monotonic time source for the datafeed cache
    """

    def __init__(self,
                 vatsim_factory: Callable[[], VatsimClient] = VatsimClient.create,
                 awc_factory: Callable[[], AviationWeatherCenterApi] = AviationWeatherCenterApi,
                 clock: Callable[[], float] = time.monotonic):
        self.vatsim_client: InitOnce[VatsimClient] = InitOnce(vatsim_factory, "VATSIM API client")
        self.awc_client: InitOnce[AviationWeatherCenterApi] = InitOnce(awc_factory, "AWC API client")
        self.datafeed = DatafeedCache(self.fetch_vatsim_data, clock=clock)
        self._lock = threading.Lock()
        self._settings: Optional[Settings] = None
        self._last_profile_path: Optional[Path] = None

    def fetch_vatsim_data(self) -> DatafeedSnapshot:
        """
        Fetch a fresh snapshot through the VATSIM client.

        Raises:
            ClientNotInitializedError: if the client failed to construct
            DatafeedFetchError: if the fetch itself failed
        """
        outcome = self.vatsim_client.get()
        if isinstance(outcome, Failed):
            raise ClientNotInitializedError("VATSIM API client not initialized") from outcome.error
        return outcome.value.get_v3_data()

    @property
    def settings(self) -> Optional[Settings]:
        with self._lock:
            return self._settings

    @settings.setter
    def settings(self, settings: Settings) -> None:
        with self._lock:
            self._settings = settings

    @property
    def last_profile_path(self) -> Optional[Path]:
        with self._lock:
            return self._last_profile_path

    @last_profile_path.setter
    def last_profile_path(self, path: Optional[Path]) -> None:
        with self._lock:
            self._last_profile_path = path
