"""Test doubles for HTTP sessions, clocks and datafeed snapshots."""

from typing import Any, Dict, List, Optional

import requests

from backend.core.models import BroadcastRecord, DatafeedSnapshot


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeResponse:
    def __init__(self, json_data: Any = None, status_code: int = 200, content: bytes = b"{}"):
        self._json_data = json_data
        self.status_code = status_code
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self) -> Any:
        if isinstance(self._json_data, Exception):
            raise self._json_data
        return self._json_data


class FakeSession:
    """Maps URLs to canned responses (or exceptions to raise) and records calls."""

    def __init__(self, responses: Dict[str, Any]):
        self.responses = responses
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, params: Optional[dict] = None, timeout: Any = None,
            headers: Optional[dict] = None) -> FakeResponse:
        self.calls.append({'url': url, 'params': params, 'timeout': timeout, 'headers': headers})
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


def atis(callsign: str, code: Optional[str] = None, text: Optional[List[str]] = None) -> BroadcastRecord:
    return BroadcastRecord(callsign=callsign, structured_letter=code, broadcast_text=text)


def snapshot(*records: BroadcastRecord) -> DatafeedSnapshot:
    return DatafeedSnapshot(atis=list(records))
