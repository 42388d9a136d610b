"""
Data models for the VATSIM datafeed and resolved ATIS information.
Provides structured data classes instead of raw feed dictionaries.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class BroadcastRecord:
    """One published ATIS / D-ATIS broadcast from the datafeed."""
    callsign: str  # e.g. "KXYZ_ATIS", "KXYZ_A_ATIS", "KXYZ_D_ATIS"
    structured_letter: Optional[str] = None  # feed's atis_code field
    broadcast_text: Optional[List[str]] = None  # feed's text_atis lines

    @property
    def joined_text(self) -> Optional[str]:
        """Broadcast text lines joined with single spaces, or None."""
        if self.broadcast_text is None:
            return None
        return " ".join(self.broadcast_text)

    @classmethod
    def from_feed(cls, entry: Dict[str, Any]) -> "BroadcastRecord":
        """
        Build a record from one entry of the feed's ``atis`` array.

        Raises:
            ValueError: if the entry is not shaped like an ATIS record
        """
        if not isinstance(entry, dict):
            raise ValueError(f"ATIS entry is not an object: {entry!r}")

        callsign = entry.get('callsign')
        if not isinstance(callsign, str):
            raise ValueError(f"ATIS entry has no callsign: {entry!r}")

        code = entry.get('atis_code')
        if not isinstance(code, str) or not code:
            code = None

        text_lines = entry.get('text_atis')
        if text_lines is not None:
            if not isinstance(text_lines, list):
                raise ValueError(f"text_atis for {callsign} is not a list")
            text_lines = [str(line) for line in text_lines if line is not None]

        return cls(callsign=callsign, structured_letter=code, broadcast_text=text_lines)


@dataclass(frozen=True)
class DatafeedSnapshot:
    """The parts of a VATSIM v3 datafeed response this application uses."""
    atis: List[BroadcastRecord] = field(default_factory=list)
    general: Dict[str, Any] = field(default_factory=dict)

    @property
    def update_timestamp(self) -> Optional[str]:
        """Feed-side generation time, if present."""
        return self.general.get('update_timestamp')

    @classmethod
    def from_feed(cls, data: Dict[str, Any]) -> "DatafeedSnapshot":
        """
        Parse a decoded v3 datafeed document.

        Raises:
            ValueError: if the document doesn't look like a v3 datafeed
        """
        if not isinstance(data, dict):
            raise ValueError("Datafeed payload is not a JSON object")

        atis_entries = data.get('atis', [])
        if not isinstance(atis_entries, list):
            raise ValueError("Datafeed 'atis' field is not a list")

        general = data.get('general') or {}
        if not isinstance(general, dict):
            general = {}

        return cls(
            atis=[BroadcastRecord.from_feed(entry) for entry in atis_entries],
            general=general,
        )


@dataclass(frozen=True)
class ResolvedAtis:
    """ATIS letter and broadcast texts for a single airport."""
    letter: str
    texts: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'letter': self.letter, 'texts': list(self.texts)}
