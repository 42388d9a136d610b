"""
ATIS letter resolution over a VATSIM datafeed snapshot.

- Selects the ATIS broadcasts published for an airport
- Reconciles the structured ``atis_code`` field with the letter spoken in the
  broadcast text
- Combines separate arrival/departure streams into "A/D" form
"""

import re
from typing import List, Optional, Sequence

from backend.core.models import BroadcastRecord, DatafeedSnapshot, ResolvedAtis

NO_LETTER = "-"

# Callsign markers for split arrival/departure D-ATIS
ARRIVAL_MARKER = "_A_"
DEPARTURE_MARKER = "_D_"

# Letter patterns, tried in order. Case-sensitive: feeds publish upper-case text.
INFO_PATTERN = re.compile(r"INFO ([A-Z])")
INFORMATION_PATTERN = re.compile(r"INFORMATION ([A-Z])")
LETTER_PATTERNS = (INFO_PATTERN, INFORMATION_PATTERN)


def parse_letter_from_text(text_lines: Sequence[str]) -> Optional[str]:
    """
    Find the information letter spoken in ATIS text.

    Args:
        text_lines: Broadcast text lines; they are joined with spaces first

    Returns:
        Single upper-case letter, or None if no "INFO X" / "INFORMATION X" found
    """
    joined = " ".join(text_lines)
    for pattern in LETTER_PATTERNS:
        match = pattern.search(joined)
        if match:
            return match.group(1)
    return None


def resolve_letter(record: BroadcastRecord) -> str:
    """
    Determine the current letter of a single broadcast.

    The structured field is trusted unless the text has advanced exactly one
    letter past it, which happens when the feed lags behind a new broadcast.
    A Z -> A rollover is a negative step and keeps the structured letter.

    Args:
        record: Broadcast record from the datafeed

    Returns:
        The letter, or "-" when neither source has one
    """
    code = record.structured_letter[0] if record.structured_letter else None
    text_letter = None
    if record.broadcast_text is not None:
        text_letter = parse_letter_from_text(record.broadcast_text)

    if code is not None and text_letter is not None:
        # TODO: confirm with users whether Z -> A should count as an advance
        if ord(text_letter) - ord(code) == 1:
            return text_letter
        return code
    if code is not None:
        return code
    if text_letter is not None:
        return text_letter
    return NO_LETTER


def _resolve_marked_letter(records: Sequence[BroadcastRecord], marker: str) -> str:
    """Letter of the first record whose callsign contains ``marker``, else "-"."""
    for record in records:
        if marker in record.callsign:
            return resolve_letter(record)
    return NO_LETTER


def find_airport_atis(icao: str, snapshot: DatafeedSnapshot) -> List[BroadcastRecord]:
    """All broadcasts whose callsign starts with ``icao``, in feed order."""
    return [record for record in snapshot.atis if record.callsign.startswith(icao)]


def resolve(icao: str, snapshot: DatafeedSnapshot) -> ResolvedAtis:
    """
    Resolve the ATIS letter and texts for an airport.

    Args:
        icao: Airport ICAO identifier, matched as a case-sensitive callsign prefix
        snapshot: Datafeed snapshot to search

    Returns:
        ResolvedAtis with letter "-" (no ATIS), "B" (single ATIS) or
        "B/C" (arrival/departure split), and the joined broadcast texts
    """
    found = find_airport_atis(icao, snapshot)

    if not found:
        letter = NO_LETTER
    elif len(found) == 1:
        letter = resolve_letter(found[0])
    else:
        arrival = _resolve_marked_letter(found, ARRIVAL_MARKER)
        departure = _resolve_marked_letter(found, DEPARTURE_MARKER)
        letter = f"{arrival}/{departure}"

    texts = [record.joined_text for record in found if record.joined_text is not None]
    return ResolvedAtis(letter=letter, texts=texts)
