"""Timestamp parsing for activity-set ordering.

Scarab writes activity-set dates with the Java pattern
``yyyy-MM-dd'T'HH:mm:ss z`` (for example ``2005-03-18T15:26:12 PST``).
That shape is matched strictly first. Anything else goes through
``dateutil``, which accepts the looser strings older exports contain.

Every result is a naive UTC ``datetime`` so that stamps from one export
always compare, whether or not they carried a zone.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from dateutil import parser as date_parser

from scarab2pivotal.exceptions import TimestampParseError

_HOUR = 3600

# Zone abbreviations seen in Scarab exports (US servers)
ZONE_OFFSETS: Dict[str, int] = {
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5 * _HOUR,
    "EDT": -4 * _HOUR,
    "CST": -6 * _HOUR,
    "CDT": -5 * _HOUR,
    "MST": -7 * _HOUR,
    "MDT": -6 * _HOUR,
    "PST": -8 * _HOUR,
    "PDT": -7 * _HOUR,
}

_SCARAB_TIMESTAMP = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[T ](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\s*(?P<zone>[A-Za-z]{1,5}|[+-]\d{2}:?\d{2}))?$"
)


def _zone_offset(zone: str) -> Optional[int]:
    """Resolve a zone abbreviation or numeric offset to seconds east of UTC."""
    if zone[0] in "+-":
        digits = zone[1:].replace(":", "")
        seconds = int(digits[:2]) * _HOUR + int(digits[2:]) * 60
        return -seconds if zone[0] == "-" else seconds
    return ZONE_OFFSETS.get(zone.upper())


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _parse_strict(text: str) -> Optional[datetime]:
    match = _SCARAB_TIMESTAMP.match(text)
    if not match:
        return None

    try:
        value = datetime.strptime(f"{match['date']} {match['time']}", "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return None

    zone = match["zone"]
    if zone is None:
        return value

    offset = _zone_offset(zone)
    if offset is None:
        # Unknown abbreviation, let dateutil have a go
        return None
    return _to_utc(value.replace(tzinfo=timezone(timedelta(seconds=offset))))


def parse_timestamp(text: Optional[str]) -> datetime:
    """Parse an activity-set timestamp into a comparable instant.

    Args:
        text: Raw timestamp text from the export

    Returns:
        Naive datetime in UTC

    Raises:
        TimestampParseError: If the text is empty or not a recognizable date
    """
    if text is None or not text.strip():
        raise TimestampParseError(text)

    stripped = text.strip()
    value = _parse_strict(stripped)
    if value is not None:
        return value

    try:
        return _to_utc(date_parser.parse(stripped, tzinfos=ZONE_OFFSETS))
    except (ValueError, OverflowError) as e:
        raise TimestampParseError(text) from e
