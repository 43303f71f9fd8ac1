"""
Time-of-day detection in OCR'd poster text.
"""

import re
import logging
from typing import List, Optional, Tuple

from .data_models import TimeFormat, TimeOccurrence


logger = logging.getLogger(__name__)


_MERIDIEM = r'(am|pm|a\.m\.|p\.m\.)'
_FLAGS = re.IGNORECASE | re.ASCII

# 7:00 PM, 7PM, 7:00pm, 7 p.m.
TWELVE_HOUR_PATTERN = re.compile(r'(\d{1,2}):?(\d{2})?\s*' + _MERIDIEM, _FLAGS)

# 19:00, but not the "7:00" of "7:00 PM"
TWENTY_FOUR_HOUR_PATTERN = re.compile(
    r'(\d{1,2}):(\d{2})(?!\d|\s*' + _MERIDIEM + r')', _FLAGS
)

TIME_PATTERNS: List[Tuple[TimeFormat, re.Pattern]] = [
    (TimeFormat.TWELVE_HOUR, TWELVE_HOUR_PATTERN),
    (TimeFormat.TWENTY_FOUR_HOUR, TWENTY_FOUR_HOUR_PATTERN),
]


def parse_time(hour: int, minute: int, meridiem: Optional[str] = None) -> Optional[Tuple[int, int]]:
    """
    Normalise a clock reading to 24-hour (hour, minute).

    Returns None when the result is not a valid time of day.
    """
    if meridiem:
        meridiem = meridiem.lower()
        if meridiem.startswith('p') and hour != 12:
            hour += 12
        elif meridiem.startswith('a') and hour == 12:
            hour = 0

    if 0 <= hour <= 23 and 0 <= minute <= 59:
        return hour, minute
    return None


def find_times(text: str) -> List[TimeOccurrence]:
    """
    Find every valid time occurrence in text.

    All 12-hour matches come first in text order, followed by all 24-hour
    matches in text order.
    """
    times = []

    for time_format, pattern in TIME_PATTERNS:
        for match in pattern.finditer(text):
            hour = int(match.group(1))
            minute = int(match.group(2)) if match.group(2) else 0
            meridiem = match.group(3) if time_format == TimeFormat.TWELVE_HOUR else None

            parsed = parse_time(hour, minute, meridiem)
            if parsed is None:
                logger.debug(f"Dropping out of range time '{match.group(0)}'")
                continue

            times.append(TimeOccurrence(
                hour=parsed[0],
                minute=parsed[1],
                offset=match.start(),
                format=time_format,
            ))

    return times
