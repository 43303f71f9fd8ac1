"""
Association of times and titles with a detected date.
"""

import logging
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from .data_models import TimeOccurrence


logger = logging.getLogger(__name__)

PROXIMITY_WINDOW = 200
MIN_TITLE_LENGTH = 3


def find_time_near(times: List[TimeOccurrence], date_offset: int,
                   window: int = PROXIMITY_WINDOW) -> Optional[TimeOccurrence]:
    """
    Pick the time closest to a date offset.

    Args:
        times: Time occurrences in scan order
        date_offset: Character offset of the date match
        window: Distances must be strictly below this to qualify

    Returns:
        The closest qualifying time, the earliest in scan order on a tie,
        or None when nothing is close enough
    """
    closest = None
    closest_distance = window

    for occurrence in times:
        distance = abs(occurrence.offset - date_offset)
        if distance < closest_distance:
            closest = occurrence
            closest_distance = distance

    return closest


def combine_date_time(calendar_date: date,
                      occurrence: Optional[TimeOccurrence]) -> Tuple[datetime, bool]:
    """Merge a time into a calendar day; midnight when there is none."""
    if occurrence is None:
        return datetime.combine(calendar_date, time()), False
    return datetime.combine(calendar_date, time(occurrence.hour, occurrence.minute)), True


def split_lines(text: str) -> List[str]:
    """Non-empty, stripped lines of the text, split on newlines only."""
    return [line.strip() for line in text.split('\n') if line.strip()]


def find_title(lines: List[str], date_text: str,
               min_length: int = MIN_TITLE_LENGTH) -> Optional[str]:
    """First line longer than min_length that does not contain the date text."""
    needle = date_text.lower()
    for line in lines:
        if needle not in line.lower() and len(line) > min_length:
            return line
    return None
