"""
Date detection in OCR'd poster text.

Posters write dates in many inconsistent shapes, so each shape is a separate
pattern descriptor run independently over the whole text. A substring that
fits several shapes produces one occurrence per shape.
"""

import re
import logging
from datetime import date, datetime
from typing import Callable, List, NamedTuple, Optional

from .data_models import DateOccurrence, PatternKind


logger = logging.getLogger(__name__)


MONTH_NAMES = {
    'january': 0, 'february': 1, 'march': 2, 'april': 3, 'may': 4, 'june': 5,
    'july': 6, 'august': 7, 'september': 8, 'october': 9, 'november': 10, 'december': 11,
    'jan': 0, 'feb': 1, 'mar': 2, 'apr': 3, 'jun': 5,
    'jul': 6, 'aug': 7, 'sep': 8, 'oct': 9, 'nov': 10, 'dec': 11,
}

_FULL_MONTH = r'(january|february|march|april|may|june|july|august|september|october|november|december)'
_ABBR_MONTH = r'(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?'

# ASCII digits and whitespace only.
_FLAGS = re.IGNORECASE | re.ASCII


def month_index(name: str) -> Optional[int]:
    """Look up a 0-based month index for a full or abbreviated month name."""
    return MONTH_NAMES.get(name.lower().replace('.', ''))


def _parse_numeric(match: re.Match, now: datetime) -> Optional[date]:
    month, day, year = (int(g) for g in match.groups())
    return date(year, month, day)


def _parse_month_first(match: re.Match, now: datetime) -> Optional[date]:
    month = month_index(match.group(1))
    if month is None:
        return None
    return date(int(match.group(3)), month + 1, int(match.group(2)))


def _parse_day_first(match: re.Match, now: datetime) -> Optional[date]:
    month = month_index(match.group(2))
    if month is None:
        return None
    return date(int(match.group(3)), month + 1, int(match.group(1)))


def _parse_month_only(match: re.Match, now: datetime) -> Optional[date]:
    month = month_index(match.group(1))
    if month is None:
        return None
    return date(now.year, month + 1, int(match.group(2)))


class DatePattern(NamedTuple):
    """A date shape: the regex that finds it and the function that reads it."""
    kind: PatternKind
    regex: re.Pattern
    parse: Callable[[re.Match, datetime], Optional[date]]


# Registry order is also the tie-break order for matches at the same offset.
DATE_PATTERNS: List[DatePattern] = [
    DatePattern(
        PatternKind.NUMERIC,
        re.compile(r'(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})', re.ASCII),
        _parse_numeric,
    ),
    DatePattern(
        PatternKind.MONTH_FIRST,
        re.compile(_FULL_MONTH + r'\s+(\d{1,2}),?\s+(\d{4})', _FLAGS),
        _parse_month_first,
    ),
    DatePattern(
        PatternKind.DAY_FIRST,
        re.compile(r'(\d{1,2})\s+' + _FULL_MONTH + r'\s+(\d{4})', _FLAGS),
        _parse_day_first,
    ),
    DatePattern(
        PatternKind.MONTH_ONLY,
        re.compile(_FULL_MONTH + r'\s+(\d{1,2})', _FLAGS),
        _parse_month_only,
    ),
    DatePattern(
        PatternKind.ABBR_MONTH_FIRST,
        re.compile(_ABBR_MONTH + r'\s+(\d{1,2}),?\s+(\d{4})', _FLAGS),
        _parse_month_first,
    ),
    DatePattern(
        PatternKind.ABBR_DAY_FIRST,
        re.compile(r'(\d{1,2})\s+' + _ABBR_MONTH + r'\s+(\d{4})', _FLAGS),
        _parse_day_first,
    ),
]


def find_dates(text: str, now: datetime,
               patterns: Optional[List[DatePattern]] = None) -> List[DateOccurrence]:
    """
    Find every date occurrence in text.

    Args:
        text: Raw OCR text
        now: Reference instant, supplies the year for dates written without one
        patterns: Pattern registry to use, defaults to DATE_PATTERNS

    Returns:
        Occurrences ordered by character offset, then by registry order
    """
    patterns = DATE_PATTERNS if patterns is None else patterns
    found = []

    for rank, pattern in enumerate(patterns):
        for match in pattern.regex.finditer(text):
            try:
                calendar_date = pattern.parse(match, now)
            except (ValueError, OverflowError) as e:
                logger.debug(f"Dropping {pattern.kind.value} match '{match.group(0)}': {e}")
                continue

            if calendar_date is None:
                logger.debug(f"Unknown month name in '{match.group(0)}'")
                continue

            occurrence = DateOccurrence(
                calendar_date=calendar_date,
                matched_text=match.group(0),
                offset=match.start(),
                kind=pattern.kind,
            )
            found.append((match.start(), rank, occurrence))

    found.sort(key=lambda item: (item[0], item[1]))
    return [occurrence for _, _, occurrence in found]
