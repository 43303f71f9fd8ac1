"""
Event extraction orchestrator that turns poster text into event candidates.
"""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .associators import (
    MIN_TITLE_LENGTH, PROXIMITY_WINDOW, combine_date_time, find_time_near,
    find_title, split_lines,
)
from .data_models import DateOccurrence, EventCandidate, NotificationPreset, TimeOccurrence
from .date_matcher import find_dates
from .time_matcher import find_times


logger = logging.getLogger(__name__)

DEFAULT_TITLE = "New Event"


class EventExtractor:
    """Builds calendar event candidates from OCR'd poster text."""

    def __init__(self, proximity_window: int = PROXIMITY_WINDOW,
                 min_title_length: int = MIN_TITLE_LENGTH,
                 default_title: str = DEFAULT_TITLE,
                 default_notification: NotificationPreset = NotificationPreset.ONE_HOUR):
        """
        Initialize event extractor.

        Args:
            proximity_window: Maximum character distance between a date and its time
            min_title_length: Title lines must be longer than this
            default_title: Title used when the text offers none
            default_notification: Reminder preset given to every candidate
        """
        if proximity_window <= 0:
            raise ValueError("Proximity window must be positive")
        if min_title_length < 0:
            raise ValueError("Minimum title length must not be negative")
        if not default_title.strip():
            raise ValueError("Default title must not be blank")

        self.proximity_window = proximity_window
        self.min_title_length = min_title_length
        self.default_title = default_title
        self.default_notification = NotificationPreset(default_notification)

    def extract(self, text: Any, now: Optional[datetime] = None) -> List[EventCandidate]:
        """
        Extract event candidates from poster text.

        Args:
            text: OCR output for one image; anything but a non-empty string
                yields the generic fallback
            now: Reference instant for year-less dates and fallback timestamps

        Returns:
            Non-empty list of event candidates
        """
        now = now or datetime.now()

        try:
            if not text or not isinstance(text, str):
                logger.warning("Invalid text input for parsing")
                return self._fallback(now)

            events = self._extract_from_text(text, now)

            if not events:
                logger.warning("All date matches were discarded, using fallback event")
                return self._fallback(now)

            return events

        except Exception as e:
            logger.error(f"Error parsing event details: {e}")
            return self._fallback(now)

    def _extract_from_text(self, text: str, now: datetime) -> List[EventCandidate]:
        lines = split_lines(text)
        logger.debug(f"Text lines: {lines}")

        occurrences = find_dates(text, now)
        logger.info(f"Found {len(occurrences)} date occurrences")

        if not occurrences:
            logger.info("No dates found, creating event from raw lines")
            return [EventCandidate(
                title=lines[0] if lines else self.default_title,
                date=now,
                description=' '.join(lines[1:]),
                notification=self.default_notification,
            )]

        times = find_times(text)
        logger.info(f"Found {len(times)} time occurrences")

        events = [self._build_event(occurrence, times, lines) for occurrence in occurrences]
        logger.info(f"Created {len(events)} event candidates")
        return events

    def _build_event(self, occurrence: DateOccurrence, times: List[TimeOccurrence],
                     lines: List[str]) -> EventCandidate:
        time_match = find_time_near(times, occurrence.offset, self.proximity_window)
        start, has_time = combine_date_time(occurrence.calendar_date, time_match)

        title = find_title(lines, occurrence.matched_text, self.min_title_length)
        if title is None:
            title = lines[0] if lines else self.default_title

        return EventCandidate(
            title=title,
            date=start,
            notification=self.default_notification,
            has_time=has_time,
            source_kind=occurrence.kind,
        )

    def _fallback(self, now: datetime) -> List[EventCandidate]:
        return [EventCandidate(
            title=self.default_title,
            date=now,
            notification=self.default_notification,
        )]

    def export_results(self, events: List[EventCandidate], output_path: str,
                       format: str = 'json') -> bool:
        """
        Export event candidates to file.

        Args:
            events: Event candidates to export
            output_path: Output file path
            format: Export format ('json' or 'csv')

        Returns:
            True if export successful
        """
        try:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)

            if format.lower() == 'json':
                with open(output_file, 'w', encoding='utf-8') as f:
                    json.dump([event.to_dict() for event in events], f,
                              ensure_ascii=False, indent=2, default=str)

            elif format.lower() == 'csv':
                rows = [self._flatten_event(event) for event in events]

                with open(output_file, 'w', newline='', encoding='utf-8') as f:
                    writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
                    writer.writeheader()
                    writer.writerows(rows)

            else:
                raise ValueError(f"Unsupported format: {format}")

            logger.info(f"Results exported to: {output_path}")
            return True

        except Exception as e:
            logger.error(f"Export failed: {e}")
            return False

    def _flatten_event(self, event: EventCandidate) -> Dict[str, Any]:
        """Flatten an event candidate for CSV export."""
        return {
            'title': event.title,
            'date': event.date.isoformat(),
            'location': event.location,
            'description': event.description,
            'notification': event.notification.value,
            'reminder_offset_minutes': event.notification.offset_minutes,
            'has_time': event.has_time,
            'source_kind': event.source_kind.value if event.source_kind else None,
        }


CSV_FIELDS = [
    'title', 'date', 'location', 'description', 'notification',
    'reminder_offset_minutes', 'has_time', 'source_kind',
]

_default_extractor = EventExtractor()


def extract_events(text: Any, now: Optional[datetime] = None) -> List[EventCandidate]:
    """Extract event candidates with the default settings."""
    return _default_extractor.extract(text, now)
