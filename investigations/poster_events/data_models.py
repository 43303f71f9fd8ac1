"""
Data models for calendar event candidates extracted from poster text.
"""

from typing import Optional
from datetime import date, datetime, timedelta
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class PatternKind(str, Enum):
    """Date shapes recognised in poster text."""
    NUMERIC = "numeric"
    MONTH_FIRST = "monthFirst"
    DAY_FIRST = "dayFirst"
    MONTH_ONLY = "monthOnly"
    ABBR_MONTH_FIRST = "abbrMonthFirst"
    ABBR_DAY_FIRST = "abbrDayFirst"


class TimeFormat(str, Enum):
    """Clock format a time expression was written in."""
    TWELVE_HOUR = "12h"
    TWENTY_FOUR_HOUR = "24h"


class NotificationPreset(str, Enum):
    """Reminder presets offered to the user."""
    NONE = "none"
    TEN_MINUTES = "10min"
    ONE_HOUR = "1hr"
    ONE_DAY = "1day"

    @property
    def offset_minutes(self) -> Optional[int]:
        """Reminder offset relative to the event start (negative is before)."""
        return _REMINDER_OFFSETS[self]


_REMINDER_OFFSETS = {
    NotificationPreset.NONE: None,
    NotificationPreset.TEN_MINUTES: -10,
    NotificationPreset.ONE_HOUR: -60,
    NotificationPreset.ONE_DAY: -24 * 60,
}


class DateOccurrence(BaseModel):
    """A single date match in the source text."""
    calendar_date: date = Field(..., description="Matched calendar day")
    matched_text: str = Field(..., description="Exact substring that matched")
    offset: int = Field(..., ge=0, description="Character offset of the match")
    kind: PatternKind = Field(..., description="Pattern that produced the match")


class TimeOccurrence(BaseModel):
    """A single time-of-day match in the source text."""
    hour: int = Field(..., ge=0, le=23, description="Hour on a 24-hour clock")
    minute: int = Field(..., ge=0, le=59, description="Minute")
    offset: int = Field(..., ge=0, description="Character offset of the match")
    format: TimeFormat = Field(..., description="12h or 24h notation")


class EventCandidate(BaseModel):
    """Calendar event proposed to the user for review."""
    title: str = Field(..., description="Event title")
    date: datetime = Field(..., description="Event start")
    location: str = Field("", description="Venue, filled in by the user")
    description: str = Field("", description="Free text description")
    notification: NotificationPreset = Field(
        NotificationPreset.ONE_HOUR, description="Reminder preset"
    )
    has_time: bool = Field(False, description="Whether a time of day was found in the text")
    source_kind: Optional[PatternKind] = Field(
        None, description="Date pattern behind this candidate, None for fallbacks"
    )

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title must not be blank')
        return v

    def end_time(self, duration_minutes: int = 60) -> datetime:
        """Event end for a given duration, as used when writing to a calendar."""
        if duration_minutes < 0:
            raise ValueError('Duration must not be negative')
        return self.date + timedelta(minutes=duration_minutes)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump(mode='json')

    @classmethod
    def from_dict(cls, data: dict) -> 'EventCandidate':
        """Create EventCandidate from dictionary."""
        return cls.model_validate(data)
