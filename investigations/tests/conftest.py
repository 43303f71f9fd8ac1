"""
Pytest configuration and fixtures for poster event extraction tests.
"""

import pytest
from datetime import datetime

from poster_events.extractor import EventExtractor


@pytest.fixture
def reference_now() -> datetime:
    """Fixed reference instant so year-less dates and fallbacks are deterministic."""
    return datetime(2025, 1, 15, 9, 30)


@pytest.fixture
def extractor() -> EventExtractor:
    """Extractor with default settings."""
    return EventExtractor()


@pytest.fixture
def concert_poster_text() -> str:
    """OCR text of a single-event concert poster."""
    return (
        "SPRING JAZZ CONCERT\n"
        "March 5, 2025\n"
        "Doors 7:00 PM\n"
        "City Hall Auditorium\n"
    )


@pytest.fixture
def festival_poster_text() -> str:
    """OCR text of a poster announcing two dated sessions."""
    return (
        "Community Film Festival\n"
        "Opening night 04/10/2025 at 18:30\n"
        "Closing gala 04/12/2025 at 20:00\n"
    )


@pytest.fixture
def undated_poster_text() -> str:
    """OCR text without any date."""
    return "Yoga Night\nJoin us!"
