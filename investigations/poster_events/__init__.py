"""
Poster Events - turns OCR text from photographed posters and flyers into
calendar event candidates.

This package provides tools for:
- Detecting dates written in several common shapes
- Detecting 12- and 24-hour times and pairing them with nearby dates
- Picking a plausible title line for each date
- Falling back to an editable placeholder when nothing usable is found
"""

__version__ = "0.1.0"
__author__ = "EventViewer Team"

from .extractor import EventExtractor, extract_events
from .data_models import EventCandidate, NotificationPreset

__all__ = ["EventExtractor", "extract_events", "EventCandidate", "NotificationPreset"]
