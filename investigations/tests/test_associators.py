"""
Tests for time and title association.
"""

import pytest
from datetime import date, datetime

from poster_events.associators import (
    combine_date_time, find_time_near, find_title, split_lines
)
from poster_events.data_models import TimeFormat, TimeOccurrence


def _time(hour, offset, time_format=TimeFormat.TWENTY_FOUR_HOUR):
    return TimeOccurrence(hour=hour, minute=0, offset=offset, format=time_format)


class TestFindTimeNear:
    """Test proximity matching between dates and times."""

    def test_closest_wins(self):
        """Test the nearest time is chosen."""
        times = [_time(10, 5), _time(18, 40), _time(20, 90)]
        assert find_time_near(times, 50).hour == 18

    def test_tie_goes_to_first_scanned(self):
        """Test first-found wins on an exact tie."""
        times = [_time(19, 60, TimeFormat.TWELVE_HOUR), _time(16, 40)]
        assert find_time_near(times, 50).hour == 19

    @pytest.mark.parametrize("distance,found", [(199, True), (200, False), (201, False)])
    def test_window_boundary(self, distance, found):
        """Test times must be strictly within the window."""
        result = find_time_near([_time(19, distance)], 0)
        assert (result is not None) == found

    def test_custom_window(self):
        """Test a narrower window."""
        assert find_time_near([_time(19, 30)], 0, window=20) is None

    def test_no_times(self):
        """Test nothing to associate."""
        assert find_time_near([], 10) is None


class TestCombineDateTime:
    """Test merging times into dates."""

    def test_with_time(self):
        """Test the time of day overwrites midnight."""
        start, has_time = combine_date_time(date(2025, 3, 5), TimeOccurrence(
            hour=19, minute=30, offset=0, format=TimeFormat.TWELVE_HOUR))

        assert start == datetime(2025, 3, 5, 19, 30)
        assert has_time is True

    def test_without_time(self):
        """Test dates without a time stay at midnight."""
        start, has_time = combine_date_time(date(2025, 3, 5), None)

        assert start == datetime(2025, 3, 5, 0, 0)
        assert has_time is False


class TestFindTitle:
    """Test title selection."""

    def test_split_lines(self):
        """Test blank lines are dropped and lines stripped."""
        assert split_lines("  Gala \n\n\t\nTonight\r\n") == ["Gala", "Tonight"]

    def test_split_on_newlines_only(self):
        """Test form feeds and other separators do not start a new line."""
        assert split_lines("Spring\x0cGala\nTonight") == ["Spring\x0cGala", "Tonight"]

    def test_skips_date_line(self):
        """Test a line equal to the date is never the title."""
        assert find_title(["March 5, 2025", "Spring Gala"], "March 5, 2025") == "Spring Gala"

    def test_case_insensitive_exclusion(self):
        """Test date exclusion ignores case."""
        assert find_title(["SAT MARCH 5, 2025", "Spring Gala"], "March 5, 2025") == "Spring Gala"

    def test_skips_short_lines(self):
        """Test lines of three characters or fewer are skipped."""
        assert find_title(["Hi", "LIVE", "Jazz"], "04/10/2025") == "LIVE"

    def test_no_title(self):
        """Test nothing qualifies."""
        assert find_title(["04/10/2025", "Hey"], "04/10/2025") is None
