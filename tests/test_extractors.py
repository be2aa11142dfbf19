"""
Test module for extractors.py
Tests time normalization, time range detection and weekday marker detection.
"""

import pytest

from timetable_engine.extractors import DayTokenExtractor, TimeRangeExtractor, normalize_time
from timetable_engine.models import Weekday


class TestNormalizeTime:
    """Test cases for normalize_time function."""

    @pytest.mark.parametrize("token,expected", [
        ("9", "09:00"),
        ("09:00", "09:00"),
        ("9.30", "09:30"),
        ("12am", "00:00"),
        ("12pm", "12:00"),
        ("1:15pm", "13:15"),
        ("11.45PM", "23:45"),
        ("7 pm", "19:00"),
        ("12:30am", "00:30"),
        ("0", "00:00"),
        ("23:59", "23:59"),
    ])
    def test_valid_tokens(self, token, expected):
        """Test tokens that normalize to HH:MM."""
        assert normalize_time(token) == expected

    @pytest.mark.parametrize("token", ["13pm", "24", "25:00", "12:00pm0", "abc", "123", "9:5", ""])
    def test_rejected_tokens(self, token):
        """Test tokens that are not times or have an hour >= 24."""
        assert normalize_time(token) is None

    def test_none_token(self):
        """Test that None is rejected."""
        assert normalize_time(None) is None


class TestTimeRangeExtractor:
    """Test cases for TimeRangeExtractor class."""

    @pytest.fixture
    def extractor(self):
        """Create an extractor instance for testing."""
        return TimeRangeExtractor()

    def test_24_hour_range(self, extractor):
        """Test a plain 24-hour range."""
        slot = extractor.extract("09:00-10:00 Registration")

        assert slot.start_time == "09:00"
        assert slot.end_time == "10:00"
        assert slot.duration_minutes == 60

    def test_bare_hours(self, extractor):
        """Test hours without minutes."""
        slot = extractor.extract("9-10 Assembly")

        assert (slot.start_time, slot.end_time) == ("09:00", "10:00")

    def test_dot_separators_and_spacing(self, extractor):
        """Test '.' minute separators with spaces around the dash."""
        slot = extractor.extract("Break 10.45 - 11.00")

        assert (slot.start_time, slot.end_time) == ("10:45", "11:00")
        assert slot.duration_minutes == 15

    def test_meridiem_suffixes(self, extractor):
        """Test am/pm on both sides, with and without spaces."""
        slot = extractor.extract("9:00 am - 1:30PM Trip")

        assert (slot.start_time, slot.end_time) == ("09:00", "13:30")
        assert slot.duration_minutes == 270

    def test_en_dash(self, extractor):
        """Test an en dash between the times."""
        slot = extractor.extract("13:15–14:15 Art")

        assert (slot.start_time, slot.end_time) == ("13:15", "14:15")

    def test_no_range(self, extractor):
        """Test text without a range."""
        assert extractor.extract("Notes: bring ID") is None
        assert extractor.extract("Lunch at 12") is None
        assert extractor.extract("") is None

    def test_invalid_bound_kept_as_none(self, extractor):
        """Test that a bound failing normalization is None while the other survives."""
        slot = extractor.extract("23:00-25:00 Night shift")

        assert slot.start_time == "23:00"
        assert slot.end_time is None
        assert slot.duration_minutes is None

    def test_reversed_range_has_no_duration(self, extractor):
        """Test that end before start gives no duration."""
        slot = extractor.extract("11pm-12am Late")

        assert (slot.start_time, slot.end_time) == ("23:00", "00:00")
        assert slot.duration_minutes is None

    def test_raw_text_is_matched_substring(self, extractor):
        """Test that raw_text holds the matched range."""
        slot = extractor.extract("Maths 9-10")

        assert slot.raw_text == "9-10"

    def test_remove_first_range(self, extractor):
        """Test title extraction by removing the range."""
        assert extractor.remove("  09:00-10:00 Registration ") == "Registration"
        assert extractor.remove("Maths 9-10 then 11-12") == "Maths then 11-12"


class TestDayTokenExtractor:
    """Test cases for DayTokenExtractor class."""

    @pytest.fixture
    def extractor(self):
        """Create an extractor instance for testing."""
        return DayTokenExtractor()

    @pytest.mark.parametrize("text,day", [
        ("Mon 09:00-10:00 Registration", Weekday.MONDAY),
        ("monday 9-10", Weekday.MONDAY),
        ("TUE 9-10", Weekday.TUESDAY),
        ("Tuesday: 9-10", Weekday.TUESDAY),
        ("wed. 9-10", Weekday.WEDNESDAY),
        ("Thursday 9-10", Weekday.THURSDAY),
        ("Fri 9-10", Weekday.FRIDAY),
        ("saturday 9-10", Weekday.SATURDAY),
        ("Sun 9-10", Weekday.SUNDAY),
    ])
    def test_leading_weekday(self, extractor, text, day):
        """Test abbreviations and full names in any case."""
        scan = extractor.scan(text, Weekday.MONDAY)

        assert scan.day == day
        assert scan.explicit is True

    def test_marker_and_separator_stripped(self, extractor):
        """Test that the marker and its separator are removed."""
        assert extractor.scan("Tuesday: 10:00-11:00 Maths", Weekday.MONDAY).text == "10:00-11:00 Maths"
        assert extractor.scan("  Wed.  Art", Weekday.MONDAY).text == "Art"
        assert extractor.scan("Fri", Weekday.MONDAY).text == ""

    def test_no_marker_keeps_carried_day(self, extractor):
        """Test that lines without a marker inherit the carried day and keep their text."""
        scan = extractor.scan("10:00-11:00 Maths", Weekday.THURSDAY)

        assert scan.day == Weekday.THURSDAY
        assert scan.explicit is False
        assert scan.text == "10:00-11:00 Maths"

    @pytest.mark.parametrize("text,day", [
        ("Tue09:00-10:00 Maths", Weekday.TUESDAY),
        ("Tuesdays 09:00-10:00 Maths", Weekday.TUESDAY),
        ("monday9-10", Weekday.MONDAY),
    ])
    def test_glued_marker_sets_day_but_stays_in_text(self, extractor, text, day):
        """Test that a day name run into the next word still switches the day."""
        scan = extractor.scan(text, Weekday.FRIDAY)

        assert scan.day == day
        assert scan.explicit is True
        assert scan.text == text

    def test_marker_only_at_line_start(self, extractor):
        """Test that a day name later in the line is ignored."""
        scan = extractor.scan("Club meets Tue 9-10", Weekday.MONDAY)

        assert scan.explicit is False
        assert scan.day == Weekday.MONDAY
