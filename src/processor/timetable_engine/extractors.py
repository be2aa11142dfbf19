"""Weekday and time range detection inside single lines of recognized text."""

import re
from dataclasses import dataclass
from typing import Optional

from .models import TimeSlot, Weekday

# Pattern pieces. A time token is an hour with optional ":MM"/".MM" minutes
# and an optional am/pm suffix; a range is two tokens around a hyphen or en dash.
HOUR = r'[0-9]{1,2}'
MINUTES = r'(?::[0-9]{2}|\.[0-9]{2})'
MERIDIEM = r'(?:am|pm)'
TIME_TOKEN = rf'{HOUR}{MINUTES}?\s*{MERIDIEM}?'
RANGE_SEPARATOR = r'\s*[-–]\s*'
TIME_RANGE = rf'({TIME_TOKEN}){RANGE_SEPARATOR}({TIME_TOKEN})'

# "mon(?:day)?|tue(?:sday)?|..."
WEEKDAY_NAME = '|'.join(
    f'{day.value[:3].lower()}(?:{day.value[3:].lower()})?' for day in Weekday
)

_time_range_re = re.compile(TIME_RANGE, re.IGNORECASE)
_clock_re = re.compile(rf'({HOUR})(?::([0-9]{{2}}))?')
_meridiem_re = re.compile(r'([ap]m)\b', re.IGNORECASE)
# Detection accepts glued OCR tokens ("Tue09:00"); the marker is only stripped
# when it ends on a word boundary.
_leading_day_re = re.compile(rf'^({WEEKDAY_NAME})', re.IGNORECASE)
_day_marker_re = re.compile(rf'^({WEEKDAY_NAME})\b[:.]?\s*', re.IGNORECASE)


def normalize_time(token: str) -> Optional[str]:
    """
    Normalize a single time token to 24-hour "HH:MM".

    Examples: "9" -> "09:00", "9.30" -> "09:30", "1:15pm" -> "13:15",
    "12am" -> "00:00", "12pm" -> "12:00". Returns None when the token is not a
    time or the hour ends up >= 24 (e.g. "25", "13pm").
    """
    if not token:
        return None

    text = re.sub(r'\s+', '', token).replace('.', ':')

    meridiem = _meridiem_re.search(text)
    if meridiem:
        text = _meridiem_re.sub('', text, count=1)

    match = _clock_re.fullmatch(text)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0

    if meridiem:
        suffix = meridiem.group(1).lower()
        if suffix == 'pm' and hour != 12:
            hour += 12
        elif suffix == 'am' and hour == 12:
            hour = 0

    if hour >= 24:
        return None

    return f"{hour:02d}:{minute:02d}"


class TimeRangeExtractor:
    """Finds a start/end time pair such as "09:00-10:00" or "9.30am - 11am"."""

    def extract(self, text: str) -> Optional[TimeSlot]:
        """
        Find the first time range in text.

        Returns:
            TimeSlot with normalized bounds (each may be None if it failed to
            normalize), or None if no range pattern is present
        """
        if not text:
            return None

        match = _time_range_re.search(text)
        if not match:
            return None

        return TimeSlot(
            start_time=normalize_time(match.group(1)),
            end_time=normalize_time(match.group(2)),
            raw_text=match.group(0),
        )

    def remove(self, text: str) -> str:
        """Remove the first time range from text and trim the rest."""
        return _time_range_re.sub('', text, count=1).strip()


@dataclass
class DayScan:
    """Outcome of scanning one line for a leading weekday."""
    day: Weekday
    text: str
    explicit: bool = False


class DayTokenExtractor:
    """Detects a leading weekday marker ("Mon", "tuesday:", "Wed.")."""

    def scan(self, text: str, current_day: Weekday) -> DayScan:
        """
        Scan a line for a leading weekday.

        Args:
            text: Line text
            current_day: Day carried over from previous lines

        Returns:
            DayScan with the effective day and the text with the marker (and
            one following ':' or '.' plus whitespace) stripped. A marker glued
            to the next word ("Tue09:00") sets the day but stays in the text.
            Without a marker the carried day and the original text are returned.
        """
        stripped = text.strip()
        match = _leading_day_re.match(stripped)
        if not match:
            return DayScan(day=current_day, text=text)

        day = Weekday.from_string(match.group(1))
        marker = _day_marker_re.match(stripped)
        if marker:
            stripped = stripped[marker.end():].strip()
        return DayScan(day=day, text=stripped, explicit=True)
