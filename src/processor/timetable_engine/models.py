"""Data models for timetable extraction."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum


class Weekday(Enum):
    """Enumeration for days of the week."""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_string(cls, day_str: str) -> Optional['Weekday']:
        """
        Parse weekday from a three-letter abbreviation or a full name.

        Args:
            day_str: String representation of weekday (e.g., "Mon", "monday")

        Returns:
            Weekday enum or None if not matched
        """
        if not day_str or not isinstance(day_str, str):
            return None

        day_str = day_str.strip().lower()
        if not day_str:
            return None

        for day in cls:
            if day_str in (day.value.lower(), day.value[:3].lower()):
                return day
        return None

    @property
    def abbreviation(self) -> str:
        """Title-cased three-letter form, e.g. "Mon"."""
        return self.value[:3]


@dataclass(frozen=True)
class Word:
    """A recognized token with its pixel bounding box."""
    text: str
    left: int
    top: int
    width: int = 0
    height: int = 0

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> 'Word':
        """
        Build a word from one of the box shapes recognition engines emit.

        Supported shapes:
            - {"bbox": {"x0", "y0", "x1", "y1"}}
            - {"bbox": [[x, y], [x, y], [x, y], [x, y]]}
            - {"x0", "y0", "x1", "y1"}
            - {"left", "top", "width", "height"}
            - {"x", "y", "w", "h"}

        Raises:
            TypeError, ValueError, IndexError: If coordinates are malformed
        """
        text = str(data.get('text') or data.get('word') or '')

        bbox = data.get('bbox')
        if isinstance(bbox, dict):
            x0 = bbox.get('x0', bbox.get('x', 0))
            y0 = bbox.get('y0', bbox.get('y', 0))
            x1 = bbox.get('x1', x0 + bbox.get('w', 0))
            y1 = bbox.get('y1', y0 + bbox.get('h', 0))
            left, top, width, height = x0, y0, x1 - x0, y1 - y0
        elif isinstance(bbox, (list, tuple)) and bbox:
            # Polygon of [x, y] points
            xs = [float(p[0]) for p in bbox]
            ys = [float(p[1]) for p in bbox]
            left, top, width, height = min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys)
        elif all(k in data for k in ('x0', 'y0', 'x1', 'y1')):
            left, top = data['x0'], data['y0']
            width, height = data['x1'] - data['x0'], data['y1'] - data['y0']
        elif all(k in data for k in ('left', 'top', 'width', 'height')):
            left, top, width, height = data['left'], data['top'], data['width'], data['height']
        else:
            left, top = data.get('x', 0), data.get('y', 0)
            width, height = data.get('w', 0), data.get('h', 0)

        return cls(
            text=text,
            left=round(float(left)),
            top=round(float(top)),
            width=max(0, round(float(width))),
            height=max(0, round(float(height))),
        )


@dataclass
class Line:
    """A row of words grouped by vertical position, ordered left to right."""
    top: int
    words: List[Word] = field(default_factory=list)

    @property
    def text(self) -> str:
        return ' '.join(word.text for word in self.words)

    @property
    def left(self) -> int:
        """Left position of the first word, 0 for an empty line."""
        return self.words[0].left if self.words else 0


@dataclass
class TimeSlot:
    """A start/end pair found in a line of text."""
    start_time: Optional[str] = None  # "HH:MM", 24-hour
    end_time: Optional[str] = None
    raw_text: str = ""  # Matched substring (e.g., "9:00am - 10:15am")

    @property
    def duration_minutes(self) -> Optional[int]:
        """Minutes between start and end; None if a bound is missing or end <= start."""
        if not self.start_time or not self.end_time:
            return None
        duration = _to_minutes(self.end_time) - _to_minutes(self.start_time)
        return duration if duration > 0 else None

    def __str__(self) -> str:
        return f"{self.start_time or '?'}-{self.end_time or '?'}"


def _to_minutes(value: str) -> int:
    hours, minutes = value.split(':')
    return int(hours) * 60 + int(minutes)


@dataclass
class Timeblock:
    """Represents a single extracted schedule entry."""
    day_of_week: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: Optional[int] = None
    original_text: str = ""
    normalized_title: Optional[str] = None
    notes: Optional[str] = None
    confidence: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'day_of_week': self.day_of_week,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'duration_minutes': self.duration_minutes,
            'original_text': self.original_text,
            'normalized_title': self.normalized_title,
            'notes': self.notes,
            'confidence': self.confidence,
        }

    def __str__(self) -> str:
        title = self.normalized_title or "Untitled"
        return f"{self.day_of_week} {self.start_time or '?'}-{self.end_time or '?'}: {title}"


@dataclass(frozen=True)
class ParseOptions:
    """Request options copied verbatim into the result."""
    week_start_date: Optional[str] = None
    timezone: str = "UTC"


@dataclass
class Timetable:
    """Represents the complete extracted timetable."""
    week_start_date: Optional[str] = None
    timezone: str = "UTC"
    inferred_days: List[str] = field(default_factory=list)
    timeblocks: List[Timeblock] = field(default_factory=list)

    # Refinement result that was not confident enough to replace this timetable
    suggestion: Optional[Dict[str, Any]] = None

    def add_day(self, day: str) -> None:
        """Record a day abbreviation, keeping first-seen order."""
        if day not in self.inferred_days:
            self.inferred_days.append(day)

    def add_timeblock(self, block: Timeblock) -> None:
        self.timeblocks.append(block)

    def get_timeblocks_by_day(self, day: str) -> List[Timeblock]:
        """Get all timeblocks for a day abbreviation (e.g. "Tue")."""
        return [block for block in self.timeblocks if block.day_of_week == day]

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'week_start_date': self.week_start_date,
            'timezone': self.timezone,
            'inferred_days': list(self.inferred_days),
            'timeblocks': [block.to_dict() for block in self.timeblocks],
        }
        if self.suggestion is not None:
            data['suggestion'] = self.suggestion
        return data

    def __len__(self) -> int:
        return len(self.timeblocks)
