"""Parser to build a structured weekly timetable from recognized words or text."""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .extractors import DayTokenExtractor, TimeRangeExtractor
from .layout import ColumnDetector, LINE_TOLERANCE_PX, group_words_into_lines, synthesize_words
from .models import Line, ParseOptions, Timeblock, Timetable, TimeSlot, Weekday, Word

logger = logging.getLogger(__name__)

DEFAULT_DAY = Weekday.MONDAY

# Every heuristically produced timeblock carries this score
HEURISTIC_CONFIDENCE = 0.75


class TimetableParser:
    """Turns grouped lines into timeblocks, carrying the weekday across lines."""

    def __init__(
        self,
        y_tolerance: int = LINE_TOLERANCE_PX,
        assignment: str = 'first',
        default_day: Weekday = DEFAULT_DAY,
        confidence: float = HEURISTIC_CONFIDENCE,
        column_detector: Optional[ColumnDetector] = None
    ):
        """
        Initialize the parser.

        Args:
            y_tolerance: Vertical tolerance (px) for grouping words into lines
            assignment: Line assignment policy, 'first' or 'nearest'
            default_day: Day assumed before any weekday marker is seen
            confidence: Confidence assigned to every timeblock
            column_detector: Layout heuristic used by analyze_columns()
        """
        self.y_tolerance = y_tolerance
        self.assignment = assignment
        self.default_day = default_day
        self.confidence = confidence
        self.column_detector = column_detector or ColumnDetector()

        self.day_extractor = DayTokenExtractor()
        self.time_extractor = TimeRangeExtractor()

    def parse_words(self, words: Iterable[Word], options: Optional[ParseOptions] = None) -> Timetable:
        """
        Parse positioned words into a timetable.

        Args:
            words: Recognized words with pixel boxes, in any order
            options: Week start date and timezone, copied into the result

        Returns:
            Timetable with inferred days and timeblocks in reading order
        """
        lines = group_words_into_lines(words, self.y_tolerance, self.assignment)
        return self.parse_lines(lines, options)

    def parse_text(self, text: str, options: Optional[ParseOptions] = None) -> Timetable:
        """Parse plain text by laying it out on a synthetic grid first."""
        return self.parse_words(synthesize_words(text), options)

    def parse_lines(self, lines: Sequence[Line], options: Optional[ParseOptions] = None) -> Timetable:
        """
        Parse already grouped lines.

        Lines without a time range produce no timeblock. Days are recorded in
        inferred_days whenever a line starts with one, timeblock or not.
        """
        options = options or ParseOptions()
        timetable = Timetable(week_start_date=options.week_start_date, timezone=options.timezone)

        current_day = self.default_day
        skipped = 0

        for line in lines:
            text = line.text.strip()
            if not text:
                continue

            scan = self.day_extractor.scan(text, current_day)
            current_day = scan.day
            if scan.explicit:
                timetable.add_day(current_day.abbreviation)

            block = self._build_timeblock(scan.text, current_day)
            if block is None:
                skipped += 1
                continue
            timetable.add_timeblock(block)

        logger.debug(
            "Parsed %d line(s): %d timeblock(s), %d line(s) without a time range",
            len(lines), len(timetable.timeblocks), skipped
        )
        return timetable

    def analyze_columns(self, source: Union[Sequence[Word], Sequence[Line]]) -> List[int]:
        """
        Estimate column start positions for words or lines.

        Timeblock assembly does not use this; it is available to callers that
        want to reason about multi-column layouts.
        """
        lines = list(source)
        if lines and isinstance(lines[0], Word):
            lines = group_words_into_lines(lines, self.y_tolerance, self.assignment)
        return self.column_detector.detect(lines)

    def _build_timeblock(self, text: str, day: Weekday) -> Optional[Timeblock]:
        """Create a timeblock from line text, or None if it holds no time range."""
        slot, title = self._find_time_range(text)
        if slot is None:
            return None

        return Timeblock(
            day_of_week=day.abbreviation,
            start_time=slot.start_time,
            end_time=slot.end_time,
            duration_minutes=slot.duration_minutes,
            original_text=text,
            normalized_title=title or None,
            notes=None,
            confidence=self.confidence,
        )

    def _find_time_range(self, text: str) -> Tuple[Optional[TimeSlot], str]:
        """
        Locate the time range and the title around it.

        The whole line is tried first and the title is the line minus the range.
        Otherwise the first three tokens are tried together, with the remaining
        tokens as the title (ranges split as "9", "-", "10" followed by a title).
        """
        slot = self.time_extractor.extract(text)
        if slot is not None:
            return slot, self.time_extractor.remove(text)

        # Never fires with the default TimeRangeExtractor, whose pattern already
        # allows any whitespace around the dash; extractors with stricter
        # patterns can still match the leading tokens alone.
        tokens = text.split()
        if len(tokens) > 1:
            slot = self.time_extractor.extract(' '.join(tokens[:3]))
            if slot is not None:
                return slot, ' '.join(tokens[3:])

        return None, ''


def parse_timetable_from_words(
    words: Iterable[Word],
    options: Optional[ParseOptions] = None,
    parser: Optional[TimetableParser] = None
) -> Timetable:
    """Parse positioned words with a default (or given) parser."""
    return (parser or TimetableParser()).parse_words(words, options)


def parse_timetable_from_text(
    text: str,
    options: Optional[ParseOptions] = None,
    parser: Optional[TimetableParser] = None
) -> Timetable:
    """Parse plain text with a default (or given) parser."""
    return (parser or TimetableParser()).parse_text(text, options)
