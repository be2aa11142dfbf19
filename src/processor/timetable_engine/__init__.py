"""Timetable Engine Package for turning recognized page content into weekly timetables."""

__version__ = "0.1.0"

from .main import parse_timetable, load_recognition, save_to_json
from .models import Line, ParseOptions, Timeblock, Timetable, TimeSlot, Weekday, Word
from .layout import ColumnDetector, group_words_into_lines, synthesize_words
from .extractors import DayTokenExtractor, TimeRangeExtractor, normalize_time
from .parser import TimetableParser, parse_timetable_from_text, parse_timetable_from_words
from .utils import ValidationError, merge_refinement, validate_timetable

__all__ = [
    'parse_timetable',
    'load_recognition',
    'save_to_json',
    'Line',
    'ParseOptions',
    'Timeblock',
    'Timetable',
    'TimeSlot',
    'Weekday',
    'Word',
    'ColumnDetector',
    'group_words_into_lines',
    'synthesize_words',
    'DayTokenExtractor',
    'TimeRangeExtractor',
    'normalize_time',
    'TimetableParser',
    'parse_timetable_from_text',
    'parse_timetable_from_words',
    'ValidationError',
    'merge_refinement',
    'validate_timetable',
]
