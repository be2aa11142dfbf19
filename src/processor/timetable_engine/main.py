"""Core execution logic for timetable engine."""

import json
import logging
from typing import Any, Dict, List, Optional

from .models import ParseOptions, Timetable, Word
from .parser import TimetableParser
from .utils import ValidationError, validate_file_path

logger = logging.getLogger(__name__)

# Recognition output formats accepted by load_recognition()
SUPPORTED_EXTENSIONS = {'.txt', '.json'}


def parse_timetable(
    recognition: Dict[str, Any],
    options: Optional[ParseOptions] = None,
    parser: Optional[TimetableParser] = None
) -> Timetable:
    """
    Parse recognition output into a timetable.

    Positioned words are used when present; otherwise the flattened text goes
    through the plain-text path.

    Args:
        recognition: {"text": str, "words": [Word, ...]}; either may be missing
        options: Week start date and timezone, copied into the result
        parser: Parser to use (default settings if None)

    Returns:
        Timetable
    """
    parser = parser or TimetableParser()
    words = recognition.get('words') or []

    if words:
        logger.debug("Parsing %d positioned word(s)", len(words))
        return parser.parse_words(words, options)

    logger.debug("No positioned words; parsing plain text")
    return parser.parse_text(recognition.get('text') or '', options)


def load_recognition(file_path: str) -> Dict[str, Any]:
    """
    Load recognition output from disk.

    A .txt file is plain text. A .json file holds either {"text": ..., "words": [...]}
    or a bare list of word records; each record may use any box shape
    Word.from_mapping() understands. Words with blank text are dropped.

    Args:
        file_path: Path to a .txt or .json file

    Returns:
        {"text": str, "words": [Word, ...]}

    Raises:
        ValidationError: If the file is missing, unsupported or malformed
    """
    path = validate_file_path(file_path, SUPPORTED_EXTENSIONS)

    if path.suffix.lower() == '.txt':
        return {'text': path.read_text(encoding='utf-8'), 'words': []}

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, list):
        data = {'words': data}
    if not isinstance(data, dict):
        raise ValidationError(f"Expected an object or a list of words in {path}")

    raw_words = data.get('words') or []
    if not isinstance(raw_words, list):
        raise ValidationError(f"'words' must be a list in {path}")

    words = _words_from_records(raw_words, path)
    text = data.get('text')
    if not isinstance(text, str):
        text = ' '.join(word.text for word in words)

    return {'text': text, 'words': words}


def _words_from_records(records: List[Any], source) -> List[Word]:
    words = []
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValidationError(f"Word record {idx} in {source} is not an object")
        try:
            word = Word.from_mapping(record)
        except (TypeError, ValueError, IndexError) as e:
            raise ValidationError(f"Malformed word record {idx} in {source}: {e}") from e
        if word.text.strip():
            words.append(word)
    return words


def save_to_json(timetable: Timetable, output_path: str) -> None:
    """
    Save extracted timetable data to JSON file.

    Args:
        timetable: Timetable to save
        output_path: Path to output JSON file
    """
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(timetable.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info("Saved timetable to %s", output_path)
