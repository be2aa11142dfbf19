"""Validation and utility functions for timetable processing."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import Timetable

logger = logging.getLogger(__name__)

# Refinement results averaging at least this confidence replace the heuristic result
REFINEMENT_ACCEPT_THRESHOLD = 0.85


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


def validate_file_path(file_path: str, supported_extensions: set) -> Path:
    """
    Validate file path and extension.

    Args:
        file_path: Path to validate
        supported_extensions: Set of supported file extensions

    Returns:
        Validated Path object

    Raises:
        ValidationError: If validation fails
    """
    path = Path(file_path)

    if not path.exists():
        raise ValidationError(f"File not found: {path}")

    if not path.is_file():
        raise ValidationError(f"Path is not a file: {path}")

    if path.suffix.lower() not in supported_extensions:
        raise ValidationError(
            f"Unsupported file format: {path.suffix}. "
            f"Supported formats: {', '.join(sorted(supported_extensions))}"
        )

    return path


def validate_timetable(timetable: Timetable) -> List[str]:
    """
    Validate an extracted timetable and return warnings.

    Args:
        timetable: Timetable to validate

    Returns:
        List of validation warning messages
    """
    warnings = []

    if not timetable.timeblocks:
        warnings.append("No timeblocks were extracted")
        return warnings

    if not timetable.inferred_days:
        warnings.append("No weekday markers found; all timeblocks use the default day")

    missing_bounds = sum(1 for b in timetable.timeblocks if not b.start_time or not b.end_time)
    if missing_bounds > 0:
        warnings.append(f"{missing_bounds} timeblocks have an unparsed start or end time")

    missing_duration = sum(1 for b in timetable.timeblocks if b.duration_minutes is None)
    if missing_duration > 0:
        warnings.append(f"{missing_duration} timeblocks have no duration")

    untitled = sum(1 for b in timetable.timeblocks if not b.normalized_title)
    if untitled > 0:
        warnings.append(f"{untitled} timeblocks have no title")

    return warnings


def format_confidence_report(timetable: Timetable) -> str:
    """
    Generate a confidence report for the extracted timetable.

    Args:
        timetable: Timetable to analyze

    Returns:
        Formatted report string
    """
    if not timetable.timeblocks:
        return "No timeblocks to analyze"

    scores = [b.confidence for b in timetable.timeblocks]

    avg_score = sum(scores) / len(scores)
    min_score = min(scores)
    max_score = max(scores)

    high_confidence = sum(1 for s in scores if s >= REFINEMENT_ACCEPT_THRESHOLD)
    medium_confidence = sum(1 for s in scores if 0.5 <= s < REFINEMENT_ACCEPT_THRESHOLD)
    low_confidence = sum(1 for s in scores if s < 0.5)

    report = f"""
Confidence Report:
  Average: {avg_score:.2%}
  Range: {min_score:.2%} - {max_score:.2%}

  Distribution:
    High (>={REFINEMENT_ACCEPT_THRESHOLD:.0%}): {high_confidence} timeblocks
    Medium (50-{REFINEMENT_ACCEPT_THRESHOLD:.0%}): {medium_confidence} timeblocks
    Low (<50%): {low_confidence} timeblocks
"""

    return report.strip()


def average_confidence(timeblocks: List[Dict[str, Any]]) -> float:
    """Average 'confidence' across timeblock mappings; missing or non-numeric values count as 0."""
    if not timeblocks:
        return 0.0
    return sum(_confidence_of(b) for b in timeblocks) / len(timeblocks)


def _confidence_of(block: Any) -> float:
    if not isinstance(block, dict):
        return 0.0
    try:
        return float(block.get('confidence') or 0)
    except (TypeError, ValueError):
        return 0.0


def merge_refinement(
    timetable: Timetable,
    refined: Optional[Dict[str, Any]],
    threshold: float = REFINEMENT_ACCEPT_THRESHOLD
) -> Dict[str, Any]:
    """
    Merge a refinement result into the heuristic timetable.

    A refined timetable whose average timeblock confidence reaches the threshold
    replaces the heuristic one. Otherwise it is attached as a suggestion. A
    missing refinement, or one without a timeblocks list, is ignored.

    Args:
        timetable: Heuristic result
        refined: Refined timetable mapping (same shape as Timetable.to_dict())
        threshold: Minimum average confidence to accept the refinement

    Returns:
        The timetable mapping to return to the caller
    """
    if not isinstance(refined, dict) or not isinstance(refined.get('timeblocks'), list):
        return timetable.to_dict()

    score = average_confidence(refined['timeblocks'])
    if score >= threshold:
        logger.info("Accepted refined timetable (average confidence %.2f)", score)
        return refined

    logger.info("Kept heuristic timetable; refinement attached as suggestion (average confidence %.2f)", score)
    timetable.suggestion = refined
    return timetable.to_dict()
