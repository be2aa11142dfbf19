"""Spatial grouping of recognized words into reading-order lines."""

import logging
import re
from typing import Iterable, List, Sequence

import numpy as np

from .models import Line, Word

logger = logging.getLogger(__name__)

# Maximum vertical distance (px) between a word and a line representative
LINE_TOLERANCE_PX = 8

# Horizontal gap (px) between sorted line starts that marks a new column
COLUMN_GAP_PX = 80

# Synthetic geometry used when only plain text is available
TOKEN_SPACING_PX = 50
LINE_SPACING_PX = 12
CHAR_WIDTH_PX = 6
TOKEN_HEIGHT_PX = 10

ASSIGNMENT_POLICIES = ('first', 'nearest')


def group_words_into_lines(
    words: Iterable[Word],
    y_tolerance: int = LINE_TOLERANCE_PX,
    assignment: str = 'first'
) -> List[Line]:
    """
    Group words into lines based on vertical position.

    Words are processed in input order. Each line keeps the top of the word
    that created it as its representative. With the 'first' policy a word joins
    the earliest created line within tolerance, so arrival order can affect
    grouping. With 'nearest' it joins the line whose representative is closest
    (ties go to the earlier line).

    Args:
        words: Recognized words in any order
        y_tolerance: Maximum vertical distance to be in the same line
        assignment: 'first' or 'nearest'

    Returns:
        Lines sorted by top, each with words sorted by left
    """
    if assignment not in ASSIGNMENT_POLICIES:
        raise ValueError(
            f"Unknown line assignment policy: {assignment}. "
            f"Supported policies: {', '.join(ASSIGNMENT_POLICIES)}"
        )

    lines: List[Line] = []

    for word in words:
        target = None
        if assignment == 'first':
            for line in lines:
                if abs(line.top - word.top) <= y_tolerance:
                    target = line
                    break
        else:
            best_distance = None
            for line in lines:
                distance = abs(line.top - word.top)
                if distance <= y_tolerance and (best_distance is None or distance < best_distance):
                    target = line
                    best_distance = distance

        if target is None:
            lines.append(Line(top=word.top, words=[word]))
        else:
            target.words.append(word)

    # sorted() is stable: lines sharing a top keep creation order
    lines = sorted(lines, key=lambda l: l.top)
    for line in lines:
        line.words.sort(key=lambda w: w.left)

    logger.debug("Grouped words into %d line(s)", len(lines))
    return lines


def synthesize_words(text: str) -> List[Word]:
    """
    Lay out plain text on a synthetic grid so it can go through line grouping.

    Each non-empty line N gets top = N * 12 and its M-th token left = M * 50.
    Line spacing is larger than the line tolerance, so lines never merge, and
    token spacing keeps the original token order.
    """
    if not text:
        return []

    rows = [row.strip() for row in re.split(r'\r?\n', text)]
    rows = [row for row in rows if row]

    words = []
    for row_idx, row in enumerate(rows):
        for token_idx, token in enumerate(row.split()):
            words.append(Word(
                text=token,
                left=token_idx * TOKEN_SPACING_PX,
                top=row_idx * LINE_SPACING_PX,
                width=len(token) * CHAR_WIDTH_PX,
                height=TOKEN_HEIGHT_PX,
            ))
    return words


class ColumnDetector:
    """Estimates column start positions from where lines begin."""

    def __init__(self, min_gap: int = COLUMN_GAP_PX):
        """
        Initialize the detector.

        Args:
            min_gap: Gap (px) between sorted line starts above which a new column begins
        """
        self.min_gap = min_gap

    def detect(self, lines: Sequence[Line]) -> List[int]:
        """
        Detect candidate column starts.

        Lines starting at 0 (or empty) are ignored. With fewer than two usable
        lines, or no gap above threshold, the page is a single column at 0.

        Args:
            lines: Lines from group_words_into_lines()

        Returns:
            Column start positions, left to right
        """
        lefts = np.array([line.left for line in lines if line.left > 0])
        if lefts.size < 2:
            return [0]

        lefts = np.sort(lefts)
        gaps = np.diff(lefts)
        split_points = np.flatnonzero(gaps > self.min_gap) + 1
        if split_points.size == 0:
            return [0]

        columns = [int(lefts[0])] + [int(lefts[idx]) for idx in split_points]
        logger.debug("Detected %d column(s) at %s", len(columns), columns)
        return columns
