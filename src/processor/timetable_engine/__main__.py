"""Command-line entry point for timetable engine."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from timetable_engine.main import load_recognition, parse_timetable, save_to_json
from timetable_engine.models import ParseOptions
from timetable_engine.parser import TimetableParser
from timetable_engine.utils import ValidationError, format_confidence_report, validate_timetable


def setup_logging(log_level: int = logging.WARNING) -> None:
    """Configure logging for the command line run - called once at startup."""
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='python -m timetable_engine',
        description='Extract a weekly timetable from recognized text or word boxes'
    )
    parser.add_argument('file', help='Recognition output: .txt (plain text) or .json (text and words)')
    parser.add_argument('--week-start', default=None, help='Week start date, copied into the result')
    parser.add_argument('--timezone', default='UTC', help='Timezone name, copied into the result')
    parser.add_argument('--output', default=None, help='Write the timetable JSON to this path')
    parser.add_argument('--nearest', action='store_true',
                        help='Assign words to the nearest line instead of the first within tolerance')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='WARNING', help='Logging level')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface and return the exit code."""
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        recognition = load_recognition(args.file)
    except ValidationError as e:
        print(f"✗ Validation Error: {e}", file=sys.stderr)
        return 1

    parser = TimetableParser(assignment='nearest' if args.nearest else 'first')
    options = ParseOptions(week_start_date=args.week_start, timezone=args.timezone)
    timetable = parse_timetable(recognition, options, parser)

    if args.output:
        save_to_json(timetable, args.output)
        print(f"✓ Saved to: {args.output}", file=sys.stderr)
    else:
        print(json.dumps(timetable.to_dict(), indent=2, ensure_ascii=False))

    for warning in validate_timetable(timetable):
        print(f"⚠ {warning}", file=sys.stderr)
    print(format_confidence_report(timetable), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
