"""
Format an epoch-milliseconds timestamp from the command line.

**Usage**:
    From project root:
    ```bash
    python main.py 1366101609000
    python main.py 1366101609000 --format DateTimeWithTimeZone
    python main.py 1366101609000 --format UnixTimestamp --log-level DEBUG
    ```

**Exit codes**:
  - 0: formatted value printed to stdout
  - 2: the value is not a finite number
"""

import argparse
import logging
import sys

from src.config.settings import get_settings
from src.dates.dispatch import DateFormat, InvalidInputError, get_date_from_milliseconds
from src.utils.log import setup_logger

logger = logging.getLogger(__name__)


def _parse_milliseconds(text: str) -> int | float:
    """Parse an integer or float literal; other text is returned unchanged."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format an epoch-milliseconds timestamp.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "milliseconds",
        help="Epoch time in milliseconds.",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in DateFormat],
        default=None,
        help="Output format. Default: YYYY-MM-DD.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides LOG_LEVEL from the environment).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, print the formatted value, and return the exit code."""
    args = build_parser().parse_args(argv)

    setup_logger(args.log_level or get_settings().log_level)

    value = _parse_milliseconds(args.milliseconds)
    try:
        formatted = get_date_from_milliseconds(value, args.format)
    except InvalidInputError as e:
        logger.error("Cannot format %r: %s", args.milliseconds, e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(formatted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
