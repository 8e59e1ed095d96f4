import argparse
import sys

from dateutil.parser import isoparse

from config import get_settings
from models.settings import NLDSettings
from services.nld_parser import parse


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Resolve a natural language date.")
    parser.add_argument("text", help='e.g. "next friday", "in 3 days", "tomorrow at 5pm"')
    parser.add_argument("--format", dest="pattern", default=None, help="moment-style pattern")
    parser.add_argument("--week-start", default=None, help="sunday, monday, saturday or locale-default")
    parser.add_argument("--reference", default=None, help="ISO date-time treated as now")
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.week_start:
        settings = NLDSettings(**{**settings.model_dump(), "week_start": args.week_start})

    reference = isoparse(args.reference) if args.reference else None
    result = parse(args.text, args.pattern, reference, settings=settings)

    print(result.formatted_string)
    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())
