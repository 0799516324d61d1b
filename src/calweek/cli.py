"""Command-line entry point: ``calweek``."""
from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from typing import Optional, Sequence

from .calendar_date import CalendarDate
from .config import load_config
from .dim_week import build_iso_dim_week, write_dim_week
from .logging_utils import get_logger


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser."""

    parser = argparse.ArgumentParser(prog="calweek", description="Gregorian dates and ISO-8601 weeks")
    parser.add_argument("--config", default=None, help="Path to configuration YAML (default: $CALWEEK_CONFIG)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_week = sub.add_parser("week", help="Print the ISO week of a date")
    p_week.add_argument("--year", type=int, required=True)
    p_week.add_argument("--month", type=int, required=True, help="One-based month (1 = January)")
    p_week.add_argument("--day", type=int, required=True)

    p_today = sub.add_parser("today", help="Print today's date and ISO week")
    p_today.add_argument("--utc", action="store_true", help="Use the UTC date instead of the local date")

    p_dim = sub.add_parser("dim-week", help="Write the ISO week dimension table")
    p_dim.add_argument("--start-year", type=int, default=None, help="First ISO year (default from config)")
    p_dim.add_argument("--end-year", type=int, default=None, help="Last ISO year (default from config)")
    p_dim.add_argument("--out", default=None, help="Output .csv or .xlsx (default from config)")
    return parser


def _describe(date: CalendarDate) -> str:
    return f"{date} {date.calendar_week}"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""

    args = build_arg_parser().parse_args(argv)
    config = load_config(args.config)
    logger = get_logger("calweek", config)

    try:
        if args.command == "week":
            date = CalendarDate.from_year_month1_day(args.year, args.month, args.day)
            print(_describe(date))
        elif args.command == "today":
            if args.utc:
                date = CalendarDate.from_utc_date(datetime.now(timezone.utc))
            else:
                date = CalendarDate.from_local_date(datetime.now())
            print(_describe(date))
        elif args.command == "dim-week":
            start_year = args.start_year if args.start_year is not None else config.dim_week.start_year
            end_year = args.end_year if args.end_year is not None else config.dim_week.end_year
            out = args.out or config.dim_week.output_path
            df = build_iso_dim_week(start_year, end_year)
            path = write_dim_week(df, out)
            logger.info("dim_week: %d weeks (%s to %s) written to %s", len(df), df["week_id"].iloc[0], df["week_id"].iloc[-1], path)
            print(path)
    except ValueError as exc:
        # CalendarError and bad year ranges both land here
        logger.debug("Rejected %s request", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI guard
    sys.exit(main())
