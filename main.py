"""Entry point — parses the command line and opens the range calendar."""

import argparse
import logging
from datetime import date, timedelta

from calendar_window import RangeCalendarWindow
from settings import load_settings


def _month_arg(text: str) -> tuple[int, int]:
    try:
        year, month = (int(p) for p in text.split("-"))
        date(year, month, 1)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {text!r}")
    return year, month


def _date_arg(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pick a date range on a month calendar.")
    parser.add_argument("--month", type=_month_arg, help="month to open (YYYY-MM)")
    parser.add_argument("--compare", nargs=2, type=_date_arg, metavar=("START", "END"),
                        help="comparison range to highlight (ISO dates)")
    parser.add_argument("--dark", action="store_true", help="use the dark palette")
    parser.add_argument("--verbose", action="store_true", help="log debug output")
    return parser


def default_comparison(days: int, today: date) -> tuple[date, date] | None:
    """Comparison range of *days* days ending yesterday, or None if disabled."""
    if days <= 0:
        return None
    end = today - timedelta(days=1)
    return end - timedelta(days=days - 1), end


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    if args.dark:
        settings["dark_mode"] = True

    if args.compare:
        start, end = args.compare
        if end < start:
            parser.error("--compare END must not be before START")
        comparison = (start, end)
    else:
        comparison = default_comparison(settings["comparison_days"], date.today())

    year, month = args.month if args.month else (None, None)
    window = RangeCalendarWindow(year, month, comparison=comparison, settings=settings)
    window.run()


if __name__ == "__main__":
    main()
