"""Command line entry point for the upcoming bills report."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Iterable

from .errors import InvalidWindowError
from .excel import write_report_workbook
from .formatting import format_bill_report, format_malformed_records
from .loader import group_bills_by_owner, load_bill_records
from .periods import DEFAULT_WINDOW_DAYS, report_window
from .summary import build_bill_report

logger = logging.getLogger(__name__)


def _env_int(name: str) -> int | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _default_window_days() -> int:
    # Unset, unparsable and zero all fall back to the default length.
    return _env_int("SEARCH_DAY_LIMIT") or DEFAULT_WINDOW_DAYS


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "List the bills falling due in the window that opens on the given "
            "date, grouped by owner."
        )
    )
    parser.add_argument(
        "bills_path",
        nargs="?",
        default="bills.data.json",
        help="Path to the bills JSON file.",
    )
    parser.add_argument("--year", type=int, help="Window start year (defaults to $YEAR).")
    parser.add_argument("--month", type=int, help="Window start month, 1-12 (defaults to $MONTH).")
    parser.add_argument("--day", type=int, help="Window start day (defaults to $DAY).")
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help=(
            "Length of the window in days (defaults to $SEARCH_DAY_LIMIT or "
            f"{DEFAULT_WINDOW_DAYS})."
        ),
    )
    parser.add_argument("--owner", help="Only report on this owner (use 'Family' for shared bills).")
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        help="Override the date used to decide which bills have already gone out.",
    )
    parser.add_argument(
        "--take-home-pay",
        type=float,
        help="Show how much of this amount is left once the due bills are paid.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the report to the specified file instead of printing to stdout.",
    )
    parser.add_argument(
        "--excel-output",
        type=Path,
        help="Also write the report to an Excel workbook at this path.",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
        help="Logging level for diagnostics on stderr (default: WARNING).",
    )
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def resolve_start_date(args: argparse.Namespace) -> date:
    parts = {}
    for field in ("year", "month", "day"):
        value = getattr(args, field)
        if value is None:
            value = _env_int(field.upper())
        if value is None:
            raise SystemExit(f"missing --{field} or env var {field.upper()}")
        parts[field] = value
    try:
        return date(parts["year"], parts["month"], parts["day"])
    except ValueError as exc:
        raise SystemExit(f"Invalid window start date: {exc}")


def run(argv: Iterable[str] | None = None) -> str:
    args = parse_args(argv)
    setup_logging(args.log_level)

    start = resolve_start_date(args)
    days = args.days if args.days is not None else _default_window_days()
    try:
        window = report_window(start, days)
    except InvalidWindowError as exc:
        raise SystemExit(str(exc))
    today = args.today or date.today()

    bills_path = Path(args.bills_path)
    if not bills_path.exists():
        raise SystemExit(f"Bills file not found: {bills_path}")
    try:
        records = load_bill_records(bills_path)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not read bills from {bills_path}: {exc}")

    bills_by_owner, malformed = group_bills_by_owner(records)
    logger.info(
        "Loaded %d bills for %d owners, %d malformed",
        sum(len(bills) for bills in bills_by_owner.values()),
        len(bills_by_owner),
        len(malformed),
    )

    reports = build_bill_report(bills_by_owner, window, today, owner=args.owner)
    if args.owner is not None and not reports:
        logger.warning("No bills found for owner %r", args.owner)

    output_text = format_bill_report(reports, args.take_home_pay)
    malformed_text = format_malformed_records(malformed)
    if malformed_text:
        output_text += "\n\n\n" + malformed_text
    output_text += "\n"

    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)

    if args.excel_output:
        try:
            write_report_workbook(reports, args.excel_output)
        except OSError as exc:
            raise SystemExit(f"Failed to write Excel workbook: {exc}")
    return output_text


def main() -> None:
    run()


if __name__ == "__main__":
    main()
