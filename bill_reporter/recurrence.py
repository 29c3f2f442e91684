"""Expand a bill's recurrence into the concrete dates it falls due."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator, List

from .errors import UnsupportedRecurrenceError
from .models import Bill, RecurrenceKind, Window
from .periods import clamp_day, js_weekday


def _monthly_due_date(day_value: int, window: Window) -> date:
    if not 1 <= day_value <= 31:
        raise UnsupportedRecurrenceError(
            RecurrenceKind.MONTHLY, f"Monthly due day must be between 1 and 31, got {day_value}"
        )
    start = window.from_date
    # A due day already behind us this month comes round again next month.
    if window.spans_months and day_value < start.day:
        anchor = window.to_date
    else:
        anchor = start
    return clamp_day(anchor.year, anchor.month, day_value)


def _check_weekday(kind: RecurrenceKind, weekday: int) -> None:
    if not 0 <= weekday <= 6:
        raise UnsupportedRecurrenceError(
            kind, f"Due weekday must be between 0 (Sunday) and 6, got {weekday}"
        )


def _matching_days(weekday: int, window: Window) -> Iterator[date]:
    """Yield every day in ``[from_date, to_date)`` falling on ``weekday``."""

    for offset in range(window.days):
        day = window.from_date + timedelta(days=offset)
        if js_weekday(day) == weekday:
            yield day


def expand(bill: Bill, window: Window) -> List[date]:
    """Return the dates ``bill`` falls due on for ``window``, in order.

    Monthly bills always produce exactly one date. Weekly bills produce one
    date per matching weekday before ``to_date``; bi-weekly bills keep every
    second match, starting with the second one.
    """

    kind = bill.recurrence.kind
    day_value = bill.recurrence.day_value

    if kind is RecurrenceKind.MONTHLY:
        return [_monthly_due_date(day_value, window)]

    if kind is RecurrenceKind.WEEKLY:
        _check_weekday(kind, day_value)
        return list(_matching_days(day_value, window))

    if kind is RecurrenceKind.BI_WEEKLY:
        _check_weekday(kind, day_value)
        dates: List[date] = []
        skip = True
        for day in _matching_days(day_value, window):
            if not skip:
                dates.append(day)
            skip = not skip
        return dates

    raise UnsupportedRecurrenceError(kind)
