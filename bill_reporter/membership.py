"""Decide whether a bill's due date lands inside the reporting window."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from .models import Occurrence, Window
from .periods import last_day_of_month
from .recurrence import expand


def _same_month(left: date, right: date) -> bool:
    return (left.year, left.month) == (right.year, right.month)


def first_due_date_in_range(window: Window, due_dates: Sequence[date]) -> bool:
    """Judge membership on the earliest of ``due_dates`` only.

    The window may straddle a month boundary, so each branch checks whether
    the due date sits inside the visible slice of its own month.
    """

    if not due_dates:
        return False
    due = due_dates[0]
    start, end = window.from_date, window.to_date

    if not window.spans_months:
        return start.day <= due.day <= end.day
    if _same_month(due, start):
        return start.day <= due.day <= last_day_of_month(start)
    if _same_month(due, end):
        return due.day <= end.day
    return False


def in_range(window: Window, occurrence: Occurrence) -> bool:
    """Re-expand the occurrence's bill and judge its first due date.

    Every occurrence of a bill shares the verdict of that bill's earliest due
    date, so a later weekly occurrence is never judged on its own date.
    """

    return first_due_date_in_range(window, expand(occurrence.bill, window))
