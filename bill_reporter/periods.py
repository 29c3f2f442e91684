"""Utilities for working with reporting periods."""

from __future__ import annotations

import calendar
from datetime import date

from .models import Window

DEFAULT_WINDOW_DAYS = 13


def report_window(start: date, days: int = DEFAULT_WINDOW_DAYS) -> Window:
    """Return the window that opens on ``start`` and closes ``days`` later."""

    return Window.starting(start, days)


def last_day_of_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, pulling ``day`` back to the month's last day if needed."""

    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


def js_weekday(day: date) -> int:
    """Weekday numbered from Sunday (0) to Saturday (6)."""

    return (day.weekday() + 1) % 7
