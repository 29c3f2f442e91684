"""Exceptions raised while building a bill report."""

from __future__ import annotations


class BillReportError(Exception):
    """Base exception for the bill reporter."""


class InvalidWindowError(BillReportError, ValueError):
    """The reporting window ends before it starts."""


class UnsupportedRecurrenceError(BillReportError, ValueError):
    """A bill's recurrence has no expansion rule."""

    def __init__(self, kind, message: str | None = None) -> None:
        self.kind = kind
        super().__init__(message or f"Unsupported recurrence: {kind}")
