"""Data models used by the bill reporter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from .errors import InvalidWindowError


class CardSource(str, Enum):
    DEBIT = "DEBIT"
    AMEX = "AMEX"
    APPLE_CARD = "APPLE_CARD"
    CAPITAL_ONE_CARD = "CAPITAL_ONE_CARD"


class RecurrenceKind(str, Enum):
    YEARLY = "YEARLY"
    MONTHLY = "MONTHLY"
    BI_WEEKLY = "BI_WEEKLY"
    WEEKLY = "WEEKLY"
    DAILY = "DAILY"


@dataclass(frozen=True)
class Recurrence:
    """How often a bill falls due.

    ``day_value`` is the day of the month for monthly bills and the day of the
    week (0 = Sunday .. 6 = Saturday) for weekly and bi-weekly bills.
    """

    day_value: int
    kind: RecurrenceKind


@dataclass(frozen=True)
class Bill:
    """Represents a single entry loaded from ``bills.data.json``."""

    owner: Optional[str]
    name: str
    amount_due: float
    recurrence: Recurrence
    is_significant: bool
    reason_for_deferment: Optional[str]
    comment: Optional[str]
    amount_due_can_vary: bool
    is_paid: bool
    card_source: CardSource

    @property
    def is_deferred(self) -> bool:
        """Return ``True`` when the bill is put off for this cycle."""

        return bool(self.reason_for_deferment)


@dataclass(frozen=True)
class Occurrence:
    """A bill pinned to one concrete due date."""

    bill: Bill
    actual_due_date: date

    @property
    def name(self) -> str:
        return self.bill.name

    @property
    def amount_due(self) -> float:
        return self.bill.amount_due

    @property
    def card_source(self) -> CardSource:
        return self.bill.card_source


@dataclass(frozen=True)
class Window:
    """Reporting period running from ``from_date`` up to ``to_date``."""

    from_date: date
    to_date: date

    def __post_init__(self) -> None:
        if self.from_date > self.to_date:
            raise InvalidWindowError(
                f"Window starts after it ends: {self.from_date:%Y-%m-%d} > {self.to_date:%Y-%m-%d}"
            )

    @classmethod
    def starting(cls, from_date: date, days: int) -> "Window":
        return cls(from_date, from_date + timedelta(days=days))

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days

    @property
    def spans_months(self) -> bool:
        return (self.from_date.year, self.from_date.month) != (
            self.to_date.year,
            self.to_date.month,
        )
