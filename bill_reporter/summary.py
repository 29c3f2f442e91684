"""Bucket each owner's bills for the reporting window and total them up."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .errors import UnsupportedRecurrenceError
from .membership import first_due_date_in_range
from .models import Bill, CardSource, Occurrence, Window
from .recurrence import expand

logger = logging.getLogger(__name__)

FAMILY_LABEL = "Family"


def owner_label(owner: Optional[str]) -> str:
    return FAMILY_LABEL if owner is None else owner


@dataclass(frozen=True)
class OwnerReport:
    owner: Optional[str]
    window: Window
    unpaid: Sequence[Occurrence]
    paid: Sequence[Occurrence]
    deferred: Sequence[Occurrence]
    by_card: Mapping[CardSource, Sequence[Occurrence]]
    total_amount: float
    total_amount_due: float
    total_amount_paid: float
    total_amount_deferred: float
    unsupported: Sequence[Bill] = ()

    @property
    def owner_label(self) -> str:
        return owner_label(self.owner)

    @property
    def amount_outstanding(self) -> float:
        return round(self.total_amount_due - self.total_amount_paid, 2)

    @property
    def card_totals(self) -> Dict[CardSource, float]:
        return {
            card: round(sum(o.amount_due for o in occurrences), 2)
            for card, occurrences in self.by_card.items()
        }


def build_owner_report(
    owner: Optional[str],
    bills: Iterable[Bill],
    window: Window,
    today: date,
) -> OwnerReport:
    """Classify one owner's bills for ``window``.

    Each bill is expanded once; its earliest due date decides whether any of
    its occurrences count. Anything on or before ``today`` counts as paid.
    """

    candidates: List[Tuple[Occurrence, bool]] = []
    unsupported: List[Bill] = []
    for bill in bills:
        try:
            due_dates = expand(bill, window)
        except UnsupportedRecurrenceError as exc:
            logger.warning("Cannot place %r in the window: %s", bill.name, exc)
            unsupported.append(bill)
            continue
        in_range = first_due_date_in_range(window, due_dates)
        candidates.extend((Occurrence(bill, due), in_range) for due in due_dates)
    candidates.sort(key=lambda item: item[0].actual_due_date)

    unpaid: List[Occurrence] = []
    paid: List[Occurrence] = []
    deferred: List[Occurrence] = []
    by_card: Dict[CardSource, List[Occurrence]] = {card: [] for card in CardSource}
    total_amount = 0.0
    total_due = 0.0
    total_paid = 0.0
    total_deferred = 0.0

    for occurrence, in_range in candidates:
        bill = occurrence.bill
        if not in_range or bill.is_significant:
            continue

        total_amount += bill.amount_due
        if bill.is_deferred:
            deferred.append(occurrence)
            total_deferred += bill.amount_due
            continue

        by_card[bill.card_source].append(occurrence)
        total_due += bill.amount_due
        if bill.is_paid or occurrence.actual_due_date <= today:
            paid.append(occurrence)
            total_paid += bill.amount_due
        else:
            unpaid.append(occurrence)

    return OwnerReport(
        owner=owner,
        window=window,
        unpaid=tuple(unpaid),
        paid=tuple(paid),
        deferred=tuple(deferred),
        by_card={card: tuple(items) for card, items in by_card.items()},
        total_amount=round(total_amount, 2),
        total_amount_due=round(total_due, 2),
        total_amount_paid=round(total_paid, 2),
        total_amount_deferred=round(total_deferred, 2),
        unsupported=tuple(unsupported),
    )


def build_bill_report(
    bills_by_owner: Mapping[Optional[str], Sequence[Bill]],
    window: Window,
    today: date,
    owner: Optional[str] = None,
) -> List[OwnerReport]:
    """Build a report per owner, optionally only for ``owner``.

    ``owner`` matches either the owner id or its label, so ``"Family"``
    selects the shared bills.
    """

    reports: List[OwnerReport] = []
    for bill_owner, bills in bills_by_owner.items():
        if owner is not None and owner not in (bill_owner, owner_label(bill_owner)):
            continue
        reports.append(build_owner_report(bill_owner, bills, window, today))
    return reports
