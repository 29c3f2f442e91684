"""Helpers for loading bills from the JSON data file."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import Bill, CardSource, Recurrence, RecurrenceKind

logger = logging.getLogger(__name__)

_CARD_SOURCES = {card.value for card in CardSource}
_RECURRENCE_KINDS = {kind.value for kind in RecurrenceKind}


def load_bill_records(path: str | Path) -> List[Any]:
    """Load the raw bill records from ``bills.data.json``.

    The file holds either ``{"bills": [...]}`` or a bare list of records.
    """

    path = Path(path)
    with path.open(encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, Mapping):
        data = data.get("bills")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of bills in {path}")
    return data


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


_DAY_RANGES = {
    RecurrenceKind.MONTHLY.value: (1, 31),
    RecurrenceKind.WEEKLY.value: (0, 6),
    RecurrenceKind.BI_WEEKLY.value: (0, 6),
}


def _is_due_date(due_date: Any) -> bool:
    """Whole day number inside the range its recurrence kind allows."""

    if not isinstance(due_date, Mapping):
        return False
    day, kind = due_date.get("date"), due_date.get("type")
    if kind not in _RECURRENCE_KINDS:
        return False
    if not _is_number(day) or not float(day).is_integer():
        return False
    # Kinds without an expansion rule are reported later as unsupported.
    if kind not in _DAY_RANGES:
        return True
    low, high = _DAY_RANGES[kind]
    return low <= day <= high


def is_bill(record: Any) -> bool:
    """Return ``True`` when ``record`` has every field a bill needs."""

    if not isinstance(record, Mapping):
        return False
    due_date = record.get("dueDate")
    return (
        "owner" in record
        and (record["owner"] is None or isinstance(record["owner"], str))
        and bool(record.get("name"))
        and _is_number(record.get("amountDue"))
        and _is_number(record.get("dueDayOfMonth"))
        and _is_due_date(due_date)
        and isinstance(record.get("isSignificant"), bool)
        and "reasonForDeferment" in record
        and "comment" in record
        and isinstance(record.get("amountDueCanVary"), bool)
        and isinstance(record.get("isPaid"), bool)
        and record.get("cardSource") in _CARD_SOURCES
    )


def parse_bill(record: Mapping[str, Any]) -> Bill:
    """Turn a validated record into a :class:`Bill`."""

    due_date = record["dueDate"]
    return Bill(
        owner=record["owner"],
        name=str(record["name"]),
        amount_due=float(record["amountDue"]),
        recurrence=Recurrence(
            day_value=int(due_date["date"]),
            kind=RecurrenceKind(due_date["type"]),
        ),
        is_significant=record["isSignificant"],
        reason_for_deferment=record["reasonForDeferment"],
        comment=record["comment"],
        amount_due_can_vary=record["amountDueCanVary"],
        is_paid=record["isPaid"],
        card_source=CardSource(record["cardSource"]),
    )


def group_bills_by_owner(
    records: Iterable[Any],
) -> Tuple[Dict[Optional[str], List[Bill]], List[Any]]:
    """Split records into ``{owner: [bill, ...]}`` and the malformed leftovers."""

    bills_by_owner: Dict[Optional[str], List[Bill]] = {}
    malformed: List[Any] = []
    for record in records:
        if not is_bill(record):
            name = record.get("name") if isinstance(record, Mapping) else None
            logger.warning("Skipping malformed bill: %r", name)
            malformed.append(record)
            continue
        bill = parse_bill(record)
        bills_by_owner.setdefault(bill.owner, []).append(bill)
    return bills_by_owner, malformed
