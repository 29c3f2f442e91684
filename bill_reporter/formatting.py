"""Utility helpers for turning owner reports into text."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from .models import Occurrence
from .summary import OwnerReport


def _column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Sequence[int]:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    return widths


def _format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = _column_widths(headers, rows)

    def format_row(row: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row))

    lines = [format_row(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def _format_date(day: date) -> str:
    return f"{day:%a %b %d %Y}"


def _format_amount(occurrence: Occurrence) -> str:
    prefix = "~" if occurrence.bill.amount_due_can_vary else ""
    return f"{prefix}{occurrence.amount_due:,.2f}"


def _format_unpaid(occurrence: Occurrence) -> list[str]:
    return [
        occurrence.name,
        f"Amount: {_format_amount(occurrence)}",
        f"Due: {_format_date(occurrence.actual_due_date)}",
        f"Comment: {occurrence.bill.comment or ''}",
        f"Card: {occurrence.card_source.value}",
    ]


def _format_paid(occurrence: Occurrence) -> list[str]:
    lines = [
        f"PAID: {occurrence.name}",
        f"Amount: {_format_amount(occurrence)}",
        f"Due: {_format_date(occurrence.actual_due_date)}",
        f"Card: {occurrence.card_source.value}",
    ]
    if occurrence.bill.comment:
        lines.append(f"Comment: {occurrence.bill.comment}")
    return lines


def format_owner_report(report: OwnerReport, take_home_pay: Optional[float] = None) -> str:
    lines = [
        "-- BILLS --------------------------------------------",
        f"OWNER: {report.owner_label}",
        "",
        "Overview",
    ]
    for occurrence in report.unpaid:
        lines.append("")
        lines.extend(_format_unpaid(occurrence))
    for occurrence in report.paid:
        lines.append("")
        lines.extend(_format_paid(occurrence))
    for occurrence in report.deferred:
        lines.append("")
        lines.append(f"DEFERRED: {occurrence.name}")
        lines.append(f"Reason: {occurrence.bill.reason_for_deferment}")

    if report.unsupported:
        lines.append("")
        lines.append("Unsupported")
        for bill in report.unsupported:
            lines.append(f"  - {bill.name} ({bill.recurrence.kind.value})")

    card_totals = report.card_totals
    card_rows = [
        [
            card.value,
            f"{card_totals[card]:,.2f}",
            ", ".join(o.name for o in occurrences),
        ]
        for card, occurrences in report.by_card.items()
    ]
    lines.append("")
    lines.append("By Card")
    lines.append(_format_table(["Card", "Amount", "Bills"], card_rows))

    window = report.window
    lines.extend(
        [
            "",
            "Total amount due",
            f"from: {_format_date(window.from_date)}",
            f"to: {_format_date(window.to_date)}",
            f"Due of Total: {report.amount_outstanding:,.2f} of {report.total_amount_due:,.2f}",
            f"Paid: {report.total_amount_paid:,.2f}",
            f"Deferred: {report.total_amount_deferred:,.2f}",
            f"Absolute total: {report.total_amount:,.2f}",
        ]
    )
    if take_home_pay is not None:
        lines.append(f"Take Home: {take_home_pay - report.total_amount_due:,.2f}")
    return "\n".join(lines)


def format_bill_report(
    reports: Iterable[OwnerReport], take_home_pay: Optional[float] = None
) -> str:
    return "\n\n".join(format_owner_report(report, take_home_pay) for report in reports)


def format_malformed_records(records: Sequence[Any]) -> str:
    if not records:
        return ""
    dumps = [json.dumps(record, indent=2, default=str) for record in records]
    return "\n".join([f"Malformed bills found: {len(records)}", *dumps])
