from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Sequence

from .models import Occurrence
from .summary import OwnerReport

HEADERS = ["Status", "Bill", "Due", "Amount", "Card", "Note"]
_INVALID_TITLE_CHARS = re.compile(r"[\[\]\*\?/\\:]")


def _sheet_title(label: str, used: set[str]) -> str:
    # Excel caps sheet titles at 31 characters and bans a few symbols.
    base = _INVALID_TITLE_CHARS.sub(" ", label).strip()[:31] or "Owner"
    title = base
    counter = 2
    while title.lower() in used:
        suffix = f" {counter}"
        title = base[: 31 - len(suffix)] + suffix
        counter += 1
    used.add(title.lower())
    return title


def _occurrence_rows(status: str, occurrences: Sequence[Occurrence]) -> List[list]:
    rows = []
    for occurrence in occurrences:
        bill = occurrence.bill
        note = bill.reason_for_deferment if bill.is_deferred else bill.comment
        rows.append(
            [
                status,
                bill.name,
                occurrence.actual_due_date,
                bill.amount_due,
                bill.card_source.value,
                note or "",
            ]
        )
    return rows


def _fill_sheet(ws, report: OwnerReport) -> None:
    ws.append(HEADERS)
    for row in (
        _occurrence_rows("Unpaid", report.unpaid)
        + _occurrence_rows("Paid", report.paid)
        + _occurrence_rows("Deferred", report.deferred)
    ):
        ws.append(row)
    for row_idx in range(2, ws.max_row + 1):
        ws.cell(row=row_idx, column=3).number_format = "yyyy-mm-dd"
        ws.cell(row=row_idx, column=4).number_format = "#,##0.00"

    ws.append([])
    for card, total in report.card_totals.items():
        ws.append(["Card total", card.value, None, total])
    ws.append([])
    ws.append(["From", None, report.window.from_date])
    ws.append(["To", None, report.window.to_date])
    ws.append(["Total due", None, None, report.total_amount_due])
    ws.append(["Total paid", None, None, report.total_amount_paid])
    ws.append(["Due of total", None, None, report.amount_outstanding])
    ws.append(["Total deferred", None, None, report.total_amount_deferred])
    ws.append(["Absolute total", None, None, report.total_amount])


def write_report_workbook(reports: Iterable[OwnerReport], output_path: Path) -> Path:
    """Write one worksheet per owner report to ``output_path``."""

    from openpyxl import Workbook

    wb = Workbook()
    wb.remove(wb.active)
    used: set[str] = set()
    for report in reports:
        ws = wb.create_sheet(title=_sheet_title(report.owner_label, used))
        _fill_sheet(ws, report)
    if not wb.worksheets:
        wb.create_sheet(title="Bills").append(HEADERS)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    return output_path
