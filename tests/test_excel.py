from datetime import date, datetime

from openpyxl import load_workbook

from bill_reporter.excel import write_report_workbook
from bill_reporter.models import Bill, CardSource, Recurrence, RecurrenceKind
from bill_reporter.periods import report_window
from bill_reporter.summary import build_owner_report


def make_bill(name, day_value, amount, **kwargs):
    base = dict(
        owner=None,
        name=name,
        amount_due=amount,
        recurrence=Recurrence(day_value=day_value, kind=RecurrenceKind.MONTHLY),
        is_significant=False,
        reason_for_deferment=None,
        comment=None,
        amount_due_can_vary=False,
        is_paid=False,
        card_source=CardSource.DEBIT,
    )
    base.update(kwargs)
    return Bill(**base)


def test_workbook_has_a_sheet_per_owner(tmp_path):
    window = report_window(date(2025, 1, 10), 13)
    today = date(2025, 1, 12)
    reports = [
        build_owner_report(
            None,
            [make_bill("Rent", 15, 1000.0), make_bill("Streaming", 18, 15.0, reason_for_deferment="Cancelling")],
            window,
            today,
        ),
        build_owner_report("alex", [make_bill("Phone", 11, 50.0, owner="alex")], window, today),
    ]

    path = write_report_workbook(reports, tmp_path / "bills.xlsx")
    wb = load_workbook(path)

    assert wb.sheetnames == ["Family", "alex"]
    family = wb["Family"]
    assert [c.value for c in family[1]] == ["Status", "Bill", "Due", "Amount", "Card", "Note"]
    assert family["A2"].value == "Unpaid"
    assert family["B2"].value == "Rent"
    assert family["C2"].value == datetime(2025, 1, 15)
    assert family["D2"].value == 1000.0
    assert family["A3"].value == "Deferred"
    assert family["F3"].value == "Cancelling"
    assert wb["alex"]["A2"].value == "Paid"


def test_workbook_without_reports_still_saves(tmp_path):
    path = write_report_workbook([], tmp_path / "empty.xlsx")
    assert load_workbook(path).sheetnames == ["Bills"]
